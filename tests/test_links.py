"""Tests for internal link stripping."""

from schema_svc.catalog.types import (
    AttributeDefinition,
    AttributeType,
    CategoryDefinition,
    ClassDefinition,
    DataType,
    Link,
    ObjectDefinition,
)
from schema_svc.views.links import strip_attribute_links, strip_links

LINK = Link(group="class", type="process_activity", caption="Process Activity")


def linked_attr(name: str) -> AttributeDefinition:
    return AttributeDefinition(
        name=name,
        type=AttributeType.primitive(DataType.STRING),
        links=(LINK,),
    )


class TestStripLinksDataclasses:
    def test_object_and_attributes(self):
        user = ObjectDefinition(
            name="user",
            attributes={"name": linked_attr("name"), "uid": linked_attr("uid")},
            links=(LINK,),
        )

        stripped = strip_links(user)

        assert stripped.links == ()
        assert all(a.links == () for a in stripped.attributes.values())
        # Input untouched
        assert user.links == (LINK,)
        assert user.attributes["name"].links == (LINK,)

    def test_class_keeps_other_fields(self):
        cls = ClassDefinition(
            name="process_activity",
            uid=1007,
            category="system",
            profiles=("host",),
            attributes={"time": linked_attr("time")},
            links=(LINK,),
        )

        stripped = strip_links(cls)

        assert stripped.uid == 1007
        assert stripped.category == "system"
        assert stripped.profiles == ("host",)
        assert stripped.links == ()

    def test_category(self):
        category = CategoryDefinition(name="system", uid=1, links=(LINK,))
        assert strip_links(category).links == ()

    def test_idempotent(self):
        user = ObjectDefinition(name="user", attributes={"name": linked_attr("name")}, links=(LINK,))
        once = strip_links(user)
        assert strip_links(once) == once

    def test_attribute_collection(self):
        attrs = {"name": linked_attr("name")}
        stripped = strip_attribute_links(attrs)
        assert stripped["name"].links == ()
        assert attrs["name"].links == (LINK,)


class TestStripLinksMappings:
    def test_top_level_and_attribute_entries(self):
        data = {
            "name": "user",
            "_links": [LINK.to_dict()],
            "attributes": {
                "name": {"type": "string_t", "_links": [LINK.to_dict()]},
            },
        }

        stripped = strip_links(data)

        assert "_links" not in stripped
        assert "_links" not in stripped["attributes"]["name"]
        assert "_links" in data
        assert "_links" in data["attributes"]["name"]

    def test_one_level_only(self):
        nested = {"_links": [LINK.to_dict()]}
        data = {"attributes": {"name": {"type": "object_t", "attributes": {"inner": nested}}}}

        stripped = strip_links(data)

        assert stripped["attributes"]["name"]["attributes"]["inner"] == nested

    def test_without_attributes(self):
        assert strip_links({"name": "system", "_links": []}) == {"name": "system"}

    def test_idempotent(self):
        data = {"_links": [], "attributes": {"a": {"_links": [], "type": "string_t"}}, "uid": 1}
        once = strip_links(data)
        assert strip_links(once) == once
