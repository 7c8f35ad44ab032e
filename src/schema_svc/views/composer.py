"""View composer - turns catalog entries into consumable views.

Flow for a single entry:
1. Look the entry up in the catalog (missing -> NotFound)
2. Optionally resolve the closure of referenced objects
3. Strip internal links
4. Optionally narrow attributes to the active profiles
5. Freeze and return the view

Failures other than a missing root entry are logged here and returned as a
generic InternalError; the boundary layer never sees exception details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from ..catalog.profiles import AttributeProfileFilter, ProfileFilter
from ..catalog.registry import SchemaCatalog
from ..catalog.types import CategoryDefinition, Entity, EntityKind
from .closure import resolve_closure
from .links import strip_attribute_links, strip_links
from .types import InternalError, NotFound, View, ViewOptions, ViewResult


logger = logging.getLogger(__name__)

# Fields dropped from listing summaries
_SUMMARY_DROPPED = ("attributes", "objects")


@dataclass
class ViewComposer:
    """
    Composes views over a read-only schema catalog.

    Stateless apart from its collaborators; one instance serves all requests.
    """
    catalog: SchemaCatalog
    profile_filter: ProfileFilter = field(default_factory=AttributeProfileFilter)

    def compose_view(
        self,
        kind: EntityKind,
        extension_scope: str | None,
        identifier: str,
        options: ViewOptions = ViewOptions(),
    ) -> ViewResult:
        """
        Compose the view of a single class, object or category.

        Args:
            kind: Entry kind
            extension_scope: Extension qualifier of the identifier (None = base)
            identifier: Entry name
            options: Normalized request options

        Returns:
            View on success, NotFound if the entry does not exist, or
            InternalError if composition failed
        """
        try:
            entity = self.catalog.lookup(kind, extension_scope, identifier, options.extension_filter)
            if entity is None:
                return NotFound(identifier)
            return self._compose(entity, options)
        except Exception:
            logger.exception(f"Unable to compose {kind.value} view: {identifier}")
            return InternalError(identifier)

    def resolve_view(
        self,
        kind: EntityKind,
        extension_scope: str | None,
        identifier: str,
        options: ViewOptions = ViewOptions(),
    ) -> ViewResult:
        """Boundary entry point for single-entry views."""
        return self.compose_view(kind, extension_scope, identifier, options)

    def resolve_category_view(
        self,
        extension_scope: str | None,
        identifier: str,
        profiles: frozenset[str] | None = None,
        extensions: frozenset[str] = frozenset(),
    ) -> ViewResult:
        """Compose a category together with its visible classes."""
        options = ViewOptions(profiles=profiles, extension_filter=extensions)
        return self.compose_view(EntityKind.CATEGORY, extension_scope, identifier, options)

    def list_views(
        self,
        kind: EntityKind,
        extensions: frozenset[str] = frozenset(),
        profiles: frozenset[str] | None = None,
    ) -> list[View]:
        """Compose views of every visible entry of a kind, ordered by name."""
        if kind is EntityKind.CLASS:
            entities: list[Any] = self.catalog.list_classes(extensions)
        elif kind is EntityKind.OBJECT:
            entities = self.catalog.list_objects(extensions)
        else:
            entities = self.catalog.list_categories(extensions)

        options = ViewOptions(profiles=profiles)
        return [self._compose(entity, options) for entity in entities]

    def dictionary_view(self, extensions: frozenset[str] = frozenset()) -> dict[str, Any]:
        """The attribute dictionary with links removed from every entry."""
        attributes = strip_attribute_links(self.catalog.list_dictionary(extensions))
        return {
            "caption": "Attribute Dictionary",
            "attributes": {name: attr.to_dict() for name, attr in attributes.items()},
        }

    def _compose(self, entity: Entity, options: ViewOptions) -> View:
        if isinstance(entity, CategoryDefinition):
            return self._compose_category(entity, options.profiles)

        closure = {}
        if options.include_nested_objects:
            closure = resolve_closure(entity.attributes, self.catalog.lookup_object)

        entity = strip_links(entity)

        if options.profiles is not None:
            entity = replace(
                entity,
                attributes=self.profile_filter.apply(entity.attributes, options.profiles),
            )

        body = entity.to_dict()
        if closure:
            body["objects"] = {name: obj.to_dict() for name, obj in closure.items()}

        return View.build(entity.kind, entity.name, body)

    def _compose_category(self, category: CategoryDefinition, profiles: frozenset[str] | None) -> View:
        classes = {}
        for name, cls in category.classes.items():
            cls = strip_links(cls)
            if profiles is not None:
                cls = replace(cls, attributes=self.profile_filter.apply(cls.attributes, profiles))
            classes[name] = cls

        category = replace(strip_links(category), classes=classes)
        return View.build(EntityKind.CATEGORY, category.name, category.to_dict())


def summarize(view: View) -> dict[str, Any]:
    """
    Listing form of a view: no attributes or nested objects.

    Category summaries keep their classes, each summarized the same way.
    """
    return _summarize_dict(view.to_dict())


def _summarize_dict(data: dict[str, Any]) -> dict[str, Any]:
    result = {k: v for k, v in data.items() if k not in _SUMMARY_DROPPED}
    if isinstance(result.get("classes"), dict):
        result["classes"] = {
            name: _summarize_dict(cls) for name, cls in result["classes"].items()
        }
    return result
