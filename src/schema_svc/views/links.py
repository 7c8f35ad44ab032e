"""Removal of internal documentation links from catalog entries."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, TypeVar

from ..catalog.types import AttributeDefinition, CategoryDefinition

# Reserved key holding links in the serialized form
LINKS_KEY = "_links"
ATTRIBUTES_KEY = "attributes"

T = TypeVar("T")


def strip_links(entity: T) -> T:
    """
    Return a copy of `entity` without internal links.

    Links are removed from the entity itself and from each entry of its
    `attributes` collection. Deeper levels are left as they are. Accepts
    catalog dataclasses or their serialized mapping form.
    """
    if isinstance(entity, Mapping):
        return _strip_mapping(entity)  # type: ignore[return-value]
    if isinstance(entity, (AttributeDefinition, CategoryDefinition)):
        return replace(entity, links=())
    return replace(
        entity,
        links=(),
        attributes={name: replace(attr, links=()) for name, attr in entity.attributes.items()},
    )


def strip_attribute_links(attributes: Mapping[str, T]) -> dict[str, T]:
    """Strip links from each entry of an attribute collection."""
    return {name: strip_links(attr) for name, attr in attributes.items()}


def _strip_mapping(data: Mapping[str, Any]) -> dict[str, Any]:
    result = {k: v for k, v in data.items() if k != LINKS_KEY}
    attributes = result.get(ATTRIBUTES_KEY)
    if isinstance(attributes, Mapping):
        result[ATTRIBUTES_KEY] = {
            name: _without_links(value) for name, value in attributes.items()
        }
    return result


def _without_links(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: v for k, v in value.items() if k != LINKS_KEY}
    return value
