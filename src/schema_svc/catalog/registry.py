"""Schema catalog - read-only snapshot of categories, classes and objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from .types import (
    AttributeDefinition,
    CategoryDefinition,
    ClassDefinition,
    Entity,
    EntityKind,
    Extension,
    ObjectDefinition,
    Profile,
)

logger = logging.getLogger(__name__)


def scoped_name(name: str, extension: str | None) -> str:
    """Return the catalog key for a name, scoped by extension when given."""
    if extension:
        return f"{extension}/{name}"
    return name


def is_visible(extension: str | None, extensions: Iterable[str]) -> bool:
    """Base entries are always visible; extension entries only when requested."""
    return extension is None or extension in extensions


@dataclass(frozen=True)
class SchemaCatalog:
    """
    Immutable snapshot of the event schema.

    Built once at start-up by the loader and shared by reference between
    requests. Nothing writes to it after construction, so no locking is done.

    Keys of `classes`, `objects` and `categories` are extension-scoped
    (`extension/name`) for entries contributed by an extension.
    """
    version: str = "0.0.0"
    data_types: dict[str, dict] = field(default_factory=dict)
    extensions: dict[str, Extension] = field(default_factory=dict)
    profiles: dict[str, Profile] = field(default_factory=dict)
    categories: dict[str, CategoryDefinition] = field(default_factory=dict)
    classes: dict[str, ClassDefinition] = field(default_factory=dict)
    objects: dict[str, ObjectDefinition] = field(default_factory=dict)
    dictionary: dict[str, AttributeDefinition] = field(default_factory=dict)

    # =========================================================================
    # Single entry lookup
    # =========================================================================

    def lookup(
        self,
        kind: EntityKind,
        extension_scope: str | None,
        identifier: str,
        extensions: frozenset[str] = frozenset(),
    ) -> Entity | None:
        """
        Look up a class, object or category.

        Args:
            kind: Which namespace to search
            extension_scope: Extension qualifier for the identifier (None = base)
            identifier: Entry name
            extensions: When non-empty, attributes contributed by extensions
                outside this set (and outside `extension_scope`) are dropped

        Returns:
            The entry, or None if it does not exist
        """
        key = scoped_name(identifier, extension_scope)

        if kind is EntityKind.CATEGORY:
            category = self.categories.get(key)
            if category is None:
                return None
            return self._with_classes(category, extensions | _scope_set(extension_scope))

        if kind is EntityKind.CLASS:
            entity: Entity | None = self.classes.get(key)
        else:
            entity = self.objects.get(key)

        if entity is None or not extensions:
            return entity

        visible = extensions | _scope_set(extension_scope)
        attributes = {
            name: attr for name, attr in entity.attributes.items()
            if is_visible(attr.extension, visible)
        }
        return replace(entity, attributes=attributes)

    def lookup_object(self, type_name: str) -> ObjectDefinition | None:
        """Look up an object by its (possibly extension-scoped) type name."""
        return self.objects.get(type_name)

    def base_event(self) -> ClassDefinition | None:
        return self.classes.get("base_event")

    # =========================================================================
    # Listings
    # =========================================================================

    def list_classes(self, extensions: frozenset[str] = frozenset()) -> list[ClassDefinition]:
        """Get visible classes ordered by key."""
        return [
            self.classes[key] for key in sorted(self.classes)
            if is_visible(self.classes[key].extension, extensions)
        ]

    def list_objects(self, extensions: frozenset[str] = frozenset()) -> list[ObjectDefinition]:
        """Get visible objects ordered by key."""
        return [
            self.objects[key] for key in sorted(self.objects)
            if is_visible(self.objects[key].extension, extensions)
        ]

    def list_categories(self, extensions: frozenset[str] = frozenset()) -> list[CategoryDefinition]:
        """Get visible categories ordered by key, each holding only visible classes."""
        return [
            self._with_classes(self.categories[key], extensions)
            for key in sorted(self.categories)
            if is_visible(self.categories[key].extension, extensions)
        ]

    def list_dictionary(self, extensions: frozenset[str] = frozenset()) -> dict[str, AttributeDefinition]:
        """Get visible dictionary attributes ordered by name."""
        return {
            name: self.dictionary[name] for name in sorted(self.dictionary)
            if is_visible(self.dictionary[name].extension, extensions)
        }

    def count(self) -> dict[str, int]:
        """Get entry counts by namespace."""
        return {
            "categories": len(self.categories),
            "classes": len(self.classes),
            "objects": len(self.objects),
            "profiles": len(self.profiles),
            "extensions": len(self.extensions),
        }

    def _with_classes(self, category: CategoryDefinition, extensions: frozenset[str]) -> CategoryDefinition:
        """Attach the visible classes that belong to a category."""
        classes = {
            name: cls for name, cls in sorted(self.classes.items())
            if cls.category == category.name and is_visible(cls.extension, extensions)
        }
        return replace(category, classes=classes)


def _scope_set(extension_scope: str | None) -> frozenset[str]:
    return frozenset([extension_scope]) if extension_scope else frozenset()
