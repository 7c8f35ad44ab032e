"""Catalog loader - builds the schema snapshot from YAML/JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .registry import SchemaCatalog, scoped_name
from .types import (
    AttributeDefinition,
    AttributeType,
    CategoryDefinition,
    ClassDefinition,
    DataType,
    Extension,
    Link,
    ObjectDefinition,
    Profile,
)


logger = logging.getLogger(__name__)


class SchemaLoadError(ValueError):
    """Raised when a schema file cannot be turned into a catalog."""
    pass


class CatalogLoader:
    """
    Loads the schema catalog from a YAML or JSON file.

    File format:
    ```yaml
    version: 1.1.0
    extensions:
      dev: {uid: 999, caption: Development}
    profiles:
      host: {caption: Host, attributes: [device]}
    categories:
      system: {uid: 1, caption: System Activity}
    objects:
      user:
        caption: User
        attributes:
          name: {type: string_t, caption: Name}
          groups: {type: object_t, object_type: group, is_array: true}
        _links:
          - {group: class, type: process_activity, caption: Process Activity}
    classes:
      process_activity:
        uid: 1007
        category: system
        attributes:
          actor: {type: object_t, object_type: actor, requirement: required}
          device: {type: object_t, object_type: device, profile: host}
    ```

    Entries carrying an `extension` field are keyed as `extension/name`, and
    `object_type` references inside them are scoped the same way when the
    extension defines the referenced object.
    """

    def load_file(self, path: str | Path) -> SchemaCatalog:
        """Load the catalog from a YAML or JSON file."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if data is not None and not isinstance(data, dict):
            raise SchemaLoadError(f"Schema file must contain a mapping at the top level: {path}")

        return self.load_dict(data or {})

    def load_dict(self, data: dict[str, Any]) -> SchemaCatalog:
        """Load the catalog from a dictionary."""
        extensions = {
            name: self._parse_extension(name, _entry("extensions", name, ext_data))
            for name, ext_data in _section(data, "extensions").items()
        }

        # Object names are needed up front to scope object_type references
        raw_objects = _section(data, "objects")
        object_keys = {
            scoped_name(name, _entry("objects", name, obj_data).get("extension"))
            for name, obj_data in raw_objects.items()
        }

        objects: dict[str, ObjectDefinition] = {}
        for name, obj_data in raw_objects.items():
            obj = self._parse_object(name, _entry("objects", name, obj_data), object_keys)
            objects[obj.name] = obj

        categories: dict[str, CategoryDefinition] = {}
        for name, cat_data in _section(data, "categories").items():
            category = self._parse_category(name, _entry("categories", name, cat_data))
            categories[category.name] = category

        classes: dict[str, ClassDefinition] = {}
        for name, cls_data in _section(data, "classes").items():
            cls = self._parse_class(name, _entry("classes", name, cls_data), object_keys, categories)
            classes[cls.name] = cls

        profiles: dict[str, Profile] = {}
        for name, prof_data in _section(data, "profiles").items():
            profile = self._parse_profile(name, _entry("profiles", name, prof_data))
            profiles[profile.name] = profile

        dictionary = self._parse_attributes(
            "dictionary",
            _section(data, "dictionary").get("attributes") or {},
            None,
            object_keys,
        )

        catalog = SchemaCatalog(
            version=str(data.get("version", "0.0.0")),
            data_types=dict(_section(data, "types")),
            extensions=extensions,
            profiles=profiles,
            categories=categories,
            classes=classes,
            objects=objects,
            dictionary=dictionary,
        )

        counts = catalog.count()
        logger.info(
            f"Loaded schema {catalog.version}: {counts['classes']} classes, "
            f"{counts['objects']} objects, {counts['categories']} categories"
        )
        return catalog

    def _parse_extension(self, name: str, data: dict[str, Any]) -> Extension:
        return Extension(
            name=name,
            uid=data.get("uid"),
            caption=data.get("caption") or "",
            description=data.get("description") or "",
            version=data.get("version"),
        )

    def _parse_profile(self, name: str, data: dict[str, Any]) -> Profile:
        extension = data.get("extension")
        attributes = data.get("attributes") or ()
        # Profiles may list attribute names or carry full attribute maps
        if isinstance(attributes, dict):
            attributes = list(attributes.keys())
        return Profile(
            name=scoped_name(name, extension),
            caption=data.get("caption") or "",
            description=data.get("description") or "",
            extension=extension,
            attributes=tuple(attributes),
        )

    def _parse_category(self, name: str, data: dict[str, Any]) -> CategoryDefinition:
        extension = data.get("extension")
        return CategoryDefinition(
            name=scoped_name(name, extension),
            uid=data.get("uid"),
            caption=data.get("caption") or "",
            description=data.get("description") or "",
            extension=extension,
            links=_parse_links(data),
        )

    def _parse_object(self, name: str, data: dict[str, Any], object_keys: set[str]) -> ObjectDefinition:
        extension = data.get("extension")
        key = scoped_name(name, extension)
        return ObjectDefinition(
            name=key,
            caption=data.get("caption") or "",
            description=data.get("description") or "",
            extends=data.get("extends"),
            extension=extension,
            attributes=self._parse_attributes(key, data.get("attributes") or {}, extension, object_keys),
            links=_parse_links(data),
        )

    def _parse_class(
        self,
        name: str,
        data: dict[str, Any],
        object_keys: set[str],
        categories: dict[str, CategoryDefinition],
    ) -> ClassDefinition:
        extension = data.get("extension")
        key = scoped_name(name, extension)

        # A class may sit in a category of its own extension or of the base schema
        category = data.get("category")
        if category and extension and scoped_name(category, extension) in categories:
            category = scoped_name(category, extension)

        uid = data.get("uid")
        if uid is not None and not isinstance(uid, int):
            raise SchemaLoadError(f"Class '{key}' has a non-integer uid: {uid!r}")

        return ClassDefinition(
            name=key,
            caption=data.get("caption") or "",
            description=data.get("description") or "",
            extends=data.get("extends"),
            extension=extension,
            attributes=self._parse_attributes(key, data.get("attributes") or {}, extension, object_keys),
            links=_parse_links(data),
            category=category,
            uid=uid,
            profiles=tuple(data.get("profiles") or ()),
        )

    def _parse_attributes(
        self,
        owner: str,
        data: dict[str, Any],
        extension: str | None,
        object_keys: set[str],
    ) -> dict[str, AttributeDefinition]:
        if not isinstance(data, dict):
            raise SchemaLoadError(f"Attributes of '{owner}' must be a mapping")

        attributes = {}
        for name, attr_data in data.items():
            attr_data = _entry(owner, name, attr_data)
            attributes[name] = AttributeDefinition(
                name=name,
                type=self._parse_type(owner, name, attr_data, extension, object_keys),
                caption=attr_data.get("caption") or "",
                description=attr_data.get("description") or "",
                requirement=attr_data.get("requirement"),
                group=attr_data.get("group"),
                is_array=bool(attr_data.get("is_array", False)),
                enum=dict(attr_data.get("enum") or {}),
                profile=attr_data.get("profile"),
                extension=attr_data.get("extension"),
                links=_parse_links(attr_data),
            )
        return attributes

    def _parse_type(
        self,
        owner: str,
        name: str,
        data: dict[str, Any],
        extension: str | None,
        object_keys: set[str],
    ) -> AttributeType:
        type_str = data.get("type") or DataType.STRING.value

        if type_str == DataType.OBJECT.value:
            object_type = data.get("object_type")
            if not object_type:
                raise SchemaLoadError(f"Attribute '{owner}.{name}' is object_t but has no object_type")
            # Prefer the definition contributed by the same extension
            attr_extension = data.get("extension") or extension
            if attr_extension and scoped_name(object_type, attr_extension) in object_keys:
                object_type = scoped_name(object_type, attr_extension)
            return AttributeType.object_reference(object_type)

        try:
            return AttributeType.primitive(DataType(type_str))
        except ValueError:
            logger.warning(f"Unknown attribute type '{type_str}' for {owner}.{name}, using string_t")
            return AttributeType.primitive(DataType.STRING)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise SchemaLoadError(f"Schema section '{key}' must be a mapping")
    return value


def _entry(owner: str, name: str, value: Any) -> dict[str, Any]:
    """A single named entry of `owner`; an empty entry is an empty mapping."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SchemaLoadError(
            f"Entry '{name}' of '{owner}' must be a mapping, not {type(value).__name__}"
        )
    return value


def _parse_links(data: dict[str, Any]) -> tuple[Link, ...]:
    links = data.get("_links") or ()
    if not isinstance(links, list) or not all(isinstance(link, dict) for link in links):
        raise SchemaLoadError("'_links' must be a list of mappings")
    return tuple(Link.from_dict(link) for link in links)


def load_catalog(source: str | Path | dict) -> SchemaCatalog:
    """
    Convenience function to load the schema catalog.

    Args:
        source: File path or dictionary

    Returns:
        SchemaCatalog snapshot
    """
    loader = CatalogLoader()

    if isinstance(source, dict):
        return loader.load_dict(source)
    return loader.load_file(source)
