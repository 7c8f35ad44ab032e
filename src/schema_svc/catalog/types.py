"""Catalog types - attributes, objects, classes, categories, profiles, extensions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DataType(str, Enum):
    """Attribute data types known to the schema."""
    STRING = "string_t"
    INTEGER = "integer_t"
    LONG = "long_t"
    FLOAT = "float_t"
    BOOLEAN = "boolean_t"
    TIMESTAMP = "timestamp_t"
    DATETIME = "datetime_t"
    IP = "ip_t"
    MAC = "mac_t"
    PORT = "port_t"
    URL = "url_t"
    UUID = "uuid_t"
    JSON = "json_t"
    BYTESTRING = "bytestring_t"
    EMAIL = "email_t"
    FILE_HASH = "file_hash_t"
    FILE_NAME = "file_name_t"
    HOSTNAME = "hostname_t"
    PATH = "path_t"
    PROCESS_NAME = "process_name_t"
    RESOURCE_UID = "resource_uid_t"
    SUBNET = "subnet_t"
    USERNAME = "username_t"
    # The only variant that refers to another catalog entry
    OBJECT = "object_t"


class EntityKind(str, Enum):
    """Kinds of catalog entries that can be rendered as views."""
    CLASS = "class"
    OBJECT = "object"
    CATEGORY = "category"


@dataclass(frozen=True, slots=True)
class AttributeType:
    """
    Type of an attribute.

    Primitive kinds carry no payload. The OBJECT kind carries the name of the
    referenced object definition.
    """
    kind: DataType
    referenced_type: str | None = None

    def __post_init__(self) -> None:
        if self.kind is DataType.OBJECT and not self.referenced_type:
            raise ValueError("object_t attributes require a referenced type")
        if self.kind is not DataType.OBJECT and self.referenced_type is not None:
            raise ValueError(f"{self.kind.value} attributes cannot reference an object")

    @classmethod
    def primitive(cls, kind: DataType) -> AttributeType:
        return cls(kind=kind)

    @classmethod
    def object_reference(cls, type_name: str) -> AttributeType:
        return cls(kind=DataType.OBJECT, referenced_type=type_name)

    @property
    def is_object_reference(self) -> bool:
        return self.kind is DataType.OBJECT


@dataclass(frozen=True, slots=True)
class Link:
    """Documentation cross-reference to another catalog entry (not for API consumers)."""
    group: str       # "class", "object", "common", ...
    type: str        # name of the referring entry
    caption: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"group": self.group, "type": self.type, "caption": self.caption}

    @classmethod
    def from_dict(cls, data: dict) -> Link:
        return cls(
            group=data.get("group", ""),
            type=data.get("type", ""),
            caption=data.get("caption") or "",
        )


@dataclass(frozen=True, slots=True)
class AttributeDefinition:
    """A single attribute of an object or class."""
    name: str
    type: AttributeType
    caption: str = ""
    description: str = ""
    requirement: str | None = None    # required | recommended | optional
    group: str | None = None          # primary | context | occurrence | ...
    is_array: bool = False
    enum: dict[str, Any] = field(default_factory=dict)

    # Profile that contributes this attribute (None = always present)
    profile: str | None = None
    # Extension that contributes this attribute (None = base schema)
    extension: str | None = None

    links: tuple[Link, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        result: dict[str, Any] = {
            "caption": self.caption,
            "type": self.type.kind.value,
        }
        if self.type.is_object_reference:
            result["object_type"] = self.type.referenced_type
        if self.description:
            result["description"] = self.description
        if self.requirement:
            result["requirement"] = self.requirement
        if self.group:
            result["group"] = self.group
        if self.is_array:
            result["is_array"] = True
        if self.enum:
            result["enum"] = dict(self.enum)
        if self.profile:
            result["profile"] = self.profile
        if self.extension:
            result["extension"] = self.extension
        if self.links:
            result["_links"] = [link.to_dict() for link in self.links]
        return result


@dataclass(frozen=True, slots=True)
class ObjectDefinition:
    """
    An object definition: a named, reusable group of attributes.

    `name` is the catalog key. Objects contributed by an extension are keyed
    as `extension/name`.
    """
    name: str
    caption: str = ""
    description: str = ""
    extends: str | None = None
    extension: str | None = None
    attributes: dict[str, AttributeDefinition] = field(default_factory=dict)
    links: tuple[Link, ...] = ()

    @property
    def kind(self) -> EntityKind:
        return EntityKind.OBJECT

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "caption": self.caption,
            "description": self.description,
        }
        if self.extends:
            result["extends"] = self.extends
        if self.extension:
            result["extension"] = self.extension
        result["attributes"] = {n: a.to_dict() for n, a in self.attributes.items()}
        if self.links:
            result["_links"] = [link.to_dict() for link in self.links]
        return result


@dataclass(frozen=True, slots=True)
class ClassDefinition:
    """An event class: an object-like definition placed in a category."""
    name: str
    caption: str = ""
    description: str = ""
    extends: str | None = None
    extension: str | None = None
    attributes: dict[str, AttributeDefinition] = field(default_factory=dict)
    links: tuple[Link, ...] = ()

    category: str | None = None
    uid: int | None = None
    profiles: tuple[str, ...] = ()

    @property
    def kind(self) -> EntityKind:
        return EntityKind.CLASS

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "caption": self.caption,
            "description": self.description,
        }
        if self.uid is not None:
            result["uid"] = self.uid
        if self.category:
            result["category"] = self.category
        if self.extends:
            result["extends"] = self.extends
        if self.extension:
            result["extension"] = self.extension
        if self.profiles:
            result["profiles"] = list(self.profiles)
        result["attributes"] = {n: a.to_dict() for n, a in self.attributes.items()}
        if self.links:
            result["_links"] = [link.to_dict() for link in self.links]
        return result


@dataclass(frozen=True, slots=True)
class CategoryDefinition:
    """A category grouping event classes. `name` is the extension-scoped key."""
    name: str
    uid: int | None = None
    caption: str = ""
    description: str = ""
    extension: str | None = None
    classes: dict[str, ClassDefinition] = field(default_factory=dict)
    links: tuple[Link, ...] = ()

    @property
    def kind(self) -> EntityKind:
        return EntityKind.CATEGORY

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "caption": self.caption,
            "description": self.description,
        }
        if self.uid is not None:
            result["uid"] = self.uid
        if self.extension:
            result["extension"] = self.extension
        result["classes"] = {n: c.to_dict() for n, c in self.classes.items()}
        if self.links:
            result["_links"] = [link.to_dict() for link in self.links]
        return result


@dataclass(frozen=True, slots=True)
class Profile:
    """A named attribute overlay."""
    name: str
    caption: str = ""
    description: str = ""
    extension: str | None = None
    attributes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "caption": self.caption,
            "description": self.description,
            "attributes": list(self.attributes),
        }
        if self.extension:
            result["extension"] = self.extension
        return result


@dataclass(frozen=True, slots=True)
class Extension:
    """A named namespace contributing classes and objects to the base schema."""
    name: str
    uid: int | None = None
    caption: str = ""
    description: str = ""
    version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "uid": self.uid,
            "caption": self.caption,
            "description": self.description,
            "version": self.version,
        }


# Entities that own an attribute collection
Entity = ObjectDefinition | ClassDefinition | CategoryDefinition
