"""Schema catalog - read-only registry of categories, classes and objects."""

from .types import (
    AttributeDefinition,
    AttributeType,
    CategoryDefinition,
    ClassDefinition,
    DataType,
    EntityKind,
    Extension,
    Link,
    ObjectDefinition,
    Profile,
)
from .registry import SchemaCatalog
from .loader import CatalogLoader, SchemaLoadError, load_catalog
from .profiles import AttributeProfileFilter, ProfileFilter

__all__ = [
    "AttributeDefinition",
    "AttributeType",
    "CategoryDefinition",
    "ClassDefinition",
    "DataType",
    "EntityKind",
    "Extension",
    "Link",
    "ObjectDefinition",
    "Profile",
    "SchemaCatalog",
    "CatalogLoader",
    "SchemaLoadError",
    "load_catalog",
    "AttributeProfileFilter",
    "ProfileFilter",
]
