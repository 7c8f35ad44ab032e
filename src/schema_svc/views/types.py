"""View types - options, composed views and composition outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from ..catalog.types import EntityKind


@dataclass(frozen=True, slots=True)
class ViewOptions:
    """Normalized request options for composing a view."""
    include_nested_objects: bool = False
    # None = do not filter; empty set = filter down to zero profiles
    profiles: frozenset[str] | None = None
    extension_filter: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class TranslateOptions:
    """Normalized options handed to the translation pipeline."""
    spaces: str | None = None
    verbose: int = 0


@dataclass(frozen=True, slots=True)
class View:
    """
    A composed, read-only view of a catalog entry.

    `body` is deeply frozen: mappings are read-only proxies and sequences are
    tuples. Use `to_dict()` for a JSON-ready copy.
    """
    kind: EntityKind
    name: str
    body: Mapping[str, Any]

    @classmethod
    def build(cls, kind: EntityKind, name: str, body: dict[str, Any]) -> View:
        return cls(kind=kind, name=name, body=freeze(body))

    @property
    def objects(self) -> Mapping[str, Any] | None:
        return self.body.get("objects")

    def to_dict(self) -> dict[str, Any]:
        return thaw(self.body)


@dataclass(frozen=True, slots=True)
class NotFound:
    """The requested root entry does not exist in the catalog."""
    identifier: str

    @property
    def message(self) -> str:
        return f"Not Found: {self.identifier}"


@dataclass(frozen=True, slots=True)
class InternalError:
    """Composition failed; details are only in the server log."""
    identifier: str
    message: str = "Internal error"


ViewResult = View | NotFound | InternalError


def freeze(value: Any) -> Any:
    """Recursively convert dicts to read-only mappings and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of `freeze`: plain dicts and lists."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value
