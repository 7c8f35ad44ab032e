"""Object closure resolution.

Collects every object definition reachable from a set of attributes through
object-reference attributes. Traversal uses an explicit work queue and an
expanded-name set, so depth is bounded by memory rather than the call stack
and cyclic references terminate.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterable, Mapping

from ..catalog.types import AttributeDefinition, ObjectDefinition
from .links import strip_links

logger = logging.getLogger(__name__)

ObjectLookup = Callable[[str], "ObjectDefinition | None"]
ClosureMap = dict[str, ObjectDefinition]


def referenced_types(attributes: Mapping[str, AttributeDefinition]) -> Iterable[str]:
    """Yield the referenced type name of each object-reference attribute."""
    for attr in attributes.values():
        if attr.type.is_object_reference:
            yield attr.type.referenced_type


def resolve_closure(
    root_attributes: Mapping[str, AttributeDefinition],
    lookup: ObjectLookup,
) -> ClosureMap:
    """
    Resolve all objects transitively referenced by `root_attributes`.

    Args:
        root_attributes: Attribute mapping of the entry being rendered
        lookup: Returns the object definition for a type name, or None

    Returns:
        New mapping of type name -> link-stripped object definition. Types the
        lookup cannot find are left out. Each type appears at most once.
    """
    closure: ClosureMap = {}
    expanded: set[str] = set()
    queue: deque[str] = deque(referenced_types(root_attributes))

    while queue:
        type_name = queue.popleft()
        if type_name in expanded:
            continue
        expanded.add(type_name)

        obj = lookup(type_name)
        if obj is None:
            logger.debug(f"Referenced object type not in catalog: {type_name}")
            continue

        closure[type_name] = strip_links(obj)
        queue.extend(referenced_types(obj.attributes))

    return closure
