"""Request option normalization.

Raw query parameters arrive as optional strings. Malformed values never raise;
they degrade to the documented defaults.
"""

from __future__ import annotations

import re
from typing import Mapping

from .types import TranslateOptions, ViewOptions

# Request parameter names
EXTENSIONS = "extensions"
EXTENSION = "extension"
PROFILES = "profiles"
OBJECTS = "objects"
VERBOSE = "_mode"
SPACES = "_spaces"

_LEADING_INT = re.compile(r"([+-]?\d+)")


def normalize_extensions(raw: str | None) -> frozenset[str]:
    """Comma list -> set. Absent or empty means no extensions."""
    if not raw:
        return frozenset()
    return frozenset(raw.split(","))


def normalize_profiles(raw: str | None) -> frozenset[str] | None:
    """
    Comma list -> set, keeping absence distinct from emptiness.

    None means "do not filter"; an empty string means "filter to no profiles".
    """
    if raw is None:
        return None
    if raw == "":
        return frozenset()
    return frozenset(raw.split(","))


def normalize_verbosity(raw: str | None) -> int:
    """Parse the leading integer of `raw`; anything else, or a negative value, is 0."""
    if not raw or not isinstance(raw, str):
        return 0
    match = _LEADING_INT.match(raw)
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def normalize_objects_flag(raw: str | None) -> bool:
    """Nested object expansion is enabled only by the value "1"."""
    return raw == "1"


def view_options(params: Mapping[str, str]) -> ViewOptions:
    """Build view options from request parameters."""
    return ViewOptions(
        include_nested_objects=normalize_objects_flag(params.get(OBJECTS)),
        profiles=normalize_profiles(params.get(PROFILES)),
        extension_filter=normalize_extensions(params.get(EXTENSIONS)),
    )


def translate_options(params: Mapping[str, str]) -> TranslateOptions:
    """Build translation options from request parameters."""
    return TranslateOptions(
        spaces=params.get(SPACES),
        verbose=normalize_verbosity(params.get(VERBOSE)),
    )
