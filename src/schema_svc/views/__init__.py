"""
View composition.

Turns catalog entries into the JSON views served by the API:

    lookup  →  object closure  →  link stripping  →  profile filter  →  View
"""

from .types import InternalError, NotFound, TranslateOptions, View, ViewOptions, ViewResult
from .options import (
    normalize_extensions,
    normalize_objects_flag,
    normalize_profiles,
    normalize_verbosity,
    translate_options,
    view_options,
)
from .links import strip_links
from .closure import resolve_closure
from .composer import ViewComposer, summarize

__all__ = [
    "InternalError",
    "NotFound",
    "TranslateOptions",
    "View",
    "ViewOptions",
    "ViewResult",
    "normalize_extensions",
    "normalize_objects_flag",
    "normalize_profiles",
    "normalize_verbosity",
    "translate_options",
    "view_options",
    "strip_links",
    "resolve_closure",
    "ViewComposer",
    "summarize",
]
