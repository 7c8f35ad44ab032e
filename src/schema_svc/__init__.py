"""
Event Schema Service - read-only API over an event schema catalog

Serves consumable JSON views of schema entries:
- Classes and objects, optionally with every referenced object expanded
- Profile overlays narrowing attribute sets
- Categories, the attribute dictionary, profiles and extensions
- Internal documentation links removed from everything served
"""

__version__ = "0.1.0"
