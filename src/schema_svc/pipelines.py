"""Event pipeline interfaces.

Translation, validation and sample generation of event data are provided
by external implementations. The service only normalizes request options
and delegates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .views.types import TranslateOptions


class Translator(ABC):
    """Translates raw event attribute names and enum values to captions."""

    @abstractmethod
    def translate(self, event: dict[str, Any], options: TranslateOptions) -> dict[str, Any]:
        ...


class Inspector(ABC):
    """Validates an event against the schema."""

    @abstractmethod
    def validate(self, event: dict[str, Any]) -> dict[str, Any]:
        """Return a mapping of findings; empty when the event is valid."""
        ...


class Generator(ABC):
    """Generates random sample data for a class or object."""

    @abstractmethod
    def generate(self, view: dict[str, Any]) -> dict[str, Any]:
        """
        Build a sample shaped like `view`.

        `view` is a composed class or object view; every object it references
        is included under `objects`.
        """
        ...
