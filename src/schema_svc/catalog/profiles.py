"""Profile filters - narrow an attribute set to the active profiles."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from .types import AttributeDefinition


class ProfileFilter(ABC):
    """
    Abstract base class for profile filters.

    A filter receives the attribute mapping of one entity and the set of
    active profiles and returns the narrowed mapping. It must not mutate
    its input.
    """

    @abstractmethod
    def apply(
        self,
        attributes: Mapping[str, AttributeDefinition],
        profiles: frozenset[str],
    ) -> dict[str, AttributeDefinition]:
        ...


class AttributeProfileFilter(ProfileFilter):
    """
    Keep attributes that belong to no profile, or to one of the active ones.

    With an empty profile set, every profile-contributed attribute is dropped.
    """

    def apply(
        self,
        attributes: Mapping[str, AttributeDefinition],
        profiles: frozenset[str],
    ) -> dict[str, AttributeDefinition]:
        return {
            name: attr for name, attr in attributes.items()
            if attr.profile is None or attr.profile in profiles
        }
