"""Revalidatable tag entity."""

from enum import Enum

# Bump when members are added or removed so callers can detect drift.
TAG_REGISTRY_VERSION = 1


class Tag(str, Enum):
    """Logical identifier for a class of cached content.

    The set is closed on purpose: only infrequently changing reference
    data can be revalidated from outside. Event and news tags are not
    members, so they cannot be used to flush hot caches on demand.
    """

    PLACES = "places"
    REGIONS = "regions"
    REGIONS_OPTIONS = "regions:options"
    CITIES = "cities"
    CATEGORIES = "categories"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: object) -> "Tag | None":
        """Return the member for ``value`` or None if it is not a known tag."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


ALLOWED_TAGS: tuple[Tag, ...] = tuple(Tag)
