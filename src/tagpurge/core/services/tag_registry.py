"""Tag registry - single source of truth for tag mappings."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from tagpurge.core.entities.tag import TAG_REGISTRY_VERSION, Tag


@dataclass(frozen=True)
class TagMapping:
    """Everything a tag affects.

    Attributes:
        local_caches: Names of in-process caches to clear.
        prefixes: Literal URL prefixes for prefix-based purge.
        patterns: Path patterns (wildcard suffix allowed) for CDN
            invalidation.
    """

    local_caches: frozenset[str]
    prefixes: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()


class TagRegistry:
    """Immutable lookup from allowed tags to the caches they affect.

    Every downstream component consults this registry instead of
    deriving its own mapping.
    """

    def __init__(
        self,
        mappings: Mapping[Tag, TagMapping],
        version: int = TAG_REGISTRY_VERSION,
    ) -> None:
        """Initialize the registry.

        Args:
            mappings: Mapping for every allowed tag.
            version: Version of the tag enumeration the mapping targets.

        Raises:
            ValueError: If a tag maps to no local cache.
        """
        for tag, mapping in mappings.items():
            if not mapping.local_caches:
                raise ValueError(f"Tag {tag.value!r} must map to at least one local cache")

        self._mappings = MappingProxyType(dict(mappings))
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    @property
    def allowed_tags(self) -> tuple[Tag, ...]:
        """Allowed tags in declaration order."""
        return tuple(self._mappings)

    def is_allowed(self, tag: object) -> bool:
        return isinstance(tag, Tag) and tag in self._mappings

    def resolve(self, value: object) -> Tag | None:
        """Return the allowed Tag for a raw value, or None."""
        tag = Tag.parse(value)
        if tag is None or tag not in self._mappings:
            return None
        return tag

    def local_cache_handles_for(self, tag: Tag) -> frozenset[str]:
        return self._mappings[tag].local_caches

    def prefixes_for(self, tag: Tag) -> tuple[str, ...]:
        return self._mappings[tag].prefixes

    def patterns_for(self, tag: Tag) -> tuple[str, ...]:
        return self._mappings[tag].patterns

    def prefixes_for_tags(self, tags: Iterable[Tag]) -> list[str]:
        """Union of prefixes for ``tags`` in first-seen order."""
        return _ordered_union(self.prefixes_for(tag) for tag in tags)

    def patterns_for_tags(self, tags: Iterable[Tag]) -> list[str]:
        """Union of patterns for ``tags`` in first-seen order."""
        return _ordered_union(self.patterns_for(tag) for tag in tags)


def _ordered_union(groups: Iterable[Iterable[str]]) -> list[str]:
    seen: dict[str, None] = {}
    for group in groups:
        for item in group:
            seen.setdefault(item, None)
    return list(seen)


DEFAULT_TAG_MAPPINGS: Mapping[Tag, TagMapping] = {
    Tag.PLACES: TagMapping(
        local_caches=frozenset({"places"}),
        prefixes=("/api/places",),
        patterns=("/api/places*",),
    ),
    Tag.REGIONS: TagMapping(
        local_caches=frozenset({"regions"}),
        prefixes=("/api/regions",),
        patterns=("/api/regions*",),
    ),
    # Options are served from the regions cache.
    Tag.REGIONS_OPTIONS: TagMapping(
        local_caches=frozenset({"regions"}),
        prefixes=("/api/regions/options",),
        patterns=("/api/regions/options*",),
    ),
    Tag.CITIES: TagMapping(
        local_caches=frozenset({"cities"}),
        prefixes=("/api/cities",),
        patterns=("/api/cities*",),
    ),
    Tag.CATEGORIES: TagMapping(
        local_caches=frozenset({"categories"}),
        prefixes=("/api/categories",),
        patterns=("/api/categories*",),
    ),
}

DEFAULT_LOCAL_CACHES: tuple[str, ...] = ("places", "regions", "cities", "categories")


def default_registry() -> TagRegistry:
    """Create the registry for the reference tag set."""
    return TagRegistry(DEFAULT_TAG_MAPPINGS)
