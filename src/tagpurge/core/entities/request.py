"""Revalidation request entity."""

from dataclasses import dataclass

from tagpurge.core.entities.tag import Tag


@dataclass(frozen=True)
class RevalidationRequest:
    """Validated, immutable set of tags to revalidate."""

    tags: tuple[Tag, ...]

    def __post_init__(self) -> None:
        if not self.tags:
            raise ValueError("RevalidationRequest requires at least one tag")

    @property
    def unique_tags(self) -> tuple[Tag, ...]:
        """Tags with repeats removed, in first-seen order."""
        return tuple(dict.fromkeys(self.tags))
