"""Request body validation against the tag registry."""

import json
from dataclasses import dataclass
from typing import Any

from tagpurge.core.entities.request import RevalidationRequest
from tagpurge.core.services.tag_registry import TagRegistry

INVALID_JSON_MESSAGE = "Invalid JSON body"


@dataclass(frozen=True)
class ValidationResult:
    """Either a validated request or an error message for the caller."""

    request: RevalidationRequest | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.request is not None


class TagSetValidator:
    """Validates inbound revalidation bodies.

    Rejection happens in a single pass before any side effect, and is
    reported as a ValidationResult rather than an exception.
    """

    def __init__(self, registry: TagRegistry) -> None:
        self._registry = registry

    @property
    def invalid_tags_message(self) -> str:
        allowed = ", ".join(tag.value for tag in self._registry.allowed_tags)
        return f"Invalid or missing tags. Allowed tags: {allowed}"

    def parse_body(self, raw: bytes | str) -> ValidationResult:
        """Decode a raw JSON body and validate it.

        Args:
            raw: The request body.

        Returns:
            The validation result.
        """
        try:
            payload = json.loads(raw)
        except (ValueError, UnicodeDecodeError):
            return ValidationResult(error=INVALID_JSON_MESSAGE)
        return self.validate(payload)

    def validate(self, payload: Any) -> ValidationResult:
        """Validate parsed JSON.

        The body must be an object whose ``tags`` key holds a non-empty
        list of allowed tags.

        Args:
            payload: Parsed JSON value.

        Returns:
            The validation result.
        """
        if not isinstance(payload, dict):
            return ValidationResult(error=self.invalid_tags_message)
        tags = payload.get("tags")

        if not isinstance(tags, list) or not tags:
            return ValidationResult(error=self.invalid_tags_message)

        resolved = [self._registry.resolve(value) for value in tags]
        if any(tag is None for tag in resolved):
            return ValidationResult(error=self.invalid_tags_message)

        return ValidationResult(request=RevalidationRequest(tags=tuple(resolved)))  # type: ignore[arg-type]
