"""Shared-secret authentication with sampled audit logging."""

import hashlib
import hmac
import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from tagpurge.core.entities.revalidation_config import DEFAULT_AUDIT_SAMPLE_RATE
from tagpurge.utils.requests import caller_identifier

audit_logger = logging.getLogger("tagpurge.audit")


class AuditSampler:
    """Probabilistic gate for audit events.

    Bounds log volume under credential-guessing floods while keeping
    some visibility. The random source is injectable so both branches
    can be forced in tests.
    """

    def __init__(
        self,
        rate: float = DEFAULT_AUDIT_SAMPLE_RATE,
        random_source: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the sampler.

        Args:
            rate: Probability of sampling an event, clamped to [0, 1].
            random_source: Callable returning floats in [0, 1).
        """
        self._rate = min(max(float(rate), 0.0), 1.0)
        self._random = random_source

    @property
    def rate(self) -> float:
        return self._rate

    def should_sample(self) -> bool:
        if self._rate <= 0.0:
            return False
        return self._random() < self._rate


@dataclass(frozen=True)
class AuditContext:
    """Request details attached to a rejected authentication."""

    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    client_host: str | None = None

    @property
    def caller(self) -> str:
        return caller_identifier(self.headers, self.client_host)


class SecretAuthenticator:
    """Validates the caller's shared secret.

    Fails closed: if either the expected secret or the provided
    credential is missing, authentication fails.
    """

    def __init__(
        self,
        expected_secret: str | None,
        sampler: AuditSampler | None = None,
    ) -> None:
        self._expected = expected_secret
        self._sampler = sampler or AuditSampler()

    @property
    def configured(self) -> bool:
        return bool(self._expected)

    def authenticate(
        self,
        provided: str | None,
        context: AuditContext | None = None,
    ) -> bool:
        """Check ``provided`` against the expected secret.

        Args:
            provided: Credential supplied by the caller, may be None.
            context: Request details for the audit event on rejection.

        Returns:
            True only if both values are present and equal.
        """
        accepted = bool(self._expected) and bool(provided) and _constant_time_equals(
            provided or "", self._expected or ""
        )
        if not accepted:
            self._audit_rejection(provided, context)
        return accepted

    def _audit_rejection(self, provided: str | None, context: AuditContext | None) -> None:
        if not self._sampler.should_sample():
            return

        audit_logger.warning(
            "Unauthorized revalidation attempt path=%s credential_present=%s caller=%s",
            context.path if context else "unknown",
            bool(provided),
            context.caller if context else "unknown",
            extra={
                "audit_event": "revalidate.unauthorized",
                "credential_present": bool(provided),
            },
        )


def _constant_time_equals(provided: str, expected: str) -> bool:
    # Digests have a fixed length, so differing input lengths cost the same
    # as a full comparison.
    provided_digest = hashlib.sha256(provided.encode("utf-8")).digest()
    expected_digest = hashlib.sha256(expected.encode("utf-8")).digest()
    return hmac.compare_digest(provided_digest, expected_digest)
