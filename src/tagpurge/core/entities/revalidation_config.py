"""Revalidation configuration entity."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AUDIT_SAMPLE_RATE = 0.01
DEFAULT_REMOTE_TIMEOUT = 10.0
# CloudFront rejects batches above this many paths.
DEFAULT_CLOUDFRONT_MAX_PATHS = 3000


class RevalidationConfig(BaseSettings):
    """Revalidation configuration.

    Resolved once at process start from environment variables and
    injected into every component. Nothing downstream reads the
    environment on its own. Fields can also be passed by name, which
    takes precedence over the environment.

    A remote backend whose credentials are missing is not an error: the
    corresponding client reports itself as skipped for this deployment.
    Blank variables count as unset. Out-of-range values raise
    ``pydantic.ValidationError``.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    secret: str | None = Field(default=None, alias="REVALIDATE_SECRET")
    audit_sample_rate: float = Field(
        default=DEFAULT_AUDIT_SAMPLE_RATE, alias="REVALIDATE_AUDIT_SAMPLE_RATE"
    )

    # Cloudflare prefix purge
    cloudflare_zone_id: str | None = Field(default=None, alias="CLOUDFLARE_ZONE_ID")
    cloudflare_api_token: str | None = Field(default=None, alias="CLOUDFLARE_API_TOKEN")
    cloudflare_timeout: float = Field(
        default=DEFAULT_REMOTE_TIMEOUT, gt=0, alias="CLOUDFLARE_PURGE_TIMEOUT_SECONDS"
    )

    # CloudFront pattern invalidation
    cloudfront_distribution_id: str | None = Field(
        default=None, alias="CLOUDFRONT_DISTRIBUTION_ID"
    )
    cloudfront_timeout: float = Field(
        default=DEFAULT_REMOTE_TIMEOUT, gt=0, alias="CLOUDFRONT_INVALIDATION_TIMEOUT_SECONDS"
    )
    cloudfront_max_paths: int = Field(
        default=DEFAULT_CLOUDFRONT_MAX_PATHS, ge=1, alias="CLOUDFRONT_MAX_PATHS"
    )
    aws_region: str | None = Field(default=None, alias="AWS_REGION")

    # In-process caches
    local_cache_maxsize: int = Field(default=1000, ge=1, alias="LOCAL_CACHE_MAXSIZE")
    local_cache_ttl: float = Field(default=300.0, gt=0, alias="LOCAL_CACHE_TTL_SECONDS")

    @field_validator("audit_sample_rate")
    @classmethod
    def clamp_sample_rate(cls, v: float) -> float:
        """Clamp the audit sample rate to [0, 1]."""
        return min(max(v, 0.0), 1.0)

    @field_validator(
        "secret",
        "cloudflare_zone_id",
        "cloudflare_api_token",
        "cloudfront_distribution_id",
        "aws_region",
    )
    @classmethod
    def blank_as_unset(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @property
    def cloudflare_configured(self) -> bool:
        """Check if both Cloudflare credentials are present."""
        return bool(self.cloudflare_zone_id and self.cloudflare_api_token)

    @property
    def cloudfront_configured(self) -> bool:
        """Check if a CloudFront distribution is configured."""
        return bool(self.cloudfront_distribution_id)
