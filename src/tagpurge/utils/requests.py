"""Request inspection helpers."""

from collections.abc import Mapping

# Checked in order; the first non-empty value wins.
CALLER_HEADERS = ("cf-connecting-ip", "x-real-ip", "x-forwarded-for")


def caller_identifier(
    headers: Mapping[str, str],
    client_host: str | None = None,
) -> str:
    """Best-effort identifier for the caller of a request.

    Proxy headers are consulted first. For ``x-forwarded-for`` only the
    left-most (originating) address is used. Header names are matched
    case-insensitively.

    Args:
        headers: Request headers.
        client_host: Socket peer address, if known.

    Returns:
        The caller identifier, or ``"unknown"``.
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    for name in CALLER_HEADERS:
        value = lowered.get(name, "")
        if name == "x-forwarded-for":
            value = value.split(",")[0]
        value = value.strip()
        if value:
            return value
    return client_host or "unknown"
