"""Path normalization utilities for remote invalidation targets."""

from collections.abc import Iterable


def normalize_patterns(paths: Iterable[str]) -> tuple[str, ...]:
    """Normalize CDN path patterns.

    Trims whitespace, drops empty entries, enforces a leading slash and
    removes duplicates while keeping first-seen order. Applying it to its
    own output returns the same tuple.

    Args:
        paths: Raw path patterns, wildcard suffixes allowed.

    Returns:
        The normalized patterns in insertion order.
    """
    seen: dict[str, None] = {}
    for raw in paths:
        path = raw.strip()
        if not path:
            continue
        if not path.startswith("/"):
            path = f"/{path}"
        seen.setdefault(path, None)
    return tuple(seen)


def normalize_prefixes(prefixes: Iterable[str]) -> tuple[str, ...]:
    """Normalize literal purge prefixes.

    Same rules as :func:`normalize_patterns`, plus trailing ``*`` is
    stripped because prefix purges have no wildcard semantics.

    Args:
        prefixes: Raw URL path prefixes.

    Returns:
        The normalized prefixes in insertion order.
    """
    literal = (prefix.strip().rstrip("*") for prefix in prefixes)
    return normalize_patterns(literal)


def truncate(paths: tuple[str, ...], cap: int) -> tuple[tuple[str, ...], bool]:
    """Keep at most ``cap`` paths in their existing order.

    Returns:
        The kept paths and whether anything was dropped.
    """
    if len(paths) <= cap:
        return paths, False
    return paths[:cap], True
