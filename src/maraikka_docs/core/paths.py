"""Route path normalization.

Turns the path segments captured by the catch-all documentation route into
canonical content keys. Normalization never fails: input that cannot be a
valid route path resolves to the site root.
"""

import logging
from collections.abc import Sequence

from maraikka_docs.core.types import ROOT_KEY, ContentKey, URLPath

logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS = ("/", "\\", "\x00")
_RELATIVE_SEGMENTS = frozenset({".", ".."})


def normalize(segments: Sequence[str] | None) -> ContentKey:
    """Normalize route segments into a content key.

    Args:
        segments: Ordered path segments (e.g., ["guide", "setup"]), or None for root

    Returns:
        Content key with segments joined by "/". Empty or malformed input
        yields the root key.
    """
    if segments is None or isinstance(segments, str | bytes) or not isinstance(segments, Sequence):
        return ROOT_KEY

    cleaned: list[str] = []
    for segment in segments:
        if not isinstance(segment, str):
            logger.debug("Non-string route segment %r, using root", segment)
            return ROOT_KEY
        if not segment:
            continue
        if segment in _RELATIVE_SEGMENTS or any(c in segment for c in _FORBIDDEN_CHARS):
            logger.debug("Malformed route segment %r, using root", segment)
            return ROOT_KEY
        cleaned.append(segment)

    return ContentKey("/".join(cleaned))


def split_path(path: str) -> list[str]:
    """Split a raw URL path into route segments.

    Args:
        path: URL path with or without leading/trailing slashes (e.g., "/guide/setup/")

    Returns:
        Non-empty path segments
    """
    return [segment for segment in path.split("/") if segment]


def to_url_path(key: ContentKey) -> URLPath:
    """Convert a content key to its URL path ("/" for root)."""
    return URLPath(f"/{key}")
