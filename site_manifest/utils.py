# File: site_manifest/utils.py
"""site_manifest.utils: helpers for URLs, identifier safety and order-preserving de-duplication."""

from __future__ import annotations

import re
from typing import Callable, Hashable, Iterable, List, Sequence, TypeVar
from urllib.parse import urlparse

from site_manifest.logger import logger

__all__: Sequence[str] = (
    "join_url",
    "normalize_origin",
    "is_local_origin",
    "is_path_safe",
    "remove_duplicates",
)

T = TypeVar("T")

# control characters, whitespace and code points XML 1.0 cannot carry
_UNSAFE_PATH_CHARS = re.compile(r"[\x00-\x20\x7f\s\ud800-\udfff\ufffe\uffff]")


def normalize_origin(url: str) -> str:
    """Validates an absolute http(s) URL and strips trailing slashes."""
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Expected an absolute http(s) URL, got {url!r}")
    return url.strip().rstrip("/")


def join_url(base_url: str, path: str) -> str:
    """Joins origin and root-relative path with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def is_local_origin(url: str) -> bool:
    """True for URLs pointing at the developer machine."""
    host = urlparse(url).hostname or ""
    return host in ("localhost", "127.0.0.1", "0.0.0.0", "::1")


def remove_duplicates(items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> List[T]:
    """Removes duplicates keeping the last occurrence of each key, in last-seen order."""
    items = list(items)
    keyfunc = key or (lambda item: item)
    latest: dict[Hashable, T] = {}
    for item in items:
        k = keyfunc(item)
        latest.pop(k, None)
        latest[k] = item
    unique = list(latest.values())
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate entries", removed)
    return unique


def is_path_safe(segment: str) -> bool:
    """True when ``segment`` can go into a URL path and an XML text node unchanged."""
    return bool(segment) and _UNSAFE_PATH_CHARS.search(segment) is None
