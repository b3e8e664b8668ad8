"""Read-through cache boundary for materialized content.

The repository consults a :class:`ContentCache` before calling the API and
stores what it built afterwards. Keys come from :func:`cache_key`, so the same
content type, operation, and parameters always hit the same entry. No locking
is applied: two callers missing at once both compute and store, which is
harmless because materialization is deterministic.
"""

from __future__ import annotations

import hashlib
import json
import time
import typing as typ

from ._constants import CACHE_KEY_TEMPLATE


class ContentCache(typ.Protocol):
    """Minimal cache interface used by the repository."""

    def get(self, key: str) -> typ.Any | None:
        """Return the cached value for ``key``, or ``None`` on a miss."""
        ...

    def set(self, key: str, value: typ.Any, lifetime: int) -> None:
        """Store ``value`` under ``key`` for ``lifetime`` seconds."""
        ...


class MemoryCache:
    """Process-local cache with per-entry expiry."""

    def __init__(self, clock: typ.Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, typ.Any]] = {}

    def get(self, key: str) -> typ.Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: typ.Any, lifetime: int) -> None:
        self._entries[key] = (self._clock() + lifetime, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def cache_key(content_type: str, operation: str, *params: typ.Any) -> str:
    """Return a deterministic cache key for an API call.

    Parameters are rendered as canonical JSON (sorted keys, non-JSON values
    via ``str``) and hashed, so mappings with the same items produce the same
    key regardless of insertion order.

    Examples
    --------
    >>> cache_key("news", "list", 1, {"b": 2, "a": 1}) == cache_key(
    ...     "news", "list", 1, {"a": 1, "b": 2}
    ... )
    True
    >>> cache_key("news", "one", 5).startswith("news.one.")
    True
    """
    canonical = json.dumps(
        list(params), sort_keys=True, separators=(",", ":"), default=str
    )
    digest = hashlib.sha1(canonical.encode("utf-8"), usedforsecurity=False).hexdigest()
    return CACHE_KEY_TEMPLATE.format(
        content_type=content_type, operation=operation, digest=digest
    )


__all__ = ["ContentCache", "MemoryCache", "cache_key"]
