"""Expiring in-memory cache for rendered cards."""

from __future__ import annotations

import time
from typing import Callable, Protocol

DEFAULT_TTL = 60 * 60 * 6


class CardCache(Protocol):
    ttl: float

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl: float | None = None) -> None: ...


class TTLCache:
    """Dict-backed cache; expired entries are dropped on read and on every write."""

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: str, ttl: float | None = None) -> None:
        ttl = self.ttl if ttl is None else ttl
        now = self._clock()
        self._purge(now)
        self._entries[key] = (value, now + ttl)

    def _purge(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._entries.items() if now > expires_at]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


def cache_key(username: str, theme: str, columns: int) -> str:
    return f"trophy:{username}:{theme}:{columns}"
