"""GitHub rate limit bookkeeping."""

from __future__ import annotations

import logging
import math
import time

import httpx

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "GitHub API rate limit exceeded. Set GITHUB_TOKEN for higher limits."


def is_rate_limited(status_code: int, message: str | None) -> bool:
    """A 403 is only a rate limit when GitHub says so in the body."""
    return status_code == 403 and "rate limit" in (message or "").lower()


class RateLimitMonitor:
    """Tracks the X-RateLimit headers GitHub returns on every response."""

    def __init__(self, threshold: int = 10) -> None:
        self._threshold = threshold
        self._remaining: int | None = None
        self._reset_at: float | None = None

    @property
    def remaining(self) -> int | None:
        return self._remaining

    def update(self, response: httpx.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset = response.headers.get("X-RateLimit-Reset")
        if remaining is not None:
            try:
                self._remaining = int(remaining)
            except ValueError:
                logger.debug("Ignoring unparseable X-RateLimit-Remaining: %r", remaining)
        if reset is not None:
            try:
                reset_at = float(reset)
            except ValueError:
                reset_at = math.nan
            if math.isfinite(reset_at):
                self._reset_at = reset_at
            else:
                logger.debug("Ignoring unparseable X-RateLimit-Reset: %r", reset)
        if self.is_low():
            logger.warning(
                "GitHub rate limit low: %s requests left, resets in %ds",
                self._remaining,
                self.seconds_until_reset(),
            )

    def is_low(self) -> bool:
        return self._remaining is not None and self._remaining <= self._threshold

    def seconds_until_reset(self) -> int:
        if self._reset_at is None:
            return 0
        return max(0, int(self._reset_at - time.time()))
