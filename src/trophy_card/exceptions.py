"""Exceptions raised inside trophy-card.

Aggregation converts all of these into an ``ErrorResult`` at its boundary,
so callers of ``aggregate_profile`` never see them.
"""

from __future__ import annotations


class TrophyCardError(Exception):
    """Base exception for all trophy-card errors."""


class InputError(TrophyCardError):
    """Raised when the caller supplies an unusable username."""


class ConfigurationError(TrophyCardError):
    """Raised when an environment setting cannot be parsed."""


class UpstreamError(TrophyCardError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """Raised when GitHub reports the API rate limit as exceeded."""


class MalformedResponseError(UpstreamError):
    """Raised when a successful response carries an unparseable body."""
