"""Card service: validation, caching, aggregation and rendering in one call."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .aggregator import aggregate_profile
from .cache import CardCache, TTLCache, cache_key
from .config import Settings
from .exceptions import InputError
from .github.client import GitHubClient
from .models import ErrorResult
from .renderer import parse_columns, render_error_card, render_trophy
from .themes import DEFAULT_THEME

logger = logging.getLogger(__name__)

RATE_LIMITED_CARD_MESSAGE = "GitHub API rate limit exceeded. Try again later."


@dataclass(frozen=True)
class CardResult:
    svg: str
    is_error: bool = False
    cached: bool = False


def _require_username(username: str | None) -> str:
    username = (username or "").strip()
    if not username:
        raise InputError("GitHub username is required.")
    return username


class TrophyService:
    """Produces a trophy card SVG for a username; always returns an image."""

    def __init__(self, settings: Settings | None = None, cache: CardCache | None = None) -> None:
        self.settings = settings or Settings()
        self.cache = cache if cache is not None else TTLCache(ttl=self.settings.cache_ttl)

    def _client(self) -> GitHubClient:
        return GitHubClient(
            token=self.settings.github_token,
            base_url=self.settings.api_url,
            timeout=self.settings.http_timeout,
        )

    async def get_card(
        self,
        username: str | None,
        theme: str | None = None,
        columns: Any = None,
    ) -> CardResult:
        try:
            username = _require_username(username)
        except InputError as exc:
            return CardResult(render_error_card(str(exc)), is_error=True)

        theme = theme or DEFAULT_THEME.value
        columns = parse_columns(columns)
        key = cache_key(username, theme, columns)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return CardResult(cached, cached=True)

        try:
            async with self._client() as client:
                stats = await aggregate_profile(client, username)

            if isinstance(stats, ErrorResult):
                logger.error("GitHub fetch error for %s: %s", username, stats.message)
                message = stats.message or "Failed to fetch GitHub data"
                if "API rate limit exceeded" in message:
                    message = RATE_LIMITED_CARD_MESSAGE
                return CardResult(render_error_card(message), is_error=True)

            svg = render_trophy(stats, theme, columns)
        except Exception:
            logger.exception("Failed to build trophy card for %s", username)
            return CardResult(render_error_card("Internal Server Error"), is_error=True)

        self.cache.set(key, svg)
        return CardResult(svg)
