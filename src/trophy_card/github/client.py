"""Async GitHub REST client for the profile and repository endpoints."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .. import __version__
from ..exceptions import MalformedResponseError, RateLimitError, UpstreamError
from .rate_limit import RATE_LIMIT_MESSAGE, RateLimitMonitor, is_rate_limited

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubClient:
    """Thin wrapper around ``httpx.AsyncClient``.

    Must be used as an async context manager::

        async with GitHubClient(token) as client:
            user = await client.get_user("octocat")
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = API_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"trophy-card/{__version__}",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._client: httpx.AsyncClient | None = None
        self.rate_limit = RateLimitMonitor()

    async def __aenter__(self) -> GitHubClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_user(self, username: str) -> Any:
        return await self._get(
            f"/users/{quote(username, safe='')}",
            fallback="GitHub user fetch failed.",
        )

    async def list_repos_page(self, username: str, page: int, per_page: int = PER_PAGE) -> Any:
        """Fetch one page of a user's public repositories, forks included."""
        return await self._get(
            f"/users/{quote(username, safe='')}/repos",
            params={"per_page": per_page, "page": page},
            fallback="Repository fetch failed.",
        )

    async def _get(self, path: str, fallback: str, params: dict[str, Any] | None = None) -> Any:
        if self._client is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")

        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise UpstreamError(f"GitHub request timed out: {path}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"GitHub request failed: {exc}") from exc

        self.rate_limit.update(response)
        logger.debug("GET %s -> %d", response.request.url, response.status_code)

        if not response.is_success:
            message = _error_message(response) or fallback
            if is_rate_limited(response.status_code, message):
                raise RateLimitError(RATE_LIMIT_MESSAGE, status_code=response.status_code)
            raise UpstreamError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"Unparseable response from {path}", status_code=response.status_code
            ) from exc


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None
