"""Profile statistics aggregation.

A run moves through ``START -> INITIAL_FETCH -> PAGINATING -> DONE`` (or
``FAILED``). The profile and first repository page are fetched together;
further pages are fetched one at a time and any failure there only ends
pagination early.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import MalformedResponseError, TrophyCardError
from .github.client import PER_PAGE, GitHubClient
from .models import ErrorResult, ProfileStats
from .scoring import (
    compute_level,
    compute_score,
    compute_xp_percent,
    format_count,
    grade_for_score,
    tier_for_grade,
)

logger = logging.getLogger(__name__)

MAX_PAGES = 50


class AggregationState(str, Enum):
    START = "start"
    INITIAL_FETCH = "initial_fetch"
    PAGINATING = "paginating"
    DONE = "done"
    FAILED = "failed"


class StopReason(str, Enum):
    SHORT_PAGE = "short_page"
    EMPTY_PAGE = "empty_page"
    PAGE_ERROR = "page_error"
    MALFORMED_PAGE = "malformed_page"
    PAGE_CAP = "page_cap"


@dataclass
class AggregationRun:
    """Mutable progress record for a single aggregation."""

    username: str
    state: AggregationState = AggregationState.START
    stop_reason: StopReason | None = None
    pages_fetched: int = 0
    profile: dict[str, Any] = field(default_factory=dict)
    repos: list[dict[str, Any]] = field(default_factory=list)

    def reset(self, username: str) -> None:
        """Return to ``START`` so the record can be reused for another run."""
        self.username = username
        self.state = AggregationState.START
        self.stop_reason = None
        self.pages_fetched = 0
        self.profile = {}
        self.repos = []

    def advance(self, state: AggregationState) -> None:
        logger.debug("%s: %s -> %s", self.username, self.state.value, state.value)
        self.state = state


def _owned(repos: list[Any]) -> list[dict[str, Any]]:
    return [r for r in repos if isinstance(r, dict) and not r.get("fork", False)]


async def _initial_fetch(client: GitHubClient, run: AggregationRun) -> list[Any]:
    """Fetch the profile and the first repository page concurrently."""
    results = await asyncio.gather(
        client.get_user(run.username),
        client.list_repos_page(run.username, 1),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    profile, first_page = results

    if not isinstance(profile, dict):
        raise MalformedResponseError("Unexpected user response")
    if not isinstance(first_page, list):
        message = first_page.get("message") if isinstance(first_page, dict) else None
        raise MalformedResponseError(message or "Unexpected repos response")

    run.profile = profile
    run.repos.extend(_owned(first_page))
    run.pages_fetched = 1
    return first_page


async def _paginate(client: GitHubClient, run: AggregationRun) -> StopReason:
    for page in range(2, MAX_PAGES + 1):
        try:
            data = await client.list_repos_page(run.username, page)
        except MalformedResponseError:
            return StopReason.MALFORMED_PAGE
        except TrophyCardError as exc:
            logger.warning("Stopping pagination for %s at page %d: %s", run.username, page, exc)
            return StopReason.PAGE_ERROR

        if not isinstance(data, list):
            return StopReason.MALFORMED_PAGE
        if not data:
            return StopReason.EMPTY_PAGE

        run.repos.extend(_owned(data))
        run.pages_fetched = page
        if len(data) < PER_PAGE:
            return StopReason.SHORT_PAGE
    return StopReason.PAGE_CAP


def build_profile_stats(profile: dict[str, Any], repos: list[dict[str, Any]], username: str) -> ProfileStats:
    """Derive the trophy statistics from a profile and its non-fork repositories.

    Fork totals are only trusted when the profile reports zero private
    repositories; otherwise they are left out of the score.
    """
    stars = sum(r.get("stargazers_count") or 0 for r in repos)
    if profile.get("total_private_repos") == 0:
        forks = sum(r.get("forks_count") or 0 for r in repos)
    else:
        forks = 0
    followers = profile.get("followers") or 0
    public_repos = profile.get("public_repos") or len(repos)

    score = compute_score(stars, forks, followers)
    grade = grade_for_score(score)
    return ProfileStats(
        username=profile.get("login") or username,
        display_name=profile.get("name") or "",
        avatar_url=profile.get("avatar_url") or None,
        star_count=stars,
        repo_count=public_repos,
        follower_count=followers,
        fork_count=forks,
        formatted_stars=format_count(stars),
        formatted_repos=format_count(public_repos),
        formatted_followers=format_count(followers),
        score=score,
        level=compute_level(score),
        xp_percent=compute_xp_percent(score),
        grade=grade,
        tier=tier_for_grade(grade),
    )


async def aggregate_profile(
    client: GitHubClient,
    username: str,
    run: AggregationRun | None = None,
) -> ProfileStats | ErrorResult:
    """Collect a user's statistics. Failures are returned, never raised."""
    username = (username or "").strip()
    if not username:
        return ErrorResult("Username required")

    if run is None:
        run = AggregationRun(username=username)
    else:
        run.reset(username)

    try:
        run.advance(AggregationState.INITIAL_FETCH)
        first_page = await _initial_fetch(client, run)

        if len(first_page) == PER_PAGE:
            run.advance(AggregationState.PAGINATING)
            run.stop_reason = await _paginate(client, run)
        else:
            run.stop_reason = StopReason.EMPTY_PAGE if not first_page else StopReason.SHORT_PAGE
        logger.debug(
            "%s: %d page(s), %d owned repos, stopped on %s",
            username,
            run.pages_fetched,
            len(run.repos),
            run.stop_reason.value,
        )

        stats = build_profile_stats(run.profile, run.repos, username)
        run.advance(AggregationState.DONE)
        return stats
    except TrophyCardError as exc:
        run.advance(AggregationState.FAILED)
        logger.warning("Aggregation failed for %s: %s", username, exc)
        return ErrorResult(str(exc) or "Unknown error")
    except Exception as exc:
        run.advance(AggregationState.FAILED)
        logger.exception("Unexpected error aggregating %s", username)
        return ErrorResult(str(exc) or "Unknown error")
