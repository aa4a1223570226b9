"""Tests for the card service."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from trophy_card.cache import TTLCache, cache_key
from trophy_card.config import Settings
from trophy_card.github.rate_limit import RATE_LIMIT_MESSAGE
from trophy_card.models import ErrorResult, ProfileStats
from trophy_card.service import RATE_LIMITED_CARD_MESSAGE, TrophyService


def _wire_client(mock_client_cls):
    mock_client = AsyncMock()
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_get_card_renders_and_caches(mock_client_cls, mock_aggregate):
    mock_client = _wire_client(mock_client_cls)
    mock_aggregate.return_value = ProfileStats(username="octocat", score=10)
    cache = TTLCache()
    service = TrophyService(Settings(github_token="tok"), cache=cache)

    first = await service.get_card("octocat", "classic_gamer", "2")
    second = await service.get_card("octocat", "classic_gamer", "2")

    assert not first.is_error
    assert not first.cached
    assert second.cached
    assert second.svg == first.svg
    mock_aggregate.assert_called_once_with(mock_client, "octocat")
    assert mock_client_cls.call_args.kwargs["token"] == "tok"
    assert cache.get(cache_key("octocat", "classic_gamer", 2)) == first.svg


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_defaults_theme_and_columns(mock_client_cls, mock_aggregate):
    _wire_client(mock_client_cls)
    mock_aggregate.return_value = ProfileStats(username="octocat")
    cache = TTLCache()
    service = TrophyService(Settings(), cache=cache)

    await service.get_card("  octocat  ", None, "9")

    assert cache.get(cache_key("octocat", "dark_high_contrast", 3)) is not None


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_error_result_renders_error_card_uncached(mock_client_cls, mock_aggregate):
    _wire_client(mock_client_cls)
    mock_aggregate.return_value = ErrorResult("Not Found")
    service = TrophyService(Settings(), cache=TTLCache())

    result = await service.get_card("ghost")
    await service.get_card("ghost")

    assert result.is_error
    assert "Error: Not Found" in result.svg
    assert mock_aggregate.call_count == 2


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_rate_limit_gets_friendly_message(mock_client_cls, mock_aggregate):
    _wire_client(mock_client_cls)
    mock_aggregate.return_value = ErrorResult(RATE_LIMIT_MESSAGE)
    service = TrophyService(Settings(), cache=TTLCache())

    result = await service.get_card("octocat")

    assert result.is_error
    assert RATE_LIMITED_CARD_MESSAGE in result.svg


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_missing_username_skips_fetch(mock_client_cls, mock_aggregate):
    service = TrophyService(Settings(), cache=TTLCache())

    result = await service.get_card("   ")

    assert result.is_error
    assert "GitHub username is required." in result.svg
    mock_client_cls.assert_not_called()
    mock_aggregate.assert_not_called()


@pytest.mark.asyncio
@patch("trophy_card.service.aggregate_profile")
@patch("trophy_card.service.GitHubClient")
async def test_unexpected_failure_renders_internal_error(mock_client_cls, mock_aggregate):
    _wire_client(mock_client_cls)
    mock_aggregate.side_effect = RuntimeError("kaboom")
    service = TrophyService(Settings(), cache=TTLCache())

    result = await service.get_card("octocat")

    assert result.is_error
    assert "Internal Server Error" in result.svg
