"""Tests for the rate limit monitor."""

from __future__ import annotations

import logging
import time

import httpx

from trophy_card.github.rate_limit import RateLimitMonitor, is_rate_limited


def _make_response(remaining: str | None = None, reset: str | None = None) -> httpx.Response:
    headers = {}
    if remaining is not None:
        headers["X-RateLimit-Remaining"] = remaining
    if reset is not None:
        headers["X-RateLimit-Reset"] = reset
    return httpx.Response(200, headers=headers)


def test_update_sets_remaining_and_reset():
    monitor = RateLimitMonitor()
    monitor.update(_make_response(remaining="100", reset=str(time.time() + 3600)))
    assert monitor.remaining == 100
    assert 3500 < monitor.seconds_until_reset() <= 3600


def test_update_without_headers():
    monitor = RateLimitMonitor()
    monitor.update(_make_response())
    assert monitor.remaining is None
    assert monitor.seconds_until_reset() == 0
    assert not monitor.is_low()


def test_low_remaining_logs_warning(caplog):
    monitor = RateLimitMonitor(threshold=10)
    with caplog.at_level(logging.WARNING, logger="trophy_card.github.rate_limit"):
        monitor.update(_make_response(remaining="5", reset=str(time.time() - 1)))
    assert monitor.is_low()
    assert "rate limit low" in caplog.text


def test_above_threshold_is_not_low():
    monitor = RateLimitMonitor(threshold=10)
    monitor.update(_make_response(remaining="50"))
    assert not monitor.is_low()


def test_is_rate_limited():
    assert is_rate_limited(403, "API rate limit exceeded for 1.2.3.4.")
    assert not is_rate_limited(403, "Resource not accessible")
    assert not is_rate_limited(404, "API rate limit exceeded")
    assert not is_rate_limited(403, None)


def test_unparseable_headers_keep_previous_values():
    monitor = RateLimitMonitor()
    monitor.update(_make_response(remaining="100", reset=str(time.time() + 600)))
    monitor.update(_make_response(remaining="n/a", reset="soon"))
    assert monitor.remaining == 100
    assert monitor.seconds_until_reset() > 0


def test_unparseable_headers_on_first_response():
    monitor = RateLimitMonitor()
    monitor.update(_make_response(remaining="", reset="inf"))
    assert monitor.remaining is None
    assert monitor.seconds_until_reset() == 0
