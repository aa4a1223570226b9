"""Shared fixtures for trophy-card tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from trophy_card.github.client import GitHubClient


def make_repo(stars: int = 1, forks: int = 0, fork: bool = False) -> dict:
    return {"fork": fork, "stargazers_count": stars, "forks_count": forks}


def make_page(count: int, stars: int = 1, forks: int = 0, fork: bool = False) -> list[dict]:
    return [make_repo(stars=stars, forks=forks, fork=fork) for _ in range(count)]


@pytest.fixture
def profile() -> dict:
    return {
        "login": "OctoCat",
        "name": "The Octocat",
        "avatar_url": "https://avatars.example.com/u/1",
        "followers": 20,
        "public_repos": 8,
        "total_private_repos": 0,
    }


@pytest.fixture
def mock_client(profile):
    client = AsyncMock(spec=GitHubClient)
    client.get_user.return_value = profile
    client.list_repos_page.return_value = [
        make_repo(stars=10, forks=2),
        make_repo(stars=5, forks=1),
        make_repo(stars=100, forks=50, fork=True),
    ]
    return client
