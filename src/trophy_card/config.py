"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .cache import DEFAULT_TTL
from .exceptions import ConfigurationError
from .github.client import API_URL


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    github_token: str | None = None
    api_url: str = API_URL
    http_timeout: float = 10.0
    cache_ttl: float = DEFAULT_TTL

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> Settings:
        """Build settings from the process environment.

        A ``.env`` file in the working directory is loaded first when present;
        variables already set in the environment take precedence.
        """
        if load_dotenv_file:
            load_dotenv()
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN") or None,
            api_url=os.environ.get("GITHUB_API_URL") or API_URL,
            http_timeout=_float_env("TROPHY_HTTP_TIMEOUT", 10.0),
            cache_ttl=_float_env("TROPHY_CACHE_TTL", DEFAULT_TTL),
        )
