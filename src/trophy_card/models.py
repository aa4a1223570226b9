"""Data models for trophy-card."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Tier(str, Enum):
    MYTHIC = "Mythic"
    LEGENDARY = "Legendary"
    GOLD = "Gold"
    SILVER = "Silver"
    IRON = "Iron"


@dataclass(frozen=True)
class ProfileStats:
    username: str
    display_name: str = ""
    avatar_url: str | None = None
    star_count: int = 0
    repo_count: int = 0
    follower_count: int = 0
    fork_count: int = 0
    formatted_stars: str = "0"
    formatted_repos: str = "0"
    formatted_followers: str = "0"
    score: int = 0
    level: int = 0
    xp_percent: int = 0
    grade: Grade = Grade.D
    tier: Tier = Tier.IRON


@dataclass(frozen=True)
class ErrorResult:
    message: str
    error: bool = True
