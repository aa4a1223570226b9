"""Score, level and rank derivation for the trophy card."""

from __future__ import annotations

import math

from .models import Grade, Tier

XP_PER_LEVEL = 50

# Descending, first match wins.
_GRADE_THRESHOLDS: list[tuple[int, Grade]] = [
    (300, Grade.A_PLUS),
    (200, Grade.A),
    (100, Grade.B),
    (50, Grade.C),
]

_TIER_BY_GRADE: dict[Grade, Tier] = {
    Grade.A_PLUS: Tier.MYTHIC,
    Grade.A: Tier.LEGENDARY,
    Grade.B: Tier.GOLD,
    Grade.C: Tier.SILVER,
    Grade.D: Tier.IRON,
}


def compute_score(stars: int, forks: int, followers: int) -> int:
    return stars + forks + followers


def compute_level(score: int) -> int:
    return score // XP_PER_LEVEL


def compute_xp_percent(score: int) -> int:
    """Progress within the current level, as a percentage capped at 100."""
    return min(100, (score % XP_PER_LEVEL) * 2)


def grade_for_score(score: int) -> Grade:
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.D


def tier_for_grade(grade: Grade) -> Tier:
    return _TIER_BY_GRADE[Grade(grade)]


def format_count(n: float) -> str:
    """Format a count with thousands separators, clamped at zero.

    Halves round up so ``2.5`` becomes ``"3"``.
    """
    value = max(0, math.floor(n + 0.5))
    return f"{value:,}"
