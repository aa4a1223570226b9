"""Colour palettes for card themes and tier medals."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import Tier


class Theme(str, Enum):
    DARK_HIGH_CONTRAST = "dark_high_contrast"
    CLASSIC_GAMER = "classic_gamer"

    @classmethod
    def parse(cls, value: str | None) -> Theme:
        """Return the matching theme, or the default for unknown input."""
        try:
            return cls(value)
        except ValueError:
            return DEFAULT_THEME


DEFAULT_THEME = Theme.DARK_HIGH_CONTRAST


@dataclass(frozen=True)
class ThemePalette:
    bg: str
    bg_dark: str
    card: str
    card_edge: str
    panel: str
    panel_edge: str
    glow: str
    title_text: str
    text: str
    meta_text: str
    accent_text: str


@dataclass(frozen=True)
class TierStyle:
    color: str
    edge: str


_PALETTES: dict[Theme, ThemePalette] = {
    Theme.DARK_HIGH_CONTRAST: ThemePalette(
        bg="#0d1117",
        bg_dark="#010409",
        card="#161b22",
        card_edge="#30363d",
        panel="#21262d",
        panel_edge="#484f58",
        glow="#00d4ff",
        title_text="#e6edf3",
        text="#c9d1d9",
        meta_text="#8b949e",
        accent_text="#79c0ff",
    ),
    Theme.CLASSIC_GAMER: ThemePalette(
        bg="#081018",
        bg_dark="#04080c",
        card="#0f1a24",
        card_edge="#203040",
        panel="#0b151b",
        panel_edge="#304050",
        glow="#00d4ff",
        title_text="#e6eef8",
        text="#e6eef8",
        meta_text="#9fb4c8",
        accent_text="#ffd166",
    ),
}

_TIER_STYLES: dict[Tier, TierStyle] = {
    Tier.MYTHIC: TierStyle(color="#FF6347", edge="#CC3311"),
    Tier.LEGENDARY: TierStyle(color="#FFD700", edge="#C4A000"),
    Tier.GOLD: TierStyle(color="#FFC72C", edge="#D4A017"),
    Tier.SILVER: TierStyle(color="#C0C0C0", edge="#999999"),
    Tier.IRON: TierStyle(color="#95A5A6", edge="#6C7A89"),
}

DEFAULT_TIER_STYLE = TierStyle(color="#FFFFFF", edge="#CCCCCC")


def resolve_palette(theme_id: str | None) -> ThemePalette:
    return _PALETTES[Theme.parse(theme_id)]


def resolve_tier_style(tier: str | None) -> TierStyle:
    try:
        return _TIER_STYLES[Tier(tier)]
    except ValueError:
        return DEFAULT_TIER_STYLE
