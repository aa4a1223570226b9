"""SVG trophy card renderer."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.console import Console

from .models import Grade, ProfileStats, Tier
from .themes import DEFAULT_THEME, resolve_palette, resolve_tier_style

PADDING = 24
MAIN_CARD_W = 600
MAIN_CARD_H = 200
TROPHY_SIZE = 140
BADGE_W = 160
BADGE_H = 72
BADGE_GAP = 20
XP_BAR_W = 280

DEFAULT_COLUMNS = 3
MAX_COLUMNS = 4

FONT = "Segoe UI, Roboto, Arial, sans-serif"

_XML_ESCAPES = str.maketrans({
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#39;",
})


def escape_xml(value: Any) -> str:
    return str(value).translate(_XML_ESCAPES)


def parse_columns(value: Any) -> int:
    """Strict parse for caller input: an integer 1-4, otherwise 3."""
    try:
        columns = int(str(value).strip())
    except (TypeError, ValueError):
        return DEFAULT_COLUMNS
    if 1 <= columns <= MAX_COLUMNS:
        return columns
    return DEFAULT_COLUMNS


def clamp_columns(value: Any) -> int:
    """Lenient clamp used at render time, so ``5`` becomes ``4``."""
    try:
        columns = int(value)
    except (TypeError, ValueError):
        return DEFAULT_COLUMNS
    if columns == 0:
        return DEFAULT_COLUMNS
    return min(max(1, columns), MAX_COLUMNS)


@dataclass(frozen=True)
class BadgePosition:
    x: int
    y: int
    row: int
    column: int


@dataclass(frozen=True)
class TrophyLayout:
    columns: int
    rows: int
    width: int
    height: int
    center_x: int
    main_card_x: int
    badge_grid_y: int
    badges: tuple[BadgePosition, ...]


def _row_width(count: int) -> int:
    return count * BADGE_W + (count - 1) * BADGE_GAP


def compute_layout(columns: Any, badge_count: int = 3) -> TrophyLayout:
    """Compute canvas size and badge positions.

    Each badge row is centred on its own width, so a short last row is not
    stretched to match the rows above it.
    """
    columns = clamp_columns(columns)
    rows = math.ceil(badge_count / columns)
    grid_width = _row_width(columns)
    badges_height = rows * BADGE_H + (rows - 1) * BADGE_GAP

    width = max(MAIN_CARD_W + 2 * PADDING, grid_width + 2 * PADDING)
    height = PADDING + MAIN_CARD_H + PADDING + badges_height + PADDING
    center_x = width // 2
    badge_grid_y = PADDING + MAIN_CARD_H + PADDING

    positions = []
    for i in range(badge_count):
        row, column = divmod(i, columns)
        in_row = min(columns, badge_count - row * columns)
        start_x = center_x - _row_width(in_row) // 2
        positions.append(BadgePosition(
            x=start_x + column * (BADGE_W + BADGE_GAP),
            y=badge_grid_y + row * (BADGE_H + BADGE_GAP),
            row=row,
            column=column,
        ))

    return TrophyLayout(
        columns=columns,
        rows=rows,
        width=width,
        height=height,
        center_x=center_x,
        main_card_x=center_x - MAIN_CARD_W // 2,
        badge_grid_y=badge_grid_y,
        badges=tuple(positions),
    )


def _field(stats: ProfileStats | Mapping[str, Any] | None, name: str, default: Any) -> Any:
    if stats is None:
        return default
    if isinstance(stats, Mapping):
        value = stats.get(name)
    else:
        value = getattr(stats, name, None)
    if isinstance(value, Enum):
        value = value.value
    return value or default


def _int_field(stats: ProfileStats | Mapping[str, Any] | None, name: str) -> int:
    try:
        return int(_field(stats, name, 0))
    except (TypeError, ValueError):
        return 0


def _icon_medal(fill: str) -> str:
    return f"""<svg width="56" height="56" viewBox="0 0 56 56" xmlns="http://www.w3.org/2000/svg">
      <path d="M28 10 L33.5 22 L46 22 L36.5 29 L40 42 L28 34 L16 42 L19.5 29 L10 22 L22.5 22 Z" fill="{fill}" />
    </svg>"""


def _icon_star(fill: str) -> str:
    return f"""<svg width="30" height="30" viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
      <path fill="{fill}" d="M12 .587l3.668 7.431L23.4 9.75l-5.7 5.558L19.335 24 12 20.201 4.665 24l1.635-8.692L.6 9.75l7.732-1.732z"/>
    </svg>"""


def _icon_repo(fill: str) -> str:
    return f"""<svg width="30" height="30" viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
      <path fill="{fill}" d="M21 8V7l-9-4-9 4v1l9 4 9-4zM3 10v6l9 5 9-5v-6l-9 4-9-4z"/>
    </svg>"""


def _icon_users(fill: str) -> str:
    return f"""<svg width="30" height="30" viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">
      <path fill="{fill}" d="M16 11c1.657 0 3-1.343 3-3s-1.343-3-3-3-3 1.343-3 3 1.343 3 3 3zM8 11c1.657 0 3-1.343 3-3S9.657 5 8 5 5 6.343 5 8s1.343 3 3 3zM8 13c-2.33 0-7 1.17-7 3.5V19h14v-2.5C15 14.17 10.33 13 8 13zm8 0c-.29 0-.62.02-.98.05 1.17.8 1.98 1.93 1.98 3.45V19h6v-2.5C23 14.17 18.33 13 16 13z"/>
    </svg>"""


def render_trophy(
    stats: ProfileStats | Mapping[str, Any] | None,
    theme: str | None = DEFAULT_THEME.value,
    columns: Any = DEFAULT_COLUMNS,
) -> str:
    """Render the trophy card SVG. Missing stats fields fall back to defaults."""
    username = escape_xml(_field(stats, "username", "unknown"))
    tier = str(_field(stats, "tier", Tier.IRON.value))
    grade = escape_xml(_field(stats, "grade", Grade.D.value))
    level = _int_field(stats, "level")
    score = _int_field(stats, "score")
    xp_percent = min(100, max(0, _int_field(stats, "xp_percent")))

    p = resolve_palette(theme)
    tier_style = resolve_tier_style(tier)
    layout = compute_layout(columns)

    badges = [
        ("Stars", _field(stats, "formatted_stars", "0"), _icon_star(tier_style.color)),
        ("Repositories", _field(stats, "formatted_repos", "0"), _icon_repo(tier_style.color)),
        ("Followers", _field(stats, "formatted_followers", "0"), _icon_users(tier_style.color)),
    ]

    badge_groups = ""
    for (label, value, icon), pos in zip(badges, layout.badges):
        badge_groups += f"""
  <g transform="translate({pos.x}, {pos.y})">
    <rect x="0" y="0" rx="12" width="{BADGE_W}" height="{BADGE_H}" fill="{p.card}" stroke="{p.panel_edge}" stroke-width="1.2" />
    <g transform="translate(16, 18)">
      <g transform="translate(0, 0)">{icon}</g>
      <text x="46" y="12" font-family="{FONT}" font-size="14" fill="{p.text}" font-weight="700">{label}</text>
      <text x="46" y="34" font-family="{FONT}" font-size="16" fill="{p.accent_text}" font-weight="900">{escape_xml(value)}</text>
    </g>
  </g>"""

    xp_filled = math.floor(XP_BAR_W * xp_percent / 100 + 0.5)
    sep = " • "

    return f"""<svg width="{layout.width}" height="{layout.height}" viewBox="0 0 {layout.width} {layout.height}" xmlns="http://www.w3.org/2000/svg" role="img" aria-label="GitHub Trophy for {username}">
  <title>GitHub Trophy for {username}</title>
  <defs>
    <linearGradient id="bgGrad" x1="0" x2="0" y1="0" y2="1">
      <stop offset="0%" stop-color="{p.bg}"/>
      <stop offset="100%" stop-color="{p.bg_dark}"/>
    </linearGradient>
    <linearGradient id="xpGrad" x1="0" y1="0" x2="1" y2="0">
      <stop offset="0%" stop-color="{p.glow}"/>
      <stop offset="100%" stop-color="{tier_style.color}"/>
    </linearGradient>
    <filter id="shadow">
      <feDropShadow dx="0" dy="4" stdDeviation="6" flood-color="#000" flood-opacity="0.3"/>
    </filter>
    <style>
      .title {{ font-family: {FONT}; font-size: 22px; fill: {p.title_text}; font-weight: 800; }}
      .meta {{ font-family: {FONT}; font-size: 14px; fill: {p.meta_text}; }}
      .small {{ font-family: {FONT}; font-size: 12px; fill: {p.meta_text}; }}
    </style>
  </defs>

  <rect width="100%" height="100%" fill="url(#bgGrad)" />

  <g transform="translate({layout.main_card_x}, {PADDING})">
    <rect x="0" y="0" rx="16" width="{MAIN_CARD_W}" height="{MAIN_CARD_H}" fill="{p.card}" stroke="{p.card_edge}" stroke-width="2" filter="url(#shadow)"/>

    <g transform="translate(24, 24)">
      <rect x="0" y="0" rx="12" width="{TROPHY_SIZE}" height="{MAIN_CARD_H - 48}" fill="{p.panel}" stroke="{tier_style.edge}" stroke-width="1.5"/>
      <g transform="translate({TROPHY_SIZE // 2}, {TROPHY_SIZE // 2})">
        <circle cx="0" cy="0" r="50" fill="{tier_style.color}" stroke="#00000040" stroke-width="2" />
        <g transform="translate(-28, -28)">
          {_icon_medal(p.card)}
        </g>
        <text x="0" y="68" font-size="12" font-family="{FONT}" fill="{p.text}" text-anchor="middle" font-weight="700">TIER: {escape_xml(tier.upper())}</text>
      </g>
    </g>

    <g transform="translate({TROPHY_SIZE + 48}, 32)">
      <text class="title" x="110" y="0" text-anchor="middle">\U0001f3c6 GitHub Trophy</text>
      <text class="meta" x="0" y="32">Score: <tspan fill="{p.accent_text}" font-weight="800">{score}</tspan>{sep}Grade: <tspan fill="{tier_style.color}" font-weight="800">{grade}</tspan>{sep}Level: <tspan fill="{p.glow}" font-weight="800">{level}</tspan></text>
      <g transform="translate(0, 68)">
        <rect x="0" y="0" rx="7" width="{XP_BAR_W}" height="14" fill="#071018" stroke="{p.panel_edge}" stroke-width="1"/>
        <rect x="0" y="0" rx="7" width="{xp_filled}" height="14" fill="url(#xpGrad)"/>
        <text x="{XP_BAR_W + 12}" y="11" class="small">{xp_percent}% XP to Level {level + 1}</text>
      </g>
    </g>

    <g transform="translate({MAIN_CARD_W - 84}, 18)">
      <rect x="0" y="0" rx="8" width="60" height="40" fill="{p.panel}" stroke="{tier_style.edge}" stroke-width="1.2"/>
      <text x="30" y="26" font-size="18" text-anchor="middle" font-family="{FONT}" fill="{tier_style.color}" font-weight="900">{grade}</text>
    </g>
  </g>

  <text x="{layout.center_x}" y="{layout.badge_grid_y - 10}" text-anchor="middle" font-family="{FONT}" font-size="14" fill="{p.meta_text}" font-weight="700">ACHIEVEMENTS</text>
{badge_groups}

  <text x="{layout.center_x}" y="{layout.height - 10}" text-anchor="middle" class="small">Powered by GitHub API</text>
</svg>
"""


def render_error_card(message: str | None) -> str:
    safe = escape_xml(message or "Error")
    return f"""<svg width="400" height="60" viewBox="0 0 400 60" xmlns="http://www.w3.org/2000/svg" role="img" aria-label="Error">
  <rect width="100%" height="100%" rx="8" fill="#141924"/>
  <text x="50%" y="50%" fill="#ff5f56" font-size="14" text-anchor="middle" dominant-baseline="middle" font-family="{FONT}">Error: {safe}</text>
</svg>
"""


def write_svg(content: str, output_file: str) -> None:
    """Write an SVG document to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console(stderr=True).print(f"Saved to {output_file}")
