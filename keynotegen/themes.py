"""Theme registry: named palettes, font families and the custom palette mapping."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_THEME_KEY = "doings"
CUSTOM_THEME_KEY = "custom"
PREMIUM_THEME_KEYS = frozenset({"doings_pro"})

CUSTOM_COLOR_KEYS = ("color1", "color2", "color3", "color4", "color5")

_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{6})")


@dataclass(frozen=True)
class Theme:
    """Semantic colors for one deck, all as ``RRGGBB`` strings without ``#``."""

    name: str
    background_dark: str
    background_alt: str
    primary: str
    secondary: str
    accent: str
    contrast: str
    text_light: str
    text_muted: str
    # Surfaces used by boxed layouts.
    surface: str = "1B2838"
    highlight: str = "F5B8C8"
    text_subtle: str = "D4E0EC"
    border: str = "3D4F5F"


@dataclass(frozen=True)
class FontPair:
    title: str
    body: str


FONT_FAMILIES: Mapping[str, FontPair] = MappingProxyType(
    {
        "modern": FontPair(title="Arial", body="Arial"),
        "classic": FontPair(title="Georgia", body="Georgia"),
        "tech": FontPair(title="Consolas", body="Consolas"),
    }
)

THEMES: Mapping[str, Theme] = MappingProxyType(
    {
        "doings": Theme(
            name="Doings",
            background_dark="0D0D14",
            background_alt="1A1A2E",
            primary="E85A9C",
            secondary="F5A68C",
            accent="C9A227",
            contrast="4A7C7C",
            text_light="FFFFFF",
            text_muted="A0A0B0",
        ),
        "corporate": Theme(
            name="Corporate",
            background_dark="1A1A2E",
            background_alt="2D3748",
            primary="3182CE",
            secondary="63B3ED",
            accent="F6AD55",
            contrast="48BB78",
            text_light="FFFFFF",
            text_muted="A0AEC0",
            surface="2D3748",
            highlight="90CDF4",
            text_subtle="E2E8F0",
            border="4A5568",
        ),
        "bold": Theme(
            name="Bold",
            background_dark="000000",
            background_alt="1A1A1A",
            primary="FF6B6B",
            secondary="FECA57",
            accent="48DBFB",
            contrast="1DD1A1",
            text_light="FFFFFF",
            text_muted="888888",
            surface="222222",
            highlight="FF9F9F",
            text_subtle="DDDDDD",
            border="444444",
        ),
        "doings_pro": Theme(
            name="Doings Pro",
            background_dark="0A0A14",
            background_alt="0D1B2A",
            primary="E85A9C",
            secondary="C9A227",
            accent="F5A68C",
            contrast="4A7C7C",
            text_light="FFFFFF",
            text_muted="9FAFBF",
            surface="1B2838",
            highlight="F5B8C8",
            text_subtle="D4E0EC",
            border="3D4F5F",
        ),
    }
)

DEFAULT_CUSTOM_COLORS = ("E85A9C", "F5A68C", "0D0D14", "1A1A2E", "FFFFFF")


def theme_keys() -> list[str]:
    """All accepted theme keys, including ``custom``."""
    return sorted([*THEMES.keys(), CUSTOM_THEME_KEY])


def is_known_theme(theme_key: str) -> bool:
    return theme_key in THEMES or theme_key == CUSTOM_THEME_KEY


def normalize_hex(value: Any) -> Optional[str]:
    """Return ``RRGGBB`` in upper case, or None when ``value`` is not a hex triplet."""
    if not isinstance(value, str):
        return None
    match = _HEX_RE.fullmatch(value.strip())
    if not match:
        return None
    return match.group(1).upper()


def blend(color_a: str, color_b: str, t: float) -> str:
    """Linear mix of two hex colors; ``t=0`` is ``color_a``."""
    a = [int(color_a[i : i + 2], 16) for i in (0, 2, 4)]
    b = [int(color_b[i : i + 2], 16) for i in (0, 2, 4)]
    mixed = [round(ca + (cb - ca) * t) for ca, cb in zip(a, b)]
    return "".join(f"{max(0, min(255, c)):02X}" for c in mixed)


def lookup_theme(theme_key: str, *, fallback: Optional[str] = DEFAULT_THEME_KEY) -> Theme:
    """Return the registry theme for ``theme_key``.

    Unknown keys resolve to ``fallback`` (most likely a stale client). With
    ``fallback=None`` an unknown key is an input error.
    """
    theme = THEMES.get(theme_key)
    if theme is not None:
        return theme
    if fallback is None or fallback not in THEMES:
        raise InvalidInputError([f"style.themeKey '{theme_key}' is not a known theme"])
    logger.warning("Unknown theme %r, falling back to %r", theme_key, fallback)
    return THEMES[fallback]


def custom_theme(colors: Sequence[str]) -> Theme:
    """Map exactly five user colors onto the semantic slots.

    color1 -> primary (and accent), color2 -> secondary (and contrast),
    color3 -> background_dark, color4 -> background_alt, color5 -> text.
    """
    if len(colors) != len(CUSTOM_COLOR_KEYS):
        raise ValueError(f"custom palettes need exactly {len(CUSTOM_COLOR_KEYS)} colors, got {len(colors)}")
    normalized = []
    for value in colors:
        color = normalize_hex(value)
        if color is None:
            raise ValueError(f"invalid custom color: {value!r}")
        normalized.append(color)

    primary, secondary, bg_dark, bg_alt, text = normalized
    return Theme(
        name="Custom",
        background_dark=bg_dark,
        background_alt=bg_alt,
        primary=primary,
        secondary=secondary,
        accent=primary,
        contrast=secondary,
        text_light=text,
        text_muted=blend(text, bg_dark, 0.4),
        surface=blend(bg_alt, text, 0.08),
        highlight=secondary,
        text_subtle=blend(text, bg_dark, 0.2),
        border=blend(bg_alt, text, 0.25),
    )


def resolve_effective_theme(style, *, fallback: Optional[str] = DEFAULT_THEME_KEY) -> Theme:
    """Theme for a StyleConfig: custom colors when the key is ``custom``, else the registry entry."""
    if style.theme_key == CUSTOM_THEME_KEY:
        return custom_theme(style.custom_colors or DEFAULT_CUSTOM_COLORS)
    return lookup_theme(style.theme_key, fallback=fallback)


def is_premium(theme_key: str) -> bool:
    return theme_key in PREMIUM_THEME_KEYS
