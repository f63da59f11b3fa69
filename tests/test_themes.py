from __future__ import annotations

import pytest

from keynotegen.errors import InvalidInputError
from keynotegen.models import StyleConfig
from keynotegen.themes import (
    THEMES,
    blend,
    custom_theme,
    is_premium,
    lookup_theme,
    normalize_hex,
    resolve_effective_theme,
    theme_keys,
)


def test_registry_lists_all_theme_keys() -> None:
    assert theme_keys() == ["bold", "corporate", "custom", "doings", "doings_pro"]


def test_only_doings_pro_is_premium() -> None:
    assert is_premium("doings_pro")
    assert not any(is_premium(key) for key in ("doings", "corporate", "bold", "custom"))


def test_lookup_unknown_theme_uses_fallback(caplog) -> None:
    theme = lookup_theme("missing")
    assert theme == THEMES["doings"]
    assert "falling back" in caplog.text


def test_lookup_unknown_theme_without_fallback_raises() -> None:
    with pytest.raises(InvalidInputError):
        lookup_theme("missing", fallback=None)


@pytest.mark.parametrize(
    "value, expected",
    [("#abcdef", "ABCDEF"), ("123456", "123456"), (" #0a0B0c ", "0A0B0C"), ("#abc", None), ("zzzzzz", None), (12, None)],
)
def test_normalize_hex(value, expected) -> None:
    assert normalize_hex(value) == expected


def test_blend_endpoints() -> None:
    assert blend("000000", "FFFFFF", 0) == "000000"
    assert blend("000000", "FFFFFF", 1) == "FFFFFF"
    assert blend("000000", "FFFFFF", 0.5) == "808080"


def test_custom_palette_maps_semantic_slots() -> None:
    theme = custom_theme(["#FF0000", "00ff00", "000000", "111111", "FFFFFF"])
    assert theme.primary == "FF0000"
    assert theme.accent == "FF0000"
    assert theme.secondary == "00FF00"
    assert theme.contrast == "00FF00"
    assert theme.background_dark == "000000"
    assert theme.background_alt == "111111"
    assert theme.text_light == "FFFFFF"
    assert theme.text_muted == blend("FFFFFF", "000000", 0.4)


def test_custom_palette_rejects_wrong_count() -> None:
    with pytest.raises(ValueError):
        custom_theme(["000000"] * 4)


def test_resolve_effective_theme_for_custom_style() -> None:
    style = StyleConfig(theme_key="custom", custom_colors=("AA0000", "00AA00", "000011", "000022", "EEEEEE"))
    theme = resolve_effective_theme(style)
    assert theme.primary == "AA0000"
    assert theme.background_alt == "000022"


def test_resolve_effective_theme_for_registry_style() -> None:
    assert resolve_effective_theme(StyleConfig(theme_key="bold")) == THEMES["bold"]
