"""Layout families that turn typed slides into draw ops."""

from __future__ import annotations

from typing import Type

from ..models import StyleConfig
from ..themes import Theme, is_premium
from .base import LayoutStrategy, split_title, truncate_notes
from .premium import PremiumLayout
from .standard import StandardLayout

__all__ = [
    "LayoutStrategy",
    "PremiumLayout",
    "StandardLayout",
    "build_layout",
    "select_layout",
    "split_title",
    "truncate_notes",
]


def select_layout(theme_key: str) -> Type[LayoutStrategy]:
    """Premium theme keys get the premium family; everything else is standard."""
    if is_premium(theme_key):
        return PremiumLayout
    return StandardLayout


def build_layout(style: StyleConfig, theme: Theme) -> LayoutStrategy:
    return select_layout(style.theme_key)(theme, style)
