"""Shared layout machinery: strategy base class and index-driven color rules."""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Tuple

from ..labels import label
from ..models import Slide, StyleConfig
from ..ops import CANVAS_HEIGHT, CANVAS_WIDTH, Background, Ellipse, Rect, RenderOp, SlideRender
from ..themes import Theme

LIGHT_TONES = ("FFFFFF", "F4F4F8")
LIGHT_TEXT = "1A1A2E"
LIGHT_MUTED = "666666"


def split_title(title: str) -> Tuple[str, str]:
    """Split a title into its first ``ceil(n/2)`` words and the rest."""
    words = title.split()
    if len(words) <= 1:
        return title.strip(), ""
    midpoint = math.ceil(len(words) / 2)
    return " ".join(words[:midpoint]), " ".join(words[midpoint:])


def truncate_notes(notes: str, limit: int, fallback: str = "") -> str:
    """Cosmetic excerpt of speaker notes for side panels, ellipsized past ``limit``."""
    text = " ".join((notes or "").split())
    if not text:
        return fallback
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "…"


class LayoutStrategy:
    """One layout family: maps ``(slide, index)`` to a :class:`SlideRender`.

    ``index`` is the slide's absolute position in the deck; accent rotation
    and background alternation are pure functions of it.
    """

    family = ""

    def __init__(self, theme: Theme, style: StyleConfig):
        self.theme = theme
        self.style = style
        self.language = style.language

    def label(self, key: str, **params: object) -> str:
        return label(key, self.language, **params)

    @property
    def accent_rotation(self) -> Tuple[str, ...]:
        return (self.theme.accent,)

    def accent(self, index: int) -> str:
        rotation = self.accent_rotation
        return rotation[index % len(rotation)]

    def secondary_accent(self, index: int) -> str:
        return self.accent(index + 1)

    def background_tones(self) -> Tuple[str, str]:
        if self.style.background_mode == "light":
            return LIGHT_TONES
        return self.theme.background_dark, self.theme.background_alt

    def background(self, index: int) -> Background:
        tones = self.background_tones()
        color = tones[index % 2]
        if self.style.background_mode == "gradient":
            return Background(color=color, gradient_to=tones[(index + 1) % 2])
        return Background(color=color)

    def handlers(self) -> Dict[str, Callable[[Slide, int], List[RenderOp]]]:
        raise NotImplementedError

    def decoration(self, index: int) -> List[RenderOp]:
        decoration = self.style.background_decoration
        accent = self.accent(index)
        if decoration == "glow":
            return [Ellipse(x=6.2, y=-1.6, w=5.2, h=5.2, fill=accent, transparency=0.88)]
        if decoration == "lines":
            spacing = CANVAS_HEIGHT / 8
            return [
                Rect(x=0, y=spacing * i, w=CANVAS_WIDTH, h=0.01, fill=accent, transparency=0.85)
                for i in range(1, 8)
            ]
        return []

    def layout(self, slide: Slide, index: int) -> SlideRender:
        handler = self.handlers().get(slide.kind, self.handlers()["statement"])
        ops = [*self.decoration(index), *handler(slide, index)]
        return SlideRender(
            background=self.background(index),
            ops=tuple(ops),
            notes=slide.speaker_notes,
            accent=self.accent(index),
        )
