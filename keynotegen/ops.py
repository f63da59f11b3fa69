"""Draw primitives produced by layouts and consumed by the packager.

Positions and sizes are inches on the 10 x 5.625 in (16:9) canvas. Colors are
``RRGGBB`` strings. Ops draw in list order, so later ops sit on top.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

CANVAS_WIDTH = 10.0
CANVAS_HEIGHT = 5.625


@dataclass(frozen=True)
class TextRun:
    text: str
    color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None


@dataclass(frozen=True)
class Paragraph:
    runs: Tuple[TextRun, ...]
    space_after: Optional[float] = None  # points


@dataclass(frozen=True)
class TextBox:
    x: float
    y: float
    w: float
    h: float
    paragraphs: Tuple[Paragraph, ...]
    font_face: str = "Arial"
    font_size: float = 18
    color: str = "FFFFFF"
    bold: bool = False
    italic: bool = False
    align: str = "left"  # left | center | right
    valign: str = "top"  # top | middle | bottom

    @property
    def text(self) -> str:
        return "\n".join("".join(run.text for run in p.runs) for p in self.paragraphs)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    fill: str
    line_color: Optional[str] = None
    line_width: float = 1.0  # points
    dashed: bool = False
    transparency: float = 0.0  # 0 = opaque, 1 = invisible
    rounded: bool = False


@dataclass(frozen=True)
class Ellipse:
    x: float
    y: float
    w: float
    h: float
    fill: str
    transparency: float = 0.0


@dataclass(frozen=True)
class Picture:
    x: float
    y: float
    w: float
    h: float
    blob: bytes = field(repr=False)
    # Fractions cropped from each edge (left, top, right, bottom).
    crop: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Background:
    color: str
    gradient_to: Optional[str] = None


RenderOp = Union[TextBox, Rect, Ellipse, Picture]


@dataclass(frozen=True)
class SlideRender:
    """Everything needed to draw one slide."""

    background: Background
    ops: Tuple[RenderOp, ...]
    notes: str = ""
    # Color chosen by the accent rotation for this slide.
    accent: str = ""

    def with_ops(self, ops: Tuple[RenderOp, ...]) -> "SlideRender":
        return replace(self, ops=tuple(ops))


def text_box(
    x: float,
    y: float,
    w: float,
    h: float,
    text: str,
    **style,
) -> TextBox:
    """Single-paragraph text box; newlines become separate paragraphs."""
    paragraphs = tuple(Paragraph(runs=(TextRun(line),)) for line in text.split("\n"))
    return TextBox(x=x, y=y, w=w, h=h, paragraphs=paragraphs, **style)


def runs_box(x: float, y: float, w: float, h: float, *lines: Tuple[TextRun, ...], **style) -> TextBox:
    """Text box with one paragraph per tuple of runs."""
    return TextBox(x=x, y=y, w=w, h=h, paragraphs=tuple(Paragraph(runs=tuple(line)) for line in lines), **style)


def bullet_box(
    x: float,
    y: float,
    w: float,
    h: float,
    items: Tuple[str, ...],
    *,
    bullet_color: str,
    space_after: float = 12,
    **style,
) -> TextBox:
    paragraphs = tuple(
        Paragraph(runs=(TextRun("• ", color=bullet_color), TextRun(item)), space_after=space_after) for item in items
    )
    return TextBox(x=x, y=y, w=w, h=h, paragraphs=paragraphs, **style)
