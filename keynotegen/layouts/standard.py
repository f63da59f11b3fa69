"""Standard layout family: one accent color, theme fonts, centered compositions."""

from __future__ import annotations

from typing import Callable, Dict, List

from ..models import ComparisonSlide, CtaSlide, ListSlide, Slide, StorySlide, TimelineSlide
from ..ops import CANVAS_HEIGHT, Ellipse, Rect, RenderOp, bullet_box, text_box
from ..themes import FONT_FAMILIES, Theme
from .base import LIGHT_MUTED, LIGHT_TEXT, LayoutStrategy

MAX_TIMELINE_STEPS = 5


class StandardLayout(LayoutStrategy):
    family = "standard"

    def __init__(self, theme: Theme, style):
        super().__init__(theme, style)
        self.fonts = FONT_FAMILIES.get(style.font_family, FONT_FAMILIES["modern"])
        light = style.background_mode == "light"
        self.text_color = LIGHT_TEXT if light else theme.text_light
        self.muted_color = LIGHT_MUTED if light else theme.text_muted

    def handlers(self) -> Dict[str, Callable[[Slide, int], List[RenderOp]]]:
        return {
            "statement": self.statement,
            "story": self.story,
            "list": self.list_items,
            "comparison": self.comparison,
            "timeline": self.timeline,
            "cta": self.cta,
        }

    def _type_tag(self, slide: Slide, index: int) -> RenderOp:
        return text_box(
            0.5, 0.3, 2, 0.3, slide.kind.upper(),
            font_size=10, color=self.accent(index), font_face=self.fonts.body, bold=True,
        )

    def _heading(self, title: str, *, align: str = "left") -> RenderOp:
        return text_box(
            0.5, 0.8, 9, 0.8, title,
            font_size=36, color=self.theme.primary, font_face=self.fonts.title, bold=True, align=align,
        )

    def statement(self, slide: Slide, index: int) -> List[RenderOp]:
        ops: List[RenderOp] = [
            self._type_tag(slide, index),
            text_box(
                0.5, 2, 9, 1.5, slide.title,
                font_size=48, color=self.theme.primary, font_face=self.fonts.title,
                bold=True, align="center", valign="middle",
            ),
        ]
        subtitle = getattr(slide, "subtitle", "")
        if subtitle:
            ops.append(
                text_box(
                    0.5, 3.5, 9, 0.8, subtitle,
                    font_size=24, color=self.muted_color, font_face=self.fonts.body, align="center",
                )
            )
        return ops

    def story(self, slide: StorySlide, index: int) -> List[RenderOp]:
        ops: List[RenderOp] = [
            self._type_tag(slide, index),
            text_box(
                0.5, 1.2, 1, 1, "“",
                font_size=72, color=self.accent(index), font_face=self.fonts.title, bold=True,
            ),
            text_box(
                1, 1.8, 8, 2, slide.quote or slide.title,
                font_size=28, color=self.text_color, font_face=self.fonts.body,
                italic=True, align="center", valign="middle",
            ),
        ]
        if slide.attribution:
            ops.append(
                text_box(
                    1, 4, 8, 0.5, slide.attribution,
                    font_size=18, color=self.theme.secondary, font_face=self.fonts.body, align="center",
                )
            )
        return ops

    def list_items(self, slide: ListSlide, index: int) -> List[RenderOp]:
        ops: List[RenderOp] = [self._type_tag(slide, index), self._heading(slide.title)]
        if slide.items:
            ops.append(
                bullet_box(
                    0.8, 1.8, 8.4, 3.5, slide.items,
                    bullet_color=self.accent(index), space_after=12,
                    font_size=20, color=self.text_color, font_face=self.fonts.body,
                )
            )
        return ops

    def comparison(self, slide: ComparisonSlide, index: int) -> List[RenderOp]:
        ops: List[RenderOp] = [self._type_tag(slide, index), self._heading(slide.title, align="center")]
        columns = (
            (slide.left, 0.5, self.theme.secondary, self.label("before")),
            (slide.right, 5.25, self.theme.contrast, self.label("after")),
        )
        for column, x, color, default_title in columns:
            title = column.title if column and column.title else default_title
            ops.append(
                text_box(
                    x, 1.8, 4.25, 0.5, title,
                    font_size=24, color=color, font_face=self.fonts.title, bold=True,
                )
            )
            if column and column.items:
                ops.append(
                    bullet_box(
                        x, 2.4, 4.25, 2.5, column.items,
                        bullet_color=color, space_after=8,
                        font_size=16, color=self.text_color, font_face=self.fonts.body,
                    )
                )
        ops.append(Rect(x=4.875, y=1.8, w=0.02, h=3, fill=self.muted_color))
        return ops

    def timeline(self, slide: TimelineSlide, index: int) -> List[RenderOp]:
        ops: List[RenderOp] = [self._type_tag(slide, index), self._heading(slide.title, align="center")]
        steps = slide.steps[:MAX_TIMELINE_STEPS]
        if not steps:
            return ops

        accent = self.accent(index)
        step_w = 8.5 / len(steps)
        start_x = 0.75
        marker = 0.7
        marker_y = 2.1
        if len(steps) > 1:
            ops.append(
                Rect(
                    x=start_x + step_w / 2, y=marker_y + marker / 2 - 0.025,
                    w=step_w * (len(steps) - 1), h=0.05, fill=accent,
                )
            )

        for i, step in enumerate(steps):
            x = start_x + i * step_w
            cx = x + step_w / 2 - marker / 2
            ops.append(Ellipse(x=cx, y=marker_y, w=marker, h=marker, fill=accent))
            ops.append(
                text_box(
                    cx, marker_y, marker, marker, str(i + 1),
                    font_size=20, color="FFFFFF", font_face=self.fonts.title,
                    bold=True, align="center", valign="middle",
                )
            )
            ops.append(
                text_box(
                    x, 3, step_w, 0.6, step.title,
                    font_size=14, color=self.text_color, font_face=self.fonts.title, bold=True, align="center",
                )
            )
            if step.description:
                ops.append(
                    text_box(
                        x, 3.6, step_w, 1, step.description,
                        font_size=11, color=self.muted_color, font_face=self.fonts.body, align="center",
                    )
                )
        return ops

    def cta(self, slide: CtaSlide, index: int) -> List[RenderOp]:
        accent = self.accent(index)
        ops: List[RenderOp] = [
            Rect(x=9.92, y=0, w=0.08, h=CANVAS_HEIGHT, fill=self.theme.secondary),
            self._type_tag(slide, index),
            text_box(
                0.5, 1.5, 9, 1.2, slide.title,
                font_size=48, color=self.theme.primary, font_face=self.fonts.title,
                bold=True, align="center", valign="middle",
            ),
        ]
        if slide.subtitle:
            ops.append(
                text_box(
                    0.5, 2.8, 9, 0.8, slide.subtitle,
                    font_size=24, color=self.text_color, font_face=self.fonts.body, align="center",
                )
            )
        ops.append(Rect(x=3.5, y=3.8, w=3, h=0.7, fill=accent, rounded=True))
        ops.append(
            text_box(
                3.5, 3.8, 3, 0.7, self.label("take_action"),
                font_size=18, color="FFFFFF", font_face=self.fonts.title,
                bold=True, align="center", valign="middle",
            )
        )
        return ops
