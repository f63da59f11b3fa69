"""Premium layout family.

Every slide gets a thin left sidebar in the rotating accent, a small category
tag and an uppercase headline. Side panels quote a truncated excerpt of the
speaker notes; the notes themselves are attached to the slide untouched by
the packager.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from ..models import ComparisonSlide, CtaSlide, ListSlide, Slide, StorySlide, TimelineSlide
from ..ops import CANVAS_HEIGHT, CANVAS_WIDTH, Ellipse, Rect, RenderOp, TextRun, runs_box, text_box
from .base import LayoutStrategy, split_title, truncate_notes

HEADLINE_FONT = "Arial Black"
BODY_FONT = "Arial"

MAX_LIST_STEPS = 4
MAX_TIMELINE_STEPS = 5

INSIGHT_CHARS = 100
TAKEAWAY_CHARS = 150
TIMELINE_QUOTE_CHARS = 120
CTA_NOTE_CHARS = 110

SIDEBAR_W = 0.08


class PremiumLayout(LayoutStrategy):
    family = "premium"

    @property
    def accent_rotation(self) -> Tuple[str, ...]:
        t = self.theme
        return (t.primary, t.secondary, t.contrast, t.accent)

    def background_tones(self) -> Tuple[str, str]:
        # Always dark: the palette's white text is fixed.
        return self.theme.background_dark, self.theme.background_alt

    def handlers(self) -> Dict[str, Callable[[Slide, int], List[RenderOp]]]:
        return {
            "statement": self.statement,
            "story": self.story,
            "list": self.list_items,
            "comparison": self.comparison,
            "timeline": self.timeline,
            "cta": self.cta,
        }

    def layout(self, slide: Slide, index: int):
        render = super().layout(slide, index)
        sidebar = Rect(x=0, y=0, w=SIDEBAR_W, h=CANVAS_HEIGHT, fill=self.accent(index))
        return render.with_ops((sidebar, *render.ops))

    def _tag(self, text: str, index: int, *, x: float = 0.8, y: float = 0.5) -> RenderOp:
        return text_box(x, y, 8, 0.3, text, font_size=11, color=self.accent(index), font_face=BODY_FONT)

    def _two_tone(
        self,
        title: str,
        first_color: str,
        second_color: str,
        *,
        x: float,
        y: float,
        w: float,
        h: float,
        size: float,
        stacked: bool = True,
    ) -> RenderOp:
        first, second = split_title(title)
        first_run = TextRun(first.upper(), color=first_color)
        if not second:
            return runs_box(x, y, w, h, (first_run,), font_size=size, font_face=HEADLINE_FONT, bold=True)
        second_run = TextRun(second.upper(), color=second_color)
        if stacked:
            return runs_box(x, y, w, h, (first_run,), (second_run,), font_size=size, font_face=HEADLINE_FONT, bold=True)
        first_run = TextRun(first.upper() + " ", color=first_color)
        return runs_box(x, y, w, h, (first_run, second_run), font_size=size, font_face=HEADLINE_FONT, bold=True)

    def _quote_panel(self, text: str, *, x: float, y: float, w: float, h: float, size: float = 16) -> List[RenderOp]:
        t = self.theme
        return [
            Rect(x=x, y=y, w=w, h=h, fill=t.surface, line_color=t.highlight, line_width=2),
            text_box(
                x + 0.2, y + 0.2, w - 0.4, h - 0.4, f"“{text}”",
                font_size=size, color=t.text_light, font_face=BODY_FONT, italic=True,
            ),
        ]

    def statement(self, slide: Slide, index: int) -> List[RenderOp]:
        t = self.theme
        accent = self.accent(index)
        ops: List[RenderOp] = [
            self._tag(slide.kind.upper(), index),
            self._two_tone(slide.title, t.text_light, accent, x=0.8, y=0.85, w=8, h=1.2, size=38),
        ]

        subtitle = getattr(slide, "subtitle", "")
        if subtitle:
            ops.extend(self._quote_panel(subtitle, x=0.8, y=2.2, w=5, h=2.3))

        ops.append(
            text_box(6.2, 2.2, 3, 0.3, self.label("insight"), font_size=11, color=self.secondary_accent(index), font_face=BODY_FONT)
        )
        ops.append(
            text_box(
                6.2, 2.6, 3, 1,
                truncate_notes(slide.speaker_notes, INSIGHT_CHARS, self.label("insight_fallback")),
                font_size=14, color=t.text_subtle, font_face=BODY_FONT,
            )
        )
        ops.append(Rect(x=6.2, y=3.8, w=3, h=0.9, fill=t.background_dark, line_color=t.border, line_width=1))
        ops.append(text_box(6.4, 3.9, 2.6, 0.3, self.label("aha"), font_size=11, color=t.secondary, font_face=BODY_FONT, bold=True))
        ops.append(text_box(6.4, 4.2, 2.6, 0.4, self.label("aha_prompt"), font_size=12, color=t.text_muted, font_face=BODY_FONT))
        ops.append(Rect(x=8.5, y=4.9, w=1.0, h=0.08, fill=t.secondary))
        ops.append(Rect(x=8.7, y=5.05, w=0.8, h=0.08, fill=t.accent))
        return ops

    def story(self, slide: StorySlide, index: int) -> List[RenderOp]:
        t = self.theme
        accent = self.accent(index)
        ops: List[RenderOp] = [
            self._tag(self.label("story"), index, y=0.4),
            text_box(0.8, 0.75, 9, 0.6, slide.title.upper(), font_size=34, color=t.secondary, font_face=HEADLINE_FONT, bold=True),
            Rect(x=0.4, y=1.5, w=5.8, h=3.8, fill=t.surface),
            text_box(0.55, 1.45, 0.8, 0.8, "“", font_size=60, color=accent, font_face=HEADLINE_FONT, bold=True),
            text_box(
                0.6, 2.1, 5.4, 2.5, slide.quote or slide.title,
                font_size=16, color=t.text_light, font_face=BODY_FONT, italic=True,
            ),
        ]
        if slide.attribution:
            ops.append(text_box(0.6, 4.8, 5.4, 0.3, f"— {slide.attribution}", font_size=11, color=t.text_muted, font_face=BODY_FONT))

        ops.append(Rect(x=6.5, y=1.5, w=3.2, h=2.5, fill=t.background_dark, line_color=accent, line_width=2))
        ops.append(text_box(6.7, 1.65, 2.8, 0.3, self.label("takeaway"), font_size=11, color=accent, font_face=BODY_FONT))
        ops.append(
            text_box(
                6.7, 2.05, 2.8, 1.8,
                truncate_notes(slide.speaker_notes, TAKEAWAY_CHARS, self.label("takeaway_fallback")),
                font_size=13, color=t.text_subtle, font_face=BODY_FONT,
            )
        )
        ops.append(Rect(x=6.5, y=4.2, w=3.2, h=0.8, fill=t.background_dark, line_color=t.highlight, line_width=2, dashed=True))
        ops.append(
            text_box(
                6.5, 4.35, 3.2, 0.5, self.label("resonate"),
                font_size=12, color=t.highlight, font_face=BODY_FONT, align="center",
            )
        )
        return ops

    def list_items(self, slide: ListSlide, index: int) -> List[RenderOp]:
        t = self.theme
        ops: List[RenderOp] = [
            self._tag(self.label("key_points"), index, y=0.35),
            self._two_tone(slide.title, t.text_light, t.primary, x=0.8, y=0.65, w=9, h=0.55, size=36, stacked=False),
        ]

        step_w, step_gap, step_h, step_y = 2.15, 0.2, 3.5, 1.4
        colors = (t.primary, t.secondary, t.accent, t.contrast)
        for i, item in enumerate(slide.items[:MAX_LIST_STEPS]):
            x = 0.5 + i * (step_w + step_gap)
            ops.append(Rect(x=x, y=step_y, w=step_w, h=step_h, fill=t.surface))
            ops.append(Rect(x=x, y=step_y, w=step_w, h=0.04, fill=colors[i]))
            ops.append(text_box(x + 0.15, step_y + 0.2, 1.8, 0.6, f"{i + 1:02d}", font_size=38, color=colors[i], font_face=HEADLINE_FONT))
            ops.append(
                text_box(
                    x + 0.15, step_y + 0.85, 1.85, 0.4, self.label("step", n=i + 1).upper(),
                    font_size=13, color=t.text_light, font_face=BODY_FONT, bold=True,
                )
            )
            ops.append(text_box(x + 0.15, step_y + 1.3, 1.85, 2, item, font_size=11, color=t.text_muted, font_face=BODY_FONT))
        return ops

    def comparison(self, slide: ComparisonSlide, index: int) -> List[RenderOp]:
        t = self.theme
        bg = self.background(index).color
        ops: List[RenderOp] = [
            Rect(x=0, y=0, w=CANVAS_WIDTH, h=0.06, fill=t.accent),
            Rect(x=0, y=CANVAS_HEIGHT - 0.06, w=CANVAS_WIDTH, h=0.06, fill=t.accent),
            # Center-focused slide: mask the sidebar between the stripes.
            Rect(x=0, y=0.06, w=SIDEBAR_W, h=CANVAS_HEIGHT - 0.12, fill=bg),
            text_box(0, 0.45, CANVAS_WIDTH, 0.6, slide.title.upper(), font_size=36, color=t.primary, font_face=HEADLINE_FONT, bold=True, align="center"),
        ]

        top = 1.3
        if slide.subtitle:
            ops.append(Rect(x=1.5, y=1.2, w=7, h=1.1, fill=t.surface, line_color=t.highlight, line_width=3))
            ops.append(
                text_box(
                    1.7, 1.25, 6.6, 1.0, f"“{slide.subtitle}”",
                    font_size=20, color=t.text_light, font_face=BODY_FONT, bold=True, align="center", valign="middle",
                )
            )
            top = 2.5

        box_h = CANVAS_HEIGHT - 0.3 - top
        columns = (
            (slide.left, 0.6, t.primary, "70%+", self.label("before")),
            (slide.right, 5.2, t.contrast, "0%", self.label("after")),
        )
        for column, x, color, statistic, default_title in columns:
            title = column.title if column and column.title else default_title
            items = column.items if column else ()
            ops.append(Rect(x=x, y=top, w=4.2, h=box_h, fill=t.surface))
            ops.append(Rect(x=x, y=top, w=4.2, h=0.04, fill=color))
            ops.append(text_box(x + 2.6, top + 0.1, 1.5, 0.6, statistic, font_size=28, color=color, font_face=HEADLINE_FONT, align="right"))
            ops.append(text_box(x + 0.2, top + 0.15, 2.5, 0.5, title.upper(), font_size=14, color=color, font_face=BODY_FONT, bold=True))
            if items:
                ops.append(
                    runs_box(
                        x + 0.2, top + 0.75, 3.8, box_h - 0.9,
                        *[(TextRun("• ", color=color), TextRun(item)) for item in items],
                        font_size=12, color=t.text_subtle, font_face=BODY_FONT,
                    )
                )
        ops.append(Rect(x=4.99, y=top + 0.2, w=0.02, h=box_h - 0.4, fill=t.border))
        return ops

    def timeline(self, slide: TimelineSlide, index: int) -> List[RenderOp]:
        t = self.theme
        bg = self.background(index).color
        ops: List[RenderOp] = [
            Rect(x=0, y=0, w=CANVAS_WIDTH, h=0.08, fill=t.primary),
            Rect(x=0, y=0.08, w=SIDEBAR_W, h=CANVAS_HEIGHT - 0.08, fill=bg),
            text_box(0, 0.4, CANVAS_WIDTH, 0.7, slide.title.upper(), font_size=40, color=t.primary, font_face=HEADLINE_FONT, bold=True, align="center"),
        ]
        if slide.subtitle:
            ops.append(text_box(0, 1.1, CANVAS_WIDTH, 0.4, slide.subtitle, font_size=18, color=t.accent, font_face=BODY_FONT, align="center"))

        quote = truncate_notes(slide.speaker_notes, TIMELINE_QUOTE_CHARS, self.label("quote_fallback"))
        ops.extend(self._quote_panel(quote, x=1.2, y=1.6, w=7.6, h=0.9, size=14))

        steps = slide.steps[:MAX_TIMELINE_STEPS]
        if not steps:
            return ops

        step_w = 8.5 / len(steps)
        start_x = 0.75
        marker = 0.6
        marker_y = 2.85
        if len(steps) > 1:
            ops.append(
                Rect(
                    x=start_x + step_w / 2, y=marker_y + marker / 2 - 0.02,
                    w=step_w * (len(steps) - 1), h=0.04, fill=t.border,
                )
            )
        for i, step in enumerate(steps):
            color = self.accent(index + i)
            x = start_x + i * step_w
            cx = x + step_w / 2 - marker / 2
            ops.append(Ellipse(x=cx, y=marker_y, w=marker, h=marker, fill=color))
            ops.append(
                text_box(
                    cx, marker_y, marker, marker, f"{i + 1:02d}",
                    font_size=14, color=t.text_light, font_face=HEADLINE_FONT, align="center", valign="middle",
                )
            )
            ops.append(
                text_box(
                    x + 0.05, 3.6, step_w - 0.1, 0.5, step.title.upper(),
                    font_size=12, color=color, font_face=BODY_FONT, bold=True, align="center",
                )
            )
            if step.description:
                ops.append(
                    text_box(
                        x + 0.05, 4.1, step_w - 0.1, 1.1, step.description,
                        font_size=10, color=t.text_muted, font_face=BODY_FONT, align="center",
                    )
                )
        return ops

    def cta(self, slide: CtaSlide, index: int) -> List[RenderOp]:
        t = self.theme
        accent = self.accent(index)
        secondary = self.secondary_accent(index)
        ops: List[RenderOp] = [
            Rect(x=CANVAS_WIDTH - SIDEBAR_W, y=0, w=SIDEBAR_W, h=CANVAS_HEIGHT, fill=secondary),
            self._two_tone(slide.title, accent, t.text_light, x=0.5, y=0.4, w=9, h=1.2, size=38),
            text_box(0.5, 1.75, 4.5, 0.3, self.label("next_step"), font_size=11, color=secondary, font_face=BODY_FONT),
        ]
        if slide.subtitle:
            ops.extend(self._quote_panel(slide.subtitle, x=0.5, y=2.15, w=4.5, h=2.0, size=18))

        ops.append(Rect(x=5.3, y=2.15, w=4.2, h=2.0, fill=t.surface))
        ops.append(Rect(x=5.3, y=2.15, w=0.03, h=2.0, fill=secondary))
        ops.append(
            text_box(
                5.5, 2.3, 3.8, 1.7,
                truncate_notes(slide.speaker_notes, CTA_NOTE_CHARS, self.label("cta_fallback")),
                font_size=14, color=t.text_subtle, font_face=BODY_FONT,
            )
        )

        ops.append(Rect(x=3.5, y=4.45, w=3, h=0.6, fill=accent, rounded=True))
        ops.append(
            text_box(
                3.5, 4.45, 3, 0.6, self.label("take_action").upper(),
                font_size=16, color=t.text_light, font_face=HEADLINE_FONT, align="center", valign="middle",
            )
        )

        for x, color in ((1.0, t.primary), (3.7, t.secondary), (6.5, t.contrast)):
            ops.append(Rect(x=x, y=5.35, w=2.5, h=0.03, fill=color))
        return ops
