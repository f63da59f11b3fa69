from __future__ import annotations

import pytest

from keynotegen.layouts import PremiumLayout, StandardLayout, build_layout, select_layout, split_title, truncate_notes
from keynotegen.models import (
    Column,
    ComparisonSlide,
    CtaSlide,
    ListSlide,
    StatementSlide,
    StorySlide,
    TimelineSlide,
    TimelineStep,
    StyleConfig,
)
from keynotegen.ops import Ellipse, Rect, TextBox
from keynotegen.themes import THEMES


def _texts(render) -> list[str]:
    return [op.text for op in render.ops if isinstance(op, TextBox)]


def _statement(index: int = 0, **kwargs) -> StatementSlide:
    return StatementSlide(id=f"s{index}", title=kwargs.pop("title", "Bold ideas travel far"), **kwargs)


def test_select_layout_by_theme_key() -> None:
    assert select_layout("doings_pro") is PremiumLayout
    assert select_layout("doings") is StandardLayout
    assert select_layout("custom") is StandardLayout


@pytest.mark.parametrize(
    "title, expected",
    [
        ("One", ("One", "")),
        ("One two", ("One", "two")),
        ("One two three", ("One two", "three")),
        ("A B C D E", ("A B C", "D E")),
    ],
)
def test_split_title_word_halves(title, expected) -> None:
    assert split_title(title) == expected


def test_truncate_notes() -> None:
    assert truncate_notes("", 10, "fallback") == "fallback"
    assert truncate_notes("short  note", 20) == "short note"
    assert truncate_notes("x" * 30, 10) == "x" * 10 + "…"


def test_standard_background_alternates_in_dark_mode() -> None:
    theme = THEMES["doings"]
    layout = StandardLayout(theme, StyleConfig())
    colors = [layout.background(i).color for i in range(4)]
    assert colors == [theme.background_dark, theme.background_alt] * 2
    assert all(layout.background(i).gradient_to is None for i in range(4))


def test_light_mode_uses_light_tones_and_dark_text() -> None:
    layout = StandardLayout(THEMES["doings"], StyleConfig(background_mode="light"))
    assert [layout.background(i).color for i in range(2)] == ["FFFFFF", "F4F4F8"]
    render = layout.layout(StorySlide(id="s", title="T", quote="Quote"), 0)
    quote = next(op for op in render.ops if isinstance(op, TextBox) and op.text == "Quote")
    assert quote.color == "1A1A2E"


def test_gradient_mode_alternates_start_tone() -> None:
    theme = THEMES["corporate"]
    layout = StandardLayout(theme, StyleConfig(theme_key="corporate", background_mode="gradient"))
    first, second = layout.background(0), layout.background(1)
    assert (first.color, first.gradient_to) == (theme.background_dark, theme.background_alt)
    assert (second.color, second.gradient_to) == (theme.background_alt, theme.background_dark)


def test_premium_accent_rotation_has_period_four() -> None:
    theme = THEMES["doings_pro"]
    layout = PremiumLayout(theme, StyleConfig(theme_key="doings_pro"))
    accents = [layout.layout(_statement(i), i).accent for i in range(8)]
    assert accents[:4] == [theme.primary, theme.secondary, theme.contrast, theme.accent]
    assert accents[4:] == accents[:4]
    assert len(set(accents[:4])) == 4


def test_premium_sidebar_uses_rotating_accent() -> None:
    theme = THEMES["doings_pro"]
    layout = PremiumLayout(theme, StyleConfig(theme_key="doings_pro"))
    render = layout.layout(_statement(2), 2)
    sidebar = render.ops[0]
    assert isinstance(sidebar, Rect)
    assert (sidebar.x, sidebar.w) == (0, 0.08)
    assert sidebar.fill == theme.contrast


def test_premium_stays_dark_in_light_mode() -> None:
    theme = THEMES["doings_pro"]
    layout = PremiumLayout(theme, StyleConfig(theme_key="doings_pro", background_mode="light"))
    assert layout.background(0).color == theme.background_dark
    assert layout.background(1).color == theme.background_alt


def test_standard_statement_has_type_tag_title_and_subtitle() -> None:
    layout = StandardLayout(THEMES["doings"], StyleConfig())
    render = layout.layout(_statement(subtitle="A subtitle"), 0)
    assert _texts(render) == ["STATEMENT", "Bold ideas travel far", "A subtitle"]
    assert render.ops[0].color == THEMES["doings"].accent


def test_standard_list_renders_every_item() -> None:
    items = tuple(f"Item {i}" for i in range(7))
    layout = StandardLayout(THEMES["doings"], StyleConfig())
    render = layout.layout(ListSlide(id="l", title="Many", items=items), 0)
    bullets = render.ops[-1]
    assert isinstance(bullets, TextBox)
    assert len(bullets.paragraphs) == 7
    assert bullets.paragraphs[0].runs[0].text == "• "


def test_comparison_defaults_column_titles_per_language() -> None:
    slide = ComparisonSlide(id="c", title="Then and now", left=Column(items=("old",)), right=None)
    english = StandardLayout(THEMES["doings"], StyleConfig()).layout(slide, 0)
    swedish = StandardLayout(THEMES["doings"], StyleConfig(language="sv")).layout(slide, 0)
    assert "Before" in _texts(english) and "After" in _texts(english)
    assert "Före" in _texts(swedish) and "Efter" in _texts(swedish)


def test_timeline_caps_markers_at_five() -> None:
    steps = tuple(TimelineStep(title=f"Step {i}") for i in range(8))
    slide = TimelineSlide(id="t", title="Roadmap", steps=steps)
    for layout in (
        StandardLayout(THEMES["doings"], StyleConfig()),
        PremiumLayout(THEMES["doings_pro"], StyleConfig(theme_key="doings_pro")),
    ):
        render = layout.layout(slide, 0)
        assert sum(isinstance(op, Ellipse) for op in render.ops) == 5


def test_premium_list_caps_steps_at_four() -> None:
    slide = ListSlide(id="l", title="Six ways", items=tuple(f"Way {i}" for i in range(6)))
    render = PremiumLayout(THEMES["doings_pro"], StyleConfig(theme_key="doings_pro")).layout(slide, 0)
    texts = _texts(render)
    assert "STEP 4" in texts
    assert "STEP 5" not in texts
    assert "Way 3" in texts and "Way 4" not in texts


def test_premium_statement_headline_is_two_tone() -> None:
    theme = THEMES["doings_pro"]
    layout = PremiumLayout(theme, StyleConfig(theme_key="doings_pro"))
    render = layout.layout(_statement(1, title="Small steps change everything"), 1)
    headline = next(op for op in render.ops if isinstance(op, TextBox) and op.font_face == "Arial Black")
    first, second = headline.paragraphs
    assert first.runs[0].text == "SMALL STEPS"
    assert first.runs[0].color == theme.text_light
    assert second.runs[0].text == "CHANGE EVERYTHING"
    assert second.runs[0].color == theme.secondary


def test_premium_insight_panel_truncates_notes_but_render_keeps_them() -> None:
    notes = "word " * 60
    layout = PremiumLayout(THEMES["doings_pro"], StyleConfig(theme_key="doings_pro"))
    render = layout.layout(_statement(speaker_notes=notes), 0)
    assert render.notes == notes
    excerpt = [t for t in _texts(render) if t.endswith("…")]
    assert len(excerpt) == 1
    assert len(excerpt[0]) <= 101


def test_story_attribution_is_verbatim() -> None:
    slide = StorySlide(id="s", title="T", quote="Q", attribution="— Ada, 1843")
    render = StandardLayout(THEMES["doings"], StyleConfig()).layout(slide, 0)
    assert "— Ada, 1843" in _texts(render)


def test_cta_badge_uses_localized_label() -> None:
    slide = CtaSlide(id="c", title="Go", subtitle="Now")
    render = StandardLayout(THEMES["doings"], StyleConfig(language="sv")).layout(slide, 0)
    assert "Ta steget →" in _texts(render)
    assert any(isinstance(op, Rect) and op.rounded for op in render.ops)


@pytest.mark.parametrize("decoration, count", [("glow", 1), ("lines", 7)])
def test_decorations_are_drawn_first(decoration, count) -> None:
    style = StyleConfig(background_decoration=decoration)
    render = build_layout(style, THEMES["doings"]).layout(_statement(), 0)
    decorative = render.ops[:count]
    assert all(getattr(op, "transparency", 0) > 0 for op in decorative)
