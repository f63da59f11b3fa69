from __future__ import annotations

import base64
import io
import textwrap

import pytest
from PIL import Image

from keynotegen.compositing import composite, cover_crop, decode_image
from keynotegen.layouts.premium import PremiumLayout
from keynotegen.models import ImageData, StorySlide, StyleConfig
from keynotegen.ops import Background, Picture, Rect, SlideRender, text_box
from keynotegen.themes import THEMES


def _render(color: str = "000000") -> SlideRender:
    return SlideRender(background=Background(color=color), ops=(text_box(0.5, 0.5, 4, 1, "Title"),))


def test_no_image_returns_render_unchanged() -> None:
    render = _render()
    assert composite(render, None) is render


def test_image_and_scrim_share_region_under_text(png_base64) -> None:
    out = composite(_render("1A1A2E"), ImageData(data=png_base64))
    picture, scrim, title = out.ops
    assert isinstance(picture, Picture)
    assert isinstance(scrim, Rect)
    assert (picture.x, picture.y, picture.w, picture.h) == (scrim.x, scrim.y, scrim.w, scrim.h) == (5.0, 0.0, 5.0, 5.625)
    assert scrim.fill == "1A1A2E"
    assert scrim.transparency == pytest.approx(0.5)
    assert title.text == "Title"


def test_scrim_follows_slide_background(png_base64) -> None:
    out = composite(_render("FFFFFF"), ImageData(data=png_base64))
    assert out.ops[1].fill == "FFFFFF"


def test_premium_light_mode_scrim_stays_dark(png_base64) -> None:
    theme = THEMES["doings_pro"]
    layout = PremiumLayout(theme, StyleConfig(theme_key="doings_pro", background_mode="light"))
    slide = StorySlide(id="s1", title="Once", quote="It began", image=ImageData(data=png_base64))
    render = layout.layout(slide, 0)

    out = composite(render, slide.image)

    assert render.background.color == theme.background_dark
    assert out.ops[1].fill == render.background.color


def test_line_wrapped_base64_is_decoded(png_base64) -> None:
    wrapped = "\n".join(textwrap.wrap(png_base64, 76))
    decoded = decode_image(ImageData(data=wrapped))
    assert decoded is not None
    assert decoded[1] == (400, 300)


def test_corrupt_image_is_skipped(caplog) -> None:
    render = _render()
    out = composite(render, ImageData(data=base64.b64encode(b"not an image").decode()))
    assert out is render
    assert "could not be decoded" in caplog.text


def test_invalid_base64_is_skipped(caplog) -> None:
    render = _render()
    out = composite(render, ImageData(data="%%%not-base64%%%"))
    assert out is render
    assert "not valid base64" in caplog.text


def test_unsupported_format_is_reencoded_as_png() -> None:
    buffer = io.BytesIO()
    Image.new("RGB", (10, 10), (1, 2, 3)).save(buffer, format="WEBP")
    decoded = decode_image(ImageData(data=base64.b64encode(buffer.getvalue()).decode(), mime_type="image/webp"))
    assert decoded is not None
    blob, size = decoded
    assert size == (10, 10)
    assert blob.startswith(b"\x89PNG")


def test_cover_crop_wide_image_trims_sides() -> None:
    left, top, right, bottom = cover_crop((800, 200), (5.0, 5.625))
    assert top == bottom == 0.0
    assert left == pytest.approx(right)
    # visible fraction of the width matches the box ratio
    assert 1 - left - right == pytest.approx((5.0 / 5.625) / 4.0)


def test_cover_crop_tall_image_trims_top_and_bottom() -> None:
    left, top, right, bottom = cover_crop((100, 1000), (5.0, 5.625))
    assert left == right == 0.0
    assert 1 - top - bottom == pytest.approx(0.1 / (5.0 / 5.625))
