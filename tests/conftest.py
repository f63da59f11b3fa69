from __future__ import annotations

import base64
import io
from typing import Any, Dict, List

import pytest
from PIL import Image


def _png_base64(width: int, height: int, color=(200, 40, 120)) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def png_base64() -> str:
    return _png_base64(400, 300)


@pytest.fixture
def wide_png_base64() -> str:
    return _png_base64(800, 200)


def _make_slides(count: int) -> List[Dict[str, Any]]:
    return [
        {"id": f"s{i}", "type": "statement", "title": f"Slide {i}", "speakerNotes": f"Notes for slide {i}"}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_slides():
    return _make_slides


@pytest.fixture
def three_slide_payload() -> Dict[str, Any]:
    return {
        "document": {
            "title": "Q3 Review: 2024!",
            "slides": [
                {
                    "id": "intro",
                    "type": "statement",
                    "title": "Growth is a habit",
                    "subtitle": "What we learned this quarter",
                    "speakerNotes": "Open with the headline number.\nPause for effect.",
                },
                {
                    "id": "points",
                    "type": "list",
                    "title": "Five things that worked",
                    "content": ["Focus", "Cadence", "Feedback", "Ownership", "Rest"],
                },
                {
                    "id": "close",
                    "type": "cta",
                    "title": "Start on Monday",
                    "subtitle": "Pick one habit",
                },
            ],
        },
        "style": {"themeKey": "doings"},
    }
