from __future__ import annotations

import json

from keynotegen.adapter import fallback_document, parse_generated_deck, strip_code_fences
from keynotegen.models import CtaSlide, ListSlide, StatementSlide, StorySlide


def test_strip_code_fences() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_generated_deck_normalizes_slides() -> None:
    raw = "```json\n" + json.dumps(
        {
            "title": "The Habit Loop",
            "slides": [
                {"type": "story", "title": "It started", "quote": "Every day", "attribution": "Maya"},
                {"type": "LIST", "content": ["one", "two"]},
                {"type": "quiz", "title": "Odd"},
            ],
        }
    ) + "\n```"
    document = parse_generated_deck(raw, topic="Habits")
    assert document.title == "The Habit Loop"
    story, listing, odd = document.slides
    assert isinstance(story, StorySlide)
    assert isinstance(listing, ListSlide)
    assert listing.title == "Untitled Slide"
    assert isinstance(odd, StatementSlide)
    assert [s.id for s in document.slides] == ["slide-1", "slide-2", "slide-3"]


def test_missing_title_uses_topic() -> None:
    document = parse_generated_deck('{"slides": [{"title": "Only"}]}', topic="Focus")
    assert document.title == "Focus"


def test_invalid_json_returns_fallback(caplog) -> None:
    document = parse_generated_deck("Sorry, I can't do that.", topic="Focus")
    assert document == fallback_document("Focus")
    assert "fallback deck" in caplog.text


def test_empty_slides_returns_fallback() -> None:
    assert parse_generated_deck('{"title": "X", "slides": []}', topic="Focus") == fallback_document("Focus")
    assert parse_generated_deck('{"title": "X", "slides": "nope"}', topic="Focus") == fallback_document("Focus")
    assert parse_generated_deck("[1, 2]", topic="Focus") == fallback_document("Focus")


def test_fallback_document_shape() -> None:
    document = fallback_document("Deep Work")
    assert document.title == "Deep Work"
    statement, listing, cta = document.slides
    assert isinstance(statement, StatementSlide) and statement.title == "Deep Work"
    assert isinstance(listing, ListSlide) and len(listing.items) == 3
    assert isinstance(cta, CtaSlide)
    assert all(slide.speaker_notes for slide in document.slides)
