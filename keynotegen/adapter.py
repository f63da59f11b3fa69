"""Adapters for deck JSON produced by an upstream text generator."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from .models import Document, document_from_dict

logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```), if any."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json") :]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def fallback_deck(topic: str) -> Dict[str, Any]:
    """Minimal three-slide deck used when generated output cannot be used."""
    return {
        "title": topic,
        "slides": [
            {
                "type": "statement",
                "title": topic,
                "subtitle": "A TED Talk Presentation",
                "speakerNotes": "Welcome everyone. Today we'll explore an important topic.",
            },
            {
                "type": "list",
                "title": "Key Points",
                "content": [
                    "Main insight from the content",
                    "Supporting evidence",
                    "Practical implications",
                ],
                "speakerNotes": "Let me walk you through the key points we'll cover today.",
            },
            {
                "type": "cta",
                "title": "Take Action",
                "subtitle": "Your next step starts now",
                "speakerNotes": "Thank you for your attention. Now it's time to take action.",
            },
        ],
    }


def fallback_document(topic: str, *, language: str = "en") -> Document:
    return document_from_dict(fallback_deck(topic), language=language)


def parse_generated_deck(text: str, *, topic: str, language: str = "en") -> Document:
    """Turn raw generator output into a Document.

    Unparseable output, a non-object root or an empty slide list all yield
    :func:`fallback_document` for ``topic``.
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.warning("Generated deck is not valid JSON (%s); using fallback deck", exc)
        return fallback_document(topic, language=language)

    if not isinstance(parsed, dict):
        logger.warning("Generated deck root is %s, not an object; using fallback deck", type(parsed).__name__)
        return fallback_document(topic, language=language)

    raw_slides = parsed.get("slides")
    if not isinstance(raw_slides, list):
        raw_slides = []
    slides: List[Any] = [s for s in raw_slides if isinstance(s, dict)]
    if not slides:
        logger.warning("Generated deck has no usable slides; using fallback deck")
        return fallback_document(topic, language=language)

    title = parsed.get("title")
    return document_from_dict(
        {"title": title if isinstance(title, str) and title.strip() else topic, "slides": slides},
        language=language,
    )
