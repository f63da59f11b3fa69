"""Localized strings drawn onto slides."""

from __future__ import annotations

from typing import Dict

LANGUAGES = ("en", "sv")

_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "before": "Before",
        "after": "After",
        "part": "Part {i} of {n}",
        "take_action": "Take Action →",
        "insight": "INSIGHT",
        "insight_fallback": "Key insight for this slide.",
        "aha": "AHA MOMENT",
        "aha_prompt": "Think about it. Have YOU tried this?",
        "story": "STORY",
        "takeaway": "TAKEAWAY",
        "takeaway_fallback": "Key insight from this story.",
        "resonate": "Does this resonate with you?",
        "key_points": "KEY POINTS",
        "step": "Step {n}",
        "comparison": "COMPARISON",
        "timeline": "TIMELINE",
        "quote_fallback": "Key quote for this slide.",
        "next_step": "YOUR NEXT STEP",
        "cta_fallback": "Start today. Small steps, real change.",
        "untitled": "Untitled Slide",
    },
    "sv": {
        "before": "Före",
        "after": "Efter",
        "part": "Del {i} av {n}",
        "take_action": "Ta steget →",
        "insight": "INSIKT",
        "insight_fallback": "Nyckelinsikt för denna slide.",
        "aha": "AHA-MOMENT",
        "aha_prompt": "Tänk på det. Har DU testat detta?",
        "story": "HISTORIA",
        "takeaway": "TAKEAWAY",
        "takeaway_fallback": "Nyckelinsikt från denna historia.",
        "resonate": "Resonerar detta med dig?",
        "key_points": "NYCKELPUNKTER",
        "step": "Steg {n}",
        "comparison": "JÄMFÖRELSE",
        "timeline": "TIDSLINJE",
        "quote_fallback": "Nyckelcitat för denna slide.",
        "next_step": "DITT NÄSTA STEG",
        "cta_fallback": "Börja idag. Små steg, verklig förändring.",
        "untitled": "Namnlös slide",
    },
}


def label(key: str, language: str = "en", **params: object) -> str:
    """Look up a label, falling back to English for unknown languages."""
    table = _LABELS.get(language, _LABELS["en"])
    text = table.get(key, _LABELS["en"][key])
    return text.format(**params) if params else text
