"""Typed deck model: slide variants, style configuration and documents."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Collection, Dict, Mapping, Optional, Tuple, Union

from .labels import label

logger = logging.getLogger(__name__)

SLIDE_TYPES = ("statement", "story", "list", "comparison", "timeline", "cta")
BACKGROUND_MODES = ("dark", "light", "gradient")
FONT_FAMILY_KEYS = ("modern", "classic", "tech")
DECORATIONS = ("none", "glow", "lines")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class ImageData:
    data: str
    mime_type: str = "image/png"


@dataclass(frozen=True)
class Column:
    title: str = ""
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TimelineStep:
    title: str
    description: str = ""


@dataclass(frozen=True)
class BaseSlide:
    kind: ClassVar[str] = ""

    id: str
    title: str
    speaker_notes: str = ""
    image: Optional[ImageData] = None


@dataclass(frozen=True)
class StatementSlide(BaseSlide):
    kind: ClassVar[str] = "statement"

    subtitle: str = ""


@dataclass(frozen=True)
class StorySlide(BaseSlide):
    kind: ClassVar[str] = "story"

    quote: str = ""
    attribution: str = ""


@dataclass(frozen=True)
class ListSlide(BaseSlide):
    kind: ClassVar[str] = "list"

    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ComparisonSlide(BaseSlide):
    kind: ClassVar[str] = "comparison"

    left: Optional[Column] = None
    right: Optional[Column] = None
    subtitle: str = ""


@dataclass(frozen=True)
class TimelineSlide(BaseSlide):
    kind: ClassVar[str] = "timeline"

    steps: Tuple[TimelineStep, ...] = ()
    subtitle: str = ""


@dataclass(frozen=True)
class CtaSlide(BaseSlide):
    kind: ClassVar[str] = "cta"

    subtitle: str = ""


Slide = Union[StatementSlide, StorySlide, ListSlide, ComparisonSlide, TimelineSlide, CtaSlide]


@dataclass(frozen=True)
class StyleConfig:
    theme_key: str = "doings"
    background_mode: str = "dark"
    font_family: str = "modern"
    background_decoration: Optional[str] = None
    custom_colors: Optional[Tuple[str, ...]] = None
    language: str = "en"


@dataclass(frozen=True)
class Document:
    title: str
    slides: Tuple[Slide, ...]
    # Absolute position of slides[0] in the deck this document was split from.
    index_offset: int = 0

    @property
    def safe_title(self) -> str:
        return sanitize_title(self.title)


@dataclass(frozen=True)
class RenderRequest:
    document: Document
    style: StyleConfig = field(default_factory=StyleConfig)
    parts: int = 1


def sanitize_title(title: str, *, fallback: str = "Presentation") -> str:
    """Strip everything outside ``[A-Za-z0-9]``; idempotent."""
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", title or "")
    return cleaned or fallback


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _strings(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item is not None)


def image_from_value(value: Any) -> Optional[ImageData]:
    """Accept ``{base64|data, mimeType}``, a bare base64 string or a ``data:`` URL."""
    if value is None or value == "":
        return None
    if isinstance(value, Mapping):
        data = value.get("base64") or value.get("data") or ""
        mime = value.get("mimeType") or value.get("mime_type") or "image/png"
    else:
        data, mime = str(value), "image/png"

    data = str(data).strip()
    if data.startswith("data:") and "," in data:
        header, data = data.split(",", 1)
        declared = header[len("data:") :].split(";", 1)[0]
        if declared:
            mime = declared
    if not data:
        return None
    return ImageData(data=data, mime_type=str(mime))


def _column(value: Any) -> Optional[Column]:
    if not isinstance(value, Mapping):
        return None
    return Column(title=_text(value.get("title")), items=_strings(value.get("items")))


def _steps(value: Any) -> Tuple[TimelineStep, ...]:
    if not isinstance(value, list):
        return ()
    steps = []
    for step in value:
        if isinstance(step, Mapping):
            steps.append(TimelineStep(title=_text(step.get("title")), description=_text(step.get("description"))))
        elif isinstance(step, str):
            steps.append(TimelineStep(title=step))
    return tuple(steps)


def slide_from_dict(
    data: Mapping[str, Any], position: int, *, language: str = "en", taken: Collection[str] = ()
) -> Slide:
    """Build the slide variant named by ``data['type']``.

    ``position`` is 1-based and only used to assign an id when none is given;
    the generated id avoids anything in ``taken``.
    Unknown types become statement slides.
    """
    slide_type = str(data.get("type") or "statement").strip().lower()
    common: Dict[str, Any] = {
        "id": _text(data.get("id")).strip() or _generated_id(position, taken),
        "title": _text(data.get("title")) or label("untitled", language),
        "speaker_notes": _text(data.get("speakerNotes", data.get("speaker_notes"))),
        "image": image_from_value(data.get("image")),
    }

    if slide_type == "story":
        return StorySlide(**common, quote=_text(data.get("quote")), attribution=_text(data.get("attribution")))
    if slide_type == "list":
        return ListSlide(**common, items=_strings(data.get("content", data.get("items"))))
    if slide_type == "comparison":
        return ComparisonSlide(
            **common,
            left=_column(data.get("leftColumn", data.get("left"))),
            right=_column(data.get("rightColumn", data.get("right"))),
            subtitle=_text(data.get("subtitle")),
        )
    if slide_type == "timeline":
        return TimelineSlide(**common, steps=_steps(data.get("steps")), subtitle=_text(data.get("subtitle")))
    if slide_type == "cta":
        return CtaSlide(**common, subtitle=_text(data.get("subtitle")))
    if slide_type != "statement":
        logger.warning("Slide %s has unknown type %r; rendering it as a statement", common["id"], slide_type)
    return StatementSlide(**common, subtitle=_text(data.get("subtitle")))


def _generated_id(position: int, taken: Collection[str]) -> str:
    candidate = f"slide-{position}"
    suffix = 2
    while candidate in taken:
        candidate = f"slide-{position}-{suffix}"
        suffix += 1
    return candidate


def document_from_dict(data: Mapping[str, Any], *, language: str = "en") -> Document:
    raw_slides = data.get("slides") or []
    taken = {_text(slide.get("id")).strip() for slide in raw_slides if isinstance(slide, Mapping)}
    slides = []
    for idx, slide in enumerate(raw_slides, start=1):
        parsed = slide_from_dict(slide, idx, language=language, taken=taken)
        taken.add(parsed.id)
        slides.append(parsed)
    return Document(title=_text(data.get("title")).strip() or "Presentation", slides=tuple(slides))


def slide_to_dict(slide: Slide) -> Dict[str, Any]:
    """Inverse of :func:`slide_from_dict`, using the JSON field names."""
    out: Dict[str, Any] = {
        "id": slide.id,
        "type": slide.kind,
        "title": slide.title,
        "speakerNotes": slide.speaker_notes,
    }
    if slide.image is not None:
        out["image"] = {"base64": slide.image.data, "mimeType": slide.image.mime_type}
    if isinstance(slide, (StatementSlide, CtaSlide)) and slide.subtitle:
        out["subtitle"] = slide.subtitle
    elif isinstance(slide, StorySlide):
        if slide.quote:
            out["quote"] = slide.quote
        if slide.attribution:
            out["attribution"] = slide.attribution
    elif isinstance(slide, ListSlide):
        out["content"] = list(slide.items)
    elif isinstance(slide, ComparisonSlide):
        if slide.subtitle:
            out["subtitle"] = slide.subtitle
        for key, column in (("leftColumn", slide.left), ("rightColumn", slide.right)):
            if column is not None:
                out[key] = {"title": column.title, "items": list(column.items)}
    elif isinstance(slide, TimelineSlide):
        if slide.subtitle:
            out["subtitle"] = slide.subtitle
        out["steps"] = [{"title": s.title, "description": s.description} for s in slide.steps]
    return out
