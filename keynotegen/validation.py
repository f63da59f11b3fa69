"""Validation of render requests (document + style + parts)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .config import Settings
from .errors import InvalidInputError
from .labels import LANGUAGES
from .models import (
    BACKGROUND_MODES,
    DECORATIONS,
    FONT_FAMILY_KEYS,
    RenderRequest,
    StyleConfig,
    document_from_dict,
)
from .themes import CUSTOM_COLOR_KEYS, CUSTOM_THEME_KEY, THEMES, is_known_theme, normalize_hex

logger = logging.getLogger(__name__)

# Request keys accepted under their original client-side names.
_STYLE_ALIASES = {
    "themeKey": ("themeKey", "theme", "palette"),
    "backgroundMode": ("backgroundMode", "backgroundStyle"),
    "fontFamily": ("fontFamily", "fontStyle"),
}


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _ensure_list_of_str(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _style_value(style: Mapping[str, Any], key: str) -> Any:
    for alias in _STYLE_ALIASES.get(key, (key,)):
        if alias in style:
            return style[alias]
    return None


def _check_optional_str(slide: Mapping[str, Any], field: str, prefix: str, issues: list[str]) -> None:
    if field in slide and slide[field] is not None and not isinstance(slide[field], str):
        issues.append(f"{prefix}.{field} must be a string when provided")


def _check_column(value: Any, prefix: str, issues: list[str]) -> None:
    if value is None:
        return
    if not isinstance(value, dict):
        issues.append(f"{prefix} must be an object with title + items")
        return
    if "title" in value and not isinstance(value.get("title"), str):
        issues.append(f"{prefix}.title must be a string when provided")
    if "items" in value and not _ensure_list_of_str(value.get("items")):
        issues.append(f"{prefix}.items must be a list of strings")


def _check_image(value: Any, prefix: str, issues: list[str]) -> None:
    if value is None or isinstance(value, str):
        return
    if not isinstance(value, dict):
        issues.append(f"{prefix}.image must be a base64 string or an object")
        return
    data = value.get("base64", value.get("data"))
    if not isinstance(data, str):
        issues.append(f"{prefix}.image.base64 must be a string")
    mime = value.get("mimeType")
    if mime is not None and not isinstance(mime, str):
        issues.append(f"{prefix}.image.mimeType must be a string when provided")


def _check_slide(slide: Dict[str, Any], idx: int, issues: list[str]) -> None:
    prefix = f"document.slides[{idx}]"

    slide_type = slide.get("type", "statement")
    if not isinstance(slide_type, str):
        issues.append(f"{prefix}.type must be a string")

    for field in ("id", "title", "subtitle", "quote", "attribution", "speakerNotes"):
        _check_optional_str(slide, field, prefix, issues)

    content = slide.get("content")
    if content is not None and not _ensure_list_of_str(content):
        issues.append(f"{prefix}.content must be a list of strings")

    _check_column(slide.get("leftColumn"), f"{prefix}.leftColumn", issues)
    _check_column(slide.get("rightColumn"), f"{prefix}.rightColumn", issues)

    steps = slide.get("steps")
    if steps is not None:
        if not isinstance(steps, list):
            issues.append(f"{prefix}.steps must be a list")
        else:
            for s_idx, step in enumerate(steps):
                sp = f"{prefix}.steps[{s_idx}]"
                if isinstance(step, str):
                    continue
                if not isinstance(step, dict):
                    issues.append(f"{sp} must be an object with title + description")
                    continue
                for field in ("title", "description"):
                    if field in step and not isinstance(step.get(field), str):
                        issues.append(f"{sp}.{field} must be a string when provided")

    _check_image(slide.get("image"), prefix, issues)


def _check_document(document: Any, issues: list[str]) -> None:
    if not isinstance(document, dict):
        issues.append("document is required and must be an object")
        return

    title = document.get("title")
    if title is not None and not isinstance(title, str):
        issues.append("document.title must be a string when provided")

    slides = document.get("slides")
    if not isinstance(slides, list):
        issues.append("document.slides is required and must be a list")
        return
    if not slides:
        issues.append("document.slides must contain at least one slide")
        return

    seen_ids: Dict[str, int] = {}
    for idx, slide in enumerate(slides):
        if not isinstance(slide, dict):
            issues.append(f"document.slides[{idx}] must be an object")
            continue
        _check_slide(slide, idx, issues)
        slide_id = slide.get("id")
        if _is_non_empty_str(slide_id):
            if slide_id in seen_ids:
                issues.append(f"document.slides[{idx}].id '{slide_id}' duplicates document.slides[{seen_ids[slide_id]}]")
            else:
                seen_ids[slide_id] = idx


def _parse_custom_colors(value: Any, issues: list[str]) -> Optional[Tuple[str, ...]]:
    if isinstance(value, dict):
        missing = [key for key in CUSTOM_COLOR_KEYS if key not in value]
        extra = sorted(key for key in value if key not in CUSTOM_COLOR_KEYS)
        if missing or extra:
            issues.append(f"style.customColors must have exactly the keys {', '.join(CUSTOM_COLOR_KEYS)}")
            return None
        raw = [value[key] for key in CUSTOM_COLOR_KEYS]
    elif isinstance(value, list):
        if len(value) != len(CUSTOM_COLOR_KEYS):
            issues.append(f"style.customColors must contain exactly {len(CUSTOM_COLOR_KEYS)} colors, got {len(value)}")
            return None
        raw = value
    else:
        issues.append("style.customColors must be a list or an object of 5 colors")
        return None

    colors = []
    for pos, item in enumerate(raw, start=1):
        color = normalize_hex(item)
        if color is None:
            issues.append(f"style.customColors color{pos} '{item}' is not a RRGGBB hex color")
        else:
            colors.append(color)
    return tuple(colors) if len(colors) == len(CUSTOM_COLOR_KEYS) else None


def _check_style(style: Any, settings: Settings, issues: list[str]) -> Optional[StyleConfig]:
    if style is None:
        style = {}
    if not isinstance(style, dict):
        issues.append("style must be an object when provided")
        return None

    theme_key = _style_value(style, "themeKey")
    if theme_key is None:
        theme_key = "doings"
    if not _is_non_empty_str(theme_key):
        issues.append("style.themeKey must be a non-empty string")
        return None
    theme_key = theme_key.strip()
    if not is_known_theme(theme_key):
        fallback = settings.fallback_theme
        if fallback and fallback in THEMES:
            logger.warning("Unknown theme %r, falling back to %r", theme_key, fallback)
            theme_key = fallback
        else:
            known = ", ".join(sorted([*THEMES, CUSTOM_THEME_KEY]))
            issues.append(f"style.themeKey '{theme_key}' is unsupported (supported: {known})")

    background_mode = _style_value(style, "backgroundMode") or "dark"
    if background_mode not in BACKGROUND_MODES:
        issues.append(f"style.backgroundMode '{background_mode}' is unsupported (supported: {', '.join(BACKGROUND_MODES)})")

    font_family = _style_value(style, "fontFamily") or "modern"
    if font_family not in FONT_FAMILY_KEYS:
        issues.append(f"style.fontFamily '{font_family}' is unsupported (supported: {', '.join(FONT_FAMILY_KEYS)})")

    decoration = style.get("backgroundDecoration")
    if decoration is not None and decoration not in DECORATIONS:
        issues.append(f"style.backgroundDecoration '{decoration}' is unsupported (supported: {', '.join(DECORATIONS)})")

    language = style.get("language") or settings.language
    if language not in LANGUAGES:
        issues.append(f"style.language '{language}' is unsupported (supported: {', '.join(LANGUAGES)})")

    custom_raw = style.get("customColors")
    custom_colors = None
    if theme_key == CUSTOM_THEME_KEY:
        if custom_raw is None:
            issues.append("style.customColors is required when style.themeKey is 'custom'")
        else:
            custom_colors = _parse_custom_colors(custom_raw, issues)
    elif custom_raw is not None:
        issues.append("style.customColors is only allowed when style.themeKey is 'custom'")

    return StyleConfig(
        theme_key=theme_key,
        background_mode=background_mode,
        font_family=font_family,
        background_decoration=None if decoration in (None, "none") else decoration,
        custom_colors=custom_colors,
        language=language,
    )


def _check_parts(parts: Any, issues: list[str]) -> int:
    if parts is None:
        return 1
    if isinstance(parts, bool) or not isinstance(parts, int):
        issues.append("parts must be an integer when provided")
        return 1
    if parts < 1:
        issues.append(f"parts must be at least 1, got {parts}")
        return 1
    return parts


def validate_request(payload: Any, *, settings: Optional[Settings] = None) -> RenderRequest:
    """Validate a ``{document, style, parts?}`` payload and build the typed request.

    Every problem is collected before raising, so one InvalidInputError lists them all.
    """
    settings = settings or Settings()
    if not isinstance(payload, dict):
        raise InvalidInputError(["Root JSON value must be an object"])

    document = payload.get("document", payload.get("presentation"))

    issues: list[str] = []
    _check_document(document, issues)
    style = _check_style(payload.get("style"), settings, issues)
    parts = _check_parts(payload.get("parts"), issues)

    if issues or style is None:
        raise InvalidInputError(issues)

    return RenderRequest(
        document=document_from_dict(document, language=style.language),
        style=style,
        parts=parts,
    )


def load_request_file(path: Path) -> Any:
    """Read a JSON request file without validating its shape."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InvalidInputError([f"Request file not found: {path}"]) from exc

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidInputError([f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"]) from exc


def validate_request_file(path: Path, *, settings: Optional[Settings] = None) -> RenderRequest:
    """Load and validate a JSON request file."""
    data: Dict[str, Any] = load_request_file(path)
    return validate_request(data, settings=settings)
