"""Public API helpers for programmatic deck compilation."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .config import Settings
from .models import RenderRequest
from .packager import PPTX_CONTENT_TYPE, pack
from .splitter import split_and_bundle
from .validation import validate_request

ZIP_CONTENT_TYPE = "application/zip"


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    filename: str
    content_type: str


def compile_request(
    request: RenderRequest,
    *,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ExportResult:
    """Render an already validated request to a .pptx, or a zip of parts when ``parts > 1``."""
    settings = settings or Settings()
    document = request.document
    safe = document.safe_title

    if request.parts == 1:
        blob = pack(document, request.style, settings=settings, cancel_event=cancel_event)
        return ExportResult(content=blob, filename=f"{safe}_Keynote.pptx", content_type=PPTX_CONTENT_TYPE)

    archive, emitted = split_and_bundle(
        document, request.style, request.parts, settings=settings, cancel_event=cancel_event
    )
    return ExportResult(content=archive, filename=f"{safe}_Keynote_{emitted}_parts.zip", content_type=ZIP_CONTENT_TYPE)


def compile_presentation(
    payload: Any,
    *,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ExportResult:
    """Validate a ``{document, style, parts?}`` payload and compile it."""
    settings = settings or Settings()
    request = validate_request(payload, settings=settings)
    return compile_request(request, settings=settings, cancel_event=cancel_event)


def write_export(result: ExportResult, output_path: Path) -> Path:
    """Write ``result`` to ``output_path``; a directory receives the derived filename."""
    path = Path(output_path)
    if path.is_dir():
        path = path / result.filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(result.content)
    return path
