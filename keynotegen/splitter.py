"""Split one deck into contiguous parts, package each and bundle them in a zip."""

from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import List, Optional, Tuple

from .config import Settings
from .errors import InvalidInputError, RenderCancelled
from .labels import label
from .models import Document, StyleConfig, sanitize_title
from .packager import deterministic_zip, pack

logger = logging.getLogger(__name__)


def part_title(title: str, index: int, total: int, *, language: str = "en") -> str:
    return f"{title} - {label('part', language, i=index, n=total)}"


def part_filename(document_title: str, index: int, total: int) -> str:
    return f"{sanitize_title(document_title)}_Part_{index}_of_{total}.pptx"


def chunk_bounds(length: int, parts: int) -> List[Tuple[int, int]]:
    """``(start, stop)`` slices of ``ceil(length/parts)`` slides each.

    A chunk is shortened only when the remaining slides would otherwise not
    cover the remaining parts, so exactly ``min(parts, length)`` non-empty
    chunks come back (10 slides in 3 parts -> 4, 4, 2; 5 in 4 -> 2, 1, 1, 1).
    """
    target = min(parts, length)
    chunk_size = math.ceil(length / parts)
    bounds = []
    start = 0
    for emitted in range(target):
        remaining_parts = target - emitted - 1
        size = min(chunk_size, length - start - remaining_parts)
        if emitted == target - 1:
            size = length - start
        bounds.append((start, start + size))
        start += size
    return bounds


def split(document: Document, parts: int, *, language: str = "en") -> List[Document]:
    """Partition the slides into contiguous chunks of ``ceil(len/parts)`` slides.

    When ``parts`` exceeds the slide count the empty trailing chunks are
    dropped. Each chunk keeps its slide ids and remembers the absolute index
    of its first slide.
    """
    if isinstance(parts, bool) or not isinstance(parts, int) or parts < 1:
        raise InvalidInputError([f"parts must be a positive integer, got {parts!r}"])

    slides = document.slides
    if not slides:
        raise InvalidInputError(["document.slides must contain at least one slide"])
    if parts == 1:
        return [document]

    bounds = chunk_bounds(len(slides), parts)
    total = len(bounds)
    chunks = []
    for i, (start, stop) in enumerate(bounds, start=1):
        chunks.append(
            replace(
                document,
                title=part_title(document.title, i, total, language=language),
                slides=slides[start:stop],
                index_offset=document.index_offset + start,
            )
        )
    if total < parts:
        logger.info("Requested %d parts for %d slides; emitting %d", parts, len(slides), total)
    return chunks


def pack_parts(
    chunks: List[Document],
    style: StyleConfig,
    *,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[bytes]:
    """Package every chunk, in order. Chunks run on a thread pool when ``max_workers > 1``."""
    settings = settings or Settings()

    def run(chunk: Document) -> bytes:
        if cancel_event is not None and cancel_event.is_set():
            raise RenderCancelled(f"Rendering of '{chunk.title}' was cancelled")
        return pack(chunk, style, settings=settings, cancel_event=cancel_event)

    if settings.max_workers <= 1 or len(chunks) <= 1:
        return [run(chunk) for chunk in chunks]

    with ThreadPoolExecutor(max_workers=min(settings.max_workers, len(chunks))) as pool:
        return list(pool.map(run, chunks))


def bundle(document_title: str, blobs: List[bytes]) -> bytes:
    """Zip part packages as ``{title}_Part_{i}_of_{n}.pptx`` entries."""
    total = len(blobs)
    entries = [(part_filename(document_title, i, total), blob) for i, blob in enumerate(blobs, start=1)]
    return deterministic_zip(entries)


def split_and_bundle(
    document: Document,
    style: StyleConfig,
    parts: int,
    *,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> tuple[bytes, int]:
    """Return the zip bundle and the number of parts it contains."""
    chunks = split(document, parts, language=style.language)
    blobs = pack_parts(chunks, style, settings=settings, cancel_event=cancel_event)
    logger.info("Bundling %d part(s) of %r", len(blobs), document.title)
    return bundle(document.title, blobs), len(blobs)
