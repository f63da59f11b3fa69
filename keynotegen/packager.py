"""Draw slide renders into a .pptx package with python-pptx.

Output is byte-for-byte reproducible: core properties are pinned and the zip
container is rewritten with fixed entry timestamps.
"""

from __future__ import annotations

import io
import logging
import threading
import zipfile
from datetime import datetime
from typing import Iterable, Optional, Tuple

from lxml import etree
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.dml import MSO_LINE_DASH_STYLE
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from .compositing import composite
from .config import Settings
from .errors import InvalidInputError, RenderCancelled, SerializationError
from .layouts import build_layout
from .models import Document, StyleConfig
from .ops import CANVAS_HEIGHT, CANVAS_WIDTH, Background, Ellipse, Picture, Rect, RenderOp, SlideRender, TextBox
from .themes import Theme, resolve_effective_theme

logger = logging.getLogger(__name__)

PPTX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
DECK_SUBJECT = "Keynote Presentation"

# Pinned so repeated renders of one request are identical.
FIXED_TIMESTAMP = datetime(2000, 1, 1, 0, 0, 0)
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

# 135deg diagonal, top-left to bottom-right.
GRADIENT_ANGLE = 315.0

_ALIGN = {"left": PP_ALIGN.LEFT, "center": PP_ALIGN.CENTER, "right": PP_ALIGN.RIGHT}
_ANCHOR = {"top": MSO_ANCHOR.TOP, "middle": MSO_ANCHOR.MIDDLE, "bottom": MSO_ANCHOR.BOTTOM}


def deterministic_zip(entries: Iterable[Tuple[str, bytes]]) -> bytes:
    """Write ``(name, data)`` entries in order with fixed timestamps and permissions."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries:
            info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, data)
    return buffer.getvalue()


def normalize_zip(blob: bytes) -> bytes:
    """Re-pack an existing zip, keeping entry order but dropping wall-clock timestamps."""
    with zipfile.ZipFile(io.BytesIO(blob)) as source:
        entries = [(info.filename, source.read(info.filename)) for info in source.infolist()]
    return deterministic_zip(entries)


def _rgb(value: str) -> RGBColor:
    return RGBColor.from_string(value.upper())


def _set_fill_alpha(shape, transparency: float) -> None:
    """Add an ``a:alpha`` child to the shape's solid fill color."""
    sp_pr = shape._element.spPr
    solid_fill = sp_pr.find(qn("a:solidFill"))
    if solid_fill is None:
        return
    color_elem = solid_fill.find(qn("a:srgbClr"))
    if color_elem is None:
        return
    existing = color_elem.find(qn("a:alpha"))
    if existing is not None:
        color_elem.remove(existing)
    # DrawingML alpha is opacity in 1000ths of a percent.
    alpha = etree.SubElement(color_elem, qn("a:alpha"))
    alpha.set("val", str(int(round((1 - transparency) * 100000))))


def _notes_text(notes: str) -> str:
    # python-pptx writes a bare carriage return as the literal "_x000D_".
    return notes.replace("\r\n", "\n").replace("\r", "\n")


class DeckPackager:
    """Builds one presentation from a document and its resolved theme."""

    def __init__(
        self,
        document: Document,
        style: StyleConfig,
        theme: Theme,
        *,
        settings: Optional[Settings] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.document = document
        self.style = style
        self.theme = theme
        self.settings = settings or Settings()
        self.cancel_event = cancel_event
        self.layout = build_layout(style, theme)
        self.prs = Presentation()
        self.prs.slide_width = Inches(CANVAS_WIDTH)
        self.prs.slide_height = Inches(CANVAS_HEIGHT)

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise RenderCancelled(f"Rendering of '{self.document.title}' was cancelled")

    def _set_core_properties(self) -> None:
        props = self.prs.core_properties
        props.author = self.settings.author
        props.last_modified_by = self.settings.author
        props.title = self.document.title
        props.subject = DECK_SUBJECT
        props.revision = 1
        props.created = FIXED_TIMESTAMP
        props.modified = FIXED_TIMESTAMP
        props.last_printed = FIXED_TIMESTAMP

    def _get_blank_layout(self):
        for layout in self.prs.slide_layouts:
            if (layout.name or "").strip().lower() == "blank":
                return layout
        try:
            return self.prs.slide_layouts[6]
        except IndexError:
            return self.prs.slide_layouts[-1]

    def render_slides(self) -> list[SlideRender]:
        renders = []
        for position, slide in enumerate(self.document.slides):
            self._check_cancelled()
            index = self.document.index_offset + position
            render = self.layout.layout(slide, index)
            renders.append(composite(render, slide.image))
        return renders

    def generate(self):
        self._set_core_properties()
        blank = self._get_blank_layout()
        for render in self.render_slides():
            self._check_cancelled()
            slide = self.prs.slides.add_slide(blank)
            self._set_slide_background(slide, render.background)
            for op in render.ops:
                self._draw(slide, op)
            if render.notes:
                slide.notes_slide.notes_text_frame.text = _notes_text(render.notes)
        return self.prs

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        try:
            self.generate()
            self._check_cancelled()
            self.prs.save(buffer)
            return normalize_zip(buffer.getvalue())
        except (OSError, ValueError, zipfile.BadZipFile) as exc:
            raise SerializationError(f"Could not write presentation '{self.document.title}': {exc}") from exc

    def _set_slide_background(self, slide, background: Background) -> None:
        fill = slide.background.fill
        if background.gradient_to:
            fill.gradient()
            fill.gradient_angle = GRADIENT_ANGLE
            stops = fill.gradient_stops
            stops[0].color.rgb = _rgb(background.color)
            stops[1].color.rgb = _rgb(background.gradient_to)
            return
        fill.solid()
        fill.fore_color.rgb = _rgb(background.color)

    def _draw(self, slide, op: RenderOp) -> None:
        if isinstance(op, TextBox):
            self._draw_text(slide, op)
        elif isinstance(op, Rect):
            shape_type = MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE if op.rounded else MSO_AUTO_SHAPE_TYPE.RECTANGLE
            shape = self._add_shape(slide, shape_type, op)
            if op.line_color:
                shape.line.color.rgb = _rgb(op.line_color)
                shape.line.width = Pt(op.line_width)
                if op.dashed:
                    shape.line.dash_style = MSO_LINE_DASH_STYLE.DASH
        elif isinstance(op, Ellipse):
            self._add_shape(slide, MSO_AUTO_SHAPE_TYPE.OVAL, op)
        elif isinstance(op, Picture):
            self._draw_picture(slide, op)
        else:
            raise TypeError(f"Unsupported render op: {type(op).__name__}")

    def _add_shape(self, slide, shape_type, op):
        shape = slide.shapes.add_shape(shape_type, Inches(op.x), Inches(op.y), Inches(op.w), Inches(op.h))
        shape.fill.solid()
        shape.fill.fore_color.rgb = _rgb(op.fill)
        if op.transparency:
            _set_fill_alpha(shape, op.transparency)
        shape.line.fill.background()
        shape.shadow.inherit = False
        return shape

    def _draw_picture(self, slide, op: Picture) -> None:
        picture = slide.shapes.add_picture(
            io.BytesIO(op.blob), Inches(op.x), Inches(op.y), width=Inches(op.w), height=Inches(op.h)
        )
        left, top, right, bottom = op.crop
        picture.crop_left = left
        picture.crop_top = top
        picture.crop_right = right
        picture.crop_bottom = bottom

    def _draw_text(self, slide, op: TextBox) -> None:
        box = slide.shapes.add_textbox(Inches(op.x), Inches(op.y), Inches(op.w), Inches(op.h))
        tf = box.text_frame
        tf.word_wrap = True
        tf.auto_size = MSO_AUTO_SIZE.NONE
        tf.vertical_anchor = _ANCHOR.get(op.valign, MSO_ANCHOR.TOP)

        for i, para in enumerate(op.paragraphs):
            paragraph = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
            paragraph.alignment = _ALIGN.get(op.align, PP_ALIGN.LEFT)
            if para.space_after is not None:
                paragraph.space_after = Pt(para.space_after)
            for text_run in para.runs:
                run = paragraph.add_run()
                run.text = text_run.text
                font = run.font
                font.name = op.font_face
                font.size = Pt(op.font_size)
                font.bold = op.bold if text_run.bold is None else text_run.bold
                font.italic = op.italic if text_run.italic is None else text_run.italic
                font.color.rgb = _rgb(text_run.color or op.color)


def pack(
    document: Document,
    style: StyleConfig,
    *,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> bytes:
    """Render ``document`` with ``style`` and return the .pptx bytes."""
    if not document.slides:
        raise InvalidInputError(["document.slides must contain at least one slide"])
    settings = settings or Settings()
    theme = resolve_effective_theme(style, fallback=settings.fallback_theme)
    packager = DeckPackager(document, style, theme, settings=settings, cancel_event=cancel_event)
    blob = packager.to_bytes()
    logger.info("Packed %d slide(s) for %r (%d bytes)", len(document.slides), document.title, len(blob))
    return blob
