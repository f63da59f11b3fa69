"""Background image compositing: a cover-cropped picture plus a readability scrim."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .models import ImageData
from .ops import CANVAS_HEIGHT, CANVAS_WIDTH, Picture, Rect, SlideRender

logger = logging.getLogger(__name__)

# Right half of the canvas.
IMAGE_REGION = (CANVAS_WIDTH / 2, 0.0, CANVAS_WIDTH / 2, CANVAS_HEIGHT)
SCRIM_TRANSPARENCY = 0.5
# Formats python-pptx can embed as-is; anything else is re-encoded as PNG.
EMBEDDABLE_FORMATS = frozenset({"PNG", "JPEG", "GIF", "BMP", "TIFF"})


def decode_image(image: ImageData) -> Optional[Tuple[bytes, Tuple[int, int]]]:
    """Return ``(blob, (width, height))``, or None when the payload is not a readable image."""
    try:
        # MIME encoders wrap at 76 columns.
        blob = base64.b64decode("".join(image.data.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Image payload is not valid base64: %s", exc)
        return None

    try:
        with Image.open(io.BytesIO(blob)) as im:
            im.verify()
        with Image.open(io.BytesIO(blob)) as im:
            size = im.size
            if im.format not in EMBEDDABLE_FORMATS:
                out = io.BytesIO()
                im.convert("RGBA").save(out, format="PNG")
                blob = out.getvalue()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        logger.warning("Image payload could not be decoded (%s): %s", image.mime_type, exc)
        return None

    if size[0] <= 0 or size[1] <= 0:
        logger.warning("Image payload has empty dimensions %s", size)
        return None
    return blob, size


def cover_crop(image_size: Tuple[int, int], box_size: Tuple[float, float]) -> Tuple[float, float, float, float]:
    """Edge fractions ``(left, top, right, bottom)`` that fill the box keeping aspect ratio."""
    iw, ih = image_size
    bw, bh = box_size
    ratio = iw / max(1, ih)
    box_ratio = bw / bh
    if ratio > box_ratio:
        side = (1 - box_ratio / ratio) / 2
        return side, 0.0, side, 0.0
    if ratio < box_ratio:
        side = (1 - ratio / box_ratio) / 2
        return 0.0, side, 0.0, side
    return 0.0, 0.0, 0.0, 0.0


def composite(render: SlideRender, image: Optional[ImageData]) -> SlideRender:
    """Put ``image`` under the slide's layout ops, with a half-transparent scrim on top of it.

    The scrim takes the slide's own background color so the text drawn over it
    keeps its contrast.

    An image that fails to decode is logged and skipped; the slide still renders.
    """
    if image is None:
        return render

    decoded = decode_image(image)
    if decoded is None:
        return render
    blob, size = decoded

    x, y, w, h = IMAGE_REGION
    picture = Picture(x=x, y=y, w=w, h=h, blob=blob, crop=cover_crop(size, (w, h)))
    scrim = Rect(x=x, y=y, w=w, h=h, fill=render.background.color, transparency=SCRIM_TRANSPARENCY)
    return render.with_ops((picture, scrim, *render.ops))
