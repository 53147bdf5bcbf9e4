"""Shrink images to fit within a bounding box, keeping aspect ratio."""
import logging
from typing import Tuple

from PIL import Image

logger = logging.getLogger("imageproc.resize")


def fit_within(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Target size for an image of (width, height) bounded by (max_width, max_height).
    Never upscales: returns the input size when it already fits, or when a bound
    is not positive. The binding side is chosen by comparing cross-products so no
    float ratio is involved; the other side is truncated (minimum 1).
    """
    if max_width <= 0 or max_height <= 0:
        return width, height
    if width <= max_width and height <= max_height:
        return width, height
    if width * max_height > height * max_width:
        new_w = max_width
        new_h = height * max_width // width
    else:
        new_h = max_height
        new_w = width * max_height // height
    return max(1, new_w), max(1, new_h)


def resize_keep_aspect(img: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Lanczos-resample img down to fit within the bounds. Returns img itself when no resize is needed."""
    w, h = img.size
    new_w, new_h = fit_within(w, h, max_width, max_height)
    if (new_w, new_h) == (w, h):
        return img
    # Pillow falls back to NEAREST for palette and bilevel images
    if img.mode in ("P", "1"):
        img = img.convert("RGBA" if "transparency" in img.info else "RGB")
    logger.debug("Resizing %sx%s -> %sx%s", w, h, new_w, new_h)
    return img.resize((new_w, new_h), Image.Resampling.LANCZOS)
