# -*- coding: utf-8 -*-
"""Image decoding into the interleaved byte layout the pixel grid expects."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from picdiff.models.picture import Picture

logger = logging.getLogger(__name__)


def picture_from_array(
    pixels: np.ndarray,
    file_path: str | Path | None = None,
    *,
    strict_buffer: bool = False,
) -> Picture:
    """Wrap an ``(H, W, 3)`` RGB or ``(H, W, 4)`` RGBA uint8 array as a Picture.

    Channels are reordered to BGR, or ABGR when alpha is present.
    """
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3|4) array, got shape {pixels.shape}")
    height, width, channels = pixels.shape
    has_alpha = channels == 4
    order = [3, 2, 1, 0] if has_alpha else [2, 1, 0]
    raw = np.ascontiguousarray(pixels[..., order], dtype=np.uint8).tobytes()
    return Picture(raw, width, height, has_alpha, file_path, strict_buffer=strict_buffer)


def decode_image(image: Image.Image, file_path: str | Path | None = None, *, strict_buffer: bool = False) -> Picture:
    """Convert a Pillow image, keeping the alpha channel only if the source has one."""
    has_alpha = image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info)
    converted = image.convert("RGBA" if has_alpha else "RGB")
    return picture_from_array(np.asarray(converted), file_path, strict_buffer=strict_buffer)


def load_picture(path: str | Path, *, strict_buffer: bool = False) -> Picture:
    """Decode an image file from disk."""
    file_path = Path(path)
    with Image.open(file_path) as image:
        image.load()
        picture = decode_image(image, file_path, strict_buffer=strict_buffer)
    logger.debug("Loaded %s (%dx%d, alpha=%s)", file_path, picture.width, picture.height, picture.has_alpha_channel)
    return picture
