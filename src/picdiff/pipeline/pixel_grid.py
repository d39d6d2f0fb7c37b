# -*- coding: utf-8 -*-
"""Conversion of interleaved raw pixel bytes into packed ARGB grids."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)

ALPHA_OPAQUE = 0xFF

PixelGrid = np.ndarray


class TruncatedBufferError(ValueError):
    """Raised in strict mode when a buffer is shorter than its declared geometry."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Pixel buffer holds {actual} bytes, expected at least {expected}")
        self.expected = expected
        self.actual = actual


def bytes_per_pixel(has_alpha_channel: bool) -> int:
    return 4 if has_alpha_channel else 3


def load_pixel_grid(
    raw_bytes: bytes | bytearray | memoryview,
    width: int,
    height: int,
    has_alpha_channel: bool,
    *,
    strict: bool = False,
) -> PixelGrid:
    """Build a read-only ``(height, width)`` uint32 grid of packed ARGB values.

    Byte order per pixel is ``(alpha, blue, green, red)`` with an alpha
    channel and ``(blue, green, red)`` without one, in which case alpha is
    forced to 255. A short buffer fills as many whole pixels as it holds
    and leaves the rest at zero, unless ``strict`` is set.
    """
    width = max(0, int(width))
    height = max(0, int(height))
    stride = bytes_per_pixel(has_alpha_channel)
    total_pixels = width * height
    expected = total_pixels * stride

    data = np.frombuffer(raw_bytes, dtype=np.uint8)
    if data.size < expected:
        if strict:
            raise TruncatedBufferError(expected, int(data.size))
        logger.debug("Buffer of %d bytes is short of %d, decoding partially", data.size, expected)

    decodable = min(total_pixels, data.size // stride)
    groups = data[: decodable * stride].reshape(decodable, stride).astype(np.uint32)

    flat = np.zeros(total_pixels, dtype=np.uint32)
    if has_alpha_channel:
        alpha = groups[:, 0]
        blue, green, red = groups[:, 1], groups[:, 2], groups[:, 3]
    else:
        alpha = np.uint32(ALPHA_OPAQUE)
        blue, green, red = groups[:, 0], groups[:, 1], groups[:, 2]
    flat[:decodable] = (alpha << 24) | (red << 16) | (green << 8) | blue

    grid = flat.reshape(height, width)
    grid.flags.writeable = False
    return grid


def describe_grid(grid: PixelGrid | None) -> str:
    """Render grid dimensions as ``[height:width]`` for log lines."""
    if grid is None:
        return "[null:null]"
    if grid.shape[0] < 1:
        return "[0:null]"
    return f"[{grid.shape[0]}:{grid.shape[1]}]"
