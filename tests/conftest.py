# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def bgr_bytes(pixels: list[list[tuple[int, int, int]]]) -> bytes:
    """Flatten rows of (blue, green, red) tuples into an interleaved buffer."""
    return bytes(channel for row in pixels for pixel in row for channel in pixel)


@pytest.fixture
def make_picture():
    """Build an opaque Picture from rows of packed 24-bit RGB integers."""
    from picdiff.models.picture import Picture

    def _make(rows: list[list[int]]) -> Picture:
        height = len(rows)
        width = len(rows[0]) if rows else 0
        raw = bytearray()
        for row in rows:
            for value in row:
                raw.extend((value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF))
        return Picture(bytes(raw), width, height, False)

    return _make


@pytest.fixture
def random_rgb() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(6, 5, 3), dtype=np.uint8)


@pytest.fixture
def write_png(tmp_path: Path):
    """Write an (H, W, 3|4) uint8 array as a PNG in tmp_path."""
    from PIL import Image

    def _write(name: str, pixels: np.ndarray) -> Path:
        path = tmp_path / name
        Image.fromarray(pixels).save(path)
        return path

    return _write


@pytest.fixture
def default_config() -> dict:
    from picdiff.config import get_default_config

    return get_default_config()
