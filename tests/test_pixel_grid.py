# -*- coding: utf-8 -*-
"""Tests for the packed ARGB grid builder."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import bgr_bytes
from picdiff.pipeline.pixel_grid import TruncatedBufferError, describe_grid, load_pixel_grid


def test_alpha_layout_packs_argb() -> None:
    grid = load_pixel_grid(bytes([0xFF, 0x10, 0x20, 0x30]), 1, 1, True)
    assert int(grid[0, 0]) == 0xFF302010


def test_opaque_layout_forces_alpha() -> None:
    grid = load_pixel_grid(bytes([0x10, 0x20, 0x30]), 1, 1, False)
    assert int(grid[0, 0]) == 0xFF302010


def test_transparent_alpha_is_kept() -> None:
    grid = load_pixel_grid(bytes([0x00, 0x01, 0x02, 0x03]), 1, 1, True)
    assert int(grid[0, 0]) == 0x00030201


def test_grid_shape_is_height_by_width() -> None:
    raw = bgr_bytes([[(1, 2, 3), (4, 5, 6), (7, 8, 9)], [(0, 0, 0), (9, 9, 9), (255, 255, 255)]])
    grid = load_pixel_grid(raw, 3, 2, False)
    assert grid.shape == (2, 3)
    assert grid.dtype == np.uint32
    assert int(grid[1, 2]) == 0xFFFFFFFF
    assert int(grid[0, 1]) == 0xFF060504


def test_short_buffer_leaves_remaining_pixels_zero() -> None:
    # two whole pixels and one dangling byte for a 2x2 picture
    raw = bytes([1, 2, 3, 4, 5, 6, 7])
    grid = load_pixel_grid(raw, 2, 2, False)
    assert grid.shape == (2, 2)
    assert int(grid[0, 0]) == 0xFF030201
    assert int(grid[0, 1]) == 0xFF060504
    assert grid[1].tolist() == [0, 0]


def test_short_buffer_raises_in_strict_mode() -> None:
    with pytest.raises(TruncatedBufferError) as excinfo:
        load_pixel_grid(bytes(10), 2, 2, True, strict=True)
    assert excinfo.value.expected == 16
    assert excinfo.value.actual == 10


def test_trailing_bytes_are_ignored() -> None:
    grid = load_pixel_grid(bytes([1, 2, 3, 99, 98]), 1, 1, False)
    assert grid.tolist() == [[0xFF030201]]


def test_grid_is_read_only() -> None:
    grid = load_pixel_grid(bytes(3), 1, 1, False)
    with pytest.raises(ValueError):
        grid[0, 0] = 1


def test_rebuilding_yields_identical_grid(random_rgb: np.ndarray) -> None:
    raw = random_rgb.tobytes()
    first = load_pixel_grid(raw, 5, 6, False)
    second = load_pixel_grid(raw, 5, 6, False)
    assert np.array_equal(first, second)


def test_describe_grid() -> None:
    assert describe_grid(None) == "[null:null]"
    assert describe_grid(load_pixel_grid(b"", 0, 0, False)) == "[0:null]"
    assert describe_grid(load_pixel_grid(bytes(18), 3, 2, False)) == "[2:3]"
