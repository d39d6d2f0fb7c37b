# -*- coding: utf-8 -*-
"""Tests for the picture model and its comparison methods."""

from __future__ import annotations

from pathlib import Path

import pytest

from picdiff.models.comparison import CompareMode, CompareOptions, Containment
from picdiff.models.picture import Picture
from picdiff.models.position import ORIGIN, Position


def test_pixel_values_are_built_once() -> None:
    picture = Picture(bytes([0x10, 0x20, 0x30]), 1, 1, False, "shots/home.png")
    assert picture.has_pixel_values is False
    first = picture.pixel_values
    assert picture.has_pixel_values is True
    assert picture.pixel_values is first
    assert int(first[0, 0]) == 0xFF302010


def test_name_comes_from_file_path() -> None:
    picture = Picture(b"", 0, 0, False, Path("shots") / "home.png")
    assert picture.name == "home.png"
    assert Picture(b"", 0, 0, False).name == "<memory>"


def test_buffer_is_copied() -> None:
    raw = bytearray([1, 2, 3])
    picture = Picture(raw, 1, 1, False)
    raw[0] = 99
    assert picture.raw_bytes == bytes([1, 2, 3])


def test_comparison_methods_delegate(make_picture) -> None:
    a = make_picture([[0, 0], [0, 0]])
    b = make_picture([[0, 0], [0, 0xFFFFFF]])
    assert a.number_of_different_pixels(b) == 1
    assert a.maximum_difference(b) == 1.0
    assert a.average_difference(b) == 1.0
    assert a.differences(b) == [1.0]
    assert a.summary(b).different_pixels == 1
    assert not a.equals(b)
    assert a.equals(b, CompareOptions.within_count(1))
    assert a.equals(a)


def test_contains_not_supported(make_picture) -> None:
    a = make_picture([[0]])
    assert a.contains(a, 0.1) is Containment.UNSUPPORTED


def test_position_rejects_negative_offsets() -> None:
    with pytest.raises(ValueError):
        Position(-1, 0)
    assert ORIGIN == Position(0, 0)


def test_compare_options_validation() -> None:
    assert CompareOptions().mode is CompareMode.EXACT
    assert CompareOptions(mode="threshold", threshold=0.3).mode is CompareMode.THRESHOLD
    with pytest.raises(ValueError):
        CompareOptions(mode="fuzzy")
    with pytest.raises(ValueError):
        CompareOptions.within_threshold(-0.1)
    with pytest.raises(ValueError):
        CompareOptions.within_count(-1)


@pytest.mark.parametrize("threshold", [float("nan"), float("inf")])
def test_compare_options_rejects_non_finite_threshold(threshold: float) -> None:
    with pytest.raises(ValueError):
        CompareOptions.within_threshold(threshold)
