# -*- coding: utf-8 -*-
"""Offset-aligned pixel difference engine."""

from __future__ import annotations

import logging

import numpy as np

from picdiff.models.comparison import CompareMode, CompareOptions, Containment, DiffSummary
from picdiff.models.picture import Picture
from picdiff.models.position import ORIGIN, Position
from picdiff.pipeline.pixel_grid import PixelGrid, describe_grid

logger = logging.getLogger(__name__)

WHITE = 16777215
BLACK = 0

GridSource = PixelGrid | Picture


class DimensionMismatchError(ValueError):
    """Raised when the second grid does not fit the first at the given offset."""

    def __init__(self, expected: tuple[int, int], available: tuple[int, int], offset: Position) -> None:
        super().__init__(
            f"Grid of size {expected[0]}x{expected[1]} (h x w) does not match the "
            f"{available[0]}x{available[1]} region at offset ({offset.x}, {offset.y})"
        )
        self.expected = expected
        self.available = available
        self.offset = offset


def _as_grid(source: GridSource) -> PixelGrid:
    if isinstance(source, Picture):
        return source.pixel_values
    return np.asarray(source, dtype=np.uint32)


class Differ:
    """Compute per-pixel differences and the metrics derived from them.

    With ``strict_geometry`` a second grid that does not exactly cover the
    first one's extent past the offset raises ``DimensionMismatchError``.
    Otherwise the mismatch is logged and only the overlapping region is scanned.
    """

    def __init__(self, strict_geometry: bool = True) -> None:
        self.strict_geometry = strict_geometry

    def _aligned_regions(
        self, grid_a: PixelGrid, grid_b: PixelGrid, offset: Position
    ) -> tuple[PixelGrid, PixelGrid]:
        logger.debug("This size: %s", describe_grid(grid_a))
        logger.debug("Other size: %s", describe_grid(grid_b))

        available = (max(0, grid_a.shape[0] - offset.y), max(0, grid_a.shape[1] - offset.x))
        expected = (grid_b.shape[0], grid_b.shape[1])
        if available != expected:
            if self.strict_geometry:
                raise DimensionMismatchError(expected, available, offset)
            if available[0] != expected[0]:
                logger.warning("Image height does not match: %d vs %d", available[0], expected[0])
            if available[1] != expected[1]:
                logger.warning("Image width does not match: %d vs %d", available[1], expected[1])

        rows = min(available[0], expected[0])
        cols = min(available[1], expected[1])
        region_a = grid_a[offset.y : offset.y + rows, offset.x : offset.x + cols]
        region_b = grid_b[:rows, :cols]
        return region_a, region_b

    def _scan(self, source_a: GridSource, source_b: GridSource, offset: Position) -> tuple[int, np.ndarray]:
        region_a, region_b = self._aligned_regions(_as_grid(source_a), _as_grid(source_b), offset)
        raw = np.abs(region_a.astype(np.int64) - region_b.astype(np.int64)).ravel()
        values = np.minimum(raw[raw > 0] / float(WHITE), 1.0)
        logger.debug("Size of differences: %d", values.size)
        return int(raw.size), values

    def _difference_array(self, source_a: GridSource, source_b: GridSource, offset: Position) -> np.ndarray:
        return self._scan(source_a, source_b, offset)[1]

    def differences(self, source_a: GridSource, source_b: GridSource, offset: Position = ORIGIN) -> list[float]:
        """Return the normalized non-zero differences in row-major scan order."""
        return self._difference_array(source_a, source_b, offset).tolist()

    def count_different_pixels(self, source_a: GridSource, source_b: GridSource, offset: Position = ORIGIN) -> int:
        return int(self._difference_array(source_a, source_b, offset).size)

    def max_difference(self, source_a: GridSource, source_b: GridSource, offset: Position = ORIGIN) -> float:
        values = self._difference_array(source_a, source_b, offset)
        if values.size == 0:
            return 0.0
        return float(values.max())

    def average_difference(self, source_a: GridSource, source_b: GridSource, offset: Position = ORIGIN) -> float:
        """Mean over differing pixels only; identical pixels do not dilute it."""
        values = self._difference_array(source_a, source_b, offset)
        if values.size == 0:
            return 0.0
        return float(values.sum() / values.size)

    def summarize(self, source_a: GridSource, source_b: GridSource, offset: Position = ORIGIN) -> DiffSummary:
        compared, values = self._scan(source_a, source_b, offset)
        return DiffSummary(
            offset=offset,
            compared_pixels=compared,
            different_pixels=int(values.size),
            max_difference=float(values.max()) if values.size else 0.0,
            average_difference=float(values.sum() / values.size) if values.size else 0.0,
        )

    def compare_equal(
        self, source_a: GridSource, source_b: GridSource, options: CompareOptions | None = None
    ) -> bool:
        options = options or CompareOptions()
        if options.mode is CompareMode.THRESHOLD:
            return self.max_difference(source_a, source_b, options.offset) <= options.threshold
        if options.mode is CompareMode.COUNT:
            return self.count_different_pixels(source_a, source_b, options.offset) <= options.allowed_differences
        return self.count_different_pixels(source_a, source_b, options.offset) == 0

    def has_changed(self, source_a: GridSource, source_b: GridSource, threshold: float = 0.0) -> bool:
        return self.max_difference(source_a, source_b) > threshold

    def contains(self, picture: GridSource, sub_picture: GridSource, threshold: float = 0.0) -> Containment:
        """Sub-picture search is not implemented; always reports UNSUPPORTED."""
        del picture, sub_picture
        logger.info("Containment check requested (threshold=%s) but is not supported", threshold)
        return Containment.UNSUPPORTED


_default_differ = Differ()


def differences(grid_a: GridSource, grid_b: GridSource, offset: Position = ORIGIN) -> list[float]:
    return _default_differ.differences(grid_a, grid_b, offset)


def count_different_pixels(grid_a: GridSource, grid_b: GridSource, offset: Position = ORIGIN) -> int:
    return _default_differ.count_different_pixels(grid_a, grid_b, offset)


def max_difference(grid_a: GridSource, grid_b: GridSource, offset: Position = ORIGIN) -> float:
    return _default_differ.max_difference(grid_a, grid_b, offset)


def average_difference(grid_a: GridSource, grid_b: GridSource, offset: Position = ORIGIN) -> float:
    return _default_differ.average_difference(grid_a, grid_b, offset)


def summarize(grid_a: GridSource, grid_b: GridSource, offset: Position = ORIGIN) -> DiffSummary:
    return _default_differ.summarize(grid_a, grid_b, offset)


def compare_equal(grid_a: GridSource, grid_b: GridSource, options: CompareOptions | None = None) -> bool:
    return _default_differ.compare_equal(grid_a, grid_b, options)


def contains(picture: GridSource, sub_picture: GridSource, threshold: float = 0.0) -> Containment:
    return _default_differ.contains(picture, sub_picture, threshold)
