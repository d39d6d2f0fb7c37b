# -*- coding: utf-8 -*-
"""Decoded picture data model."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from picdiff.models.comparison import CompareOptions, Containment, DiffSummary
from picdiff.models.position import ORIGIN, Position
from picdiff.pipeline.pixel_grid import PixelGrid, load_pixel_grid

if TYPE_CHECKING:
    from picdiff.pipeline.differ import Differ


class Picture:
    """A decoded image: raw interleaved bytes plus geometry.

    The buffer is copied into immutable ``bytes`` on construction, so the
    cached pixel grid never needs invalidating.
    """

    def __init__(
        self,
        raw_bytes: bytes | bytearray | memoryview,
        width: int,
        height: int,
        has_alpha_channel: bool,
        file_path: str | Path | None = None,
        *,
        strict_buffer: bool = False,
    ) -> None:
        self._raw_bytes = bytes(raw_bytes)
        self._width = int(width)
        self._height = int(height)
        self._has_alpha_channel = bool(has_alpha_channel)
        self._file_path = Path(file_path) if file_path is not None else None
        self._strict_buffer = strict_buffer
        self._pixel_values: PixelGrid | None = None
        self._has_pixel_values = False

    def __repr__(self) -> str:
        return f"Picture(name={self.name!r}, width={self._width}, height={self._height}, alpha={self._has_alpha_channel})"

    @property
    def name(self) -> str:
        return self._file_path.name if self._file_path is not None else "<memory>"

    @property
    def file_path(self) -> Path | None:
        return self._file_path

    @property
    def raw_bytes(self) -> bytes:
        return self._raw_bytes

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def has_alpha_channel(self) -> bool:
        return self._has_alpha_channel

    @property
    def has_pixel_values(self) -> bool:
        return self._has_pixel_values

    @property
    def pixel_values(self) -> PixelGrid:
        """Packed ARGB grid, built on first access."""
        if not self._has_pixel_values:
            self._pixel_values = load_pixel_grid(
                self._raw_bytes,
                self._width,
                self._height,
                self._has_alpha_channel,
                strict=self._strict_buffer,
            )
            self._has_pixel_values = True
        return self._pixel_values

    # Comparisons delegate to the module-level engine.

    def _differ(self) -> Differ:
        from picdiff.pipeline.differ import Differ

        return Differ()

    def equals(self, other: Picture, options: CompareOptions | None = None) -> bool:
        return self._differ().compare_equal(self, other, options)

    def differences(self, other: Picture, offset: Position = ORIGIN) -> list[float]:
        return self._differ().differences(self, other, offset)

    def number_of_different_pixels(self, other: Picture, offset: Position = ORIGIN) -> int:
        return self._differ().count_different_pixels(self, other, offset)

    def maximum_difference(self, other: Picture, offset: Position = ORIGIN) -> float:
        return self._differ().max_difference(self, other, offset)

    def average_difference(self, other: Picture, offset: Position = ORIGIN) -> float:
        return self._differ().average_difference(self, other, offset)

    def summary(self, other: Picture, offset: Position = ORIGIN) -> DiffSummary:
        return self._differ().summarize(self, other, offset)

    def contains(self, sub_picture: Picture, threshold: float = 0.0) -> Containment:
        return self._differ().contains(self, sub_picture, threshold)
