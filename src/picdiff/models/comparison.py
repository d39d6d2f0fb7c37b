# -*- coding: utf-8 -*-
"""Comparison option and result data models."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from picdiff.models.position import ORIGIN, Position


class CompareMode(str, Enum):
    """How a difference sequence decides equality."""

    EXACT = "exact"
    THRESHOLD = "threshold"
    COUNT = "count"


@dataclass(frozen=True)
class CompareOptions:
    """Configuration record for a single equality check.

    `threshold` is only read in THRESHOLD mode and `allowed_differences`
    only in COUNT mode.
    """

    offset: Position = field(default=ORIGIN)
    mode: CompareMode = CompareMode.EXACT
    threshold: float = 0.0
    allowed_differences: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", CompareMode(self.mode))
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise ValueError(f"threshold must be a finite number >= 0, got {self.threshold!r}")
        if self.allowed_differences < 0:
            raise ValueError("allowed_differences must be >= 0")

    @classmethod
    def exact(cls, offset: Position = ORIGIN) -> CompareOptions:
        return cls(offset=offset, mode=CompareMode.EXACT)

    @classmethod
    def within_threshold(cls, threshold: float, offset: Position = ORIGIN) -> CompareOptions:
        return cls(offset=offset, mode=CompareMode.THRESHOLD, threshold=float(threshold))

    @classmethod
    def within_count(cls, allowed_differences: int, offset: Position = ORIGIN) -> CompareOptions:
        return cls(offset=offset, mode=CompareMode.COUNT, allowed_differences=int(allowed_differences))


@dataclass
class DiffSummary:
    """Metrics derived from one pass over a difference sequence."""

    offset: Position
    compared_pixels: int
    different_pixels: int
    max_difference: float
    average_difference: float

    @property
    def different_ratio(self) -> float:
        if self.compared_pixels == 0:
            return 0.0
        return self.different_pixels / self.compared_pixels

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["offset"] = {"x": self.offset.x, "y": self.offset.y}
        data["different_ratio"] = round(self.different_ratio, 6)
        return data


class Containment(Enum):
    """Outcome of a sub-picture search."""

    CONTAINED = "contained"
    NOT_CONTAINED = "not_contained"
    UNSUPPORTED = "unsupported"

    def __bool__(self) -> bool:
        if self is Containment.UNSUPPORTED:
            raise TypeError("Sub-picture containment is not supported yet; check for Containment.UNSUPPORTED")
        return self is Containment.CONTAINED
