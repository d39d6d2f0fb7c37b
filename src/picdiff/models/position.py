# -*- coding: utf-8 -*-
"""Alignment offset data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Column/row offset into the first picture where the second one's origin sits."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position must be non-negative, got ({self.x}, {self.y})")


ORIGIN = Position(0, 0)
