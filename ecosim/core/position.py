"""
Grid position value type.

Positions compare by value, so two animals standing on the same cell
hold equal (but not necessarily identical) Position objects.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """An (x, y) grid cell."""
    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
