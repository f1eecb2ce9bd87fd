"""
Obstacle for the predator-prey grid.

Obstacles are placed once at initialization and never change. They block
movement onto their cell but do not evict anything already there, and
plants may still spawn on top of them.
"""

from __future__ import annotations

from dataclasses import dataclass

from ecosim.core.position import Position


@dataclass(frozen=True, slots=True)
class Obstacle:
    """An impassable cell."""
    position: Position

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    def __repr__(self) -> str:
        return f"Obstacle(pos=({self.x},{self.y}))"
