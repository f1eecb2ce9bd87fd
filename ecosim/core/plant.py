"""
Plant resource for the predator-prey grid.

Plants have no identity beyond their cell. Several may share a cell;
a herbivore eating there removes exactly one of them.
"""

from __future__ import annotations

from dataclasses import dataclass

from ecosim.core.position import Position


@dataclass(frozen=True, slots=True)
class Plant:
    """A plant growing on the grid."""
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
        return f"Plant(pos=({self.x},{self.y}))"
