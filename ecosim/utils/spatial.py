"""
Spatial utilities for the predator-prey grid.

Provides bounded (non-wrapping) grid math: bounds checks, orthogonal
neighbor enumeration, and uniform random placement.

All functions assume a 2D grid with dimensions (width, height) where
valid coordinates satisfy 0 <= x < width and 0 <= y < height.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ecosim.core.position import Position


# Enumeration order is fixed so a seeded generator always picks the same cell.
DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    """True if (x, y) lies inside [0, width) x [0, height)."""
    return 0 <= x < width and 0 <= y < height


def neighbors(
    position: Position,
    width: int,
    height: int,
    blocked: Iterable[Position] | frozenset[Position] = frozenset(),
) -> list[Position]:
    """
    List the orthogonally adjacent cells an animal may legally step onto.

    A cell qualifies when it is in bounds and not occupied by an obstacle.
    Other animals never block a move.

    Args:
        position: Current cell.
        width, height: Grid dimensions.
        blocked: Obstacle positions (a set is fastest).

    Returns:
        Legal cells in DIRECTIONS order (0 to 4 entries).
    """
    if not isinstance(blocked, (set, frozenset)):
        blocked = frozenset(blocked)

    cells = []
    for dx, dy in DIRECTIONS:
        x = position.x + dx
        y = position.y + dy
        if in_bounds(x, y, width, height):
            candidate = Position(x, y)
            if candidate not in blocked:
                cells.append(candidate)
    return cells


def random_position(width: int, height: int, rng: np.random.Generator) -> Position:
    """
    Draw a uniformly random in-bounds cell (x first, then y).

    Args:
        width, height: Grid dimensions.
        rng: Random generator.

    Returns:
        A new Position.
    """
    x = int(rng.integers(0, width))
    y = int(rng.integers(0, height))
    return Position(x, y)


def choose(cells: list[Position], rng: np.random.Generator) -> Position:
    """Pick one cell uniformly at random. `cells` must be non-empty."""
    return cells[int(rng.integers(0, len(cells)))]
