"""
Unit tests for spatial utilities (bounded grid math).

Tests cover:
- Bounds checking
- Neighbor enumeration (bounds, obstacles, fixed order)
- Random placement
- choose() with a seeded generator
"""

import numpy as np
import pytest

from ecosim.core.position import Position
from ecosim.utils.spatial import (
    DIRECTIONS,
    choose,
    in_bounds,
    neighbors,
    random_position,
)


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------

class TestInBounds:
    def test_origin(self):
        assert in_bounds(0, 0, 10, 10) is True

    def test_far_corner(self):
        assert in_bounds(9, 9, 10, 10) is True

    def test_width_is_exclusive(self):
        assert in_bounds(10, 0, 10, 10) is False

    def test_height_is_exclusive(self):
        assert in_bounds(0, 10, 10, 10) is False

    def test_negative(self):
        assert in_bounds(-1, 0, 10, 10) is False
        assert in_bounds(0, -1, 10, 10) is False

    def test_no_wrapping(self):
        """The grid is bounded, not toroidal."""
        assert in_bounds(-1, -1, 3, 3) is False


# ---------------------------------------------------------------------------
# Neighbors
# ---------------------------------------------------------------------------

class TestNeighbors:
    def test_interior_cell_has_four(self):
        result = neighbors(Position(5, 5), 10, 10)
        assert len(result) == 4

    def test_fixed_order(self):
        result = neighbors(Position(5, 5), 10, 10)
        assert result == [Position(4, 5), Position(6, 5), Position(5, 4), Position(5, 6)]

    def test_order_matches_directions(self):
        result = neighbors(Position(1, 1), 3, 3)
        assert result == [Position(1 + dx, 1 + dy) for dx, dy in DIRECTIONS]

    def test_corner_has_two(self):
        result = neighbors(Position(0, 0), 10, 10)
        assert result == [Position(1, 0), Position(0, 1)]

    def test_edge_has_three(self):
        result = neighbors(Position(9, 5), 10, 10)
        assert set(result) == {Position(8, 5), Position(9, 4), Position(9, 6)}

    def test_obstacles_excluded(self):
        blocked = {Position(4, 5), Position(5, 6)}
        result = neighbors(Position(5, 5), 10, 10, blocked)
        assert result == [Position(6, 5), Position(5, 4)]

    def test_obstacles_as_list(self):
        result = neighbors(Position(5, 5), 10, 10, [Position(4, 5)])
        assert Position(4, 5) not in result
        assert len(result) == 3

    def test_fully_boxed_in(self):
        blocked = {Position(0, 1), Position(2, 1), Position(1, 0), Position(1, 2)}
        assert neighbors(Position(1, 1), 3, 3, blocked) == []

    def test_single_cell_grid(self):
        assert neighbors(Position(0, 0), 1, 1) == []

    def test_obstacle_on_own_cell_does_not_matter(self):
        result = neighbors(Position(5, 5), 10, 10, {Position(5, 5)})
        assert len(result) == 4

    def test_pure_function(self):
        blocked = {Position(4, 5)}
        first = neighbors(Position(5, 5), 10, 10, blocked)
        second = neighbors(Position(5, 5), 10, 10, blocked)
        assert first == second
        assert blocked == {Position(4, 5)}


# ---------------------------------------------------------------------------
# Random placement
# ---------------------------------------------------------------------------

class TestRandomPosition:
    def test_within_bounds(self):
        rng = np.random.default_rng(42)
        for _ in range(500):
            p = random_position(7, 3, rng)
            assert 0 <= p.x < 7
            assert 0 <= p.y < 3

    def test_deterministic_with_seed(self):
        a = [random_position(20, 20, np.random.default_rng(1)) for _ in range(3)]
        b = [random_position(20, 20, np.random.default_rng(1)) for _ in range(3)]
        assert a == b

    def test_covers_grid(self):
        rng = np.random.default_rng(0)
        seen = {random_position(3, 3, rng) for _ in range(500)}
        assert len(seen) == 9

    def test_returns_plain_ints(self):
        p = random_position(5, 5, np.random.default_rng(3))
        assert type(p.x) is int
        assert type(p.y) is int


class TestChoose:
    def test_single_option(self):
        rng = np.random.default_rng(0)
        assert choose([Position(2, 2)], rng) == Position(2, 2)

    def test_picks_from_options(self):
        rng = np.random.default_rng(7)
        options = [Position(0, 1), Position(1, 0)]
        for _ in range(50):
            assert choose(options, rng) in options

    def test_roughly_uniform(self):
        rng = np.random.default_rng(123)
        options = [Position(i, 0) for i in range(4)]
        counts = {p: 0 for p in options}
        for _ in range(4000):
            counts[choose(options, rng)] += 1
        for c in counts.values():
            assert 800 < c < 1200
