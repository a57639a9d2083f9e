"""Tests for the FoodPlacer module."""

import numpy as np
import pytest

from natrix.food import FoodPlacer
from natrix.grid import HEIGHT, WIDTH, GridMap
from natrix.tile import Tile, TileKind


def _food_cells(grid):
    ys, xs = np.nonzero(grid.kinds() == TileKind.FOOD)
    return list(zip(xs.tolist(), ys.tolist()))


class TestFoodPlacerInit:
    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="at least 1"):
            FoodPlacer(GridMap(), max_attempts=0)

    def test_default_rng(self):
        placer = FoodPlacer(GridMap())
        assert isinstance(placer.rng, np.random.Generator)


class TestFoodPlacement:
    def test_place_one(self):
        grid = GridMap()
        placer = FoodPlacer(grid, rng=np.random.default_rng(42))
        pos = placer.place()
        assert pos is not None
        assert grid.get(*pos) == Tile.food()
        assert _food_cells(grid) == [pos]

    def test_deterministic(self):
        """Same seed produces the same food position."""
        assert self._place_with_seed(7) == self._place_with_seed(7)

    def test_never_on_occupied_cell(self):
        grid = GridMap()
        for x in range(WIDTH):
            for y in range(HEIGHT):
                if (x + y) % 2:
                    grid.set(x, y, Tile.wall())
        placer = FoodPlacer(grid, rng=np.random.default_rng(3))
        for _ in range(20):
            x, y = placer.place()
            assert (x + y) % 2 == 0

    def test_fallback_finds_last_empty_cell(self):
        grid = GridMap()
        grid.cells[:] = Tile.wall().encode()
        grid.set(17, 9, Tile.empty())
        placer = FoodPlacer(grid, rng=np.random.default_rng(0), max_attempts=1)
        assert placer.place() == (17, 9)
        assert grid.get(17, 9) == Tile.food()

    def test_full_grid_returns_none(self):
        grid = GridMap()
        grid.cells[:] = Tile.vertical().encode()
        placer = FoodPlacer(grid, rng=np.random.default_rng(0), max_attempts=5)
        assert placer.place() is None
        assert _food_cells(grid) == []

    @staticmethod
    def _place_with_seed(seed):
        grid = GridMap()
        return FoodPlacer(grid, rng=np.random.default_rng(seed)).place()
