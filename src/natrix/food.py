"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from natrix.grid import HEIGHT, WIDTH
from natrix.tile import Tile

if TYPE_CHECKING:
    from natrix.grid import GridMap

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


class FoodPlacer:
    """Drops food on uniformly random empty cells.

    Draws random coordinates and resamples while the cell is occupied.
    After *max_attempts* misses it picks directly among the remaining
    empty cells, so a nearly full board still terminates.
    """

    def __init__(
        self,
        grid: GridMap,
        rng: np.random.Generator | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def place(self) -> tuple[int, int] | None:
        """Put one food tile on the grid.

        Returns its position, or ``None`` when the grid has no empty cell.
        """
        for _ in range(self.max_attempts):
            x = int(self.rng.integers(WIDTH))
            y = int(self.rng.integers(HEIGHT))
            if self.grid.get(x, y).is_empty:
                self.grid.set(x, y, Tile.food())
                return x, y

        empty = self.grid.empty_cells()
        if not empty:
            logger.info("No empty cells left for food.")
            return None

        logger.debug(
            "Food resampling gave up after %d attempts; %d empty cells left.",
            self.max_attempts, len(empty),
        )
        x, y = empty[int(self.rng.integers(len(empty)))]
        self.grid.set(x, y, Tile.food())
        return x, y
