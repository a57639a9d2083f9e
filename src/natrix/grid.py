"""Map grid: tile storage, wall adjacency and the text map format."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from natrix.snake import BOARD_HEIGHT, BOARD_WIDTH
from natrix.tile import Tile, TileKind

logger = logging.getLogger(__name__)

WIDTH = BOARD_WIDTH
HEIGHT = BOARD_HEIGHT

DEFAULT_NAME = "Default"
DEFAULT_SPAWN = (5, 5)

_WALL_CHAR = "X"
_EMPTY_CHAR = " "
_SPAWN_CHAR = "@"

# Adjacency bits, in (dx, dy) neighbour order.
_ABOVE, _RIGHT, _BELOW, _LEFT = 1, 2, 4, 8


class MapError(Exception):
    """Base class for map loading failures."""


class MapIoError(MapError):
    """The map source could not be read."""


class InvalidMapFormat(MapError):
    """The map text is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class GridMap:
    """NumPy-backed 32x23 tile grid plus map metadata.

    Cells hold :meth:`Tile.encode` codes and are indexed ``[y, x]``;
    the public accessors take ``(x, y)``.
    """

    def __init__(
        self,
        name: str = DEFAULT_NAME,
        spawn: tuple[int, int] = DEFAULT_SPAWN,
        cells: np.ndarray | None = None,
    ) -> None:
        if not name:
            raise ValueError("Map name must not be empty.")
        if not self.in_bounds(*spawn):
            raise ValueError(f"Spawn {spawn} lies outside the grid.")
        if cells is None:
            cells = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        elif cells.shape != (HEIGHT, WIDTH):
            raise ValueError(
                f"Cells must have shape {(HEIGHT, WIDTH)}, got {cells.shape}."
            )
        self.name = name
        self.spawn = (int(spawn[0]), int(spawn[1]))
        self.cells = cells
        if self.get(*self.spawn).is_wall:
            raise ValueError(f"Spawn {spawn} lies inside a wall.")

    @staticmethod
    def in_bounds(x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < WIDTH and 0 <= y < HEIGHT

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) lies outside the grid.")

    def get(self, x: int, y: int) -> Tile:
        """Return the tile at the given coordinate."""
        self._check(x, y)
        return Tile.decode(self.cells[y, x])

    def set(self, x: int, y: int, tile: Tile) -> None:
        """Store *tile* at the given coordinate."""
        self._check(x, y)
        self.cells[y, x] = tile.encode()

    def is_wall(self, x: int, y: int) -> bool:
        """Walls include everything beyond the grid edges."""
        if not self.in_bounds(x, y):
            return True
        return (int(self.cells[y, x]) >> 4) == TileKind.WALL

    def kinds(self) -> np.ndarray:
        """Return the per-cell :class:`TileKind` codes as an array."""
        return self.cells >> 4

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return all empty cell coordinates as ``(x, y)`` pairs."""
        ys, xs = np.nonzero(self.kinds() == TileKind.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def compute_wall_adjacency(self) -> None:
        """Rewrite every wall tile with its neighbour mask.

        The mask is derived from the wall layout alone, so the pass does
        not depend on cell order. Cells beyond the edge count as walls.
        """
        walls = self.kinds() == TileKind.WALL
        padded = np.pad(walls, 1, constant_values=True)
        mask = (
            padded[:-2, 1:-1] * _ABOVE
            + padded[1:-1, 2:] * _RIGHT
            + padded[2:, 1:-1] * _BELOW
            + padded[1:-1, :-2] * _LEFT
        ).astype(np.uint8)
        self.cells[walls] = (int(TileKind.WALL) << 4) | mask[walls]

    def copy(self) -> GridMap:
        """Return an independent copy of this map."""
        return GridMap(self.name, self.spawn, self.cells.copy())

    @classmethod
    def parse(cls, text: str) -> GridMap:
        """Build a map from its text form.

        The first line is the map name; up to 23 following lines of up
        to 32 characters describe the cells: ``X`` is a wall, ``@`` the
        single snake spawn, anything else an empty cell.
        """
        lines = text.splitlines()
        if not lines:
            raise InvalidMapFormat("name required")
        name = lines[0].strip()
        if not name:
            raise InvalidMapFormat("empty name")

        cells = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        wall = Tile.wall().encode()
        spawns: list[tuple[int, int]] = []
        for y, line in enumerate(lines[1:HEIGHT + 1]):
            for x, char in enumerate(line[:WIDTH]):
                if char == _WALL_CHAR:
                    cells[y, x] = wall
                elif char == _SPAWN_CHAR:
                    spawns.append((x, y))

        if not spawns:
            raise InvalidMapFormat("no snake")
        if len(spawns) > 1:
            raise InvalidMapFormat(f"{len(spawns)} snakes, expected one")

        grid = cls(name, spawns[0], cells)
        grid.compute_wall_adjacency()
        return grid

    @classmethod
    def load(cls, path: str | Path) -> GridMap:
        """Read and parse a map file."""
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MapIoError(f"cannot read {p}: {exc}") from exc
        return cls.parse(text)

    def to_dict(self) -> dict:
        """Serialize map state to a dictionary."""
        return {
            "name": self.name,
            "width": WIDTH,
            "height": HEIGHT,
            "spawn": list(self.spawn),
            "cells": self.cells.tolist(),
        }

    def __repr__(self) -> str:
        return f"GridMap(name={self.name!r}, spawn={self.spawn})"


def load_maps(directory: str | Path) -> list[GridMap]:
    """Load every map file in *directory*, sorted by file name.

    Files that fail to load are logged and skipped. When nothing loads,
    the built-in default arena is returned so the list is never empty.
    """
    root = Path(directory)
    maps: list[GridMap] = []
    try:
        entries = sorted(p for p in root.iterdir() if p.is_file())
    except OSError as exc:
        logger.warning("Cannot list map directory %s: %s", root, exc)
        entries = []

    for path in entries:
        try:
            maps.append(GridMap.load(path))
        except MapError as exc:
            logger.warning("Skipping map %s: %s", path, exc)

    if not maps:
        logger.info("No maps found in %s; using the default arena.", root)
        return [GridMap()]
    logger.info("Loaded %d map(s) from %s.", len(maps), root)
    return maps
