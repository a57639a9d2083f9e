"""Tile vocabulary stored in the map grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from natrix.snake import Direction

_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT,
)
_DIRECTION_INDEX: dict[Direction, int] = {
    d: i for i, d in enumerate(_DIRECTIONS)
}


class TileKind(enum.IntEnum):
    """Integer codes for the tile variants (high nibble of a cell code)."""

    EMPTY = 0
    WALL = 1
    FOOD = 2
    SNAKE_VERTICAL = 3
    SNAKE_HORIZONTAL = 4
    SNAKE_TURN = 5
    SNAKE_HEAD = 6
    SNAKE_TAIL = 7


_DIRECTED = frozenset({
    TileKind.SNAKE_TURN, TileKind.SNAKE_HEAD, TileKind.SNAKE_TAIL,
})
_BODY = frozenset({
    TileKind.SNAKE_VERTICAL,
    TileKind.SNAKE_HORIZONTAL,
    TileKind.SNAKE_TURN,
    TileKind.SNAKE_TAIL,
})


@dataclass(frozen=True)
class Tile:
    """Immutable cell value.

    ``direction`` is set for turn, head and tail tiles. ``corner`` picks
    one of the two bend shapes of a turn tile. ``adjacency`` is the
    4-bit neighbour mask of a wall (bit0 above, bit1 right, bit2 below,
    bit3 left) and only selects the wall sprite.
    """

    kind: TileKind = TileKind.EMPTY
    direction: Direction | None = None
    corner: bool = False
    adjacency: int = 0

    def __post_init__(self) -> None:
        if (self.kind in _DIRECTED) != (self.direction is not None):
            raise ValueError(
                f"{self.kind.name} tile direction mismatch: {self.direction}."
            )
        if self.corner and self.kind != TileKind.SNAKE_TURN:
            raise ValueError("Only turn tiles carry a corner flag.")
        if not 0 <= self.adjacency <= 15:
            raise ValueError("Wall adjacency must be within 0..15.")
        if self.adjacency and self.kind != TileKind.WALL:
            raise ValueError("Only wall tiles carry an adjacency mask.")

    # -- constructors ----------------------------------------------------

    @classmethod
    def empty(cls) -> Tile:
        return EMPTY

    @classmethod
    def wall(cls, adjacency: int = 0) -> Tile:
        return cls(TileKind.WALL, adjacency=adjacency)

    @classmethod
    def food(cls) -> Tile:
        return FOOD

    @classmethod
    def vertical(cls) -> Tile:
        return cls(TileKind.SNAKE_VERTICAL)

    @classmethod
    def horizontal(cls) -> Tile:
        return cls(TileKind.SNAKE_HORIZONTAL)

    @classmethod
    def body(cls, direction: Direction) -> Tile:
        """Straight body segment oriented along *direction*."""
        return cls.vertical() if direction.is_vertical else cls.horizontal()

    @classmethod
    def turn(cls, direction: Direction, corner: bool) -> Tile:
        return cls(TileKind.SNAKE_TURN, direction=direction, corner=corner)

    @classmethod
    def head(cls, direction: Direction) -> Tile:
        return cls(TileKind.SNAKE_HEAD, direction=direction)

    @classmethod
    def tail(cls, direction: Direction) -> Tile:
        return cls(TileKind.SNAKE_TAIL, direction=direction)

    # -- queries ---------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.kind == TileKind.EMPTY

    @property
    def is_wall(self) -> bool:
        return self.kind == TileKind.WALL

    @property
    def is_snake_body(self) -> bool:
        """Body tiles: everything the snake leaves behind its head."""
        return self.kind in _BODY

    @property
    def is_fatal(self) -> bool:
        """Whether a head entering this tile dies."""
        return self.is_wall or self.is_snake_body

    # -- codec -----------------------------------------------------------

    def encode(self) -> int:
        """Pack the tile into one byte: kind in the high nibble."""
        if self.kind == TileKind.WALL:
            payload = self.adjacency
        elif self.direction is not None:
            payload = _DIRECTION_INDEX[self.direction] | (self.corner << 2)
        else:
            payload = 0
        return (int(self.kind) << 4) | payload

    @classmethod
    def decode(cls, code: int) -> Tile:
        """Inverse of :meth:`encode`."""
        code = int(code)
        kind = TileKind(code >> 4)
        payload = code & 0x0F
        if kind == TileKind.WALL:
            return cls.wall(payload)
        if kind in _DIRECTED:
            return cls(
                kind,
                direction=_DIRECTIONS[payload & 0b11],
                corner=bool(payload & 0b100),
            )
        return cls(kind)


EMPTY = Tile(TileKind.EMPTY)
FOOD = Tile(TileKind.FOOD)

# Column of each sprite in the tile sheet.
_HEAD_SPRITES = {
    Direction.UP: 0, Direction.RIGHT: 1, Direction.DOWN: 2, Direction.LEFT: 3,
}
_TAIL_SPRITES = {
    Direction.DOWN: 4, Direction.LEFT: 5, Direction.UP: 6, Direction.RIGHT: 7,
}
# Each bend shape is reachable from two (direction, corner) combinations.
_TURN_SPRITES = {
    (Direction.RIGHT, False): 8, (Direction.UP, True): 8,
    (Direction.DOWN, False): 9, (Direction.RIGHT, True): 9,
    (Direction.LEFT, False): 10, (Direction.DOWN, True): 10,
    (Direction.UP, False): 11, (Direction.LEFT, True): 11,
}
SPRITE_VERTICAL = 12
SPRITE_HORIZONTAL = 13
SPRITE_FOOD = 14
SPRITE_WALL_BASE = 15
SPRITE_SIZE = 10


def sprite_index(tile: Tile) -> int | None:
    """Return the tile-sheet column used to draw *tile*.

    Empty tiles have no sprite and are filled with the background colour.
    """
    kind = tile.kind
    if kind == TileKind.EMPTY:
        return None
    if kind == TileKind.WALL:
        return SPRITE_WALL_BASE + tile.adjacency
    if kind == TileKind.FOOD:
        return SPRITE_FOOD
    if kind == TileKind.SNAKE_VERTICAL:
        return SPRITE_VERTICAL
    if kind == TileKind.SNAKE_HORIZONTAL:
        return SPRITE_HORIZONTAL
    if kind == TileKind.SNAKE_HEAD:
        return _HEAD_SPRITES[tile.direction]
    if kind == TileKind.SNAKE_TAIL:
        return _TAIL_SPRITES[tile.direction]
    return _TURN_SPRITES[(tile.direction, tile.corner)]
