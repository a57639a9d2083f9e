"""Snake representation and movement logic."""

from __future__ import annotations

import enum

# Board size shared with the grid module.
BOARD_WIDTH = 32
BOARD_HEIGHT = 23

# Ticks the tail stays put after spawning, and per food eaten.
INITIAL_GROW = 10
FOOD_GROWTH = 5


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
}

# (old, new) pairs that bend clockwise.
_CLOCKWISE: frozenset[tuple[Direction, Direction]] = frozenset({
    (Direction.RIGHT, Direction.DOWN),
    (Direction.DOWN, Direction.LEFT),
    (Direction.LEFT, Direction.UP),
    (Direction.UP, Direction.RIGHT),
})


def turn_corner(old: Direction, new: Direction) -> bool:
    """Return the corner flag stored in a turn tile for *old* -> *new*.

    ``True`` for the four clockwise bends, ``False`` for the four
    counter-clockwise ones.
    """
    if new == old or new == old.opposite():
        raise ValueError(f"{old.name} -> {new.name} is not a turn.")
    return (old, new) in _CLOCKWISE


class SnakeEnd:
    """One end (head or tail) of the snake: a position plus a heading."""

    __slots__ = ("x", "y", "direction")

    def __init__(self, x: int, y: int, direction: Direction) -> None:
        self.x = x
        self.y = y
        self.direction = direction

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def advance(
        self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT,
    ) -> tuple[int, int]:
        """Move one cell along ``direction``, wrapping around the edges.

        Returns the new position.
        """
        dx, dy = self.direction.value
        self.x = (self.x + dx) % width
        self.y = (self.y + dy) % height
        return self.x, self.y

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "direction": self.direction.name}

    def __repr__(self) -> str:
        return f"SnakeEnd({self.x}, {self.y}, {self.direction.name})"


class Snake:
    """A snake tracked only by its two ends.

    The body itself lives in the grid as snake tiles; the head and tail
    cursors walk along it. ``grow`` counts the remaining ticks during
    which the tail stays put.
    """

    def __init__(
        self,
        x: int,
        y: int,
        direction: Direction = Direction.RIGHT,
        grow: int = INITIAL_GROW,
    ) -> None:
        if grow < 0:
            raise ValueError("Grow budget must be at least 0.")
        self.head = SnakeEnd(x, y, direction)
        self.tail = SnakeEnd(x, y, direction)
        self.grow = grow

    @property
    def direction(self) -> Direction:
        """Current heading of the head."""
        return self.head.direction

    def schedule_growth(self, segments: int = FOOD_GROWTH) -> None:
        """Keep the tail still for *segments* more ticks."""
        self.grow += segments

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": self.head.to_dict(),
            "tail": self.tail.to_dict(),
            "grow": self.grow,
        }
