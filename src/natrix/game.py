"""One play session on a single map."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from natrix.config import GameConfig
from natrix.food import FoodPlacer
from natrix.grid import HEIGHT, WIDTH, GridMap
from natrix.snake import Direction, Snake, turn_corner
from natrix.state import (
    Action,
    Continue,
    Event,
    Key,
    KeyDown,
    Quit,
    QuitEvent,
    Replace,
    State,
)
from natrix.tile import EMPTY, Tile, TileKind, sprite_index

logger = logging.getLogger(__name__)

STATUS_DEAD = "R restart   M menu"
STATUS_WON = "You win!  R restart   M menu"

_KEY_DIRECTIONS: dict[Key, Direction] = {
    Key.W: Direction.UP,
    Key.D: Direction.RIGHT,
    Key.S: Direction.DOWN,
    Key.A: Direction.LEFT,
}

# Tiles the tail may legally step onto.
_TAIL_TRACK = frozenset({
    TileKind.SNAKE_VERTICAL, TileKind.SNAKE_HORIZONTAL, TileKind.SNAKE_TURN,
})


class GridInvariantError(RuntimeError):
    """The grid no longer matches the snake; the session is corrupt."""


@dataclass
class Frame:
    """What the renderer needs to redraw after a tick."""

    full_redraw: bool
    cells: list[tuple[int, int, Tile]] = field(default_factory=list)
    overlays: dict[str, str | None] = field(default_factory=dict)

    def sprites(self) -> list[tuple[int, int, int | None]]:
        """Return ``(x, y, sprite)`` triples; ``None`` is background."""
        return [(x, y, sprite_index(tile)) for x, y, tile in self.cells]


class GameSession(State):
    """Single-snake session bound to one map template.

    The template is cloned for play and kept untouched so a restart
    starts again from the same board. Each :meth:`update` consumes one
    batch of input and advances the simulation by one tick.
    """

    def __init__(
        self,
        template: GridMap,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
        maps: Sequence[GridMap] | None = None,
        selected: int = 0,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.initial_map = template.copy()
        # Menu context restored when the player goes back.
        self.maps = list(maps) if maps else [template]
        self.selected = selected
        self._reset()
        logger.info("Session started on map %r.", self.map.name)

    # -- lifecycle -------------------------------------------------------

    def _reset(self) -> None:
        self.map = self.initial_map.copy()
        x, y = self.map.spawn
        self.snake = Snake(
            x, y, Direction.RIGHT, grow=self.config.initial_grow,
        )
        self.food = FoodPlacer(
            self.map, rng=self.rng, max_attempts=self.config.max_food_attempts,
        )
        self.score = 0
        self.alive = True
        self.won = False
        self.blink = True
        self.tick_count = 0
        self._dirty: set[tuple[int, int]] = set()
        self._full_redraw = True

        self.map.set(x, y, Tile.head(Direction.RIGHT))
        self._place_food()

    def restart(self) -> None:
        """Start over on a fresh copy of the starting map."""
        self._reset()
        logger.info("Session restarted on map %r.", self.map.name)

    @property
    def finished(self) -> bool:
        """Whether the simulation has stopped (death or full board)."""
        return not self.alive or self.won

    # -- simulation ------------------------------------------------------

    def tick(self, next_direction: Direction | None = None) -> None:
        """Advance one step, steering towards *next_direction* if given."""
        if self.finished:
            self.blink = not self.blink
            self._mark_body_dirty()
            return

        self.tick_count += 1
        snake = self.snake
        if snake.grow > 0:
            snake.grow -= 1
        else:
            self._step_tail()

        head = snake.head
        if next_direction is None:
            next_direction = head.direction
        if (
            next_direction != head.direction
            and next_direction != head.direction.opposite()
        ):
            corner = turn_corner(head.direction, next_direction)
            self._write(head.x, head.y, Tile.turn(next_direction, corner))
            head.direction = next_direction
        else:
            self._write(head.x, head.y, Tile.body(head.direction))

        x, y = head.advance()
        target = self.map.get(x, y)
        if target.kind == TileKind.FOOD:
            self.score += 1
            snake.schedule_growth(self.config.food_growth)
            logger.debug("Food eaten at (%d, %d); score %d.", x, y, self.score)
            self._place_food()
        elif target.is_fatal:
            self.alive = False
            logger.info(
                "Snake died at (%d, %d) on tick %d with score %d.",
                x, y, self.tick_count, self.score,
            )

        if self.alive:
            self._write(x, y, Tile.head(head.direction))

    def _step_tail(self) -> None:
        tail = self.snake.tail
        # Only the spawn cell can still hold a turn under the tail.
        leaving = self.map.get(tail.x, tail.y)
        if leaving.kind == TileKind.SNAKE_TURN:
            tail.direction = leaving.direction
        self._write(tail.x, tail.y, EMPTY)
        x, y = tail.advance()
        tile = self.map.get(x, y)
        if tile.kind not in _TAIL_TRACK:
            raise GridInvariantError(
                f"Tail moved onto {tile.kind.name} at ({x}, {y})."
            )
        if tile.kind == TileKind.SNAKE_TURN:
            tail.direction = tile.direction
        self._write(x, y, Tile.tail(tail.direction))

    def _place_food(self) -> None:
        pos = self.food.place()
        if pos is None:
            self.won = True
            logger.info("Board filled with score %d.", self.score)
        else:
            self._dirty.add(pos)

    def _write(self, x: int, y: int, tile: Tile) -> None:
        self.map.set(x, y, tile)
        self._dirty.add((x, y))

    def _mark_body_dirty(self) -> None:
        for x, y in self.snake_cells():
            if self.map.get(x, y).is_snake_body:
                self._dirty.add((x, y))

    # -- State -----------------------------------------------------------

    def update(self, events: Iterable[Event]) -> Action:
        next_direction: Direction | None = None
        for event in events:
            if isinstance(event, QuitEvent):
                return Quit()
            if not isinstance(event, KeyDown) or event.key is None:
                continue
            if not self.finished:
                next_direction = _KEY_DIRECTIONS.get(event.key, next_direction)
            elif event.key == Key.R:
                self.restart()
                return Continue()
            elif event.key == Key.M:
                from natrix.menu import Menu

                logger.info("Returning to menu from map %r.", self.map.name)
                return Replace(
                    Menu(
                        self.maps,
                        selected=self.selected,
                        config=self.config,
                        rng=self.rng,
                    )
                )

        self.tick(next_direction)
        return Continue()

    # -- rendering contract ---------------------------------------------

    def snake_cells(self) -> list[tuple[int, int]]:
        """Return every cell currently holding a snake tile."""
        kinds = self.map.kinds()
        ys, xs = np.nonzero(kinds >= TileKind.SNAKE_VERTICAL)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def visible_tile(self, x: int, y: int) -> Tile:
        """Tile to draw, hiding the dead body on the off phase of the blink."""
        tile = self.map.get(x, y)
        if self.finished and not self.blink and tile.is_snake_body:
            return EMPTY
        return tile

    def overlays(self) -> dict[str, str | None]:
        """Text drawn over the board: score, map name and status caption."""
        status = None
        if self.finished and self.blink:
            status = STATUS_WON if self.won else STATUS_DEAD
        return {
            "score": f"Score: {self.score}",
            "name": self.map.name,
            "status": status,
        }

    def drain_dirty(self) -> list[tuple[int, int]]:
        """Return and forget the cells changed since the last drain."""
        cells = sorted(self._dirty)
        self._dirty.clear()
        return cells

    def frame(self) -> Frame:
        """Collect the redraw for this tick and reset the change tracking."""
        full = self._full_redraw
        self._full_redraw = False
        if full:
            self._dirty.clear()
            coords = [(x, y) for y in range(HEIGHT) for x in range(WIDTH)]
        else:
            coords = self.drain_dirty()
        return Frame(
            full_redraw=full,
            cells=[(x, y, self.visible_tile(x, y)) for x, y in coords],
            overlays=self.overlays(),
        )

    def to_dict(self) -> dict:
        """Return the full, serializable session state."""
        return {
            "tick": self.tick_count,
            "score": self.score,
            "alive": self.alive,
            "won": self.won,
            "blink": self.blink,
            "map": self.map.to_dict(),
            "snake": self.snake.to_dict(),
        }
