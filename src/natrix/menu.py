"""Map selection menu."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from natrix.config import GameConfig
from natrix.game import GameSession
from natrix.grid import GridMap
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

logger = logging.getLogger(__name__)


class Menu(State):
    """Cyclic list of map templates; Space starts a game on the selection."""

    def __init__(
        self,
        maps: Sequence[GridMap] = (),
        selected: int = 0,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.maps: list[GridMap] = list(maps) or [GridMap()]
        if not 0 <= selected < len(self.maps):
            raise ValueError(
                f"selected {selected} out of range [0, {len(self.maps)})."
            )
        self.selected = selected
        self.config = config or GameConfig()
        self.rng = rng

    @property
    def selected_map(self) -> GridMap:
        return self.maps[self.selected]

    def move_up(self) -> None:
        """Select the previous map, wrapping to the last one."""
        self.selected = (self.selected - 1) % len(self.maps)

    def move_down(self) -> None:
        """Select the next map, wrapping to the first one."""
        self.selected = (self.selected + 1) % len(self.maps)

    def entries(self) -> list[tuple[str, bool]]:
        """Map names paired with whether each is selected."""
        return [
            (m.name, i == self.selected) for i, m in enumerate(self.maps)
        ]

    def start_game(self) -> GameSession:
        """Create a session on the selected map."""
        logger.info("Starting game on map %r.", self.selected_map.name)
        return GameSession(
            self.selected_map,
            config=self.config,
            rng=self.rng,
            maps=self.maps,
            selected=self.selected,
        )

    def update(self, events: Iterable[Event]) -> Action:
        for event in events:
            if isinstance(event, QuitEvent):
                return Quit()
            if not isinstance(event, KeyDown):
                continue
            if event.key == Key.SPACE:
                return Replace(self.start_game())
            if event.key == Key.W:
                self.move_up()
            elif event.key == Key.S:
                self.move_down()
        return Continue()
