"""Fixed-tick application loop driving the menu and game states."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from natrix.config import GameConfig
from natrix.grid import load_maps
from natrix.menu import Menu
from natrix.state import Event, Quit, Replace, State

logger = logging.getLogger(__name__)


class Application:
    """Owns the active state and swaps it according to returned actions.

    Exactly one state update runs per tick, followed by a fixed sleep of
    ``config.tick_ms``; there is no delta-time accumulation.
    """

    def __init__(
        self,
        initial_state: State | None = None,
        config: GameConfig | None = None,
    ) -> None:
        self.config = config or GameConfig()
        if initial_state is None:
            maps = load_maps(self.config.maps_dir)
            initial_state = Menu(maps, config=self.config)
        self.state = initial_state
        self.running = True
        self.ticks = 0

    def step(self, events: Iterable[Event]) -> bool:
        """Feed one batch of events to the active state.

        Returns ``False`` once the application has quit.
        """
        if not self.running:
            return False
        action = self.state.update(list(events))
        self.ticks += 1
        if isinstance(action, Quit):
            self.running = False
            logger.info("Quit after %d ticks.", self.ticks)
        elif isinstance(action, Replace):
            logger.info(
                "State change: %s -> %s.",
                type(self.state).__name__, type(action.state).__name__,
            )
            self.state = action.state
        return self.running

    def run(
        self,
        poll_events: Callable[[], Iterable[Event]],
        render: Callable[[State], None] | None = None,
        max_ticks: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Loop until quit or *max_ticks*; returns the number of ticks run."""
        start = self.ticks
        while self.running:
            if max_ticks is not None and self.ticks - start >= max_ticks:
                break
            if not self.step(poll_events()):
                break
            if render is not None:
                render(self.state)
            sleep(self.config.tick_seconds)
        return self.ticks - start
