"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from natrix.food import DEFAULT_MAX_ATTEMPTS
from natrix.snake import FOOD_GROWTH, INITIAL_GROW

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable game settings.

    Supports JSON serialization so a run can be reproduced.
    """

    # Fixed delay between ticks.
    tick_ms: int = 100

    # Snake
    initial_grow: int = INITIAL_GROW
    food_growth: int = FOOD_GROWTH

    # Food placement
    max_food_attempts: int = DEFAULT_MAX_ATTEMPTS

    # Maps
    maps_dir: str = "data/maps"

    # RNG seed; None draws fresh entropy.
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.tick_ms < 0:
            raise ValueError("tick_ms must be at least 0.")
        # The tail needs at least one body segment to trail onto.
        if self.initial_grow < 2:
            raise ValueError("initial_grow must be at least 2.")
        if self.food_growth < 0:
            raise ValueError("food_growth must be at least 0.")
        if self.max_food_attempts < 1:
            raise ValueError("max_food_attempts must be at least 1.")

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
