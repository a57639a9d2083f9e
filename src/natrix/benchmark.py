"""Simulation throughput benchmark."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from natrix.config import GameConfig
from natrix.game import GameSession
from natrix.grid import GridMap
from natrix.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    total_score: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks, "
            f"score {self.total_score} in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    max_ticks: int = 500,
    seed: int = 42,
    template: GridMap | None = None,
) -> BenchmarkResult:
    """Measure raw simulation speed with random steering.

    Each game runs until the snake dies, the board fills or
    *max_ticks* ticks have passed.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    template = template or GridMap()
    rng = np.random.default_rng(seed)
    config = GameConfig(seed=seed)

    total_ticks = 0
    total_score = 0
    start = time.perf_counter()

    for _ in range(num_games):
        session = GameSession(template, config=config, rng=rng)
        for _ in range(max_ticks):
            if session.finished:
                break
            session.tick(_DIRECTIONS[int(rng.integers(len(_DIRECTIONS)))])
            total_ticks += 1
        total_score += session.score

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        total_score=total_score,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
