"""Tests for the throughput benchmark."""

import pytest

from natrix.benchmark import BenchmarkResult, benchmark_throughput


class TestBenchmarkResult:
    def test_summary_format(self):
        result = BenchmarkResult(
            total_games=10,
            total_ticks=500,
            total_score=4,
            wall_time_seconds=1.5,
            games_per_second=6.67,
            ticks_per_second=333.3,
        )
        summary = result.summary()
        assert "10 games" in summary
        assert "games/s" in summary
        assert "ticks/s" in summary


class TestBenchmarkThroughput:
    def test_basic_benchmark(self):
        result = benchmark_throughput(num_games=3, max_ticks=50, seed=1)
        assert result.total_games == 3
        assert 0 < result.total_ticks <= 150
        assert result.ticks_per_second > 0

    def test_invalid_game_count(self):
        with pytest.raises(ValueError, match="at least 1"):
            benchmark_throughput(num_games=0)
