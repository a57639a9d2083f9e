"""Tests for the Snake module."""

import pytest

from natrix.snake import (
    FOOD_GROWTH,
    INITIAL_GROW,
    Direction,
    Snake,
    SnakeEnd,
    turn_corner,
)


class TestDirection:
    def test_opposite_is_involution(self):
        for d in Direction:
            assert d.opposite().opposite() == d
            assert d.opposite() != d

    def test_opposite_pairs(self):
        assert Direction.UP.opposite() == Direction.DOWN
        assert Direction.RIGHT.opposite() == Direction.LEFT

    def test_is_vertical(self):
        assert Direction.UP.is_vertical
        assert Direction.DOWN.is_vertical
        assert not Direction.LEFT.is_vertical
        assert not Direction.RIGHT.is_vertical


class TestTurnCorner:
    @pytest.mark.parametrize(
        "old, new",
        [
            (Direction.RIGHT, Direction.DOWN),
            (Direction.DOWN, Direction.LEFT),
            (Direction.LEFT, Direction.UP),
            (Direction.UP, Direction.RIGHT),
        ],
    )
    def test_clockwise_pairs(self, old, new):
        assert turn_corner(old, new) is True

    @pytest.mark.parametrize(
        "old, new",
        [
            (Direction.RIGHT, Direction.UP),
            (Direction.UP, Direction.LEFT),
            (Direction.LEFT, Direction.DOWN),
            (Direction.DOWN, Direction.RIGHT),
        ],
    )
    def test_counter_clockwise_pairs(self, old, new):
        assert turn_corner(old, new) is False

    def test_straight_and_reverse_rejected(self):
        with pytest.raises(ValueError, match="not a turn"):
            turn_corner(Direction.UP, Direction.UP)
        with pytest.raises(ValueError, match="not a turn"):
            turn_corner(Direction.UP, Direction.DOWN)


class TestSnakeEnd:
    def test_advance_moves_one_cell(self):
        end = SnakeEnd(5, 5, Direction.DOWN)
        assert end.advance() == (5, 6)
        assert end.position == (5, 6)

    def test_wrap_right_edge(self):
        end = SnakeEnd(31, 4, Direction.RIGHT)
        assert end.advance() == (0, 4)

    def test_wrap_left_edge(self):
        end = SnakeEnd(0, 4, Direction.LEFT)
        assert end.advance() == (31, 4)

    def test_wrap_top_edge(self):
        end = SnakeEnd(7, 0, Direction.UP)
        assert end.advance() == (7, 22)

    def test_wrap_bottom_edge(self):
        end = SnakeEnd(7, 22, Direction.DOWN)
        assert end.advance() == (7, 0)

    def test_to_dict(self):
        assert SnakeEnd(1, 2, Direction.LEFT).to_dict() == {
            "x": 1, "y": 2, "direction": "LEFT",
        }


class TestSnake:
    def test_default_creation(self):
        snake = Snake(5, 5)
        assert snake.head.position == (5, 5)
        assert snake.tail.position == (5, 5)
        assert snake.direction == Direction.RIGHT
        assert snake.grow == INITIAL_GROW == 10

    def test_ends_are_independent(self):
        snake = Snake(5, 5, Direction.UP)
        snake.head.advance()
        assert snake.head.position == (5, 4)
        assert snake.tail.position == (5, 5)

    def test_negative_grow_rejected(self):
        with pytest.raises(ValueError, match="at least 0"):
            Snake(0, 0, grow=-1)

    def test_schedule_growth(self):
        snake = Snake(5, 5, grow=0)
        snake.schedule_growth()
        assert snake.grow == FOOD_GROWTH == 5
        snake.schedule_growth(2)
        assert snake.grow == 7

    def test_to_dict(self):
        d = Snake(3, 4, Direction.DOWN).to_dict()
        assert d["head"] == {"x": 3, "y": 4, "direction": "DOWN"}
        assert d["tail"] == d["head"]
        assert d["grow"] == 10
