"""Tests for the application loop."""

from natrix.app import Application
from natrix.config import GameConfig
from natrix.game import GameSession
from natrix.grid import GridMap
from natrix.menu import Menu
from natrix.state import Key, KeyDown, QuitEvent


class _Events:
    """Scripted event source: one batch per poll, then empty batches."""

    def __init__(self, *batches):
        self.batches = list(batches)

    def __call__(self):
        return self.batches.pop(0) if self.batches else []


class TestApplicationStep:
    def test_menu_to_game(self):
        app = Application(Menu([GridMap(name="A")]))
        assert app.step([KeyDown(Key.SPACE)])
        assert isinstance(app.state, GameSession)

    def test_quit_stops(self):
        app = Application(Menu([GridMap()]))
        assert not app.step([QuitEvent()])
        assert not app.running
        assert not app.step([])
        assert app.ticks == 1

    def test_continue_keeps_state(self):
        menu = Menu([GridMap()])
        app = Application(menu)
        app.step([])
        assert app.state is menu

    def test_default_state_loads_maps(self, tmp_path):
        (tmp_path / "arena.txt").write_text("Arena\n@")
        app = Application(config=GameConfig(maps_dir=str(tmp_path)))
        assert isinstance(app.state, Menu)
        assert [m.name for m in app.state.maps] == ["Arena"]


class TestApplicationRun:
    def test_runs_until_max_ticks(self):
        sleeps = []
        app = Application(Menu([GridMap()]), GameConfig(tick_ms=100))
        ticks = app.run(_Events(), max_ticks=5, sleep=sleeps.append)
        assert ticks == 5
        assert sleeps == [0.1] * 5

    def test_runs_until_quit(self):
        rendered = []
        app = Application(Menu([GridMap()]))
        events = _Events([KeyDown(Key.SPACE)], [], [QuitEvent()])
        ticks = app.run(events, render=rendered.append, sleep=lambda _: None)
        assert ticks == 3
        assert len(rendered) == 2
        assert isinstance(rendered[-1], GameSession)
        assert not app.running
