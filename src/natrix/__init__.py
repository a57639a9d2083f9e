"""Natrix — tile-based snake game engine."""

from natrix.app import Application
from natrix.config import GameConfig
from natrix.game import GameSession, GridInvariantError
from natrix.grid import (
    GridMap,
    InvalidMapFormat,
    MapError,
    MapIoError,
    load_maps,
)
from natrix.menu import Menu
from natrix.snake import Direction, Snake, SnakeEnd
from natrix.state import (
    Continue,
    Key,
    KeyDown,
    Quit,
    QuitEvent,
    Replace,
    State,
)
from natrix.tile import Tile, TileKind, sprite_index

__all__ = [
    "Application",
    "Continue",
    "Direction",
    "GameConfig",
    "GameSession",
    "GridInvariantError",
    "GridMap",
    "InvalidMapFormat",
    "Key",
    "KeyDown",
    "MapError",
    "MapIoError",
    "Menu",
    "Quit",
    "QuitEvent",
    "Replace",
    "Snake",
    "SnakeEnd",
    "State",
    "Tile",
    "TileKind",
    "load_maps",
    "sprite_index",
]
