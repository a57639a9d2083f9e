"""Input events, state actions and the state interface."""

from __future__ import annotations

import abc
import enum
from collections.abc import Iterable
from dataclasses import dataclass


class Key(enum.Enum):
    """Keys the game reacts to."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"
    R = "r"
    M = "m"


@dataclass(frozen=True)
class QuitEvent:
    """The window was closed."""


@dataclass(frozen=True)
class KeyDown:
    """A key was pressed. ``key`` is ``None`` for keys the game ignores."""

    key: Key | None

    @classmethod
    def from_name(cls, name: str) -> KeyDown:
        """Build an event from a key name such as ``"w"`` or ``"space"``."""
        try:
            return cls(Key(name.lower()))
        except ValueError:
            return cls(None)


Event = QuitEvent | KeyDown


class Action:
    """Result of one state update."""


@dataclass(frozen=True)
class Continue(Action):
    """Keep the current state."""


@dataclass(frozen=True)
class Quit(Action):
    """Terminate the application."""


@dataclass(frozen=True)
class Replace(Action):
    """Swap the active state for ``state``."""

    state: State


class State(abc.ABC):
    """One screen of the application (menu or game)."""

    @abc.abstractmethod
    def update(self, events: Iterable[Event]) -> Action:
        """Consume one tick's batch of input and advance by one step."""
