"""
Events consumed by the Controller and commands it emits.

Events are user intents, terminal/timer notifications, and fetch outcomes.
Commands are requests for side effects: fetching data or quitting.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from timemach.errors import ProviderError
from timemach.models import DiffResult, Generation


class Intent(enum.Enum):
    """Abstract user action, independent of the key that triggered it."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT = "select"
    BACK = "back"
    RELOAD = "reload"
    QUIT = "quit"


@dataclass(frozen=True)
class ListFetched:
    generations: list[Generation]


@dataclass(frozen=True)
class DiffFetched:
    diff: DiffResult


@dataclass(frozen=True)
class FetchFailed:
    error: ProviderError


@dataclass(frozen=True)
class Resized:
    """Terminal surface size changed (or was reported for the first time)."""

    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """Spinner animation timer fired."""


Event = Union[Intent, ListFetched, DiffFetched, FetchFailed, Resized, Tick]


@dataclass(frozen=True)
class FetchGenerations:
    """Request the full generation list."""


@dataclass(frozen=True)
class FetchDiff:
    """Request the diff going from ``from_id`` to ``to_id``."""

    from_id: str
    to_id: str


@dataclass(frozen=True)
class Quit:
    """Request program termination."""


FetchCommand = Union[FetchGenerations, FetchDiff]
Command = Union[FetchGenerations, FetchDiff, Quit]
