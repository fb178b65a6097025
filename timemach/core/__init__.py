"""Interactive core: session state, controller, key routing and rendering."""

from timemach.core.controller import Controller
from timemach.core.events import (
    DiffFetched,
    FetchDiff,
    FetchFailed,
    FetchGenerations,
    Intent,
    ListFetched,
    Quit,
    Resized,
    Tick,
)
from timemach.core.executor import execute
from timemach.core.keys import KEY_BINDINGS, route_key
from timemach.core.render import render
from timemach.core.state import SessionState, View

__all__ = [
    "Controller",
    "SessionState",
    "View",
    # Events
    "Intent",
    "ListFetched",
    "DiffFetched",
    "FetchFailed",
    "Resized",
    "Tick",
    # Commands
    "FetchGenerations",
    "FetchDiff",
    "Quit",
    # Collaborators
    "execute",
    "render",
    "route_key",
    "KEY_BINDINGS",
]
