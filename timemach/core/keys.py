"""
Key bindings: static mapping from Textual key names to intents.
"""

from __future__ import annotations

from timemach.core.events import Intent

KEY_BINDINGS: dict[str, Intent] = {
    "up": Intent.MOVE_UP,
    "k": Intent.MOVE_UP,
    "down": Intent.MOVE_DOWN,
    "j": Intent.MOVE_DOWN,
    "enter": Intent.SELECT,
    "escape": Intent.BACK,
    "r": Intent.RELOAD,
    "q": Intent.QUIT,
    "ctrl+c": Intent.QUIT,
}

# (keys label, description) pairs shown in the help line
HELP_ENTRIES: list[tuple[str, str]] = [
    ("↑/k", "up"),
    ("↓/j", "down"),
    ("enter", "select"),
    ("esc", "back"),
    ("r", "reload"),
    ("q", "quit"),
]


def route_key(key: str) -> Intent | None:
    """Return the intent bound to ``key``, or None if it is unbound."""
    return KEY_BINDINGS.get(key)


def keys_for(intent: Intent) -> list[str]:
    """All keys bound to ``intent``, in table order."""
    return [key for key, bound in KEY_BINDINGS.items() if bound is intent]


def help_line() -> str:
    return " • ".join(f"{keys} {description}" for keys, description in HELP_ENTRIES)
