"""Session state: pure data, no Textual imports.

The Controller owns the only SessionState instance and is the only code
that mutates it. Rendering and background workers read it or emit events.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from timemach.errors import ProviderError
from timemach.models import DiffResult, Generation


class View(enum.Enum):
    """Which screen the interface is showing."""

    LISTING = "listing"
    SHOWING_DIFF = "showing_diff"


@dataclass
class SessionState:
    """Single source of truth for everything the interface displays."""

    view: View = View.LISTING
    generations: list[Generation] = field(default_factory=list)
    cursor: int = 0
    pending_from: Generation | None = None
    comparing: tuple[Generation, Generation] | None = None
    diff: DiffResult | None = None
    loading: bool = False
    last_error: ProviderError | None = None
    size: tuple[int, int] | None = None
    spinner_frame: int = 0

    @property
    def ready(self) -> bool:
        """True once the terminal has reported its size."""
        return self.size is not None

    @property
    def current(self) -> Generation | None:
        """Generation under the cursor, or None when the list is empty."""
        if 0 <= self.cursor < len(self.generations):
            return self.generations[self.cursor]
        return None

    def is_pending(self, generation: Generation) -> bool:
        """Whether ``generation`` is the one marked as the diff start."""
        return self.pending_from is not None and self.pending_from.id == generation.id
