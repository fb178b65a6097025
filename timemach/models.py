"""
Data model for generations and the differences between them.

Both types are immutable snapshots of what the backend reported. Which
generation the operator has marked for comparison is held in the session
state, not on the generation itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Generation:
    """Point-in-time snapshot of the system profile."""

    id: str
    timestamp: datetime
    description: str = ""
    profiles: tuple[str, ...] = ()
    current: bool = False

    @property
    def display_time(self) -> str:
        """Timestamp formatted for list and header display."""
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class DiffResult:
    """Package-level difference between two generations."""

    added: tuple[str, ...] = field(default_factory=tuple)
    removed: tuple[str, ...] = field(default_factory=tuple)
    modified: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)
