"""
In-memory provider for trying the interface without a backend.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from timemach.errors import ProviderInvocationError
from timemach.models import DiffResult, Generation
from timemach.provider.base import DataProvider


def _profile_path(generation_id: str) -> str:
    return f"/nix/var/nix/profiles/system-{generation_id}-link"


def demo_generations(now: datetime | None = None) -> list[Generation]:
    """Build a short, plausible generation history ending at ``now``."""
    now = now or datetime.now(timezone.utc)
    history = [
        ("1", timedelta(days=14), "nixos-24.05.20240601.abc1234"),
        ("2", timedelta(days=7), "nixos-24.05.20240608.def5678"),
        ("3", timedelta(days=1), "Yesterday's system state"),
        ("4", timedelta(0), "Current system state"),
    ]
    return [
        Generation(
            id=gen_id,
            timestamp=now - age,
            description=description,
            profiles=(_profile_path(gen_id),),
            current=(gen_id == history[-1][0]),
        )
        for gen_id, age, description in history
    ]


class DemoProvider(DataProvider):
    """DataProvider returning fixed generations and a synthetic diff."""

    def __init__(self, generations: list[Generation] | None = None) -> None:
        self._generations = generations if generations is not None else demo_generations()

    @property
    def name(self) -> str:
        return "demo"

    def list_generations(self) -> list[Generation]:
        return list(self._generations)

    def diff(self, from_id: str, to_id: str) -> DiffResult:
        known = {g.id for g in self._generations}
        for gen_id in (from_id, to_id):
            if gen_id not in known:
                raise ProviderInvocationError(f"failed to get diff: no generation {gen_id}")
        if from_id == to_id:
            return DiffResult()
        return DiffResult(
            added=(f"package-{to_id}-a", f"package-{to_id}-b"),
            removed=(f"old-package-{from_id}",),
            modified=("modified-package",),
        )
