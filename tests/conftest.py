"""Pytest configuration and shared fixtures for nix-timemach tests."""

from __future__ import annotations

import json
import stat
import sys
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from timemach.core.controller import Controller
from timemach.core.events import ListFetched
from timemach.core.state import SessionState
from timemach.errors import ProviderError
from timemach.models import DiffResult, Generation
from timemach.provider.base import DataProvider

BASE_TIME = datetime(2024, 2, 9, 10, 0, 0, tzinfo=timezone.utc)


def make_generation(gen_id: str, description: str = "", hours: int = 0, **kwargs: Any) -> Generation:
    """Create a generation whose timestamp is ``hours`` after BASE_TIME."""
    return Generation(
        id=gen_id,
        timestamp=BASE_TIME + timedelta(hours=hours),
        description=description,
        profiles=(f"/nix/var/nix/profiles/system-{gen_id}-link",),
        **kwargs,
    )


@pytest.fixture
def three_generations() -> list[Generation]:
    """Generations 1, 2, 3 described A, B, C."""
    return [
        make_generation("1", "A", hours=0),
        make_generation("2", "B", hours=1),
        make_generation("3", "C", hours=2),
    ]


@pytest.fixture
def controller() -> Controller:
    """A fresh controller with a sized terminal."""
    return Controller(SessionState(size=(80, 24)))


@pytest.fixture
def loaded_controller(controller: Controller, three_generations: list[Generation]) -> Controller:
    """A controller that has completed its initial load."""
    controller.start()
    controller.update(ListFetched(three_generations))
    return controller


class FakeProvider(DataProvider):
    """In-memory provider that records calls and can be told to fail."""

    def __init__(
        self,
        generations: list[Generation] | None = None,
        diff_result: DiffResult | None = None,
    ) -> None:
        self.generations = generations or []
        self.diff_result = diff_result or DiffResult()
        self.list_error: Exception | None = None
        self.diff_error: Exception | None = None
        self.list_calls = 0
        self.diff_calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    def list_generations(self) -> list[Generation]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.generations)

    def diff(self, from_id: str, to_id: str) -> DiffResult:
        self.diff_calls.append((from_id, to_id))
        if self.diff_error is not None:
            raise self.diff_error
        return self.diff_result


class GatedProvider(DataProvider):
    """Provider whose list calls block until the test releases them.

    Each call to list_generations takes the next (gate, result) pair in call
    order, waits for the gate and returns the result.
    """

    def __init__(self, responses: list[list[Generation]]) -> None:
        self._responses = list(responses)
        self.gates = [threading.Event() for _ in responses]
        self._lock = threading.Lock()
        self.calls = 0
        self.closed = False

    @property
    def name(self) -> str:
        return "gated"

    def list_generations(self) -> list[Generation]:
        with self._lock:
            index = self.calls
            self.calls += 1
        self.gates[index].wait(timeout=10)
        return self._responses[index]

    def diff(self, from_id: str, to_id: str) -> DiffResult:
        raise ProviderError("diff not supported")

    def close(self) -> None:
        self.closed = True
        for gate in self.gates:
            gate.set()


@pytest.fixture
def fake_provider(three_generations: list[Generation]) -> FakeProvider:
    return FakeProvider(
        generations=three_generations,
        diff_result=DiffResult(added=("pkgX",), removed=(), modified=("pkgY",)),
    )


def write_backend(
    directory: Path,
    *,
    stdout: str = "",
    stderr: str = "",
    exit_code: int = 0,
    name: str = "fake-backend",
    raw_stdout: bytes = b"",
) -> Path:
    """Write an executable stand-in for the backend binary.

    The script records its arguments to ``<name>.args.json`` next to itself,
    prints ``stdout``/``stderr`` (then ``raw_stdout`` unencoded) and exits
    with ``exit_code``.
    """
    script = directory / name
    args_file = directory / f"{name}.args.json"
    script.write_text(
        f"#!{sys.executable}\n"
        "import json, sys\n"
        f"with open({str(args_file)!r}, 'w') as f:\n"
        "    json.dump(sys.argv[1:], f)\n"
        f"sys.stdout.write({stdout!r})\n"
        f"sys.stderr.write({stderr!r})\n"
        "sys.stdout.flush()\n"
        f"sys.stdout.buffer.write({raw_stdout!r})\n"
        f"sys.exit({exit_code})\n",
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def read_backend_args(script: Path) -> list[str]:
    """Arguments the last run of a write_backend script received."""
    return json.loads(script.with_name(f"{script.name}.args.json").read_text())


def write_hung_backend(directory: Path, name: str = "hung-backend") -> Path:
    """Write a backend stand-in that never answers within a test's lifetime."""
    script = directory / name
    script.write_text("#!/bin/sh\nexec sleep 30\n")
    script.chmod(0o755)
    return script
