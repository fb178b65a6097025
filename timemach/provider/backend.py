"""
Data provider backed by the nix-timemach-backend executable.

Each call runs the backend once and decodes the JSON it prints:

    nix-timemach-backend list-generations
    nix-timemach-backend diff FROM TO
"""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Sequence

from timemach.errors import ProviderInvocationError
from timemach.models import DiffResult, Generation
from timemach.provider.base import DataProvider
from timemach.provider.payload import parse_diff, parse_generations

_logger = logging.getLogger(__name__)

DEFAULT_BACKEND_BINARY = "nix-timemach-backend"

# Seconds close() waits after SIGTERM before killing a backend process
CLOSE_GRACE_PERIOD: float = 1.0


class BackendProvider(DataProvider):
    """DataProvider implementation that shells out to the backend binary.

    Running backend processes are tracked so that close() can stop them
    when the app quits while a call is still blocked.

    Args:
        binary: Path or name of the backend executable.
        timeout: Seconds to wait for one invocation. None waits forever.
    """

    def __init__(
        self,
        binary: str = DEFAULT_BACKEND_BINARY,
        timeout: float | None = None,
    ) -> None:
        self._binary = binary
        self._timeout = timeout
        self._lock = threading.Lock()
        self._processes: set[subprocess.Popen] = set()
        self._closed = False

    @property
    def name(self) -> str:
        return "backend"

    @property
    def binary(self) -> str:
        return self._binary

    @property
    def running(self) -> int:
        """Number of backend processes currently running."""
        with self._lock:
            return len(self._processes)

    def _run(self, args: Sequence[str], what: str) -> bytes:
        """Run the backend and return its raw stdout.

        Raises:
            ProviderInvocationError: If the process cannot be started, times
                out, is stopped by close(), or exits with a non-zero status.
        """
        cmd = [self._binary, *args]
        _logger.debug("Running backend: %s", cmd)
        with self._lock:
            if self._closed:
                raise ProviderInvocationError(f"failed to get {what}: provider is closed")
            try:
                process = subprocess.Popen(
                    cmd,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                )
            except OSError as e:
                raise ProviderInvocationError(f"failed to get {what}: {e}") from e
            self._processes.add(process)

        try:
            stdout, stderr = process.communicate(timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            process.kill()
            process.communicate()
            raise ProviderInvocationError(
                f"failed to get {what}: backend timed out after {self._timeout:g}s"
            ) from e
        finally:
            with self._lock:
                self._processes.discard(process)

        if self._closed:
            raise ProviderInvocationError(f"failed to get {what}: backend was stopped")

        if process.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace").strip()
            detail = stderr_text or f"exit status {process.returncode}"
            raise ProviderInvocationError(
                f"failed to get {what}: {detail}",
                returncode=process.returncode,
                stderr=stderr_text,
            )
        return stdout

    def list_generations(self) -> list[Generation]:
        return parse_generations(self._run(["list-generations"], "generations"))

    def diff(self, from_id: str, to_id: str) -> DiffResult:
        return parse_diff(self._run(["diff", from_id, to_id], "diff"))

    def close(self) -> None:
        """Stop every running backend process and refuse new calls.

        Processes get SIGTERM first and are killed if still alive after
        CLOSE_GRACE_PERIOD seconds.
        """
        with self._lock:
            self._closed = True
            processes = list(self._processes)
        if processes:
            _logger.info("Stopping %d running backend process(es)", len(processes))
        for process in processes:
            process.terminate()
        for process in processes:
            try:
                process.wait(timeout=CLOSE_GRACE_PERIOD)
            except subprocess.TimeoutExpired:
                process.kill()
