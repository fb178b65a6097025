"""
Command Executor Mixin for running provider fetches off the UI thread.

Provides a reusable pattern for:
- Running a fetch command in a background thread
- Converting the result or failure into a single outcome event
- Handing that event back to the UI thread for the controller
- Stopping outstanding fetches when the app quits
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual import work
from textual.worker import get_current_worker

from timemach.core.executor import execute

if TYPE_CHECKING:
    from timemach.core.events import FetchCommand
    from timemach.provider.base import DataProvider

_logger = logging.getLogger(__name__)


class CommandExecutorMixin:
    """Mixin providing background execution of fetch commands.

    The host must expose a ``provider`` attribute and an ``apply_event(event)``
    method that feeds events to the controller on the UI thread.

    Workers are not exclusive: a second fetch of the same kind
    does not cancel the first, and whichever result arrives last is the one
    left in the session state.

    Usage:
        class MyApp(CommandExecutorMixin, App):
            def apply_event(self, event):
                for command in self.controller.update(event):
                    self._run_fetch_command(command)
    """

    provider: DataProvider

    # Worker group shared by all fetches, so tests can wait on them
    FETCH_GROUP: str = "fetch"

    def _run_fetch_command(self, command: FetchCommand) -> None:
        """Start a background fetch for ``command``."""
        _logger.debug("Scheduling %r", command)
        self._run_fetch_worker(command)

    def _stop_fetches(self) -> None:
        """Cancel outstanding fetches and unblock their provider calls."""
        self.workers.cancel_group(self, self.FETCH_GROUP)
        self.provider.close()

    @work(thread=True, group=FETCH_GROUP)
    def _run_fetch_worker(self, command: FetchCommand) -> None:
        """Background worker for fetch commands."""
        outcome = execute(self.provider, command)
        if get_current_worker().is_cancelled:
            _logger.debug("Dropping %r after shutdown", outcome)
            return
        self.app.call_from_thread(self.apply_event, outcome)
