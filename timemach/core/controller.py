"""
Controller: the state machine behind the interface.

The controller consumes one event at a time, mutates the SessionState it
owns, and returns the commands the caller must carry out. It never blocks
and never performs I/O, so it can be driven directly from tests.

Views:
    LISTING       cursor movement, pair selection, reload
    SHOWING_DIFF  only back and quit are honoured

Selection protocol:
    The first Select marks the generation under the cursor as pending. The
    second Select (on any generation, including the same one) switches to
    SHOWING_DIFF immediately and requests diff(pending, cursor). The diff
    payload arrives later as a DiffFetched event.
"""

from __future__ import annotations

import logging

from timemach.core.events import (
    Command,
    DiffFetched,
    Event,
    FetchDiff,
    FetchFailed,
    FetchGenerations,
    Intent,
    ListFetched,
    Quit,
    Resized,
    Tick,
)
from timemach.core.state import SessionState, View

_logger = logging.getLogger(__name__)


class Controller:
    """Owns SessionState and applies events to it."""

    def __init__(self, state: SessionState | None = None) -> None:
        self.state = state if state is not None else SessionState()

    def start(self) -> list[Command]:
        """Begin the session by requesting the initial generation list."""
        self.state.loading = True
        return [FetchGenerations()]

    def update(self, event: Event) -> list[Command]:
        """Apply one event and return the commands it produces."""
        if isinstance(event, Intent):
            return self._handle_intent(event)
        if isinstance(event, ListFetched):
            self._on_list_fetched(event)
        elif isinstance(event, DiffFetched):
            self._on_diff_fetched(event)
        elif isinstance(event, FetchFailed):
            self._on_fetch_failed(event)
        elif isinstance(event, Resized):
            self.state.size = (event.width, event.height)
        elif isinstance(event, Tick):
            self.state.spinner_frame += 1
        else:
            _logger.warning("Ignoring unknown event: %r", event)
        return []

    # -- intents -----------------------------------------------------------

    def _handle_intent(self, intent: Intent) -> list[Command]:
        if intent is Intent.QUIT:
            return [Quit()]
        if self.state.view is View.SHOWING_DIFF:
            if intent is Intent.BACK:
                self._back_to_listing()
            return []

        if intent is Intent.MOVE_UP:
            self._move_cursor(-1)
        elif intent is Intent.MOVE_DOWN:
            self._move_cursor(1)
        elif intent is Intent.SELECT:
            return self._select()
        elif intent is Intent.RELOAD:
            self.state.loading = True
            return [FetchGenerations()]
        return []

    def _move_cursor(self, delta: int) -> None:
        state = self.state
        target = state.cursor + delta
        # Out-of-range movement is absorbed silently
        if 0 <= target < len(state.generations):
            state.cursor = target

    def _select(self) -> list[Command]:
        state = self.state
        target = state.current
        if target is None:
            return []

        if state.pending_from is None:
            state.pending_from = target
            return []

        source = state.pending_from
        state.view = View.SHOWING_DIFF
        state.comparing = (source, target)
        state.pending_from = None
        state.loading = True
        _logger.debug("Requesting diff %s -> %s", source.id, target.id)
        return [FetchDiff(source.id, target.id)]

    def _back_to_listing(self) -> None:
        state = self.state
        state.view = View.LISTING
        state.diff = None
        state.pending_from = None
        state.comparing = None

    # -- fetch outcomes ----------------------------------------------------

    def _on_list_fetched(self, event: ListFetched) -> None:
        state = self.state
        state.generations = list(event.generations)
        state.cursor = 0
        state.loading = False
        state.last_error = None

    def _on_diff_fetched(self, event: DiffFetched) -> None:
        state = self.state
        state.loading = False
        state.last_error = None
        if state.view is View.SHOWING_DIFF:
            state.diff = event.diff
        else:
            _logger.debug("Dropping diff that arrived after leaving the diff view")

    def _on_fetch_failed(self, event: FetchFailed) -> None:
        self.state.last_error = event.error
        self.state.loading = False
