"""
Main Textual application for nix-timemach.

This is the entry point for the TUI that lists system generations and shows
the package diff between any two of them.

Keys:
    ↑/k, ↓/j   move the cursor
    enter      mark the diff start, then pick the target
    esc        leave the diff view
    r          reload the generation list
    q, ctrl+c  quit
"""

from __future__ import annotations

import argparse
import logging
import os

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Header, Static

from timemach.core.controller import Controller
from timemach.core.events import Command, Event, Intent, Quit, Resized, Tick
from timemach.core.keys import KEY_BINDINGS
from timemach.core.render import NOT_READY_TEXT, render
from timemach.core.state import SessionState
from timemach.provider import DEFAULT_BACKEND_BINARY, get_provider
from timemach.provider.base import DataProvider
from timemach.tui.mixins import CommandExecutorMixin

_logger = logging.getLogger(__name__)

BACKEND_ENV_VAR = "NIX_TIMEMACH_BACKEND"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class TimeMachApp(CommandExecutorMixin, App):
    """A Textual app for browsing generations and diffing them."""

    TITLE = "nix-timemach"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
    }

    #frame-container {
        height: 1fr;
        padding: 0 2;
    }

    #frame {
        width: 100%;
    }
    """

    # Every key goes through the intent table; priority so ctrl+c and the
    # arrow keys are not consumed by built-in bindings first
    BINDINGS = [
        Binding(key, f"intent('{intent.value}')", intent.value, show=False, priority=True)
        for key, intent in KEY_BINDINGS.items()
    ]

    # Spinner frame interval in seconds
    SPINNER_INTERVAL: float = 0.1

    def __init__(self, provider: DataProvider, **kwargs) -> None:
        """Initialize the app with a data provider.

        Args:
            provider: Source of generations and diffs.
        """
        super().__init__(**kwargs)
        self.provider = provider
        self.controller = Controller()

    @property
    def state(self) -> SessionState:
        """The controller's session state (read-only use)."""
        return self.controller.state

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        with VerticalScroll(id="frame-container"):
            yield Static(NOT_READY_TEXT, id="frame", markup=False)

    def on_mount(self) -> None:
        """Report the initial size and start loading generations."""
        _logger.info("Starting with %s provider", self.provider.name)
        self.set_interval(self.SPINNER_INTERVAL, self._on_spinner_tick)
        self.apply_event(Resized(self.size.width, self.size.height))
        self._run_commands(self.controller.start())
        self._refresh_frame()

    def on_unmount(self) -> None:
        self._stop_fetches()

    def on_resize(self, event: events.Resize) -> None:
        self.apply_event(Resized(event.size.width, event.size.height))

    def _on_spinner_tick(self) -> None:
        if self.state.loading:
            self.apply_event(Tick())

    def action_intent(self, name: str) -> None:
        """Feed the intent bound to the pressed key to the controller."""
        self.apply_event(Intent(name))

    def apply_event(self, event: Event) -> None:
        """Apply an event on the UI thread, run its commands, redraw."""
        commands = self.controller.update(event)
        self._run_commands(commands)
        self._refresh_frame()

    def _run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, Quit):
                self._stop_fetches()
                self.exit()
            else:
                self._run_fetch_command(command)

    def _refresh_frame(self) -> None:
        """Re-render the frame widget from the current state."""
        try:
            frame = self.query_one("#frame", Static)
        except NoMatches:
            # Resize can arrive before the layout is composed
            return
        frame.update(render(self.state))


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    """Send log records to ``log_file``; the terminal belongs to the TUI."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="nix-timemach",
        description="Browse NixOS system generations and inspect the package "
        "differences between any two of them.",
    )
    parser.add_argument(
        "--backend",
        default=os.environ.get(BACKEND_ENV_VAR, DEFAULT_BACKEND_BINARY),
        help=f"Backend executable (default: ${BACKEND_ENV_VAR} or {DEFAULT_BACKEND_BINARY})",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use built-in sample generations instead of the backend",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each backend call (default: wait forever)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log output to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages (requires --log-file)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    _configure_logging(args.log_file, args.verbose)

    if args.demo:
        provider = get_provider("demo")
    else:
        provider = get_provider("backend", binary=args.backend, timeout=args.timeout)

    app = TimeMachApp(provider=provider)
    app.run()


if __name__ == "__main__":
    main()
