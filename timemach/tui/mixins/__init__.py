"""Mixins for the TUI application."""

from timemach.tui.mixins.command_executor import CommandExecutorMixin

__all__ = [
    "CommandExecutorMixin",
]
