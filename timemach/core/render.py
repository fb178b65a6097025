"""
Renderer: pure function from SessionState to a text frame.

Precedence, highest first: not-ready placeholder, stored error, loading
indicator, then the listing or diff view. Every frame except the
placeholder ends with the help line.
"""

from __future__ import annotations

from timemach.core.keys import help_line
from timemach.core.state import SessionState, View
from timemach.models import DiffResult

TITLE = "nix-timemach"
NOT_READY_TEXT = "Initializing..."
SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

# (heading, line prefix, DiffResult attribute)
DIFF_SECTIONS = (
    ("Added:", "+", "added"),
    ("Removed:", "-", "removed"),
    ("Modified:", "~", "modified"),
)


def render(state: SessionState) -> str:
    """Render the whole frame for ``state``."""
    if not state.ready:
        return NOT_READY_TEXT

    if state.last_error is not None:
        content = render_error(state)
    elif state.loading:
        content = render_loading(state)
    elif state.view is View.SHOWING_DIFF:
        content = render_diff(state)
    else:
        content = render_listing(state)

    return f"{content}\n\n{help_line()}"


def render_error(state: SessionState) -> str:
    if state.view is View.SHOWING_DIFF:
        hint = "Press 'esc' to go back or 'q' to quit"
    else:
        hint = "Press 'r' to reload or 'q' to quit"
    return f"Error: {state.last_error}\n\n{hint}"


def render_loading(state: SessionState) -> str:
    frame = SPINNER_FRAMES[state.spinner_frame % len(SPINNER_FRAMES)]
    return f"{frame} Loading..."


def render_listing(state: SessionState) -> str:
    lines = [TITLE, ""]
    if not state.generations:
        lines.append("  No generations found")
        return "\n".join(lines)

    for i, gen in enumerate(state.generations):
        cursor = ">" if i == state.cursor else " "
        marker = "*" if state.is_pending(gen) else " "
        item = f"{cursor}{marker} {gen.display_time} - {gen.description}"
        if gen.current:
            item += " (current)"
        lines.append(item.rstrip())
    return "\n".join(lines)


def _render_sections(diff: DiffResult) -> list[str]:
    if diff.is_empty:
        return ["No differences"]
    lines: list[str] = []
    for heading, prefix, attr in DIFF_SECTIONS:
        items = getattr(diff, attr)
        if not items:
            continue
        lines.append(heading)
        lines.extend(f"  {prefix} {item}" for item in items)
        lines.append("")
    return lines[:-1]


def render_diff(state: SessionState) -> str:
    if state.diff is None:
        return "Loading diff..."

    if state.comparing is not None:
        source, target = state.comparing
        header = f"Diff: {source.display_time} → {target.display_time}"
    else:
        header = "Diff"
    return "\n".join([header, "", *_render_sections(state.diff)])
