"""
Plain-text rendering of a course sync selection.
"""

import re

from .colors import Colors, paint


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return re.sub(r'\x1b\[[0-9;]*m', '', text)


def _checkbox(is_selected: bool, color: bool) -> str:
    if is_selected:
        return paint("[x]", Colors.GREEN, color)
    return paint("[ ]", Colors.MUTED, color)


def format_selected_count(count: int) -> str:
    return f"{count} item{'s' if count != 1 else ''} selected"


def render_selection_tree(entries: list, color: bool = False) -> str:
    """
    Render entries as an indented checkbox tree.

    Every line carries the selection path that can be passed back to
    --select/--deselect, e.g. "0:tab:1".
    """
    lines = []
    for ci, entry in enumerate(entries):
        name = paint(entry.name or entry.id, Colors.BOLD, color)
        counts = paint(f"({entry.selected_count}/{len(entry.tabs) + len(entry.files)})", Colors.MUTED, color)
        lines.append(f"{_checkbox(entry.is_selected, color)} {name} {counts}  {ci}")

        for ti, tab in enumerate(entry.tabs):
            path = paint(f"{ci}:tab:{ti}", Colors.DIM, color)
            lines.append(f"    {_checkbox(tab.is_selected, color)} {tab.name}  {path}")

        for fi, f in enumerate(entry.files):
            path = paint(f"{ci}:file:{fi}", Colors.DIM, color)
            lines.append(f"        {_checkbox(f.is_selected, color)} {f.name}  {path}")

    return "\n".join(lines)
