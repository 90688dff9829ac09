"""
Terminal output for Course Sync.
"""

from .colors import Colors, supports_color
from .tree import render_selection_tree, format_selected_count, strip_ansi

__all__ = [
    "Colors",
    "supports_color",
    "render_selection_tree",
    "format_selected_count",
    "strip_ansi",
]
