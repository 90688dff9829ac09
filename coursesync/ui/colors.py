"""
Shared color definitions for terminal output.
"""

import os
import sys


class Colors:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    GREEN = "\x1b[38;2;74;222;128m"
    MUTED = "\x1b[38;2;148;163;184m"


def supports_color(stream=None) -> bool:
    """True if the stream is a TTY and NO_COLOR isn't set."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def paint(text: str, color: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{color}{text}{Colors.RESET}"
