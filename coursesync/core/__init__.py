"""
Shared helpers for Course Sync.
"""

from .tasks import gather_or_cancel

__all__ = ["gather_or_cancel"]
