"""
Selection state store for Course Sync.

Holds the current list of CourseSyncEntry objects for a selection session,
applies selection changes and tells observers the new selected count after
every change.
"""

import logging
import threading
from collections import deque
from typing import Callable, Iterable, Iterator

from .models import (
    CourseSelection,
    EntrySelection,
    FileSelection,
    TabSelection,
    count_selected,
)

logger = logging.getLogger(__name__)

CountCallback = Callable[[int], None]


def _at(items: list, index: int, kind: str):
    # Negative indices would silently pick from the end
    if not 0 <= index < len(items):
        raise IndexError(f"No {kind} at index {index} (have {len(items)})")
    return items[index]


class SelectedCountObservation:
    """
    One subscription to the selected count.

    Starts with the count at subscription time and buffers one value per
    change after that. Iterating yields the buffered values and stops when the
    buffer is empty; iterate again later to pick up newer values.
    """

    def __init__(self, store: "SelectionStore"):
        self._values: deque = deque()
        self._unsubscribe = store.subscribe(self._values.append, emit_current=True)
        self.closed = False

    def __iter__(self) -> Iterator[int]:
        while self._values:
            yield self._values.popleft()

    def latest(self):
        """Most recent buffered value without consuming anything (None if empty)."""
        return self._values[-1] if self._values else None

    def close(self):
        """Stop receiving values. Already buffered values can still be read."""
        if not self.closed:
            self._unsubscribe()
            self.closed = True

    def __enter__(self) -> "SelectedCountObservation":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class SelectionStore:
    """
    Session-scoped holder of the course sync entries.

    Mutations take a lock and notify observers before releasing it, so
    observers see counts in exactly the order mutations were applied even
    with several writer threads.
    """

    def __init__(self, entries: Iterable = ()):
        self._entries = list(entries)
        self._observers: list = []
        self._lock = threading.RLock()

    @property
    def entries(self) -> list:
        """Snapshot of the current entry list (the entries themselves are live)."""
        with self._lock:
            return list(self._entries)

    @property
    def selected_count(self) -> int:
        with self._lock:
            return count_selected(self._entries)

    def subscribe(self, callback: CountCallback, emit_current: bool = False) -> Callable[[], None]:
        """
        Register a callback for count changes.

        Args:
            callback: Called with the new count after every change
            emit_current: Also call it right away with the current count

        Returns:
            Function that removes the callback
        """
        with self._lock:
            self._observers.append(callback)
            if emit_current:
                callback(count_selected(self._entries))

        def unsubscribe():
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def observe_selected_count(self) -> SelectedCountObservation:
        """Start a new observation of the selected count."""
        return SelectedCountObservation(self)

    def _publish(self):
        # A failing observer is logged and skipped; the rest still get the count
        count = count_selected(self._entries)
        for callback in list(self._observers):
            try:
                callback(count)
            except Exception:
                logger.exception("Selected count observer %r failed", callback)

    def replace(self, entries: Iterable):
        """Swap in a whole new entry list (e.g. after a refetch)."""
        with self._lock:
            self._entries = list(entries)
            self._publish()

    def set_selected(self, selection: EntrySelection, is_selected: bool):
        """
        Apply a selection change and publish the new count.

        Raises:
            IndexError: If the selection points past the current entries
            TypeError: If selection isn't a Course/Tab/FileSelection
        """
        if not isinstance(selection, (CourseSelection, TabSelection, FileSelection)):
            raise TypeError(f"Unknown selection type: {type(selection).__name__}")

        with self._lock:
            entry = _at(self._entries, selection.course_index, "course")

            if isinstance(selection, CourseSelection):
                entry.set_selected(is_selected)
            elif isinstance(selection, TabSelection):
                _at(entry.tabs, selection.tab_index, "tab")
                entry.select_tab(selection.tab_index, is_selected)
            else:
                _at(entry.files, selection.file_index, "file")
                entry.select_file(selection.file_index, is_selected)

            self._publish()

    def clear(self):
        """Drop all entries (end of a selection session)."""
        self.replace([])
