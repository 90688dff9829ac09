"""
Course sync selection module.

Handles the entry models, folder tree walking, course aggregation and the
selection store.
"""

from .models import (
    TabType,
    OFFLINE_SUPPORTED_TABS,
    UNKNOWN_FILE_NAME,
    SyncTab,
    SyncFile,
    CourseSyncEntry,
    CourseSelection,
    TabSelection,
    FileSelection,
    EntrySelection,
    parse_selection,
    count_selected,
)
from .walker import FolderWalker
from .store import SelectionStore, SelectedCountObservation
from .interactor import CourseSyncInteractor, offline_supported_tabs

__all__ = [
    # Models
    "TabType",
    "OFFLINE_SUPPORTED_TABS",
    "UNKNOWN_FILE_NAME",
    "SyncTab",
    "SyncFile",
    "CourseSyncEntry",
    "CourseSelection",
    "TabSelection",
    "FileSelection",
    "EntrySelection",
    "parse_selection",
    "count_selected",
    # Walking
    "FolderWalker",
    # Store
    "SelectionStore",
    "SelectedCountObservation",
    # Aggregation
    "CourseSyncInteractor",
    "offline_supported_tabs",
]
