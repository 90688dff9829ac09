"""
Course sync selection models.

A CourseSyncEntry is one course's offline-sync record: the tabs that can be
synced, every file in the course's folder tree, and the selection flags that
tie them together.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

UNKNOWN_FILE_NAME = "Unknown file"


class TabType(Enum):
    """Canvas course navigation tabs."""
    ANNOUNCEMENTS = "announcements"
    ASSIGNMENTS = "assignments"
    COLLABORATIONS = "collaborations"
    CONFERENCES = "conferences"
    DISCUSSIONS = "discussions"
    FILES = "files"
    GRADES = "grades"
    HOME = "home"
    MODULES = "modules"
    OUTCOMES = "outcomes"
    PAGES = "pages"
    PEOPLE = "people"
    QUIZZES = "quizzes"
    SETTINGS = "settings"
    SYLLABUS = "syllabus"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["TabType"]:
        """Look up a tab type by its API name. Unknown names (LTI tools etc.) give None."""
        if not name:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


# Tabs the offline sync feature knows how to download
OFFLINE_SUPPORTED_TABS = frozenset({
    TabType.ANNOUNCEMENTS,
    TabType.ASSIGNMENTS,
    TabType.DISCUSSIONS,
    TabType.FILES,
    TabType.GRADES,
    TabType.PAGES,
    TabType.PEOPLE,
    TabType.QUIZZES,
    TabType.SYLLABUS,
})


@dataclass
class SyncTab:
    """A course tab eligible for offline sync."""
    id: str
    name: str
    type: TabType
    is_selected: bool = True
    is_collapsed: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "is_selected": self.is_selected,
        }


@dataclass
class SyncFile:
    """A single file found somewhere in a course's folder tree."""
    id: str
    name: str
    url: Optional[str] = None
    is_selected: bool = True

    @classmethod
    def from_api(cls, data: dict) -> "SyncFile":
        """
        Build from a Canvas file record.

        Records without an id get a random one, records without a name get
        UNKNOWN_FILE_NAME.
        """
        file_id = data.get("id")
        name = data.get("display_name") or data.get("filename")
        return cls(
            id=str(file_id) if file_id is not None else str(uuid.uuid4()),
            name=name or UNKNOWN_FILE_NAME,
            url=data.get("url") or None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "is_selected": self.is_selected,
        }


@dataclass
class CourseSyncEntry:
    """
    One course's sync selection.

    Selection cascades:
    - course -> every tab and file
    - files tab -> every file
    - any file -> files tab is selected iff all files are selected
    """
    id: str
    name: str
    tabs: list = field(default_factory=list)
    files: list = field(default_factory=list)
    is_selected: bool = True
    is_collapsed: bool = True

    @property
    def selected_tabs_count(self) -> int:
        return sum(1 for tab in self.tabs if tab.is_selected)

    @property
    def selected_files_count(self) -> int:
        return sum(1 for f in self.files if f.is_selected)

    @property
    def selected_count(self) -> int:
        return self.selected_tabs_count + self.selected_files_count

    @property
    def files_tab(self) -> Optional[SyncTab]:
        for tab in self.tabs:
            if tab.type is TabType.FILES:
                return tab
        return None

    def set_selected(self, is_selected: bool):
        """Select or deselect the whole course."""
        self.is_selected = is_selected
        for tab in self.tabs:
            tab.is_selected = is_selected
        for f in self.files:
            f.is_selected = is_selected

    def select_tab(self, index: int, is_selected: bool):
        tab = self.tabs[index]
        tab.is_selected = is_selected

        if tab.type is not TabType.FILES:
            return

        for f in self.files:
            f.is_selected = is_selected

    def select_file(self, index: int, is_selected: bool):
        self.files[index].is_selected = is_selected

        files_tab = self.files_tab
        if files_tab is None:
            return
        files_tab.is_selected = self.selected_files_count == len(self.files)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "is_selected": self.is_selected,
            "selected_count": self.selected_count,
            "tabs": [tab.to_dict() for tab in self.tabs],
            "files": [f.to_dict() for f in self.files],
        }


# ============================================================================
# Selection paths
# ============================================================================

@dataclass(frozen=True)
class CourseSelection:
    course_index: int


@dataclass(frozen=True)
class TabSelection:
    course_index: int
    tab_index: int


@dataclass(frozen=True)
class FileSelection:
    course_index: int
    file_index: int


EntrySelection = Union[CourseSelection, TabSelection, FileSelection]


def parse_selection(text: str) -> EntrySelection:
    """
    Parse a selection path.

    Supports formats:
    - "2"          -> course 2
    - "2:tab:0"    -> tab 0 of course 2
    - "2:file:5"   -> file 5 of course 2

    Raises:
        ValueError: If the text isn't one of the formats above
    """
    parts = [p.strip() for p in text.strip().split(":")]
    try:
        indices = [int(parts[0])] + ([int(parts[2])] if len(parts) == 3 else [])
    except (ValueError, IndexError):
        raise ValueError(f"Invalid selection: {text!r}")

    if any(i < 0 for i in indices):
        raise ValueError(f"Selection indices must not be negative: {text!r}")

    if len(parts) == 1:
        return CourseSelection(indices[0])
    if len(parts) == 3 and parts[1] == "tab":
        return TabSelection(indices[0], indices[1])
    if len(parts) == 3 and parts[1] == "file":
        return FileSelection(indices[0], indices[1])
    raise ValueError(f"Invalid selection: {text!r}")


def count_selected(entries: list) -> int:
    """Total selected tabs + files across all entries."""
    return sum(entry.selected_count for entry in entries)
