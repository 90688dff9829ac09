"""
Course sync selector for Course Sync.

Builds the full list of CourseSyncEntry objects for the current user and
publishes it into a SelectionStore.
"""

import logging
from typing import Optional

from ..canvas.provider import ContentProvider
from ..core.tasks import gather_or_cancel
from .models import (
    OFFLINE_SUPPORTED_TABS,
    CourseSyncEntry,
    EntrySelection,
    SyncTab,
    TabType,
)
from .store import SelectedCountObservation, SelectionStore
from .walker import FolderWalker

logger = logging.getLogger(__name__)


def offline_supported_tabs(raw_tabs: list) -> list:
    """
    Convert API tabs to SyncTabs, keeping only types offline sync supports.

    Only the first files tab is kept.
    """
    tabs = []
    seen_files_tab = False
    for raw in raw_tabs:
        tab_type = TabType.from_name(raw.get("type_name"))
        if tab_type not in OFFLINE_SUPPORTED_TABS:
            continue
        if tab_type is TabType.FILES:
            if seen_files_tab:
                continue
            seen_files_tab = True
        tabs.append(SyncTab(
            id=str(raw.get("id", tab_type.value)),
            name=raw.get("label") or tab_type.value.capitalize(),
            type=tab_type,
        ))
    return tabs


class CourseSyncInteractor:
    """
    Fetches course sync entries and exposes selection on top of them.

    Everything for one fetch runs concurrently: courses, each course's tab
    list and file tree, and sibling folders inside the tree. A failure in any
    of them cancels the rest and nothing is published.
    """

    def __init__(
        self,
        provider: ContentProvider,
        store: Optional[SelectionStore] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.provider = provider
        self.store = store if store is not None else SelectionStore()
        self.walker = FolderWalker(provider, max_retries=max_retries, retry_delay=retry_delay)

    async def _get_tabs(self, course_id: str) -> list:
        raw_tabs = await self.provider.list_tabs(course_id)
        return offline_supported_tabs(raw_tabs)

    async def _get_all_files(self, course_id: str) -> list:
        root_folders = await self.provider.list_root_folders(course_id)
        return await self.walker.walk_many(str(folder["id"]) for folder in root_folders)

    async def _get_entry(self, course: dict) -> CourseSyncEntry:
        course_id = str(course["id"])
        tabs, files = await gather_or_cancel(
            self._get_tabs(course_id),
            self._get_all_files(course_id),
        )
        logger.debug("Course %s: %d tabs, %d files", course_id, len(tabs), len(files))
        return CourseSyncEntry(
            id=course_id,
            name=course.get("name") or "",
            tabs=tabs,
            files=files,
        )

    async def get_course_sync_entries(self) -> list:
        """
        Fetch every active course with its tabs and files.

        The result replaces the store's entries. On any error (or
        cancellation) the store keeps its previous entries.
        """
        self.walker.reset_folders_visited()
        courses = await self.provider.list_active_courses()

        unique_courses = []
        seen_ids = set()
        for course in courses:
            course_id = str(course["id"])
            if course_id in seen_ids:
                logger.warning("Dropping duplicate course %s", course_id)
                continue
            seen_ids.add(course_id)
            unique_courses.append(course)

        entries = await gather_or_cancel(*(self._get_entry(course) for course in unique_courses))

        self.store.replace(entries)
        logger.info(
            "Fetched %d courses, %d folders, %d selected items",
            len(entries), self.walker.folders_visited, self.store.selected_count,
        )
        return entries

    def observe_selected_count(self) -> SelectedCountObservation:
        return self.store.observe_selected_count()

    def set_selected(self, selection: EntrySelection, is_selected: bool):
        self.store.set_selected(selection, is_selected)
