"""
In-memory content provider.

Serves canned courses and folder trees without touching the network. Used by
`course-sync --preview` and by the tests, which also use it to inject
failures for particular requests.
"""

import asyncio
from collections import Counter
from typing import Optional

from .provider import ContentProvider


class PreviewProvider(ContentProvider):
    """
    ContentProvider backed by plain dicts.

    Args:
        courses: [{"id", "name"}, ...]
        tabs: {course_id: [{"id", "label", "type_name"}, ...]}
        root_folders: {course_id: [{"id"}, ...]}
        folder_items: {folder_id: [{"file": {...}} | {"folder": {"id"}}, ...]}
        failures: {request_key: exception or [exception, ...]}
            Request keys are "courses", "tabs:<course_id>", "roots:<course_id>"
            and "folder:<folder_id>". A single exception is raised on every
            call; a list is consumed one exception per call, after which the
            request succeeds.
        delay: Seconds to sleep before answering each request
    """

    def __init__(
        self,
        courses: Optional[list] = None,
        tabs: Optional[dict] = None,
        root_folders: Optional[dict] = None,
        folder_items: Optional[dict] = None,
        failures: Optional[dict] = None,
        delay: float = 0.0,
    ):
        self.courses = courses or []
        self.tabs = tabs or {}
        self.root_folders = root_folders or {}
        self.folder_items = folder_items or {}
        self.failures = failures or {}
        self.delay = delay
        self.calls: Counter = Counter()

    async def _answer(self, key: str, value: list) -> list:
        self.calls[key] += 1
        if self.delay:
            await asyncio.sleep(self.delay)

        failure = self.failures.get(key)
        if isinstance(failure, list):
            if failure:
                raise failure.pop(0)
        elif failure is not None:
            raise failure

        return [dict(item) for item in value]

    async def list_active_courses(self) -> list:
        return await self._answer("courses", self.courses)

    async def list_tabs(self, course_id: str) -> list:
        return await self._answer(f"tabs:{course_id}", self.tabs.get(course_id, []))

    async def list_root_folders(self, course_id: str) -> list:
        return await self._answer(f"roots:{course_id}", self.root_folders.get(course_id, []))

    async def list_folder_items(self, folder_id: str) -> list:
        return await self._answer(f"folder:{folder_id}", self.folder_items.get(folder_id, []))

    @classmethod
    def demo(cls) -> "PreviewProvider":
        """A single course with a couple of lecture recordings."""
        course_tabs = [
            {"id": "assignments", "label": "Assignments", "type_name": "assignments"},
            {"id": "discussions", "label": "Discussions", "type_name": "discussions"},
            {"id": "grades", "label": "Grades", "type_name": "grades"},
            {"id": "people", "label": "People", "type_name": "people"},
            {"id": "files", "label": "Files", "type_name": "files"},
            {"id": "syllabus", "label": "Syllabus", "type_name": "syllabus"},
            {"id": "context_external_tool_42", "label": "Zoom", "type_name": "context_external_tool_42"},
        ]
        return cls(
            courses=[{"id": "0", "name": "Black Hole"}],
            tabs={"0": course_tabs},
            root_folders={"0": [{"id": "root"}]},
            folder_items={
                "root": [
                    {"folder": {"id": "lectures"}},
                    {"file": {"id": "10", "display_name": "Syllabus.pdf"}},
                ],
                "lectures": [
                    {"file": {"id": "11", "display_name": "Creative Machines and Innovative Instrumentation.mov"}},
                    {"file": {"id": "12", "display_name": "Intro Energy, Space and Time.mov"}},
                ],
            },
        )
