"""
Tests for CourseSyncInteractor.

Integration tests for get_course_sync_entries() against in-memory providers:
what ends up in each entry, and what happens to the store when a fetch fails.
"""

import asyncio

import pytest

from coursesync.canvas import PreviewProvider
from coursesync.errors import ApiError, AuthorizationError, TransientNetworkError
from coursesync.sync import (
    CourseSelection,
    CourseSyncInteractor,
    FileSelection,
    SelectionStore,
    TabSelection,
    TabType,
    offline_supported_tabs,
)
from conftest import file_item, folder_item, make_entry


def fetch(provider, store=None):
    interactor = CourseSyncInteractor(provider, store=store, retry_delay=0)
    entries = asyncio.run(interactor.get_course_sync_entries())
    return interactor, entries


class TestBioScenario:
    """One course, one files tab, a file at the root and one in a subfolder."""

    def test_entry_contents(self, bio_provider):
        _, entries = fetch(bio_provider)
        assert len(entries) == 1

        entry = entries[0]
        assert entry.id == "1"
        assert entry.name == "Bio"
        assert entry.is_selected is True
        assert [(t.id, t.type, t.is_selected) for t in entry.tabs] == [("t1", TabType.FILES, True)]
        assert [f.name for f in entry.files] == ["y.pdf", "x.pdf"]
        assert all(f.is_selected for f in entry.files)

    def test_initial_selected_count(self, bio_provider):
        interactor, _ = fetch(bio_provider)
        with interactor.observe_selected_count() as counts:
            assert list(counts) == [3]

    def test_selection_through_interactor(self, bio_provider):
        interactor, _ = fetch(bio_provider)
        counts = interactor.observe_selected_count()

        interactor.set_selected(FileSelection(0, 0), False)
        interactor.set_selected(FileSelection(0, 0), True)
        interactor.set_selected(TabSelection(0, 0), False)
        interactor.set_selected(CourseSelection(0), True)

        # 3 -> file and files tab off (1) -> all files back (3) -> tab cascades (0) -> all (3)
        assert list(counts) == [3, 1, 3, 0, 3]

    def test_tabs_collapsed_by_default(self, bio_provider):
        _, entries = fetch(bio_provider)
        assert entries[0].is_collapsed is True
        assert entries[0].tabs[0].is_collapsed is True


class TestCourseAggregation:
    def test_course_order_preserved(self):
        courses = [{"id": str(i), "name": f"C{i}"} for i in (5, 2, 9, 1)]
        provider = PreviewProvider(
            courses=courses,
            root_folders={c["id"]: [{"id": f"root{c['id']}"}] for c in courses},
            folder_items={f"root{c['id']}": [file_item(f"f{c['id']}")] for c in courses},
        )
        _, entries = fetch(provider)
        assert [e.id for e in entries] == ["5", "2", "9", "1"]
        assert [e.files[0].id for e in entries] == ["f5", "f2", "f9", "f1"]

    def test_duplicate_courses_dropped(self):
        provider = PreviewProvider(courses=[
            {"id": "1", "name": "First"},
            {"id": "2", "name": "Other"},
            {"id": "1", "name": "Again"},
        ])
        _, entries = fetch(provider)
        assert [(e.id, e.name) for e in entries] == [("1", "First"), ("2", "Other")]

    def test_multiple_root_folders_concatenated(self):
        provider = PreviewProvider(
            courses=[{"id": "1", "name": "Bio"}],
            root_folders={"1": [{"id": "ra"}, {"id": "rb"}]},
            folder_items={
                "ra": [file_item("a1"), folder_item("ra/sub")],
                "ra/sub": [file_item("a2")],
                "rb": [file_item("b1")],
            },
        )
        _, entries = fetch(provider)
        assert [f.id for f in entries[0].files] == ["a1", "a2", "b1"]

    def test_course_without_folders(self):
        provider = PreviewProvider(
            courses=[{"id": "1", "name": "Empty"}],
            tabs={"1": [{"id": "pages", "label": "Pages", "type_name": "pages"}]},
        )
        _, entries = fetch(provider)
        assert entries[0].files == []
        assert entries[0].selected_count == 1

    def test_no_courses(self):
        store = SelectionStore([make_entry()])
        _, entries = fetch(PreviewProvider(), store=store)
        assert entries == []
        assert store.entries == []

    def test_refetch_replaces_store(self, bio_provider):
        store = SelectionStore()
        interactor, first = fetch(bio_provider, store=store)
        store.set_selected(CourseSelection(0), False)

        second = asyncio.run(interactor.get_course_sync_entries())
        assert store.entries == second
        assert store.entries[0] is not first[0]
        assert store.selected_count == 3

    def test_unauthorized_folder_does_not_fail_course(self):
        provider = PreviewProvider(
            courses=[{"id": "1", "name": "Bio"}],
            root_folders={"1": [{"id": "r"}]},
            folder_items={
                "r": [folder_item("hidden"), file_item("visible")],
                "hidden": [file_item("secret")],
            },
            failures={"folder:hidden": AuthorizationError(401, "hidden")},
        )
        _, entries = fetch(provider)
        assert [f.id for f in entries[0].files] == ["visible"]


class TestOfflineSupportedTabs:
    """Tests for offline_supported_tabs() filtering."""

    def test_unsupported_and_unknown_tabs_dropped(self):
        raw = [
            {"id": "home", "label": "Home", "type_name": "home"},
            {"id": "assignments", "label": "Assignments", "type_name": "assignments"},
            {"id": "context_external_tool_3", "label": "Zoom", "type_name": "context_external_tool_3"},
            {"id": "modules", "label": "Modules", "type_name": "modules"},
            {"id": "files", "label": "Files", "type_name": "files"},
        ]
        tabs = offline_supported_tabs(raw)
        assert [t.type for t in tabs] == [TabType.ASSIGNMENTS, TabType.FILES]
        assert all(t.is_selected and t.is_collapsed for t in tabs)

    def test_only_first_files_tab_kept(self):
        raw = [
            {"id": "files", "label": "Files", "type_name": "files"},
            {"id": "files2", "label": "More Files", "type_name": "files"},
        ]
        tabs = offline_supported_tabs(raw)
        assert [t.id for t in tabs] == ["files"]

    def test_missing_label_gets_type_name(self):
        tabs = offline_supported_tabs([{"id": "grades", "type_name": "grades"}])
        assert tabs[0].name == "Grades"


class TestFailures:
    """Any course failure fails the whole fetch and leaves the store alone."""

    @pytest.fixture
    def store(self):
        return SelectionStore([make_entry("old")])

    def _provider(self, failures):
        return PreviewProvider(
            courses=[{"id": "1", "name": "A"}, {"id": "2", "name": "B"}],
            tabs={"1": [{"id": "files", "label": "Files", "type_name": "files"}]},
            root_folders={"1": [{"id": "r1"}], "2": [{"id": "r2"}]},
            folder_items={"r1": [file_item("a")], "r2": [file_item("b")]},
            failures=failures,
        )

    @pytest.mark.parametrize("failures,expected", [
        ({"courses": AuthorizationError(401, "courses")}, AuthorizationError),
        ({"tabs:2": AuthorizationError(401, "tabs")}, AuthorizationError),
        ({"tabs:1": TransientNetworkError("timeout")}, TransientNetworkError),
        ({"roots:2": ApiError(404, "roots")}, ApiError),
        ({"folder:r2": ApiError(500, "r2")}, ApiError),
        ({"folder:r1": TransientNetworkError("503")}, TransientNetworkError),
    ])
    def test_failure_publishes_nothing(self, store, failures, expected):
        counts = store.observe_selected_count()
        with pytest.raises(expected):
            fetch(self._provider(failures), store=store)
        assert [e.id for e in store.entries] == ["old"]
        assert list(counts) == [5]

    def test_course_list_and_tabs_not_retried(self, store):
        provider = self._provider({"courses": [TransientNetworkError("blip")]})
        with pytest.raises(TransientNetworkError):
            fetch(provider, store=store)
        assert provider.calls["courses"] == 1

    def test_cancellation_publishes_nothing(self, store):
        provider = self._provider({})
        provider.delay = 0.2

        async def cancel_midway():
            interactor = CourseSyncInteractor(provider, store=store, retry_delay=0)
            task = asyncio.ensure_future(interactor.get_course_sync_entries())
            await asyncio.sleep(0.3)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(cancel_midway())
        assert [e.id for e in store.entries] == ["old"]


class TestDemoData:
    def test_demo_data(self):
        _, entries = fetch(PreviewProvider.demo())
        entry = entries[0]
        assert entry.name == "Black Hole"
        # The external tool tab is not offline capable
        assert len(entry.tabs) == 6
        assert [f.id for f in entry.files] == ["10", "11", "12"]

    def test_unauthorized_folder_recovers_on_retry(self):
        provider = PreviewProvider.demo()
        provider.failures = {"folder:lectures": [AuthorizationError(401, "lectures")] * 2}
        _, entries = fetch(provider)
        assert [f.id for f in entries[0].files] == ["10", "11", "12"]
        assert provider.calls["folder:lectures"] == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
