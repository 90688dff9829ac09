"""Pytest configuration and fixtures."""

import pytest

from coursesync.canvas import PreviewProvider
from coursesync.sync import CourseSyncEntry, SyncFile, SyncTab, TabType


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "stress: stress tests with large data (deselect with -m 'not stress')"
    )


def file_item(file_id, name=None, url=None) -> dict:
    data = {"id": file_id}
    if name is not None:
        data["display_name"] = name
    if url is not None:
        data["url"] = url
    return {"file": data}


def folder_item(folder_id) -> dict:
    return {"folder": {"id": folder_id}}


def make_entry(course_id="1", n_files=3, tab_types=(TabType.ASSIGNMENTS, TabType.FILES)) -> CourseSyncEntry:
    """Course entry with the given tabs and n_files files, everything selected."""
    return CourseSyncEntry(
        id=course_id,
        name=f"Course {course_id}",
        tabs=[SyncTab(id=t.value, name=t.value.title(), type=t) for t in tab_types],
        files=[SyncFile(id=f"{course_id}-{i}", name=f"file{i}.pdf") for i in range(n_files)],
    )


@pytest.fixture
def bio_provider():
    """
    One course "Bio" with a files tab; root folder r1 holds y.pdf directly
    and x.pdf inside subfolder r1/a.
    """
    return PreviewProvider(
        courses=[{"id": "1", "name": "Bio"}],
        tabs={"1": [{"id": "t1", "label": "Files", "type_name": "files"}]},
        root_folders={"1": [{"id": "r1"}]},
        folder_items={
            "r1": [folder_item("r1/a"), file_item("y", "y.pdf")],
            "r1/a": [file_item("x", "x.pdf")],
        },
    )
