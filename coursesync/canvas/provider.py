"""
Content provider interface.

The sync selector only needs four read operations from the LMS. CanvasClient
implements them over HTTP, PreviewProvider serves canned data.
"""

from abc import ABC, abstractmethod


class ContentProvider(ABC):
    """
    Read-only source of courses, tabs and folder contents.

    All methods raise CourseSyncError subclasses on failure:
    TransientNetworkError, AuthorizationError, ApiError, MalformedDataError.
    """

    @abstractmethod
    async def list_active_courses(self) -> list:
        """Active-enrollment courses as [{"id": str, "name": str}, ...]."""

    @abstractmethod
    async def list_tabs(self, course_id: str) -> list:
        """Course tabs as [{"id": str, "label": str, "type_name": str}, ...]."""

    @abstractmethod
    async def list_root_folders(self, course_id: str) -> list:
        """Root folder(s) of a course as [{"id": str, ...}, ...]."""

    @abstractmethod
    async def list_folder_items(self, folder_id: str) -> list:
        """
        Immediate children of a folder.

        Each item is exactly one of {"folder": {"id": ...}} or
        {"file": {"id"?, "display_name"?, "url"?}}.
        """
