"""
Folder tree walker for Course Sync.

Resolves a course folder hierarchy into a flat list of files. Sibling
subfolders are fetched concurrently; each call returns its own list and the
parent concatenates them, so no list is shared between tasks.
"""

import asyncio
import logging
from typing import Iterable

from ..canvas.provider import ContentProvider
from ..core.tasks import gather_or_cancel
from ..errors import AuthorizationError, TransientNetworkError
from .models import SyncFile

logger = logging.getLogger(__name__)


class FolderWalker:
    """
    Recursively lists every file under a folder.

    Transient and authorization failures are retried with exponential
    backoff. A folder the token still can't read after the last retry is
    treated as empty; anything else aborts the walk.
    """

    def __init__(self, provider: ContentProvider, max_retries: int = 3, retry_delay: float = 1.0):
        """
        Args:
            provider: Source of folder contents
            max_retries: Retries after the first failed attempt of a folder fetch
            retry_delay: Base delay in seconds; attempt n waits retry_delay * 2**n
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.provider = provider
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._folders_visited = 0

    @property
    def folders_visited(self) -> int:
        """Folder fetches that completed (including ones absorbed as empty)."""
        return self._folders_visited

    def reset_folders_visited(self):
        """Reset the folder fetch counter."""
        self._folders_visited = 0

    async def _list_folder_items_with_retry(self, folder_id: str) -> list:
        """Fetch folder items, retrying transient and authorization failures."""
        for attempt in range(self.max_retries + 1):
            try:
                return await self.provider.list_folder_items(folder_id)
            except (TransientNetworkError, AuthorizationError) as e:
                if attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.debug("Folder %s failed (%s), retry %d in %.1fs", folder_id, e, attempt + 1, delay)
                    await asyncio.sleep(delay)
                    continue
                raise

    async def _get_files_and_folder_ids(self, folder_id: str) -> tuple[list, list]:
        """
        List one folder.

        Returns:
            Tuple of (files, child_folder_ids); both empty if access is denied
        """
        try:
            items = await self._list_folder_items_with_retry(folder_id)
        except AuthorizationError as e:
            logger.warning(
                "Skipping folder %s: not authorized after %d attempts (HTTP %s)",
                folder_id, self.max_retries + 1, e.status,
            )
            items = []

        self._folders_visited += 1

        files = []
        folder_ids = []
        for item in items:
            if item.get("file") is not None:
                files.append(SyncFile.from_api(item["file"]))
            elif item.get("folder") is not None:
                folder_ids.append(str(item["folder"]["id"]))

        logger.debug("Folder %s: %d files, %d subfolders", folder_id, len(files), len(folder_ids))
        return files, folder_ids

    async def walk(self, folder_id: str) -> list:
        """
        List every file in a folder's subtree.

        Order: the folder's own files, then each subfolder's files in the
        order the subfolders were listed.
        """
        files, folder_ids = await self._get_files_and_folder_ids(folder_id)
        if not folder_ids:
            return files

        child_results = await gather_or_cancel(*(self.walk(child_id) for child_id in folder_ids))
        for child_files in child_results:
            files.extend(child_files)
        return files

    async def walk_many(self, folder_ids: Iterable[str]) -> list:
        """Walk several root folders and concatenate their files in root order."""
        results = await gather_or_cancel(*(self.walk(folder_id) for folder_id in folder_ids))
        return [f for files in results for f in files]
