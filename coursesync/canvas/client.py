"""
Canvas REST API client for Course Sync.

Handles all HTTP interactions with the Canvas API.
Uses asyncio + aiohttp so course, tab and folder requests can run concurrently.
"""

import asyncio
import logging
import os
import ssl
import sys
from typing import Optional

import aiohttp
import certifi
import requests

from ..config import CanvasClientConfig
from ..errors import (
    ApiError,
    AuthorizationError,
    MalformedDataError,
    TransientNetworkError,
)
from ..core.tasks import gather_or_cancel
from .provider import ContentProvider

logger = logging.getLogger(__name__)


def get_certifi_path() -> str:
    """Get path to certifi CA bundle, handling PyInstaller bundles."""
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        bundled_cert = os.path.join(sys._MEIPASS, 'certifi', 'cacert.pem')
        if os.path.exists(bundled_cert):
            return bundled_cert
    return certifi.where()


def check_network(base_url: str, timeout: float = 3.0) -> tuple[bool, str | None]:
    """Check if we can reach the Canvas host. Returns (is_online, error_message)."""
    try:
        requests.head(base_url, timeout=timeout, allow_redirects=True)
        return True, None
    except requests.ConnectionError:
        return False, "No internet connection"
    except requests.Timeout:
        return False, "Connection timed out"
    except requests.RequestException as e:
        return False, f"Network error: {e}"


class CanvasClient(ContentProvider):
    """
    Canvas API client.

    Must be used as an async context manager so the HTTP session is opened
    and closed around a sync run:

        async with CanvasClient(config) as client:
            courses = await client.list_active_courses()

    Does NOT retry; callers decide which requests are worth retrying.
    """

    def __init__(self, config: CanvasClientConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._semaphore = asyncio.Semaphore(config.max_concurrency)
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    def reset_api_calls(self):
        """Reset the API call counter."""
        self._api_calls = 0

    async def __aenter__(self) -> "CanvasClient":
        ssl_context = ssl.create_default_context(cafile=get_certifi_path())
        connector = aiohttp.TCPConnector(
            limit=self.config.max_concurrency * 2,
            limit_per_host=self.config.max_concurrency,
            ttl_dns_cache=300,
            ssl=ssl_context,
        )
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            connector=connector,
            headers=self._get_headers(),
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._session is not None:
            await self._session.close()
            self._session = None

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.config.access_token}",
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.config.api_base}/{path.lstrip('/')}"

    async def _get_page(self, url: str, params: Optional[dict]) -> tuple[object, Optional[str]]:
        """
        GET one page. Returns (json_body, next_page_url).

        Converts every aiohttp failure into the CourseSyncError taxonomy.
        """
        if self._session is None:
            raise RuntimeError("CanvasClient must be used as an async context manager")

        async with self._semaphore:
            logger.debug("GET %s", url)
            try:
                async with self._session.get(url, params=params) as response:
                    self._api_calls += 1
                    status = response.status
                    if status in (401, 403):
                        raise AuthorizationError(status, url)
                    if status == 429 or 500 <= status < 600:
                        raise TransientNetworkError(f"HTTP {status}: {url}")
                    if status >= 400:
                        raise ApiError(status, url)

                    try:
                        data = await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise MalformedDataError(f"Invalid JSON from {url}: {e}")

                    next_link = response.links.get("next")
                    next_url = str(next_link["url"]) if next_link else None
                    return data, next_url
            except asyncio.TimeoutError:
                raise TransientNetworkError(f"Timed out: {url}")
            except aiohttp.ClientConnectionError as e:
                raise TransientNetworkError(f"Connection error: {url} ({e})")
            except aiohttp.ClientPayloadError as e:
                raise TransientNetworkError(f"Truncated response: {url} ({e})")

    async def _get_paginated(self, path: str, params: Optional[dict] = None) -> list:
        """GET every page of a list endpoint, following Link rel="next"."""
        url = self._url(path)
        params = {"per_page": self.config.per_page, **(params or {})}
        results = []

        while url:
            data, next_url = await self._get_page(url, params)
            if not isinstance(data, list):
                raise MalformedDataError(f"Expected a list from {url}", payload=data)
            results.extend(data)

            url = next_url
            params = None  # The next link already carries the query string

        return results

    async def list_active_courses(self) -> list:
        raw_courses = await self._get_paginated("courses", {"enrollment_state": "active"})

        courses = []
        for course in raw_courses:
            if not isinstance(course, dict) or course.get("id") is None:
                raise MalformedDataError("Course without an id", payload=course)
            # Courses outside their availability dates come back with only an id
            if course.get("access_restricted_by_date"):
                continue
            courses.append({
                "id": str(course["id"]),
                "name": course.get("name") or course.get("course_code") or "",
            })
        return courses

    async def list_tabs(self, course_id: str) -> list:
        raw_tabs = await self._get_paginated(f"courses/{course_id}/tabs")
        return [
            {
                "id": str(tab["id"]),
                "label": tab.get("label") or "",
                "type_name": str(tab["id"]),
            }
            for tab in raw_tabs
            if isinstance(tab, dict) and tab.get("id") is not None
        ]

    async def list_root_folders(self, course_id: str) -> list:
        folders = await self._get_paginated(f"courses/{course_id}/folders/by_path/")
        folders = [f for f in folders if isinstance(f, dict) and f.get("id") is not None]
        roots = [f for f in folders if f.get("parent_folder_id") is None] or folders
        return [{"id": str(f["id"]), "name": f.get("name") or ""} for f in roots]

    async def list_folder_items(self, folder_id: str) -> list:
        subfolders, files = await gather_or_cancel(
            self._get_paginated(f"folders/{folder_id}/folders"),
            self._get_paginated(f"folders/{folder_id}/files"),
        )
        items = [{"folder": {"id": str(f["id"]), "name": f.get("name")}} for f in subfolders if f.get("id") is not None]
        items.extend({"file": f} for f in files)
        return items
