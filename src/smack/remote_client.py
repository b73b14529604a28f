"""HTTP client for browsing remote Jellyfin/Emby servers."""

import logging
import re
from typing import Any, List, Optional
from urllib.parse import quote, urlsplit

import httpx

from .exceptions import ConfigurationError, RemoteConnectionError, RemoteHttpError
from .models import RemoteItem, RemoteLibraryView, RemoteServerRecord

logger = logging.getLogger(__name__)

_API_KEY_PATTERN = re.compile(r"(api_key=)[^&]*")


def escape_data(value: Optional[str]) -> str:
    """Percent-encode a path segment or query value (RFC 3986 unreserved kept)."""
    return quote(value or "", safe="")


def get_validated_base_url(server_url: Optional[str]) -> str:
    """
    Validate a server URL and normalize it to end with exactly one slash.

    Raises:
        ConfigurationError: If the URL is not absolute.
    """
    candidate = (server_url or "").strip()
    try:
        parts = urlsplit(candidate)
        # Raises ValueError for a non-numeric or out-of-range port
        parts.port
        httpx.URL(candidate)
    except (ValueError, httpx.InvalidURL) as e:
        raise ConfigurationError(
            f"Remote server URL is not a valid absolute URL: {e}"
        ) from e

    if not parts.scheme or not parts.netloc:
        raise ConfigurationError("Remote server URL is not a valid absolute URL.")

    return candidate.rstrip("/") + "/"


def redact_api_key(url: str) -> str:
    """Hide the api_key query value so URLs can be logged."""
    return _API_KEY_PATTERN.sub(r"\1***", url)


def get_json_string(element: Any, name: str) -> str:
    """Read a string property, defaulting to "" when missing or not a string."""
    if not isinstance(element, dict):
        return ""
    value = element.get(name)
    return value if isinstance(value, str) else ""


def get_json_true(element: Any, name: str) -> bool:
    """True only if the property is present and is the JSON literal true."""
    return isinstance(element, dict) and element.get(name) is True


def get_json_items(root: Any) -> List[Any]:
    """Return the elements of the top-level ``Items`` array, or an empty list."""
    if isinstance(root, dict):
        items = root.get("Items")
        if isinstance(items, list):
            return items
    return []


class RemoteClient:
    """Thin client for the remote server REST API.

    The client keeps no state between calls. The shared ``httpx.AsyncClient``
    is safe to use from concurrent requests; its timeout policy is set by
    whoever creates it.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        if http_client is None:
            raise ValueError("An HTTP client is required")
        self.http_client = http_client

    async def list_libraries(
        self, server: RemoteServerRecord
    ) -> List[RemoteLibraryView]:
        """Get the library views the remote user can see."""
        _require_server(server)
        base_url = get_validated_base_url(server.server_url)
        request_url = f"{base_url}Users/Me/Views?api_key={escape_data(server.api_key)}"

        root = await self._get_json(request_url)

        libraries = []
        for element in get_json_items(root):
            library_id = get_json_string(element, "Id")
            if not library_id:
                continue
            libraries.append(
                RemoteLibraryView(id=library_id, name=get_json_string(element, "Name"))
            )

        logger.debug(f"Got {len(libraries)} libraries from {server.name or server.id}")
        return libraries

    async def list_items(
        self, server: RemoteServerRecord, parent_id: Optional[str]
    ) -> List[RemoteItem]:
        """Get the items directly under ``parent_id`` (a library or folder id)."""
        _require_server(server)
        base_url = get_validated_base_url(server.server_url)
        parent_id = parent_id or ""

        request_url = (
            f"{base_url}Users/Me/Items?ParentId={escape_data(parent_id)}"
            f"&Fields=BasicSyncInfo&api_key={escape_data(server.api_key)}"
        )

        root = await self._get_json(request_url)

        items = []
        for element in get_json_items(root):
            item_id = get_json_string(element, "Id")
            if not item_id:
                continue
            items.append(
                RemoteItem(
                    id=item_id,
                    name=get_json_string(element, "Name"),
                    parent_id=get_json_string(element, "ParentId"),
                    type=get_json_string(element, "Type"),
                    is_folder=get_json_true(element, "IsFolder"),
                )
            )

        logger.debug(
            f"Got {len(items)} items under '{parent_id}' from {server.name or server.id}"
        )
        return items

    def build_stream_url(
        self, server: RemoteServerRecord, item_id: Optional[str]
    ) -> Optional[str]:
        """
        Build the download URL for a remote item. No request is made.

        Returns None if ``item_id`` is blank.
        """
        _require_server(server)
        if not item_id or not item_id.strip():
            return None

        base_url = get_validated_base_url(server.server_url)
        return (
            f"{base_url}Items/{escape_data(item_id)}/Download"
            f"?api_key={escape_data(server.api_key)}"
        )

    async def _get_json(self, url: str) -> Any:
        """GET a URL and decode the JSON body of a 2xx response."""
        logger.debug(f"GET {redact_api_key(url)}")

        try:
            async with self.http_client.stream("GET", url) as response:
                await response.aread()
        except httpx.TransportError as e:
            raise RemoteConnectionError(
                f"Could not reach remote server: {e.__class__.__name__}: {e}"
            ) from e

        if not response.is_success:
            logger.debug(
                f"Remote server returned {response.status_code} for {redact_api_key(url)}"
            )
            raise RemoteHttpError(
                response.status_code, response.reason_phrase, response.text
            )

        return response.json()


def _require_server(server: Optional[RemoteServerRecord]) -> None:
    if server is None:
        raise ValueError("A remote server record is required")
