"""Data models for remote servers and the items they expose."""

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SmackModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _new_server_id() -> str:
    return uuid.uuid4().hex


class RemoteServerRecord(SmackModel):
    """Connection profile for one remote media server.

    ``server_url`` and ``api_key`` may be left empty while the user is still
    filling in the record; such a record is kept but cannot be browsed.
    ``remote_user_id`` is informational and never sent to the remote server.
    """

    id: str = Field(default_factory=_new_server_id)
    name: str = ""
    server_url: str = ""
    api_key: str = ""
    remote_user_id: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.server_url.strip()) and bool(self.api_key.strip())


class PluginConfiguration(SmackModel):
    """Root of the stored configuration: the ordered list of remote servers."""

    remote_servers: List[RemoteServerRecord] = Field(default_factory=list)

    def find_server(self, server_id: str) -> Optional[RemoteServerRecord]:
        """Look up a server by id, ignoring case."""
        wanted = (server_id or "").lower()
        for server in self.remote_servers:
            if server.id.lower() == wanted:
                return server
        return None


class RemoteLibraryView(SmackModel):
    id: str = ""
    name: str = ""


class RemoteItem(SmackModel):
    id: str = ""
    name: str = ""
    parent_id: str = ""
    type: str = ""
    is_folder: bool = False


# Pydantic models for API responses
class RemoteServerSummary(SmackModel):
    """Server record as exposed over HTTP, without the API key."""

    id: str
    name: str
    server_url: str
    remote_user_id: str
    is_configured: bool

    @classmethod
    def from_record(cls, record: RemoteServerRecord) -> "RemoteServerSummary":
        return cls(
            id=record.id,
            name=record.name,
            server_url=record.server_url,
            remote_user_id=record.remote_user_id,
            is_configured=record.is_configured,
        )


class StreamInfo(SmackModel):
    stream_url: str
    server_name: str
    item_id: str
    protocol: str = "File"
    media_type: str = "Video"
    name: str


class PluginPage(SmackModel):
    name: str
    path: str
