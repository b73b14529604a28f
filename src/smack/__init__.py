"""Smack - Browse and stream media from remote Jellyfin servers."""

__version__ = "0.1.0"
__description__ = "Smack - Browse and stream media from remote Jellyfin servers"

from .config import settings
from .exceptions import (
    ConfigurationError,
    RemoteConnectionError,
    RemoteHttpError,
    RemoteRequestError,
    SmackError,
)
from .models import (
    PluginConfiguration,
    RemoteItem,
    RemoteLibraryView,
    RemoteServerRecord,
    RemoteServerSummary,
    StreamInfo,
)
from .remote_client import RemoteClient
from .storage import ConfigurationStore

__all__ = [
    "settings",
    "SmackError",
    "ConfigurationError",
    "RemoteRequestError",
    "RemoteConnectionError",
    "RemoteHttpError",
    "PluginConfiguration",
    "RemoteServerRecord",
    "RemoteServerSummary",
    "RemoteLibraryView",
    "RemoteItem",
    "StreamInfo",
    "RemoteClient",
    "ConfigurationStore",
]
