"""REST endpoints for browsing remote servers."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from .exceptions import ConfigurationError, RemoteRequestError
from .models import (
    PluginConfiguration,
    PluginPage,
    RemoteItem,
    RemoteLibraryView,
    RemoteServerRecord,
    RemoteServerSummary,
    StreamInfo,
)
from .plugin import get_pages
from .remote_client import RemoteClient
from .storage import ConfigurationStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Smack"])


def get_store(request: Request) -> ConfigurationStore:
    return request.app.state.store


def get_configuration(
    store: ConfigurationStore = Depends(get_store),
) -> Optional[PluginConfiguration]:
    return store.configuration


def get_remote_client(request: Request) -> RemoteClient:
    return request.app.state.remote_client


def resolve_server(
    configuration: Optional[PluginConfiguration], server_id: str
) -> RemoteServerRecord:
    """Find a usable server record or raise the matching HTTP error."""
    if configuration is None:
        raise HTTPException(status_code=404, detail="Plugin configuration not available.")

    server = configuration.find_server(server_id)
    if server is None:
        raise HTTPException(status_code=404, detail="Remote server not found.")

    if not server.is_configured:
        raise HTTPException(
            status_code=400, detail="Remote server is not fully configured."
        )

    return server


def _remote_error(server: RemoteServerRecord, error: RemoteRequestError) -> HTTPException:
    logger.warning(f"Remote server '{server.name or server.id}' failed: {error}")
    return HTTPException(status_code=502, detail=f"Remote server error: {error}")


@router.get("/Servers", response_model=List[RemoteServerSummary])
async def get_servers(
    configuration: Optional[PluginConfiguration] = Depends(get_configuration),
):
    """Get configured remote servers without their API keys."""
    if configuration is None:
        return []

    return [
        RemoteServerSummary.from_record(server)
        for server in configuration.remote_servers
    ]


@router.get("/Libraries/{server_id}", response_model=List[RemoteLibraryView])
async def get_libraries(
    server_id: str,
    configuration: Optional[PluginConfiguration] = Depends(get_configuration),
    remote_client: RemoteClient = Depends(get_remote_client),
):
    """Get library views from a remote server."""
    server = resolve_server(configuration, server_id)

    try:
        return await remote_client.list_libraries(server)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RemoteRequestError as e:
        raise _remote_error(server, e)
    except Exception as e:
        logger.error(f"Error getting libraries from server {server_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/Items/{server_id}/{parent_id}", response_model=List[RemoteItem])
async def get_items(
    server_id: str,
    parent_id: str,
    configuration: Optional[PluginConfiguration] = Depends(get_configuration),
    remote_client: RemoteClient = Depends(get_remote_client),
):
    """Get the items under a library or folder of a remote server."""
    server = resolve_server(configuration, server_id)

    try:
        return await remote_client.list_items(server, parent_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RemoteRequestError as e:
        raise _remote_error(server, e)
    except Exception as e:
        logger.error(f"Error getting items under {parent_id} from server {server_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/Stream/{server_id}/{item_id}", response_model=StreamInfo)
async def get_stream(
    server_id: str,
    item_id: str,
    configuration: Optional[PluginConfiguration] = Depends(get_configuration),
    remote_client: RemoteClient = Depends(get_remote_client),
):
    """Get a stream URL and basic metadata for a remote item."""
    server = resolve_server(configuration, server_id)

    try:
        stream_url = remote_client.build_stream_url(server, item_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if stream_url is None:
        raise HTTPException(
            status_code=404, detail="Unable to build stream URL for remote item."
        )

    return StreamInfo(
        stream_url=stream_url,
        server_name=server.name,
        item_id=item_id,
        name=f"Remote: {server.name or 'Server'}",
    )


@router.get("/Configuration", response_model=List[RemoteServerSummary])
async def read_configuration(
    configuration: Optional[PluginConfiguration] = Depends(get_configuration),
):
    """Get the stored servers for the configuration page. API keys are never returned."""
    if configuration is None:
        raise HTTPException(status_code=404, detail="Plugin configuration not available.")
    return [
        RemoteServerSummary.from_record(server)
        for server in configuration.remote_servers
    ]


@router.post("/Configuration", response_model=List[RemoteServerSummary])
async def update_configuration(
    configuration: PluginConfiguration,
    store: ConfigurationStore = Depends(get_store),
):
    """Replace the stored list of remote servers."""
    try:
        saved = await store.save_configuration(configuration)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating configuration: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return [RemoteServerSummary.from_record(server) for server in saved.remote_servers]


@router.get("/Pages", response_model=List[PluginPage])
async def list_pages():
    """List the web pages the plugin provides."""
    return get_pages()
