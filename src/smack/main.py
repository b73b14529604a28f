"""Smack server - FastAPI application for browsing remote media servers."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, settings, setup_logging
from .controller import router
from .plugin import PLUGIN_ID, PLUGIN_NAME, get_page_file
from .remote_client import RemoteClient
from .storage import ConfigurationStore

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        app_settings: Settings to use instead of the environment-loaded ones.
        transport: Transport for outbound calls to remote servers; tests pass
                   an ``httpx.MockTransport`` here.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(f"Starting {PLUGIN_NAME} server...")

        store = ConfigurationStore(app_settings.database_url)
        await store.init_db()
        await store.load()

        http_client = httpx.AsyncClient(
            timeout=app_settings.remote_timeout,
            follow_redirects=True,
            transport=transport,
        )

        app.state.store = store
        app.state.remote_client = RemoteClient(http_client)

        try:
            yield
        finally:
            await http_client.aclose()
            await store.close()
            logger.info("Server shutdown complete")

    app = FastAPI(
        title=PLUGIN_NAME,
        description="Browse and stream media from remote Jellyfin servers",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix=app_settings.route_prefix)

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint."""
        configuration = app.state.store.configuration
        servers = configuration.remote_servers if configuration else []
        return {
            "status": "healthy" if configuration is not None else "degraded",
            "plugin_id": PLUGIN_ID,
            "servers": len(servers),
            "configured_servers": sum(1 for s in servers if s.is_configured),
        }

    @app.get("/web/{page_name}")
    async def get_web_page(page_name: str):
        """Serve one of the plugin's HTML pages."""
        page_file = get_page_file(page_name)
        if page_file is None:
            raise HTTPException(status_code=404, detail="Page not found")
        return FileResponse(page_file, media_type="text/html")

    return app


app = create_app()


def main():
    """Run the server."""
    import uvicorn

    uvicorn.run(
        "smack.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
