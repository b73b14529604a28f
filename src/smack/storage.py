"""Persistent storage for the remote server configuration."""

import asyncio
import logging
from typing import Optional

from sqlalchemy import Column, Integer, String, delete, select
from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from .exceptions import ConfigurationError
from .models import PluginConfiguration, RemoteServerRecord

logger = logging.getLogger(__name__)


Base = declarative_base()


class RemoteServerDB(Base):
    """Database model for remote server records."""

    __tablename__ = "remote_servers"

    id = Column(String, primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False, default="")
    server_url = Column(String, nullable=False, default="")
    api_key = Column(String, nullable=False, default="")
    remote_user_id = Column(String, nullable=False, default="")


class ConfigurationStore:
    """Stores the plugin configuration and serves an in-memory snapshot of it.

    ``configuration`` is None until ``load()`` has run. Saving replaces the
    snapshot as a whole, so readers never observe a half-applied update.
    """

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./smack.db"):
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self.configuration: Optional[PluginConfiguration] = None
        self._save_lock = asyncio.Lock()

    async def init_db(self):
        """Initialize database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Configuration database initialized")

    async def load(self) -> PluginConfiguration:
        """Read the stored remote servers into a fresh snapshot."""
        async with self._save_lock:
            async with self.async_session() as session:
                result = await session.execute(
                    select(RemoteServerDB).order_by(RemoteServerDB.position)
                )
                rows = result.scalars().all()

            self.configuration = PluginConfiguration(
                remote_servers=[
                    RemoteServerRecord(
                        id=row.id,
                        name=row.name,
                        server_url=row.server_url,
                        api_key=row.api_key,
                        remote_user_id=row.remote_user_id,
                    )
                    for row in rows
                ]
            )
            logger.info(f"Loaded {len(rows)} remote servers")
            return self.configuration

    async def save_configuration(
        self, configuration: PluginConfiguration
    ) -> PluginConfiguration:
        """
        Replace the stored remote servers with ``configuration``.

        A record that keeps an existing id but leaves ``api_key`` blank keeps
        the stored key, so clients can edit servers without ever reading keys.
        """
        async with self._save_lock:
            configuration = self._with_stored_keys(configuration)

            seen_ids = set()
            for server in configuration.remote_servers:
                key = server.id.strip().lower()
                if not key:
                    raise ConfigurationError("Remote server id must not be empty.")
                if key in seen_ids:
                    raise ConfigurationError(f"Duplicate remote server id '{server.id}'.")
                seen_ids.add(key)

            async with self.async_session() as session:
                try:
                    await session.execute(delete(RemoteServerDB))
                    session.add_all(
                        [
                            RemoteServerDB(
                                id=server.id,
                                position=position,
                                name=server.name,
                                server_url=server.server_url,
                                api_key=server.api_key,
                                remote_user_id=server.remote_user_id,
                            )
                            for position, server in enumerate(
                                configuration.remote_servers
                            )
                        ]
                    )
                    await session.commit()

                except Exception as e:
                    await session.rollback()
                    logger.error(f"Error saving configuration: {e}")
                    raise

            self.configuration = configuration
            logger.info(
                f"Saved configuration with {len(configuration.remote_servers)} remote servers"
            )
            return self.configuration

    def _with_stored_keys(self, configuration: PluginConfiguration) -> PluginConfiguration:
        """Deep copy of ``configuration`` with blank API keys filled from the snapshot."""
        configuration = configuration.model_copy(deep=True)
        if self.configuration is None:
            return configuration

        for server in configuration.remote_servers:
            if server.api_key.strip():
                continue
            stored = self.configuration.find_server(server.id)
            if stored is not None:
                server.api_key = stored.api_key
        return configuration

    async def close(self):
        await self.engine.dispose()
