"""
Database Manager
Datenbankzugriff über AsyncPG (Abfragen) und SQLAlchemy (Schema)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import asyncpg
from sqlalchemy import create_engine, text

from match_pipeline.core.config import Settings, settings as default_settings
from match_pipeline.database.schema import Base


class DatabaseManager:
    """Datenbankverwaltung mit SQLAlchemy und AsyncPG"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.engine = None
        self.pool = None  # AsyncPG Pool
        self.logger = logging.getLogger(__name__)

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.database_url)

    @property
    def is_ready(self) -> bool:
        """True sobald der asyncpg Pool steht und nicht geschlossen wurde"""
        return self.pool is not None and not self.pool.is_closing()

    def _sync_url(self) -> str:
        url = self.settings.database_url
        if "+asyncpg" in url:
            return url.replace("+asyncpg", "+psycopg2")
        if url.startswith("postgresql://") or url.startswith("postgres://"):
            return "postgresql+psycopg2://" + url.split("://", 1)[1]
        return url

    def initialize_sync(self):
        """Initialisiert die synchrone SQLAlchemy Engine (nur für DDL)"""
        try:
            self.engine = create_engine(self._sync_url(), future=True, pool_pre_ping=True)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            self.logger.info("Sync database engine initialized (SQLAlchemy)")
        except Exception as e:
            self.logger.error(f"Failed to initialize sync database: {e}")
            self.engine = None
            raise

    async def initialize_async(self):
        """Initialisiert asynchronen asyncpg Pool auf Basis von DATABASE_URL"""
        try:
            # asyncpg erwartet postgresql:// ohne +asyncpg
            dsn = self.settings.database_url.replace("+asyncpg", "")
            self.pool = await asyncpg.create_pool(
                dsn=dsn,
                min_size=self.settings.database_pool_min_size,
                max_size=self.settings.database_pool_max_size,
                command_timeout=self.settings.database_command_timeout,
            )
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            self.logger.info("Async database pool initialized (asyncpg)")
        except Exception as e:
            self.logger.error(f"Failed to initialize async database pool: {e}")
            self.pool = None
            raise

    async def initialize(self):
        """Initialisiert beide Verbindungstypen und legt fehlende Tabellen an.

        Kann wiederholt aufgerufen werden (Reconnect); bereits stehende Teile bleiben.
        """
        if not self.is_configured:
            self.logger.warning("DATABASE_URL not set. Using sample data fallback.")
            return
        if self.is_ready:
            return
        # SQLAlchemy-Teil blockiert, daher im Thread
        if self.engine is None:
            await asyncio.to_thread(self.initialize_sync)
        await asyncio.to_thread(self.create_tables)
        await self.initialize_async()

    @asynccontextmanager
    async def get_async_connection(self):
        """Context Manager für AsyncPG Verbindungen"""
        if not self.pool:
            raise RuntimeError("Async database pool not initialized")

        async with self.pool.acquire() as connection:
            yield connection

    async def execute_query(self, query: str, *args) -> list[dict]:
        """Führt eine Abfrage aus und gibt Ergebnisse zurück"""
        async with self.get_async_connection() as conn:
            result = await conn.fetch(query, *args)
            return [dict(row) for row in result]

    async def execute_scalar(self, query: str, *args) -> Any:
        async with self.get_async_connection() as conn:
            return await conn.fetchval(query, *args)

    async def execute(self, query: str, *args) -> int:
        """Führt ein Statement aus und gibt die Anzahl betroffener Zeilen zurück"""
        async with self.get_async_connection() as conn:
            status = await conn.execute(query, *args)
        # asyncpg status strings look like "UPDATE 12" / "DELETE 3"
        try:
            return int(status.rsplit(" ", 1)[-1])
        except (ValueError, AttributeError):
            return 0

    async def execute_many(self, query: str, data: list[tuple]):
        """Führt mehrere Operationen in einer Transaktion aus"""
        async with self.get_async_connection() as conn:
            async with conn.transaction():
                await conn.executemany(query, data)

    def create_tables(self):
        """Erstellt alle Tabellen"""
        if not self.engine:
            raise RuntimeError("Sync database not initialized")

        Base.metadata.create_all(bind=self.engine)
        self.logger.info("Database tables created")

    async def health_check(self) -> dict[str, Any]:
        """Führt einen Gesundheitscheck der Datenbank durch"""
        if not self.is_ready:
            return {"async_pool": "unavailable"}
        try:
            result = await self.execute_scalar("SELECT 1")
            return {
                "async_pool": "healthy" if result == 1 else "unhealthy",
                "pool_size": self.pool.get_size(),
                "pool_idle": self.pool.get_idle_size(),
            }
        except Exception as e:
            self.logger.error(f"Database health check failed: {e}")
            return {"async_pool": "unhealthy", "error": str(e)}

    async def close(self):
        """Schließt alle Datenbankverbindungen"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("Async database pool closed")

        if self.engine:
            self.engine.dispose()
            self.engine = None
            self.logger.info("Sync database engine disposed")
