# auth_service/db/session.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from auth_service.core.config import Settings


def engine_options(settings: Settings) -> dict:
    """
    Opciones del engine según el driver de la URL.
    Timeouts cortos: si la DB no responde → falla rápido.
    """
    db_url = settings.database_url

    if db_url.startswith("sqlite"):
        # sqlite (tests): sin tamaño de pool ni timeouts de red
        return {}

    if db_url.startswith("postgresql+asyncpg"):
        # asyncpg usa 'timeout' (segundos) para conectar
        connect_args = {
            "timeout": settings.DB_CONNECT_TIMEOUT,
            "server_settings": {"client_encoding": "UTF8"},
        }
    else:
        connect_args = {}

    return {
        "pool_pre_ping": True,
        # conexiones más viejas que DB_IDLE_TIMEOUT se reciclan al pedirlas
        "pool_recycle": settings.DB_IDLE_TIMEOUT,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": connect_args,
    }


class Database:
    """
    Handle del pool de conexiones.

    Lo crea `create_app` al arrancar, vive en `app.state.database` y se
    cierra (`dispose`) en el shutdown. Nada en el paquete guarda un engine global.
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_options(settings))
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """SELECT 1; levanta si la DB no está disponible."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with get_database(request).sessionmaker() as session:
        try:
            yield session
        finally:
            await session.close()
