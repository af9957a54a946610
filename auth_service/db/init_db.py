import logging

from auth_service.core.config import Settings
from auth_service.core.retry import retry_async
from auth_service.db.base import Base
from auth_service.db.session import Database

# 👇 importa todos los modelos que deben existir en la DB
from auth_service.users.models import User  # noqa: F401

log = logging.getLogger("uvicorn")


async def init_schema(database: Database) -> None:
    """
    Crea/verifica la tabla users y el índice idx_email.
    create_all usa checkfirst: correrlo sobre una DB ya inicializada no toca filas.
    """
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("✅ Database initialized successfully")


async def _connect_and_init(database: Database) -> None:
    await database.ping()
    log.info("✅ Database connected successfully")
    await init_schema(database)


def _log_retry(exc: BaseException, attempt: int) -> None:
    log.error(f"🔁 Retry failed (attempt {attempt}): {exc}")


async def connect_with_retry(database: Database, settings: Settings) -> None:
    """
    Conecta + inicializa el esquema con backoff exponencial.
    Si se agotan los intentos se relanza el último error (el arranque falla).
    """
    await retry_async(
        lambda: _connect_and_init(database),
        max_attempts=settings.DB_CONNECT_RETRIES,
        initial_delay=settings.DB_RETRY_MIN_DELAY,
        factor=settings.DB_RETRY_FACTOR,
        max_delay=settings.DB_RETRY_MAX_DELAY,
        on_retry=_log_retry,
    )
