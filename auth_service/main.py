# auth_service/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from auth_service.core.config import Settings, settings as default_settings
from auth_service.core.errors import ServiceError
from auth_service.db.init_db import connect_with_retry
from auth_service.db.session import Database

# routers
from auth_service.health.router import router as health_router
from auth_service.users.router import router as users_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    log.info("🚀 Iniciando servicio…")
    try:
        # el listener no acepta requests hasta que el esquema existe
        await connect_with_retry(database, settings)
    except Exception as e:
        log.error(f"❌ Failed to connect to DB after retries: {e!r}")
        await database.dispose()
        raise
    log.info(f"🌐 Allowed CORS origins: {', '.join(settings.allow_origins_list)}")
    log.info("✅ Startup listo.")
    try:
        yield
    finally:
        await database.dispose()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # cualquier error no tipado (p. ej. InvalidPasswordError de asyncpg) → 500 genérico
    log.error(f"❌ Unhandled error on {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title="Auth API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # routers
    app.include_router(health_router)  # /api/health
    app.include_router(users_router)   # /api/signup, /api/login, /api/forgot, /check-email-data

    # directorios + montajes estáticos (solo lectura)
    os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR, html=False), name="uploads")
    if os.path.isdir(settings.PUBLIC_DIR):
        # va al final: las rutas de la API ganan sobre los archivos de public/
        app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")

    return app
