# auth_service/core/config.py
import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# server.env tiene prioridad si existe junto al proceso
ENV_FILE = "server.env" if os.path.exists("server.env") else ".env"

DEFAULT_ORIGINS = [
    "http://54.166.206.245:8005",
    "http://54.166.206.245:8006",
    "http://54.166.206.245:8007",
]


class Settings(BaseSettings):
    # URL completa; si no viene se arma con las piezas DB_*
    DATABASE_URL: str | None = None
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "admin123"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "auth_db"

    # ⏱️ pool: acquisition / connect / idle (segundos)
    DB_POOL_TIMEOUT: float = 10
    DB_CONNECT_TIMEOUT: float = 10
    DB_IDLE_TIMEOUT: int = 30

    # 🔁 reintentos al arrancar
    DB_CONNECT_RETRIES: int = 10
    DB_RETRY_MIN_DELAY: float = 1.0
    DB_RETRY_FACTOR: float = 2.0
    DB_RETRY_MAX_DELAY: float = 10.0

    # CORS: lista separada por comas; vacío = orígenes por defecto + FRONTEND_URL
    ALLOWED_ORIGINS: str = ""
    FRONTEND_URL: str = "http://54.166.206.245:8005"

    UPLOADS_DIR: str = "./Uploads"
    PUBLIC_DIR: str = "./public"

    HOST: str = "0.0.0.0"
    PORT: int = 3628

    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    @property
    def allow_origins_list(self) -> List[str]:
        if self.ALLOWED_ORIGINS.strip() == "*":
            return ["*"]
        if self.ALLOWED_ORIGINS.strip():
            return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        origins = list(DEFAULT_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


settings = Settings()
