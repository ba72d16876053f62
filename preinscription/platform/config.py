from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Preinscription API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 10000

    # ── CORS ────────────────────────────────────
    # Comma-separated; empty means every origin is accepted
    ALLOWED_ORIGINS: str = ""

    # ── Database ────────────────────────────────
    DATABASE_URL: Optional[str] = None
    # None falls back to ENVIRONMENT == "production"
    DATABASE_SSL: Optional[bool] = None
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def database_ssl(self) -> bool:
        if self.DATABASE_SSL is None:
            return self.ENVIRONMENT == "production"
        return self.DATABASE_SSL

    @property
    def async_database_url(self) -> Optional[str]:
        """
        DATABASE_URL rewritten for the async driver.

        Hosted Postgres providers hand out ``postgres://`` or ``postgresql://``
        URLs; SQLAlchemy's async engine needs the asyncpg dialect spelled out.
        """
        url = (self.DATABASE_URL or "").strip()
        if not url:
            return None
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
