import logging
import os

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOGGER = logging.getLogger(__name__)
load_dotenv()


def _build_ssl_params_asyncpg(host: str) -> str:
    # https://magicstack.github.io/asyncpg/current/api/index.html#connection
    if host in ("localhost", "127.0.0.1"):
        LOGGER.warning("SSL is disabled for localhost")
        return ""
    return "?ssl=verify-full"


class Settings(BaseSettings):
    """
    Database configuration for DriveLog.

    Remote databases are always reached over SSL, localhost is not.
    Set ASYNC_DB_URI directly to bypass the assembly from DB_* parts.
    """

    WEB_CONCURRENCY: int = int(os.getenv("WEB_CONCURRENCY", "4"))
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "40"))
    POOL_SIZE: int = max(DB_POOL_SIZE // WEB_CONCURRENCY, 5)

    DB_USER: str = "drivelog"
    DB_PASSWORD: str = "drivelog"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "drivelog"

    # Built with SSL for remote databases
    ASYNC_DB_URI: str | None = Field(default=None, validate_default=True)

    @field_validator("ASYNC_DB_URI", mode="before")
    @classmethod
    def assemble_async_db_uri(cls, v: str | None, info) -> str:
        """Build async database URI with SSL for remote connections."""
        if isinstance(v, str):
            return v
        values = info.data
        host = values.get("DB_HOST")
        ssl_params = _build_ssl_params_asyncpg(host)
        return (
            f"postgresql+asyncpg://{values.get('DB_USER')}:{values.get('DB_PASSWORD')}"
            f"@{host}:{values.get('DB_PORT')}/{values.get('DB_NAME')}{ssl_params}"
        )


db_settings = Settings()
