"""Application settings loaded from the environment."""

from typing import Optional
from uuid import UUID

from pydantic import Field, PostgresDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lorekeeper.core.config.enums import Environment


class Settings(BaseSettings):
    """Pydantic settings class.

    Values come from environment variables (or a local ``.env`` file).

    Attributes:
    ----------
        PROJECT_NAME (str): Title used for the OpenAPI document.
        ENVIRONMENT (Environment): Deployment environment.
        LOCAL_DEVELOPMENT (bool): Human-readable logs instead of JSON.
        TESTING (bool): Set by the test suite.
        LOG_LEVEL (str): Root log level.
        POSTGRES_* : Connection parameters for the relational store.
        AUTH_ENABLED (bool): When false every request runs as FIRST_SUPERUSER.
        JWT_SECRET_KEY (str): Key used to verify bearer tokens.
        JWT_ALGORITHM (str): Signing algorithm of bearer tokens.
        FIRST_SUPERUSER (UUID): Identity used when auth is disabled.
        LIST_CACHE_TTL_SECONDS (float): Lifetime of cached anonymous list pages.
        LIST_CACHE_MAX_ENTRIES (int): Capacity of the anonymous list cache.
        PAGINATION_DEFAULT_LIMIT (int): Page size when none is requested.
        PAGINATION_MAX_LIMIT (int): Upper bound for the requested page size.
        STATS_TOP_N (int): Length of "most used" rankings.
        MAX_IMAGE_BYTES (int): Largest accepted image payload.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Lorekeeper"
    ENVIRONMENT: Environment = Environment.LOCAL
    LOCAL_DEVELOPMENT: bool = False
    TESTING: bool = False
    LOG_LEVEL: str = "INFO"

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "lorekeeper"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "lorekeeper"
    POSTGRES_SSLMODE: str = "prefer"

    db_pool_size: int = Field(default=20, ge=1)
    db_pool_max_overflow: int = Field(default=40, ge=0)

    AUTH_ENABLED: bool = True
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    FIRST_SUPERUSER: Optional[UUID] = None

    LIST_CACHE_TTL_SECONDS: float = 30.0
    LIST_CACHE_MAX_ENTRIES: int = 500

    PAGINATION_DEFAULT_LIMIT: int = 20
    PAGINATION_MAX_LIMIT: int = 100

    STATS_TOP_N: int = 10

    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the configured log level."""
        return v.upper()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:  # noqa: N802
        """Async database URI built from the POSTGRES_* fields."""
        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD or None,
                host=self.POSTGRES_HOST,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )
