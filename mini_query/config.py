"""Environment-driven settings via pydantic-settings.

Every field reads from a `MINI_QUERY_`-prefixed environment variable (or a
`.env` file), e.g. `MINI_QUERY_DB_HOST`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SERVER_FIELDS = ("db_host", "db_schema", "db_username", "db_password")


class Settings(BaseSettings):
    """Database connection and tool output settings."""

    model_config = SettingsConfigDict(
        env_prefix="MINI_QUERY_", env_file=".env", case_sensitive=False
    )

    # Database
    db_driver: Literal["mysql", "postgres", "sqlite"] = "mysql"
    db_host: Optional[str] = None
    db_port: Optional[int] = None
    db_schema: Optional[str] = None
    db_username: Optional[str] = None
    db_password: Optional[str] = None
    db_path: str = ":memory:"

    # Tool output
    default_page_size: int = Field(default=50, ge=1)
    max_page_size: Optional[int] = Field(default=None, ge=1)
    legacy_separator: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    @model_validator(mode="after")
    def _require_server_credentials(self) -> Settings:
        if self.db_driver == "sqlite":
            return self
        missing = [name for name in _SERVER_FIELDS if not getattr(self, name)]
        if missing:
            names = ", ".join(f"MINI_QUERY_{name.upper()}" for name in missing)
            raise ValueError(f"Database settings not set: {names}")
        return self

    @property
    def port(self) -> int:
        if self.db_port is not None:
            return self.db_port
        return 5432 if self.db_driver == "postgres" else 3306

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the driver's `connect()` call."""

        if self.db_driver == "sqlite":
            return {"database": self.db_path, "check_same_thread": False}
        if self.db_driver == "postgres":
            return {
                "host": self.db_host,
                "port": self.port,
                "dbname": self.db_schema,
                "user": self.db_username,
                "password": self.db_password,
            }
        return {
            "host": self.db_host,
            "port": self.port,
            "database": self.db_schema,
            "user": self.db_username,
            "password": self.db_password,
            "autocommit": True,
        }

    def describe_target(self) -> str:
        """Connection target for log lines; never includes the password."""

        if self.db_driver == "sqlite":
            return f"sqlite:{self.db_path}"
        return f"{self.db_driver}://{self.db_username}@{self.db_host}:{self.port}/{self.db_schema}"


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""

    return Settings()
