from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # Primary identity tokens are issued by the external identity provider
    identity_secret_key: SecretStr
    identity_algorithm: str = "HS256"
    identity_issuer: str | None = None
    identity_audience: str | None = None
    # Storage-scoped sessions minted by the token exchange endpoint
    storage_session_secret_key: SecretStr | None = None
    storage_session_expires_minutes: int = 60
    storage_session_header: str = "X-Storage-Session"
    # CORS
    cors_allow_origins: str = "*"
    timezone: str = "America/Guayaquil"
    # Entity stores
    notice_ttl_seconds: int = 5
    cow_notice_ttl_seconds: int = 8
    undo_history_size: int = 1
    store_stale_after_seconds: int = 300

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("undo_history_size")
    @classmethod
    def ensure_positive_history(cls, value: int) -> int:
        if value < 1:
            raise ValueError("undo_history_size must be at least 1")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    def get_storage_session_secret(self) -> str:
        """Secret used to sign storage sessions; falls back to the identity secret."""
        if self.storage_session_secret_key:
            return self.storage_session_secret_key.get_secret_value()
        return self.identity_secret_key.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
