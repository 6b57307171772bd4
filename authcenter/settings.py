from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    identity_type: Literal["int", "str"] = "int"
    enable_app_listing: bool = False

    # Backends
    storage_backend: Literal["postgres", "memory"] = "postgres"
    cache_backend: Literal["redis", "memory", "none"] = "redis"
    delivery_backend: Literal["http", "log"] = "log"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    db_pool_min_size: int = Field(1, ge=0)
    db_pool_max_size: int = Field(10, ge=1)
    db_pool_timeout: float = 5.0
    db_connect_timeout: int = 3
    redis_url: str = "redis://redis:6379/0"
    # seconds, applies to connect and to each command
    redis_socket_timeout: float = 1.0
    smtp_base_url: str = "http://smtp-mock:8025"
    sms_base_url: str = "http://sms-mock:8026"
    # seconds; the shared gateway client applies them to every delivery call
    delivery_timeout_seconds: float = Field(5.0, gt=0)
    delivery_connect_timeout_seconds: float = Field(2.0, gt=0)
    delivery_max_connections: int = Field(20, ge=1)

    # Security / policies
    hasher: Literal["bcrypt", "sha384"] = "bcrypt"
    bcrypt_rounds: int = Field(12, ge=4, le=31)
    secret_bytes: int = Field(32, ge=16, le=48)
    secret_cache_prefix: str = "secret:"
    secret_cache_ttl_seconds: int | None = None
    verify_code_length: int = Field(6, ge=4, le=10)
    verify_code_ttl_seconds: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
