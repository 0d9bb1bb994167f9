from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Relational store (SQLite by default, any SQLAlchemy URL works)
    database_url: str = Field("sqlite:///./tasktracker.db", validation_alias="DATABASE_URL")

    # Static credential pair checked against request headers
    api_username: str = Field("otavio", validation_alias="API_USERNAME")
    api_password: str = Field("1234", validation_alias="API_PASSWORD")
    username_header: str = Field("username", validation_alias="API_USERNAME_HEADER")
    password_header: str = Field("password", validation_alias="API_PASSWORD_HEADER")

    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"], validation_alias="CORS_ALLOW_ORIGINS"
    )

    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3000, validation_alias="PORT")
    log_level: str = Field(
        "INFO", validation_alias=AliasChoices("APP_LOG_LEVEL", "LOG_LEVEL")
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
