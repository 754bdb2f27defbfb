import os
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _build_default_database_url() -> str:
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    db = os.getenv("POSTGRES_DB", "portal_empresas")
    user = os.getenv("POSTGRES_USER", "admin")
    password = os.getenv("POSTGRES_PASSWORD", "admin123")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    PROJECT_NAME: str = "Portal de Cadastro de Empresas API"
    API_V1_STR: str = "/api/v1"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "dev-secret-change-me"
    CALLER_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Legacy "?internal=true" shortcut. Only trusted in dev.
    ALLOW_INTERNAL_QUERY_FLAG: bool = True

    DATABASE_URL: str = Field(default_factory=_build_default_database_url)
    DB_ECHO: bool = False
    AUTO_CREATE_SCHEMA: bool = True

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_cors_origins(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("SECRET_KEY")
    @classmethod
    def _validate_secret_key(cls, value, info):
        env = str(info.data.get("ENV", "dev")).lower()
        if env != "dev" and (not value or value == "dev-secret-change-me"):
            raise ValueError("SECRET_KEY must be set in non-dev environments")
        return value

    @field_validator("ALLOW_INTERNAL_QUERY_FLAG")
    @classmethod
    def _validate_internal_query_flag(cls, value, info):
        env = str(info.data.get("ENV", "dev")).lower()
        if env != "dev" and value:
            raise ValueError("ALLOW_INTERNAL_QUERY_FLAG must be false in non-dev environments")
        return value


settings = Settings()
