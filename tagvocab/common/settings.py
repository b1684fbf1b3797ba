# tagvocab/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from tagvocab.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "tagvocab"
    user: str = "taguser"
    password: str = "tagpass"
    schema_name: str = Field(default="public", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class TaggingConfig(BaseModel):
    # One comparison policy for the whole process; read when a resolver is built.
    strict_case_match: bool = False
    validate_name_uniqueness: bool = True
    max_name_length: int = Field(255, ge=1, le=255)
    resolve_max_attempts: int = Field(3, ge=1, le=10)
    default_usage_limit: int = Field(20, ge=1, le=1000)
    default_context: str = "tags"

    @field_validator("strict_case_match", "validate_name_uniqueness", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "tagvocab"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    tagging: TaggingConfig = TaggingConfig()

    # -------- Alembic / migrations --------
    alembic_script_location: str = "tagvocab/database/alembic"
    alembic_version_table_schema: str = "public"

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = True
    test_db_image: str = "postgres:15-alpine"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> str:
        return self.db.schema_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from tagvocab.common.settings import get_settings
        cfg = get_settings()
    Nested values come from env with a double underscore, e.g.
    TAGGING__STRICT_CASE_MATCH=true.
    """
    return Settings()
