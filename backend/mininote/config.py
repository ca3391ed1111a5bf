"""
MiniNote Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types/ranges, and produces a frozen `Settings` value.
Who:   Built once by `get_settings()` and handed to `create_app()`, which
       passes it to every store and route through `app.state`.
When:  Once at process start; tests build their own instances.

Recognized environment variables:
    PORT, HOST, SAVE_PATH, FILE_LIMIT, SINGLE_FILE_SIZE_LIMIT,
    UPLOAD_SIZE_LIMIT, STATIC_ROOT, ID_LENGTH, EXCERPT_LENGTH,
    CORS_ORIGINS, LOG_LEVEL
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a working default
    (`SAVE_PATH=_tmp`, `FILE_LIMIT=100000`, `SINGLE_FILE_SIZE_LIMIT=10240`).
    The instance is frozen: components receive it by reference and can
    never mutate shared configuration at runtime.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: Directory holding one file per note plus uploaded blobs
    save_path: str = Field(default="_tmp")

    # What: Note count ceiling, checked before a new note is created
    file_limit: int = Field(default=100_000, ge=1)

    # What: Per-note byte ceiling (UTF-8 length of the submitted text)
    single_file_size_limit: int = Field(default=10_240, ge=0)

    # What: Upload byte ceiling. Default 100 MiB = 100 * 1024 * 1024
    upload_size_limit: int = Field(default=104_857_600, ge=1)

    # ── Static Assets ─────────────────────────────────────────────────────
    # What: Root for styles.css, script.js, ... and public/js/*
    static_root: str = Field(default=".")

    # ── Notes ─────────────────────────────────────────────────────────────
    # What: Length of generated note ids. 5 chars over a 27-char alphabet
    #       gives 27^5 (about 14.3M) ids.
    id_length: int = Field(default=5, ge=1, le=64)

    # What: Characters of note text used for the page description
    excerpt_length: int = Field(default=150, ge=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated origins, "*" for any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # SAVE_PATH and save_path both work
        frozen=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings, reading the environment on first use.

    Tests bypass this and pass their own `Settings(...)` to `create_app()`.
    """
    return Settings()
