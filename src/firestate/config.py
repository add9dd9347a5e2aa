"""
Settings for connecting stores and services to the document database.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings (``FIRESTATE_*`` variables or ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix="FIRESTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Cloud project hosting the Firestore database
    project_id: Optional[str] = Field(default=None)
    database: Optional[str] = Field(default=None)

    # host:port of a local Firestore emulator
    emulator_host: Optional[str] = Field(default=None)

    # Development toggle: use the in-process client instead of Firestore
    use_in_memory: bool = Field(default=False)

    # Mutation runners historically keep the previous error visible until the
    # next failure; set to clear it when a new run starts.
    clear_error_on_run: bool = Field(default=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
