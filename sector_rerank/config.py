from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_TAXONOMY_PATH = Path(__file__).resolve().parents[1] / "config" / "sector_taxonomy_v1.json"


class Settings(BaseSettings):
    taxonomy_path: Path = _DEFAULT_TAXONOMY_PATH
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RERANK_", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
