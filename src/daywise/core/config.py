from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = PROJECT_ROOT / ".env"

# Load environment variables as early as possible so Settings picks them up.
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Daywise API"
    app_version: str = "0.1.0"
    docs_url: str = "/docs"
    api_prefix: str = "/api/v1"
    database_url: str = f"sqlite:///{(PROJECT_ROOT / 'daywise.db').as_posix()}"
    database_echo: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:latest"
    ollama_temperature: float = 0.7
    ollama_max_tokens: int = 1000
    ollama_structured_output: bool = False
    ai_llm_enabled: bool = True

    default_location: str = "Netherlands"
    prompt_locale: str = "nl"

    # Deficits (g / kcal) above which the fallback catalog adds a record.
    fallback_protein_threshold: float = 20.0
    fallback_fiber_threshold: float = 15.0
    fallback_calorie_threshold: float = 500.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
