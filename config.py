"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks MATHEX_.
"""
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Truth decision: |wynik| > epsilon → TRUE
    epsilon: float = Field(default=sys.float_info.epsilon, ge=0.0)

    # Parser
    max_nesting_depth: int = Field(default=16, ge=1)
    packrat: bool = True

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "Mathex"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="MATHEX_", env_file=".env", extra="ignore")
