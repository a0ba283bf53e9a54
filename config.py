"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks PLOTFN_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Domyślne wartości sesji wykresu (stan startowy interaktywnego wykresu)
    default_function: str = "sin(x)"
    default_start_x: float = 0.0
    default_end_x: float = 10.0
    default_resolution: int = 100
    # Wykresy brajlowskie rysują kilka próbek na kolumnę terminala
    samples_per_column: int = 3

    # Górny limit rozdzielczości dla żądań /sample
    max_resolution: int = 100_000

    # App
    app_title: str = "plotfn"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="PLOTFN_", env_file=".env", extra="ignore")
