"""
Zentrale Konfiguration für die Match Pipeline
Basiert auf Pydantic Settings mit Environment Variable Support
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

from match_pipeline.common.sports import normalize_sport

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

# Highest single-side score still considered realistic per sport
DEFAULT_SCORE_THRESHOLDS: dict[str, int] = {
    "football": 15,
    "basketball": 250,
    "tennis": 7,  # sets, not games
    "rugby": 150,
    "handball": 80,
}


class Settings(BaseSettings):
    """Application Settings mit Environment Variable Support"""

    # Database (None -> store disabled, every read is served from the sample fallback)
    database_url: Optional[str] = None
    database_pool_min_size: int = 1
    database_pool_max_size: int = 10
    database_command_timeout: int = 60

    # Sports
    default_sport: str = "football"

    # Fallback sample
    sample_matches_path: str = str(PACKAGE_ROOT / "data" / "sample_matches.json")

    # External tabular export (StatsBomb ingest)
    tabular_export_path: str = "./ai/data/matches.csv"
    tabular_export_sport: str = "football"
    ingest_script: str = "ingest_statsbomb.py"
    ingest_workdir: str = "./ai"
    ingest_interpreters: list[str] = ["python", "python3", "py"]
    ingest_timeout_seconds: float = 300.0

    # Integrity audit
    integrity_sample_size: int = 200
    integrity_corruption_ratio: float = 0.05
    integrity_score_thresholds: dict[str, int] = dict(DEFAULT_SCORE_THRESHOLDS)

    # Seeding scheduler
    enable_seeding: bool = True
    seed_initial_delay_seconds: float = 1.0
    seed_interval_seconds: float = 5.0
    seed_max_attempts: int = 12

    # Query limits
    list_limit_default: int = 50
    list_limit_max: int = 500
    stats_limit_default: int = 1000
    stats_limit_max: int = 5000

    # Statistics
    stats_rate_precision: int = 3
    stats_average_precision: int = 2

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["*"]

    # Monitoring
    log_level: str = "INFO"
    enable_metrics: bool = True
    metrics_port: int = 8008

    # Application
    run_mode: str = "api"  # Modes: api, seed_once, stats_once
    environment: str = "development"  # Environment: development, staging, production

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "protected_namespaces": ("settings_",),
    }

    @field_validator("default_sport", "tabular_export_sport")
    @classmethod
    def _supported_sport(cls, v: str) -> str:
        sport = normalize_sport(v, fallback=None)
        if sport is None:
            raise ValueError(f"unsupported sport '{v}'")
        return sport

    @field_validator("integrity_score_thresholds")
    @classmethod
    def _merge_thresholds(cls, v: dict[str, int]) -> dict[str, int]:
        """Overrides only replace the sports they name"""
        merged = dict(DEFAULT_SCORE_THRESHOLDS)
        for key, limit in v.items():
            sport = normalize_sport(key, fallback=None)
            if sport is None:
                raise ValueError(f"score threshold for unsupported sport '{key}'")
            if limit < 0:
                raise ValueError(f"score threshold for '{sport}' must be non-negative")
            merged[sport] = limit
        return merged


# Global Settings Instance
settings = Settings()
