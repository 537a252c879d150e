"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support (prefix ``KPI_``, optional ``.env`` file)
- Validation of status thresholds at startup
- An optional metric catalog override (``KPI_METRICS`` as JSON)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.schemas import MetricDefinition


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="KPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "KPI Scoreboard"
    debug: bool = False
    log_level: str = "INFO"

    # Status tiers (inclusive lower bounds)
    threshold_excellent: float = 90.0
    threshold_on_track: float = 75.0
    threshold_at_risk: float = 50.0

    # Catalog
    weight_tolerance: float = Field(default=1e-9, gt=0.0)
    metrics: Optional[list[MetricDefinition]] = None

    # Identifiers
    user_id_pattern: str = r"^(AGT|MGR)-[A-Za-z0-9_-]+$"

    # Agent dashboard
    trend_days: int = Field(default=7, ge=1, le=90)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if not (100.0 >= self.threshold_excellent > self.threshold_on_track
                > self.threshold_at_risk > 0.0):
            raise ValueError(
                "Status thresholds must satisfy "
                "100 >= excellent > on_track > at_risk > 0"
            )
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
