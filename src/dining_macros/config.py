"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from dining_macros.domain.meals import ProteinThresholds

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    dine_base_url: str = "https://api.dineoncampus.com/v1"
    dine_location_id: str = "66c79443351d5300dddee979"
    dine_primary_platform: int = 2
    dine_fallback_platform: int = 0
    dine_user_agent: str = "MacroCount/1.0"
    dine_timeout_seconds: float = 15.0
    timezone: str = "America/Chicago"
    log_level: str = "INFO"
    top_protein_min_kcal: float = 60
    top_protein_min_per_serving_g: float = 10
    top_protein_min_per_100kcal_g: float = 8
    top_protein_limit: int = 5
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def protein_thresholds(self) -> ProteinThresholds:
        """Return the gating thresholds for the top-protein ranking."""
        return ProteinThresholds(
            min_kcal=self.top_protein_min_kcal,
            min_per_serving_g=self.top_protein_min_per_serving_g,
            min_per_100kcal_g=self.top_protein_min_per_100kcal_g,
            limit=self.top_protein_limit,
        )
