"""TrustScore application settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.scoring.config import ScoringConfig, ZeroCapPolicy, ZeroWeightPolicy


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Framework ---
    FRAMEWORK_PATH: str = Field(
        default="./framework/framework.json",
        description="Default framework definition used by the scoring script.",
    )

    # --- Scoring ---
    ZERO_WEIGHT_POLICY: ZeroWeightPolicy = Field(
        default=ZeroWeightPolicy.DEFAULT_TO_ONE,
        description="How an explicit weight of 0 is aggregated.",
    )
    ZERO_CAP_POLICY: ZeroCapPolicy = Field(
        default=ZeroCapPolicy.HONOR,
        description="How an explicit item cap of 0 is applied.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def scoring_config(self) -> ScoringConfig:
        """Engine configuration derived from these settings."""
        return ScoringConfig(
            zero_weight_policy=self.ZERO_WEIGHT_POLICY,
            zero_cap_policy=self.ZERO_CAP_POLICY,
        )


def get_settings() -> Settings:
    """Factory function for settings."""
    return Settings()
