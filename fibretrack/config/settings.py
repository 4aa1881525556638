"""
Application settings using Pydantic BaseSettings.
"""

from typing import Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "FibreTrack Workflow Core"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    # Per-logger overrides, e.g. {"fibretrack.infrastructure": "DEBUG"}
    COMPONENT_LOG_LEVELS: Dict[str, str] = {}

    # Mock backend
    SIMULATED_LATENCY_MS: int = 0

    # Lifecycle rules
    ACTIVATION_FAILURE_RATE: float = 0.1
    ACTIVATION_RANDOM_SEED: Optional[int] = None
    MAX_PHOTOS_PER_STEP: int = 10
    OTP_LENGTH: int = 4

    # Monitoring
    ENABLE_METRICS: bool = True

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("COMPONENT_LOG_LEVELS")
    @classmethod
    def validate_component_log_levels(cls, v: Dict[str, str]) -> Dict[str, str]:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        normalised = {}
        for name, level in v.items():
            if level.upper() not in valid_levels:
                raise ValueError(f"Log level for {name} must be one of: {valid_levels}")
            normalised[name] = level.upper()
        return normalised

    @field_validator("ACTIVATION_FAILURE_RATE")
    @classmethod
    def validate_failure_rate(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Activation failure rate must be between 0 and 1")
        return v

    @field_validator("SIMULATED_LATENCY_MS", "MAX_PHOTOS_PER_STEP", "OTP_LENGTH")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must not be negative")
        return v

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
