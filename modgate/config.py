"""
modgate Configuration — pydantic-settings based.

Service settings are read from environment variables or a .env file.
Complexity risk bounds are read separately, at call time, so that each
evaluation sees the environment as it currently is.
"""

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from modgate.core.errors import ConfigurationError
from modgate.models.risk_models import U32_MAX, RiskThresholds


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Remote checkfiles ──
    remote_checkfile_timeout: float = Field(
        default=10.0, description="Timeout in seconds for fetching a checkfile `url`"
    )

    # ── Audit ──
    audit_enabled: bool = Field(default=True, description="Write validation audit entries")
    audit_log_path: str = Field(
        default="audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = SettingsConfigDict(
        env_prefix="MODGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class RiskSettings(BaseSettings):
    """
    Complexity bounds: MODGATE_RISK_LOW, MODGATE_RISK_MEDIUM, MODGATE_RISK_HIGH.

    The MODSURFER_RISK_* names are still read when the MODGATE_ ones are unset.
    """

    low: int = Field(
        default=2500,
        ge=0,
        le=U32_MAX,
        validation_alias=AliasChoices("MODGATE_RISK_LOW", "MODSURFER_RISK_LOW"),
    )
    medium: int = Field(
        default=50_000,
        ge=0,
        le=U32_MAX,
        validation_alias=AliasChoices("MODGATE_RISK_MEDIUM", "MODSURFER_RISK_MEDIUM"),
    )
    high: int = Field(
        default=U32_MAX,
        ge=0,
        le=U32_MAX,
        validation_alias=AliasChoices("MODGATE_RISK_HIGH", "MODSURFER_RISK_HIGH"),
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )


def current_thresholds() -> RiskThresholds:
    """
    Read the risk bounds from the environment as it is right now.

    Raises:
        ConfigurationError: a bound is not an integer in range, or the bounds
            are not strictly increasing.
    """
    try:
        risk = RiskSettings()
        return RiskThresholds(low=risk.low, medium=risk.medium, high=risk.high)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid risk bounds: {e}") from e


# Singleton instance — imported by other modules
settings = Settings()
