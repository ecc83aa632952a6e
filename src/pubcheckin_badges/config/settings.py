"""Application settings for the pub check-in badge engine."""

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from pubcheckin_badges.config.database import DatabaseSettings


class BadgeSettings(BaseSettings):
    """Thresholds and switches for the badge rules."""

    timezone: str = Field(
        default="Europe/London",
        description="IANA timezone used for hour-of-day rules and date keys",
    )
    early_bird_cutoff_hour: int = Field(
        default=12, description="Check-ins before this local hour earn Early Bird"
    )
    night_owl_start_hour: int = Field(
        default=21, description="Check-ins at or after this local hour earn Night Owl"
    )
    local_legend_check_ins: int = Field(
        default=10, description="Exact check-in count that awards Local Legend"
    )
    regional_champion_unique_pubs: int = Field(
        default=5, description="Distinct pubs needed for Regional Champion"
    )
    hat_trick_check_ins: int = Field(
        default=3, description="Exact same-day check-in count that awards Hat Trick"
    )
    disabled_badges: list[str] = Field(
        default_factory=list, description="Badge ids whose rules are switched off"
    )

    model_config = SettingsConfigDict(env_prefix="BADGES_", case_sensitive=False)

    @field_validator("early_bird_cutoff_hour", "night_owl_start_hour")
    @classmethod
    def validate_hour(cls, value: int) -> int:
        """Hours are wall-clock hours of a single day."""
        if not 0 <= value <= 24:
            raise ValueError("hour must be between 0 and 24")
        return value


class AppSettings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(
        default="Pub Check-in Badges", description="Application name"
    )
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    badges: BadgeSettings = Field(default_factory=BadgeSettings)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


# Global settings instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get application settings (singleton pattern)."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = AppSettings()
    return _settings


def get_badge_settings() -> BadgeSettings:
    """Get badge rule settings."""
    return get_settings().badges
