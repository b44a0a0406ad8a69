"""Configuration management for BB Encoder."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bbencoder.formatting.encoder import DEFAULT_TAB_WIDTH, EncoderOptions


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default encoder options (CLI flags override these)
    enclose_in_code_tags: bool = Field(
        default=False,
        alias="BBENCODER_CODE_TAGS",
    )
    replace_tabs_with_spaces: bool = Field(
        default=False,
        alias="BBENCODER_REPLACE_TABS",
    )
    use_strike_full_word: bool = Field(
        default=False,
        alias="BBENCODER_STRIKE_FULL_WORD",
    )
    tab_width: int = Field(
        default=DEFAULT_TAB_WIDTH,
        ge=1,
        le=16,
        alias="BBENCODER_TAB_WIDTH",
    )

    def encoder_options(self) -> EncoderOptions:
        """Build encoder options from these settings."""
        return EncoderOptions(
            enclose_in_code_tags=self.enclose_in_code_tags,
            replace_tabs_with_spaces=self.replace_tabs_with_spaces,
            use_strike_full_word=self.use_strike_full_word,
            tab_width=self.tab_width,
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
