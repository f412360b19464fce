"""Configuration management for pptx-richtext."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

UnderlineStyleName = Literal["single", "double", "heavy", "dotted", "dashed", "wavy"]


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Run styling
    default_font_face: str = Field(
        default="Arial Unicode MS",
        alias="RICHTEXT_FONT_FACE",
    )
    # Quill output relies on the fallback font for multi-script text
    apply_default_font: bool = Field(
        default=False,
        alias="RICHTEXT_APPLY_DEFAULT_FONT",
    )
    underline_variant: UnderlineStyleName = Field(
        default="heavy",
        alias="RICHTEXT_UNDERLINE",
    )
    heading_space_after: float = Field(
        default=12,
        alias="RICHTEXT_HEADING_SPACE_AFTER",
    )
    list_space_after: float = Field(
        default=6,
        alias="RICHTEXT_LIST_SPACE_AFTER",
    )

    # Editor chrome (e.g. Quill's list marker spans) carries these classes
    skip_classes: list[str] = Field(
        default_factory=lambda: ["ql-ui"],
        alias="RICHTEXT_SKIP_CLASSES",
    )

    # Display
    display_indent: int = Field(
        default=2,
        alias="RICHTEXT_DISPLAY_INDENT",
    )

    # Slide export
    slide_font_size: float = Field(
        default=8,
        alias="RICHTEXT_SLIDE_FONT_SIZE",
    )
    slide_font_face: str = Field(
        default="Arial",
        alias="RICHTEXT_SLIDE_FONT_FACE",
    )
    slide_color: str = Field(
        default="000000",
        alias="RICHTEXT_SLIDE_COLOR",
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


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None
