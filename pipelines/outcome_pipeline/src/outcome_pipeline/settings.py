"""
Configuration settings for the outcome command-line tools.

Environment variables:
    SOPHISTREE_LOG_LEVEL             Logging level (DEBUG, INFO, WARNING, ...)
    SOPHISTREE_JSON_INDENT           Indentation of written JSON files
    SOPHISTREE_SHOW_JUSTIFICATIONS   Include justification outcomes in tables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Outcome tool settings."""

    model_config = SettingsConfigDict(env_prefix="SOPHISTREE_", extra="ignore")

    log_level: str = "WARNING"
    json_indent: int = 2
    show_justifications: bool = True


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached instance so the environment is read again."""
    global _settings
    _settings = None
