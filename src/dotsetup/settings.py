from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from dotsetup.common import AppInfo, AppPaths


class Settings(BaseSettings):
    app: AppInfo = AppInfo()
    paths: AppPaths = AppPaths()

    model_config = SettingsConfigDict(
        env_prefix="DOTSETUP_",
        env_nested_delimiter="__",
        case_sensitive=False,
        nested_model_default_partial_update=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Private singleton instance
_settings: Settings | None = None

# Convenience access - pre-initialized singleton
settings = get_settings()


__all__ = [
    "AppInfo",
    "AppPaths",
    "Settings",
    "get_settings",
    "settings",
]
