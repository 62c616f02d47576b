"""
Configuration management using Pydantic Settings.

Sources, lowest priority first:
1. Defaults on the models
2. settings.yaml (workspace config/ folder, then the user config dir)
3. Environment variables, e.g. WORKLOG_DATABASE_URL or
   WORKLOG_PREFERENCES__TICK_INTERVAL_SECONDS=30
"""

import os
import logging
from pathlib import Path
from typing import Optional
import yaml

from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from worklog.domain.models import UserPreferences

logger = logging.getLogger(__name__)

APP_DIR_NAME = "worklog"
WORKSPACE_CONFIG = Path("config/settings.yaml")


def _platform_dir(kind: str) -> Path:
    """Per-user base directory for 'config' or 'data' files"""
    if os.name == 'nt':
        return Path(os.getenv('APPDATA')) / APP_DIR_NAME
    if kind == "config":
        return Path.home() / '.config' / APP_DIR_NAME
    return Path.home() / '.local' / 'share' / APP_DIR_NAME


class Settings(BaseSettings):
    """
    Paths, database URL and user preferences.

    Preferences from settings.yaml are merged under any WORKLOG_PREFERENCES__*
    environment overrides. A YAML file that does not validate is logged and
    ignored, so a typo never keeps the tracker from starting.
    """
    model_config = SettingsConfigDict(
        env_prefix='WORKLOG_',
        env_nested_delimiter='__',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    preferences: UserPreferences = UserPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.config_dir = self.config_dir or _platform_dir("config")
        self.data_dir = self.data_dir or _platform_dir("data")
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._merge_yaml_preferences()

    @property
    def preferences_file(self) -> Path:
        if WORKSPACE_CONFIG.exists():
            return WORKSPACE_CONFIG
        return self.config_dir / "settings.yaml"

    def _merge_yaml_preferences(self):
        config_file = self.preferences_file
        if not config_file.exists():
            return

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_values = yaml.safe_load(f) or {}
            # Environment overrides were already applied to self.preferences
            overrides = self.preferences.model_dump(exclude_unset=True)
            self.preferences = UserPreferences(**{**file_values, **overrides})
        except (yaml.YAMLError, TypeError, PydanticValidationError) as e:
            logger.warning(f"Ignoring invalid preferences in {config_file}: {e}")
            return
        logger.debug(f"Preferences loaded from {config_file}")

    @property
    def tick_interval_ms(self) -> int:
        return self.preferences.tick_interval_seconds * 1000

    def get_db_url(self) -> str:
        """Get database URL, defaulting to a SQLite file in the data dir"""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'worklog.db'}"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
