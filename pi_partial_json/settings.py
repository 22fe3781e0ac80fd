"""
Settings management for pi-partial-json.

Handles loading and saving the defaults used by the command line.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from pi_partial_json.options import TypeOptions

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "PI_PARTIAL_JSON_CONFIG_DIR"


class CompletionSettings(BaseModel):
    """Completion behavior settings."""

    allow: List[str] = Field(default_factory=lambda: ["all"])  # Kind names, see TypeOptions.from_names
    format: bool = False
    indent: int = Field(default=1, ge=0)


class Settings(BaseModel):
    """Global settings."""

    completion: CompletionSettings = Field(default_factory=CompletionSettings)

    def allowed(self) -> TypeOptions:
        """Permission set named by ``completion.allow``."""
        return TypeOptions.from_names(self.completion.allow)


class SettingsManager:
    """
    Manages loading and saving settings.

    Settings are stored in JSON format at ~/.pi-partial-json/settings.json
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            config_dir: Configuration directory (default: $PI_PARTIAL_JSON_CONFIG_DIR
                or ~/.pi-partial-json)
        """
        if config_dir is None:
            env_dir = os.environ.get(CONFIG_DIR_ENV)
            config_dir = Path(env_dir) if env_dir else Path.home() / ".pi-partial-json"

        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "settings.json"

    def load(self) -> Settings:
        """
        Load settings from file.

        Returns:
            Settings object (defaults if file doesn't exist or is invalid)
        """
        if not self.config_file.exists():
            return Settings()

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            settings = Settings(**data)
            settings.allowed()  # reject unknown kind names here, not at first use
            return settings
        except Exception as e:
            logger.warning("Failed to load settings, using defaults: %s", e)
            return Settings()

    def save(self, settings: Settings) -> None:
        """
        Save settings to file.

        Args:
            settings: Settings to save
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(), f, indent=2)

    def update(self, **kwargs: Any) -> Settings:
        """
        Update completion settings and save.

        Args:
            **kwargs: CompletionSettings fields to change

        Returns:
            Updated settings
        """
        settings = self.load()
        data = settings.completion.model_dump()
        data.update(kwargs)
        settings = Settings(completion=CompletionSettings(**data))
        self.save(settings)
        return settings


__all__ = ["CompletionSettings", "Settings", "SettingsManager", "CONFIG_DIR_ENV"]
