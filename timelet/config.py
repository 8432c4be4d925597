"""
Configuration loader for timelet.

Loads a YAML file describing named emitter settings and the logging setup:

    logging:
      level: INFO
      format: detailed
    emitters:
      - name: heartbeat
        interval_ms: 500
        max_events: 10
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from timelet.base.errors import ConfigError, TimeletError
from timelet.base.types import Settings
from timelet.logger import TimeletLoggerConfig, get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "TIMELET_CONFIG"

# Default path to the configuration file
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config.yml")


class ConfigManager:
    """
    Named emitter settings and logging options read from YAML.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Path to the configuration file. Falls back to $TIMELET_CONFIG,
                then to config.yml at the project root.
        """
        self.config_path = config_path or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._settings: Dict[str, Settings] = {}
        self._loaded = False

    def load(self) -> "ConfigManager":
        """
        Load and validate the configuration file.

        Returns:
            Self for method chaining.

        Raises:
            ConfigError: If the file cannot be read or an emitter entry is invalid.
        """
        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration from {self.config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration in {self.config_path} must be a mapping")

        settings: Dict[str, Settings] = {}
        for entry in config.get("emitters") or []:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise ConfigError(f"Emitter entry without a name: {entry!r}")
            name = entry["name"]
            if name in settings:
                raise ConfigError(f"Duplicate emitter '{name}' in configuration")
            try:
                settings[name] = Settings.from_dict(entry)
            except TimeletError as e:
                raise ConfigError(f"Invalid settings for emitter '{name}': {e}") from e

        self._config = config
        self._settings = settings
        self._loaded = True
        logger.debug(f"Configuration loaded from {self.config_path}")
        return self

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def get_settings(self, name: str) -> Settings:
        """
        Raises:
            ConfigError: If no emitter with that name is configured.
        """
        self._ensure_loaded()
        try:
            return self._settings[name]
        except KeyError:
            raise ConfigError(f"Emitter '{name}' not found in configuration") from None

    def list_emitter_names(self) -> List[str]:
        self._ensure_loaded()
        return list(self._settings)

    def logger_config(self) -> TimeletLoggerConfig:
        """
        Logging options from the `logging` section, defaults when absent.
        """
        self._ensure_loaded()
        section = self._config.get("logging") or {}
        try:
            return TimeletLoggerConfig(
                level=section.get("level", "INFO"),
                format_type=str(section.get("format", "detailed")).lower(),
                log_file=section.get("log_file"),
                rotation=bool(section.get("rotation", False)),
                max_backup=int(section.get("max_backup", 5)),
                extra_fields=section.get("extra_fields"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid logging configuration: {e}") from e

    def get_raw_config(self) -> Dict[str, Any]:
        self._ensure_loaded()
        return self._config
