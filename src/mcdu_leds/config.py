"""
Configuration - how the LED service talks to the panel.

Loaded from mcdu_leds.yaml (or .json) with environment overrides:
- MCDU_MOCK_MODE=true  run without hardware
- MCDU_LOG_LEVEL       debug|info|warning|error
"""

import json
import logging
import os
import yaml
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .types import BRIGHTNESS_MAX, BRIGHTNESS_MIN

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error")
TOOL_MODES = ("minimal", "standard")


@dataclass
class LEDConfig:
    """LED service configuration."""
    mock_mode: bool = False
    log_level: str = "info"
    default_backlight: int = BRIGHTNESS_MAX  # Applied on startup
    default_screen_backlight: int = BRIGHTNESS_MAX
    tool_mode: str = "standard"  # "minimal" hides the bulk/state tools

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LEDConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate configuration values are sensible."""
        if self.log_level not in LOG_LEVELS:
            return False, f"log_level must be one of {', '.join(LOG_LEVELS)}"

        for key in ("default_backlight", "default_screen_backlight"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int):
                return False, f"{key} must be an integer"
            if not (BRIGHTNESS_MIN <= value <= BRIGHTNESS_MAX):
                return False, f"{key} must be 0-255"

        if self.tool_mode not in TOOL_MODES:
            return False, f"tool_mode must be one of {', '.join(TOOL_MODES)}"

        return True, None


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to config file (default: mcdu_leds.yaml in current dir)
        """
        if config_path is None:
            config_path = Path(os.environ.get("MCDU_LEDS_CONFIG", "mcdu_leds.yaml"))
        self.config_path = Path(config_path)
        self._config: Optional[LEDConfig] = None

    def _is_yaml(self) -> bool:
        return self.config_path.suffix in (".yaml", ".yml")

    def load(self, force_reload: bool = False) -> LEDConfig:
        """Load configuration from file or return defaults."""
        if self._config is not None and not force_reload:
            return self._config

        config = LEDConfig()
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = yaml.safe_load(f) if self._is_yaml() else json.load(f)

                config = LEDConfig.from_dict(data or {})
                valid, error = config.validate()
                if not valid:
                    logger.warning("Invalid config, using defaults: %s", error)
                    config = LEDConfig()
            except Exception as e:
                logger.error("Error loading config, using defaults: %s", e)
                config = LEDConfig()

        self._config = self._apply_env(config)
        return self._config

    def _apply_env(self, config: LEDConfig) -> LEDConfig:
        mock = os.environ.get("MCDU_MOCK_MODE")
        if mock is not None:
            config.mock_mode = _env_flag(mock)

        level = os.environ.get("MCDU_LOG_LEVEL")
        if level:
            level = level.strip().lower()
            if level == "warn":
                level = "warning"
            if level in LOG_LEVELS:
                config.log_level = level
            else:
                logger.warning("Ignoring unknown MCDU_LOG_LEVEL: %s", level)
        return config

    def save(self, config: Optional[LEDConfig] = None) -> bool:
        """
        Save configuration to file.

        Returns:
            True if saved successfully
        """
        if config is None:
            config = self._config or self.load()

        valid, error = config.validate()
        if not valid:
            logger.error("Cannot save invalid config: %s", error)
            return False

        try:
            data = config.to_dict()
            with open(self.config_path, "w") as f:
                if self._is_yaml():
                    yaml.dump(data, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)
            self._config = config
            return True
        except Exception as e:
            logger.error("Error saving config: %s", e)
            return False

    def reload(self) -> LEDConfig:
        """Force reload configuration from file."""
        self._config = None
        return self.load()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_path)
    return _config_manager


def get_led_config() -> LEDConfig:
    """Get current LED configuration."""
    return get_config_manager().load()
