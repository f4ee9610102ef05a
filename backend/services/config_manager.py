"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from models.config import LimitsConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "CODEPATCH_CONFIG_DIR"


class ConfigManager:
    """Manage configuration persistence

    Created once by the application factory and handed to request
    handlers through a dependency.
    """

    def __init__(self, config_dir: str | os.PathLike | None = None):
        self._config_file = self._resolve_config_file(config_dir)
        self._config = self._load_config()

    @staticmethod
    def _resolve_config_file(config_dir: str | os.PathLike | None) -> Path:
        """Pick the config file: argument, then env var, then ~/.codepatch, then temp dir"""
        candidates = [config_dir, os.environ.get(CONFIG_DIR_ENV), "~/.codepatch"]

        for candidate in candidates:
            if not candidate:
                continue
            config_path = Path(candidate).expanduser()
            try:
                config_path.mkdir(parents=True, exist_ok=True)
                return config_path / "config.json"
            except OSError as e:
                logger.warning("Cannot write to %s: %s", config_path, e)

        tmp_dir = Path(tempfile.gettempdir()) / "codepatch"
        tmp_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Using temporary config path: %s", tmp_dir)
        return tmp_dir / "config.json"

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Error loading config: %s", e)
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "limits": LimitsConfig().model_dump(),
            "server": {"host": "0.0.0.0", "port": 8000},
            "logging": {"level": "INFO"},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def limits(self) -> LimitsConfig:
        """Current payload limits"""
        return LimitsConfig(**self.get_config().get("limits", {}))
