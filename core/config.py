# core/config.py

"""
Loads tracker settings from a YAML file.

Recognized keys (all optional):

    storage:
      dir: ~/.club_progress_tracker
      key: htic_marathon_tracker_v1
    logging:
      level: INFO
    export:
      dir: .

A missing file means defaults. A file that cannot be parsed is logged and ignored,
since the tracker should still start with its last saved document.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = os.path.join("~", ".club_progress_tracker")
DEFAULT_STORAGE_KEY = "htic_marathon_tracker_v1"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_EXPORT_DIR = "."
DEFAULT_CONFIG_FILENAME = "config.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TrackerConfig:

    def __init__(self, data: dict[str, Any] | None = None, source: str | None = None):
        self._data: dict[str, Any] = data or {}
        self._source = source

    # === properties ===

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def storage_dir(self) -> str:
        path = self._section("storage").get("dir") or DEFAULT_STORAGE_DIR
        return os.path.abspath(os.path.expanduser(str(path)))

    @property
    def storage_key(self) -> str:
        return str(self._section("storage").get("key") or DEFAULT_STORAGE_KEY)

    @property
    def log_level(self) -> str:
        level = str(self._section("logging").get("level") or DEFAULT_LOG_LEVEL).upper()
        if level not in _LOG_LEVELS:
            logger.warning(f"Unknown log level '{level}' in config, using {DEFAULT_LOG_LEVEL}")
            return DEFAULT_LOG_LEVEL
        return level

    @property
    def export_dir(self) -> str:
        path = self._section("export").get("dir") or DEFAULT_EXPORT_DIR
        return os.path.abspath(os.path.expanduser(str(path)))

    # === helper methods ===

    def _section(self, name: str) -> dict[str, Any]:
        section = self._data.get(name)
        return section if isinstance(section, dict) else {}

    def __repr__(self) -> str:
        return f"TrackerConfig(source={self._source}, storage_dir={self.storage_dir}, storage_key={self.storage_key})"


def load_config(config_path: str | None = None) -> TrackerConfig:
    """
    Reads a `TrackerConfig` from disk.

    Args:
        config_path (str | None): Path to a YAML file. Defaults to `config.yaml` in the working directory.

    Returns:
        TrackerConfig: Populated from the file, or holding defaults if the file is missing or unreadable.
    """
    path = os.path.abspath(os.path.expanduser(config_path or DEFAULT_CONFIG_FILENAME))

    if not os.path.exists(path):
        logger.debug(f"No config file at {path}, using defaults")
        return TrackerConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config from {path}: {e}")
        return TrackerConfig()

    if data is None:
        data = {}

    if not isinstance(data, dict):
        logger.error(f"Config file {path} must contain a mapping, ignoring it")
        return TrackerConfig()

    logger.info(f"Loaded config from {path}")
    return TrackerConfig(data, source=path)
