#!/usr/bin/env python3
"""
Configuration management for the LDES extractor.

Settings are resolved from defaults, then environment variables, then the
first JSON config file found. Per-run extraction options live in
``ldes_extractor.config.extraction``.
"""

import os
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .extraction import (
    DEFAULT_EXTRACTOR_IDENTIFIER,
    ExtractionConfig,
    ExtractionWindow,
    ExtractorOptions,
    resolve_config,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = 'LDES_EXTRACTOR_'
DEFAULT_HIGH_WATER_MARK = 1000


@dataclass
class ExtractorSettings:
    """Process-level settings shared by all extraction runs."""
    log_level: str = "INFO"
    high_water_mark: int = DEFAULT_HIGH_WATER_MARK
    default_extractor_identifier: str = DEFAULT_EXTRACTOR_IDENTIFIER
    follow_blank_nodes: bool = True
    config_paths: List[Path] = field(default_factory=list, repr=False)

    @classmethod
    def load(cls, environ: Optional[Dict[str, str]] = None,
             config_paths: Optional[List[Path]] = None) -> 'ExtractorSettings':
        """Create settings from the environment and config files."""
        settings = cls()
        environ = os.environ if environ is None else environ
        settings._load_from_environment(environ)
        if config_paths is None:
            config_paths = settings._default_config_paths(environ)
        settings.config_paths = list(config_paths)
        settings._load_from_config_files(settings.config_paths)
        return settings

    def _default_config_paths(self, environ) -> List[Path]:
        paths = [
            Path.home() / '.ldes_extractor' / 'config.json',
            Path.cwd() / 'ldes-extractor.json',
        ]
        if environ.get(ENV_PREFIX + 'CONFIG_FILE'):
            paths.append(Path(environ[ENV_PREFIX + 'CONFIG_FILE']))
        return paths

    def _load_from_environment(self, environ) -> None:
        """Load settings from environment variables."""
        self.log_level = environ.get(ENV_PREFIX + 'LOG_LEVEL', self.log_level)
        self.high_water_mark = int(environ.get(ENV_PREFIX + 'HIGH_WATER_MARK', self.high_water_mark))
        self.default_extractor_identifier = environ.get(
            ENV_PREFIX + 'DEFAULT_IDENTIFIER', self.default_extractor_identifier)
        self.follow_blank_nodes = environ.get(
            ENV_PREFIX + 'FOLLOW_BLANK_NODES', str(self.follow_blank_nodes)).lower() == 'true'

    def _load_from_config_files(self, config_paths: List[Path]) -> None:
        """Load settings from the first readable config file."""
        for config_path in config_paths:
            if config_path and config_path.is_file():
                try:
                    with open(config_path, 'r') as f:
                        config_data = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")
                    continue

                self._update_from_dict(config_data)
                logger.debug(f"Loaded settings from {config_path}")
                break

    def _update_from_dict(self, data: Dict[str, Any]) -> None:
        """Update settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(self)} - {'config_paths'}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting '{key}'")
                continue
            setattr(self, key, value)

        self.high_water_mark = int(self.high_water_mark)
        if self.high_water_mark < 1:
            raise ValueError("high_water_mark must be at least 1")

    def save_to_file(self, path: Path) -> None:
        """Save settings to a JSON config file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'log_level': self.log_level,
            'high_water_mark': self.high_water_mark,
            'default_extractor_identifier': self.default_extractor_identifier,
            'follow_blank_nodes': self.follow_blank_nodes,
        }


_settings: Optional[ExtractorSettings] = None


def get_settings() -> ExtractorSettings:
    """Global settings instance, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = ExtractorSettings.load()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (next ``get_settings`` reloads them)."""
    global _settings
    _settings = None


__all__ = [
    'DEFAULT_EXTRACTOR_IDENTIFIER',
    'DEFAULT_HIGH_WATER_MARK',
    'ExtractionConfig',
    'ExtractionWindow',
    'ExtractorOptions',
    'ExtractorSettings',
    'get_settings',
    'reset_settings',
    'resolve_config',
]
