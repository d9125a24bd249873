"""Configuration management.

Loads configuration from the following sources, later ones winning:

1. Global config (``config.json``, ``ytlive.json``, ``ytlive.jsonc`` in the
   platform config directory)
2. Project config (``ytlive.json`` / ``ytlive.jsonc`` found walking up from
   the working directory, nearest last)
3. Environment variable overrides (``YTLIVE_API_KEY``, ``YTLIVE_BASE_URL``,
   ``YTLIVE_LOG_LEVEL``)
"""

from __future__ import annotations

import os
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..util.log import Log
from .config_loader import ConfigError, deep_merge, load_json_file
from .config_schema import Config, LoggingConfig
from .global_paths import GlobalPath

log = Log.create({"service": "config"})

GLOBAL_FILENAMES = ("config.json", "ytlive.json", "ytlive.jsonc")
PROJECT_FILENAMES = ("ytlive.json", "ytlive.jsonc")

ENV_OVERRIDES = {
    "YTLIVE_API_KEY": "apiKey",
    "YTLIVE_BASE_URL": "baseUrl",
    "YTLIVE_LOG_LEVEL": "logLevel",
}

_config_var: ContextVar['ConfigManager'] = ContextVar('_config_var')


class ConfigManager:
    """Configuration management.

    Instance-based with ContextVar for scoping. Class methods delegate
    to the current instance.
    """

    def __init__(self) -> None:
        self._cache: Optional[Config] = None
        self._sources: List[str] = []

    @classmethod
    def current(cls) -> 'ConfigManager':
        try:
            return _config_var.get()
        except LookupError:
            instance = cls()
            _config_var.set(instance)
            return instance

    @classmethod
    def provide(cls, instance: 'ConfigManager') -> Token['ConfigManager']:
        return _config_var.set(instance)

    @classmethod
    def restore(cls, token: Token['ConfigManager']) -> None:
        _config_var.reset(token)

    @classmethod
    def reset(cls) -> None:
        """Reset cached configuration."""
        inst = cls.current()
        inst._cache = None
        inst._sources = []

    @classmethod
    async def load(cls, directory: str = ".") -> Config:
        return await cls.current()._load(directory)

    @classmethod
    async def get(cls) -> Config:
        inst = cls.current()
        if inst._cache is None:
            return await inst._load()
        return inst._cache

    @classmethod
    def sources(cls) -> List[str]:
        """Config files that contributed to the cached configuration."""
        return cls.current()._sources.copy()

    async def _load(self, directory: str = ".") -> Config:
        if self._cache is not None:
            return self._cache

        result: Dict[str, Any] = {}
        sources: List[str] = []

        global_dir = Path(GlobalPath.config())
        for filename in GLOBAL_FILENAMES:
            filepath = global_dir / filename
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(str(filepath))
                log.info("loaded global config", {"path": str(filepath)})

        project_files: List[Path] = []
        current = Path(directory).resolve()
        while current != current.parent:
            for filename in PROJECT_FILENAMES:
                filepath = current / filename
                if filepath.exists():
                    project_files.append(filepath)
            current = current.parent

        for filepath in reversed(project_files):
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(str(filepath))
                log.info("loaded project config", {"path": str(filepath)})

        for env_key, field in ENV_OVERRIDES.items():
            value = os.environ.get(env_key)
            if value:
                result[field] = value

        try:
            config = Config.model_validate(result)
        except ValidationError as e:
            origin = sources[-1] if sources else "<environment>"
            raise ConfigError(origin, str(e)) from e

        self._cache = config
        self._sources = sources
        return config


__all__ = ["Config", "ConfigError", "ConfigManager", "LoggingConfig"]
