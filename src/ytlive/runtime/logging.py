"""Log setup for CLI runs.

Each setting is taken from the explicit argument when given, then from the
``logging`` config section (``logLevel`` also counts for the level), then
from the CLI default: warnings and errors on stderr, no log file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from ..core.config import Config, LoggingConfig
from ..util.log import Log, LogFormat, LogLevel

V = TypeVar("V")

CLI_LEVEL = "warn"


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


def _first(*candidates: Optional[V], default: V) -> V:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return default


def resolve_log_settings(
    cfg: Config,
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
) -> LogSettings:
    """Raises ``ValueError`` for an unknown level or format name."""
    section = cfg.logging or LoggingConfig()
    return LogSettings(
        level=LogLevel.parse(_first(level, section.level, cfg.log_level, default=CLI_LEVEL)),
        format=LogFormat.parse(_first(format, section.format, default=LogFormat.KV.value)),
        console=_first(console, section.console, default=True),
        file=_first(file, section.file, default=False),
        dev_file=_first(dev_file, section.dev_file, default=False),
    )


def bootstrap_logging(
    cfg: Config,
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
) -> LogSettings:
    """Resolve settings for ``cfg`` and apply them to ``Log``."""
    settings = resolve_log_settings(cfg, level=level, format=format, console=console, file=file, dev_file=dev_file)
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings
