"""Structured logging for ytlive.

``Log.create({"service": "classify"})`` returns a tagged logger. Records are
written as ``kv``, ``json`` or ``pretty`` lines to stderr and/or a per-run
file under ``GlobalPath.log()``. Nothing is written until ``Log.configure``
enables a sink; the CLI does that through ``runtime.logging``.
"""

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, IntEnum
from pathlib import Path
from time import monotonic
from typing import Any, Callable, Dict, Iterator, List, Optional, TextIO

from ..core.global_paths import GlobalPath
from .error import describe_error

KEEP_LOG_FILES = 10
RUN_LOG_GLOB = "????-??-??T??????.log"


class LogLevel(IntEnum):
    """Severity, ordered so that ``level >= threshold`` means enabled."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: Optional[str]) -> "LogLevel":
        if value is None:
            return cls.INFO
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"invalid log level: {value}") from None


class LogFormat(str, Enum):
    KV = "kv"
    JSON = "json"
    PRETTY = "pretty"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LogFormat":
        if value is None:
            return cls.KV
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"invalid log format: {value}") from None


@dataclass
class LogConfig:
    """Where records go. One instance per process, replaced by ``configure``."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.KV
    console: bool = False
    path: Optional[Path] = None
    stream: Optional[TextIO] = None

    def sinks(self) -> List[TextIO]:
        out: List[TextIO] = []
        if self.console:
            out.append(sys.stderr)
        if self.stream is not None:
            out.append(self.stream)
        return out


_config = LogConfig()

Record = Dict[str, Any]


def _field(value: Any) -> Any:
    if isinstance(value, BaseException):
        return describe_error(value)
    if isinstance(value, (str, int, float, bool, dict, list)):
        return value
    return str(value)


def _kv_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    text = str(value)
    if not text or "=" in text or any(ch.isspace() for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _fields(record: Record) -> str:
    return " ".join(f"{key}={_kv_value(value)}" for key, value in record.items() if key not in ("time", "level", "msg"))


def _format_kv(record: Record) -> str:
    head = f"{record['time']} level={record['level']} msg={_kv_value(record['msg'])}"
    rest = _fields(record)
    return f"{head} {rest}" if rest else head


def _format_json(record: Record) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def _format_pretty(record: Record) -> str:
    rest = _fields(record)
    line = f"{record['time']} {record['level'].upper():<5} {record['msg']}"
    return f"{line} ({rest})" if rest else line


FORMATTERS: Dict[LogFormat, Callable[[Record], str]] = {
    LogFormat.KV: _format_kv,
    LogFormat.JSON: _format_json,
    LogFormat.PRETTY: _format_pretty,
}


class Logger:
    """Logger that stamps every record with its tags."""

    def __init__(self, tags: Optional[Dict[str, Any]] = None):
        self.tags = dict(tags or {})

    def log(self, level: LogLevel, message: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        if level < _config.level:
            return
        sinks = _config.sinks()
        if not sinks:
            return
        record: Record = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": level.name.lower(),
            "msg": _field(message if message is not None else ""),
        }
        for key, value in {**self.tags, **(extra or {})}.items():
            if value is not None:
                record[key] = _field(value)
        line = FORMATTERS[_config.format](record) + "\n"
        for sink in sinks:
            sink.write(line)
            sink.flush()

    def debug(self, message: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.DEBUG, message, extra)

    def info(self, message: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.INFO, message, extra)

    def warn(self, message: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.WARN, message, extra)

    def error(self, message: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(LogLevel.ERROR, message, extra)

    @contextmanager
    def time(self, message: str, extra: Optional[Dict[str, Any]] = None) -> Iterator[None]:
        """Bracket a block with ``started``/``completed`` debug records."""
        fields = dict(extra or {})
        started = monotonic()
        self.debug(message, {**fields, "status": "started"})
        try:
            yield
        finally:
            elapsed = int((monotonic() - started) * 1000)
            self.debug(message, {**fields, "status": "completed", "duration_ms": elapsed})


class Log:
    """Logger factory and process-wide sink setup."""

    _loggers: Dict[str, Logger] = {}

    @classmethod
    def create(cls, tags: Optional[Dict[str, Any]] = None) -> Logger:
        """Return the cached logger for ``tags["service"]``, or a fresh one."""
        tags = tags or {}
        service = tags.get("service")
        if not service:
            return Logger(tags)
        return cls._loggers.setdefault(service, Logger(tags))

    @classmethod
    def configure(
        cls,
        *,
        level: Optional[LogLevel] = None,
        format: Optional[LogFormat] = None,
        console: Optional[bool] = None,
        file: bool = False,
        dev: bool = False,
    ) -> None:
        """Set the threshold and sinks.

        With ``file`` a new log is opened under ``GlobalPath.log()``: ``dev.log``
        when ``dev`` is set (overwritten each run), otherwise a timestamped
        file. Only the ``KEEP_LOG_FILES`` newest timestamped files survive.
        """
        cls.close()
        if level is not None:
            _config.level = level
        if format is not None:
            _config.format = format
        if console is not None:
            _config.console = console
        if not file:
            _config.path = None
            return

        directory = Path(GlobalPath.log())
        directory.mkdir(parents=True, exist_ok=True)
        _prune(directory)
        name = "dev.log" if dev else datetime.now().strftime("%Y-%m-%dT%H%M%S.log")
        _config.path = directory / name
        _config.stream = _config.path.open("w", encoding="utf-8")

    @classmethod
    def close(cls) -> None:
        if _config.stream is not None:
            _config.stream.close()
            _config.stream = None


def _prune(directory: Path) -> None:
    runs = sorted(directory.glob(RUN_LOG_GLOB), key=lambda p: p.stat().st_mtime)
    for stale in runs[:-KEEP_LOG_FILES]:
        stale.unlink(missing_ok=True)
