"""Telemetry services for the editing core, built on ``logging``.

Public surface:

``configure(...)`` -- apply a preset or the environment-driven defaults
``get_logger(name)`` -- fetch a logger under the package namespace
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- time a block and report failures raised inside it
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from typing import Any, Dict, Iterator, List, Optional

ENV_PREFIX = "LINEEDIT_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "lineedit")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s - %(message)s"
FIELDS_ATTR = "telemetry_fields"

_INSTALLED_HANDLERS: List[logging.Handler] = []


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _resolve_level(raw: Optional[str]) -> int:
    level = logging.getLevelName((raw or "INFO").upper())
    if not isinstance(level, int):
        raise ValueError(f"Unsupported log level '{raw}'.")
    return level


class JsonFormatter(logging.Formatter):
    """One JSON object per record; event and span payloads become fields."""

    def format(self, record: logging.LogRecord) -> str:
        document: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in getattr(record, FIELDS_ATTR, {}).items():
            document.setdefault(key, value)
        if record.exc_info:
            document["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(document, default=str)


@dataclass
class TelemetryConfig:
    """Handler setup applied to the package logger."""

    level: int = logging.INFO
    console: bool = True
    json_format: bool = False
    log_file: str = ""
    buffer_size: int = 0

    def build_handlers(self) -> List[logging.Handler]:
        formatter: logging.Formatter = (
            JsonFormatter() if self.json_format else logging.Formatter(PLAIN_FORMAT)
        )
        handlers: List[logging.Handler] = []
        if self.console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if self.log_file:
            file_handler: logging.Handler = logging.FileHandler(
                self.log_file, encoding="utf-8", delay=True
            )
            if self.buffer_size:
                file_handler.setFormatter(formatter)
                file_handler = MemoryHandler(
                    self.buffer_size,
                    flushLevel=logging.WARNING,
                    target=file_handler,
                )
            handlers.append(file_handler)
        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(level=logging.DEBUG, console=True)
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "lineedit.log"
        return TelemetryConfig(
            level=logging.INFO, console=False, log_file=log_path, buffer_size=256
        )
    if key in {"performance", "performance_analysis"}:
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "lineedit-performance.log"
        return TelemetryConfig(
            level=logging.DEBUG,
            console=False,
            json_format=True,
            log_file=log_path,
            buffer_size=2048,
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    buffer_size = 0
    if _env_flag("LOG_BUFFERED", False):
        buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
    return TelemetryConfig(
        level=_resolve_level(_env("LOG_LEVEL")),
        console=not _env_flag("DISABLE_CONSOLE", False),
        json_format=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or DEFAULT_LOG_FILE,
        buffer_size=buffer_size,
    )


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> None:
    """Replace the handlers on the package logger.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        ``config`` and ``preset`` are mutually exclusive.
    """

    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in _INSTALLED_HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()

    for handler in config.build_handlers():
        root.addHandler(handler)
        _INSTALLED_HANDLERS.append(handler)
    root.setLevel(config.level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the logger for ``name``, nested under the package logger."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name != DEFAULT_LOGGER_NAME and not logger_name.startswith(
        f"{DEFAULT_LOGGER_NAME}."
    ):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    return logging.getLogger(logger_name)


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    log = get_logger(logger_name)
    numeric = level if isinstance(level, int) else _resolve_level(level)
    if not log.isEnabledFor(numeric):
        return
    payload = {"event": name, **(data or {})}
    log.log(
        numeric,
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={FIELDS_ATTR: payload},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for late metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            level,
            "%s %s",
            message,
            _format_pairs(payload),
            extra={FIELDS_ATTR: payload},
        )

    def fail(self, reason: str) -> None:
        self._emit(logging.WARNING, "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and log its outcome.

    Parameters
    ----------
    name:
        Operation name, reported as ``span=<name>``.
    logger_name:
        Target logger; defaults to the package logger.
    component:
        ``True`` reuses ``name`` as the component identifier, a string is used
        as-is.
    metadata:
        Key/value pairs attached to every record the span emits.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    handle._emit(logging.DEBUG, "span::done", {"elapsed_ms": f"{elapsed_ms:.3f}"})


configure()
logger = get_logger()

__all__ = [
    "JsonFormatter",
    "SpanHandle",
    "TelemetryConfig",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
