"""Telemetry services built on the standard ``logging`` module.

This module exposes a narrow surface area for the rest of the editor:

``configure(...)`` -- install handlers from the environment or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging failures

The terminal belongs to the UI while the editor runs, so nothing is written
to the console unless ``REDITOR_LOG_CONSOLE`` is set or the ``development``
preset is selected.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional

ENV_PREFIX = "REDITOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "reditor")
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_HANDLERS: list[logging.Handler] = []


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


def _resolve_level(level: Optional[str] = None) -> int:
    name = (level or _env("LOG_LEVEL") or "WARNING").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{name}'.")
    return resolved


def _build_preset(preset: str) -> tuple[int, list[logging.Handler]]:
    key = preset.lower()
    if key == "development":
        return logging.DEBUG, [logging.StreamHandler()]
    if key == "production":
        log_path = _env("LOG_FILE") or "reditor.log"
        return logging.INFO, [logging.FileHandler(log_path, encoding="utf-8")]
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default(
    level: Optional[str], log_file: Optional[str]
) -> tuple[int, list[logging.Handler]]:
    handlers: list[logging.Handler] = []
    path = log_file if log_file is not None else _env("LOG_FILE")
    if path:
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    if _env_flag("LOG_CONSOLE", False):
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())
    return _resolve_level(level), handlers


def configure(
    *,
    preset: Optional[str] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Install handlers on the editor's root logger.

    Parameters
    ----------
    preset:
        ``"development"`` (DEBUG to stderr) or ``"production"`` (INFO to a
        file). Mutually exclusive with ``level``/``log_file``.
    level:
        Level name overriding ``REDITOR_LOG_LEVEL``.
    log_file:
        Path overriding ``REDITOR_LOG_FILE``; an empty string disables the
        file handler.
    """

    if preset and (level or log_file):
        raise ValueError("Provide either `preset` or `level`/`log_file`, not both.")

    if preset:
        resolved_level, handlers = _build_preset(preset)
    else:
        resolved_level, handlers = _build_default(level, log_file)

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in _HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _HANDLERS.append(handler)
    root.setLevel(resolved_level)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the editor's root logger."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record with ``key=value`` pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(_resolve_level(level), "event::%s %s", name, _format_pairs(payload))


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(level, "%s %s", message, _format_pairs(payload))

    def fail(self, reason: str) -> None:
        self._emit(logging.ERROR, "span::fail", {"reason": reason})


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
        Operation name, logged with the elapsed time on exit.
    logger_name:
        Target logger; defaults to the editor logger.
    component:
        If ``True`` use the span name as the component; if a string, use it
        as the component identifier.
    metadata:
        Optional ``key=value`` pairs attached to every record of the span.
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
        handle.fail(str(exc) or type(exc).__name__)
        raise
    finally:
        if log.isEnabledFor(logging.DEBUG):
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            handle._emit(logging.DEBUG, "span::exit", {"elapsed_ms": f"{elapsed_ms:.3f}"})


# Initialize handlers once from the environment.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
