"""Logging and profiling helpers for the word-count engine, backed by telelog.

The rest of the package only touches four entry points:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "WC_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "wc_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _build_preset_config(preset: str) -> Any:
    config = tl.Config()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "quiet":
        config.with_min_level("WARNING")
        config.with_console_output(True)
        config.with_colored_output(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "wc_engine.log")
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    config.with_profiling(True)
    return config


def _build_default_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())

    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``config`` and ``preset`` are mutually exclusive. With neither, the
    configuration is rebuilt from ``WC_ENGINE_*`` environment variables.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _build_default_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, accepts_data = _level_method(log, level)
    message = f"event::{name}"
    if accepts_data:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the profile."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, "reason": reason, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        method, accepts = _level_method(self.logger, "error")
        if accepts:
            method("span::fail", _pairs(payload))
        else:
            method(f"span::fail {payload}")


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``component=True`` also tracks it under ``name``.

    ``metadata`` is pushed as logger context for the duration of the block.
    Exceptions are logged through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None

    pushed: list[str] = []
    serialized: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized[key] = _stringify(value)
        log.add_context(key, serialized[key])
        pushed.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=serialized,
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in pushed:
                log.remove_context(key)


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
