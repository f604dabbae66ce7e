"""
Environment-driven settings.

Values are read on every call to ``get_settings()`` so tests can monkeypatch the
environment without reloading modules.

Environment variables:
    DATASPEC_ENV                     dev | prod (default: dev)
    DATASPEC_STRICT_EMBEDDED_NAMES   1/true/yes to reject duplicate embedded names
    DATASPEC_LOG_LEVEL               logging level name (default: INFO)
    DATASPEC_MAX_DOCUMENT_BYTES      max size of a decoded spec document (default: 1 MiB)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_log = logging.getLogger("dataspec.config")

_TRUTHY = ("1", "true", "yes")
_DEFAULT_MAX_DOCUMENT_BYTES = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    env: str = "dev"
    strict_embedded_names: bool = False
    log_level: str = "INFO"
    max_document_bytes: int = _DEFAULT_MAX_DOCUMENT_BYTES


def _env_flag(name: str, default: str = "0") -> bool:
    return (os.getenv(name) or default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


def get_settings() -> Settings:
    return Settings(
        env=(os.getenv("DATASPEC_ENV") or "dev").strip().lower(),
        strict_embedded_names=_env_flag("DATASPEC_STRICT_EMBEDDED_NAMES"),
        log_level=(os.getenv("DATASPEC_LOG_LEVEL") or "INFO").strip().upper(),
        max_document_bytes=max(1, _env_int("DATASPEC_MAX_DOCUMENT_BYTES", _DEFAULT_MAX_DOCUMENT_BYTES)),
    )


def configure_logging(settings: Settings | None = None) -> None:
    s = settings or get_settings()
    level = logging.getLevelName(s.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("dataspec").setLevel(level)
