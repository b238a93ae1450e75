"""Configuration — raw settings from the app config/env, resolved to syslog codes."""

import logging
import os
from dataclasses import dataclass
from logging.handlers import SysLogHandler
from typing import Mapping

import yaml

from syslog_access.codes import FACILITIES, PRIORITIES, CodeTable, find, lookup

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_FACILITY = SysLogHandler.LOG_DAEMON
DEFAULT_ERROR_FACILITY = SysLogHandler.LOG_LOCAL3
DEFAULT_PRIORITY = SysLogHandler.LOG_INFO

_ENV_KEYS = {
    "ident": "SYSLOG_IDENT",
    "access_log_facility": "SYSLOG_ACCESS_FACILITY",
    "error_log_facility": "SYSLOG_ERROR_FACILITY",
    "priority": "SYSLOG_PRIORITY",
    "log_mask": "SYSLOG_LOG_MASK",
    "suppress_query": "SYSLOG_SUPPRESS_QUERY",
    "forward_errors": "SYSLOG_FORWARD_ERRORS",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _optional_str(value) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Config:
    ident: str | None = None
    access_log_facility: str | None = None
    error_log_facility: str | None = None
    priority: str | None = None
    log_mask: str | None = None
    suppress_query: bool = False
    forward_errors: bool = False

    @classmethod
    def from_mapping(cls, section: Mapping | None) -> "Config":
        """Build Config from a settings section, with env vars taking precedence."""
        if section is not None and not isinstance(section, Mapping):
            logger.warning("Ignoring syslog settings of type %s", type(section).__name__)
            section = None
        values = dict(section or {})
        for key, env_name in _ENV_KEYS.items():
            if env_name in os.environ:
                values[key] = os.environ[env_name]

        return cls(
            ident=_optional_str(values.get("ident")),
            access_log_facility=_optional_str(values.get("access_log_facility")),
            error_log_facility=_optional_str(values.get("error_log_facility")),
            priority=_optional_str(values.get("priority")),
            log_mask=_optional_str(values.get("log_mask")),
            suppress_query=_parse_bool(values.get("suppress_query", False)),
            forward_errors=_parse_bool(values.get("forward_errors", False)),
        )


@dataclass(frozen=True)
class Settings:
    ident: str
    access_log_facility: int
    error_log_facility: int
    priority: int
    log_mask: int | None
    suppress_query: bool
    forward_errors: bool


def load_yaml_config(path: str | None) -> dict:
    """Load the ``syslog`` section of a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    section = data.get("syslog") or {}
    if not isinstance(section, dict):
        logger.warning("syslog section in %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return section


def _resolve_name(table: CodeTable, key: str, name: str | None, default: int) -> int:
    if name is not None and find(table, name) is None:
        logger.warning("Unknown %s %r, falling back to %d", key, name, default)
    return lookup(table, name, default)


def resolve(config: Config, default_ident: str = "python") -> Settings:
    """Translate configured names into syslog codes; unknown names use defaults."""
    settings = Settings(
        ident=config.ident or default_ident,
        access_log_facility=_resolve_name(
            FACILITIES, "access_log_facility", config.access_log_facility,
            DEFAULT_ACCESS_FACILITY,
        ),
        error_log_facility=_resolve_name(
            FACILITIES, "error_log_facility", config.error_log_facility,
            DEFAULT_ERROR_FACILITY,
        ),
        priority=_resolve_name(
            PRIORITIES, "priority", config.priority, DEFAULT_PRIORITY,
        ),
        log_mask=(
            None if config.log_mask is None
            else _resolve_name(PRIORITIES, "log_mask", config.log_mask, SysLogHandler.LOG_DEBUG)
        ),
        suppress_query=config.suppress_query,
        forward_errors=config.forward_errors,
    )
    logger.info(
        "Syslog codes for %s: access_facility=%d error_facility=%d priority=%d log_mask=%s",
        settings.ident, settings.access_log_facility, settings.error_log_facility,
        settings.priority, settings.log_mask,
    )
    return settings
