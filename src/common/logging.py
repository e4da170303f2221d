"""
Logging setup for the routing relay.
Production writes one JSON object per line tagged with the service name;
development writes readable lines with the record's 'extra' fields appended.
"""

import json
import logging
import logging.config
import os
from typing import Optional

__all__ = ("configure_logging", "get_logger", "build_logging_config", "record_extras")

SERVICE_NAME = "routing-relay"
PRODUCTION_ENVS = ("production", "prod")

# Attributes every LogRecord carries; anything else came in through 'extra'
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def record_extras(record: logging.LogRecord) -> dict:
    """Return the fields attached to a record through 'extra'."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class ExtraFieldsFormatter(logging.Formatter):
    """Appends a record's extra fields to the formatted line as compact JSON."""

    def format(self, record):
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        return f"{line} | {json.dumps(extras, default=str, ensure_ascii=False)}"


def _formatter_config(env: str) -> dict:
    if env in PRODUCTION_ENVS:
        return {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "fmt": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "static_fields": {"service": SERVICE_NAME},
            "json_default": str,
        }
    return {
        "()": ExtraFieldsFormatter,
        "fmt": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    }


def build_logging_config(env: str, level: str) -> dict:
    """
    Build the dictConfig mapping for one environment.

    Args:
        env (str): Application environment; 'production' selects JSON output.
        level (str): Root logging level name.

    Returns:
        dict: Configuration accepted by logging.config.dictConfig.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"relay": _formatter_config(env.lower())},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "relay",
                "stream": "ext://sys.stdout",
                "level": level.upper(),
            }
        },
        "root": {"handlers": ["stdout"], "level": level.upper()},
    }


def configure_logging(
    env: Optional[str] = None, level: Optional[str] = None, force: bool = False
) -> None:
    """
    Install the relay's logging configuration on the root logger.

    Args:
        env (str, optional): Defaults to APP_ENV, then ENV, then 'development'.
        level (str, optional): Defaults to LOG_LEVEL, then INFO.
        force (bool): Reconfigure even when the root logger already has handlers.
    """
    if logging.getLogger().handlers and not force:
        return
    env = env or os.getenv("APP_ENV") or os.getenv("ENV") or "development"
    level = level or os.getenv("LOG_LEVEL") or "INFO"
    logging.config.dictConfig(build_logging_config(env, level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Named logger; configures logging on first use when nothing else has."""
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)
