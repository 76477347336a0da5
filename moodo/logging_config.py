"""
Structured logging for Moodo, using structlog on top of stdlib logging.

Library modules log with ``logging.getLogger(__name__)``. Once
``setup_logging`` has run, those records go through the structlog
formatter. The output is JSON when MOODO_LOG_FORMAT=json and console
text otherwise.

Each recommendation pass binds its own context (pass token, mood,
starter flag) so every line it logs can be correlated:

    with pass_context(generation=token, mood="tired"):
        logger.info("Generated 2 recommendations")

Precedence for level and format:
    MOODO_LOG_LEVEL / MOODO_LOG_FORMAT  >  args/moodo.yaml logging section  >  INFO / console

Usage:
    from moodo.logging_config import configure_from_settings
    configure_from_settings(load_config().logging)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from moodo.config_models import LoggingSettingsConfig

LEVEL_ENV = "MOODO_LOG_LEVEL"
FORMAT_ENV = "MOODO_LOG_FORMAT"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Args:
        level: Level name; falls back to MOODO_LOG_LEVEL, then INFO
        json_output: Render JSON; falls back to MOODO_LOG_FORMAT=json
        stream: Destination (stderr by default, keeping stdout for CLI JSON)
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV, "INFO")

    if json_output is None:
        json_output = os.environ.get(FORMAT_ENV, "").lower() == "json"

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # foreign_pre_chain covers records from logging.getLogger(__name__)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)


def configure_from_settings(settings: LoggingSettingsConfig) -> None:
    """Apply the config file's logging section, letting the environment win."""
    level = os.environ.get(LEVEL_ENV) or settings.level
    env_format = os.environ.get(FORMAT_ENV)
    json_output = env_format.lower() == "json" if env_format else settings.json_output
    setup_logging(level=level, json_output=json_output)


@contextmanager
def pass_context(**values: Any) -> Iterator[None]:
    """Bind key/values to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


__all__ = ["configure_from_settings", "pass_context", "setup_logging"]
