"""structlog configuration for pbxwrite.

Library modules log through ``logging.getLogger(__name__)``; telemetry
logs through structlog. Both end up in one stdlib handler whose formatter
runs the structlog chain, so every record gets the same fields:

- console (default): key=value lines, colored on a terminal
- JSON (``log_json``): one object per line
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from pbxwrite.config.settings import PbxSettings

PACKAGE_LOGGER = "pbxwrite"


def _shared_processors() -> list[structlog.types.Processor]:
    """Run for structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def _handler(log_json: bool, stream: TextIO) -> logging.Handler:
    shared = _shared_processors()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route pbxwrite logs to *stream* (default: stderr).

    Replaces any handlers already on the root logger, so repeated calls
    do not duplicate output.

    Args:
        verbose: DEBUG for the ``pbxwrite`` loggers; WARNING otherwise.
        log_json: JSON lines instead of console output.
        stream: Where records are written.
    """
    stream = stream or sys.stderr

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_handler(log_json, stream))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_from_settings(settings: PbxSettings) -> None:
    """Apply the ``verbose``/``log_json`` flags of resolved settings."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
