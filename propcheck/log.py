"""structlog configuration for propcheck.

Library events are emitted as ordinary ``logging`` records under the
``propcheck`` logger, so the host's logging setup decides what is shown.
Unconfigured, debug events are dropped.

Two output modes for ``configure_logging()``:
- Debug: human-readable console output to stderr
- Default: JSON lines to stderr
"""

import logging
import sys
from typing import Optional

import structlog

from propcheck.config import get_settings

LOGGER_NAME = "propcheck"


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """structlog logger writing through the stdlib logger ``name``.

    Keyword arguments of each event land on the record as extra attributes.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(debug: Optional[bool] = None, level: Optional[str] = None) -> None:
    """Attach a structlog-rendering handler to the ``propcheck`` logger.

    Args:
        debug: Use the console renderer. Defaults to ``Settings.DEBUG``.
        level: Minimum level name ("debug", "info", ...). Defaults to
            ``Settings.LOG_LEVEL``, or "debug" when debug output is on.
    """
    settings = get_settings()
    if debug is None:
        debug = settings.DEBUG
    if level is None:
        level = "debug" if debug else settings.LOG_LEVEL

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if debug:
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    propcheck_logger = logging.getLogger(LOGGER_NAME)
    propcheck_logger.handlers.clear()
    propcheck_logger.addHandler(handler)
    propcheck_logger.setLevel(numeric_level)
    propcheck_logger.propagate = False
