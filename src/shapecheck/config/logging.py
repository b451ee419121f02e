"""structlog setup for the shapecheck CLI.

Library code logs through plain ``logging.getLogger(__name__)`` loggers.
``configure_logging()`` routes those records through structlog's
``ProcessorFormatter`` on stderr, so stdout stays reserved for results.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "shapecheck"

# Dependencies whose debug output never helps when debugging a schema.
QUIET_LOGGERS = ("ruamel",)

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single stderr handler rendering shapecheck records.

    Args:
        verbose: Let ``shapecheck.*`` DEBUG records through.
        log_json: One JSON object per line instead of console output.

    Safe to call repeatedly: the root handler is replaced, not added.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
