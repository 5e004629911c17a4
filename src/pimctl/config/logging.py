"""structlog setup for pimctl.

Library modules log through ``logging.getLogger(__name__)``; those records
and structlog's own go through one ProcessorFormatter on stderr, rendered
as console lines or, with ``--log-json``, as one JSON object per line.

Once the CLI knows where its configuration lives, :func:`bind_sources`
stamps ``config_dir``, its origin and the active ``profile`` onto every
later record, so log lines from concurrent agents can be told apart.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from pimctl.config.discovery import ConfigSources

PACKAGE_LOGGER = "pimctl"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(*, log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        # Calendar and list names are often non-ASCII; keep them readable.
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route all logging through structlog's formatter.

    Safe to call more than once: handlers are replaced, not stacked, and
    previously bound context is cleared.

    Args:
        verbose: DEBUG for ``pimctl.*`` loggers; otherwise WARNING and up.
        log_json: JSON lines instead of console lines.
        stream: Destination (default: ``sys.stderr`` at call time).
    """
    stream = stream or sys.stderr

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json=log_json, stream=stream),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_sources(sources: ConfigSources) -> None:
    """Attach the resolved config location to every following log record."""
    structlog.contextvars.bind_contextvars(
        config_dir=str(sources.config_dir),
        config_dir_origin=sources.config_dir_origin,
        profile=sources.profile,
    )
