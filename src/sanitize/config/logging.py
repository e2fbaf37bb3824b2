"""structlog rendering for the engine's debug trail.

The engine, the registry and the plugin loader all log through stdlib
``logging``. :func:`configure_logging` installs one structlog-formatted
handler on the root logger that renders those records for a terminal or
as JSON lines. The engine attaches ``record``, ``field`` and ``rule``
to its records; they come through as top-level keys.

Only the ``sanitize`` logger hierarchy is opened up to DEBUG by
``verbose``. Third-party loggers stay at WARNING either way.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

HANDLER_NAME = "sanitize"
TRAVERSAL_KEYS = ("record", "field", "rule")


def _shared_processors() -> list[structlog.types.Processor]:
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
    isatty = getattr(stream, "isatty", None)
    return structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route ``sanitize`` log records through structlog.

    Calling this again replaces the handler installed by the previous
    call; handlers installed by anything else are left alone.

    Args:
        verbose: Show the per-field DEBUG trail.
        log_json: Render JSON lines instead of console output.
        stream: Destination, stderr by default.

    Returns:
        The installed handler.
    """
    target = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder(allow=TRAVERSAL_KEYS)],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, target),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("sanitize").setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler
