"""structlog configuration for importmap-resolve.

Log lines go to stderr so resolved URLs on stdout stay pipeable.

- Human (default): console renderer, colored only on a TTY
- JSON (``--log-json``): one JSON object per line

Both stdlib loggers (``logging.getLogger(__name__)`` in the domain and
service layers) and structlog loggers share one ``ProcessorFormatter``, so
context bound with ``structlog.contextvars`` (the active referrer, for
instance) appears on every line either way.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "importmap_resolve"

# Third-party loggers that are noisy at DEBUG.
_QUIET_LOGGERS = ("pluggy",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all package logging through structlog to stderr.

    Args:
        verbose: Let ``importmap_resolve.*`` emit DEBUG records. Otherwise
            only WARNING and above are shown.
        log_json: Render JSON lines instead of console text.

    Safe to call repeatedly: the root handler is replaced, not stacked.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
