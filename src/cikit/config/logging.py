"""Log routing for cikit targets.

Every record, from cikit or a library, goes through structlog's
ProcessorFormatter onto stderr next to the forwarded go/docker output, so
stdout keeps only the target's result. ``-v`` opens the ``cikit`` loggers to
DEBUG (the exact commands run, resolved build info); ``--log-json`` switches
to one JSON object per line for CI log collectors. Lines logged while a
target runs carry ``target=<name>``.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Install the stderr handler; safe to call again for each invocation.

    Args:
        verbose: Show cikit's DEBUG records (commands and build info).
        log_json: Render JSON lines instead of the console format.
    """
    cikit_level = logging.DEBUG if verbose else logging.WARNING

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("cikit").setLevel(cikit_level)
    # requests/urllib3 log every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def bind_target(target: str) -> None:
    """Tag every following log line with the name of the running target."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(target=target)
