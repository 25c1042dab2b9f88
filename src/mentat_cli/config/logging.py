"""Logging for the mentat-cli shell.

Records go to stderr so they never interleave with results on stdout.
The console renderer is the default; ``--log-json`` emits one JSON
object per line. While a store is open its path is bound into the
structlog context, so every record logged in the meantime carries a
``store`` key, including records from plain stdlib loggers.
"""

from __future__ import annotations

import logging
import sys

import structlog

HANDLER_NAME = "mentat_cli"

# Libraries that log chattily at INFO/DEBUG.
_QUIET_LOGGERS = ("sqlalchemy", "pluggy")


def bind_store(path: str) -> None:
    """Tag subsequent log records with the open store's *path*."""
    structlog.contextvars.bind_contextvars(store=path)


def unbind_store() -> None:
    structlog.contextvars.unbind_contextvars("store")


def _pre_chain(*, log_json: bool) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        # Console lines share the terminal with the prompt and stay unstamped.
        chain.append(structlog.processors.TimeStamper(fmt="iso"))
        chain.append(structlog.processors.format_exc_info)
    return chain


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Send stdlib and structlog records through one stderr handler.

    Calling again replaces the handler installed by the previous call
    and leaves any other root handlers alone.

    Args:
        verbose: Let ``mentat_cli`` records through from DEBUG up.
            Otherwise only WARNING and above are shown.
        log_json: Render JSON lines instead of console output.
    """
    pre_chain = _pre_chain(log_json=log_json)

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for previous in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(previous)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("mentat_cli").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
