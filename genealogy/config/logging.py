"""structlog wiring for the genealogy package.

The store logs through stdlib loggers under ``genealogy``; this module
installs one stderr handler on that logger that renders structlog event
dicts either as console text or as JSON lines. The root logger and any
handlers the host application owns are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from genealogy.config.settings import GenealogySettings

LOGGER_NAME = "genealogy"
HANDLER_NAME = "genealogy-structlog"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to every event before rendering."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _install_handler(package_logger: logging.Logger, handler: logging.Handler) -> None:
    # Replace only the handler installed by an earlier call
    for existing in list(package_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            package_logger.removeHandler(existing)
    handler.set_name(HANDLER_NAME)
    package_logger.addHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route genealogy events to stderr.

    Args:
        verbose: Show the store's DEBUG events. When False, only WARNING+.
        log_json: Render JSON lines instead of console text.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    _install_handler(package_logger, handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def configure_from_settings(settings: GenealogySettings) -> None:
    """Configure logging from a settings object."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
