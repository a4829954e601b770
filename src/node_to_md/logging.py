from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

_STRUCTLOG_CONFIGURED = False


def _configure_structlog() -> None:
    global _STRUCTLOG_CONFIGURED  # noqa: PLW0603
    if _STRUCTLOG_CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _STRUCTLOG_CONFIGURED = True


def setup_logging(filename: str | Path | None = None) -> structlog.BoundLogger:
    """Route node_to_md's JSON log lines to stderr or to a file.

    The module configures stderr logging at import time; calling this again
    with `filename` (the `--log-file` option) replaces that destination.

    Args:
        filename: Optional path to a log file. If None, logs are written to stderr.

    Returns:
        A structlog logger instance configured for the node_to_md module.
    """
    handler: logging.Handler = (
        logging.FileHandler(str(filename), encoding="utf-8") if filename else logging.StreamHandler(sys.stderr)
    )
    logging.basicConfig(
        level=logging.INFO,
        handlers=[handler],
        format="%(message)s",
        force=bool(filename),
    )
    _configure_structlog()
    return structlog.get_logger("node_to_md")


logger = setup_logging()
