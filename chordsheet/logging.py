from __future__ import annotations

import logging
import sys

import structlog


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time (click and pytest swap it)."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _get_processors(json: bool) -> list:
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(level: int | str = logging.WARNING, json: bool = False) -> None:
    """
    Log to stderr so rendered sheets on stdout stay clean (idempotent).

    *level* accepts a logging constant or a name such as "DEBUG".
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.WARNING

    root_logger = logging.getLogger()
    if not any(isinstance(h, _StderrHandler) for h in root_logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.configure(
        processors=_get_processors(json),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Library default until setup_logging runs: warnings and above through stdlib
# logging (stderr), never structlog's stdout printer.
if not structlog.is_configured():
    structlog.configure(
        processors=_get_processors(json=False),
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

log = structlog.get_logger()
