"""JSON line logging to stderr.

Stdout belongs to the transcription output, so every log record goes to
stderr as one compact JSON object keyed by a dotted ``event`` topic.
Structlog is routed through stdlib logging from import time on, so callers
that never run ``setup_logging`` still keep stdout clean.
"""

from __future__ import annotations

import logging
import sys

import structlog

ENGINE_LOGGERS = ("faster_whisper", "ctranslate2")


def configure_structlog(log_level: int = logging.INFO) -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(separators=(",", ":")),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(level: str = "INFO") -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    configure_structlog(log_level)


def quiet_engine() -> None:
    """Silence the speech engine's own loggers below ERROR."""
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


def get_logger(name: str | None = None):
    return structlog.get_logger(name)


configure_structlog()
