"""structlog configuration shared by the CLI and the loading pipeline."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# matplotlib and urllib3 are chatty at debug level.
NOISY_LOGGERS = ("matplotlib", "PIL", "urllib3")


def _resolve_level(level: str) -> int:
    try:
        return LOG_LEVELS[level.lower()]
    except KeyError:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.") from None


def _processors(json_output: bool) -> list[Processor]:
    """Build the processor chain, ending with the console or JSON renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    level: str = "info",
    *,
    json_output: bool = False,
) -> None:
    """Route structlog through the stdlib root logger at ``level``.

    Logs always go to stderr so that command output on stdout (JSON summaries)
    stays machine readable.
    """
    level_value = _resolve_level(level)
    logging.basicConfig(level=level_value, format="%(message)s", stream=sys.stderr)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_session(source: str) -> None:
    """Attach the dataset source to every log line emitted during a session."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(source=source)


__all__ = ["configure_logging", "bind_session", "LOG_LEVELS"]
