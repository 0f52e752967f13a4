"""Logging configuration, called once by the CLI entrypoint.

Every module does ``logger = logging.getLogger(__name__)`` and inherits this.

Level precedence: CLI flag > CLAUDE_QUEST_LOG_LEVEL env var > INFO.
"""

import logging
import sys

ENV_LOG_LEVEL = "CLAUDE_QUEST_LOG_LEVEL"

# INFO and above: progress lines only
_FMT_MINIMAL = "%(message)s"

# DEBUG: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

_NOISY_LOGGERS = ("httpx", "httpcore")


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO") -> None:
    """Configure process-wide logging to stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    else:
        formatter = logging.Formatter(_FMT_MINIMAL)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(numeric_level)

    third_party_level = numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
