"""Loguru logging configuration.

Logs to stderr as text, or as one JSON object per line when ``json_logs``
is set.  Optionally writes to a rotating log file when a ``log_dir`` is
provided.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, *, json_logs: bool = False) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
        json_logs: Serialize stderr records as JSON for log shippers.
    """
    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=log_level.upper(), serialize=True)
    else:
        logger.add(sys.stderr, level=log_level.upper(), format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "locationiq-geocoder.log",
            level=log_level.upper(),
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
