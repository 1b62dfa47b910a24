"""Loguru logging configuration.

One stderr sink, human-readable by default or serialized JSON with
``json_logs=True``. Every record carries the deployment ``environment`` in its
extras. When a ``log_dir`` is given, all records also go to a rotating
``election-api.log`` and warnings and above to ``election-api.error.log``.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[environment]} | {name}:{function}:{line} | {message}"
)


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    *,
    json_logs: bool = False,
    environment: str = "production",
) -> None:
    """Configure Loguru sinks, replacing any existing ones.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files, rotated every 24 hours
            and retained 7 days.
        json_logs: Serialize stderr records as JSON.
        environment: Deployment name bound to every record.
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"environment": environment})

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        for filename, file_level in (("election-api.log", level), ("election-api.error.log", "WARNING")):
            logger.add(
                log_path / filename,
                level=file_level,
                format=_LOG_FORMAT,
                rotation="24h",
                retention="7 days",
            )
