"""Logging setup for scripts and sample programs"""

import logging
import sys
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    stream=None,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger

    The library never installs handlers on import; call this from
    application code when log output is wanted.

    Args:
        level: Logging level (name or number)
        stream: Output stream, stderr by default
        fmt: Log format string

    Returns:
        The configured ``api_call`` logger
    """
    logger = logging.getLogger("api_call")
    logger.setLevel(level)

    # Avoid stacking handlers on repeated calls
    for handler in list(logger.handlers):
        if getattr(handler, "_api_call_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or LOG_FORMAT))
    handler._api_call_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    return logger
