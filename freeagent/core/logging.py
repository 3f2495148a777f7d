"""Logging for the client.

Everything logs under the ``freeagent`` logger. ``setup_logging`` gives that
logger its own console handler and leaves the root logger, and every other
library's logger, to the application.
"""

import logging
import sys
from typing import IO, Any, Optional

from freeagent.core.config import FreeAgentSettings, settings as default_settings

LIBRARY_LOGGER = "freeagent"
CONSOLE_HANDLER_NAME = "freeagent-console"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(
    settings: Optional[FreeAgentSettings] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Send client logs to the console.

    The level follows ``settings.debug``. Calling it again swaps the console
    handler instead of stacking a second one. Records stop at the
    ``freeagent`` logger, so they are not printed twice when the application
    also logs from the root.

    Args:
        settings: Client settings; defaults to the environment-loaded ones.
        stream: Where to write; defaults to ``sys.stderr``.

    Returns:
        The configured ``freeagent`` logger
    """
    settings = settings or default_settings
    log_level = logging.DEBUG if settings.debug else logging.INFO

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(log_level)

    for handler in library_logger.handlers[:]:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            library_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    library_logger.addHandler(console_handler)
    library_logger.propagate = False

    return library_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``freeagent`` namespace.

    Module names already inside the package are used as-is.
    """
    if name == LIBRARY_LOGGER or name.startswith(f"{LIBRARY_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LIBRARY_LOGGER}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Appends ``key=value`` context to every message.

    ``LoggerAdapter(logger, {"resource": "invoices"}).debug("Cache miss")``
    logs ``"Cache miss - resource=invoices"``.
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = " - ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} - {extra}" if extra else msg, kwargs
