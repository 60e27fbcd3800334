"""Process-wide logging setup.

Modules log through logging.getLogger(__name__); setup_logging() installs a
single console handler and format for the root logger and the ``src``
package loggers.
"""

import logging
import logging.config

from src.infrastructure.config import Settings, get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the logging configuration, at the level from Settings.log_level."""
    settings = settings or get_settings()
    log_level = settings.log_level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": LOG_FORMAT,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "src": {
                    "handlers": ["console"],
                    "level": log_level,
                    "propagate": False,
                },
            },
            "root": {
                "handlers": ["console"],
                "level": log_level,
            },
        }
    )
