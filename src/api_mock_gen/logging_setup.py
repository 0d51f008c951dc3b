"""Central logging configuration for the CLI.

Applies a root stderr handler so module loggers emit without per-module
setup, and generated source written to stdout stays clean.
"""

import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(levelname)s:%(name)s:%(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
}


def configure_logging(verbose: bool = False) -> None:
    """Configure application-wide logging once.

    The package logger level follows ``verbose``. If the root logger
    already has handlers, they are left alone to prevent duplicate output.
    """
    root = logging.getLogger()
    if not root.handlers:
        dictConfig(_DICT_CONFIG)
    logging.getLogger("api_mock_gen").setLevel(logging.DEBUG if verbose else logging.INFO)
