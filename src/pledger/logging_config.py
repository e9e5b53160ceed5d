# pledger - Personal ledger tracker
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""Logging setup for the pledger CLI (diagnostics go to stderr)."""

import copy
import logging.config

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "simple",
        },
    },
    "loggers": {
        "pledger": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
    },
}


def configure_logging(verbose: bool = False) -> None:
    """Install the console handler; ``verbose`` lowers the level to DEBUG."""
    config = copy.deepcopy(LOGGING)
    if verbose:
        config["loggers"]["pledger"]["level"] = "DEBUG"
    logging.config.dictConfig(config)
