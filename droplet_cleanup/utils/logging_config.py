"""Logging configuration using AWS Lambda Powertools."""

from __future__ import annotations
import logging
import os

from aws_lambda_powertools import Logger

# Read log level from environment (default to INFO)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Sentinel log destination that keeps the default stdout handler
STDOUT_DEST = "os.Stdout"

# Structured JSON logging; the service name shows up in every record
logger = Logger(
    service="droplet-cleanup",
    level=LOG_LEVEL,
)


def get_logger():
    """Get the configured logger instance.

    Returns Powertools Logger with:
    - Structured JSON logging
    - Service name on every record
    - Extra keys passed via ``extra=`` merged into the JSON document
    """
    return logger


def configure_logging(log_dest: str = STDOUT_DEST, debug: bool = False) -> None:
    """Point the logger at its configured destination.

    ``os.Stdout`` keeps the default stream handler. Any other value is treated
    as a file path and opened in append mode, replacing the stdout handler.
    """
    logger.setLevel("DEBUG" if debug else LOG_LEVEL)

    if not log_dest or log_dest == STDOUT_DEST:
        return

    path = os.path.abspath(log_dest)
    handler = logging.FileHandler(path, mode="a")
    handler.setFormatter(logger.registered_formatter)

    logger.removeHandler(logger.registered_handler)
    logger.addHandler(handler)
    logger.debug("Logging to file", extra={"log_dest": path})
