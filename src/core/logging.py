"""
Structured logging configuration for the Stock Quote Normalizer.
Provides JSON logging for production and human-readable logging for development.
"""

import json
import os
import sys
from typing import Any

from loguru import logger


def json_formatter(record: dict[str, Any]) -> str:
    """
    Format log records as JSON for production/CloudWatch.

    The serialized entry is stashed in ``extra`` and referenced from the
    returned template, since loguru treats the return value as a format string.
    """
    log_entry = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    # Bound context such as symbol or upstream status
    for key, value in record["extra"].items():
        if key not in log_entry and key != "serialized":
            log_entry[key] = value

    record["extra"]["serialized"] = json.dumps(log_entry, default=str)
    return "{extra[serialized]}\n"


def human_formatter(record: dict[str, Any]) -> str:
    """
    Format log records for human readability in development.
    """
    symbol = " [{extra[symbol]}]" if "symbol" in record["extra"] else ""
    return (
        "<green>{time:HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{symbol} | "
        "<level>{message}</level>\n"
    )


def configure_logging(
    level: str = "INFO",
    json_output: bool = None,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Force JSON output. If None, auto-detect based on environment.
    """
    logger.remove()

    if json_output is None:
        json_output = bool(
            os.environ.get("AWS_LAMBDA_FUNCTION_NAME") or
            os.environ.get("LOG_FORMAT") == "json"
        )

    if json_output:
        logger.add(
            sys.stderr,
            format=json_formatter,
            level=level,
            serialize=False,
        )
    else:
        logger.add(
            sys.stderr,
            format=human_formatter,
            level=level,
            colorize=True,
        )

    logger.debug(f"Logging configured: level={level}, json={json_output}")


def get_logger(symbol: str = None):
    """
    Get a logger instance, optionally bound to a ticker symbol.

    Args:
        symbol: Canonical symbol to attach to every record

    Returns:
        Logger instance
    """
    if symbol:
        return logger.bind(symbol=symbol)
    return logger


# Auto-configure on import if in Lambda
if os.environ.get("AWS_LAMBDA_FUNCTION_NAME"):
    configure_logging(level="INFO", json_output=True)
