"""
Structured logging for happycamper

Operational log lines (what the pipeline is doing, how long it took) go
through python-json-logger on stderr, so stdout stays free for the command
report. User-facing diagnostics about roster data belong in the
WarningManager instead.

Only the package logger "happycamper" gets a handler. Module loggers from
get_logger(__name__) are its children and inherit it.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

PACKAGE_LOGGER = "happycamper"

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(funcName)s - %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with a fixed envelope: timestamp, level, logger, module, function
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = log_record.get("timestamp") or self.formatTime(record, self.datefmt)
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Replaces any handler the logger already has, so calling this again
    (for example from the CLI after parsing --log-level) reconfigures it.

    Args:
        name: Logger name
        level: Level name; falls back to LOG_LEVEL, then INFO
        format_type: "json" or "text"; falls back to LOG_FORMAT, then json

    Returns:
        Configured logger instance
    """
    log_level = _resolve_level(level)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    if format_type == "text":
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = CustomJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger, configuring the package logger on first use

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Logger instance
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        setup_logger()
    return logging.getLogger(name)


class log_operation:
    """
    Context manager that logs the start, end and duration of a step

    The duration stays available on the instance after the block exits.
    Exceptions are logged with their traceback and re-raised.

    Usage:
        with log_operation("Importing rosters", logger=logger, camper_file="campers.csv") as op:
            ...
        record_duration(op.duration)
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.duration: float = 0.0
        self._started: float | None = None

    def _fields(self, **fields) -> dict:
        return {"operation": self.operation_name, **fields, **self.extra_fields}

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"Starting: {self.operation_name}", extra=self._fields())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self._started
        elapsed = round(self.duration, 3)

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra=self._fields(duration_seconds=elapsed, status="success"),
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra=self._fields(
                    duration_seconds=elapsed,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
                exc_info=(exc_type, exc_val, exc_tb),
            )
        return False
