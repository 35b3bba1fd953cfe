import logging
import sys

from pythonjsonlogger import jsonlogger

SDK_LOGGER_NAME = "oss2"


def setup_logging():
    """
    Configures and sets up structured JSON logging for a host application.

    This function initializes a JSON formatter that includes timestamp, level,
    logger name, message, trace_id, and span_id. It replaces the default handlers
    of the root logger with a single stdout stream handler.

    The library itself never calls this and only logs through module loggers.
    It is shipped so a host application can opt into the same JSON format for
    storage operation events and its own logs.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    return root_logger


def silence_sdk_logging() -> logging.Logger:
    """
    Routes the OSS SDK's diagnostic logger to a null sink.

    Safe to call repeatedly; the null handler is attached only once.

    Returns:
        logging.Logger: The SDK logger.
    """
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in sdk_logger.handlers):
        sdk_logger.addHandler(logging.NullHandler())
    sdk_logger.propagate = False
    return sdk_logger
