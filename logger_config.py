"""
Logging setup shared by the item handlers.

Lambda forwards stdout to CloudWatch Logs. Request context passed through
``extra=`` (correlation id, Lambda request id) is appended to each line so
one invocation can be followed across modules.
"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Record attributes rendered as key=value when set on the record
CONTEXT_FIELDS = ('correlation_id', 'request_id')


class RequestContextFormatter(logging.Formatter):
    """Formatter that appends request context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f'{field}={getattr(record, field)}'
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        ]
        if context:
            line = f"{line} [{' '.join(context)}]"
        return line


def _level_from_env() -> int:
    return getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger writing to stdout with request context.

    Args:
        name: Logger name (defaults to this module's name)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or __name__)

    # Warm invocations reuse the module, don't stack handlers
    if logger.handlers:
        return logger

    logger.setLevel(_level_from_env())

    stream = logging.StreamHandler(sys.stdout)
    stream.setLevel(logger.level)
    stream.setFormatter(RequestContextFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(stream)
    logger.propagate = False

    return logger
