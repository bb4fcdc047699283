"""Application-wide JSON logging

IMPORTANT: Call `initialize_logging()` in the lambda package's `__init__.py` file
before any other logging is done.

Every record is one JSON object per line. Besides the standard fields, any
`extra={...}` passed to the logger is copied into the object. precis uses:

    shortcode   the custom alias or hash-derived code being handled
    event       a precis.constants.LogEvent, e.g. "SHORTEN_SUCCESS"
    lambdaName  lambda whose configuration is loaded (utils.config)

Example:
    >>> logger.info('Saved custom alias short URL.', extra={'shortcode': 'my-link', 'event': LogEvent.SHORTEN_SUCCESS})
    {"timestamp": "2026-01-01T12:00:00.000Z", "level": "INFO", "logger": "precis.services.shortening_service",
     "message": "Saved custom alias short URL.", "shortcode": "my-link", "event": "SHORTEN_SUCCESS"}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from precis.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render LogRecords (and their `extra` fields) as single-line JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # default=str covers datetimes and exceptions passed as extras
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Send JSON logs to stdout (CloudWatch) at LOG_LEVEL (default INFO)."""
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
