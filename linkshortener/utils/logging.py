"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the entry point (see `linkshortener.cli.app`)
before any other logging is done.

Records go to stderr so they never interleave with the shell's own output
on stdout. Two formats are available, picked by `LOG_FORMAT`:

json (default):
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshortener.lifecycle.engine",
    "message": "Swept expired links.",
    "removed": 3
}

text:
    2025-12-26 12:00:00,000 INFO linkshortener.lifecycle.engine: Swept expired links.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, `extra` fields included"""

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec='milliseconds') \
                            .replace('+00:00', 'Z')
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # datetimes, enums and other non-JSON extras are logged as their str()
        return json.dumps(log, default=str)


FORMATTERS = {
    'json': {'()': JsonFormatter},
    'text': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
}


def initialize_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level (str, optional): log level name. Falls back to `LOG_LEVEL`, then INFO.
        fmt (str, optional): 'json' or 'text'. Falls back to `LOG_FORMAT`, then json.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    log_format = (fmt or os.getenv(ENV.App.LOG_FORMAT) or 'json').lower()
    if log_format not in FORMATTERS:
        log_format = 'json'

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {log_format: FORMATTERS[log_format]},
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': log_format,
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
