"""
Logging configuration for the hostel room service.
Provides structured logging with different handlers and formatters.
"""

import os
import logging
import logging.config
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

from hostel_rooms.config.settings import Settings, settings as default_settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = default_settings.ENVIRONMENT

        # Request and room context passed through `extra=`
        for key in ('request_id', 'room_number', 'bed_letter', 'student_id'):
            if hasattr(record, key):
                log_record[key] = getattr(record, key)

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


def build_logging_config(config: Settings) -> Dict[str, Any]:
    """Create the dictConfig mapping for the given settings."""
    handlers: Dict[str, Dict[str, Any]] = {
        'console': {
            'level': 'DEBUG' if config.DEBUG else 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'colored' if config.is_development() else 'standard'
        },
    }
    active = ['console']

    if config.LOG_TO_FILE:
        handlers['file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'app.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'standard',
            'encoding': 'utf8'
        }
        handlers['json_file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'app.json.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'json',
            'encoding': 'utf8'
        }
        active += ['file', 'json_file']

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
            },
            'colored': {
                '()': 'colorlog.ColoredFormatter',
                'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            }
        },
        'handlers': handlers,
        'loggers': {
            'hostel_rooms': {
                'handlers': active,
                'level': config.LOG_LEVEL,
                'propagate': False
            },
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': False
            },
            'uvicorn': {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False
            },
        }
    }


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure application logging"""
    config = config or default_settings
    if config.LOG_TO_FILE:
        os.makedirs(config.LOG_DIR, exist_ok=True)
    logging.config.dictConfig(build_logging_config(config))
    logger = logging.getLogger("hostel_rooms")
    logger.info(f"Logging initialized with level: {config.LOG_LEVEL}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger with context"""
    return logging.getLogger(name)
