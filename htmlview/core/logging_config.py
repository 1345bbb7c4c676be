"""
Logging configuration for the htmlview application
"""

import logging
import logging.config
import sys
import os
from typing import Optional


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """
    Setup logging configuration for the application

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path. If None, logs only to console
    """
    log_level = log_level.upper()

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    detailed_format = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s"

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': log_level,
            'formatter': 'standard',
            'stream': sys.stdout
        }
    }

    formatters = {
        'standard': {
            'format': log_format,
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': detailed_format,
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    }

    if log_file:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',  # Always log debug to file
            'formatter': 'detailed',
            'filename': log_file,
            'maxBytes': 10 * 1024 * 1024,  # 10MB
            'backupCount': 5,
            'encoding': 'utf-8'
        }

    handler_names = ['console'] + (['file'] if log_file else [])

    loggers = {
        '': {  # Root logger
            'level': log_level,
            'handlers': handler_names,
            'propagate': False
        },
        'httpx': {
            'level': 'WARNING',  # Reduce HTTP client noise
            'handlers': handler_names,
            'propagate': False
        },
        'httpcore': {
            'level': 'WARNING',
            'handlers': handler_names,
            'propagate': False
        }
    }

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': handlers,
        'loggers': loggers
    }

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - Level: {log_level}, File: {log_file or 'Console only'}")
