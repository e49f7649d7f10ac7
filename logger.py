"""
Deck Tracker - Logging System
Centralized logging configuration with multiple handlers
"""
import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from functools import wraps
import traceback
import json

APP_LOGGER_NAME = 'Deck Tracker'

# Base directory for logs
BASE_DIR = Path(__file__).parent
LOG_DIR = Path(os.environ.get('DECK_TRACKER_LOG_DIR', BASE_DIR / 'logs'))
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Log levels
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-24s | %(funcName)-20s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info) if record.exc_info[0] else None
            }

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so file handlers sharing the record keep plain level names
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _rotating_handler(filename: str, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """
    Setup and configure a logger with multiple handlers

    Args:
        name: Logger name (default: 'Deck Tracker')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.DEBUG))
    logger.propagate = False

    # Console: warnings and errors only
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(console_handler)

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logger.addHandler(_rotating_handler('deck_tracker.log', logging.DEBUG, file_formatter))
    logger.addHandler(_rotating_handler('errors.log', logging.ERROR, file_formatter))
    logger.addHandler(_rotating_handler('deck_tracker.json.log', logging.INFO, JSONFormatter()))

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a child logger for a specific module

    Args:
        name: Module name (will be prefixed with 'Deck Tracker.')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f'{APP_LOGGER_NAME}.{name}')
    return logging.getLogger(APP_LOGGER_NAME)


def log_function_call(logger: logging.Logger = None):
    """
    Decorator to log function entry, exit and errors

    Args:
        logger: Optional logger instance
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            func_name = func.__name__

            _logger.debug(f"ENTER {func_name} | args={args[1:] if args else ()} | kwargs={kwargs}")

            try:
                result = func(*args, **kwargs)
                _logger.debug(f"EXIT {func_name} | result_type={type(result).__name__}")
                return result
            except Exception as e:
                _logger.error(f"ERROR in {func_name}: {str(e)}", exc_info=True)
                raise
        return wrapper
    return decorator


class PerformanceLogger:
    """Context manager for logging performance metrics"""

    def __init__(self, operation: str, logger: logging.Logger = None):
        self.operation = operation
        self.logger = logger or get_logger('performance')
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"START | {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.start_time

        if exc_type:
            self.logger.error(f"FAILED | {self.operation} | elapsed={elapsed:.4f}s | error={exc_val}")
        else:
            self.logger.info(f"COMPLETED | {self.operation} | elapsed={elapsed:.4f}s")

        return False  # Don't suppress exceptions


# Initialize main logger on import
_main_logger = setup_logger(APP_LOGGER_NAME)
