"""
Structured logging for the matching engine
"""
import json
import logging
import os
import time
import traceback
from datetime import datetime
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Any, Optional

from ..settings import config


class StructuredLogger:
    """Structured logger with JSON entries"""

    def __init__(self, name: str, log_dir: Optional[str] = None):
        self.name = name
        self.log_dir = Path(log_dir or config.log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if config.debug_mode else logging.INFO)

        # Avoid duplicate handlers when the same name is requested twice
        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self):
        """Console handler for operators, rotating JSON file for troubleshooting"""
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        self.logger.addHandler(console_handler)

        log_file = self.log_dir / f"{self.name}.log"
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10*1024*1024, backupCount=5  # 10MB per file, 5 backups
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter())
        self.logger.addHandler(file_handler)

    def _create_log_entry(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        entry = {
            'timestamp': datetime.utcnow().isoformat(),
            'level': level,
            'logger': self.name,
            'message': message,
            'process_id': os.getpid(),
        }
        entry.update(kwargs)
        return entry

    def _dump(self, entry: Dict[str, Any]) -> str:
        return json.dumps(entry, default=str)

    def info(self, message: str, **kwargs):
        self.logger.info(self._dump(self._create_log_entry('INFO', message, **kwargs)))

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._dump(self._create_log_entry('DEBUG', message, **kwargs)))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._dump(self._create_log_entry('WARNING', message, **kwargs)))

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Error-level logging with exception support"""
        entry = self._create_log_entry('ERROR', message, **kwargs)

        if exception:
            entry['exception'] = {
                'type': type(exception).__name__,
                'message': str(exception),
                'traceback': traceback.format_exc()
            }

        self.logger.error(self._dump(entry))

    def critical(self, message: str, exception: Optional[Exception] = None, **kwargs):
        entry = self._create_log_entry('CRITICAL', message, **kwargs)

        if exception:
            entry['exception'] = {
                'type': type(exception).__name__,
                'message': str(exception),
                'traceback': traceback.format_exc()
            }

        self.logger.critical(self._dump(entry))


class StructuredFormatter(logging.Formatter):
    """Formatter that passes JSON entries through and wraps plain records"""

    def format(self, record):
        try:
            json.loads(record.getMessage())
            return record.getMessage()
        except (json.JSONDecodeError, ValueError):
            entry = {
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
                'module': record.module,
                'function': record.funcName,
                'line': record.lineno,
                'process_id': os.getpid()
            }
            return json.dumps(entry)


_loggers = {}


def get_logger(name: str = 'autoorganizer') -> StructuredLogger:
    """Fetch or create a logger instance"""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def log_performance(operation: str):
    """Decorator that logs duration and outcome of an operation"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger('performance')
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.time() - start_time
                logger.error(f"Operation failed: {operation}",
                             operation=operation,
                             duration=duration,
                             status='error',
                             exception=e)
                raise

            duration = time.time() - start_time
            logger.info(f"Operation completed: {operation}",
                        operation=operation,
                        duration=duration,
                        status='success')
            return result

        return wrapper
    return decorator
