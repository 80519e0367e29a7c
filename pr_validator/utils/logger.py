# Logger Configuration Utility

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import ValidationError
from pythonjsonlogger import jsonlogger

from pr_validator.config.settings import Settings, get_settings

# Logger cache to avoid recreating loggers
_loggers: Dict[str, logging.Logger] = {}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname

        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        log_record['environment'] = _logging_settings().ENVIRONMENT

        # Add custom fields if present
        if hasattr(record, 'extra_fields'):
            log_record.update(record.extra_fields)


def _logging_settings() -> Settings:
    """Settings for logger setup, falling back to defaults when the environment is invalid"""
    try:
        return get_settings()
    except ValidationError:
        # The command that loads the settings reports the error
        return Settings.model_construct()


class ContextFilter(logging.Filter):
    """Filter to add context information to log records"""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.context = context or {}

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context to log record"""
        for key, value in self.context.items():
            setattr(record, key, value)
        return True


def setup_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Set up a logger with the specified name and context

    Args:
        name: Logger name (usually module name)
        context: Additional context to include in all logs

    Returns:
        Configured logger instance
    """
    if name in _loggers and not context:
        return _loggers[name]

    settings = _logging_settings()
    logger = logging.getLogger(name)

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    # Annotations go to stdout, so logs stay on stderr
    console_handler = logging.StreamHandler(sys.stderr)

    if settings.ENVIRONMENT == "production":
        json_formatter = CustomJsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            json_ensure_ascii=False
        )
        console_handler.setFormatter(json_formatter)
    else:
        formatter = logging.Formatter(
            settings.LOG_FORMAT,
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        try:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(settings.LOG_FILE)

            # Always use JSON format for file logs
            json_formatter = CustomJsonFormatter(
                '%(timestamp)s %(level)s %(name)s %(message)s',
                json_ensure_ascii=False
            )
            file_handler.setFormatter(json_formatter)

            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Failed to set up file logging: {str(e)}")

    if context:
        logger.addFilter(ContextFilter(context))

    if not context:
        _loggers[name] = logger

    logger.propagate = False

    return logger


def log_exception(logger: logging.Logger, exception: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Log an exception with full stack trace

    Args:
        logger: Logger instance
        exception: Exception to log
        context: Additional context information
    """
    extra = {
        'exception_type': type(exception).__name__,
        'exception_message': str(exception),
        'extra_fields': context or {}
    }

    logger.error(
        f"Exception occurred: {type(exception).__name__}: {str(exception)}",
        exc_info=True,
        extra=extra
    )


def log_validation_result(logger: logging.Logger, pr_id: str, result: Dict[str, Any]):
    """
    Log validation result with structured data

    Args:
        logger: Logger instance
        pr_id: Pull request number or identifier
        result: Danger results dictionary
    """
    fails = len(result.get('fails', []))
    warnings = len(result.get('warnings', []))
    extra = {
        'pr_id': pr_id,
        'fails': fails,
        'warnings': warnings,
        'messages': len(result.get('messages', [])),
        'extra_fields': {
            'markdowns': len(result.get('markdowns', []))
        }
    }

    status = "FAILED" if fails else "PASSED"
    logger.info(
        f"Validation {status} for PR {pr_id}: {fails} failure(s), {warnings} warning(s)",
        extra=extra
    )


class LogContext:
    """Context manager for temporary logging context"""

    def __init__(self, logger: logging.Logger, **kwargs):
        self.logger = logger
        self.context = kwargs
        self._filter: Optional[ContextFilter] = None

    def __enter__(self):
        """Add context filter"""
        self._filter = ContextFilter(self.context)
        self.logger.addFilter(self._filter)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Remove context filter"""
        if self._filter is not None:
            self.logger.removeFilter(self._filter)
            self._filter = None
