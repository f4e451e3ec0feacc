"""
Structured JSON Logging Configuration for Bill Search Tool

- Machine-readable JSON format for log analysis
- Contextual information (criteria keys, file paths) for debugging
- Standard log levels with detailed messages
"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Sequence
from pathlib import Path


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs structured JSON logs

    Every ``ctx_`` prefixed attribute on the record is emitted as a
    top-level field with the prefix removed.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        for key, value in record.__dict__.items():
            if key.startswith('ctx_'):
                log_entry[key[4:]] = value

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ContextAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds contextual information to log records

    Allows attaching per-search context like the source file or criteria keys.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Add context to log record"""

        extra = kwargs.get('extra', {})

        for key, value in self.extra.items():
            extra[f'ctx_{key}'] = value

        kwargs['extra'] = extra
        return msg, kwargs


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    enable_console: bool = True,
    enable_json: bool = True
) -> None:
    """
    Setup structured logging configuration

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (None = no file logging)
        enable_console: Whether to enable console logging
        enable_json: Whether to use JSON formatting
    """

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    if enable_json:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console logs go to stderr so CLI output on stdout stays clean
    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    configure_application_loggers()


def configure_application_loggers():
    """Configure application-specific loggers with appropriate levels"""

    # External library loggers (reduce noise)
    external_loggers = {
        'uvicorn.access': logging.WARNING,
        'multipart': logging.WARNING,
        'httpx': logging.WARNING,
        'python_multipart': logging.WARNING
    }

    for logger_name, level in external_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


def get_contextual_logger(name: str, **context) -> ContextAdapter:
    """
    Get a logger with contextual information

    Example:
        logger = get_contextual_logger('search.orchestrator',
                                       criteria=['Committee'])
        logger.info("Search complete", extra={'ctx_matches': 3})
    """
    base_logger = logging.getLogger(name)
    return ContextAdapter(base_logger, context)


def log_search_stage(
    logger: logging.Logger,
    stage: str,
    input_count: int,
    output_count: int,
    criteria_keys: Sequence[str] = (),
    passed_through: bool = False
) -> None:
    """
    Log the outcome of one filter stage with standardized fields

    Args:
        logger: Logger instance
        stage: Stage name (single_search, multi_search)
        input_count: Records entering the stage
        output_count: Records surviving the stage
        criteria_keys: Criteria that were present
        passed_through: Whether the stage skipped filtering entirely
    """

    log_data = {
        'extra': {
            'ctx_stage': stage,
            'ctx_stage_input': input_count,
            'ctx_stage_output': output_count,
            'ctx_stage_criteria': list(criteria_keys),
            'ctx_stage_passed_through': passed_through
        }
    }

    if passed_through:
        message = f"{stage}: no relevant criteria, passing {input_count} records through"
    else:
        message = f"{stage}: {output_count} of {input_count} records matched"
    logger.debug(message, **log_data)


def log_file_operation(
    logger: logging.Logger,
    operation: str,
    path: str,
    record_count: int,
    duration: float,
    success: bool = True,
    error: Optional[str] = None
) -> None:
    """
    Log spreadsheet reads and writes with timing

    Args:
        logger: Logger instance
        operation: LOAD, EXPORT, STATS
        path: File path involved
        record_count: Number of rows read or written
        duration: Operation duration in seconds
        success: Whether operation succeeded
        error: Error message if operation failed
    """

    log_data = {
        'extra': {
            'ctx_file_operation': operation,
            'ctx_file_path': path,
            'ctx_file_record_count': record_count,
            'ctx_file_duration': duration,
            'ctx_file_success': success
        }
    }

    if error:
        log_data['extra']['ctx_file_error'] = error

    if success:
        message = f"{operation} completed: {record_count} rows, {path} ({duration:.3f}s)"
        logger.info(message, **log_data)
    else:
        message = f"{operation} failed: {path} - {error}"
        logger.error(message, **log_data)


def init_from_environment():
    """Initialize logging configuration from environment variables"""

    log_level = os.getenv('LOG_LEVEL', 'INFO')
    log_file = os.getenv('LOG_FILE') or None
    enable_json = os.getenv('LOG_FORMAT', 'text').lower() == 'json'

    setup_logging(
        log_level=log_level,
        log_file=log_file,
        enable_console=True,
        enable_json=enable_json
    )
