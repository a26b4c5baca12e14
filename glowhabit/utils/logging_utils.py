"""
Structured Logging with Session Correlation IDs.

Provides utilities for production-ready logging:
- Session ID correlation across log entries
- Structured JSON logging format
- Performance timing
"""
import json
import logging
import time
import uuid
import threading
from contextlib import contextmanager
from functools import wraps

from glowhabit import settings

logger = logging.getLogger(__name__)

# Thread-local storage for session context
_session_context = threading.local()


# ============================================================================
# SESSION ID MANAGEMENT
# ============================================================================

def get_session_id() -> str:
    """Get current session ID or generate a new one."""
    return getattr(_session_context, 'session_id', None) or str(uuid.uuid4())[:8]


def set_session_id(session_id: str):
    """Set session ID in thread-local storage."""
    _session_context.session_id = session_id


def clear_session_context():
    """Clear all session context."""
    if hasattr(_session_context, 'session_id'):
        delattr(_session_context, 'session_id')


@contextmanager
def session_context(session_id: str = None):
    """
    Scope log records to one session.

    Reuses the enclosing session when one is already set and no id is given;
    the previous id (or none) is restored on exit.

    Usage:
        with session_context() as sid:
            service.snapshot()
    """
    previous = getattr(_session_context, 'session_id', None)
    _session_context.session_id = session_id or previous or str(uuid.uuid4())[:8]
    try:
        yield _session_context.session_id
    finally:
        if previous is None:
            clear_session_context()
        else:
            _session_context.session_id = previous


# ============================================================================
# STRUCTURED LOG FORMATTER
# ============================================================================

_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'thread', 'threadName',
    'exc_info', 'exc_text', 'message', 'taskName',
))


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in format:
    {"timestamp": "...", "level": "INFO", "session_id": "abc123", "message": "..."}
    """

    def format(self, record):
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'session_id': getattr(record, 'session_id', None) or get_session_id(),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Extra fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


PLAIN_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def configure_logging(level: str = None, log_format: str = None) -> logging.Logger:
    """
    Install a single stream handler on the root logger.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        log_format: 'json' for StructuredFormatter, anything else for plain text

    Returns:
        The configured root logger
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, '_glowhabit', False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._glowhabit = True
    if log_format == 'json':
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)
    return root


# ============================================================================
# LOGGING UTILITIES
# ============================================================================

def log_with_context(level: str, message: str, **extra):
    """
    Log with current session context and extra fields.

    Usage:
        log_with_context('info', 'Journal entry saved', date='2025-01-03', manual_mood=True)
    """
    extra.setdefault('session_id', get_session_id())
    log_func = getattr(logger, level.lower(), logger.info)
    log_func(message, extra=extra)


# ============================================================================
# DECORATOR FOR FUNCTION LOGGING
# ============================================================================

def log_function_call(log_args: bool = False, log_result: bool = False):
    """
    Decorator to log function entry/exit with timing.

    Usage:
        @log_function_call(log_args=True)
        def my_function(arg1, arg2):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = f"{func.__module__}.{func.__name__}"

            if log_args:
                log_with_context('debug', f'Entering {func_name}',
                                 func_args=str(args)[:200], func_kwargs=str(kwargs)[:200])

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = (time.perf_counter() - start) * 1000
                log_with_context('error', f'Error in {func_name}: {e}',
                                 duration_ms=round(duration, 2),
                                 error_type=type(e).__name__)
                raise

            duration = (time.perf_counter() - start) * 1000
            if log_result:
                log_with_context('debug', f'Exited {func_name}',
                                 duration_ms=round(duration, 2),
                                 result=str(result)[:200])
            else:
                log_with_context('debug', f'Exited {func_name}',
                                 duration_ms=round(duration, 2))
            return result

        return wrapper
    return decorator
