#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration and utilities
"""

# Standard library imports
import io
import sys
import time
from datetime import datetime
from pathlib import Path

# Third-party imports
import logging

# Local imports
from config import (
    LOG_FILE_PATTERN,
    LOG_MAX_AGE_S,
    LOG_MAX_FILE_SIZE_MB_DEFAULT,
    LOG_SEPARATOR_WIDTH,
    LOG_TIMESTAMP_FORMAT,
    APP_NAME,
)

# Add custom TRACE logging level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

def trace(self, message, *args, **kwargs):
    """Log a trace message (ultra-detailed, below DEBUG)"""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)

# Add trace() method to Logger class
logging.Logger.trace = trace

# Global log mode (set by setup_logging)
_CURRENT_LOG_MODE = 'customer'

_FORMATS = {
    'customer': "%(_when)s | %(message)s",
    'verbose': "%(_when)s | %(levelname)-7s | %(message)s",
    'debug': "%(_when)s | %(levelname)-7s | %(name)-15s | %(funcName)-20s | %(message)s",
}

_LEVELS = {
    'customer': logging.INFO,
    'verbose': logging.DEBUG,
    'debug': TRACE,
}


def get_log_mode() -> str:
    """Get the current logging mode"""
    return _CURRENT_LOG_MODE


class SizeRotatingCompositeHandler(logging.Handler):
    """
    A handler that delegates to an inner file handler and rolls over
    to a new file when the current file size reaches a threshold.

    - Creates files as: base.ext, base.ext.1, base.ext.2, ...
    - Does not delete on rotation (retention handled separately on startup)
    """
    def __init__(self, base_path: Path, create_handler_fn, max_bytes: int):
        super().__init__()
        self.base_path = Path(base_path)
        self.create_handler_fn = create_handler_fn
        self.max_bytes = max_bytes
        self._index = 0
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)

    def _compute_current_path(self) -> Path:
        if self._index == 0:
            return self.base_path
        return self.base_path.with_name(f"{self.base_path.name}.{self._index}")

    def _maybe_rotate(self):
        current_size = self.current_path.stat().st_size if self.current_path.exists() else 0
        if current_size < self.max_bytes:
            return
        self.current_handler.close()
        self._index += 1
        self.current_path = self._compute_current_path()
        self.current_handler = self.create_handler_fn(self.current_path)
        self.current_handler.setLevel(self.level)
        self.current_handler.setFormatter(self.formatter)

    def emit(self, record):
        try:
            self._maybe_rotate()
            self.current_handler.emit(record)
        except OSError:
            self.handleError(record)

    def setFormatter(self, fmt):
        super().setFormatter(fmt)
        self.current_handler.setFormatter(fmt)

    def setLevel(self, level):
        super().setLevel(level)
        self.current_handler.setLevel(level)

    def close(self):
        self.current_handler.close()
        super().close()


class SafeStreamHandler(logging.StreamHandler):
    """A stream handler that safely handles None streams and broken pipes"""
    def __init__(self, stream=None):
        # If stream is None, write into a throwaway buffer
        if stream is None:
            stream = io.StringIO()
        super().__init__(stream)

    def emit(self, record):
        try:
            msg = self.format(record)
            self.stream.write(msg + self.terminator)
            self.stream.flush()
        except (BrokenPipeError, ValueError, OSError):
            # Stream closed under us (piped into head, detached console)
            pass


class _Fmt(logging.Formatter):
    """Console formatter stamping records with a short wall-clock time"""
    when_format = "%H:%M:%S"

    def format(self, record):
        record._when = time.strftime(self.when_format, time.localtime())
        return super().format(record)


class _FileFmt(_Fmt):
    when_format = "%Y-%m-%d %H:%M:%S"


def get_logs_dir() -> Path:
    """Directory holding session log files"""
    from .paths import get_user_data_dir
    return get_user_data_dir() / "logs"


def setup_logging(log_mode: str = 'customer', *, write_logs: bool = True):
    """
    Setup logging configuration with three modes.

    Args:
        log_mode: 'customer' (clean logs), 'verbose' (developer), or 'debug' (ultra-detailed)
        write_logs: If False, skip creating log files.

    Returns:
        Path of the session log file, or None when file logging is off.
    """
    global _CURRENT_LOG_MODE
    if log_mode not in _FORMATS:
        raise ValueError(f"Unknown log mode: {log_mode}")
    _CURRENT_LOG_MODE = log_mode

    # Logs go to stderr so recognized text on stdout stays pipeable
    output_stream = sys.stderr if sys.stderr is not None else sys.stdout
    console_handler = SafeStreamHandler(output_stream)
    console_handler.setFormatter(_Fmt(_FORMATS[log_mode]))
    console_handler.setLevel(_LEVELS[log_mode])

    file_handler = None
    log_file = None
    if write_logs:
        try:
            logs_dir = get_logs_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
            max_bytes = int(LOG_MAX_FILE_SIZE_MB_DEFAULT * 1024 * 1024)
            log_file = logs_dir / f"inkreader_{timestamp}.log"

            def _factory_plain(p: Path):
                return logging.FileHandler(p, encoding='utf-8')

            file_handler = SizeRotatingCompositeHandler(log_file, _factory_plain, max_bytes)
            file_handler.setFormatter(_FileFmt(_FORMATS[log_mode]))
            file_handler.setLevel(_LEVELS[log_mode])
        except OSError as e:
            # If file logging fails, continue without it
            file_handler = None
            log_file = None
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console_handler)
    if file_handler:
        root.addHandler(file_handler)

    # Root logger must be at TRACE so every handler sees every record it wants
    root.setLevel(TRACE)

    logger = logging.getLogger("startup")
    if log_mode == 'customer':
        if log_file:
            logger.debug(f"{APP_NAME} started (Log: {log_file.name})")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_file:
            logger.info(f"{APP_NAME} - Starting... (Log file: {log_file.name})")
        else:
            logger.info(f"{APP_NAME} - Starting... (logs disabled)")
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        if log_file:
            logger.debug(f"Log file location: {log_file.absolute()}")

    return log_file


def get_logger(name: str = "tracer") -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def cleanup_logs():
    """
    Clean up old log files based on age.

    Deletes logs older than LOG_MAX_AGE_S; no limit on file count or total size.
    """
    logs_dir = get_logs_dir()
    if not logs_dir.exists():
        return

    now = time.time()
    for log_file in logs_dir.glob(f"{LOG_FILE_PATTERN}*"):
        try:
            if now - log_file.stat().st_mtime > LOG_MAX_AGE_S:
                log_file.unlink()
        except OSError as e:
            # Don't log this error to avoid recursion
            print(f"Warning: Failed to remove old log {log_file.name}: {e}", file=sys.stderr)


# ==================== Pretty Logging Helpers ====================

def log_section(logger: logging.Logger, title: str, icon: str = "📌", details: dict = None, mode: str = None):
    """
    Log a section with title and optional details

    Args:
        logger: Logger instance
        title: Main title text (will be uppercased in verbose/debug mode)
        icon: Emoji icon to use
        details: Optional dict of key-value pairs to display
        mode: 'customer' (simple), 'verbose' (detailed), or 'debug' (ultra-detailed).
              If None, uses current global log mode.

    Example:
        log_section(log, "Language Loaded", "🔤", {"Language": "English", "Templates": 42})
    """
    if mode is None:
        mode = get_log_mode()

    if mode == 'customer':
        if details:
            detail_str = ", ".join(f"{k}: {v}" for k, v in details.items())
            logger.info(f"{icon} {title} ({detail_str})")
        else:
            logger.info(f"{icon} {title}")
    else:
        logger.info("=" * LOG_SEPARATOR_WIDTH)
        logger.info(f"{icon} {title.upper()}")
        if details:
            for key, value in details.items():
                logger.info(f"   📋 {key}: {value}")
        logger.info("=" * LOG_SEPARATOR_WIDTH)


def log_success(logger: logging.Logger, message: str, icon: str = "✅"):
    """
    Log a success message

    Example:
        log_success(log, "Recognized 3 characters")
    """
    logger.info(f"{icon} {message}")


def log_status(logger: logging.Logger, status: str, value, icon: str = "ℹ️"):
    """
    Log a status update

    Example:
        log_status(log, "Language", "English", "🔤")
    """
    logger.info(f"{icon} {status}: {value}")
