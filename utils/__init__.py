#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utils Package - Utility functions and helpers

- logging: log setup, the shared "tracer" logger and pretty helpers
- paths: user data directory resolution
"""

from utils.paths import get_user_data_dir


# Lazy imports for logging helpers (utils.logging pulls in config at import time)
def __getattr__(name):
    """Lazy import for logging helpers"""
    if name in {
        'get_logger', 'setup_logging', 'log_section', 'log_success',
        'log_status', 'get_log_mode', 'cleanup_logs'
    }:
        from utils import logging as _logging
        return getattr(_logging, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'get_user_data_dir',
    'get_logger', 'setup_logging', 'log_section', 'log_success',
    'log_status', 'get_log_mode', 'cleanup_logs',
]
