#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Initialization setup (logging)
"""

import argparse

from utils.logging import cleanup_logs, get_logger, log_section, setup_logging

log = get_logger()


def setup_logging_and_cleanup(args: argparse.Namespace) -> str:
    """Setup logging and clean up old logs; returns the log mode in use"""
    # Clean up old log files on startup
    if args.write_logs:
        cleanup_logs()

    # Determine log mode based on flags
    if args.debug:
        log_mode = 'debug'
    elif args.verbose:
        log_mode = 'verbose'
    else:
        log_mode = 'customer'

    setup_logging(log_mode, write_logs=args.write_logs)

    # Customer mode keeps the console quiet apart from warnings and results
    if log_mode != 'customer':
        log_section(log, "InkReader Starting", "🚀", {
            "Language": args.language,
            "Background": args.background,
            "Match Policy": args.match_policy,
            "Images": len(args.images),
        })
    return log_mode
