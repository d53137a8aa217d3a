#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line argument parsing
"""

import argparse
from typing import List, Optional

from config import (
    APP_VERSION,
    DEFAULT_BACKGROUND,
    DEFAULT_LANGUAGE,
    DEFAULT_MATCH_POLICY,
    DEFAULT_VERBOSE,
    DEFAULT_WRITE_LOGS,
)


def setup_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and return command line arguments"""
    ap = argparse.ArgumentParser(
        description="InkReader - read a line of handwriting from an image"
    )

    ap.add_argument("images", nargs="*", metavar="IMAGE",
                   help="Image files to read (one recognized line is printed per image)")

    # Recognition arguments
    ap.add_argument("--language", type=str, default=DEFAULT_LANGUAGE,
                   help="Language pack to read with (default: %(default)s)")
    ap.add_argument("--background", type=str, default=",".join(str(c) for c in DEFAULT_BACKGROUND),
                   help="Background color as 'r,g,b', '#rrggbb' or a name (default: %(default)s)")
    ap.add_argument("--match-policy", choices=["exact", "any_cell"], default=DEFAULT_MATCH_POLICY,
                   help="Glyph matching rule (default: %(default)s)")
    ap.add_argument("--languages-dir", type=str, default=None,
                   help="Directory holding <language>.txt packs")
    ap.add_argument("--list-languages", action="store_true", default=False,
                   help="List available language packs and exit")
    ap.add_argument("--debug-output", type=str, default=None, metavar="DIR",
                   help="Write a segmentation visualization per image into DIR")

    # General arguments
    ap.add_argument("--verbose", action="store_true", default=DEFAULT_VERBOSE,
                   help="Enable verbose logging (developer mode - shows all technical details)")
    ap.add_argument("--debug", action="store_true", default=False,
                   help="Enable ultra-detailed debug logging (per-column and per-cell traces)")
    ap.add_argument("--no-log-file", action="store_false", dest="write_logs", default=DEFAULT_WRITE_LOGS,
                   help="Do not write a session log file")
    ap.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    return ap.parse_args(argv)
