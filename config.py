#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Global constants for InkReader
All arbitrary values are centralized here for easy tracking and modification
"""

import os
from pathlib import Path

# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_NAME = "InkReader"
APP_VERSION = "0.1.0"


# =============================================================================
# CHARACTER RECOGNITION CONSTANTS
# =============================================================================

# Every character is boxed in the smallest square holding its ink and scaled
# down to SCALE_SIZE x SCALE_SIZE cells before lookup
SCALE_SIZE = 9

# Column spans narrower than this are treated as noise (antialiasing, specks)
MIN_SPAN_WIDTH = 2

# Emitted for a glyph that matches no template
UNKNOWN_CHARACTER = "?"

# Matching rule: "any_cell" (first ink cell that is a trained coordinate
# decides, which is how one-cell language packs are read) or "exact" (whole
# pattern must be a key)
DEFAULT_MATCH_POLICY = "any_cell"


# =============================================================================
# LANGUAGE PACKS
# =============================================================================

DEFAULT_LANGUAGE = "English"
LANGUAGE_FILE_SUFFIX = ".txt"
LANGUAGE_FILE_ENCODING = "utf-8"

LANGUAGE_RECORD_SEPARATOR = "\t"      # Between tokens of one record
LANGUAGE_COORD_SEPARATOR = ", "       # Between x and y of a coordinate token

# Shipped packs live next to the recognition package; READER_LANGUAGES_DIR overrides
LANGUAGES_DIR = Path(
    os.environ.get(
        "READER_LANGUAGES_DIR",
        Path(__file__).resolve().parent / "character_recognition" / "languages",
    )
)


# =============================================================================
# COLORS
# =============================================================================

# RGB, the order image_source hands grids over in
DEFAULT_BACKGROUND = (255, 255, 255)

NAMED_COLORS = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
}


# =============================================================================
# LOGGING CONSTANTS
# =============================================================================

LOG_MAX_FILE_SIZE_MB_DEFAULT = 5         # Roll over to a new file past this size
LOG_MAX_AGE_S = 24 * 60 * 60             # Logs older than one day are removed on startup
LOG_SEPARATOR_WIDTH = 80                 # Width of separator lines in logs (e.g., "=" * 80)
LOG_FILE_PATTERN = "inkreader_*.log"
LOG_TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"  # No colons, valid on every filesystem


# =============================================================================
# DEFAULT ARGUMENTS
# =============================================================================

DEFAULT_VERBOSE = False
DEFAULT_WRITE_LOGS = True

# Exit codes
EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
