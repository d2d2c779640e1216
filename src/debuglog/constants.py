"""
debuglog constants.

Single place for the on-disk layout and the settings defaults.
"""

from __future__ import annotations


# ================================
# On-disk layout
# ================================

LOGS_DIR_NAME = "logs"
ALL_DIR_NAME = "all"
ERRORS_DIR_NAME = "errors"
LOG_EXTENSION = ".log"

# ================================
# Timestamp codec
# ================================

# Fixed width, so lexical order equals chronological order
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}$"

# ================================
# Line rendering
# ================================

LEVEL_WIDTH = 8

# ================================
# Settings defaults
# ================================

DEFAULT_MAX_FILE_SIZE = 2 * 1024 * 1024
DEFAULT_MAX_LOG_FILES_AMOUNT = 10
DEFAULT_DELETE_LOGS_AFTER = 7 * 24 * 60 * 60
