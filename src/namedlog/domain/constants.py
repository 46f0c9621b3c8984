from __future__ import annotations

"""
Domain Constants.

Centralized defaults shared by writers, the registry, the facade and the
declarative configuration loader.
"""

# -----------------------------------------------------------------------------
# LOGGER DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOGGER_NAME = "default"

# strftime equivalent of "yyyy-MM-dd-hh-mm-ss"
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d-%H-%M-%S"

# DDMMYYYYhhmmss, appended to the base name of a rotated file
ROTATION_STAMP_FORMAT = "%d%m%Y%H%M%S"

# Separator between timestamp, severity and message in a persisted line
FIELD_SEPARATOR = " : "

INVALID_LEVEL_NAME = "INVALID"

# A size limit at or below this value disables rotation
UNLIMITED_SIZE = 0

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_TAIL_LINES = 100
