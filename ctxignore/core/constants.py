"""
ctxignore Core: Constants

This module provides library-wide constants and error codes shared by the rule,
cache and configuration layers.
"""
from enum import IntEnum

# Version information
CTXIGNORE_VERSION = "1.0.0"


# Error codes
class ErrorCode(IntEnum):
    """Standardized error codes for ctxignore operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad query path, invalid configuration value
    NOT_FOUND = 2  # Config file doesn't exist
    INTERNAL_ERROR = 6  # Bug in ctxignore


# Canonical separator used for stored patterns and evaluated paths
SEPARATOR = "/"
WINDOWS_SEPARATOR = "\\"

# Glob tokens
GLOBSTAR = "**"
COMMENT_MARKER = "#"
NEGATION_MARKER = "!"
ESCAPE_CHAR = "\\"

# Prefix of Windows extended-length paths, never rewritten to forward slashes
WINDOWS_EXTENDED_PREFIX = "\\\\?\\"


# Resource limits and defaults
class Limits:
    """Resource limits and default values."""

    # Query cache
    DEFAULT_CACHE_MAX_ENTRIES = 100000


class Platform:
    """Path strategy names accepted in configuration."""

    AUTO = "auto"
    POSIX = "posix"
    WINDOWS = "windows"

    ALL = (AUTO, POSIX, WINDOWS)


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    ROOT = "ctxignore"

    # Top-level keys
    PLATFORM = "platform"
    CACHE = "cache"
    LOGGING = "logging"

    # Cache configuration
    CACHE_ENABLED = "enabled"
    CACHE_MAX_ENTRIES = "max_entries"

    # Logging configuration
    LOGGING_LEVEL = "level"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.PLATFORM: Platform.AUTO,
    ConfigKey.CACHE: {
        ConfigKey.CACHE_ENABLED: True,
        ConfigKey.CACHE_MAX_ENTRIES: Limits.DEFAULT_CACHE_MAX_ENTRIES,
    },
    ConfigKey.LOGGING: {
        ConfigKey.LOGGING_LEVEL: "WARNING",
    },
}
