"""
ctxignore Core: Input Validators.

This module provides validation functions for configuration values and
query paths. Pattern text is never validated here: ignore files are
permissive and malformed lines are skipped by the normalizer instead.
"""
import os
from typing import Any, Dict, Union

from ctxignore.core.constants import ConfigKey, ErrorCode, Platform


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the ``ctxignore`` configuration section.

    Args:
        config: Configuration dictionary (contents of the ``ctxignore`` root key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.PLATFORM in config:
        validate_platform(config[ConfigKey.PLATFORM])

    if ConfigKey.CACHE in config:
        validate_cache_config(config[ConfigKey.CACHE])

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    return True


def validate_platform(platform: str) -> bool:
    """Validate a path strategy name.

    Args:
        platform: One of ``auto``, ``posix`` or ``windows``

    Returns:
        True if valid

    Raises:
        ValidationError: If the name is unknown
    """
    if not isinstance(platform, str):
        raise ValidationError(f"Platform must be string, got {type(platform)}")

    if platform.lower() not in Platform.ALL:
        raise ValidationError(
            f"Invalid platform: {platform}. Must be one of {list(Platform.ALL)}"
        )

    return True


def validate_cache_config(cache: Dict[str, Any]) -> bool:
    """Validate cache configuration.

    Args:
        cache: Cache configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If cache config is invalid
    """
    if not isinstance(cache, dict):
        raise ValidationError("Cache configuration must be a dictionary")

    # Check for unknown fields
    valid_fields = {ConfigKey.CACHE_ENABLED, ConfigKey.CACHE_MAX_ENTRIES}
    unknown_fields = set(cache.keys()) - valid_fields
    if unknown_fields:
        raise ValidationError(
            f"Unknown cache configuration fields: {', '.join(sorted(unknown_fields))}"
        )

    if ConfigKey.CACHE_ENABLED in cache:
        enabled = cache[ConfigKey.CACHE_ENABLED]
        if not isinstance(enabled, bool):
            raise ValidationError(f"Cache enabled must be boolean: {enabled}")

    if ConfigKey.CACHE_MAX_ENTRIES in cache:
        max_entries = cache[ConfigKey.CACHE_MAX_ENTRIES]
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
            raise ValidationError(f"Cache max_entries must be positive integer: {max_entries}")

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate logging configuration.

    Args:
        logging_config: Logging configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If logging config is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    if ConfigKey.LOGGING_LEVEL in logging_config:
        level = logging_config[ConfigKey.LOGGING_LEVEL]
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if not isinstance(level, str) or level.upper() not in valid_levels:
            raise ValidationError(
                f"Invalid log level: {level}. Must be one of {sorted(valid_levels)}"
            )

    return True


def validate_query_path(path: Union[str, "os.PathLike[str]"]) -> str:
    """Validate a path passed to a query and return it as a string.

    Args:
        path: Candidate path (str or os.PathLike)

    Returns:
        The path as a string

    Raises:
        ValidationError: If path is not a string or path-like object
    """
    if isinstance(path, str):
        return path

    if isinstance(path, os.PathLike):
        fspath = os.fspath(path)
        if isinstance(fspath, str):
            return fspath

    raise ValidationError(f"Path must be string, got {type(path)}")
