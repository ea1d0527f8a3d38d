#!/usr/bin/env python3
"""Path cleaning and separator strategies.

This module wraps the host path libraries for the rule and query layers:
- clean_path(): collapse redundant separators, ``.`` and ``..`` in a
  forward-slash path and drop a trailing separator
- ancestor_dirs(): directory segments above a relative path
- PathStrategy: pattern cleaning and query-path conversion, selected once at
  construction time (PosixPathStrategy or WindowsPathStrategy)

Example:
    >>> strategy = get_path_strategy("windows")
    >>> strategy.clean_pattern("build\\\\output\\\\")
    'build/output'
    >>> strategy.to_posix("src\\\\main.py")
    'src/main.py'
"""

import ntpath
import os
import posixpath
from abc import ABC, abstractmethod
from typing import List, Optional

from ctxignore.core.constants import (
    SEPARATOR,
    WINDOWS_EXTENDED_PREFIX,
    WINDOWS_SEPARATOR,
    Platform,
)
from ctxignore.core.validators import validate_platform


def remove_trailing_slash(path: str, separator: str = SEPARATOR) -> str:
    """Remove a single trailing separator.

    Args:
        path: Path to strip
        separator: Separator to remove

    Returns:
        Path without trailing separator
    """
    if path.endswith(separator):
        return path[: -len(separator)]
    return path


def clean_path(path: str) -> str:
    """Clean a forward-slash path.

    Args:
        path: Path using ``/`` as separator

    Returns:
        Cleaned path; ``"."`` for an empty or self-referencing path
    """
    cleaned = remove_trailing_slash(posixpath.normpath(path))
    # POSIX keeps a leading "//", a single root is enough here
    if cleaned.startswith("//"):
        cleaned = cleaned.lstrip(SEPARATOR)
        cleaned = SEPARATOR + cleaned if cleaned else ""
    return cleaned


def ancestor_dirs(path: str) -> List[str]:
    """Get the ancestor directory segments of a relative path.

    Args:
        path: Forward-slash relative path

    Returns:
        Segments of the cleaned parent directory, empty for top-level entries
    """
    parent = clean_path(posixpath.dirname(path))
    if parent == ".":
        return []
    return parent.split(SEPARATOR)


class PathStrategy(ABC):
    """Host-specific path handling.

    Implementations must provide:
    - clean_pattern(): clean raw pattern text into a forward-slash pattern
    - to_posix(): convert a query path to forward slashes
    """

    name: str = ""

    @abstractmethod
    def clean_pattern(self, pattern: str) -> str:
        """Clean pattern text with the host path library.

        Args:
            pattern: Pattern text (negation marker already removed)

        Returns:
            Cleaned pattern using ``/`` as separator
        """

    @abstractmethod
    def to_posix(self, path: str) -> str:
        """Convert a query path to the forward-slash convention.

        Args:
            path: Path as supplied by the caller

        Returns:
            Forward-slash path
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class PosixPathStrategy(PathStrategy):
    """Path handling for POSIX hosts: ``/`` separates, ``\\`` escapes."""

    name = Platform.POSIX

    def clean_pattern(self, pattern: str) -> str:
        return clean_path(pattern)

    def to_posix(self, path: str) -> str:
        return path


class WindowsPathStrategy(PathStrategy):
    """Path handling for Windows hosts: both ``/`` and ``\\`` separate."""

    name = Platform.WINDOWS

    def clean_pattern(self, pattern: str) -> str:
        cleaned = remove_trailing_slash(ntpath.normpath(pattern), WINDOWS_SEPARATOR)
        return cleaned.replace(WINDOWS_SEPARATOR, SEPARATOR)

    def to_posix(self, path: str) -> str:
        # Extended-length and non-ASCII paths are passed through untouched
        if path.startswith(WINDOWS_EXTENDED_PREFIX) or not path.isascii():
            return path
        return path.replace(WINDOWS_SEPARATOR, SEPARATOR)


def get_path_strategy(name: Optional[str] = None) -> PathStrategy:
    """Resolve a path strategy by name.

    Args:
        name: ``"posix"``, ``"windows"`` or ``"auto"``/None for the host default

    Returns:
        Path strategy instance

    Raises:
        ValidationError: If the name is unknown
    """
    name = name or Platform.AUTO
    validate_platform(name)
    name = name.lower()

    if name == Platform.AUTO:
        name = Platform.WINDOWS if os.name == "nt" else Platform.POSIX

    if name == Platform.WINDOWS:
        return WindowsPathStrategy()
    return PosixPathStrategy()
