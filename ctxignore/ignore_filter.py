#!/usr/bin/env python3
"""Build-context ignore filter.

This module provides the public filter built on the rule layer:
- Adding patterns from lines, text blocks, or other filters
- Filtering path lists and testing single paths
- Reusable filter predicates bound to the live rule set
- Cached query results, invalidated when rules are added

Example:
    >>> ig = Ignore().add(["*.md", "!README.md"])
    >>> ig.filter(["test.md", "README.md", "main.py"])
    ['README.md', 'main.py']
    >>> ig.ignores("docs/test.md")
    False
"""

import os
import re
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ctxignore.core.constants import ConfigKey, Limits, Platform
from ctxignore.core.path_utils import PathStrategy, get_path_strategy
from ctxignore.core.validators import validate_query_path
from ctxignore.infrastructure.cache_manager import CacheConfig, QueryCache
from ctxignore.infrastructure.config_manager import ConfigManager
from ctxignore.infrastructure.logger import Logger, get_logger
from ctxignore.rules.engine import PathEvaluator, RuleCollection, RuleSet
from ctxignore.rules.patterns import Rule, normalize_pattern

PathInput = Union[str, "os.PathLike[str]"]
PatternInput = Union[str, RuleCollection, Iterable[Union[str, RuleCollection]]]

_LINE_BREAK = re.compile(r"\r?\n")


class Ignore:
    """Ignore filter for dockerignore-style patterns.

    Rules are evaluated in insertion order and the last rule touching a
    path decides whether it is excluded. A rule touches a path when it
    matches the path or any directory above it.
    """

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        path_strategy: Optional[PathStrategy] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize filter.

        Without a configuration manager only the compiled defaults apply;
        YAML files and ``CTXIGNORE_*`` variables are read only through a
        manager passed by the caller (e.g. ``get_config_manager()``).

        Args:
            config: Configuration manager (compiled defaults if None)
            path_strategy: Path strategy (from ``platform`` setting if None)
            logger: Logger (the ``ctxignore`` logger if None)
        """
        configured = config is not None
        if config is None:
            config = ConfigManager(load_environment=False)
        settings = config.get_section()
        cache_settings = settings.get(ConfigKey.CACHE, {})

        if logger is None:
            logger = get_logger()
            # Only an explicit configuration changes the shared logger level
            level = settings.get(ConfigKey.LOGGING, {}).get(ConfigKey.LOGGING_LEVEL)
            if configured and level:
                logger.set_level(level)
        self._logger = logger

        self._strategy = path_strategy or get_path_strategy(
            settings.get(ConfigKey.PLATFORM, Platform.AUTO)
        )
        self._rule_set = RuleSet()
        self._evaluator = PathEvaluator(self._rule_set)
        self._cache = QueryCache(
            CacheConfig(
                max_entries=cache_settings.get(
                    ConfigKey.CACHE_MAX_ENTRIES, Limits.DEFAULT_CACHE_MAX_ENTRIES
                ),
                enabled=cache_settings.get(ConfigKey.CACHE_ENABLED, True),
            )
        )

    @property
    def path_strategy(self) -> PathStrategy:
        """Path strategy selected at construction."""
        return self._strategy

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Compiled rules in precedence order."""
        return self._rule_set.rules

    def add(self, patterns: PatternInput) -> "Ignore":
        """Add patterns.

        Accepts a single line, a newline-delimited block, an iterable of
        lines, or a rule collection such as another Ignore. Lines that
        produce no rule are skipped.

        Args:
            patterns: Patterns to add

        Returns:
            self
        """
        if isinstance(patterns, RuleCollection):
            self._absorb(patterns)
        elif isinstance(patterns, str):
            for line in _LINE_BREAK.split(patterns):
                self._add_line(line)
        elif isinstance(patterns, Iterable):
            for item in patterns:
                if isinstance(item, RuleCollection):
                    self._absorb(item)
                else:
                    self._add_line(item)
        else:
            self._logger.debug("Unsupported pattern input skipped", type=type(patterns).__name__)

        # Results only change when a rule was actually appended
        if self._rule_set.consume_changes():
            self._cache.clear()
            self._logger.debug("Query cache cleared", rules=len(self._rule_set))

        return self

    def add_pattern(self, patterns: PatternInput) -> "Ignore":
        """Add patterns (alias of add)."""
        return self.add(patterns)

    def _add_line(self, line: object) -> None:
        rule = normalize_pattern(line, self._strategy)
        if rule is None:
            self._logger.debug("Pattern line skipped", line=repr(line))
            return

        self._rule_set.append(rule)
        self._logger.debug("Rule added", pattern=rule.pattern, negative=rule.negative)

    def _absorb(self, collection: RuleCollection) -> None:
        count = self._rule_set.absorb(collection)
        self._logger.debug(
            "Rule collection absorbed", source=type(collection).__name__, rules=count
        )

    def test(self, path: PathInput) -> bool:
        """Check whether a path is included.

        Args:
            path: Relative path

        Returns:
            True if the path is included

        Raises:
            ValidationError: If path is not a string or path-like object
        """
        path = self._strategy.to_posix(validate_query_path(path))
        if not path:
            return True

        cached = self._cache.get(path)
        if cached is not None:
            return cached

        included = self._evaluator.evaluate(path)
        self._cache.set(path, included)
        return included

    def ignores(self, path: PathInput) -> bool:
        """Check whether a path is excluded."""
        return not self.test(path)

    def filter(self, paths: Union[PathInput, Iterable[PathInput]]) -> List[PathInput]:
        """Filter paths, keeping included ones in their original order.

        Args:
            paths: Paths (a single path is treated as a one-element list)

        Returns:
            Included paths
        """
        if isinstance(paths, (str, os.PathLike)):
            paths = [paths]
        return [path for path in paths if self.test(path)]

    def create_filter_predicate(self) -> Callable[[PathInput], bool]:
        """Create a predicate over paths.

        The predicate reads the live rule set, so rules added later are
        reflected in its results.

        Returns:
            Function returning True for included paths
        """

        def predicate(path: PathInput) -> bool:
            return self.test(path)

        return predicate

    create_filter = create_filter_predicate

    def explain(self, path: PathInput) -> Optional[Rule]:
        """Get the rule deciding a path.

        Args:
            path: Relative path

        Returns:
            Last rule touching the path, or None if no rule does
        """
        return self._evaluator.deciding_rule(self._strategy.to_posix(validate_query_path(path)))

    def cache_stats(self) -> dict:
        """Get query cache statistics."""
        return self._cache.get_stats()

    def __len__(self) -> int:
        return len(self._rule_set)

    def __repr__(self) -> str:
        return f"Ignore(rules={len(self._rule_set)}, strategy={self._strategy!r})"


def ignore(**kwargs) -> Ignore:
    """Create a new ignore filter.

    Args:
        **kwargs: Passed to Ignore

    Returns:
        New Ignore instance
    """
    return Ignore(**kwargs)
