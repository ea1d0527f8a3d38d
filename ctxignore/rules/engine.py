#!/usr/bin/env python3
"""Rule set and path evaluation.

This module provides the evaluation side of ctxignore:
- RuleCollection: capability protocol for anything exposing compiled rules
- RuleSet: ordered, append-only rule storage with a change flag
- PathEvaluator: direct and ancestor-directory matching with
  last-match-wins precedence

A rule "touches" a path when it matches the path itself or one of the
directories above it. The last touching rule in insertion order decides:
a negative rule re-includes, any other rule excludes.

Example:
    >>> rules = RuleSet()
    >>> rules.extend(normalize_pattern(line) for line in ["foo/**", "!foo/bar.js"])
    2
    >>> PathEvaluator(rules).evaluate("foo/bar/bar.js")
    False
"""

from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ctxignore.core.constants import SEPARATOR
from ctxignore.core.path_utils import ancestor_dirs
from ctxignore.rules.patterns import Rule


@runtime_checkable
class RuleCollection(Protocol):
    """Anything that exposes already compiled rules, in precedence order."""

    @property
    def rules(self) -> Sequence[Rule]:
        ...


class RuleSet:
    """Ordered, append-only collection of compiled rules.

    Insertion order is precedence order. Rules are never reordered,
    removed or deduplicated.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        """Initialize rule set.

        Args:
            rules: Optional initial rules
        """
        self._rules: List[Rule] = []
        self._changed = False

        if rules is not None:
            self.extend(rules)

    def append(self, rule: Optional[Rule]) -> bool:
        """Append a rule.

        Args:
            rule: Rule to append; None is ignored

        Returns:
            True if the rule was appended
        """
        if rule is None:
            return False

        self._rules.append(rule)
        self._changed = True
        return True

    def extend(self, rules: Iterable[Optional[Rule]]) -> int:
        """Append rules in order.

        Args:
            rules: Rules to append; None entries are ignored

        Returns:
            Number of rules appended
        """
        return sum(1 for rule in rules if self.append(rule))

    def absorb(self, collection: RuleCollection) -> int:
        """Append another collection's rules verbatim.

        Args:
            collection: Source of compiled rules

        Returns:
            Number of rules appended
        """
        # Snapshot first so a collection can absorb itself
        return self.extend(tuple(collection.rules))

    def consume_changes(self) -> bool:
        """Report and reset the changed flag.

        Returns:
            True if rules were appended since the last call
        """
        changed = self._changed
        self._changed = False
        return changed

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Snapshot of the rules in precedence order."""
        return tuple(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)


class PathEvaluator:
    """Decides whether paths are included by a live rule set."""

    def __init__(self, rule_set: RuleSet):
        """Initialize evaluator.

        Args:
            rule_set: Rules to evaluate against (read on every call)
        """
        self._rule_set = rule_set

    @staticmethod
    def touches(rule: Rule, path: str, ancestors: Sequence[str]) -> bool:
        """Check if a rule matches a path or one of its ancestor directories.

        Args:
            rule: Rule to check
            path: Forward-slash relative path
            ancestors: Ancestor directory segments of path

        Returns:
            True if the rule touches the path
        """
        if rule.matches(path):
            return True

        if not ancestors:
            return False

        if rule.has_globstar:
            # "**" may stand for any number of directories, including none
            return any(
                rule.matches(SEPARATOR.join(ancestors[:depth]))
                for depth in range(rule.literal_depth, len(ancestors) + 1)
            )

        depth = len(rule.dirs)
        if depth > len(ancestors):
            return False
        return rule.matches(SEPARATOR.join(ancestors[:depth]))

    def matching_rules(self, path: str) -> List[Rule]:
        """Get every rule that touches a path.

        Args:
            path: Forward-slash relative path

        Returns:
            Touching rules in insertion order
        """
        if not path:
            return []

        ancestors = ancestor_dirs(path)
        return [rule for rule in self._rule_set if self.touches(rule, path, ancestors)]

    def deciding_rule(self, path: str) -> Optional[Rule]:
        """Get the rule that decides a path.

        Args:
            path: Forward-slash relative path

        Returns:
            Last touching rule, or None when no rule touches the path
        """
        if not path:
            return None

        ancestors = ancestor_dirs(path)
        deciding = None
        for rule in self._rule_set:
            if self.touches(rule, path, ancestors):
                deciding = rule
        return deciding

    def evaluate(self, path: str) -> bool:
        """Check whether a path is included.

        Args:
            path: Forward-slash relative path

        Returns:
            True if included; empty paths are always included
        """
        deciding = self.deciding_rule(path)
        return deciding is None or deciding.negative
