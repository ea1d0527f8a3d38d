"""ctxignore Rules System.

This module provides ignore-rule compilation and evaluation:
- normalize_pattern / compile_pattern: pattern lines to compiled rules
- RuleSet / PathEvaluator: ordered rules and last-match-wins evaluation

A rule excludes the paths it matches and everything below the directories
it matches; a negated rule ("!pattern") re-includes them.
"""

from .engine import PathEvaluator, RuleCollection, RuleSet
from .patterns import GlobProgram, Instruction, OpCode, Rule, compile_pattern, normalize_pattern, trim_pattern

__all__ = [
    # Patterns
    "OpCode",
    "Instruction",
    "GlobProgram",
    "Rule",
    "compile_pattern",
    "normalize_pattern",
    "trim_pattern",
    # Engine
    "RuleCollection",
    "RuleSet",
    "PathEvaluator",
]
