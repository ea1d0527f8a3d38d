"""ctxignore - dockerignore-style path filtering for build contexts.

Decides which files of a build context are sent to the build, given an
ordered list of ignore patterns:

    >>> from ctxignore import ignore
    >>> ig = ignore().add(["node_modules/", "*.log", "!keep.log"])
    >>> ig.filter(["node_modules/a/b.js", "app.log", "keep.log", "main.js"])
    ['keep.log', 'main.js']
"""

from ctxignore.core.constants import CTXIGNORE_VERSION
from ctxignore.core.validators import ValidationError
from ctxignore.ignore_filter import Ignore, ignore
from ctxignore.rules.engine import RuleCollection, RuleSet
from ctxignore.rules.patterns import Rule

__version__ = CTXIGNORE_VERSION

__all__ = [
    "Ignore",
    "ignore",
    "Rule",
    "RuleSet",
    "RuleCollection",
    "ValidationError",
    "__version__",
]
