"""ctxignore Core - constants, validators and path utilities.

Import specific functions from submodules:
    from ctxignore.core import constants
    from ctxignore.core.path_utils import get_path_strategy
    from ctxignore.core.validators import ValidationError
"""

from ctxignore.core import constants, path_utils, validators

__all__ = [
    "constants",
    "path_utils",
    "validators",
]
