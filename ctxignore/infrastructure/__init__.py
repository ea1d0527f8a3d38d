"""ctxignore Infrastructure Layer.

This layer provides services used by the filter facade:
- ConfigManager: Layered configuration (defaults, YAML, environment)
- QueryCache: LRU cache of path query results
- Logger: Structured logging system
"""

from .cache_manager import CacheConfig, QueryCache
from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource, get_config_manager, set_global_config
from .logger import Logger, LogLevel, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # Cache exports
    "CacheConfig",
    "QueryCache",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
    "get_config_manager",
    "set_global_config",
]
