"""
Utils module for typedconf core functionality.

- logger: the diagnostics sink shared by the configuration core
- paths: default store location
"""

from .logger import get_logger, setup_logging
from .paths import get_default_store_path

__all__ = ["get_default_store_path", "get_logger", "setup_logging"]
