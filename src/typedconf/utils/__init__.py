"""
Standalone helpers shipped with typedconf.

These don't depend on the configuration core.
"""

from .status import Status, StatusError
from .wildcard import like, to_regex

__all__ = ["Status", "StatusError", "like", "to_regex"]
