"""
typedconf - Typed configuration persistence for plain Python objects

Maps the public fields of a configuration class to a named section of a JSON
store and keeps both in sync for the lifetime of the process.

Key Features:
- One live, persisted instance per configuration type
- Write-through saving for types that report field changes
- Dirty tracking with save on demand, at session end or at interpreter exit
- Schema drift detection between the stored section and the current class

Package Structure:
- core/config/: registry, section store, schemas and coercion
- core/utils/: logging and path helpers
- utils/: standalone helpers (status flags, wildcard matching)
- cli/: command-line inspection of store files
"""

__version__ = "0.1.0"

from typedconf.core.config import (
    ChangeNotifier,
    ConfigRegistry,
    SectionStore,
    config_session,
    registry_for,
)

__all__ = [
    "ChangeNotifier",
    "ConfigRegistry",
    "SectionStore",
    "__version__",
    "config_session",
    "registry_for",
]
