import os
from pathlib import Path

# Project root (the directory containing src/), used for the default store location
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent.parent
# Data dir used when TYPEDCONF_DATA_DIR isn't set
DEFAULT_DATA_DIR = PROJECT_ROOT / ".typedconf"

DEFAULT_STORE_FILENAME = "config.json"


def get_default_store_path() -> Path:
    """Return the store file used when no explicit path is given.

    TYPEDCONF_STORE wins over TYPEDCONF_DATA_DIR; both are read on every call
    so tests and hosts can redirect the store before the first registry is
    created.
    """
    explicit = os.getenv("TYPEDCONF_STORE")
    if explicit:
        return Path(explicit).expanduser().resolve()
    data_dir_env = os.getenv("TYPEDCONF_DATA_DIR")
    data_dir = Path(data_dir_env).resolve() if data_dir_env else DEFAULT_DATA_DIR
    return data_dir / DEFAULT_STORE_FILENAME
