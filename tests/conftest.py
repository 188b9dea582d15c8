"""
Shared pytest fixtures and configuration for typedconf tests.

Every test runs against a throwaway store, an empty registry map and a clean
exit hook, so registries created by one test never leak into another.
"""

import sys
from pathlib import Path

import pytest

# Put `src/` first so `import typedconf` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))
# Put repo root early so `import tests.*` resolves locally.
sys.path.insert(1, str(_REPO_ROOT))

from typedconf.core.config.exit_hook import ExitHook, get_exit_hook
from typedconf.core.config.persistence import SectionStore
from typedconf.core.config.registry import reset_registries_for_tests


@pytest.fixture(autouse=True)
def isolated_registries(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the default store at tmp_path and reset process-wide state."""
    monkeypatch.setenv("TYPEDCONF_STORE", str(tmp_path / "default" / "config.json"))
    reset_registries_for_tests()
    get_exit_hook().clear()
    yield
    reset_registries_for_tests()
    get_exit_hook().clear()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "store" / "config.json"


@pytest.fixture
def store(store_path: Path) -> SectionStore:
    return SectionStore(store_path)


@pytest.fixture
def exit_hook():
    """Exit hook private to one test."""
    hook = ExitHook()
    yield hook
    hook.clear()
