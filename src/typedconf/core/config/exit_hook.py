"""
Final save for configuration types that can't save themselves.

Registries whose type has no change notification only reach the store when
``save()`` is called. They register here so that dirty state is flushed when
the interpreter exits normally (through ``atexit``) or when a
``config_session()`` block ends. A crash or a killed process skips both, and
unsaved changes are lost.
"""

from __future__ import annotations

import atexit
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from typedconf.core.utils.logger import log_debug, log_error, log_info


class ExitHook:
    """Process-wide list of deferred-save registries."""

    def __init__(self) -> None:
        self._registries: List[Any] = []
        self._installed = False
        self._has_run = False

    @property
    def registries(self) -> List[Any]:
        return list(self._registries)

    @property
    def has_run(self) -> bool:
        return self._has_run

    def install(self) -> None:
        if not self._installed:
            atexit.register(self.run)
            self._installed = True

    def register(self, registry: Any) -> None:
        """Track ``registry`` and make sure the exit callback is installed."""
        if registry not in self._registries:
            self._registries.append(registry)
            log_debug("exit_hook", f"<{registry.type_name}> registered for save on exit")
        self.install()

    def unregister(self, registry: Any) -> None:
        if registry in self._registries:
            self._registries.remove(registry)

    def clear(self) -> None:
        self._registries.clear()
        self._has_run = False

    def flush_dirty(self, suppress_errors: bool = False) -> int:
        """Save every registered registry that has unsaved changes.

        Args:
            suppress_errors: log save failures and keep going instead of raising.

        Returns:
            Number of registries saved.
        """
        saved = 0
        for registry in list(self._registries):
            if registry.auto_save_enabled or not registry.is_dirty:
                continue
            try:
                registry.save()
            except Exception as e:
                if not suppress_errors:
                    raise
                log_error(
                    "exit_hook",
                    f"Failed to save <{registry.type_name}> on exit: {e}",
                    exception=e,
                )
                continue
            saved += 1
        return saved

    def run(self) -> None:
        """Exit callback; runs once and never raises."""
        if self._has_run:
            return
        self._has_run = True
        saved = self.flush_dirty(suppress_errors=True)
        if saved:
            log_info("exit_hook", f"Saved {saved} configuration(s) on exit")


_exit_hook = ExitHook()


def get_exit_hook() -> ExitHook:
    return _exit_hook


@contextmanager
def config_session(hook: Optional[ExitHook] = None) -> Iterator[ExitHook]:
    """
    Scope in which deferred configuration changes are guaranteed a final save.

    On a normal exit a failing save propagates to the caller. When the block
    is already raising, save failures are logged and the original exception
    continues.

    Example:
        with config_session():
            registry_for(AppSettings).set.volume = 3
    """
    hook = hook if hook is not None else get_exit_hook()
    try:
        yield hook
    except BaseException:
        hook.flush_dirty(suppress_errors=True)
        raise
    hook.flush_dirty()
