"""Section store persistence.

A store is one JSON file holding a named key/value section per registered
type::

    {"schema_version": 1, "sections": {"AppSettings": {"name": "", "count": "0"}}}

The store keeps an in-process view of the file. Every write replaces the file
atomically and then drops that view, so the next read observes what was
written.
"""

from __future__ import annotations

import copy
import json
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from typedconf.core.utils.logger import log_debug, log_file_operation, log_info
from typedconf.core.utils.paths import get_default_store_path

from .errors import StoreIOError

CONFIG_SCHEMA_VERSION = 1

Sections = Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class SectionHandle:
    """Identifies one section of one store file."""

    name: str
    path: Path


def _wrap_sections(sections: Sections) -> Dict[str, Any]:
    return {"schema_version": CONFIG_SCHEMA_VERSION, "sections": sections}


def _unwrap_sections(payload: Any, path: Path) -> Sections:
    if not isinstance(payload, dict):
        raise StoreIOError(f"Malformed store {path}: root must be an object", path=path)
    sections = payload.get("sections", payload if "schema_version" not in payload else None)
    if not isinstance(sections, dict):
        raise StoreIOError(f"Malformed store {path}: 'sections' must be an object", path=path)
    for name, section in sections.items():
        if not isinstance(section, dict) or not all(
            isinstance(value, str) for value in section.values()
        ):
            raise StoreIOError(
                f"Malformed store {path}: section '{name}' must map keys to strings", path=path
            )
    return sections


def save_sections_atomic(sections: Sections, target_path: Path) -> None:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target_path.with_suffix(target_path.suffix + ".tmp")
    payload = _wrap_sections(sections)
    try:
        temp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        temp_path.replace(target_path)
    except BaseException:
        with suppress(OSError):
            temp_path.unlink()
        raise


def load_sections_safe(store_path: Path) -> Optional[Sections]:
    if not store_path.exists():
        return None
    payload = json.loads(store_path.read_text(encoding="utf-8"))
    return _unwrap_sections(payload, store_path)


class SectionStore:
    """
    Durable named key/value sections in a JSON file.

    The store is the only writer of its file. It performs no locking and no
    retries: a failed read or write raises StoreIOError and leaves the cached
    view as it was before the call.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else get_default_store_path()
        self._cache: Optional[Sections] = None

    def __repr__(self) -> str:
        return f"SectionStore({str(self.path)!r})"

    def _sections(self) -> Sections:
        if self._cache is None:
            try:
                loaded = load_sections_safe(self.path)
            except (OSError, ValueError) as e:
                log_file_operation("read", str(self.path), False, str(e))
                raise StoreIOError(f"Unable to read store {self.path}: {e}", path=self.path) from e
            self._cache = loaded if loaded is not None else {}
            log_file_operation("read", str(self.path), True)
        return self._cache

    def _persist(self, sections: Sections) -> None:
        try:
            save_sections_atomic(sections, self.path)
        except (OSError, TypeError, ValueError) as e:
            log_file_operation("write", str(self.path), False, str(e))
            raise StoreIOError(f"Unable to write store {self.path}: {e}", path=self.path) from e
        log_file_operation("write", str(self.path), True)

    def _write(self, handle: SectionHandle, section: Dict[str, str]) -> None:
        sections = copy.deepcopy(self._sections())
        sections[handle.name] = section
        self._persist(sections)
        self.refresh_section(handle.name)

    def refresh_section(self, name: str) -> None:
        """Drop the cached view so the next read of ``name`` reloads the file."""
        self._cache = None
        log_debug("store", f"Section <{name}> refreshed", str(self.path))

    def has_section(self, name: str) -> bool:
        return name in self._sections()

    def sections(self) -> List[str]:
        return list(self._sections().keys())

    def open_or_create(self, name: str) -> SectionHandle:
        """Return a handle to ``name``, creating and persisting an empty section if needed."""
        if not self.has_section(name):
            self._write(SectionHandle(name, self.path), {})
            log_info("store", f"Section <{name}> created", str(self.path))
        return SectionHandle(name, self.path)

    def read(self, handle: SectionHandle) -> Dict[str, str]:
        """Return the persisted pairs of the section, in stored order."""
        return dict(self._sections().get(handle.name, {}))

    def write_all(self, handle: SectionHandle, values: Mapping[str, str]) -> None:
        """Replace the whole section with ``values``; absent keys are removed."""
        self._write(handle, dict(values))

    def write_one(self, handle: SectionHandle, key: str, value: str) -> None:
        """Update a single key in place, keeping every other key and its position."""
        section = dict(self._sections().get(handle.name, {}))
        section[key] = value
        self._write(handle, section)
