"""Configuration types used across the test suite."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

import numpy as np

from typedconf.core.config.notify import ChangeNotifier


class Color(enum.Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


class Permission(enum.Flag):
    NONE = 0
    READ = 1
    WRITE = 2
    EXECUTE = 4


@dataclass
class AppSettings:
    """Deferred-save type: no change notification."""

    name: str = ""
    count: int = 0


@dataclass
class DisplaySettings(ChangeNotifier):
    """Write-through type."""

    title: str = "main"
    width: int = 800
    scale: float = 1.0
    fullscreen: bool = False
    color: Color = Color.RED


@dataclass
class AllKinds:
    text: str = "hello"
    number: int = 42
    ratio: np.float32 = np.float32(0.5)
    precise: float = 0.1
    enabled: bool = True
    color: Color = Color.GREEN
    access: Permission = Permission.READ


@dataclass
class ListSettings:
    tags: List[str] = field(default_factory=list)


@dataclass
class OptionalSettings:
    limit: Optional[int] = None


class PlainSettings:
    host: str = "localhost"
    port: int = 8080
    _secret: str = "hidden"
    VERSION: ClassVar[int] = 1
