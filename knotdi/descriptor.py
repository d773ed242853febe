"""Lifetime strategies and the records a container keeps about services."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .memory_pool import Block


class Strategy(enum.Enum):
    """How a registered service is created and how long it lives."""

    SINGLETON = 0
    TRANSIENT = 1
    EXTERNAL = 2
    SCOPED = 3


@dataclass(eq=False)
class Descriptor:
    """What the container knows about one registered service."""

    factory: Any = None
    strategy: Strategy = Strategy.SINGLETON
    instance: Any = None
    storage: Block | None = None


@dataclass(eq=False)
class TransientRecord:
    """A transient instance handed out by the container, for later disposal."""

    instance: Any
    factory: Any
    block: Block | None = None