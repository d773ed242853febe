"""Factories that build service instances from a class and fixed arguments."""

from __future__ import annotations

from typing import Any, Callable

from .memory_pool import Block

MAX_ARGS = 8


class Factory:
    """Creates instances of ``cls`` with the arguments given at construction.

    At most :data:`MAX_ARGS` constructor arguments are accepted.
    """

    def __init__(self, cls: Callable[..., Any], *args: Any) -> None:
        if not callable(cls):
            raise TypeError(f"{cls!r} is not callable")
        if len(args) > MAX_ARGS:
            raise TypeError(
                f"a factory takes at most {MAX_ARGS} arguments, got {len(args)}"
            )
        self.cls = cls
        self.args = args

    def create(self, storage: Block | None = None) -> Any:
        """Build a new instance.

        ``storage`` is the pool block reserved for the instance; it only
        accounts for the instance's space and is not otherwise touched.
        """
        return self.cls(*self.args)

    def destroy(self, instance: Any) -> None:
        """Dispose of ``instance`` by calling its ``close()`` if it has one."""
        if instance is None:
            return
        close = getattr(instance, "close", None)
        if callable(close):
            close()

    def __repr__(self) -> str:
        name = getattr(self.cls, "__qualname__", repr(self.cls))
        return f"Factory({name}, {len(self.args)} args)"