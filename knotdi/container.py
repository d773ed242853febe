"""A dependency-injection container with bounded, pool-backed lifetimes."""

from __future__ import annotations

from typing import Any, Hashable

from .descriptor import Descriptor, Strategy, TransientRecord
from .factory import Factory
from .memory_pool import Block, MemoryPool, PoolExhaustedError

MAX_SERVICES = 16
MAX_TRANSIENTS = 32
DEFAULT_POOL_BYTES = 4096

# Every factory, singleton slot and transient instance is charged this many
# bytes of pool space, aligned to a machine word.
SLOT_SIZE = 16
SLOT_ALIGN = 8


class RegistrationError(Exception):
    """Raised when a service or instance cannot be registered."""


class Container:
    """Registers services and hands out their instances.

    Singletons are built on first resolution and kept until destroyed,
    transients are built on every resolution and tracked for disposal, and
    external instances are handed back as given and never disposed.
    At most :data:`MAX_SERVICES` services and :data:`MAX_TRANSIENTS` live
    transients are held, and all of them draw on one :class:`MemoryPool`.
    """

    def __init__(self, max_bytes: int | None = None, *, buffer=None) -> None:
        if buffer is None and max_bytes is None:
            max_bytes = DEFAULT_POOL_BYTES
        self._pool = MemoryPool(max_bytes, buffer=buffer)
        self._registry: dict[Hashable, Descriptor] = {}
        self._factories: list[tuple[Factory, Block]] = []
        self._transients: list[TransientRecord] = []

    def _check_slot(self, key: Hashable) -> None:
        if len(self._registry) >= MAX_SERVICES:
            raise RegistrationError(
                f"cannot register {key!r}: limit of {MAX_SERVICES} services reached"
            )
        if key in self._registry:
            raise RegistrationError(f"{key!r} is already registered")

    def _reserve(self, what: str) -> Block:
        try:
            return self._pool.allocate(SLOT_SIZE, SLOT_ALIGN)
        except PoolExhaustedError as exc:
            raise RegistrationError(f"no pool space left for {what}") from exc

    def register_service(
        self, cls: Any, strategy: Strategy = Strategy.SINGLETON, *args: Any
    ) -> None:
        """Register ``cls`` to be built with ``args`` under ``strategy``.

        Only :attr:`Strategy.SINGLETON` and :attr:`Strategy.TRANSIENT` are
        accepted here; use :meth:`register_instance` for external objects.
        """
        if strategy not in (Strategy.SINGLETON, Strategy.TRANSIENT):
            raise RegistrationError(f"unsupported strategy {strategy!r}")
        self._check_slot(cls)
        factory = Factory(cls, *args)
        factory_block = self._reserve(f"the factory of {cls!r}")
        storage = None
        if strategy is Strategy.SINGLETON:
            try:
                storage = self._pool.allocate(SLOT_SIZE, SLOT_ALIGN)
            except PoolExhaustedError as exc:
                self._pool.deallocate(factory_block)
                raise RegistrationError(
                    f"no pool space left for the singleton {cls!r}"
                ) from exc
        self._factories.append((factory, factory_block))
        self._registry[cls] = Descriptor(factory, strategy, None, storage)

    def register_instance(self, key: Hashable, instance: Any) -> None:
        """Register an existing ``instance`` under ``key``.

        The container hands it out as is and never disposes of it.
        """
        if instance is None:
            raise RegistrationError(f"no instance given for {key!r}")
        self._check_slot(key)
        self._registry[key] = Descriptor(None, Strategy.EXTERNAL, instance, None)

    def resolve(self, key: Hashable) -> Any:
        """Return the instance registered under ``key``.

        Raises :class:`KeyError` for an unknown key and
        :class:`PoolExhaustedError` when no more transients fit.
        """
        try:
            desc = self._registry[key]
        except KeyError:
            raise KeyError(f"no service registered for {key!r}") from None

        if desc.strategy is Strategy.SINGLETON:
            if desc.instance is None:
                desc.instance = desc.factory.create(desc.storage)
            return desc.instance

        if desc.strategy is Strategy.TRANSIENT:
            if len(self._transients) >= MAX_TRANSIENTS:
                raise PoolExhaustedError(
                    f"limit of {MAX_TRANSIENTS} live transients reached"
                )
            block = self._pool.allocate(SLOT_SIZE, SLOT_ALIGN)
            try:
                instance = desc.factory.create(block)
            except BaseException:
                self._pool.deallocate(block)
                raise
            self._transients.append(TransientRecord(instance, desc.factory, block))
            return instance

        return desc.instance

    def destroy_all_singletons(self) -> None:
        """Dispose of every built singleton; the next resolve builds anew."""
        for desc in self._registry.values():
            if desc.strategy is Strategy.SINGLETON and desc.instance is not None:
                desc.factory.destroy(desc.instance)
                if desc.storage is not None:
                    self._pool.deallocate(desc.storage)
                    desc.storage = None
                desc.instance = None

    def _dispose(self, record: TransientRecord) -> None:
        if record.factory is not None:
            record.factory.destroy(record.instance)
        if record.block is not None:
            self._pool.deallocate(record.block)

    def destroy_all_transients(self) -> None:
        """Dispose of every transient handed out so far."""
        for record in self._transients:
            self._dispose(record)
        self._transients.clear()

    def destroy_transient(self, instance: Any) -> None:
        """Dispose of one transient; unknown instances are ignored."""
        for idx, record in enumerate(self._transients):
            if record.instance is instance:
                self._dispose(record)
                last = self._transients.pop()
                if idx < len(self._transients):
                    self._transients[idx] = last
                return

    def close(self) -> None:
        """Dispose of all singletons and transients and drop every registration."""
        self.destroy_all_singletons()
        self.destroy_all_transients()
        for _factory, block in self._factories:
            self._pool.deallocate(block)
        self._factories.clear()
        self._registry.clear()

    def __enter__(self) -> Container:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()