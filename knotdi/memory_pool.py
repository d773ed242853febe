"""A bounded memory pool that hands out blocks from a fixed buffer or the heap."""

from __future__ import annotations

from dataclasses import dataclass


class PoolExhaustedError(MemoryError):
    """Raised when a pool has no room left for a requested block."""


@dataclass(frozen=True, eq=False)
class Block:
    """A region handed out by a :class:`MemoryPool`.

    ``view`` is the writable memory of the block, ``offset`` is where it
    starts inside the pool's buffer (0 for heap blocks) and ``size`` is the
    number of bytes charged to the pool, alignment padding included.
    """

    view: memoryview
    offset: int
    size: int


class MemoryPool:
    """Hands out memory up to ``max_bytes``.

    With a ``buffer`` the pool works as an arena: blocks are carved one after
    another from the buffer, individual deallocation does nothing and only
    :meth:`reset` makes room again. Without a buffer every block is a fresh
    heap allocation and the pool only keeps count of the bytes in use.
    """

    def __init__(self, max_bytes: int | None = None, *, buffer=None) -> None:
        if buffer is not None:
            view = memoryview(buffer).cast("B")
            if view.readonly:
                raise ValueError("pool buffer must be writable")
            if max_bytes is None:
                max_bytes = len(view)
            elif max_bytes > len(view):
                raise ValueError(
                    f"max_bytes {max_bytes} exceeds buffer length {len(view)}"
                )
            self._buffer: memoryview | None = view
        else:
            if max_bytes is None:
                raise ValueError("max_bytes is required when no buffer is given")
            self._buffer = None
        if max_bytes < 0:
            raise ValueError("max_bytes must not be negative")
        self._max_bytes = max_bytes
        self._used_bytes = 0
        self._buffer_offset = 0

    def allocate(self, size: int, align: int) -> Block:
        """Reserve ``size`` bytes aligned to ``align`` and return the block."""
        if size <= 0:
            raise ValueError("allocation size must be positive")
        if align <= 0:
            raise ValueError("alignment must be positive")
        if self._buffer is not None:
            space = self._max_bytes - self._buffer_offset
            misalign = self._buffer_offset % align
            pad = align - misalign if misalign else 0
            total = size + pad
            if total > space:
                raise PoolExhaustedError(
                    f"cannot allocate {size} bytes: {space} bytes left in buffer"
                )
            start = self._buffer_offset + pad
            block = Block(self._buffer[start:start + size], start, total)
            self._buffer_offset += total
            self._used_bytes += total
            return block
        if self._used_bytes + size > self._max_bytes:
            raise PoolExhaustedError(
                f"cannot allocate {size} bytes: "
                f"{self._max_bytes - self._used_bytes} bytes left"
            )
        self._used_bytes += size
        return Block(memoryview(bytearray(size)), 0, size)

    def deallocate(self, block: Block) -> None:
        """Give a heap block back; a no-op for buffer-backed pools."""
        if self._buffer is not None or block is None:
            return
        self._used_bytes = max(0, self._used_bytes - block.size)

    def reset(self) -> None:
        """Forget every allocation and start again from the beginning."""
        self._used_bytes = 0
        self._buffer_offset = 0

    @property
    def used_bytes(self) -> int:
        """Bytes currently charged to the pool."""
        return self._used_bytes

    @property
    def max_bytes(self) -> int:
        """The pool's capacity in bytes."""
        return self._max_bytes

    @property
    def buffer_offset(self) -> int:
        """Where the next buffer block would start."""
        return self._buffer_offset

    @property
    def buffer(self) -> memoryview | None:
        """The backing buffer, or ``None`` for a heap pool."""
        return self._buffer