# errchain/core/allocator.py
"""
Allocators - storage providers for error nodes and messages

Every node and every owned message is backed by a block obtained from an
allocator and handed back to it exactly once on destroy. Blocks are
opaque to the rest of the library.

Contract (mirrors malloc/free):
- alloc(size) returns a handle, or None when the request cannot be met
- free(handle) releases a handle previously returned by the same allocator
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .errors import ErrChainError


AllocFn = Callable[[int], Optional[Any]]
FreeFn = Callable[[Any], None]


@runtime_checkable
class Allocator(Protocol):
    """Protocol for allocators."""

    def alloc(self, size: int) -> Optional[Any]:
        """Return a block of at least ``size`` bytes, or None on failure."""
        ...

    def free(self, block: Any) -> None:
        """Release a block returned by alloc()."""
        ...


class SystemBlock:
    """Reservation token issued by SystemAllocator"""

    __slots__ = ("size",)

    def __init__(self, size: int):
        self.size = size

    def __repr__(self) -> str:
        return f"<SystemBlock size={self.size}>"


class SystemAllocator:
    """
    Default allocator.

    Message text lives in Python strings, so a block is only a token
    recording the reservation; the GC reclaims it.
    """

    def alloc(self, size: int) -> Optional[Any]:
        return SystemBlock(size)

    def free(self, block: Any) -> None:
        pass


class FunctionAllocator:
    """
    Adapts a pair of plain callables to the Allocator protocol.

    Used by set_allocators(alloc_fn, free_fn).
    """

    def __init__(self, alloc_fn: AllocFn, free_fn: FreeFn):
        if not callable(alloc_fn) or not callable(free_fn):
            raise ErrChainError.invalid_argument(
                "alloc_fn and free_fn must be callable",
                details={"alloc_fn": repr(alloc_fn), "free_fn": repr(free_fn)},
            )
        self._alloc_fn = alloc_fn
        self._free_fn = free_fn

    def alloc(self, size: int) -> Optional[Any]:
        return self._alloc_fn(size)

    def free(self, block: Any) -> None:
        self._free_fn(block)


class _Block:
    """Handle issued by TrackingAllocator"""

    __slots__ = ("block_id", "size", "inner")

    def __init__(self, block_id: int, size: int, inner: Any):
        self.block_id = block_id
        self.size = size
        self.inner = inner

    def __repr__(self) -> str:
        return f"<Block #{self.block_id} size={self.size}>"


class TrackingAllocator:
    """
    Instrumented allocator for leak and double-free detection.

    Features:
    - Counts outstanding blocks and bytes
    - Raises on freeing an unknown or already freed block
    - Simulates exhaustion after ``fail_after`` successful allocations
    - Delegates real storage to ``inner`` (SystemAllocator by default)
    """

    def __init__(
        self,
        inner: Optional[Allocator] = None,
        *,
        fail_after: Optional[int] = None,
    ):
        self.inner = inner or SystemAllocator()
        self.fail_after = fail_after

        self.alloc_calls = 0
        self.free_calls = 0
        self.failed_allocs = 0
        self._next_id = 0
        self._live: dict[int, _Block] = {}

    @property
    def outstanding(self) -> int:
        """Number of blocks allocated and not yet freed."""
        return len(self._live)

    @property
    def outstanding_bytes(self) -> int:
        return sum(block.size for block in self._live.values())

    @property
    def successful_allocs(self) -> int:
        return self.alloc_calls - self.failed_allocs

    def alloc(self, size: int) -> Optional[Any]:
        if self.fail_after is not None and self.successful_allocs >= self.fail_after:
            self.alloc_calls += 1
            self.failed_allocs += 1
            return None

        self.alloc_calls += 1

        inner_block = self.inner.alloc(size)
        if inner_block is None:
            self.failed_allocs += 1
            return None

        self._next_id += 1
        block = _Block(self._next_id, size, inner_block)
        self._live[block.block_id] = block
        return block

    def free(self, block: Any) -> None:
        self.free_calls += 1

        if not isinstance(block, _Block) or self._live.get(block.block_id) is not block:
            raise RuntimeError(f"free of unknown or already freed block: {block!r}")

        del self._live[block.block_id]
        self.inner.free(block.inner)


__all__ = [
    "AllocFn",
    "FreeFn",
    "Allocator",
    "SystemBlock",
    "SystemAllocator",
    "FunctionAllocator",
    "TrackingAllocator",
]
