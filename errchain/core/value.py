# errchain/core/value.py
"""
Error Value - the chainable error node

An ErrorValue is a message plus an optional cause, with explicit
ownership flags for the node storage and the message storage.

Chains are singly linked, outermost first. A node's cause is fixed when
the node is built; wrapping produces a new head and never touches the
wrapped node.

Two process-wide sentinels stand in for conditions that cannot allocate:
- OUT_OF_MEMORY: any allocation failed
- EMPTY: input was absent
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from .constants import EMPTY_MESSAGE, OUT_OF_MEMORY_MESSAGE


class ErrorKind(str, Enum):
    """Variant of an error value"""
    DETAILED = "detailed"
    OUT_OF_MEMORY = "out_of_memory"
    EMPTY = "empty"


@dataclass(frozen=True, eq=False)
class ErrorValue:
    """
    Single link of an error chain.

    Compared by identity. Built only through ErrorFactory (or the
    module-level API); the sentinels are the only instances created here.
    """
    message: str
    cause: Optional["ErrorValue"] = None
    owns_self: bool = False
    owns_message: bool = False
    kind: ErrorKind = ErrorKind.DETAILED

    # Allocator handles backing this node; None when not owned
    _node_block: Any = field(default=None, repr=False)
    _message_block: Any = field(default=None, repr=False)
    _released: bool = field(default=False, repr=False)

    @property
    def is_sentinel(self) -> bool:
        return self.kind is not ErrorKind.DETAILED

    @property
    def is_released(self) -> bool:
        return self._released

    def _mark_released(self) -> None:
        # Frozen for callers; only the destroy path flips this.
        object.__setattr__(self, "_node_block", None)
        object.__setattr__(self, "_message_block", None)
        object.__setattr__(self, "_released", True)

    def __iter__(self) -> Iterator["ErrorValue"]:
        return iter_chain(self)

    def __str__(self) -> str:
        from .render import render_to_string
        return render_to_string(self)


OUT_OF_MEMORY = ErrorValue(
    message=OUT_OF_MEMORY_MESSAGE,
    kind=ErrorKind.OUT_OF_MEMORY,
)

EMPTY = ErrorValue(
    message=EMPTY_MESSAGE,
    kind=ErrorKind.EMPTY,
)


def iter_chain(e: Optional[ErrorValue]) -> Iterator[ErrorValue]:
    """
    Walk a chain from the outermost node to the root cause.

    An absent error yields the EMPTY sentinel.
    """
    node = EMPTY if e is None else e
    while node is not None:
        yield node
        node = node.cause


def chain_messages(e: Optional[ErrorValue]) -> list[str]:
    """Messages of a chain, outermost first"""
    return [node.message for node in iter_chain(e)]


__all__ = [
    "ErrorKind",
    "ErrorValue",
    "OUT_OF_MEMORY",
    "EMPTY",
    "iter_chain",
    "chain_messages",
]
