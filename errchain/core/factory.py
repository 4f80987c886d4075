# errchain/core/factory.py
"""
Error Factory - construction, wrapping and destruction of error chains

A factory bundles the allocator and the message bound used for every
node it builds. Nothing here ever returns None: allocation failure
degrades to OUT_OF_MEMORY, absent input to EMPTY.

Ownership:
- wrap_*() and destroy() take ownership of the chain passed in
- a node handed over must not be used again except through the value
  returned by wrap_*()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from .allocator import Allocator, AllocFn, FreeFn, FunctionAllocator, SystemAllocator
from .constants import MAXLEN, NODE_SIZE
from .errors import ErrChainError
from .value import EMPTY, OUT_OF_MEMORY, ErrorValue, iter_chain
from ..utils.text import to_text, truncate_utf8

if TYPE_CHECKING:
    from ..config import ErrChainConfig


logger = logging.getLogger(__name__)

Text = Union[str, bytes]


class ErrorFactory:
    """
    Builds, wraps and destroys error values.

    Usage:
        >>> factory = ErrorFactory()
        >>> e = factory.new_from_copy("disk full")
        >>> e = factory.wrap_formatted(e, "cannot save %s", "report.txt")
        >>> str(e)
        'cannot save report.txt: disk full'
        >>> factory.destroy(e)
    """

    def __init__(
        self,
        allocator: Optional[Allocator] = None,
        *,
        maxlen: int = MAXLEN,
        log_fallbacks: bool = True,
    ):
        if isinstance(maxlen, bool) or not isinstance(maxlen, int):
            raise ErrChainError.invalid_argument(
                f"maxlen must be an integer, got {type(maxlen).__name__}",
                details={"maxlen": repr(maxlen)},
            )
        if maxlen < 2:
            raise ErrChainError.config_invalid(
                f"maxlen must be at least 2, got {maxlen}",
                details={"maxlen": maxlen},
            )
        self._allocator: Allocator = allocator or SystemAllocator()
        self._configured = allocator is not None
        self._used = False
        self.maxlen = maxlen
        self.log_fallbacks = log_fallbacks

    @classmethod
    def from_config(
        cls,
        config: "ErrChainConfig",
        allocator: Optional[Allocator] = None,
    ) -> "ErrorFactory":
        """
        Build a factory from configuration.

        Raises:
            ErrChainError: (CONFIG_INVALID) if the config fails validation
        """
        from ..config.validator import ensure_valid

        ensure_valid(config)
        return cls(
            allocator,
            maxlen=config.maxlen,
            log_fallbacks=config.log_fallbacks,
        )

    @property
    def allocator(self) -> Allocator:
        return self._allocator

    # ---- allocator override ----

    def set_allocators(self, alloc_fn: AllocFn, free_fn: FreeFn) -> None:
        """
        Replace the allocation functions used by this factory.

        Allowed once, and only before the factory has built anything;
        mixing allocators within one chain's lifetime is not supported.
        """
        self.set_allocator(FunctionAllocator(alloc_fn, free_fn))

    def set_allocator(self, allocator: Allocator) -> None:
        if self._used:
            raise ErrChainError.allocator_locked("factory already in use")
        if self._configured:
            raise ErrChainError.allocator_locked("allocators already configured")
        self._allocator = allocator
        self._configured = True
        logger.debug(f"Allocator set to {type(allocator).__name__}")

    # ---- storage ----

    def _alloc(self, size: int) -> Optional[Any]:
        self._used = True
        return self._allocator.alloc(size)

    def _free(self, block: Any) -> None:
        self._allocator.free(block)

    def _out_of_memory(self, what: str) -> ErrorValue:
        if self.log_fallbacks:
            logger.warning(f"Allocation failed for {what}, returning OUT_OF_MEMORY")
        else:
            logger.debug(f"Allocation failed for {what}, returning OUT_OF_MEMORY")
        return OUT_OF_MEMORY

    def _empty(self, what: str) -> ErrorValue:
        logger.debug(f"Absent {what}, returning EMPTY")
        return EMPTY

    # ---- construction ----

    def new_from_copy(self, s: Optional[Text]) -> ErrorValue:
        """
        Create an error owning a copy of ``s``, truncated to maxlen - 1 bytes.
        """
        return self._build_copy(s, None)

    def new_from_static(self, s: Optional[Text]) -> ErrorValue:
        """
        Create an error referring to ``s`` without copying it.

        The message is not owned and not truncated.
        """
        return self._build_static(s, None)

    def new_formatted(self, fmt: Optional[str], *args: Any) -> ErrorValue:
        """
        Create an error from a printf-style format string.

        A single mapping argument supplies named fields (``%(name)s``).
        The result is silently truncated to maxlen - 1 bytes.
        """
        return self._build_formatted(fmt, args, None)

    def _build_copy(self, s: Optional[Text], cause: Optional[ErrorValue]) -> ErrorValue:
        if s is None:
            return self._empty("message")

        node_block = self._alloc(NODE_SIZE)
        if node_block is None:
            return self._out_of_memory("error node")

        message_block = self._alloc(self.maxlen)
        if message_block is None:
            self._free(node_block)
            return self._out_of_memory("error message")

        return ErrorValue(
            message=truncate_utf8(to_text(s), self.maxlen),
            cause=cause,
            owns_self=True,
            owns_message=True,
            _node_block=node_block,
            _message_block=message_block,
        )

    def _build_static(self, s: Optional[Text], cause: Optional[ErrorValue]) -> ErrorValue:
        if s is None:
            return self._empty("message")

        node_block = self._alloc(NODE_SIZE)
        if node_block is None:
            return self._out_of_memory("error node")

        return ErrorValue(
            message=to_text(s),
            cause=cause,
            owns_self=True,
            owns_message=False,
            _node_block=node_block,
        )

    def _build_formatted(self, fmt: Optional[str], args: tuple, cause: Optional[ErrorValue]) -> ErrorValue:
        if fmt is None:
            return self._empty("format string")

        message_block = self._alloc(self.maxlen)
        if message_block is None:
            return self._out_of_memory("error message")

        try:
            message = _format(fmt, args)
        except (TypeError, ValueError, KeyError) as e:
            self._free(message_block)
            raise ErrChainError.invalid_format(fmt, args, cause=e) from e

        node_block = self._alloc(NODE_SIZE)
        if node_block is None:
            self._free(message_block)
            return self._out_of_memory("error node")

        return ErrorValue(
            message=truncate_utf8(message, self.maxlen),
            cause=cause,
            owns_self=True,
            owns_message=True,
            _node_block=node_block,
            _message_block=message_block,
        )

    # ---- wrapping ----

    def wrap_copy(self, inner: Optional[ErrorValue], s: Optional[Text]) -> ErrorValue:
        """Wrap ``inner`` in a new error owning a copy of ``s``."""
        _ensure_live(inner)
        return self._finish_wrap(inner, self._build_copy(s, _cause_for(inner)))

    def wrap_static(self, inner: Optional[ErrorValue], s: Optional[Text]) -> ErrorValue:
        """Wrap ``inner`` in a new error referring to ``s`` without copying."""
        _ensure_live(inner)
        return self._finish_wrap(inner, self._build_static(s, _cause_for(inner)))

    def wrap_formatted(self, inner: Optional[ErrorValue], fmt: Optional[str], *args: Any) -> ErrorValue:
        """Wrap ``inner`` in a new error with a printf-style message."""
        _ensure_live(inner)
        try:
            outer = self._build_formatted(fmt, args, _cause_for(inner))
        except ErrChainError:
            # Ownership was already taken
            self.destroy(inner)
            raise
        return self._finish_wrap(inner, outer)

    def _finish_wrap(self, inner: Optional[ErrorValue], outer: ErrorValue) -> ErrorValue:
        if not outer.owns_self:
            # Outer construction fell back to a sentinel; drop the chain
            self.destroy(inner)
        return outer

    # ---- destruction ----

    def destroy(self, e: Optional[ErrorValue]) -> None:
        """
        Release a whole chain, innermost node first.

        Raises ErrChainError if any node of the chain was already released;
        nothing is freed in that case.
        """
        if e is None:
            return

        nodes = [node for node in iter_chain(e) if not node.is_sentinel]
        for node in nodes:
            if node.is_released:
                raise ErrChainError.use_after_release(node.message)

        for node in reversed(nodes):
            message_block = node._message_block
            node_block = node._node_block
            node._mark_released()
            if node.owns_message and message_block is not None:
                self._free(message_block)
            if node.owns_self and node_block is not None:
                self._free(node_block)


def _format(fmt: str, args: tuple) -> str:
    if len(args) == 1 and isinstance(args[0], Mapping):
        return fmt % args[0]
    return fmt % args


def _cause_for(inner: Optional[ErrorValue]) -> ErrorValue:
    return EMPTY if inner is None else inner


def _ensure_live(e: Optional[ErrorValue]) -> None:
    if e is not None and e.is_released:
        raise ErrChainError.use_after_release(e.message)


__all__ = ["ErrorFactory"]
