# errchain/core/__init__.py
"""
Core components: error values, allocators, the factory and the renderer.
"""

from .allocator import Allocator, SystemAllocator, SystemBlock, FunctionAllocator, TrackingAllocator
from .constants import MAXLEN, SEPARATOR
from .errors import ErrChainError, codes
from .factory import ErrorFactory
from .render import Sink, render, render_to_stream, render_to_string
from .value import ErrorKind, ErrorValue, OUT_OF_MEMORY, EMPTY, iter_chain, chain_messages

__all__ = [
    "Allocator",
    "SystemAllocator",
    "SystemBlock",
    "FunctionAllocator",
    "TrackingAllocator",
    "MAXLEN",
    "SEPARATOR",
    "ErrChainError",
    "codes",
    "ErrorFactory",
    "Sink",
    "render",
    "render_to_stream",
    "render_to_string",
    "ErrorKind",
    "ErrorValue",
    "OUT_OF_MEMORY",
    "EMPTY",
    "iter_chain",
    "chain_messages",
]
