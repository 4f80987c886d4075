# errchain/__init__.py
"""
errchain - Chainable error values

Build an error with a message, wrap it with more context as it travels
up through the layers, and render the whole chain at the edge.

Module API (process-wide default factory):
    >>> import errchain, sys
    >>> e = errchain.new_from_copy("connection refused")
    >>> e = errchain.wrap_formatted(e, "cannot reach %s:%d", "db", 5432)
    >>> e = errchain.wrap_copy(e, "loading settings")
    >>> str(e)
    'loading settings: cannot reach db:5432: connection refused'
    >>> errchain.destroy(e)

Factory API (explicit allocator and message bound):
    >>> from errchain import ErrorFactory, TrackingAllocator
    >>> factory = ErrorFactory(TrackingAllocator(), maxlen=256)
    >>> e = factory.new_from_static("boom")
    >>> factory.destroy(e)

Rendering:
    >>> e = errchain.wrap_copy(errchain.new_from_copy("inner"), "outer")
    >>> rc = errchain.render_to_stream("[ERR] ", e, "\\n", sys.stderr)
    >>> errchain.destroy(e)

Sentinels:
- OUT_OF_MEMORY is returned whenever storage cannot be obtained
- EMPTY is returned for absent input and used as the cause of a wrap
  around nothing
"""

__version__ = "0.1.0"

# User-facing API (main entry point)
from .api import (
    default_factory,
    install_default_factory,
    set_allocators,
    new_from_copy,
    new_from_static,
    new_formatted,
    wrap_copy,
    wrap_static,
    wrap_formatted,
    destroy,
)

# Core types
from .core.value import ErrorKind, ErrorValue, OUT_OF_MEMORY, EMPTY, iter_chain, chain_messages
from .core.render import Sink, render, render_to_stream, render_to_string
from .core.constants import MAXLEN, SEPARATOR
from .core.errors import ErrChainError, codes

# Advanced components
from .core.factory import ErrorFactory
from .core.allocator import Allocator, SystemAllocator, SystemBlock, FunctionAllocator, TrackingAllocator
from .config import ErrChainConfig, load_config

__all__ = [
    # Version
    "__version__",

    # Module API
    "default_factory",
    "install_default_factory",
    "set_allocators",
    "new_from_copy",
    "new_from_static",
    "new_formatted",
    "wrap_copy",
    "wrap_static",
    "wrap_formatted",
    "destroy",

    # Core types
    "ErrorKind",
    "ErrorValue",
    "OUT_OF_MEMORY",
    "EMPTY",
    "iter_chain",
    "chain_messages",
    "Sink",
    "render",
    "render_to_stream",
    "render_to_string",
    "MAXLEN",
    "SEPARATOR",
    "ErrChainError",
    "codes",

    # Advanced
    "ErrorFactory",
    "Allocator",
    "SystemAllocator",
    "SystemBlock",
    "FunctionAllocator",
    "TrackingAllocator",
    "ErrChainConfig",
    "load_config",
]
