# errchain/core/errors/__init__.py
"""
Library-level exceptions for errchain.

Error *values* (ErrorValue) are never raised. This package only covers
misuse of the library itself:
- Using a node after its ownership was released
- Reconfiguring allocators after first use
- Format strings that do not match their arguments
- Invalid configuration

No side effects on import.
"""

from . import codes
from .exceptions import ErrChainError

__all__ = ["codes", "ErrChainError"]
