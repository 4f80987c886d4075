# errchain/api/default.py
"""
Process-wide default factory and the module-level API bound to it
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from ..core.allocator import AllocFn, FreeFn
from ..core.factory import ErrorFactory, Text
from ..core.value import ErrorValue


# Application-level factory (singleton at API layer).
# Core layer (ErrorFactory) has no global state of its own.
_DEFAULT_FACTORY: Optional[ErrorFactory] = None
_DEFAULT_FACTORY_LOCK = threading.Lock()


def default_factory() -> ErrorFactory:
    """
    Get or create the process-wide default factory.

    Created on first use with the code defaults. Call set_allocators() or
    install_default_factory() before anything else if that is not wanted.
    """
    global _DEFAULT_FACTORY

    if _DEFAULT_FACTORY is None:
        with _DEFAULT_FACTORY_LOCK:
            if _DEFAULT_FACTORY is None:
                _DEFAULT_FACTORY = ErrorFactory()

    return _DEFAULT_FACTORY


def install_default_factory(factory: Optional[ErrorFactory]) -> Optional[ErrorFactory]:
    """
    Replace the default factory; None resets to lazily created defaults.

    Returns the previous factory. Errors built by the previous factory must
    still be destroyed through it.
    """
    global _DEFAULT_FACTORY

    with _DEFAULT_FACTORY_LOCK:
        previous = _DEFAULT_FACTORY
        _DEFAULT_FACTORY = factory

    return previous


def set_allocators(alloc_fn: AllocFn, free_fn: FreeFn) -> None:
    """
    Change the allocation functions of the default factory.

    Must be called once, before any other use of the module-level API.

    Raises:
        ErrChainError: (ALLOCATOR_LOCKED) if the default factory was
            already used or configured
    """
    default_factory().set_allocators(alloc_fn, free_fn)


def new_from_copy(s: Optional[Text]) -> ErrorValue:
    return default_factory().new_from_copy(s)


def new_from_static(s: Optional[Text]) -> ErrorValue:
    return default_factory().new_from_static(s)


def new_formatted(fmt: Optional[str], *args: Any) -> ErrorValue:
    return default_factory().new_formatted(fmt, *args)


def wrap_copy(inner: Optional[ErrorValue], s: Optional[Text]) -> ErrorValue:
    return default_factory().wrap_copy(inner, s)


def wrap_static(inner: Optional[ErrorValue], s: Optional[Text]) -> ErrorValue:
    return default_factory().wrap_static(inner, s)


def wrap_formatted(inner: Optional[ErrorValue], fmt: Optional[str], *args: Any) -> ErrorValue:
    return default_factory().wrap_formatted(inner, fmt, *args)


def destroy(e: Optional[ErrorValue]) -> None:
    default_factory().destroy(e)
