# errchain/api/__init__.py
"""
errchain User-facing API

Two levels:
1. Module-level functions bound to a process-wide default factory
2. ErrorFactory handles (core package) for explicit allocator/config control
"""

from .default import (
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

__all__ = [
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
]
