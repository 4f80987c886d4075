# errchain/config/__init__.py
"""
errchain Configuration

Code defaults with optional YAML input.
"""

from .loader import ErrChainConfig, load_config
from .validator import validate_config, ensure_valid, ConfigIssue

__all__ = [
    "ErrChainConfig",
    "load_config",
    "validate_config",
    "ensure_valid",
    "ConfigIssue",
]
