# errchain/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from errchain.core.constants import MAXLEN


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ERRCHAIN_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.errchain/config.yml")

# Top-level YAML section holding our keys
CONFIG_SECTION = "errchain"


@dataclass(frozen=True)
class ErrChainConfig:
    """
    errchain configuration.

    maxlen: Bound for copied/formatted messages in bytes, terminator included
    log_fallbacks: Log sentinel fallbacks on allocation failure at WARNING
        (DEBUG when False)
    """

    maxlen: int = MAXLEN
    log_fallbacks: bool = True

    @classmethod
    def default(cls) -> "ErrChainConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrChainConfig":
        """Build from a mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {unknown}")
        return replace(cls.default(), **{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "ErrChainConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML file. If None, tries:
                1. $ERRCHAIN_CONFIG
                2. ~/.errchain/config.yml

        Returns:
            ErrChainConfig instance (always has code defaults as fallback)
        """
        yaml_data = _load_yaml(config_path)
        if not yaml_data:
            return cls.default()

        section = yaml_data.get(CONFIG_SECTION)
        if not isinstance(section, dict):
            return cls.default()

        return cls.from_dict(section)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {CONFIG_SECTION: asdict(self)}


def _resolve_path(config_path: Optional[Path]) -> Optional[Path]:
    if config_path is not None:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_PATH.expanduser()


def _load_yaml(config_path: Optional[Path]) -> Optional[Dict[str, Any]]:
    """Load YAML file, None if missing or unreadable"""
    path = _resolve_path(config_path)
    if path is None or not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Config file {path} does not contain a mapping, using defaults")
        return None

    return data


def load_config(config_path: Optional[Path] = None) -> ErrChainConfig:
    """
    Load and validate configuration.

    Raises:
        ErrChainError: (CONFIG_INVALID) if validation reports errors
    """
    from .validator import ensure_valid

    config = ErrChainConfig.from_yaml(config_path)
    ensure_valid(config)
    return config
