# errchain/config/validator.py
"""
Configuration Validator

Validates configuration for illegal/misleading values.
Returns structured issues with level (warn/error), path, message, hint.
"""

import logging
from dataclasses import dataclass
from typing import List, Literal

from errchain.core.constants import MAXLEN
from errchain.core.errors import ErrChainError
from .loader import ErrChainConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "errchain.maxlen"
    message: str
    hint: str = ""

    def __str__(self) -> str:
        hint_str = f" (hint: {self.hint})" if self.hint else ""
        return f"[{self.level}] [{self.path}] {self.message}{hint_str}"


def validate_config(config: ErrChainConfig) -> List[ConfigIssue]:
    """
    Validate configuration.

    Returns:
        List of issues (warn/error level)
    """
    issues = []

    if isinstance(config.maxlen, bool) or not isinstance(config.maxlen, int):
        issues.append(ConfigIssue(
            level="error",
            path="errchain.maxlen",
            message=f"maxlen must be an integer, got {type(config.maxlen).__name__}",
        ))
    elif config.maxlen < 2:
        issues.append(ConfigIssue(
            level="error",
            path="errchain.maxlen",
            message=f"maxlen={config.maxlen} leaves no room for a message",
            hint="Use at least 2 (one byte of text plus the terminator)",
        ))
    elif config.maxlen != MAXLEN:
        issues.append(ConfigIssue(
            level="warn",
            path="errchain.maxlen",
            message=f"maxlen={config.maxlen} differs from the default {MAXLEN}",
            hint="Messages will truncate at a different length than other deployments",
        ))

    if not isinstance(config.log_fallbacks, bool):
        issues.append(ConfigIssue(
            level="error",
            path="errchain.log_fallbacks",
            message=f"log_fallbacks must be a boolean, got {config.log_fallbacks!r}",
        ))

    return issues


def ensure_valid(config: ErrChainConfig) -> List[ConfigIssue]:
    """
    Validate configuration, logging warnings and raising on errors.

    Returns:
        The warn-level issues

    Raises:
        ErrChainError: (CONFIG_INVALID) if any error-level issue is found
    """
    issues = validate_config(config)

    warnings = [issue for issue in issues if issue.level == "warn"]
    for issue in warnings:
        logger.warning(str(issue))

    errors = [issue for issue in issues if issue.level == "error"]
    if errors:
        raise ErrChainError.config_invalid(
            "; ".join(issue.message for issue in errors),
            details={"issues": [issue.path for issue in errors]},
        )

    return warnings
