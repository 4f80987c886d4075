# errchain/core/errors/codes.py
from __future__ import annotations

from typing import Final


# ---- canonical error codes (stable public contract) ----
# generic
UNKNOWN: Final[str] = "UNKNOWN"
INVALID_ARGUMENT: Final[str] = "INVALID_ARGUMENT"

# ownership
USE_AFTER_RELEASE: Final[str] = "USE_AFTER_RELEASE"

# allocator
ALLOCATOR_LOCKED: Final[str] = "ALLOCATOR_LOCKED"

# construction
INVALID_FORMAT: Final[str] = "INVALID_FORMAT"

# config
CONFIG_INVALID: Final[str] = "CONFIG_INVALID"


# ---- semantic groups (internal helpers) ----

# Caller broke the single-owner discipline or the configure-once rule.
CONTRACT_CODES: Final[set[str]] = {
    USE_AFTER_RELEASE,
    ALLOCATOR_LOCKED,
}

KNOWN_CODES: Final[set[str]] = {
    UNKNOWN,
    INVALID_ARGUMENT,
    USE_AFTER_RELEASE,
    ALLOCATOR_LOCKED,
    INVALID_FORMAT,
    CONFIG_INVALID,
}
