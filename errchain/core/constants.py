# errchain/core/constants.py
"""
Shared constants for error chains.
"""

from __future__ import annotations

from typing import Final


# Maximum size of a copied or formatted message in bytes, terminator included.
MAXLEN: Final[int] = 1024

# Storage requested for a single node: message reference plus cause reference.
NODE_SIZE: Final[int] = 16

# Placed between a message and the message of its cause when rendering.
SEPARATOR: Final[str] = ": "

OUT_OF_MEMORY_MESSAGE: Final[str] = "Out of memory"
EMPTY_MESSAGE: Final[str] = "<Empty>"

# ---- render statuses ----
RENDER_OK: Final[int] = 0
RENDER_NO_SINK: Final[int] = -1
RENDER_WRITE_FAILED: Final[int] = -1
