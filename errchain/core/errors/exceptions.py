# errchain/core/errors/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import codes


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unstringifiable>"


def _normalize_error_code(code: Any) -> str:
    """
    Keep error_code stable and finite.
    Unknown codes are downgraded to UNKNOWN.
    """
    c = _safe_str(code or codes.UNKNOWN).strip() or codes.UNKNOWN
    if c in codes.KNOWN_CODES:
        return c
    return codes.UNKNOWN


@dataclass
class ErrChainError(Exception):
    """
    The one exception type raised by errchain.

    Raised only for misuse of the library. Allocation failures and absent
    input are reported through the sentinel values instead.
    """
    message: str
    error_code: str = codes.UNKNOWN
    details: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        self.error_code = _normalize_error_code(self.error_code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    @property
    def is_contract_violation(self) -> bool:
        return self.error_code in codes.CONTRACT_CODES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    # -------- factories --------

    @classmethod
    def invalid_argument(
        cls,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ErrChainError":
        return cls(
            message=message,
            error_code=codes.INVALID_ARGUMENT,
            details=details or {},
        )

    @classmethod
    def use_after_release(cls, message: str) -> "ErrChainError":
        return cls(
            message="error value used after its ownership was released",
            error_code=codes.USE_AFTER_RELEASE,
            details={"node_message": message},
        )

    @classmethod
    def allocator_locked(cls, reason: str) -> "ErrChainError":
        return cls(
            message=f"allocators cannot be changed: {reason}",
            error_code=codes.ALLOCATOR_LOCKED,
        )

    @classmethod
    def invalid_format(
        cls,
        fmt: str,
        args: Any,
        *,
        cause: Optional[BaseException] = None,
    ) -> "ErrChainError":
        return cls(
            message=f"format string {fmt!r} does not match its arguments",
            error_code=codes.INVALID_FORMAT,
            details={"format": fmt, "args": _safe_str(args)},
            cause=cause,
        )

    @classmethod
    def config_invalid(
        cls,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ErrChainError":
        return cls(
            message=message,
            error_code=codes.CONFIG_INVALID,
            details=details or {},
        )
