"""
microbench errors

Structured exceptions used across the harness. Each carries a stable integer
code and a small context dict so the CLI (and tests) can classify failures
without string-matching.

Subclasses
----------
- InvalidArgument  : bad dimension / difficulty / bound / configuration value.
- SearchCancelled  : the proof-of-work stop predicate fired mid-search.
- SearchExhausted  : the proof-of-work iteration cap was reached.

NOTE: Keep this module free of heavy imports so it can be used in hot paths.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(IntEnum):
    """Stable error codes for harness exceptions."""
    GENERIC          = 1000
    INVALID_ARGUMENT = 1001
    SEARCH_CANCELLED = 1002
    SEARCH_EXHAUSTED = 1003


class BenchError(Exception):
    """
    Base class for harness exceptions.

    Parameters
    ----------
    message : str
        Human-readable description.
    code : ErrorCode | int
        Stable code for programmatic handling (default: GENERIC).
    context : Mapping[str, Any] | None
        Optional structured fields (small dict).
    cause : BaseException | None
        Optional underlying exception; also set via `raise ... from ...`.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | int = ErrorCode.GENERIC,
        context: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int = int(code)
        self.context: Dict[str, Any] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause  # type: ignore[attr-defined]

    def __str__(self) -> str:  # pragma: no cover - trivial
        tail = f" context={self.context}" if self.context else ""
        return f"[{self.code}] {self.message}{tail}"

    def to_dict(self) -> Dict[str, Any]:
        """Structured view suitable for logs or `--json` output."""
        out: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.context:
            out["context"] = self.context
        return out


class InvalidArgument(BenchError, ValueError):
    """
    Raised when an input is outside the domain a workload accepts
    (negative matrix dimension, negative difficulty, non-integer bound, ...).

    Context fields
    --------------
    - name  : argument name as the caller spelled it
    - value : offending value (repr-safe)
    """

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        value: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        base: Dict[str, Any] = {}
        if name is not None:
            base["name"] = name
        if value is not None:
            base["value"] = value
        if context:
            base.update(context)
        super().__init__(message, code=ErrorCode.INVALID_ARGUMENT, context=base, cause=cause)
        self.name = name
        self.value = value

    @classmethod
    def negative(cls, name: str, value: Any) -> "InvalidArgument":
        return cls(f"{name} must be >= 0, got {value!r}", name=name, value=value)

    @classmethod
    def not_int(cls, name: str, value: Any) -> "InvalidArgument":
        return cls(
            f"{name} must be an integer, got {type(value).__name__}",
            name=name,
            value=repr(value),
        )


class SearchCancelled(BenchError):
    """Raised when a proof-of-work search is stopped by its stop predicate."""

    def __init__(self, *, tried: int, difficulty: int) -> None:
        super().__init__(
            f"proof-of-work search cancelled after {tried} nonces",
            code=ErrorCode.SEARCH_CANCELLED,
            context={"tried": tried, "difficulty": difficulty},
        )
        self.tried = tried


class SearchExhausted(BenchError):
    """Raised when a proof-of-work search reaches its iteration cap without a hit."""

    def __init__(self, *, tried: int, difficulty: int) -> None:
        super().__init__(
            f"no nonce met difficulty {difficulty} within {tried} attempts",
            code=ErrorCode.SEARCH_EXHAUSTED,
            context={"tried": tried, "difficulty": difficulty},
        )
        self.tried = tried


def require_int(name: str, value: Any) -> int:
    """Return `value` if it is a plain int (bools rejected), else raise InvalidArgument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument.not_int(name, value)
    return value


__all__ = [
    "ErrorCode",
    "BenchError",
    "InvalidArgument",
    "SearchCancelled",
    "SearchExhausted",
    "require_int",
]
