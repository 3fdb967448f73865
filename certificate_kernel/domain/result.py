"""
Result -- tagged success/failure value returned by every governance operation.

Responsibility:
    Carries either a value or a typed ``CertificateKernelError`` across the
    domain boundary so that expected failures (not found, access denied,
    validation) are data, not control flow.

Architecture position:
    Kernel > Domain -- pure, zero I/O.

Invariants enforced:
    - Exactly one of ``value`` / ``error`` is meaningful; ``is_success`` is
      derived from ``error is None``.
    - A failure's ``error_code`` always comes from the carried exception's
      ``code`` class attribute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from certificate_kernel.exceptions import (
    CertificateErrorCode,
    CertificateKernelError,
    UnexpectedError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: a value on success, a typed error otherwise."""

    value: T | None = None
    error: CertificateKernelError | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> CertificateErrorCode | None:
        return self.error.code if self.error is not None else None

    @property
    def message(self) -> str | None:
        return str(self.error) if self.error is not None else None

    @property
    def details(self) -> dict[str, Any]:
        return self.error.details if self.error is not None else {}

    @classmethod
    def ok(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: CertificateKernelError) -> Result[T]:
        return cls(error=error)

    @classmethod
    def from_exception(cls, exc: Exception) -> Result[T]:
        """Wrap an arbitrary exception, keeping typed kernel errors as-is."""
        if isinstance(exc, CertificateKernelError):
            return cls(error=exc)
        return cls(error=UnexpectedError(f"{type(exc).__name__}: {exc}"))

    def unwrap(self) -> T:
        """Return the value or raise the carried typed exception."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        if self.error is None:
            return {"success": True, "data": self.value}
        return {
            "success": False,
            "error": self.error.code.value,
            "message": str(self.error),
            "details": self.details,
        }
