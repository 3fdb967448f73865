"""
BatchGate -- lifecycle pre-flight for batch edits.

Responsibility:
    Splits a batch into requests that may be edited and requests whose
    status blocks any batch edit, before a single write happens.

Architecture position:
    Kernel > Domain -- pure, zero I/O.

Invariants enforced:
    - A final status, or a status that does not allow editing, blocks the
      request for every role.  Unlike the single-item path, admins get no
      override here.
    - Order of the input is preserved in both partitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable
from uuid import UUID

from certificate_kernel.domain.certificate import CertificateRequest


@dataclass(frozen=True)
class BlockedCertificate:
    certificate_id: UUID
    record_number: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "certificate_id": str(self.certificate_id),
            "record_number": self.record_number,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class BatchPartition:
    editable: tuple[CertificateRequest, ...]
    blocked: tuple[BlockedCertificate, ...]

    @property
    def has_blocked(self) -> bool:
        return bool(self.blocked)


def blocking_reason(request: CertificateRequest) -> str | None:
    status = request.status
    if status.is_final:
        return f"final status ({status.display_name})"
    if not status.can_edit_certificate:
        return f'status "{status.display_name}" does not allow editing'
    return None


def partition(requests: Iterable[CertificateRequest]) -> BatchPartition:
    editable: list[CertificateRequest] = []
    blocked: list[BlockedCertificate] = []
    for request in requests:
        reason = blocking_reason(request)
        if reason is None:
            editable.append(request)
        else:
            blocked.append(
                BlockedCertificate(
                    certificate_id=request.id,
                    record_number=request.record_number,
                    reason=reason,
                )
            )
    return BatchPartition(editable=tuple(editable), blocked=tuple(blocked))
