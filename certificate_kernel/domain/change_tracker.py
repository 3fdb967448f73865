"""
ChangeTracker -- before/after snapshots and field-level diffs.

Responsibility:
    Captures the mutable fields of a request as JSON-friendly values, diffs
    two snapshots over exactly the fields an update touched, and classifies
    the resulting audit event.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O.  Runs only after a
    successful write.

Invariants enforced:
    - A diff contains exactly the touched keys, never more.
    - Empty string, ``None`` and absent all normalize to ``None``, so an
      unchanged blank field shows ``None -> None``.
    - ``status_changed`` only when the payload touched nothing but
      ``status``.

Audit relevance:
    The diff is the ``fields`` part of every ``updated`` / ``status_changed``
    / ``bulk_updated`` event.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping
from uuid import UUID

from certificate_kernel.domain.certificate import CertificateRequest, FieldChange
from certificate_kernel.domain.values import CertificateEventType


@dataclass(frozen=True)
class CertificateSnapshot:
    certificate_type: str | None
    record_number: str | None
    parties_name: str | None
    notes: str | None
    priority: str | None
    status: str | None
    cost: int | None
    additional_cost: int | None
    order_number: str | None
    payment_type: str | None
    payment_type_id: str | None
    payment_date: str | None

    def value_of(self, name: str) -> Any:
        return getattr(self, name, None)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def normalize(value: Any) -> Any:
    """Collapse ``''`` and ``None`` into ``None``; render ids and dates as text."""
    if value is None or value == "":
        return None
    return _plain(value)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def snapshot(request: CertificateRequest) -> CertificateSnapshot:
    return CertificateSnapshot(
        certificate_type=request.certificate_type,
        record_number=request.record_number,
        parties_name=request.parties_name,
        notes=request.notes,
        priority=_plain(request.priority),
        status=request.status.name,
        cost=request.cost,
        additional_cost=request.additional_cost,
        order_number=request.order_number,
        payment_type=_plain(_first(request.payment_type, request.payment_type_id)),
        payment_type_id=_plain(request.payment_type_id),
        payment_date=_plain(request.payment_date),
    )


def updated_snapshot(
    updated: CertificateRequest, patch: Mapping[str, Any]
) -> CertificateSnapshot:
    """Snapshot of a freshly written request.

    Payment fields fall back to the applied patch when the stored entity does
    not report them back.
    """
    base = snapshot(updated)
    patched_type_id = _plain(patch.get("payment_type_id"))
    return CertificateSnapshot(
        **{
            **base.to_dict(),
            "payment_type": _first(base.payment_type, patched_type_id),
            "payment_type_id": _first(base.payment_type_id, patched_type_id),
            "payment_date": _first(base.payment_date, _plain(patch.get("payment_date"))),
        }
    )


def diff(
    before: CertificateSnapshot,
    after: CertificateSnapshot,
    touched_fields: Iterable[str],
) -> dict[str, FieldChange]:
    return {
        name: FieldChange(
            before=normalize(before.value_of(name)),
            after=normalize(after.value_of(name)),
        )
        for name in touched_fields
    }


def classify(touched_fields: Iterable[str]) -> CertificateEventType:
    if list(touched_fields) == ["status"]:
        return CertificateEventType.STATUS_CHANGED
    return CertificateEventType.UPDATED
