"""
certificate_services._command_types -- command and outcome DTOs.

Responsibility:
    Frozen dataclasses accepted and returned by the orchestrators and
    services in this package: single updates, batch updates (global data,
    per-item overrides, per-item failures, aggregate outcome), creation and
    comment commands.

Architecture position:
    Services -- these types live here because the orchestrators that consume
    them live here.  They depend on kernel domain types only.

Invariants enforced:
    - Per-item overrides expose only the fields a batch may set per item;
      anything else cannot be expressed.
    - ``UNSET`` marks an override field that was not supplied; ``None``
      is an explicit null.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Mapping
from uuid import UUID

from certificate_kernel.domain.batch_gate import BlockedCertificate
from certificate_kernel.domain.certificate import CertificateRequest
from certificate_kernel.domain.transition_validator import TransitionConfirmation
from certificate_kernel.domain.values import UNSET, Actor, Priority


@dataclass(frozen=True)
class UpdateCertificateCommand:
    certificate_id: UUID
    actor: Actor
    changes: Mapping[str, Any]
    confirmation: TransitionConfirmation | None = None


@dataclass(frozen=True)
class GlobalUpdateData:
    """Data applied to every request of a batch."""

    notes: str | None = None
    tag_ids: tuple[UUID, ...] = ()
    comment: str | None = None


@dataclass(frozen=True)
class IndividualCertificateUpdate:
    """Per-item override inside a batch."""

    certificate_id: UUID
    status: Any = UNSET
    cost: Any = UNSET
    additional_cost: Any = UNSET
    order_number: Any = UNSET
    payment_date: date | None | Any = UNSET
    payment_type_id: Any = UNSET
    priority: Priority | str | Any = UNSET

    def provided_fields(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "certificate_id" and getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class BulkUpdateCommand:
    actor: Actor
    certificate_ids: tuple[UUID, ...]
    global_update: GlobalUpdateData = field(default_factory=GlobalUpdateData)
    individual_updates: tuple[IndividualCertificateUpdate, ...] = ()
    # Accepted for parity with single updates; not enforced per item.
    confirmation: TransitionConfirmation | None = None


@dataclass(frozen=True)
class FailedCertificateUpdate:
    certificate_id: UUID
    record_number: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "certificate_id": str(self.certificate_id),
            "record_number": self.record_number,
            "error": self.error,
        }


@dataclass(frozen=True)
class BulkUpdateOutcome:
    """Aggregate result of a batch that passed pre-flight."""

    success_count: int
    failed_count: int
    blocked_count: int
    updated_certificates: tuple[CertificateRequest, ...] = ()
    failed_certificates: tuple[FailedCertificateUpdate, ...] = ()
    blocked_certificates: tuple[BlockedCertificate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "failed_count": self.failed_count,
            "blocked_count": self.blocked_count,
            "updated_certificates": [c.to_dict() for c in self.updated_certificates],
            "failed_certificates": [f.to_dict() for f in self.failed_certificates],
            "blocked_certificates": [b.to_dict() for b in self.blocked_certificates],
        }


@dataclass(frozen=True)
class CreateCertificateCommand:
    actor: Actor
    certificate_type: str
    record_number: str
    parties_name: str
    notes: str | None = None
    priority: Priority | str = Priority.NORMAL


@dataclass(frozen=True)
class CreateCommentCommand:
    certificate_id: UUID
    actor: Actor
    content: str
    author_name: str | None = None
