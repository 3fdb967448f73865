"""
Certificate -- entities and DTOs of the certificate request lifecycle.

Responsibility:
    The certificate request aggregate as seen by the governance core, its
    audit events and comments, the typed change set recorded with each
    audit event, and the small DTOs exchanged with repositories.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  ORM models convert
    into these types at the repository boundary; domain services never see
    ORM rows.

Invariants enforced:
    - A request is owned by exactly one requester (``owner_id``).
    - Audit events are values: nothing in the kernel mutates one after it
      is created.
    - ``ChangeSet`` keeps per-field changes typed and all other payload
      entries in an explicit ``metadata`` map.

Audit relevance:
    ``ChangeSet.to_payload()`` is the exact JSON persisted with every audit
    event, so its shape is part of the audit trail contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID

from certificate_kernel.domain.values import (
    ActorRole,
    CertificateEventType,
    Priority,
    StatusDescriptor,
)

# Fields an update payload may touch, in snapshot order.
MUTABLE_FIELDS: tuple[str, ...] = (
    "certificate_type",
    "record_number",
    "parties_name",
    "notes",
    "priority",
    "status",
    "cost",
    "additional_cost",
    "order_number",
    "payment_type_id",
    "payment_date",
)

CertificatePatch = Mapping[str, Any]


@dataclass(frozen=True)
class CertificateRequest:
    """
    A tracked request for an official record certificate.

    Contract:
        Costs are integers in minor currency units.  ``status`` is the full
        descriptor from the catalog; update payloads refer to statuses by
        ``name``.
    """

    id: UUID
    owner_id: UUID
    certificate_type: str
    record_number: str
    parties_name: str
    status: StatusDescriptor
    priority: Priority = Priority.NORMAL
    notes: str | None = None
    cost: int | None = None
    additional_cost: int | None = None
    order_number: str | None = None
    payment_type_id: UUID | None = None
    payment_type: str | None = None
    payment_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owned_by(self, actor_id: UUID) -> bool:
        return self.owner_id == actor_id

    def can_be_edited(self) -> bool:
        return self.status.can_edit_certificate

    def total_cost(self) -> int:
        return (self.cost or 0) + (self.additional_cost or 0)

    def field_value(self, name: str) -> Any:
        """Current value of a payload field (``status`` resolves to its name)."""
        if name == "status":
            return self.status.name
        return getattr(self, name, None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "owner_id": str(self.owner_id),
            "certificate_type": self.certificate_type,
            "record_number": self.record_number,
            "parties_name": self.parties_name,
            "notes": self.notes,
            "priority": self.priority.value,
            "status": self.status.to_dict(),
            "cost": self.cost,
            "additional_cost": self.additional_cost,
            "total_cost": self.total_cost(),
            "order_number": self.order_number,
            "payment_type_id": str(self.payment_type_id) if self.payment_type_id else None,
            "payment_type": self.payment_type,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class NewCertificate:
    """Validated input for creating a request (status assigned by storage)."""

    owner_id: UUID
    certificate_type: str
    record_number: str
    parties_name: str
    notes: str | None = None
    priority: Priority = Priority.NORMAL


# ---------------------------------------------------------------------------
# Change tracking
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldChange:
    """Normalized before/after pair for one touched field."""

    before: Any
    after: Any

    def to_dict(self) -> dict[str, Any]:
        return {"before": self.before, "after": self.after}


@dataclass(frozen=True)
class ChangeSet:
    """
    Changes recorded with an audit event.

    ``fields`` holds typed per-field changes; ``metadata`` holds every other
    entry (``bulk_operation``, ``total_certificates``, ``previous_tags``,
    ``new_tags``, ``comment_id``, ``after``).
    """

    fields: Mapping[str, FieldChange] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def with_metadata(self, **entries: Any) -> ChangeSet:
        return ChangeSet(fields=self.fields, metadata={**self.metadata, **entries})

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            name: change.to_dict() for name, change in self.fields.items()
        }
        payload.update(self.metadata)
        return payload


# ---------------------------------------------------------------------------
# Audit events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CertificateEventDraft:
    """An audit event not yet persisted."""

    certificate_id: UUID
    actor_user_id: UUID
    actor_role: ActorRole
    event_type: CertificateEventType
    changes: ChangeSet = field(default_factory=ChangeSet)


@dataclass(frozen=True)
class CertificateEvent:
    """A persisted, append-only audit event."""

    id: UUID
    certificate_id: UUID
    actor_user_id: UUID
    actor_role: ActorRole
    event_type: CertificateEventType
    changes: Mapping[str, Any]
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "certificate_id": str(self.certificate_id),
            "actor_user_id": str(self.actor_user_id),
            "actor_role": self.actor_role.value,
            "event_type": self.event_type.value,
            "changes": dict(self.changes),
            "created_at": self.created_at.isoformat(),
        }


# ---------------------------------------------------------------------------
# Comments and tags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommentDraft:
    certificate_id: UUID
    user_id: UUID
    user_role: ActorRole
    user_name: str
    content: str


@dataclass(frozen=True)
class CertificateComment:
    id: UUID
    certificate_id: UUID
    user_id: UUID
    user_role: ActorRole
    user_name: str
    content: str
    created_at: datetime


@dataclass(frozen=True)
class TagReplacement:
    """Tag ids assigned to a request before and after a replacement."""

    previous_tags: tuple[UUID, ...] = ()
    new_tags: tuple[UUID, ...] = ()

    @property
    def changed(self) -> bool:
        if len(self.previous_tags) != len(self.new_tags):
            return True
        return not set(self.previous_tags) <= set(self.new_tags)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CertificateFilters:
    owner_id: UUID | None = None
    status: str | None = None
    priority: Priority | None = None
    search: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    limit: int | None = None
    offset: int = 0

    @property
    def search_term(self) -> str | None:
        """Trimmed free-text search, or None when blank."""
        if self.search is None or not self.search.strip():
            return None
        return self.search.strip()


@dataclass(frozen=True)
class CertificatePage:
    items: tuple[CertificateRequest, ...]
    total: int
    limit: int
    offset: int
