"""
Module: certificate_kernel.models.event
Responsibility: ORM persistence for the certificate audit trail.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Audit events are append-only; UPDATE and DELETE are rejected by the
      listeners in db/immutability.py.

Audit relevance:
    Every write to a certificate request produces at most one row here per
    side effect (update, tags, comment).  ``changes`` holds the JSON payload
    of the recorded ``ChangeSet``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from certificate_kernel.db.base import Base, UUIDString


class CertificateEventModel(Base):
    __tablename__ = "certificate_events"

    __table_args__ = (
        Index("idx_certificate_events_certificate", "certificate_id", "created_at"),
    )

    certificate_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("certificates.id"), nullable=False,
    )
    actor_user_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)
    actor_role: Mapped[str] = mapped_column(String(20), nullable=False)
    event_type: Mapped[str] = mapped_column(String(30), nullable=False)
    changes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<CertificateEventModel {self.event_type} {self.certificate_id}>"
