"""
Module: certificate_kernel.models.certificate
Responsibility: ORM persistence for certificate requests and payment types.
Architecture position: Kernel > Models.  May import from db/base.py and
    sibling models.

Invariants enforced:
    - Every request references exactly one catalog status and one owner.
    - Costs are integer minor units.
    - Requests are never deleted; no DELETE path exists in the repositories.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from certificate_kernel.db.base import TimestampedBase, UUIDString
from certificate_kernel.models.status import CertificateStatusModel


class PaymentTypeModel(TimestampedBase):
    __tablename__ = "payment_types"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CertificateModel(TimestampedBase):
    """A certificate request row."""

    __tablename__ = "certificates"

    __table_args__ = (
        Index("idx_certificates_owner", "owner_id"),
        Index("idx_certificates_status", "status_id"),
    )

    owner_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)
    certificate_type: Mapped[str] = mapped_column(String(100), nullable=False)
    record_number: Mapped[str] = mapped_column(String(100), nullable=False)
    parties_name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    status_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("certificate_statuses.id"), nullable=False,
    )
    cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    additional_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    order_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payment_type_id: Mapped[UUID | None] = mapped_column(
        UUIDString(), ForeignKey("payment_types.id"), nullable=True,
    )
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    status: Mapped[CertificateStatusModel] = relationship(
        CertificateStatusModel, lazy="joined",
    )
    payment_type: Mapped[PaymentTypeModel | None] = relationship(
        PaymentTypeModel, lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<CertificateModel {self.record_number} ({self.id})>"
