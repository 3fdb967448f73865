"""
Module: certificate_kernel.models.status
Responsibility: ORM persistence for the status catalog and the validation
    requirements attached to statuses.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Status names are unique; the catalog is data, not an enum.
    - Validation names are unique; a validation is shared between statuses.
    - A (status, validation) link exists at most once and carries the
      required field and confirmation statement for that status.  Inactive
      links are kept for history and ignored by the selector.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from certificate_kernel.db.base import TimestampedBase, UUIDString


class CertificateStatusModel(TimestampedBase):
    """One workflow state of the status catalog."""

    __tablename__ = "certificate_statuses"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    can_edit_certificate: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    is_final: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    validation_links: Mapped[list["StatusValidationModel"]] = relationship(
        "StatusValidationModel",
        back_populates="status",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<CertificateStatusModel {self.name}>"


class ValidationModel(TimestampedBase):
    """A reusable transition requirement, shared by the statuses linking it."""

    __tablename__ = "validations"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class StatusValidationModel(TimestampedBase):
    """Attaches a validation to a target status with its per-status rule."""

    __tablename__ = "certificate_status_validations"

    __table_args__ = (
        UniqueConstraint("status_id", "validation_id", name="uq_status_validation"),
    )

    status_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("certificate_statuses.id"), nullable=False,
    )
    validation_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("validations.id"), nullable=False,
    )
    required_field: Mapped[str | None] = mapped_column(String(100), nullable=True)
    confirmation_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    status: Mapped[CertificateStatusModel] = relationship(
        CertificateStatusModel, back_populates="validation_links",
    )
    validation: Mapped[ValidationModel] = relationship(ValidationModel, lazy="joined")
