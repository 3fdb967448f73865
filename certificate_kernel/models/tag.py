"""
Module: certificate_kernel.models.tag
Responsibility: ORM persistence for tags and their assignment to requests.
Architecture position: Kernel > Models.

Invariants enforced:
    - A tag is assigned to a request at most once.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from certificate_kernel.db.base import Base, TimestampedBase, UUIDString


class CertificateTagModel(TimestampedBase):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)


class CertificateTagAssignmentModel(Base):
    __tablename__ = "certificate_tags"

    __table_args__ = (
        UniqueConstraint("certificate_id", "tag_id", name="uq_certificate_tag"),
    )

    certificate_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("certificates.id"), nullable=False,
    )
    tag_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("tags.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
