"""
Module: certificate_kernel.models.comment
Responsibility: ORM persistence for comments on certificate requests.
Architecture position: Kernel > Models.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from certificate_kernel.db.base import Base, UUIDString


class CertificateCommentModel(Base):
    __tablename__ = "certificate_comments"

    __table_args__ = (
        Index("idx_certificate_comments_certificate", "certificate_id", "created_at"),
    )

    certificate_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("certificates.id"), nullable=False,
    )
    user_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)
    user_role: Mapped[str] = mapped_column(String(20), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
