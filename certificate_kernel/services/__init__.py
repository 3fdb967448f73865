"""SQLAlchemy-backed repositories implementing the domain contracts."""

from certificate_kernel.services.certificate_repository import SqlCertificateRepository
from certificate_kernel.services.comment_repository import SqlCertificateCommentRepository
from certificate_kernel.services.event_repository import SqlCertificateEventRepository
from certificate_kernel.services.tag_repository import SqlCertificateTagRepository

__all__ = [
    "SqlCertificateRepository",
    "SqlCertificateCommentRepository",
    "SqlCertificateEventRepository",
    "SqlCertificateTagRepository",
]
