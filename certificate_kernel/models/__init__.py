"""ORM models for the certificate kernel."""

from certificate_kernel.models.certificate import CertificateModel, PaymentTypeModel
from certificate_kernel.models.comment import CertificateCommentModel
from certificate_kernel.models.event import CertificateEventModel
from certificate_kernel.models.status import (
    CertificateStatusModel,
    StatusValidationModel,
    ValidationModel,
)
from certificate_kernel.models.tag import (
    CertificateTagAssignmentModel,
    CertificateTagModel,
)

__all__ = [
    "CertificateModel",
    "PaymentTypeModel",
    "CertificateCommentModel",
    "CertificateEventModel",
    "CertificateStatusModel",
    "StatusValidationModel",
    "ValidationModel",
    "CertificateTagAssignmentModel",
    "CertificateTagModel",
]
