"""
certificate_services -- orchestration of the certificate request lifecycle.

Responsibility:
    Multi-step operations over kernel repositories and domain services:
    single and batch updates, creation and reads, comments, catalog sync,
    and the ``CertificateGovernance`` wiring root.

Architecture position:
    Services -- above ``certificate_kernel`` and ``certificate_config``.

    Dependency direction:
        certificate_services -> certificate_kernel  (allowed)
        certificate_services -> certificate_config  (allowed)
        certificate_kernel   -> certificate_services (FORBIDDEN)
"""

from certificate_services._command_types import (
    BulkUpdateCommand,
    BulkUpdateOutcome,
    CreateCertificateCommand,
    CreateCommentCommand,
    FailedCertificateUpdate,
    GlobalUpdateData,
    IndividualCertificateUpdate,
    UpdateCertificateCommand,
)
from certificate_services.bulk_update_orchestrator import BulkUpdateOrchestrator
from certificate_services.certificate_service import CertificateService
from certificate_services.comment_service import CommentService
from certificate_services.config_validation_source import ConfigStatusValidationSource
from certificate_services.governance import CertificateGovernance
from certificate_services.update_orchestrator import UpdateOrchestrator

__all__ = [
    "BulkUpdateCommand",
    "BulkUpdateOrchestrator",
    "BulkUpdateOutcome",
    "CertificateGovernance",
    "CertificateService",
    "CommentService",
    "ConfigStatusValidationSource",
    "CreateCertificateCommand",
    "CreateCommentCommand",
    "FailedCertificateUpdate",
    "GlobalUpdateData",
    "IndividualCertificateUpdate",
    "UpdateCertificateCommand",
    "UpdateOrchestrator",
]
