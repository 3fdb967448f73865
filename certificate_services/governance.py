"""
certificate_services.governance -- DI root for the certificate lifecycle.

Responsibility:
    Creates every repository, orchestrator and service exactly once for a
    session and wires them with the active configuration.  No orchestrator
    constructs its own dependencies.

Architecture position:
    Services -- top of the service layer; the only place kernel repositories
    are constructed and composed.

Usage:
    config = get_active_config()
    with session_scope() as session:
        governance = CertificateGovernance(session, config)
        result = governance.update.execute(command)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from certificate_config.schema import CertificateConfig
from certificate_kernel.domain.clock import Clock, SystemClock
from certificate_kernel.domain.contracts import StatusValidationSource
from certificate_kernel.domain.transition_validator import TransitionValidator
from certificate_kernel.selectors.status_validation_selector import (
    SelectorStatusValidationSource,
)
from certificate_kernel.services import (
    SqlCertificateCommentRepository,
    SqlCertificateEventRepository,
    SqlCertificateRepository,
    SqlCertificateTagRepository,
)
from certificate_services.bulk_update_orchestrator import BulkUpdateOrchestrator
from certificate_services.certificate_service import CertificateService
from certificate_services.comment_service import CommentService
from certificate_services.config_validation_source import ConfigStatusValidationSource
from certificate_services.update_orchestrator import UpdateOrchestrator


class CertificateGovernance:
    """Wires the governance stack over one SQLAlchemy session."""

    def __init__(
        self,
        session: Session,
        config: CertificateConfig,
        clock: Clock | None = None,
        validations_from_config: bool = False,
    ) -> None:
        self._session = session
        self._clock = clock or SystemClock()
        self.config = config

        # Repositories
        self.certificates = SqlCertificateRepository(
            session, self._clock, default_status=config.default_status,
        )
        self.events = SqlCertificateEventRepository(session, self._clock)
        self.tags = SqlCertificateTagRepository(session, self._clock)
        self.comments = SqlCertificateCommentRepository(session, self._clock)

        self.validations: StatusValidationSource
        if validations_from_config:
            self.validations = ConfigStatusValidationSource(config)
        else:
            self.validations = SelectorStatusValidationSource(session)

        self.validator = TransitionValidator(config.default_confirmation_statement)

        # Orchestrators and services
        self.update = UpdateOrchestrator(
            self.certificates, self.events, self.validations, self.validator,
        )
        self.bulk_update = BulkUpdateOrchestrator(
            self.certificates,
            self.events,
            self.tags,
            self.comments,
            max_limit=config.bulk_update_max_limit,
            comment_author=config.bulk_comment_author,
        )
        self.certificate_service = CertificateService(
            self.certificates, self.events, default_page_limit=config.default_page_limit,
        )
        self.comment_service = CommentService(self.certificates, self.comments)
