"""
certificate_services.certificate_service -- create, read and list requests.

Responsibility:
    Request creation with input validation and a ``created`` audit event,
    access-checked single reads, role-scoped listing, and access-checked
    reads of a request's audit trail.

Architecture position:
    Services layer, beside the update orchestrators.

Invariants enforced:
    - Text inputs are trimmed; blank type, record number or parties name are
      rejected before any write.
    - Clients only ever see their own requests; admins see all.
    - The ``created`` event is best-effort, like every audit event.

Failure modes:
    INVALID_CERTIFICATE_TYPE, INVALID_RECORD_NUMBER, INVALID_PARTIES_NAME,
    INVALID_PRIORITY, CERTIFICATE_NOT_FOUND, CERTIFICATE_ACCESS_DENIED,
    repository failures passed through.
"""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID

from certificate_kernel.domain import access_policy
from certificate_kernel.domain.certificate import (
    CertificateEvent,
    CertificateEventDraft,
    CertificateFilters,
    CertificatePage,
    CertificateRequest,
    ChangeSet,
    NewCertificate,
)
from certificate_kernel.domain.contracts import (
    CertificateEventRepository,
    CertificateRepository,
)
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import Actor, CertificateEventType, Priority
from certificate_kernel.exceptions import (
    CertificateAccessDeniedError,
    CertificateNotFoundError,
    InvalidCertificateTypeError,
    InvalidPartiesNameError,
    InvalidPriorityError,
    InvalidRecordNumberError,
)
from certificate_kernel.logging_config import LogContext, get_logger
from certificate_services._command_types import CreateCertificateCommand
from certificate_services.audit_trail import AuditTrail

logger = get_logger("services.certificate_service")

DEFAULT_PAGE_LIMIT = 50


def _parse_priority(value: Priority | str | None) -> Priority | None:
    if value is None:
        return Priority.NORMAL
    try:
        return Priority(value)
    except ValueError:
        return None


class CertificateService:
    """Creation and read access to certificate requests."""

    def __init__(
        self,
        certificates: CertificateRepository,
        events: CertificateEventRepository,
        default_page_limit: int = DEFAULT_PAGE_LIMIT,
    ) -> None:
        self._certificates = certificates
        self._events = events
        self._audit = AuditTrail(events)
        self._default_page_limit = default_page_limit

    def create_certificate(
        self, command: CreateCertificateCommand
    ) -> Result[CertificateRequest]:
        with LogContext.bind(
            actor_id=str(command.actor.user_id), operation="create_certificate"
        ):
            certificate_type = (command.certificate_type or "").strip()
            if not certificate_type:
                return Result.fail(InvalidCertificateTypeError(command.certificate_type))
            record_number = (command.record_number or "").strip()
            if not record_number:
                return Result.fail(InvalidRecordNumberError(command.record_number))
            parties_name = (command.parties_name or "").strip()
            if not parties_name:
                return Result.fail(InvalidPartiesNameError(command.parties_name))
            priority = _parse_priority(command.priority)
            if priority is None:
                return Result.fail(InvalidPriorityError(command.priority))

            notes = command.notes.strip() if command.notes else None
            created = self._certificates.create(
                NewCertificate(
                    owner_id=command.actor.user_id,
                    certificate_type=certificate_type,
                    record_number=record_number,
                    parties_name=parties_name,
                    notes=notes or None,
                    priority=priority,
                )
            )
            if not created.is_success:
                logger.error(
                    "certificate_create_failed",
                    extra={"error_code": created.error_code},
                )
                return created

            certificate = created.value
            self._audit.record(
                CertificateEventDraft(
                    certificate_id=certificate.id,
                    actor_user_id=command.actor.user_id,
                    actor_role=command.actor.role,
                    event_type=CertificateEventType.CREATED,
                    changes=ChangeSet(
                        metadata={
                            "after": {
                                "certificate_type": certificate.certificate_type,
                                "record_number": certificate.record_number,
                                "parties_name": certificate.parties_name,
                                "notes": certificate.notes,
                                "priority": certificate.priority.value,
                                "status": certificate.status.name,
                            }
                        }
                    ),
                )
            )
            logger.info(
                "certificate_created",
                extra={"new_certificate_id": str(certificate.id)},
            )
            return created

    def get_certificate(
        self, certificate_id: UUID, actor: Actor
    ) -> Result[CertificateRequest]:
        found = self._certificates.find_by_id(certificate_id)
        if not found.is_success:
            return Result.fail(found.error)
        if found.value is None:
            return Result.fail(CertificateNotFoundError(certificate_id))
        decision = access_policy.evaluate(found.value, actor.user_id, actor.role)
        if not decision.can_access:
            return Result.fail(CertificateAccessDeniedError(certificate_id, actor.user_id))
        return Result.ok(found.value)

    def list_certificates(
        self, actor: Actor, filters: CertificateFilters | None = None
    ) -> Result[CertificatePage]:
        filters = filters or CertificateFilters()
        if not actor.is_admin:
            filters = replace(filters, owner_id=actor.user_id)
        if filters.limit is None:
            filters = replace(filters, limit=self._default_page_limit)
        return self._certificates.find_all(filters)

    def list_certificate_events(
        self, certificate_id: UUID, actor: Actor
    ) -> Result[list[CertificateEvent]]:
        access = self.get_certificate(certificate_id, actor)
        if not access.is_success:
            return Result.fail(access.error)
        return self._events.list_by_certificate_id(certificate_id)
