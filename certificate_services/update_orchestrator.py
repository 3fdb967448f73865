"""
certificate_services.update_orchestrator -- single-request update.

Responsibility:
    Applies one actor's changes to one certificate request: access check,
    field filtering, transition validation, the write, and the audit event.
    Thin coordinator -- every decision is delegated to a kernel domain
    service.

Architecture position:
    Services layer.  Imports kernel domain services and contracts only.

Invariants enforced:
    - Ownership, then editability, are checked before anything else.
    - Fields the role may not write are dropped silently.
    - An update whose cleaned payload is empty performs no write and records
      no event; the unchanged request is returned.
    - Only an admin changing ``status`` to a different name triggers
      transition validation.  A failed validation fetch or check stops the
      update before any write.
    - Exactly one audit event per successful write, typed ``status_changed``
      when only ``status`` was touched and ``updated`` otherwise.  Its
      failure never changes the result.

Failure modes:
    CERTIFICATE_NOT_FOUND, CERTIFICATE_ACCESS_DENIED,
    CERTIFICATE_CANNOT_BE_EDITED, STATUS_VALIDATION_CONFIRMATION_REQUIRED,
    STATUS_VALIDATION_REQUIRED_FIELD, repository failures passed through,
    UNEXPECTED_ERROR for anything raised.

Audit relevance:
    The recorded ``ChangeSet`` holds normalized before/after values for
    exactly the fields in the applied payload.
"""

from __future__ import annotations

from certificate_kernel.domain import access_policy, change_tracker
from certificate_kernel.domain.certificate import (
    CertificateEventDraft,
    CertificateRequest,
    ChangeSet,
)
from certificate_kernel.domain.contracts import (
    CertificateEventRepository,
    CertificateRepository,
    StatusValidationSource,
)
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.transition_validator import TransitionValidator
from certificate_kernel.domain.values import normalize_status_name
from certificate_kernel.exceptions import (
    CertificateAccessDeniedError,
    CertificateCannotBeEditedError,
    CertificateNotFoundError,
)
from certificate_kernel.logging_config import LogContext, get_logger
from certificate_services._command_types import UpdateCertificateCommand
from certificate_services.audit_trail import AuditTrail

logger = get_logger("services.update_orchestrator")


class UpdateOrchestrator:
    """Coordinates the update of a single certificate request."""

    def __init__(
        self,
        certificates: CertificateRepository,
        events: CertificateEventRepository,
        validations: StatusValidationSource,
        validator: TransitionValidator | None = None,
    ) -> None:
        self._certificates = certificates
        self._audit = AuditTrail(events)
        self._validations = validations
        self._validator = validator or TransitionValidator()

    def execute(self, command: UpdateCertificateCommand) -> Result[CertificateRequest]:
        with LogContext.bind(
            actor_id=str(command.actor.user_id),
            certificate_id=str(command.certificate_id),
            operation="update_certificate",
        ):
            try:
                return self._execute(command)
            except Exception as exc:
                logger.exception("certificate_update_unexpected_error")
                return Result.from_exception(exc)

    def _execute(self, command: UpdateCertificateCommand) -> Result[CertificateRequest]:
        actor = command.actor
        certificate_id = command.certificate_id

        found = self._certificates.find_by_id(certificate_id)
        if not found.is_success:
            return Result.fail(found.error)
        request = found.value
        if request is None:
            return Result.fail(CertificateNotFoundError(certificate_id))

        decision = access_policy.evaluate(request, actor.user_id, actor.role)
        if not decision.can_access:
            logger.info("certificate_access_denied")
            return Result.fail(CertificateAccessDeniedError(certificate_id, actor.user_id))
        if not decision.can_edit:
            logger.info(
                "certificate_edit_denied",
                extra={"status_name": request.status.name},
            )
            return Result.fail(
                CertificateCannotBeEditedError(certificate_id, request.status.name)
            )

        patch = access_policy.clean_update_data(
            access_policy.filter_fields_by_role(command.changes, actor.role)
        )
        if not patch:
            logger.info("certificate_update_noop")
            return Result.ok(request)

        target_status = patch.get("status")
        if isinstance(target_status, str):
            target_status = patch["status"] = normalize_status_name(target_status)
        if (
            decision.is_admin
            and target_status is not None
            and target_status != request.status.name
        ):
            rules = self._validations.fetch_active_validations(target_status)
            if not rules.is_success:
                return Result.fail(rules.error)
            check = self._validator.validate(
                rules.value or (), command.confirmation, request, patch
            )
            if not check.is_valid:
                logger.info(
                    "status_transition_rejected",
                    extra={
                        "from_status": request.status.name,
                        "to_status": target_status,
                        "error_code": check.error_code,
                        "missing_field": check.missing_field,
                    },
                )
                return Result.fail(check.to_error(target_status))

        before = change_tracker.snapshot(request)
        updated = self._certificates.update(certificate_id, patch)
        if not updated.is_success:
            logger.error(
                "certificate_update_failed",
                extra={"error_code": updated.error_code, "fields": list(patch)},
            )
            return updated

        touched = list(patch)
        after = change_tracker.updated_snapshot(updated.value, patch)
        event_type = change_tracker.classify(touched)
        self._audit.record(
            CertificateEventDraft(
                certificate_id=certificate_id,
                actor_user_id=actor.user_id,
                actor_role=actor.role,
                event_type=event_type,
                changes=ChangeSet(fields=change_tracker.diff(before, after, touched)),
            )
        )

        logger.info(
            "certificate_updated",
            extra={"fields": touched, "event_type": event_type.value},
        )
        return updated
