"""
certificate_services.bulk_update_orchestrator -- batch update of requests.

Responsibility:
    Applies shared data (notes, tags, a comment) and per-request overrides to
    up to ``max_limit`` certificate requests in one operation.

Architecture position:
    Services layer.  Coordinates kernel repositories, the BatchGate and the
    ChangeTracker; holds no rules of its own beyond the merge of global and
    per-item data.

Invariants enforced:
    - Pre-flight is all-or-nothing: a non-admin actor, an empty or oversized
      list, any unknown id, or any blocked request rejects the whole batch
      before a single write.
    - The mutation phase is best-effort per item: a failed write is
      collected and the next item is still processed.
    - Items are processed strictly in order, each fully (write, audit event)
      before the next.  Tags and comments follow the write loop.
    - Audit, tag and comment failures are logged and never alter the result.

Failure modes:
    CERTIFICATE_ACCESS_DENIED, BULK_UPDATE_EMPTY_LIST,
    BULK_UPDATE_MAX_LIMIT_EXCEEDED, CERTIFICATE_NOT_FOUND (details list
    every missing id), BULK_UPDATE_CERTIFICATES_BLOCKED (details list every
    blocked request with its reason).

Audit relevance:
    Every written request gets a ``bulk_updated`` event flagged
    ``bulk_operation`` with the batch size; tag and comment side effects
    record ``tags_changed`` / ``comment_added``.
"""

from __future__ import annotations

from typing import Any

from certificate_kernel.domain import batch_gate, change_tracker
from certificate_kernel.domain.certificate import (
    CertificateEventDraft,
    CertificateRequest,
    ChangeSet,
    CommentDraft,
)
from certificate_kernel.domain.contracts import (
    CertificateCommentRepository,
    CertificateEventRepository,
    CertificateRepository,
    CertificateTagRepository,
)
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import Actor, CertificateEventType
from certificate_kernel.exceptions import (
    BulkUpdateEmptyListError,
    BulkUpdateLimitExceededError,
    CertificateAccessDeniedError,
    CertificateNotFoundError,
    CertificatesBlockedError,
)
from certificate_kernel.logging_config import LogContext, get_logger
from certificate_services._command_types import (
    BulkUpdateCommand,
    BulkUpdateOutcome,
    FailedCertificateUpdate,
    GlobalUpdateData,
    IndividualCertificateUpdate,
)
from certificate_services.audit_trail import AuditTrail, run_best_effort

logger = get_logger("services.bulk_update_orchestrator")

DEFAULT_MAX_LIMIT = 50
DEFAULT_COMMENT_AUTHOR = "Admin"


def merge_update_data(
    global_update: GlobalUpdateData,
    individual: IndividualCertificateUpdate | None,
) -> dict[str, Any]:
    """Payload for one request: non-blank global notes plus its overrides."""
    patch: dict[str, Any] = {}
    if global_update.notes is not None and global_update.notes.strip():
        patch["notes"] = global_update.notes
    if individual is not None:
        patch.update(individual.provided_fields())
    return patch


class BulkUpdateOrchestrator:
    """Coordinates a batch update across many certificate requests."""

    def __init__(
        self,
        certificates: CertificateRepository,
        events: CertificateEventRepository,
        tags: CertificateTagRepository,
        comments: CertificateCommentRepository,
        max_limit: int = DEFAULT_MAX_LIMIT,
        comment_author: str = DEFAULT_COMMENT_AUTHOR,
    ) -> None:
        self._certificates = certificates
        self._audit = AuditTrail(events)
        self._tags = tags
        self._comments = comments
        self._max_limit = max_limit
        self._comment_author = comment_author

    def execute(self, command: BulkUpdateCommand) -> Result[BulkUpdateOutcome]:
        with LogContext.bind(
            actor_id=str(command.actor.user_id),
            operation="bulk_update_certificates",
        ):
            try:
                return self._execute(command)
            except Exception as exc:
                logger.exception("bulk_update_unexpected_error")
                return Result.from_exception(exc)

    def _execute(self, command: BulkUpdateCommand) -> Result[BulkUpdateOutcome]:
        actor = command.actor
        ids = tuple(command.certificate_ids)

        if not actor.is_admin:
            return Result.fail(CertificateAccessDeniedError(None, actor.user_id))
        if not ids:
            return Result.fail(BulkUpdateEmptyListError())
        if len(ids) > self._max_limit:
            return Result.fail(BulkUpdateLimitExceededError(len(ids), self._max_limit))

        logger.info("bulk_update_started", extra={"total_certificates": len(ids)})

        requests: list[CertificateRequest] = []
        missing: list[Any] = []
        for certificate_id in ids:
            found = self._certificates.find_by_id(certificate_id)
            if not found.is_success:
                return Result.fail(found.error)
            if found.value is None:
                missing.append(certificate_id)
            else:
                requests.append(found.value)
        if missing:
            logger.info("bulk_update_not_found", extra={"missing_ids": [str(m) for m in missing]})
            return Result.fail(CertificateNotFoundError(*missing))

        partition = batch_gate.partition(requests)
        if partition.has_blocked:
            logger.warning(
                "bulk_update_blocked",
                extra={
                    "blocked_count": len(partition.blocked),
                    "total_certificates": len(ids),
                },
            )
            return Result.fail(
                CertificatesBlockedError(
                    [b.to_dict() for b in partition.blocked], total=len(ids)
                )
            )

        updated, failed = self._apply_updates(command, partition.editable, len(ids))

        global_update = command.global_update
        if global_update.tag_ids:
            self._replace_tags(actor, updated, list(global_update.tag_ids))
        if global_update.comment is not None and global_update.comment.strip():
            self._add_comments(actor, updated, global_update.comment)

        outcome = BulkUpdateOutcome(
            success_count=len(updated),
            failed_count=len(failed),
            blocked_count=0,
            updated_certificates=tuple(updated),
            failed_certificates=tuple(failed),
        )
        logger.info(
            "bulk_update_completed",
            extra={
                "success_count": outcome.success_count,
                "failed_count": outcome.failed_count,
            },
        )
        return Result.ok(outcome)

    # ------------------------------------------------------------------
    # Mutation phase
    # ------------------------------------------------------------------

    def _apply_updates(
        self,
        command: BulkUpdateCommand,
        editable: tuple[CertificateRequest, ...],
        total: int,
    ) -> tuple[list[CertificateRequest], list[FailedCertificateUpdate]]:
        overrides: dict[Any, IndividualCertificateUpdate] = {}
        for individual in command.individual_updates:
            overrides.setdefault(individual.certificate_id, individual)

        updated: list[CertificateRequest] = []
        failed: list[FailedCertificateUpdate] = []

        for request in editable:
            patch = merge_update_data(command.global_update, overrides.get(request.id))
            if not patch:
                updated.append(request)
                continue

            try:
                result = self._certificates.update(request.id, patch)
            except Exception as exc:
                logger.warning(
                    "bulk_item_update_raised",
                    exc_info=True,
                    extra={"item_certificate_id": str(request.id)},
                )
                failed.append(
                    FailedCertificateUpdate(request.id, request.record_number, str(exc))
                )
                continue

            if not result.is_success:
                logger.warning(
                    "bulk_item_update_failed",
                    extra={
                        "item_certificate_id": str(request.id),
                        "error_code": result.error_code,
                    },
                )
                failed.append(
                    FailedCertificateUpdate(
                        request.id, request.record_number, result.message or ""
                    )
                )
                continue

            touched = list(patch)
            changes = ChangeSet(
                fields=change_tracker.diff(
                    change_tracker.snapshot(request),
                    change_tracker.updated_snapshot(result.value, patch),
                    touched,
                ),
                metadata={"bulk_operation": True, "total_certificates": total},
            )
            self._audit.record(
                CertificateEventDraft(
                    certificate_id=request.id,
                    actor_user_id=command.actor.user_id,
                    actor_role=command.actor.role,
                    event_type=CertificateEventType.BULK_UPDATED,
                    changes=changes,
                )
            )
            updated.append(result.value)

        return updated, failed

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def _replace_tags(
        self, actor: Actor, certificates: list[CertificateRequest], tag_ids: list[Any]
    ) -> None:
        for certificate in certificates:
            replacement = run_best_effort(
                "tag_replacement",
                lambda: self._tags.update_certificate_tags(certificate.id, tag_ids),
                item_certificate_id=str(certificate.id),
            )
            if replacement is None or not replacement.changed:
                continue
            self._audit.record(
                CertificateEventDraft(
                    certificate_id=certificate.id,
                    actor_user_id=actor.user_id,
                    actor_role=actor.role,
                    event_type=CertificateEventType.TAGS_CHANGED,
                    changes=ChangeSet(
                        metadata={
                            "bulk_operation": True,
                            "previous_tags": [str(t) for t in replacement.previous_tags],
                            "new_tags": [str(t) for t in replacement.new_tags],
                        }
                    ),
                )
            )

    def _add_comments(
        self, actor: Actor, certificates: list[CertificateRequest], content: str
    ) -> None:
        for certificate in certificates:
            comment = run_best_effort(
                "bulk_comment",
                lambda: self._comments.create(
                    CommentDraft(
                        certificate_id=certificate.id,
                        user_id=actor.user_id,
                        user_role=actor.role,
                        user_name=self._comment_author,
                        content=content,
                    )
                ),
                item_certificate_id=str(certificate.id),
            )
            if comment is None:
                continue
            self._audit.record(
                CertificateEventDraft(
                    certificate_id=certificate.id,
                    actor_user_id=actor.user_id,
                    actor_role=actor.role,
                    event_type=CertificateEventType.COMMENT_ADDED,
                    changes=ChangeSet(
                        metadata={"bulk_operation": True, "comment_id": str(comment.id)}
                    ),
                )
            )
