"""
certificate_services.comment_service -- discussion thread on a request.

Responsibility:
    Adds, lists and removes comments on certificate requests, applying the
    same ownership rule as reads: clients reach only their own requests.

Invariants enforced:
    - Comment content is stored trimmed and is never blank.
    - Only admins delete comments, and only through the request they
      belong to.

Failure modes:
    INVALID_COMMENT_CONTENT, CERTIFICATE_NOT_FOUND, CERTIFICATE_ACCESS_DENIED,
    COMMENT_NOT_FOUND, COMMENT_CERTIFICATE_MISMATCH, repository failures.
"""

from __future__ import annotations

from uuid import UUID

from certificate_kernel.domain import access_policy
from certificate_kernel.domain.certificate import (
    CertificateComment,
    CertificateRequest,
    CommentDraft,
)
from certificate_kernel.domain.contracts import (
    CertificateCommentRepository,
    CertificateRepository,
)
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import Actor
from certificate_kernel.exceptions import (
    CertificateAccessDeniedError,
    CertificateNotFoundError,
    CommentCertificateMismatchError,
    CommentNotFoundError,
    InvalidCommentContentError,
)
from certificate_kernel.logging_config import get_logger
from certificate_services._command_types import CreateCommentCommand

logger = get_logger("services.comment_service")


class CommentService:
    def __init__(
        self,
        certificates: CertificateRepository,
        comments: CertificateCommentRepository,
    ) -> None:
        self._certificates = certificates
        self._comments = comments

    def _accessible(
        self, certificate_id: UUID, actor: Actor
    ) -> Result[CertificateRequest]:
        found = self._certificates.find_by_id(certificate_id)
        if not found.is_success:
            return Result.fail(found.error)
        if found.value is None:
            return Result.fail(CertificateNotFoundError(certificate_id))
        if not access_policy.evaluate(found.value, actor.user_id, actor.role).can_access:
            return Result.fail(CertificateAccessDeniedError(certificate_id, actor.user_id))
        return found

    def create_comment(
        self, command: CreateCommentCommand
    ) -> Result[CertificateComment]:
        content = (command.content or "").strip()
        if not content:
            return Result.fail(InvalidCommentContentError())

        access = self._accessible(command.certificate_id, command.actor)
        if not access.is_success:
            return Result.fail(access.error)

        actor = command.actor
        created = self._comments.create(
            CommentDraft(
                certificate_id=command.certificate_id,
                user_id=actor.user_id,
                user_role=actor.role,
                user_name=command.author_name or actor.name or actor.role.value,
                content=content,
            )
        )
        if created.is_success:
            logger.info(
                "comment_created",
                extra={"certificate_ref": str(command.certificate_id)},
            )
        return created

    def list_comments(
        self, certificate_id: UUID, actor: Actor
    ) -> Result[list[CertificateComment]]:
        access = self._accessible(certificate_id, actor)
        if not access.is_success:
            return Result.fail(access.error)
        return self._comments.list_by_certificate_id(certificate_id)

    def delete_comment(
        self, certificate_id: UUID, comment_id: UUID, actor: Actor
    ) -> Result[None]:
        if not actor.is_admin:
            return Result.fail(CertificateAccessDeniedError(certificate_id, actor.user_id))

        found = self._comments.find_by_id(comment_id)
        if not found.is_success:
            return Result.fail(found.error)
        if found.value is None:
            return Result.fail(CommentNotFoundError(comment_id))
        if found.value.certificate_id != certificate_id:
            return Result.fail(CommentCertificateMismatchError(comment_id, certificate_id))

        deleted = self._comments.delete(comment_id)
        if deleted.is_success:
            logger.info("comment_deleted", extra={"comment_id": str(comment_id)})
        return deleted
