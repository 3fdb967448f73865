"""SqlCertificateCommentRepository -- comments on certificate requests."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from certificate_kernel.domain.certificate import CertificateComment, CommentDraft
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import ActorRole
from certificate_kernel.exceptions import CommentNotFoundError
from certificate_kernel.models.comment import CertificateCommentModel
from certificate_kernel.services.base import BaseService


def comment_from_model(model: CertificateCommentModel) -> CertificateComment:
    return CertificateComment(
        id=model.id,
        certificate_id=model.certificate_id,
        user_id=model.user_id,
        user_role=ActorRole(model.user_role),
        user_name=model.user_name,
        content=model.content,
        created_at=model.created_at,
    )


class SqlCertificateCommentRepository(BaseService[CertificateCommentModel]):
    def create(self, draft: CommentDraft) -> Result[CertificateComment]:
        model = CertificateCommentModel(
            certificate_id=draft.certificate_id,
            user_id=draft.user_id,
            user_role=draft.user_role.value,
            user_name=draft.user_name,
            content=draft.content,
            created_at=self.clock.now(),
        )
        try:
            with self.session.begin_nested():
                self.session.add(model)
                self.session.flush()
        except SQLAlchemyError as exc:
            return self._database_failure("create_comment", exc)
        return Result.ok(comment_from_model(model))

    def list_by_certificate_id(
        self, certificate_id: UUID
    ) -> Result[list[CertificateComment]]:
        try:
            models = self.session.execute(
                select(CertificateCommentModel)
                .where(CertificateCommentModel.certificate_id == certificate_id)
                .order_by(CertificateCommentModel.created_at)
            ).scalars().all()
        except SQLAlchemyError as exc:
            return self._database_failure("list_comments", exc)
        return Result.ok([comment_from_model(m) for m in models])

    def find_by_id(self, comment_id: UUID) -> Result[CertificateComment | None]:
        try:
            model = self.session.get(CertificateCommentModel, comment_id)
        except SQLAlchemyError as exc:
            return self._database_failure("find_comment", exc)
        return Result.ok(comment_from_model(model) if model is not None else None)

    def delete(self, comment_id: UUID) -> Result[None]:
        try:
            model = self.session.get(CertificateCommentModel, comment_id)
            if model is None:
                return Result.fail(CommentNotFoundError(comment_id))
            with self.session.begin_nested():
                self.session.delete(model)
                self.session.flush()
        except SQLAlchemyError as exc:
            return self._database_failure("delete_comment", exc)
        return Result.ok(None)
