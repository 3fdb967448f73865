"""SqlCertificateTagRepository -- replaces the tag set of a request."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from certificate_kernel.domain.certificate import TagReplacement
from certificate_kernel.domain.result import Result
from certificate_kernel.models.tag import CertificateTagAssignmentModel
from certificate_kernel.services.base import BaseService


class SqlCertificateTagRepository(BaseService[CertificateTagAssignmentModel]):
    def list_tag_ids(self, certificate_id: UUID) -> tuple[UUID, ...]:
        return tuple(
            self.session.execute(
                select(CertificateTagAssignmentModel.tag_id)
                .where(CertificateTagAssignmentModel.certificate_id == certificate_id)
                .order_by(CertificateTagAssignmentModel.created_at)
            ).scalars().all()
        )

    def update_certificate_tags(
        self, certificate_id: UUID, tag_ids: list[UUID]
    ) -> Result[TagReplacement]:
        new_tags = tuple(dict.fromkeys(tag_ids))
        try:
            previous = self.list_tag_ids(certificate_id)
            with self.session.begin_nested():
                self.session.execute(
                    delete(CertificateTagAssignmentModel).where(
                        CertificateTagAssignmentModel.certificate_id == certificate_id
                    )
                )
                now = self.clock.now()
                self.session.add_all(
                    CertificateTagAssignmentModel(
                        certificate_id=certificate_id, tag_id=tag_id, created_at=now,
                    )
                    for tag_id in new_tags
                )
                self.session.flush()
        except SQLAlchemyError as exc:
            return self._database_failure("update_certificate_tags", exc)
        return Result.ok(TagReplacement(previous_tags=previous, new_tags=new_tags))
