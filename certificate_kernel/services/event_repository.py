"""
SqlCertificateEventRepository -- append-only audit event storage.

Responsibility:
    Persists ``CertificateEventDraft`` values as ``CertificateEventModel``
    rows and reads a request's audit trail oldest first.

Invariants enforced:
    - Insert only.  UPDATE/DELETE are rejected by db/immutability.py.
    - ``created_at`` comes from the injected Clock.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from certificate_kernel.domain.certificate import CertificateEvent, CertificateEventDraft
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import ActorRole, CertificateEventType
from certificate_kernel.models.event import CertificateEventModel
from certificate_kernel.services.base import BaseService


def event_from_model(model: CertificateEventModel) -> CertificateEvent:
    return CertificateEvent(
        id=model.id,
        certificate_id=model.certificate_id,
        actor_user_id=model.actor_user_id,
        actor_role=ActorRole(model.actor_role),
        event_type=CertificateEventType(model.event_type),
        changes=dict(model.changes or {}),
        created_at=model.created_at,
    )


class SqlCertificateEventRepository(BaseService[CertificateEventModel]):
    def create(self, draft: CertificateEventDraft) -> Result[CertificateEvent]:
        model = CertificateEventModel(
            certificate_id=draft.certificate_id,
            actor_user_id=draft.actor_user_id,
            actor_role=draft.actor_role.value,
            event_type=draft.event_type.value,
            changes=draft.changes.to_payload(),
            created_at=self.clock.now(),
        )
        try:
            with self.session.begin_nested():
                self.session.add(model)
                self.session.flush()
        except SQLAlchemyError as exc:
            return self._database_failure("create_event", exc)
        return Result.ok(event_from_model(model))

    def list_by_certificate_id(
        self, certificate_id: UUID
    ) -> Result[list[CertificateEvent]]:
        try:
            models = self.session.execute(
                select(CertificateEventModel)
                .where(CertificateEventModel.certificate_id == certificate_id)
                .order_by(CertificateEventModel.created_at)
            ).scalars().all()
        except SQLAlchemyError as exc:
            return self._database_failure("list_events", exc)
        return Result.ok([event_from_model(m) for m in models])
