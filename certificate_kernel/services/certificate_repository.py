"""
SqlCertificateRepository -- SQLAlchemy storage of certificate requests.

Responsibility:
    Implements ``CertificateRepository`` over ``CertificateModel``: lookup,
    filtered listing (owner, status, priority, free-text search over the
    record, order and party fields, created-at range), creation in the catalog's default status, and patch
    application with status names resolved against the catalog.

Architecture position:
    Kernel > Services.  May import from domain/, models/, db/.

Invariants enforced:
    - Writes run inside a SAVEPOINT, so one failed write leaves the caller's
      transaction usable (the batch path keeps going after a failure).
    - ``status`` in a patch is a catalog name, matched trimmed and
      lower-cased; an unknown name is rejected with INVALID_STATUS and nothing is written.
    - Only mutable request fields are written; other patch keys are ignored.

Failure modes:
    CERTIFICATE_NOT_FOUND on update of an unknown id, INVALID_STATUS,
    INVALID_PRIORITY, DATABASE_ERROR for any SQLAlchemy error or an
    unparseable id/date value.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from certificate_kernel.domain.certificate import (
    MUTABLE_FIELDS,
    CertificateFilters,
    CertificatePage,
    CertificatePatch,
    CertificateRequest,
    NewCertificate,
)
from certificate_kernel.domain.clock import Clock
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import Priority, normalize_status_name
from certificate_kernel.exceptions import (
    CertificateNotFoundError,
    DatabaseError,
    InvalidPriorityError,
    InvalidStatusError,
)
from certificate_kernel.logging_config import get_logger
from certificate_kernel.models.certificate import CertificateModel
from certificate_kernel.models.status import CertificateStatusModel
from certificate_kernel.selectors.status_validation_selector import status_from_model
from certificate_kernel.services.base import BaseService

logger = get_logger("services.certificate_repository")

DEFAULT_STATUS_NAME = "pending"


def certificate_from_model(model: CertificateModel) -> CertificateRequest:
    return CertificateRequest(
        id=model.id,
        owner_id=model.owner_id,
        certificate_type=model.certificate_type,
        record_number=model.record_number,
        parties_name=model.parties_name,
        status=status_from_model(model.status),
        priority=Priority(model.priority),
        notes=model.notes,
        cost=model.cost,
        additional_cost=model.additional_cost,
        order_number=model.order_number,
        payment_type_id=model.payment_type_id,
        payment_type=model.payment_type.name if model.payment_type else None,
        payment_date=model.payment_date,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _as_uuid(value: Any) -> UUID | None:
    if value is None or isinstance(value, UUID):
        return value
    return UUID(str(value))


def _as_date(value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class SqlCertificateRepository(BaseService[CertificateModel]):
    """CertificateRepository backed by SQLAlchemy."""

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        default_status: str = DEFAULT_STATUS_NAME,
    ):
        super().__init__(session, clock)
        self._default_status = default_status

    def _status_by_name(self, name: str) -> CertificateStatusModel | None:
        return self.session.execute(
            select(CertificateStatusModel).where(
                CertificateStatusModel.name == normalize_status_name(name)
            )
        ).scalar_one_or_none()

    def find_by_id(self, certificate_id: UUID) -> Result[CertificateRequest | None]:
        try:
            model = self.session.get(CertificateModel, certificate_id)
        except SQLAlchemyError as exc:
            return self._database_failure("find_by_id", exc)
        return Result.ok(certificate_from_model(model) if model is not None else None)

    def find_all(self, filters: CertificateFilters) -> Result[CertificatePage]:
        conditions = []
        if filters.owner_id is not None:
            conditions.append(CertificateModel.owner_id == filters.owner_id)
        if filters.status is not None:
            conditions.append(
                CertificateStatusModel.name == normalize_status_name(filters.status)
            )
        if filters.priority is not None:
            conditions.append(CertificateModel.priority == Priority(filters.priority).value)
        if filters.search_term is not None:
            pattern = "%{}%".format(
                filters.search_term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            conditions.append(
                or_(
                    *(
                        column.ilike(pattern, escape="\\")
                        for column in (
                            CertificateModel.record_number,
                            CertificateModel.order_number,
                            CertificateModel.parties_name,
                            CertificateModel.certificate_type,
                        )
                    )
                )
            )
        if filters.created_from is not None:
            conditions.append(CertificateModel.created_at >= filters.created_from)
        if filters.created_to is not None:
            conditions.append(CertificateModel.created_at <= filters.created_to)

        limit = filters.limit if filters.limit is not None else 50
        try:
            total = self.session.execute(
                select(func.count(CertificateModel.id))
                .join(CertificateStatusModel, CertificateModel.status_id == CertificateStatusModel.id)
                .where(*conditions)
            ).scalar_one()
            models = self.session.execute(
                select(CertificateModel)
                .join(CertificateStatusModel, CertificateModel.status_id == CertificateStatusModel.id)
                .where(*conditions)
                .order_by(CertificateModel.created_at.desc(), CertificateModel.record_number)
                .limit(limit)
                .offset(filters.offset)
            ).scalars().unique().all()
        except SQLAlchemyError as exc:
            return self._database_failure("find_all", exc)

        return Result.ok(
            CertificatePage(
                items=tuple(certificate_from_model(m) for m in models),
                total=total,
                limit=limit,
                offset=filters.offset,
            )
        )

    def create(self, data: NewCertificate) -> Result[CertificateRequest]:
        try:
            status = self._status_by_name(self._default_status)
            if status is None:
                return Result.fail(InvalidStatusError(self._default_status))
            now = self.clock.now()
            model = CertificateModel(
                owner_id=data.owner_id,
                certificate_type=data.certificate_type,
                record_number=data.record_number,
                parties_name=data.parties_name,
                notes=data.notes,
                priority=Priority(data.priority).value,
                status_id=status.id,
                created_at=now,
                updated_at=now,
            )
            with self.session.begin_nested():
                self.session.add(model)
                self.session.flush()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            return self._database_failure("create", exc)

        logger.debug("certificate_row_created", extra={"row_id": str(model.id)})
        return Result.ok(certificate_from_model(model))

    def update(
        self, certificate_id: UUID, patch: CertificatePatch
    ) -> Result[CertificateRequest]:
        try:
            model = self.session.get(CertificateModel, certificate_id)
            if model is None:
                return Result.fail(CertificateNotFoundError(certificate_id))

            values: dict[str, Any] = {}
            for name, value in patch.items():
                if name not in MUTABLE_FIELDS:
                    logger.debug("patch_field_ignored", extra={"field_name": name})
                    continue
                if name == "status":
                    status = self._status_by_name(value) if value is not None else None
                    if status is None:
                        return Result.fail(InvalidStatusError(value))
                    values["status_id"] = status.id
                elif name == "priority":
                    try:
                        values["priority"] = Priority(value).value
                    except ValueError:
                        return Result.fail(InvalidPriorityError(value))
                elif name == "payment_type_id":
                    values["payment_type_id"] = _as_uuid(value)
                elif name == "payment_date":
                    values["payment_date"] = _as_date(value)
                else:
                    values[name] = value
        except (TypeError, ValueError) as exc:
            return Result.fail(DatabaseError("update", str(exc)))
        except SQLAlchemyError as exc:
            return self._database_failure("update", exc)

        try:
            with self.session.begin_nested():
                for name, value in values.items():
                    setattr(model, name, value)
                model.updated_at = self.clock.now()
                self.session.flush()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            return self._database_failure("update", exc)

        return Result.ok(certificate_from_model(model))
