"""
StatusValidationSelector -- reads the status catalog and its requirements.

Responsibility:
    Serves the database-backed ``StatusValidationSource``: the active
    validation requirements linked to a target status, plus catalog reads.

Invariants enforced:
    - Only links and validations that are both active are returned.
    - An unknown status yields an empty tuple; rejecting unknown status
      names is the certificate repository's job.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import StatusDescriptor, ValidationRequirement
from certificate_kernel.exceptions import DatabaseError
from certificate_kernel.logging_config import get_logger
from certificate_kernel.models.status import (
    CertificateStatusModel,
    StatusValidationModel,
    ValidationModel,
)
from certificate_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.status_validation")


def status_from_model(model: CertificateStatusModel) -> StatusDescriptor:
    return StatusDescriptor(
        name=model.name,
        display_name=model.display_name,
        can_edit_certificate=model.can_edit_certificate,
        is_final=model.is_final,
        color=model.color,
        status_id=model.id,
    )


class SelectorStatusValidationSource(BaseSelector[StatusValidationModel]):
    """StatusValidationSource backed by the status catalog tables."""

    def fetch_active_validations(
        self, status_name: str
    ) -> Result[tuple[ValidationRequirement, ...]]:
        try:
            rows = self.session.execute(
                select(StatusValidationModel, ValidationModel)
                .join(ValidationModel, StatusValidationModel.validation_id == ValidationModel.id)
                .join(CertificateStatusModel, StatusValidationModel.status_id == CertificateStatusModel.id)
                .where(
                    CertificateStatusModel.name == status_name,
                    StatusValidationModel.is_active.is_(True),
                    ValidationModel.is_active.is_(True),
                )
                .order_by(ValidationModel.name)
            ).all()
        except SQLAlchemyError as exc:
            logger.error(
                "status_validations_fetch_failed",
                exc_info=True,
                extra={"status_name": status_name},
            )
            return Result.fail(DatabaseError("fetch_active_validations", str(exc)))

        return Result.ok(
            tuple(
                ValidationRequirement(
                    name=validation.name,
                    description=validation.description,
                    required_field=link.required_field,
                    confirmation_text=link.confirmation_text,
                    validation_id=validation.id,
                )
                for link, validation in rows
            )
        )

    def list_statuses(self) -> list[StatusDescriptor]:
        rows = self.session.execute(
            select(CertificateStatusModel).order_by(
                CertificateStatusModel.sort_order, CertificateStatusModel.name
            )
        ).scalars().all()
        return [status_from_model(row) for row in rows]
