"""
certificate_services.catalog_sync -- loads the YAML status catalog into the database.

Responsibility:
    Makes the ``certificate_statuses``, ``validations`` and
    ``certificate_status_validations`` tables reflect a ``CertificateConfig``.
    Existing statuses are updated in place (matched by name); validations
    are upserted by name and shared between statuses.  Each status link
    carries its own required field and confirmation statement; links no
    longer configured are deactivated rather than deleted.

Architecture position:
    Services -- bridges ``certificate_config`` into kernel models, which the
    kernel itself may not do.

Invariants enforced:
    - Flush only; the caller commits.
    - Idempotent: syncing the same config twice adds no rows.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from certificate_config.schema import CertificateConfig, StatusDefinition, ValidationDefinition
from certificate_kernel.logging_config import get_logger
from certificate_kernel.models.status import (
    CertificateStatusModel,
    StatusValidationModel,
    ValidationModel,
)

logger = get_logger("services.catalog_sync")


def _upsert_validation(session: Session, definition: ValidationDefinition) -> ValidationModel:
    validation = session.execute(
        select(ValidationModel).where(ValidationModel.name == definition.name)
    ).scalar_one_or_none()
    if validation is None:
        validation = ValidationModel(name=definition.name)
        session.add(validation)
    validation.description = definition.description
    validation.is_active = definition.is_active
    session.flush()
    return validation


def _sync_status(
    session: Session, definition: StatusDefinition, sort_order: int
) -> CertificateStatusModel:
    status = session.execute(
        select(CertificateStatusModel).where(CertificateStatusModel.name == definition.name)
    ).scalar_one_or_none()
    if status is None:
        status = CertificateStatusModel(name=definition.name)
        session.add(status)
    status.display_name = definition.display_name
    status.color = definition.color
    status.can_edit_certificate = definition.can_edit_certificate
    status.is_final = definition.is_final
    status.sort_order = sort_order
    session.flush()

    links = {
        link.validation_id: link
        for link in session.execute(
            select(StatusValidationModel).where(StatusValidationModel.status_id == status.id)
        ).scalars()
    }
    for link in links.values():
        link.is_active = False

    for v in definition.validations:
        validation = _upsert_validation(session, v)
        link = links.get(validation.id)
        if link is None:
            link = StatusValidationModel(status_id=status.id, validation_id=validation.id)
            session.add(link)
            links[validation.id] = link
        link.required_field = v.required_field
        link.confirmation_text = v.confirmation_text
        link.is_active = True
    session.flush()
    return status


def sync_status_catalog(session: Session, config: CertificateConfig) -> list[CertificateStatusModel]:
    """Upsert every configured status and its validation links."""
    statuses = [
        _sync_status(session, definition, index)
        for index, definition in enumerate(config.statuses)
    ]
    logger.info(
        "status_catalog_synced",
        extra={"config_id": config.config_id, "status_count": len(statuses)},
    )
    return statuses
