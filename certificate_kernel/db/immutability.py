"""
ORM-Level Immutability Enforcement for the certificate audit trail.

SQLAlchemy fires ``before_update`` / ``before_delete`` before SQL reaches the
database.  The listeners registered here reject any UPDATE or DELETE of a
``CertificateEventModel`` row with ``ImmutabilityViolationError``, aborting
the flush:

    session.flush()
         |
         v
    [before_update] --> _check_event_immutability() --> ImmutabilityViolationError
    [before_delete] --> _check_event_delete() --------> ImmutabilityViolationError

Usage:
    from certificate_kernel.db.immutability import register_immutability_listeners
    register_immutability_listeners()  # once at startup

    # tests that must bypass the rule
    unregister_immutability_listeners()
"""

from sqlalchemy import event

from certificate_kernel.exceptions import ImmutabilityViolationError
from certificate_kernel.logging_config import get_logger

logger = get_logger("db.immutability")


def _check_event_immutability(mapper, connection, target):
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": "CertificateEvent",
            "entity_id": str(target.id),
            "db_operation": "UPDATE",
        },
    )
    raise ImmutabilityViolationError(
        entity_type="CertificateEvent",
        entity_id=str(target.id),
        reason="Audit events are immutable and cannot be modified",
    )


def _check_event_delete(mapper, connection, target):
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": "CertificateEvent",
            "entity_id": str(target.id),
            "db_operation": "DELETE",
        },
    )
    raise ImmutabilityViolationError(
        entity_type="CertificateEvent",
        entity_id=str(target.id),
        reason="Audit events cannot be deleted",
    )


def register_immutability_listeners() -> None:
    """Register the audit trail listeners (idempotent)."""
    from certificate_kernel.models.event import CertificateEventModel

    for name, listener in (
        ("before_update", _check_event_immutability),
        ("before_delete", _check_event_delete),
    ):
        if not event.contains(CertificateEventModel, name, listener):
            event.listen(CertificateEventModel, name, listener)


def unregister_immutability_listeners() -> None:
    """Remove the listeners. Only for tests that violate the rule on purpose."""
    from certificate_kernel.models.event import CertificateEventModel

    for name, listener in (
        ("before_update", _check_event_immutability),
        ("before_delete", _check_event_delete),
    ):
        if event.contains(CertificateEventModel, name, listener):
            event.remove(CertificateEventModel, name, listener)
