"""
certificate_services.audit_trail -- best-effort side channel.

Responsibility:
    Records audit events, and runs the other secondary writes of an
    operation (tag replacement, bulk comments), without ever letting their
    failure change the primary result.

Architecture position:
    Services -- used by every orchestrator that writes.

Invariants enforced:
    - A failed or raising side effect is logged at WARNING and reported to
      the caller as ``None``.  It is never raised.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from certificate_kernel.domain.certificate import (
    CertificateEvent,
    CertificateEventDraft,
)
from certificate_kernel.domain.contracts import CertificateEventRepository
from certificate_kernel.domain.result import Result
from certificate_kernel.logging_config import get_logger

logger = get_logger("services.audit_trail")

T = TypeVar("T")


def run_best_effort(
    action: str, operation: Callable[[], Result[T]], **context: Any
) -> T | None:
    """Run ``operation``; log and absorb any failure."""
    try:
        result = operation()
    except Exception:
        logger.warning(
            f"{action}_failed", exc_info=True, extra={**context, "raised": True}
        )
        return None
    if not result.is_success:
        logger.warning(
            f"{action}_failed",
            extra={
                **context,
                "error_code": result.error_code,
                "error_message": result.message,
            },
        )
        return None
    return result.value


class AuditTrail:
    """Appends audit events through the event repository, best-effort."""

    def __init__(self, events: CertificateEventRepository):
        self._events = events

    @property
    def events(self) -> CertificateEventRepository:
        return self._events

    def record(self, draft: CertificateEventDraft) -> CertificateEvent | None:
        event = run_best_effort(
            "audit_event",
            lambda: self._events.create(draft),
            certificate_id=str(draft.certificate_id),
            event_type=draft.event_type.value,
        )
        if event is not None:
            logger.debug(
                "audit_event_recorded",
                extra={
                    "certificate_id": str(draft.certificate_id),
                    "event_type": draft.event_type.value,
                },
            )
        return event
