"""Best-effort side channel behaviour."""

from uuid import uuid4

from certificate_kernel.domain.certificate import CertificateEventDraft
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import ActorRole, CertificateEventType
from certificate_kernel.exceptions import DatabaseError
from certificate_services.audit_trail import AuditTrail, run_best_effort


def _draft():
    return CertificateEventDraft(
        certificate_id=uuid4(),
        actor_user_id=uuid4(),
        actor_role=ActorRole.ADMIN,
        event_type=CertificateEventType.UPDATED,
    )


def test_success_returns_value():
    assert run_best_effort("side", lambda: Result.ok(3)) == 3


def test_failed_result_logged_and_absorbed(captured_logs):
    value = run_best_effort(
        "side", lambda: Result.fail(DatabaseError("op", "down")), item="a"
    )

    assert value is None
    [record] = [r for r in captured_logs() if r["message"] == "side_failed"]
    assert record["level"] == "WARNING"
    assert record["error_code"] == "DATABASE_ERROR"
    assert record["item"] == "a"


def test_exception_logged_and_absorbed(captured_logs):
    def explode():
        raise ValueError("nope")

    assert run_best_effort("side", explode) is None
    [record] = [r for r in captured_logs() if r["message"] == "side_failed"]
    assert record["exc_type"] == "ValueError"
    assert record["raised"] is True


def test_audit_trail_records_through_repository(events):
    draft = _draft()

    event = AuditTrail(events).record(draft)

    assert event is not None
    assert events.events == [event]
    assert event.certificate_id == draft.certificate_id


def test_audit_trail_swallows_store_failure(events):
    events.fail_mode = "raise"

    assert AuditTrail(events).record(_draft()) is None
