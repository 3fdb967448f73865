"""Batch pre-flight partitioning."""

from certificate_kernel.domain.batch_gate import blocking_reason, partition
from tests.support.fakes import make_request, make_status


def test_editable_status_is_not_blocked():
    assert blocking_reason(make_request(status=make_status("pending"))) is None


def test_final_status_reason_names_display_name():
    request = make_request(status=make_status("completed", can_edit=False, is_final=True))

    assert blocking_reason(request) == "final status (Completed)"


def test_final_wins_even_when_editable():
    request = make_request(status=make_status("odd", can_edit=True, is_final=True))

    assert blocking_reason(request).startswith("final status")


def test_non_editable_status_reason():
    request = make_request(status=make_status("in_progress", can_edit=False))

    assert blocking_reason(request) == 'status "In Progress" does not allow editing'


def test_partition_preserves_order_and_reports_blocked():
    first = make_request(record_number="A")
    locked = make_request(
        record_number="B", status=make_status("completed", can_edit=False, is_final=True)
    )
    last = make_request(record_number="C")

    result = partition([first, locked, last])

    assert result.editable == (first, last)
    assert result.has_blocked
    assert [b.record_number for b in result.blocked] == ["B"]
    assert result.blocked[0].to_dict()["certificate_id"] == str(locked.id)


def test_partition_of_editable_batch_has_no_blocked():
    result = partition([make_request(), make_request()])

    assert not result.has_blocked
    assert len(result.editable) == 2
