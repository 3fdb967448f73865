"""Result wrapper and the typed error hierarchy."""

from uuid import uuid4

import pytest

from certificate_kernel.domain.certificate import ChangeSet, FieldChange, TagReplacement
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import UNSET, StatusDescriptor, ValidationRequirement
from certificate_kernel.exceptions import (
    BulkUpdateLimitExceededError,
    CertificateAccessDeniedError,
    CertificateErrorCode,
    CertificateKernelError,
    CertificateNotFoundError,
    CertificatesBlockedError,
    InvalidPriorityError,
    UnexpectedError,
)


class TestResult:
    def test_ok(self):
        result = Result.ok(5)

        assert result.is_success
        assert result.error_code is None
        assert result.details == {}
        assert result.unwrap() == 5
        assert result.to_dict() == {"success": True, "data": 5}

    def test_fail_carries_code_and_details(self):
        result = Result.fail(BulkUpdateLimitExceededError(51, 50))

        assert not result.is_success
        assert result.error_code == CertificateErrorCode.BULK_UPDATE_MAX_LIMIT_EXCEEDED
        assert result.details == {"requested": 51, "limit": 50}
        assert result.to_dict()["error"] == "BULK_UPDATE_MAX_LIMIT_EXCEEDED"

    def test_unwrap_raises_carried_error(self):
        error = CertificateNotFoundError(uuid4())

        with pytest.raises(CertificateNotFoundError) as exc_info:
            Result.fail(error).unwrap()

        assert exc_info.value is error

    def test_from_exception_keeps_kernel_errors(self):
        error = InvalidPriorityError("high")

        assert Result.from_exception(error).error is error

    def test_from_exception_wraps_foreign_errors(self):
        result = Result.from_exception(KeyError("boom"))

        assert isinstance(result.error, UnexpectedError)
        assert result.error_code == CertificateErrorCode.UNEXPECTED_ERROR
        assert "KeyError" in result.message


class TestErrors:
    def test_not_found_lists_every_id(self):
        ids = [uuid4(), uuid4()]

        error = CertificateNotFoundError(*ids)

        assert error.certificate_ids == [str(i) for i in ids]
        assert error.code == CertificateErrorCode.CERTIFICATE_NOT_FOUND

    def test_access_denied_without_certificate(self):
        actor = uuid4()

        error = CertificateAccessDeniedError(None, actor)

        assert error.certificate_id is None
        assert str(actor) in str(error)

    def test_blocked_error_counts(self):
        blocked = [{"certificate_id": "1", "record_number": "A", "reason": "final status (Done)"}]

        error = CertificatesBlockedError(blocked, total=3)

        assert error.details == {
            "blocked_certificates": blocked,
            "blocked_count": 1,
            "success_count": 0,
            "failed_count": 0,
            "total": 3,
        }

    def test_input_error_reports_field(self):
        error = InvalidPriorityError("high")

        assert error.field == "priority"
        assert error.details == {"value": "high"}

    def test_every_code_is_a_kernel_error_code(self):
        assert isinstance(UnexpectedError("x"), CertificateKernelError)
        assert all(code.value == code.name for code in CertificateErrorCode)


class TestValues:
    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"
        assert type(UNSET)() is UNSET

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_names_rejected(self, name):
        with pytest.raises(ValueError):
            StatusDescriptor(name=name, display_name="x", can_edit_certificate=True)
        with pytest.raises(ValueError):
            ValidationRequirement(name=name)

    def test_change_set_payload_flattens_fields_and_metadata(self):
        changes = ChangeSet(
            fields={"cost": FieldChange(None, 100)}, metadata={"bulk_operation": True}
        )

        assert changes.with_metadata(total_certificates=2).to_payload() == {
            "cost": {"before": None, "after": 100},
            "bulk_operation": True,
            "total_certificates": 2,
        }

    def test_tag_replacement_changed(self):
        a, b = uuid4(), uuid4()

        assert not TagReplacement((a, b), (b, a)).changed
        assert TagReplacement((a,), (a, b)).changed
        assert TagReplacement((a,), (b,)).changed
        assert TagReplacement((), (a,)).changed
