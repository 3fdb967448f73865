"""Transition validation against configured requirements."""

import pytest

from certificate_kernel.domain.transition_validator import (
    DEFAULT_CONFIRMATION_STATEMENT,
    TransitionConfirmation,
    TransitionValidator,
    to_field_name,
)
from certificate_kernel.domain.values import ValidationRequirement
from certificate_kernel.exceptions import (
    CertificateErrorCode,
    ConfirmationRequiredError,
    RequiredFieldMissingError,
)
from tests.support.fakes import make_request

CONFIRM = "I confirm"


def rule(name="rule", required_field=None, confirmation_text=None):
    return ValidationRequirement(
        name=name, required_field=required_field, confirmation_text=confirmation_text
    )


@pytest.fixture
def validator():
    return TransitionValidator()


class TestRequiredStatement:
    def test_single_statement(self, validator):
        assert validator.required_statement([rule(confirmation_text=CONFIRM)]) == CONFIRM

    def test_identical_statements_collapse(self, validator):
        rules = [rule("a", confirmation_text=CONFIRM), rule("b", confirmation_text=f" {CONFIRM} ")]
        assert validator.required_statement(rules) == CONFIRM

    def test_conflicting_statements_have_no_answer(self, validator):
        rules = [rule("a", confirmation_text="A"), rule("b", confirmation_text="B")]
        assert validator.required_statement(rules) is None

    def test_fallback_when_no_rule_has_a_statement(self, validator):
        assert validator.required_statement([rule(required_field="cost")]) == (
            DEFAULT_CONFIRMATION_STATEMENT
        )

    def test_custom_fallback_is_trimmed(self):
        assert TransitionValidator("  Sure  ").required_statement([rule()]) == "Sure"


class TestValidate:
    def test_no_requirements_is_valid_without_confirmation(self, validator):
        check = validator.validate([], None, make_request(), {"status": "completed"})
        assert check.is_valid

    def test_missing_confirmation_is_rejected(self, validator):
        rules = [rule(required_field="order_number", confirmation_text=CONFIRM)]

        check = validator.validate(rules, None, make_request(order_number="ORD"), {})

        assert not check.is_valid
        assert check.error_code == CertificateErrorCode.STATUS_VALIDATION_CONFIRMATION_REQUIRED

    def test_unconfirmed_flag_is_rejected(self, validator):
        rules = [rule(confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(confirmed=False, statement=CONFIRM)

        check = validator.validate(rules, confirmation, make_request(), {})

        assert not check.is_valid

    def test_statement_compared_after_trim(self, validator):
        rules = [rule(confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(confirmed=True, statement=f"  {CONFIRM}\n")

        assert validator.validate(rules, confirmation, make_request(), {}).is_valid

    def test_statement_is_case_sensitive(self, validator):
        rules = [rule(confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(confirmed=True, statement=CONFIRM.lower())

        assert not validator.validate(rules, confirmation, make_request(), {}).is_valid

    def test_conflicting_statements_always_fail(self, validator):
        rules = [rule("a", confirmation_text="A"), rule("b", confirmation_text="B")]
        for statement in ("A", "B", DEFAULT_CONFIRMATION_STATEMENT):
            check = validator.validate(
                rules, TransitionConfirmation(True, statement), make_request(), {}
            )
            assert check.error_code == CertificateErrorCode.STATUS_VALIDATION_CONFIRMATION_REQUIRED

    def test_fallback_statement_required_when_rules_have_none(self, validator):
        rules = [rule(required_field="cost")]
        request = make_request(cost=100)

        wrong = validator.validate(rules, TransitionConfirmation(True, "ok"), request, {})
        right = validator.validate(
            rules, TransitionConfirmation(True, DEFAULT_CONFIRMATION_STATEMENT), request, {}
        )

        assert not wrong.is_valid
        assert right.is_valid

    def test_required_field_blank_on_entity(self, validator):
        rules = [rule(required_field="order_number", confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(True, CONFIRM)

        check = validator.validate(rules, confirmation, make_request(order_number="  "), {})

        assert check.error_code == CertificateErrorCode.STATUS_VALIDATION_REQUIRED_FIELD
        assert check.missing_field == "order_number"

    def test_required_field_supplied_by_patch(self, validator):
        rules = [rule(required_field="order_number", confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(True, CONFIRM)

        check = validator.validate(
            rules, confirmation, make_request(), {"order_number": "ORD-9"}
        )

        assert check.is_valid

    def test_patch_null_overrides_stored_value(self, validator):
        rules = [rule(required_field="cost", confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(True, CONFIRM)

        check = validator.validate(rules, confirmation, make_request(cost=10), {"cost": None})

        assert check.missing_field == "cost"

    def test_camel_case_required_field_resolves(self, validator):
        rules = [rule(required_field="paymentDate", confirmation_text=CONFIRM)]
        confirmation = TransitionConfirmation(True, CONFIRM)

        check = validator.validate(rules, confirmation, make_request(), {})

        assert check.missing_field == "payment_date"


class TestTransitionCheckErrors:
    def test_to_error_builds_typed_exceptions(self, validator):
        confirm_rule = [rule(confirmation_text=CONFIRM)]
        field_rule = [rule(required_field="cost", confirmation_text=CONFIRM)]

        no_confirmation = validator.validate(confirm_rule, None, make_request(), {})
        missing = validator.validate(
            field_rule, TransitionConfirmation(True, CONFIRM), make_request(), {}
        )

        assert isinstance(no_confirmation.to_error("completed"), ConfirmationRequiredError)
        error = missing.to_error("completed")
        assert isinstance(error, RequiredFieldMissingError)
        assert error.details == {"status_name": "completed", "missing_field": "cost"}

    def test_valid_check_has_no_error(self, validator):
        assert validator.validate([], None, make_request(), {}).to_error("x") is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("orderNumber", "order_number"),
        ("order_number", "order_number"),
        ("paymentTypeId", "payment_type_id"),
        (" cost ", "cost"),
    ],
)
def test_to_field_name(raw, expected):
    assert to_field_name(raw) == expected
