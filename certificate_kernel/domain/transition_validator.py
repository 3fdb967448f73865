"""
TransitionValidator -- gates status transitions on configured requirements.

Responsibility:
    Given the validation requirements attached to a target status, decides
    whether a proposed transition may proceed: the actor must confirm with
    the exact required statement and every required field must be filled.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Requirements are fetched by the
    caller from a ``StatusValidationSource``.

Invariants enforced:
    - No requirements means the transition is valid.
    - Two or more distinct confirmation statements configured for one
      status make every transition into it fail with confirmation-required.
      The configuration is inconsistent and no single statement can satisfy
      it.
    - When requirements exist but none carries a statement, the configured
      fallback statement is required.
    - Statements compare after trimming, case-sensitive.
    - A required field is read from the proposed changes when the key is
      present there, otherwise from the stored request.

Failure modes:
    None raised.  ``TransitionCheck.to_error()`` builds the typed exception.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from certificate_kernel.domain.certificate import CertificateRequest
from certificate_kernel.domain.values import ValidationRequirement
from certificate_kernel.exceptions import (
    CertificateErrorCode,
    ConfirmationRequiredError,
    RequiredFieldMissingError,
    StatusValidationError,
)

DEFAULT_CONFIRMATION_STATEMENT = (
    "I have verified and confirmed the changes I am about to make"
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


@dataclass(frozen=True)
class TransitionConfirmation:
    """Actor's explicit acknowledgement of a status transition."""

    confirmed: bool
    statement: str = ""


@dataclass(frozen=True)
class TransitionCheck:
    is_valid: bool
    error_code: CertificateErrorCode | None = None
    missing_field: str | None = None

    def to_error(self, status_name: str) -> StatusValidationError | None:
        if self.is_valid:
            return None
        if self.error_code == CertificateErrorCode.STATUS_VALIDATION_REQUIRED_FIELD:
            return RequiredFieldMissingError(status_name, self.missing_field or "")
        return ConfirmationRequiredError(status_name)


VALID = TransitionCheck(is_valid=True)


def to_field_name(name: str) -> str:
    """Resolve a configured field name (``orderNumber`` or ``order_number``)."""
    return _CAMEL_BOUNDARY.sub(r"_\1", name.strip()).lower()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TransitionValidator:
    """Validates one transition against its requirements."""

    def __init__(self, fallback_statement: str = DEFAULT_CONFIRMATION_STATEMENT):
        self._fallback_statement = fallback_statement.strip()

    @property
    def fallback_statement(self) -> str:
        return self._fallback_statement

    def required_statement(
        self, requirements: Sequence[ValidationRequirement]
    ) -> str | None:
        """The single statement the actor must type, or None if ambiguous."""
        statements = {
            r.confirmation_text.strip()
            for r in requirements
            if r.confirmation_text and r.confirmation_text.strip()
        }
        if len(statements) > 1:
            return None
        if statements:
            return next(iter(statements))
        return self._fallback_statement

    def validate(
        self,
        requirements: Sequence[ValidationRequirement],
        confirmation: TransitionConfirmation | None,
        request: CertificateRequest,
        proposed_changes: Mapping[str, Any],
    ) -> TransitionCheck:
        if not requirements:
            return VALID

        required = self.required_statement(requirements)
        if required is None:
            return TransitionCheck(
                is_valid=False,
                error_code=CertificateErrorCode.STATUS_VALIDATION_CONFIRMATION_REQUIRED,
            )
        if (
            confirmation is None
            or confirmation.confirmed is not True
            or (confirmation.statement or "").strip() != required
        ):
            return TransitionCheck(
                is_valid=False,
                error_code=CertificateErrorCode.STATUS_VALIDATION_CONFIRMATION_REQUIRED,
            )

        for requirement in requirements:
            if not requirement.required_field:
                continue
            field_name = to_field_name(requirement.required_field)
            if field_name in proposed_changes:
                value = proposed_changes[field_name]
            else:
                value = request.field_value(field_name)
            if _is_blank(value):
                return TransitionCheck(
                    is_valid=False,
                    error_code=CertificateErrorCode.STATUS_VALIDATION_REQUIRED_FIELD,
                    missing_field=field_name,
                )

        return VALID
