"""
Typed Exception Hierarchy for the Certificate Kernel.

===============================================================================
HOW ERRORS TRAVEL
===============================================================================

Domain operations never raise across their boundary. They return a
``Result`` (see ``certificate_kernel.domain.result``) whose failure side
carries one of the exceptions defined here. Callers that prefer exceptions
call ``Result.unwrap()``, which raises the carried exception unchanged.

Every exception has:
  1. a ``code`` CLASS attribute (``CertificateErrorCode``, machine-readable)
  2. structured attributes (certificate ids, field names, limits)
  3. a ``details`` mapping built from those attributes, for API payloads

Example:
    result = orchestrator.execute(command)
    if not result.is_success:
        return {"error": result.error_code, "details": result.details}

    try:
        certificate = orchestrator.execute(command).unwrap()
    except CertificateAccessDeniedError as e:
        deny(e.certificate_id)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    CertificateKernelError (base)
    |
    +-- CertificateError
    |   +-- CertificateNotFoundError
    |   +-- CertificateAccessDeniedError
    |   +-- CertificateCannotBeEditedError
    |
    +-- CertificateInputError
    |   +-- InvalidCertificateTypeError
    |   +-- InvalidRecordNumberError
    |   +-- InvalidPartiesNameError
    |   +-- InvalidPriorityError
    |   +-- InvalidStatusError
    |
    +-- StatusValidationError
    |   +-- ConfirmationRequiredError
    |   +-- RequiredFieldMissingError
    |
    +-- BulkUpdateError
    |   +-- BulkUpdateEmptyListError
    |   +-- BulkUpdateLimitExceededError
    |   +-- CertificatesBlockedError
    |
    +-- CommentError
    |   +-- InvalidCommentContentError
    |   +-- CommentNotFoundError
    |   +-- CommentCertificateMismatchError
    |
    +-- PersistenceError
    |   +-- DatabaseError
    |
    +-- UnexpectedError
    |
    +-- ImmutabilityViolationError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                                    | When
-------------|-----------------------------------------|--------------------------------
Certificate  | CERTIFICATE_NOT_FOUND                   | Id unknown to the repository
             | CERTIFICATE_ACCESS_DENIED               | Client is not the owner
             | CERTIFICATE_CANNOT_BE_EDITED            | Status forbids client edits
-------------|-----------------------------------------|--------------------------------
Input        | INVALID_CERTIFICATE_TYPE                | Blank certificate type
             | INVALID_RECORD_NUMBER                   | Blank record number
             | INVALID_PARTIES_NAME                    | Blank parties name
             | INVALID_PRIORITY                        | Priority not normal/urgent
             | INVALID_STATUS                          | Status name not in catalog
-------------|-----------------------------------------|--------------------------------
Transition   | STATUS_VALIDATION_CONFIRMATION_REQUIRED | Missing/mismatched statement
             | STATUS_VALIDATION_REQUIRED_FIELD        | Required field blank
-------------|-----------------------------------------|--------------------------------
Bulk         | BULK_UPDATE_EMPTY_LIST                  | No ids supplied
             | BULK_UPDATE_MAX_LIMIT_EXCEEDED          | More ids than the limit
             | BULK_UPDATE_CERTIFICATES_BLOCKED        | Some ids in blocking status
-------------|-----------------------------------------|--------------------------------
Comment      | INVALID_COMMENT_CONTENT                 | Blank comment
             | COMMENT_NOT_FOUND                       | Comment id unknown
             | COMMENT_CERTIFICATE_MISMATCH            | Comment on another request
-------------|-----------------------------------------|--------------------------------
Persistence  | DATABASE_ERROR                          | Storage failure
Other        | UNEXPECTED_ERROR                        | Anything else
             | IMMUTABILITY_VIOLATION                  | Audit event UPDATE/DELETE
             | CONFIGURATION_ERROR                     | Invalid governance config
"""

from enum import Enum
from typing import Any


class CertificateErrorCode(str, Enum):
    """Machine-readable error codes carried by failed results."""

    CERTIFICATE_NOT_FOUND = "CERTIFICATE_NOT_FOUND"
    CERTIFICATE_ACCESS_DENIED = "CERTIFICATE_ACCESS_DENIED"
    CERTIFICATE_CANNOT_BE_EDITED = "CERTIFICATE_CANNOT_BE_EDITED"

    INVALID_CERTIFICATE_TYPE = "INVALID_CERTIFICATE_TYPE"
    INVALID_RECORD_NUMBER = "INVALID_RECORD_NUMBER"
    INVALID_PARTIES_NAME = "INVALID_PARTIES_NAME"
    INVALID_PRIORITY = "INVALID_PRIORITY"
    INVALID_STATUS = "INVALID_STATUS"

    STATUS_VALIDATION_CONFIRMATION_REQUIRED = "STATUS_VALIDATION_CONFIRMATION_REQUIRED"
    STATUS_VALIDATION_REQUIRED_FIELD = "STATUS_VALIDATION_REQUIRED_FIELD"

    BULK_UPDATE_EMPTY_LIST = "BULK_UPDATE_EMPTY_LIST"
    BULK_UPDATE_MAX_LIMIT_EXCEEDED = "BULK_UPDATE_MAX_LIMIT_EXCEEDED"
    BULK_UPDATE_CERTIFICATES_BLOCKED = "BULK_UPDATE_CERTIFICATES_BLOCKED"

    INVALID_COMMENT_CONTENT = "INVALID_COMMENT_CONTENT"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    COMMENT_CERTIFICATE_MISMATCH = "COMMENT_CERTIFICATE_MISMATCH"

    DATABASE_ERROR = "DATABASE_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    IMMUTABILITY_VIOLATION = "IMMUTABILITY_VIOLATION"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class CertificateKernelError(Exception):
    """
    Base exception for all certificate kernel errors.

    All subclasses carry a ``code`` class attribute and expose their
    structured attributes through ``details``.
    """

    code: CertificateErrorCode = CertificateErrorCode.UNEXPECTED_ERROR

    @property
    def details(self) -> dict[str, Any]:
        return {
            k: v for k, v in vars(self).items() if not k.startswith("_")
        }


# Certificate-related exceptions


class CertificateError(CertificateKernelError):
    """Base exception for certificate lookup and access errors."""


class CertificateNotFoundError(CertificateError):
    """One or more certificate requests do not exist."""

    code = CertificateErrorCode.CERTIFICATE_NOT_FOUND

    def __init__(self, *certificate_ids: Any):
        self.certificate_ids = [str(cid) for cid in certificate_ids]
        super().__init__(
            f"Certificate not found: {', '.join(self.certificate_ids)}"
        )


class CertificateAccessDeniedError(CertificateError):
    """Actor is neither an admin nor the owner of the request."""

    code = CertificateErrorCode.CERTIFICATE_ACCESS_DENIED

    def __init__(self, certificate_id: Any, actor_id: Any):
        self.certificate_id = str(certificate_id) if certificate_id is not None else None
        self.actor_id = str(actor_id)
        if certificate_id is None:
            message = f"Actor {actor_id} may not perform this operation"
        else:
            message = f"Actor {actor_id} may not access certificate {certificate_id}"
        super().__init__(message)


class CertificateCannotBeEditedError(CertificateError):
    """Current status does not allow the actor to edit the request."""

    code = CertificateErrorCode.CERTIFICATE_CANNOT_BE_EDITED

    def __init__(self, certificate_id: Any, status_name: str):
        self.certificate_id = str(certificate_id)
        self.status_name = status_name
        super().__init__(
            f"Certificate {certificate_id} cannot be edited in status '{status_name}'"
        )


# Input validation exceptions


class CertificateInputError(CertificateKernelError):
    """Base exception for malformed request data."""

    field: str = ""

    def __init__(self, value: Any = None):
        self.value = value
        super().__init__(f"Invalid value for {self.field}: {value!r}")


class InvalidCertificateTypeError(CertificateInputError):
    code = CertificateErrorCode.INVALID_CERTIFICATE_TYPE
    field = "certificate_type"


class InvalidRecordNumberError(CertificateInputError):
    code = CertificateErrorCode.INVALID_RECORD_NUMBER
    field = "record_number"


class InvalidPartiesNameError(CertificateInputError):
    code = CertificateErrorCode.INVALID_PARTIES_NAME
    field = "parties_name"


class InvalidPriorityError(CertificateInputError):
    code = CertificateErrorCode.INVALID_PRIORITY
    field = "priority"


class InvalidStatusError(CertificateInputError):
    """Status name is not part of the configured catalog."""

    code = CertificateErrorCode.INVALID_STATUS
    field = "status"


# Status transition validation exceptions


class StatusValidationError(CertificateKernelError):
    """Base exception for rejected status transitions."""


class ConfirmationRequiredError(StatusValidationError):
    """The transition needs an explicit, exactly matching confirmation."""

    code = CertificateErrorCode.STATUS_VALIDATION_CONFIRMATION_REQUIRED

    def __init__(self, status_name: str):
        self.status_name = status_name
        super().__init__(
            f"Transition to '{status_name}' requires an explicit confirmation"
        )


class RequiredFieldMissingError(StatusValidationError):
    """A field required by the target status is blank."""

    code = CertificateErrorCode.STATUS_VALIDATION_REQUIRED_FIELD

    def __init__(self, status_name: str, missing_field: str):
        self.status_name = status_name
        self.missing_field = missing_field
        super().__init__(
            f"Transition to '{status_name}' requires field '{missing_field}'"
        )


# Bulk update exceptions


class BulkUpdateError(CertificateKernelError):
    """Base exception for batch pre-flight rejections."""


class BulkUpdateEmptyListError(BulkUpdateError):
    code = CertificateErrorCode.BULK_UPDATE_EMPTY_LIST

    def __init__(self):
        super().__init__("At least one certificate id is required")


class BulkUpdateLimitExceededError(BulkUpdateError):
    code = CertificateErrorCode.BULK_UPDATE_MAX_LIMIT_EXCEEDED

    def __init__(self, requested: int, limit: int):
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"Bulk update of {requested} certificates exceeds the limit of {limit}"
        )


class CertificatesBlockedError(BulkUpdateError):
    """Some requests are in a status that blocks batch edits."""

    code = CertificateErrorCode.BULK_UPDATE_CERTIFICATES_BLOCKED

    def __init__(self, blocked: list[dict[str, Any]], total: int):
        self.blocked_certificates = blocked
        self.blocked_count = len(blocked)
        self.success_count = 0
        self.failed_count = 0
        self.total = total
        super().__init__(
            f"{len(blocked)} of {total} certificates cannot be edited in their current status"
        )


# Comment exceptions


class CommentError(CertificateKernelError):
    """Base exception for comment errors."""


class InvalidCommentContentError(CommentError):
    code = CertificateErrorCode.INVALID_COMMENT_CONTENT

    def __init__(self):
        super().__init__("Comment content must not be blank")


class CommentNotFoundError(CommentError):
    code = CertificateErrorCode.COMMENT_NOT_FOUND

    def __init__(self, comment_id: Any):
        self.comment_id = str(comment_id)
        super().__init__(f"Comment not found: {comment_id}")


class CommentCertificateMismatchError(CommentError):
    code = CertificateErrorCode.COMMENT_CERTIFICATE_MISMATCH

    def __init__(self, comment_id: Any, certificate_id: Any):
        self.comment_id = str(comment_id)
        self.certificate_id = str(certificate_id)
        super().__init__(
            f"Comment {comment_id} does not belong to certificate {certificate_id}"
        )


# Persistence exceptions


class PersistenceError(CertificateKernelError):
    """Base exception for storage failures."""


class DatabaseError(PersistenceError):
    """The underlying store rejected or failed an operation."""

    code = CertificateErrorCode.DATABASE_ERROR

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Database error during {operation}: {reason}")


class UnexpectedError(CertificateKernelError):
    code = CertificateErrorCode.UNEXPECTED_ERROR

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unexpected error: {reason}")


class ImmutabilityViolationError(CertificateKernelError):
    """Attempted to modify or delete an append-only record."""

    code = CertificateErrorCode.IMMUTABILITY_VIOLATION

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Immutability violation on {entity_type} {entity_id}: {reason}"
        )


class ConfigurationError(CertificateKernelError):
    """Governance configuration is structurally invalid."""

    code = CertificateErrorCode.CONFIGURATION_ERROR

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source}: {reason}")
