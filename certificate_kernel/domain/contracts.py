"""Contracts -- narrow ports the governance core depends on.

Every operation returns a ``Result``; implementations map storage failures to
``DatabaseError`` instead of raising. SQLAlchemy implementations live in
``certificate_kernel.services`` (repositories) and
``certificate_kernel.selectors`` (validation catalog); a configuration-backed
validation source lives in ``certificate_services``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from certificate_kernel.domain.certificate import (
    CertificateComment,
    CertificateEvent,
    CertificateEventDraft,
    CertificateFilters,
    CertificatePage,
    CertificatePatch,
    CertificateRequest,
    CommentDraft,
    NewCertificate,
    TagReplacement,
)
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import ValidationRequirement


@runtime_checkable
class CertificateRepository(Protocol):
    """Storage of certificate requests."""

    def find_by_id(self, certificate_id: UUID) -> Result[CertificateRequest | None]:
        """Return the request, ``None`` when absent, or a failure."""
        ...

    def find_all(self, filters: CertificateFilters) -> Result[CertificatePage]:
        ...

    def create(self, data: NewCertificate) -> Result[CertificateRequest]:
        ...

    def update(
        self, certificate_id: UUID, patch: CertificatePatch
    ) -> Result[CertificateRequest]:
        """Apply ``patch`` (``status`` given by name) and return the fresh entity."""
        ...


@runtime_checkable
class CertificateEventRepository(Protocol):
    """Append-only audit event storage."""

    def create(self, draft: CertificateEventDraft) -> Result[CertificateEvent]:
        ...

    def list_by_certificate_id(
        self, certificate_id: UUID
    ) -> Result[list[CertificateEvent]]:
        ...


@runtime_checkable
class CertificateTagRepository(Protocol):
    def update_certificate_tags(
        self, certificate_id: UUID, tag_ids: list[UUID]
    ) -> Result[TagReplacement]:
        """Replace the tag set of a request, reporting old and new tags."""
        ...


@runtime_checkable
class CertificateCommentRepository(Protocol):
    def create(self, draft: CommentDraft) -> Result[CertificateComment]:
        ...

    def list_by_certificate_id(
        self, certificate_id: UUID
    ) -> Result[list[CertificateComment]]:
        ...

    def find_by_id(self, comment_id: UUID) -> Result[CertificateComment | None]:
        ...

    def delete(self, comment_id: UUID) -> Result[None]:
        ...


@runtime_checkable
class StatusValidationSource(Protocol):
    """Source of validation requirements for transitions into a status.

    Implementations: SelectorStatusValidationSource (database),
    ConfigStatusValidationSource (YAML catalog).
    """

    def fetch_active_validations(
        self, status_name: str
    ) -> Result[tuple[ValidationRequirement, ...]]:
        """Active requirements for ``status_name``; empty when none apply."""
        ...
