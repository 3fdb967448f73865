"""
Values -- immutable value objects shared by the governance core.

Responsibility:
    Roles, priorities, audit event types, the externally sourced status
    descriptor and validation requirement, the acting principal, and the
    ``UNSET`` sentinel that distinguishes "not supplied" from an explicit
    null in update payloads.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Status is open data. ``StatusDescriptor`` is never an enum; the only
      fixed rule about it is that clients cannot change it.
    - ``Priority`` and ``ActorRole`` are closed sets.

Failure modes:
    - ValueError when a StatusDescriptor or ValidationRequirement is built
      with a blank name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final
from uuid import UUID


class _Unset:
    """Marker for a key supplied with an undefined value."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


def normalize_status_name(name: str) -> str:
    """Catalog lookup key for a status name."""
    return name.strip().lower()


class ActorRole(str, Enum):
    """Role of the principal performing an operation."""

    CLIENT = "client"
    ADMIN = "admin"


class Priority(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"


class CertificateEventType(str, Enum):
    """Kinds of audit events recorded against a certificate request."""

    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    BULK_UPDATED = "bulk_updated"
    TAGS_CHANGED = "tags_changed"
    COMMENT_ADDED = "comment_added"


@dataclass(frozen=True)
class Actor:
    """Authenticated principal performing an operation."""

    user_id: UUID
    role: ActorRole
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN


@dataclass(frozen=True)
class StatusDescriptor:
    """
    One entry of the externally configured status catalog.

    Guarantees:
        - ``can_edit_certificate`` governs client edits on the single-item
          path and every edit on the batch path.
        - ``is_final`` blocks batch edits for every role.
    """

    name: str
    display_name: str
    can_edit_certificate: bool
    is_final: bool = False
    color: str | None = None
    status_id: UUID | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("StatusDescriptor.name must not be blank")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.status_id) if self.status_id else None,
            "name": self.name,
            "display_name": self.display_name,
            "color": self.color,
            "can_edit_certificate": self.can_edit_certificate,
            "is_final": self.is_final,
        }


@dataclass(frozen=True)
class ValidationRequirement:
    """
    A gate on transitions into a target status.

    A requirement may demand a field be non-blank (``required_field``), an
    exact confirmation statement (``confirmation_text``), both, or neither.
    """

    name: str
    description: str | None = None
    required_field: str | None = None
    confirmation_text: str | None = None
    validation_id: UUID | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("ValidationRequirement.name must not be blank")
