"""
AccessPolicy -- role-based access and field-level edit rights.

Responsibility:
    Decides whether an actor may see and edit a certificate request, and
    reduces an update payload to the fields the actor's role may write.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O.

Invariants enforced:
    - Only an admin may change ``status``, costs, order number or payment
      data.  Disallowed keys are dropped silently, never rejected.
    - A client edits only their own requests, and only while the current
      status allows editing.  Admins are not bound by ``can_edit_certificate``
      on this path.
    - Undefined and blank-string values never reach storage.  Explicit
      ``None`` does.

Failure modes:
    None.  Callers turn ``AccessDecision`` into access-denied or
    cannot-be-edited failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from uuid import UUID

from certificate_kernel.domain.certificate import CertificateRequest
from certificate_kernel.domain.values import UNSET, ActorRole

CLIENT_EDITABLE_FIELDS: frozenset[str] = frozenset({
    "certificate_type",
    "record_number",
    "parties_name",
    "notes",
    "priority",
})

ADMIN_ONLY_FIELDS: frozenset[str] = frozenset({
    "status",
    "cost",
    "additional_cost",
    "order_number",
    "payment_date",
    "payment_type_id",
})


@dataclass(frozen=True)
class AccessDecision:
    can_access: bool
    can_edit: bool
    is_admin: bool
    is_owner: bool


def evaluate(
    request: CertificateRequest, actor_id: UUID, actor_role: ActorRole
) -> AccessDecision:
    is_admin = actor_role == ActorRole.ADMIN
    is_owner = request.is_owned_by(actor_id)
    can_access = is_admin or is_owner
    can_edit = can_access and (is_admin or request.can_be_edited())
    return AccessDecision(
        can_access=can_access,
        can_edit=can_edit,
        is_admin=is_admin,
        is_owner=is_owner,
    )


def filter_fields_by_role(
    payload: Mapping[str, Any], actor_role: ActorRole
) -> dict[str, Any]:
    """Drop every key the role may not write (admins keep everything)."""
    if actor_role == ActorRole.ADMIN:
        return dict(payload)
    return {k: v for k, v in payload.items() if k in CLIENT_EDITABLE_FIELDS}


def clean_update_data(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Remove undefined values and blank strings; keep explicit ``None``."""
    cleaned: dict[str, Any] = {}
    for key, value in payload.items():
        if value is UNSET:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        cleaned[key] = value
    return cleaned
