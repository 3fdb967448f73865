"""
Configuration Schema (``certificate_config.schema``).

Responsibility
--------------
Frozen dataclasses describing the governance configuration: batch limits,
the confirmation fallback statement, the bulk comment author, listing
defaults, and the status catalog with the validation requirements attached
to each status.

Invariants enforced
-------------------
* Every schema object is immutable.
* Structural validation lives in ``certificate_config.loader``; these types
  only carry data.
"""

from __future__ import annotations

from dataclasses import dataclass

from certificate_kernel.domain.values import StatusDescriptor, ValidationRequirement


@dataclass(frozen=True)
class ValidationDefinition:
    name: str
    description: str | None = None
    required_field: str | None = None
    confirmation_text: str | None = None
    is_active: bool = True

    def to_requirement(self) -> ValidationRequirement:
        return ValidationRequirement(
            name=self.name,
            description=self.description,
            required_field=self.required_field,
            confirmation_text=self.confirmation_text,
        )


@dataclass(frozen=True)
class StatusDefinition:
    name: str
    display_name: str
    can_edit_certificate: bool
    is_final: bool = False
    color: str | None = None
    validations: tuple[ValidationDefinition, ...] = ()

    def to_descriptor(self) -> StatusDescriptor:
        return StatusDescriptor(
            name=self.name,
            display_name=self.display_name,
            can_edit_certificate=self.can_edit_certificate,
            is_final=self.is_final,
            color=self.color,
        )


@dataclass(frozen=True)
class CertificateConfig:
    """The complete, validated governance configuration."""

    config_id: str
    version: int
    bulk_update_max_limit: int
    default_confirmation_statement: str
    bulk_comment_author: str
    default_page_limit: int
    default_status: str
    statuses: tuple[StatusDefinition, ...] = ()
    checksum: str = ""

    def status(self, name: str) -> StatusDefinition | None:
        for definition in self.statuses:
            if definition.name == name:
                return definition
        return None
