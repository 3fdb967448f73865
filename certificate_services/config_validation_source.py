"""ConfigStatusValidationSource -- validation requirements from the YAML catalog.

Counterpart of ``SelectorStatusValidationSource`` for deployments (and tests)
that keep the status catalog in configuration instead of the database.
"""

from __future__ import annotations

from certificate_config.schema import CertificateConfig
from certificate_kernel.domain.result import Result
from certificate_kernel.domain.values import ValidationRequirement


class ConfigStatusValidationSource:
    """StatusValidationSource backed by a loaded ``CertificateConfig``."""

    def __init__(self, config: CertificateConfig):
        self._by_status: dict[str, tuple[ValidationRequirement, ...]] = {
            status.name: tuple(
                v.to_requirement() for v in status.validations if v.is_active
            )
            for status in config.statuses
        }

    def fetch_active_validations(
        self, status_name: str
    ) -> Result[tuple[ValidationRequirement, ...]]:
        return Result.ok(self._by_status.get(status_name, ()))
