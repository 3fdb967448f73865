"""
Configuration Loader (``certificate_config.loader``).

Responsibility
--------------
Loads a governance configuration YAML file and parses it into the frozen
dataclasses of ``certificate_config.schema``.  This is internal tooling:
runtime callers go through ``certificate_config.get_active_config()``.

Invariants enforced
-------------------
* Required keys are never silently defaulted; a missing key raises
  ``ConfigurationError`` naming it.
* Limits are positive, status names are unique and non-blank, and the
  default status exists in the catalog.
* ``compute_checksum`` is a deterministic SHA-256 of the parsed document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Structural problems  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from certificate_config.schema import (
    CertificateConfig,
    StatusDefinition,
    ValidationDefinition,
)
from certificate_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _require(data: dict[str, Any], key: str, source: str) -> Any:
    if key not in data:
        raise ConfigurationError(source, f"missing required key '{key}'")
    return data[key]


def _positive_int(data: dict[str, Any], key: str, source: str) -> int:
    value = _require(data, key, source)
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigurationError(source, f"'{key}' must be a positive integer, got {value!r}")
    return value


def parse_validation(data: dict[str, Any], source: str) -> ValidationDefinition:
    return ValidationDefinition(
        name=_require(data, "name", source),
        description=data.get("description"),
        required_field=data.get("required_field"),
        confirmation_text=data.get("confirmation_text"),
        is_active=bool(data.get("is_active", True)),
    )


def parse_status(data: dict[str, Any], source: str) -> StatusDefinition:
    name = _require(data, "name", source)
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(source, "status name must be a non-blank string")
    return StatusDefinition(
        name=name,
        display_name=data.get("display_name") or name,
        can_edit_certificate=bool(_require(data, "can_edit_certificate", source)),
        is_final=bool(data.get("is_final", False)),
        color=data.get("color"),
        validations=tuple(
            parse_validation(v, f"{source}:{name}") for v in data.get("validations") or ()
        ),
    )


def parse_config(data: dict[str, Any], source: str = "<memory>") -> CertificateConfig:
    """Parse and validate a configuration document."""
    governance = _require(data, "governance", source)
    statuses = tuple(
        parse_status(s, source) for s in _require(data, "statuses", source) or ()
    )

    names = [s.name for s in statuses]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigurationError(source, f"duplicate status names: {duplicates}")

    statement = _require(governance, "default_confirmation_statement", source)
    if not isinstance(statement, str) or not statement.strip():
        raise ConfigurationError(source, "default_confirmation_statement must not be blank")

    default_status = _require(governance, "default_status", source)
    if default_status not in names:
        raise ConfigurationError(source, f"default_status '{default_status}' is not in the catalog")

    return CertificateConfig(
        config_id=_require(data, "config_id", source),
        version=int(data.get("version", 1)),
        bulk_update_max_limit=_positive_int(governance, "bulk_update_max_limit", source),
        default_confirmation_statement=statement.strip(),
        bulk_comment_author=governance.get("bulk_comment_author") or "Admin",
        default_page_limit=_positive_int(governance, "default_page_limit", source),
        default_status=default_status,
        statuses=statuses,
        checksum=compute_checksum(data),
    )


def load_config_file(path: Path) -> CertificateConfig:
    return parse_config(load_yaml_file(path), source=str(path))
