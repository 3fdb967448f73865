"""
certificate_config -- single public entrypoint for governance configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration files
    directly.  YAML loading is internal tooling.

Architecture position:
    Configuration -- sits above ``certificate_kernel`` and below
    ``certificate_services``.  The kernel MUST NEVER import from this
    package.

Invariants enforced:
    - Single entrypoint: all runtime config flows through
      ``get_active_config()``.
    - The returned ``CertificateConfig`` has passed structural validation.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``ConfigurationError`` -- structural validation failed.

Audit relevance:
    Every successful load emits a ``certificate_config_loaded`` log entry
    with the config id, version and checksum, tying each governance decision
    to the configuration that produced it.
"""

from __future__ import annotations

from pathlib import Path

from certificate_config.loader import load_config_file
from certificate_config.schema import (
    CertificateConfig,
    StatusDefinition,
    ValidationDefinition,
)
from certificate_kernel.logging_config import get_logger

__all__ = [
    "CertificateConfig",
    "StatusDefinition",
    "ValidationDefinition",
    "get_active_config",
]

_logger = get_logger("config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | None = None) -> CertificateConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Optional YAML file; defaults to the bundled
            ``sets/default.yaml``.
    """
    path = config_path or _DEFAULT_CONFIG_PATH
    config = load_config_file(path)
    _logger.info(
        "certificate_config_loaded",
        extra={
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "status_count": len(config.statuses),
        },
    )
    return config
