"""
Pytest fixtures for the certificate governance test suite.

Provides:
- Structured logging configured once per session, with per-test capture
- In-memory contract fakes wired into the orchestrators
- A SQLite-backed session with the status catalog synced from the default
  configuration (DATABASE_URL overrides the database)
"""

import json
import logging
import os
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from certificate_config import get_active_config
from certificate_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from certificate_kernel.db.immutability import (
    register_immutability_listeners,
    unregister_immutability_listeners,
)
from certificate_kernel.domain.clock import DeterministicClock
from certificate_kernel.domain.transition_validator import TransitionValidator
from certificate_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from certificate_services.bulk_update_orchestrator import BulkUpdateOrchestrator
from certificate_services.catalog_sync import sync_status_catalog
from certificate_services.certificate_service import CertificateService
from certificate_services.comment_service import CommentService
from certificate_services.update_orchestrator import UpdateOrchestrator
from tests.support.fakes import (
    InMemoryCertificateRepository,
    InMemoryCommentRepository,
    InMemoryEventRepository,
    InMemoryTagRepository,
    StaticValidationSource,
    default_catalog,
)

DEFAULT_DATABASE_URL = "sqlite://"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture certificate_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, update_orchestrator):
            update_orchestrator.execute(command)
            logs = captured_logs()
            assert any(r["message"] == "certificate_updated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("certificate_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# In-memory contract fakes
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def certificates(catalog, clock) -> InMemoryCertificateRepository:
    return InMemoryCertificateRepository(catalog, clock)


@pytest.fixture
def events(clock) -> InMemoryEventRepository:
    return InMemoryEventRepository(clock)


@pytest.fixture
def tags() -> InMemoryTagRepository:
    return InMemoryTagRepository()


@pytest.fixture
def comments(clock) -> InMemoryCommentRepository:
    return InMemoryCommentRepository(clock)


@pytest.fixture
def validations() -> StaticValidationSource:
    return StaticValidationSource()


@pytest.fixture
def update_orchestrator(certificates, events, validations) -> UpdateOrchestrator:
    return UpdateOrchestrator(certificates, events, validations, TransitionValidator())


@pytest.fixture
def bulk_orchestrator(certificates, events, tags, comments) -> BulkUpdateOrchestrator:
    return BulkUpdateOrchestrator(certificates, events, tags, comments)


@pytest.fixture
def certificate_service(certificates, events) -> CertificateService:
    return CertificateService(certificates, events)


@pytest.fixture
def comment_service(certificates, comments) -> CommentService:
    return CommentService(certificates, comments)


# =============================================================================
# Database fixtures
# =============================================================================


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


@pytest.fixture
def active_config():
    return get_active_config()


@pytest.fixture
def engine():
    engine = init_engine_from_url(get_database_url())
    create_tables()
    register_immutability_listeners()
    yield engine
    unregister_immutability_listeners()
    drop_tables()
    reset_engine()


@pytest.fixture
def session(engine, active_config) -> Generator[Session, None, None]:
    """Session with the default status catalog loaded; rolled back afterwards."""
    session = get_session()
    sync_status_catalog(session, active_config)
    try:
        yield session
    finally:
        session.rollback()
        session.close()
