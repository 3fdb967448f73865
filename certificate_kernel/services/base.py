"""
BaseService -- abstract base for all kernel repositories.

Responsibility:
    Common constructor and session contract for every SQLAlchemy-backed
    repository.  Repositories receive a ``Session`` and use
    ``session.flush()`` -- never ``session.commit()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    - Transaction boundaries belong to the caller (``session_scope()`` or a
      test harness).  A repository never commits or rolls back.
    - Storage errors never escape: ``_database_failure`` logs them and turns
      them into a ``DATABASE_ERROR`` result.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from certificate_kernel.db.base import Base
from certificate_kernel.domain.clock import Clock, SystemClock
from certificate_kernel.domain.result import Result
from certificate_kernel.exceptions import DatabaseError
from certificate_kernel.logging_config import get_logger

ModelType = TypeVar("ModelType", bound=Base)

logger = get_logger("services.repository")


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for kernel repositories.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT host read-model queries spanning several aggregates;
          those belong in ``certificate_kernel/selectors/``.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        self.session = session
        self.clock = clock or SystemClock()

    def _database_failure(self, operation: str, exc: SQLAlchemyError) -> Result:
        logger.error(
            "repository_operation_failed",
            exc_info=True,
            extra={"repository": type(self).__name__, "db_operation": operation},
        )
        return Result.fail(DatabaseError(operation, str(exc)))
