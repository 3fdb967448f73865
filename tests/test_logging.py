"""JSON log lines, request context and exception fields of certificate_kernel.logging_config."""

import json
import logging
from datetime import UTC, date, datetime
from io import StringIO
from uuid import uuid4

import pytest

from certificate_kernel.exceptions import CertificateCannotBeEditedError, CertificateErrorCode
from certificate_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def stream():
    out = StringIO()
    handler = logging.StreamHandler(out)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    return out


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestPayload:
    def test_request_context_merged_into_line(self, stream):
        with LogContext.bind(certificate_id="cert-1", operation="bulk_update"):
            get_logger("services.test").info("certificate_updated", extra={"fields": ["notes"]})

        [record] = _records(stream)
        assert record["logger"] == "certificate_kernel.services.test"
        assert record["certificate_id"] == "cert-1"
        assert record["operation"] == "bulk_update"
        assert record["fields"] == ["notes"]

    def test_uuid_dates_and_sets_serialized(self, stream):
        uid = uuid4()
        at = datetime(2024, 1, 2, 3, 4, tzinfo=UTC)
        get_logger("test").info(
            "values",
            extra={
                "row_id": uid,
                "payment_date": date(2024, 5, 6),
                "at": at,
                "names": {"b", "a"},
                "code": CertificateErrorCode.DATABASE_ERROR,
            },
        )

        [record] = _records(stream)
        assert record["row_id"] == str(uid)
        assert record["payment_date"] == "2024-05-06"
        assert record["at"] == "2024-01-02T03:04:00+00:00"
        assert record["names"] == ["a", "b"]
        assert record["code"] == "DATABASE_ERROR"

    def test_unknown_objects_fall_back_to_str(self, stream):
        class Marker:
            def __str__(self):
                return "marker"

        get_logger("test").info("values", extra={"thing": Marker()})

        assert _records(stream)[0]["thing"] == "marker"

    def test_kernel_exception_fields(self, stream):
        try:
            raise CertificateCannotBeEditedError("cert-9", "in_progress")
        except CertificateCannotBeEditedError:
            get_logger("test").error("edit_error", exc_info=True)

        [record] = _records(stream)
        assert record["exc_code"] == "CERTIFICATE_CANNOT_BE_EDITED"
        assert record["exc_type"] == "CertificateCannotBeEditedError"
        assert record["exc_certificate_id"] == "cert-9"
        assert record["exc_status_name"] == "in_progress"
        assert "traceback" in record


class TestLogContext:
    def test_bind_stringifies_and_ignores_unknown_keys(self):
        uid = uuid4()
        with LogContext.bind(certificate_id=uid, unknown="x", actor_id=None):
            assert LogContext.get_all() == {"certificate_id": str(uid)}
        assert LogContext.get_all() == {}

    def test_nested_bind_restores_outer_value(self):
        with LogContext.bind(actor_id="outer"):
            with LogContext.bind(actor_id="inner"):
                assert LogContext.get_all()["actor_id"] == "inner"
            assert LogContext.get_all()["actor_id"] == "outer"


def test_configure_logging_is_idempotent():
    for _ in range(2):
        handler = logging.StreamHandler(StringIO())
        handler.setFormatter(StructuredFormatter())
        configure_logging(handler=handler)

    structured = [
        h
        for h in logging.getLogger("certificate_kernel").handlers
        if isinstance(h.formatter, StructuredFormatter)
    ]
    assert len(structured) == 1
