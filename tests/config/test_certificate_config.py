"""Loading and validation of the governance configuration."""

import textwrap

import pytest

from certificate_config import get_active_config
from certificate_config.loader import compute_checksum, parse_config
from certificate_kernel.exceptions import CertificateErrorCode, ConfigurationError
from certificate_kernel.domain.transition_validator import DEFAULT_CONFIRMATION_STATEMENT

VALID_YAML = """
config_id: test-set
version: 3
governance:
  bulk_update_max_limit: 10
  default_page_limit: 20
  default_status: open
  default_confirmation_statement: "  Yes, really  "
statuses:
  - name: open
    can_edit_certificate: true
  - name: closed
    display_name: Closed
    can_edit_certificate: false
    is_final: true
    validations:
      - name: reason
        required_field: notes
      - name: legacy
        is_active: false
"""


def _write(tmp_path, text):
    path = tmp_path / "governance.yaml"
    path.write_text(textwrap.dedent(text))
    return path


def _valid_document():
    return {
        "config_id": "x",
        "governance": {
            "bulk_update_max_limit": 5,
            "default_page_limit": 5,
            "default_status": "open",
            "default_confirmation_statement": "ok",
        },
        "statuses": [{"name": "open", "can_edit_certificate": True}],
    }


class TestDefaultConfig:
    def test_bundled_defaults(self):
        config = get_active_config()

        assert config.bulk_update_max_limit == 50
        assert config.default_page_limit == 50
        assert config.default_status == "pending"
        assert config.bulk_comment_author == "Admin"
        assert config.default_confirmation_statement == DEFAULT_CONFIRMATION_STATEMENT
        assert [s.name for s in config.statuses] == [
            "pending", "in_progress", "completed", "canceled",
        ]

    def test_status_flags(self):
        config = get_active_config()

        assert config.status("pending").can_edit_certificate
        assert config.status("completed").is_final
        assert not config.status("in_progress").is_final
        assert config.status("unknown") is None

    def test_load_is_logged_with_checksum(self, captured_logs):
        config = get_active_config()

        [record] = [r for r in captured_logs() if r["message"] == "certificate_config_loaded"]
        assert record["checksum"] == config.checksum
        assert record["status_count"] == 4


class TestLoadFromFile:
    def test_custom_file(self, tmp_path):
        config = get_active_config(_write(tmp_path, VALID_YAML))

        assert config.config_id == "test-set"
        assert config.version == 3
        assert config.bulk_update_max_limit == 10
        assert config.default_confirmation_statement == "Yes, really"
        assert config.bulk_comment_author == "Admin"
        assert config.status("open").display_name == "open"

    def test_descriptor_and_requirements(self, tmp_path):
        closed = get_active_config(_write(tmp_path, VALID_YAML)).status("closed")

        descriptor = closed.to_descriptor()
        assert descriptor.is_final
        assert not descriptor.can_edit_certificate
        assert [v.is_active for v in closed.validations] == [True, False]
        assert closed.validations[0].to_requirement().required_field == "notes"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")

    def test_checksum_is_stable(self):
        assert compute_checksum({"b": 1, "a": 2}) == compute_checksum({"a": 2, "b": 1})


class TestValidation:
    def test_missing_governance(self):
        document = _valid_document()
        del document["governance"]

        with pytest.raises(ConfigurationError) as exc_info:
            parse_config(document)

        assert exc_info.value.code == CertificateErrorCode.CONFIGURATION_ERROR
        assert "governance" in exc_info.value.reason

    @pytest.mark.parametrize("value", [0, -1, "50", True])
    def test_limit_must_be_positive_int(self, value):
        document = _valid_document()
        document["governance"]["bulk_update_max_limit"] = value

        with pytest.raises(ConfigurationError):
            parse_config(document)

    def test_duplicate_status_names(self):
        document = _valid_document()
        document["statuses"].append({"name": "open", "can_edit_certificate": False})

        with pytest.raises(ConfigurationError, match="duplicate"):
            parse_config(document)

    def test_blank_statement(self):
        document = _valid_document()
        document["governance"]["default_confirmation_statement"] = "   "

        with pytest.raises(ConfigurationError):
            parse_config(document)

    def test_default_status_must_exist(self):
        document = _valid_document()
        document["governance"]["default_status"] = "draft"

        with pytest.raises(ConfigurationError, match="draft"):
            parse_config(document)

    def test_blank_status_name(self):
        document = _valid_document()
        document["statuses"].append({"name": " ", "can_edit_certificate": True})

        with pytest.raises(ConfigurationError):
            parse_config(document)

    def test_status_requires_edit_flag(self):
        document = _valid_document()
        document["statuses"] = [{"name": "open"}]

        with pytest.raises(ConfigurationError, match="can_edit_certificate"):
            parse_config(document)
