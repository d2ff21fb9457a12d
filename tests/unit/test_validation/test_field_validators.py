"""
Unit tests for field validators and error handling helpers.
"""

import logging
from unittest.mock import Mock

import pytest

from taskmon.validation import (
    ErrorSeverity,
    ValidationError,
    handle_cli_error,
    handle_error,
    validate_base_url,
    validate_check_uuid,
    validate_non_empty_string,
    validate_ping_key,
    validate_positive_float,
    validate_slug,
)


@pytest.mark.unit
class TestValidators:
    """Test cases for individual validators."""

    def test_uuid_canonicalized(self):
        assert (
            validate_check_uuid("5C9E2F0E-8D4A-4B7F-9A53-2F1D7D6C1E01")
            == "5c9e2f0e-8d4a-4b7f-9a53-2f1d7d6c1e01"
        )

    @pytest.mark.parametrize("value", ["", "   ", "not-a-uuid", "1234", None])
    def test_uuid_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_check_uuid(value, "--uuid")

        assert exc_info.value.field_name == "--uuid"

    @pytest.mark.parametrize("value", ["backup", "db-dump_2", "a"])
    def test_slug_accepted(self, value):
        assert validate_slug(value) == value

    @pytest.mark.parametrize("value", ["Backup", "has space", "a/b", ""])
    def test_slug_rejected(self, value):
        with pytest.raises(ValidationError):
            validate_slug(value)

    def test_ping_key(self):
        assert validate_ping_key("fqOOd6-F4MMNuCEnzTU01w") == "fqOOd6-F4MMNuCEnzTU01w"
        with pytest.raises(ValidationError):
            validate_ping_key("a/b")
        with pytest.raises(ValidationError):
            validate_ping_key("a b")

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://hc-ping.com", "https://hc-ping.com"),
            ("https://hc.example.com/ping/", "https://hc.example.com/ping"),
            ("http://127.0.0.1:8000", "http://127.0.0.1:8000"),
        ],
    )
    def test_base_url_accepted(self, value, expected):
        assert validate_base_url(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["hc-ping.com", "ftp://hc-ping.com", "https://", "https://hc-ping.com/?x=1", ""],
    )
    def test_base_url_rejected(self, value):
        with pytest.raises(ValidationError):
            validate_base_url(value)

    def test_positive_float(self):
        assert validate_positive_float("2.5", field_name="timeout") == 2.5

        with pytest.raises(ValidationError) as exc_info:
            validate_positive_float(0, field_name="timeout")
        assert "timeout" in str(exc_info.value)

        with pytest.raises(ValidationError):
            validate_positive_float("abc")
        with pytest.raises(ValidationError):
            validate_positive_float(500, max_value=300)

    @pytest.mark.parametrize("value", ["nan", float("nan"), "inf", float("-inf")])
    def test_positive_float_rejects_non_finite(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_float(value, max_value=300, field_name="timeout")

        assert "finite" in str(exc_info.value)

    def test_non_empty_string(self):
        assert validate_non_empty_string("x") == "x"
        with pytest.raises(ValidationError):
            validate_non_empty_string("  ")
        with pytest.raises(ValidationError):
            validate_non_empty_string(3)


@pytest.mark.unit
class TestErrorHandling:
    """Test cases for handle_error and handle_cli_error."""

    def test_handle_error_reraises(self):
        error = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            handle_error(error, "testing", logger=Mock(spec=logging.Logger))

    def test_handle_error_logs_at_severity(self):
        test_logger = Mock(spec=logging.Logger)
        handle_error(RuntimeError("boom"), "testing", severity=ErrorSeverity.WARNING,
                     reraise=False, logger=test_logger)

        test_logger.warning.assert_called_once_with("Error in testing: boom")

    def test_handle_error_accepts_string_severity(self):
        test_logger = Mock(spec=logging.Logger)
        handle_error(RuntimeError("boom"), "testing", severity="INFO",
                     reraise=False, logger=test_logger)

        test_logger.info.assert_called_once()

    def test_handle_cli_error_exits(self):
        test_logger = Mock(spec=logging.Logger)
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ValueError("bad"), "testing", exit_code=2, logger=test_logger)

        assert exc_info.value.code == 2
        test_logger.error.assert_called_once_with("Error in CLI testing: bad")

    def test_handle_cli_error_honours_severity(self):
        test_logger = Mock(spec=logging.Logger)
        with pytest.raises(SystemExit):
            handle_cli_error(ValueError("bad"), "testing", severity=ErrorSeverity.CRITICAL,
                             exit_code=1, logger=test_logger)

        test_logger.critical.assert_called_once_with("Error in CLI testing: bad", exc_info=True)

    def test_validation_error_carries_field_and_value(self):
        error = ValidationError("bad timeout", field_name="timeout", value=-1)

        assert (error.field_name, error.value, str(error)) == ("timeout", -1, "bad timeout")
        assert not hasattr(error, "severity")
