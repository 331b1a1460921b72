"""Tests for error sanitization utilities."""

from __future__ import annotations

from langfuse_operator.services.langfuse.errors import HTTPError
from langfuse_operator.utils.errors import (
    sanitize_dict,
    sanitize_error_message,
    sanitize_exception,
)


class TestSanitizeErrorMessage:
    """Test cases for sanitize_error_message function."""

    def test_sanitize_secret_key(self):
        """Test that secret keys are sanitized."""
        message = "Error: secret_key: sk-lf-1234-abcd"
        result = sanitize_error_message(message)
        assert "1234-abcd" not in result
        assert "[REDACTED]" in result

    def test_sanitize_langfuse_key_prefixes(self):
        """Test that Langfuse key material is redacted wherever it appears."""
        message = "key pair pk-lf-1111 / sk-lf-2222 rejected"
        result = sanitize_error_message(message)
        assert "1111" not in result
        assert "2222" not in result
        assert "pk-lf-" in result

    def test_sanitize_bearer_token(self):
        """Test that bearer tokens are sanitized."""
        message = "request failed, header Bearer admin-token-value"
        result = sanitize_error_message(message)
        assert "admin-token-value" not in result
        assert "Bearer [REDACTED]" in result

    def test_sanitize_basic_auth(self):
        """Test that basic auth credentials are sanitized."""
        message = "Authorization Basic cGstMTpzay0x"
        result = sanitize_error_message(message)
        assert "cGstMTpzay0x" not in result

    def test_sanitize_json_field(self):
        """Test that JSON-style fields are sanitized."""
        message = 'response body: {"id": "oak-1", "secretKey": "sk-9"}'
        result = sanitize_error_message(message)
        assert "sk-9" not in result
        assert "oak-1" in result

    def test_sanitize_case_insensitive(self):
        """Test that sanitization is case-insensitive."""
        message = "Error: PASSWORD: hunter2"
        result = sanitize_error_message(message)
        assert "hunter2" not in result

    def test_no_sanitization_needed(self):
        """Test that messages without sensitive data remain unchanged."""
        message = "cannot find entity with ID proj-1"
        assert sanitize_error_message(message) == message


class TestSanitizeException:
    """Test cases for sanitize_exception function."""

    def test_sanitize_http_error(self):
        """Test sanitizing an HTTPError echoing a created key."""
        error = HTTPError(500, '{"publicKey": "pk-1", "secretKey": "sk-1"}')
        result = sanitize_exception(error)
        assert "status code 500" in result
        assert "sk-1" not in result

    def test_sanitize_generic_exception(self):
        """Test sanitizing a generic Exception."""
        error = Exception("Resource not found")
        assert sanitize_exception(error) == "Resource not found"


class TestSanitizeDict:
    """Test cases for sanitize_dict function."""

    def test_sanitize_key_fields(self):
        """Test that key fields are redacted and identifiers kept."""
        data = {"id": "oak-1", "public_key": "pk-1", "secret_key": "sk-1"}
        result = sanitize_dict(data)
        assert result == {"id": "oak-1", "public_key": "[REDACTED]", "secret_key": "[REDACTED]"}

    def test_sanitize_scoped_key_fields(self):
        """Test that organization key pairs are redacted."""
        data = {"organization_public_key": "pk-1", "organization_secret_key": "sk-1", "name": "P1"}
        result = sanitize_dict(data)
        assert result["organization_public_key"] == "[REDACTED]"
        assert result["organization_secret_key"] == "[REDACTED]"
        assert result["name"] == "P1"

    def test_sanitize_nested_dict(self):
        """Test sanitizing nested dictionaries."""
        data = {"project": {"id": "proj-1", "secretKey": "sk-1"}}
        result = sanitize_dict(data)
        assert result["project"]["id"] == "proj-1"
        assert result["project"]["secretKey"] == "[REDACTED]"

    def test_sanitize_additional_keys(self):
        """Test redacting caller-supplied keys."""
        result = sanitize_dict({"host": "https://langfuse.test"}, sensitive_keys={"host"})
        assert result["host"] == "[REDACTED]"

    def test_non_string_values_preserved(self):
        """Test that non-string values pass through."""
        result = sanitize_dict({"retention_days": 30, "success": False})
        assert result == {"retention_days": 30, "success": False}
