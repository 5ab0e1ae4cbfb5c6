"""Tests for structured logging."""

import json
from io import StringIO

import pytest
import structlog

from charlink.observability import setup_logging_from_settings
from charlink.observability.logging import SecretRedactor, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self) -> None:
        setup_logging(level="INFO", format="json", redact_secrets=False)
        logger = get_logger("test")
        logger.info("test_message")

    def test_setup_console_format(self) -> None:
        setup_logging(level="DEBUG", format="console", redact_secrets=True)
        logger = get_logger("test")
        logger.debug("test_message", token="abc")

    def test_setup_from_settings(self) -> None:
        """Reads the observability.logging section."""
        setup_logging_from_settings()
        assert get_logger("test") is not None


class TestSecretRedactor:
    """Tests for secret redaction."""

    @pytest.fixture
    def redactor(self) -> SecretRedactor:
        return SecretRedactor()

    def test_redacts_session_keys(self, redactor: SecretRedactor) -> None:
        event_dict = {"token": "abc", "key": "k", "lazy_uuid": "u", "character_id": "c"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result == {
            "token": "[REDACTED]",
            "key": "[REDACTED]",
            "lazy_uuid": "[REDACTED]",
            "character_id": "c",
        }

    def test_redacts_authorization_header_value(self, redactor: SecretRedactor) -> None:
        event_dict = {"message": "sent authorization: Token abc123 to service"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert "abc123" not in result["message"]
        assert "Token [REDACTED]" in result["message"]

    def test_redacts_nested_headers(self, redactor: SecretRedactor) -> None:
        event_dict = {"headers": {"Authorization": "Token abc", "Content-Type": "application/json"}}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["headers"]["Authorization"] == "[REDACTED]"
        assert result["headers"]["Content-Type"] == "application/json"

    def test_redacts_inside_lists(self, redactor: SecretRedactor) -> None:
        event_dict = {"contacts": ["a@example.com", {"token": "t"}]}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["contacts"] == ["[EMAIL]", {"token": "[REDACTED]"}]

    def test_preserves_non_secret_data(self, redactor: SecretRedactor) -> None:
        event_dict = {"event": "chat_history_created", "status_code": 200, "character_id": "c"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result == event_dict


class TestJSONLogging:
    """Tests for JSON log output format."""

    def test_redacted_json_output(self) -> None:
        output = StringIO()
        structlog.configure(
            processors=[
                structlog.processors.add_log_level,
                SecretRedactor(),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(0),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(output),
            cache_logger_on_first_use=False,
        )

        structlog.get_logger("test").info("session_authenticated", token="secret", auth_mode="guest")

        parsed = json.loads(output.getvalue().strip())
        assert parsed["event"] == "session_authenticated"
        assert parsed["token"] == "[REDACTED]"
        assert parsed["auth_mode"] == "guest"
