"""
Unit tests for logging, metrics and settings.
"""

import json
import logging

import pytest
from pydantic import ValidationError

from regform.config import FormSettings
from regform.observability import metrics
from regform.observability.logger import CustomJsonFormatter, get_logger, log_operation, setup_logger


def sample(name: str, labels: dict) -> float:
    return metrics.REGISTRY.get_sample_value(name, labels) or 0.0


class TestLogger:
    """Tests for structured logging"""

    def test_json_formatter_fields(self):
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s"
        )
        record = logging.LogRecord("regform.test", logging.INFO, __file__, 1, "hello", None, None)
        record.funcName = "fn"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "regform.test"
        assert payload["function"] == "fn"

    def test_package_loggers_share_handler(self):
        logger = get_logger("regform.adapter.form_adapter")
        assert logger.name == "regform.adapter.form_adapter"
        assert logging.getLogger("regform").handlers

    def test_setup_logger_level(self):
        logger = setup_logger("regform-test", level="debug", format_type="text")
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_log_operation_reraises(self):
        with pytest.raises(RuntimeError):
            with log_operation("failing", logger=get_logger("regform.test")):
                raise RuntimeError("boom")


class TestMetrics:
    """Tests for Prometheus metrics"""

    def test_blur_records_outcome(self, adapter):
        before_invalid = sample(
            "regform_field_validations_total", {"field_id": "name", "outcome": "invalid"}
        )
        before_rule = sample(
            "regform_rule_failures_total", {"field_id": "name", "rule_name": "name_required"}
        )

        adapter.dispatch("blur", "name")

        assert sample(
            "regform_field_validations_total", {"field_id": "name", "outcome": "invalid"}
        ) == before_invalid + 1
        assert sample(
            "regform_rule_failures_total", {"field_id": "name", "rule_name": "name_required"}
        ) == before_rule + 1

    def test_submit_records_status(self, adapter, fill, valid_values):
        before_rejected = sample("regform_submissions_total", {"status": "rejected"})
        before_accepted = sample("regform_submissions_total", {"status": "accepted"})

        adapter.dispatch("submit")
        fill(adapter, valid_values)
        adapter.dispatch("submit")

        assert sample("regform_submissions_total", {"status": "rejected"}) == before_rejected + 1
        assert sample("regform_submissions_total", {"status": "accepted"}) == before_accepted + 1

    def test_registry_gauge(self, registry):
        registry.add("a@example.com")
        registry.add("b@example.com")
        assert sample("regform_registered_emails", {"store": "file"}) == 2

    def test_generate_metrics(self):
        output = metrics.generate_metrics().decode()
        assert "regform_field_validations_total" in output
        assert metrics.get_content_type().startswith("text/plain")


class TestFormSettings:
    """Tests for FormSettings"""

    def test_defaults(self, monkeypatch):
        for var in ("REGFORM_RESET_DELAY_MS", "REGFORM_REGISTRY_PATH", "REGFORM_UNIQUE_EMAIL",
                    "REGFORM_RULES_PATH", "LOG_FORMAT"):
            monkeypatch.delenv(var, raising=False)

        settings = FormSettings.from_env()

        assert settings.reset_delay_ms == 3000
        assert settings.registry_path is None
        assert settings.unique_email is False
        assert settings.rules_path is None

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REGFORM_RESET_DELAY_MS", "500")
        monkeypatch.setenv("REGFORM_REGISTRY_PATH", str(tmp_path / "emails.json"))
        monkeypatch.setenv("REGFORM_UNIQUE_EMAIL", "Yes")
        monkeypatch.setenv("LOG_FORMAT", "text")

        settings = FormSettings.from_env()

        assert settings.reset_delay_ms == 500
        assert settings.registry_path == tmp_path / "emails.json"
        assert settings.unique_email is True
        assert settings.log_format == "text"

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            FormSettings(reset_delay_ms=-5)
