"""
Tests for settings, logging helpers and the camelCase base model.
"""

import json
import logging
from typing import Optional

from nomad.shared.config import Settings
from nomad.shared.logging.config import StructuredFormatter, log_step_transition, setup_logging
from nomad.shared.schemas.base import CamelModel


class TestSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("STRIPE_SECRET_KEY", "")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("BASE_URL", "https://nomad.example")

        settings = Settings.from_env()

        assert settings.openai_api_key == "sk-env"
        assert settings.stripe_secret_key is None
        assert settings.log_level == "DEBUG"
        assert settings.base_url == "https://nomad.example"

    def test_defaults_are_mock_mode(self):
        settings = Settings()

        assert settings.openai_api_key is None
        assert settings.skyscanner_api_key is None


class TestLogging:
    def test_structured_formatter_includes_extra(self):
        record = logging.LogRecord("nomad.booking", logging.INFO, "", 0, "hello %s", ("world",), None)
        record.extra = {"step": "search"}

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["extra"] == {"step": "search"}

    def test_log_step_transition(self, caplog):
        logger = logging.getLogger("nomad.tests.transitions")

        with caplog.at_level(logging.INFO, logger="nomad.tests.transitions"):
            log_step_transition(
                "step_running",
                {"step": "search", "worker": "SearchWorker", "status": "running"},
                "orch_1_abc",
                logger=logger,
            )

        record = caplog.records[-1]
        assert record.getMessage() == "Step transition: step_running | step=search, status=running"
        assert record.extra["orchestration_id"] == "orch_1_abc"
        assert record.extra["worker"] == "SearchWorker"

    def test_setup_logging_quiets_noisy_loggers(self):
        setup_logging(level="DEBUG", log_format="json")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("stripe").level == logging.WARNING
        assert isinstance(logging.getLogger().handlers[0].formatter, StructuredFormatter)

        setup_logging()


class TestCamelModel:
    class _Sample(CamelModel):
        booking_id: str
        flight_price: Optional[float] = None

    def test_accepts_both_spellings(self):
        assert self._Sample(booking_id="a").booking_id == "a"
        assert self._Sample.model_validate({"bookingId": "b"}).booking_id == "b"

    def test_payload_is_camel_case_without_nones(self):
        assert self._Sample(booking_id="a").to_payload() == {"bookingId": "a"}
