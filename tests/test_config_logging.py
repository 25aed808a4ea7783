"""
Tests for configuration loading and structured logging
"""

import json
import logging
from datetime import datetime
import pytest

from account_ledger.config import LedgerConfig, reload_config
from account_ledger.logging_config import JSONFormatter, log_action, setup_logging


class TestConfig:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LEDGER_JWT_EXPIRY_HOURS", raising=False)
        monkeypatch.delenv("LEDGER_DATABASE_URL", raising=False)
        config = LedgerConfig(_env_file=None)

        assert config.jwt_expiry_hours == 1
        assert config.jwt_algorithm == "HS256"
        assert config.database_url.startswith("sqlite:///")
        assert config.auto_migrate is True

    def test_environment_prefix(self, monkeypatch):
        """LEDGER_* variables override defaults"""
        monkeypatch.setenv("LEDGER_DATABASE_URL", "memory://")
        monkeypatch.setenv("LEDGER_JWT_SECRET", "from-env")
        monkeypatch.setenv("ledger_api_port", "9001")

        config = reload_config()

        assert config.database_url == "memory://"
        assert config.jwt_secret == "from-env"
        assert config.api_port == 9001

    def test_explicit_values_win(self):
        config = LedgerConfig(_env_file=None, jwt_secret="explicit", log_format="text")
        assert config.jwt_secret == "explicit"
        assert config.log_format == "text"


class ListHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestLogging:

    def setup_method(self):
        self.logger = logging.getLogger("ledger.test")
        self.handler = ListHandler()
        self.logger.addHandler(self.handler)
        self.logger.setLevel(logging.DEBUG)

    def teardown_method(self):
        self.logger.removeHandler(self.handler)

    def test_log_action_attaches_fields(self):
        log_action(self.logger, "info", "Deposit committed",
                   customer_id=7, action="deposit", resource="customer:7",
                   extra={"amount": "5.00"})

        record = self.handler.records[0]
        assert record.customer_id == 7
        assert record.action == "deposit"
        assert record.extra == {"amount": "5.00"}

    def test_json_formatter_output(self):
        log_action(self.logger, "warning", "Withdraw rejected",
                   customer_id=3, action="withdraw_rejected")

        payload = json.loads(JSONFormatter().format(self.handler.records[0]))
        assert payload["level"] == "WARNING"
        assert payload["message"] == "Withdraw rejected"
        assert payload["customer_id"] == 3
        assert "resource" not in payload

    def test_log_action_reports_calling_module(self):
        """Records point at the caller, not at the logging helper"""
        log_action(self.logger, "info", "Customer registered", action="register")

        record = self.handler.records[0]
        assert record.module == "test_config_logging"
        assert not hasattr(record, "customer_id")

    def test_json_timestamp_is_record_time(self):
        log_action(self.logger, "info", "Deposit committed")
        record = self.handler.records[0]

        payload = json.loads(JSONFormatter().format(record))
        assert datetime.fromisoformat(payload["timestamp"]).timestamp() == pytest.approx(record.created)

    def test_json_formatter_includes_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            self.logger.error("failed", exc_info=True)

        payload = json.loads(JSONFormatter().format(self.handler.records[0]))
        assert "ValueError: bad" in payload["exception"]

    def test_disabled_level_is_skipped(self):
        self.logger.setLevel(logging.ERROR)
        log_action(self.logger, "info", "not emitted")
        assert self.handler.records == []

    @pytest.mark.parametrize("fmt,formatter_type", [("json", JSONFormatter), ("text", logging.Formatter)])
    def test_setup_logging(self, fmt, formatter_type):
        logger = setup_logging("DEBUG", fmt, logger_name="ledger.setup_test")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, formatter_type)
        assert logger.propagate is False
