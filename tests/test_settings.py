"""Tests for LedgerSettings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from finance_ledger.config import LedgerSettings


class TestLedgerSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for name in ("LEDGER_DATA_FILE", "LEDGER_GRAPH_SCALE", "LEDGER_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = LedgerSettings(_env_file=None)
        assert settings.data_file == Path("transactions.txt")
        assert settings.graph_scale == 10
        assert settings.currency_symbol == "$"
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        """Test LEDGER_* variables are read."""
        monkeypatch.setenv("LEDGER_GRAPH_SCALE", "25")
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "₹")
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "debug")
        settings = LedgerSettings(_env_file=None)
        assert settings.graph_scale == 25
        assert settings.currency_symbol == "₹"
        assert settings.log_level == "DEBUG"

    def test_rejects_bad_values(self, monkeypatch):
        """Test invalid scale and log level are refused."""
        monkeypatch.setenv("LEDGER_GRAPH_SCALE", "0")
        with pytest.raises(ValidationError):
            LedgerSettings(_env_file=None)

        monkeypatch.setenv("LEDGER_GRAPH_SCALE", "10")
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            LedgerSettings(_env_file=None)
