"""
Test suite for configuration

Tests defaults and environment overrides.
"""

import pytest

from atm_ledger import Atm, InvalidArgument
from atm_ledger import config as config_module
from atm_ledger.config import AtmConfig, get_config, reload_config
from atm_ledger.currency import Currency


class TestAtmConfig:
    """Test AtmConfig settings"""

    def test_defaults(self, monkeypatch):
        """Test default values"""
        for name in ("ATM_LOG_LEVEL", "ATM_CURRENCY", "ATM_REJECT_NEGATIVE_OPENING_BALANCE"):
            monkeypatch.delenv(name, raising=False)

        cfg = AtmConfig(_env_file=None)

        assert cfg.log_level == "INFO"
        assert cfg.log_format == "json"
        assert cfg.currency == "USD"
        assert cfg.reject_negative_opening_balance is False
        assert cfg.ledger_encoding == "utf-8"

    def test_environment_overrides(self, monkeypatch):
        """Test ATM_ prefixed variables are honoured"""
        monkeypatch.setenv("ATM_REJECT_NEGATIVE_OPENING_BALANCE", "true")
        monkeypatch.setenv("ATM_CURRENCY", "CAD")

        cfg = AtmConfig(_env_file=None)

        assert cfg.reject_negative_opening_balance is True
        assert Atm(config=cfg).currency is Currency.CAD

    def test_reload_config(self, monkeypatch):
        """Test the global instance is rebuilt from the environment"""
        original = get_config()
        monkeypatch.setattr(config_module, "config", original)
        monkeypatch.setenv("ATM_LOG_LEVEL", "DEBUG")

        reloaded = reload_config()

        assert reloaded.log_level == "DEBUG"
        assert get_config() is reloaded

    def test_unknown_currency_rejected(self):
        """Test the engine refuses unsupported currencies"""
        with pytest.raises(InvalidArgument):
            Atm(config=AtmConfig(currency="XYZ"))
