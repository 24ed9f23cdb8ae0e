"""
Settings tests
"""
import pytest
from decimal import Decimal

from src.config.settings import (
    CatalogConfig,
    get_env_decimal,
    load_vat_rates,
    parse_vat_rates,
    validate_all_configs,
)
from src.exceptions import ConfigurationError


class TestParseVatRates:
    """CATALOG_VAT_RATES parsing"""

    def test_parse(self):
        rates = parse_vat_rates("Sweden=0.70, French=0.65,Italian=0.40")
        assert rates == {
            "Sweden": Decimal("0.70"),
            "French": Decimal("0.65"),
            "Italian": Decimal("0.40"),
        }

    def test_trailing_comma_ignored(self):
        assert parse_vat_rates("Sweden=0.70,") == {"Sweden": Decimal("0.70")}

    @pytest.mark.parametrize("raw", [
        "Sweden",
        "=0.70",
        "Sweden=abc",
        "Sweden=-0.1",
        "Sweden=NaN",
        "Sweden=0.70,Sweden=0.65",
        "",
        " , ",
    ])
    def test_invalid_tables(self, raw):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_vat_rates(raw)
        assert exc_info.value.config_key == "CATALOG_VAT_RATES"


class TestLoadVatRates:
    """Environment loading"""

    def test_defaults_when_unset(self, monkeypatch):
        monkeypatch.delenv("CATALOG_VAT_RATES", raising=False)
        assert load_vat_rates() == {
            "Sweden": Decimal("0.70"),
            "French": Decimal("0.65"),
            "Italian": Decimal("0.40"),
        }

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CATALOG_VAT_RATES", "Norway=0.25")
        assert load_vat_rates() == {"Norway": Decimal("0.25")}


class TestGetEnvDecimal:
    """get_env_decimal"""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TEST_DECIMAL", raising=False)
        assert get_env_decimal("TEST_DECIMAL", Decimal("1")) == Decimal("1")

    def test_value(self, monkeypatch):
        monkeypatch.setenv("TEST_DECIMAL", "0.5")
        assert get_env_decimal("TEST_DECIMAL", Decimal("1")) == Decimal("0.5")

    @pytest.mark.parametrize("value", ["abc", "Infinity", "-1", "5"])
    def test_invalid(self, monkeypatch, value):
        monkeypatch.setenv("TEST_DECIMAL", value)
        with pytest.raises(ConfigurationError):
            get_env_decimal("TEST_DECIMAL", Decimal("1"), min_value=Decimal("0"), max_value=Decimal("2"))


class TestCatalogConfig:
    """CatalogConfig.validate"""

    def test_validate_reference_table(self, monkeypatch):
        monkeypatch.setattr(CatalogConfig, "VAT_RATES", {"Sweden": Decimal("0.70")})
        CatalogConfig.validate()
        validate_all_configs()

    def test_rate_above_maximum(self, monkeypatch):
        monkeypatch.setattr(CatalogConfig, "VAT_RATES", {"Sweden": Decimal("1.5")})
        monkeypatch.setattr(CatalogConfig, "MAX_VAT_RATE", Decimal("1"))

        with pytest.raises(ConfigurationError, match="exceeds"):
            CatalogConfig.validate()
