import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "STOREFRONT_DATABASE_URL",
        "STOREFRONT_ENV",
        "LOG_LEVEL",
        "STOREFRONT_MIN_ORDER_AMOUNT",
        "STOREFRONT_CURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert settings.database_url.startswith("sqlite:///")
    assert settings.database_url.endswith("storefront.db")
    assert settings.environment == "development"
    assert settings.log_level == "DEBUG"
    assert settings.minimum_order_total == Money(1000)


def test_log_level_follows_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_ENV", "Production")
    settings = Settings.from_env()
    assert settings.environment == "production"
    assert settings.log_level == "INFO"


def test_explicit_log_level_wins(monkeypatch):
    monkeypatch.setenv("STOREFRONT_ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings.from_env().log_level == "DEBUG"


def test_minimum_order_amount_can_be_disabled(monkeypatch):
    monkeypatch.setenv("STOREFRONT_MIN_ORDER_AMOUNT", "0")
    assert Settings.from_env().minimum_order_total is None


def test_currency(monkeypatch):
    monkeypatch.setenv("STOREFRONT_CURRENCY", "eur")
    monkeypatch.setenv("STOREFRONT_MIN_ORDER_AMOUNT", "250")
    assert Settings.from_env().minimum_order_total == Money(250, "EUR")


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("STOREFRONT_MIN_ORDER_AMOUNT", "ten dollars")
    with pytest.raises(ValidationError, match="STOREFRONT_MIN_ORDER_AMOUNT must be an integer"):
        Settings.from_env()
