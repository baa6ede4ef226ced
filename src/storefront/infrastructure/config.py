"""Runtime configuration, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_MINIMUM_ORDER_AMOUNT = 1000  # minor units, i.e. 10.00

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:

    database_url: str
    environment: str = "development"
    log_level: str = "DEBUG"
    minimum_order_amount: int = DEFAULT_MINIMUM_ORDER_AMOUNT
    currency: str = "USD"

    @property
    def minimum_order_total(self) -> Money | None:
        """The configured minimum as Money, or None when the check is disabled."""
        if self.minimum_order_amount <= 0:
            return None
        return Money(self.minimum_order_amount, self.currency)

    @classmethod
    def from_env(cls) -> Settings:
        environment = os.getenv("STOREFRONT_ENV", "development").lower()
        return cls(
            database_url=os.getenv(
                "STOREFRONT_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'storefront.db'}"
            ),
            environment=environment,
            log_level=os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(environment, "INFO")).upper(),
            minimum_order_amount=_int_env(
                "STOREFRONT_MIN_ORDER_AMOUNT", DEFAULT_MINIMUM_ORDER_AMOUNT
            ),
            currency=os.getenv("STOREFRONT_CURRENCY", "USD").upper(),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from exc
