"""Pytest configuration and fixtures."""

import pytest

from scaled_money.core.currency import Currency
from scaled_money.services.currency_registry import CurrencyRegistry


@pytest.fixture
def registry():
    """Fresh registry built from the bundled table."""
    return CurrencyRegistry()


@pytest.fixture
def lsd(registry):
    """Pounds, shillings and pence: 20 shillings to the pound, 12 pence to the shilling."""
    return registry.register(Currency(code="LSD", name="Pre-decimal Pound", base=(20, 12), exponent=1))


@pytest.fixture
def hex_currency(registry):
    """Single-base currency that is not base ten."""
    return registry.register(Currency(code="HEX", name="Hex Credit", base=16, exponent=2))
