"""Exact scaled-integer money arithmetic."""

from scaled_money.core.currency import Currency
from scaled_money.core.exceptions import (
    IncompatibleCurrencyError,
    InvalidMonetaryLiteralError,
    InvalidRatiosError,
    MissingRateError,
    MonetaryError,
    NonDecimalCurrencyError,
    UnknownCurrencyCodeError,
)
from scaled_money.core.money import (
    MonetaryValue,
    MonetaryValueJSON,
    MonetaryValueLike,
    ScaledAmount,
    parse_money,
    zero_money,
)
from scaled_money.services.currency_registry import CurrencyRegistry, currency_registry
from scaled_money.services.formatting import CurrencyFormatter, currency_formatter

__version__ = "1.0.0"

__all__ = [
    "Currency",
    "CurrencyFormatter",
    "CurrencyRegistry",
    "IncompatibleCurrencyError",
    "InvalidMonetaryLiteralError",
    "InvalidRatiosError",
    "MissingRateError",
    "MonetaryError",
    "MonetaryValue",
    "MonetaryValueJSON",
    "MonetaryValueLike",
    "NonDecimalCurrencyError",
    "ScaledAmount",
    "UnknownCurrencyCodeError",
    "currency_formatter",
    "currency_registry",
    "parse_money",
    "zero_money",
]
