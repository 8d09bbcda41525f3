"""Currency metadata lookup service."""

import json
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import TypeAdapter

from scaled_money.core.config import settings
from scaled_money.core.currency import Currency
from scaled_money.core.exceptions import UnknownCurrencyCodeError
from scaled_money.core.logging import get_logger
from scaled_money.services.currency_data import CURRENCY_DATA, CurrencyRecord

logger = get_logger(__name__)

_currency_list = TypeAdapter(List[Currency])


class CurrencyRegistry:
    """
    Resolves currency codes to immutable ``Currency`` descriptors.

    Descriptors are built lazily from the metadata records and memoised, so
    the same code always resolves to the same instance. Custom currencies
    (e.g. multi-base ones) can be registered at runtime.
    """

    def __init__(self, records: Optional[Mapping[str, CurrencyRecord]] = None):
        """Initialize registry with metadata records (bundled table by default)."""
        self._records: Dict[str, CurrencyRecord] = dict(CURRENCY_DATA if records is None else records)
        self._cache: Dict[str, Currency] = {}
        self._lock = threading.Lock()

    def resolve(self, code: str) -> Currency:
        """
        Get the currency for a code.

        Raises:
            UnknownCurrencyCodeError: If the code has no metadata
        """
        if not isinstance(code, str):
            raise TypeError(f"Currency code must be a string, got {type(code).__name__}")

        key = code.strip().upper()
        currency = self._cache.get(key)
        if currency is not None:
            return currency

        record = self._records.get(key)
        if record is None:
            logger.warning("Unknown currency code", code=key)
            raise UnknownCurrencyCodeError(key)

        name, base, exponent, symbol = record
        with self._lock:
            currency = self._cache.get(key)
            if currency is None:
                currency = Currency(code=key, name=name, base=base, exponent=exponent, symbol=symbol)
                self._cache[key] = currency
                logger.debug("Currency resolved", code=key, base=base, exponent=exponent)
        return currency

    def register(self, currency: Currency, overwrite: bool = False) -> Currency:
        """
        Add a currency to the registry.

        Raises:
            ValueError: If the code is already known and overwrite is False
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"Expected Currency, got {type(currency).__name__}")

        with self._lock:
            if not overwrite and (currency.code in self._records or currency.code in self._cache):
                raise ValueError(
                    f"Currency '{currency.code}' already registered. Use overwrite=True to replace it."
                )
            self._records[currency.code] = (currency.name, currency.base, currency.exponent, currency.symbol)
            self._cache[currency.code] = currency

        logger.info("Currency registered", code=currency.code, base=currency.base, exponent=currency.exponent)
        return currency

    def register_many(self, currencies: Iterable[Currency], overwrite: bool = False) -> None:
        for currency in currencies:
            self.register(currency, overwrite=overwrite)

    def load_file(self, path: str, overwrite: bool = True) -> int:
        """
        Register currencies from a JSON file holding a list of
        ``{code, name, base, exponent, symbol}`` objects.

        Returns:
            Number of currencies loaded
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        currencies = _currency_list.validate_python(raw)
        self.register_many(currencies, overwrite=overwrite)
        logger.info("Currency data loaded", path=path, count=len(currencies))
        return len(currencies)

    def __contains__(self, code: str) -> bool:
        return isinstance(code, str) and code.strip().upper() in self._records

    def codes(self) -> List[str]:
        """All known currency codes, sorted."""
        return sorted(self._records)


def create_default_registry() -> CurrencyRegistry:
    """Build a registry from the bundled table plus ``settings.CURRENCY_DATA_FILE``."""
    registry = CurrencyRegistry()
    if settings.CURRENCY_DATA_FILE:
        registry.load_file(settings.CURRENCY_DATA_FILE)
    return registry


# Global registry instance
currency_registry = create_default_registry()
