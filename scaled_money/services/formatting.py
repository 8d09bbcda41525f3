"""Display formatting for monetary amounts (en-US style)."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from scaled_money.services.currency_registry import CurrencyRegistry, currency_registry


class CurrencyFormatter:
    """Renders decimal amounts with the currency symbol and digit grouping."""

    def __init__(self, registry: Optional[CurrencyRegistry] = None):
        self.registry = registry or currency_registry

    def format(self, amount: Decimal, code: str) -> str:
        """
        Format an amount for display.

        Args:
            amount: Whole-unit amount (e.g. Decimal("1234.5"))
            code: Currency code

        Returns:
            String like "$1,234.50", "-$0.05" or "CHF 1,234.50"
        """
        currency = self.registry.resolve(code)
        places = Decimal(1).scaleb(-currency.exponent)
        quantized = Decimal(amount).quantize(places, rounding=ROUND_HALF_UP)

        number = f"{abs(quantized):,.{currency.exponent}f}"
        prefix = currency.symbol if currency.symbol else f"{currency.code} "
        text = f"{prefix}{number}"

        return f"-{text}" if quantized < 0 else text


# Global formatter instance
currency_formatter = CurrencyFormatter()
