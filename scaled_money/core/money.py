"""Money handling utilities - scaled integers only, never floats!"""

import re
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Any, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from scaled_money.core.arithmetic import (
    count_trailing_zeros,
    divide_half_up,
    distribute,
    get_amount_and_scale,
    get_divisors,
    integer_divide,
    modulo,
)
from scaled_money.core.config import settings
from scaled_money.core.currency import Currency
from scaled_money.core.exceptions import (
    IncompatibleCurrencyError,
    InvalidMonetaryLiteralError,
    InvalidRatiosError,
    MissingRateError,
    NonDecimalCurrencyError,
)
from scaled_money.core.logging import get_logger

if TYPE_CHECKING:
    from scaled_money.services.currency_registry import CurrencyRegistry
    from scaled_money.services.formatting import CurrencyFormatter

logger = get_logger(__name__)

# "<integer>[.<fraction>] <CODE>"
LITERAL_PATTERN = re.compile(r"^\s*([+-]?\d+)(?:\.(\d+))?\s+(\S+)\s*$")


class ScaledAmount(BaseModel):
    """Integer amount with its own scale, used for rates and ratios."""
    amount: StrictInt = Field(..., description="Raw integer at the given scale")
    scale: StrictInt = Field(0, ge=0, description="Number of fractional digits")

    model_config = ConfigDict(frozen=True)


Rate = Union[int, ScaledAmount, Mapping[str, int], "MonetaryValue"]
Rates = Mapping[str, Rate]


class MonetaryValueLike(BaseModel):
    """Structured input for building a MonetaryValue."""
    amount: StrictInt = Field(..., description="Raw integer amount at the given scale")
    scale: StrictInt = Field(0, ge=0, description="Number of subunit digits")
    currency: Optional[Union[Currency, str]] = Field(None, description="Currency or code, defaults to USD")

    @field_validator("currency", mode="before")
    @classmethod
    def currency_is_instance_or_code(cls, v: Any) -> Any:
        if v is None or isinstance(v, (Currency, str)):
            return v
        raise ValueError("currency must be a Currency or a currency code")


class MonetaryValueJSON(BaseModel):
    """JSON shape of a serialized MonetaryValue."""
    type: Literal["MonetaryValue"] = "MonetaryValue"
    value: str = Field(..., description="Literal form, e.g. '12.75 USD'")


def _resolve_currency(
    currency: Union[Currency, str, None],
    registry: Optional["CurrencyRegistry"] = None,
) -> Currency:
    if isinstance(currency, Currency):
        return currency
    if currency is None:
        currency = settings.DEFAULT_CURRENCY
    return Currency.from_code(currency, registry)


class MonetaryValue:
    """
    Immutable money value stored as an exact scaled integer.

    The represented quantity is ``amount / effective_base ** scale`` whole
    units of ``currency``. Every operation returns a new value.
    """

    def __init__(
        self,
        amount: int,
        scale: int = 0,
        currency: Union[Currency, str, None] = None,
        registry: Optional["CurrencyRegistry"] = None,
    ):
        """
        Initialize MonetaryValue.

        Args:
            amount: Raw integer amount at ``scale``
            scale: Number of subunit digits (>= 0)
            currency: Currency or currency code (default: settings.DEFAULT_CURRENCY)
            registry: Registry used to resolve a currency code

        Note: Floats are rejected, use an integer amount and a scale.
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"Amount must be an integer, got {type(amount).__name__}")
        if isinstance(scale, bool) or not isinstance(scale, int):
            raise TypeError(f"Scale must be an integer, got {type(scale).__name__}")
        if scale < 0:
            raise ValueError(f"Scale cannot be negative: {scale}")

        self._amount = amount
        self._scale = scale
        self._currency = _resolve_currency(currency, registry)

    # Construction

    @classmethod
    def from_literal(cls, literal: str, registry: Optional["CurrencyRegistry"] = None) -> "MonetaryValue":
        """
        Parse a literal like "10.50 USD".

        The fraction length becomes the scale and the digits on both sides of
        the point form the amount: "10.50 USD" -> amount 1050, scale 2.
        """
        match = LITERAL_PATTERN.match(literal) if isinstance(literal, str) else None
        if match is None:
            logger.warning("Invalid monetary literal", literal=repr(literal))
            raise InvalidMonetaryLiteralError(f"Invalid monetary literal: {literal!r}")

        whole, fraction, code = match.groups()
        currency = _resolve_currency(code, registry)

        try:
            amount = int(whole + (fraction or ""))
        except ValueError as e:
            # digit strings past the interpreter's int conversion limit
            raise InvalidMonetaryLiteralError(f"Invalid monetary literal: {literal[:32]!r}...") from e

        return cls(amount, len(fraction or ""), currency)

    @classmethod
    def from_dict(
        cls,
        data: Union[Mapping[str, Any], MonetaryValueLike],
        registry: Optional["CurrencyRegistry"] = None,
    ) -> "MonetaryValue":
        """Build from ``{"amount": int, "scale": int = 0, "currency": str = "USD"}``."""
        if not isinstance(data, MonetaryValueLike):
            try:
                data = MonetaryValueLike.model_validate(data)
            except ValidationError as e:
                raise InvalidMonetaryLiteralError(f"Invalid monetary value input: {e}") from e

        return cls(data.amount, data.scale, _resolve_currency(data.currency, registry))

    @classmethod
    def from_(
        cls,
        value: Union[str, Mapping[str, Any], MonetaryValueLike],
        registry: Optional["CurrencyRegistry"] = None,
    ) -> "MonetaryValue":
        """Build from a literal string or structured input."""
        if isinstance(value, str):
            return cls.from_literal(value, registry)
        return cls.from_dict(value, registry)

    @classmethod
    def from_json(
        cls,
        data: Union[Mapping[str, Any], str],
        registry: Optional["CurrencyRegistry"] = None,
    ) -> "MonetaryValue":
        """Inverse of ``to_json``; accepts the dict or its JSON text."""
        try:
            if isinstance(data, str):
                payload = MonetaryValueJSON.model_validate_json(data)
            else:
                payload = MonetaryValueJSON.model_validate(data)
        except ValidationError as e:
            raise InvalidMonetaryLiteralError(f"Invalid serialized monetary value: {e}") from e

        return cls.from_literal(payload.value, registry)

    # Properties

    @property
    def amount(self) -> int:
        return self._amount

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def has_sub_units(self) -> bool:
        """True if the value is not a whole number of major units."""
        return self.amount % (self.currency.effective_base ** self.scale) != 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # Static helpers

    @staticmethod
    def have_same_currency(*values: "MonetaryValue") -> bool:
        """Check that all values share code, effective base and exponent."""
        first, *rest = values
        return all(first.currency.is_compatible_with(value.currency) for value in rest)

    @staticmethod
    def have_same_amount(*values: "MonetaryValue") -> bool:
        """Check that all values hold the same amount once normalized."""
        first, *rest = MonetaryValue.normalize(*values)
        return all(value.amount == first.amount for value in rest)

    @staticmethod
    def normalize(*values: "MonetaryValue") -> List["MonetaryValue"]:
        """Rescale all values to the highest scale among them."""
        highest_scale = max([0] + [value.scale for value in values])
        return [
            value if value.scale == highest_scale else value.with_scale(highest_scale)
            for value in values
        ]

    @staticmethod
    def max(*values: "MonetaryValue") -> "MonetaryValue":
        """Largest of same-currency values, at their common scale."""
        MonetaryValue._check_same_currency(*values, operation="compare")
        first, *rest = MonetaryValue.normalize(*values)

        result = first
        for value in rest:
            if value.amount > result.amount:
                result = value
        return result

    @staticmethod
    def min(*values: "MonetaryValue") -> "MonetaryValue":
        """Smallest of same-currency values, at their common scale."""
        MonetaryValue._check_same_currency(*values, operation="compare")
        first, *rest = MonetaryValue.normalize(*values)

        result = first
        for value in rest:
            if value.amount < result.amount:
                result = value
        return result

    @staticmethod
    def _check_same_currency(*values: "MonetaryValue", operation: str) -> None:
        if not values:
            raise ValueError(f"Cannot {operation} an empty set of values")
        if not MonetaryValue.have_same_currency(*values):
            codes = ", ".join(sorted({value.currency.code for value in values}))
            raise IncompatibleCurrencyError(f"Cannot {operation} money with different currencies: {codes}")

    # Arithmetic

    def add(self, other: "MonetaryValue") -> "MonetaryValue":
        """Add a same-currency value; the result has the larger scale."""
        self._check_same_currency(self, other, operation="add")
        augend, addend = self.normalize(self, other)
        return MonetaryValue(augend.amount + addend.amount, augend.scale, augend.currency)

    def subtract(self, other: "MonetaryValue") -> "MonetaryValue":
        """Subtract a same-currency value; the result has the larger scale."""
        self._check_same_currency(self, other, operation="subtract")
        minuend, subtrahend = self.normalize(self, other)
        return MonetaryValue(minuend.amount - subtrahend.amount, minuend.scale, minuend.currency)

    def multiply(self, multiplier: Rate, precision: Optional[int] = None) -> "MonetaryValue":
        """
        Multiply by an integer or a scaled rate.

        Args:
            multiplier: int, ScaledAmount, {"amount", "scale"} or MonetaryValue
            precision: Scale of the result, defaults to own scale + rate scale
        """
        multiplier_amount, multiplier_scale = get_amount_and_scale(multiplier)
        new_scale = self.scale + multiplier_scale
        product = MonetaryValue(self.amount * multiplier_amount, new_scale, self.currency)

        return product.with_scale(new_scale if precision is None else precision)

    def allocate(self, ratios: Sequence[Rate]) -> List["MonetaryValue"]:
        """
        Split the value proportionally to ``ratios``.

        Ratios with a lower scale are brought up to the highest ratio scale,
        and the value is rescaled by that much before distributing, so the
        parts sum exactly to the rescaled value.

        Raises:
            InvalidRatiosError: If ratios are empty, negative or all zero
        """
        try:
            scaled_ratios = [get_amount_and_scale(ratio) for ratio in ratios]
        except TypeError as e:
            raise InvalidRatiosError(f"Invalid ratios: {e}") from e

        if not scaled_ratios:
            raise InvalidRatiosError("Invalid ratios: at least one ratio is required")

        highest_ratio_scale = max(scale for _, scale in scaled_ratios)
        normalized_ratios = [
            amount * 10 ** (highest_ratio_scale - scale) for amount, scale in scaled_ratios
        ]

        if any(ratio < 0 for ratio in normalized_ratios):
            raise InvalidRatiosError(f"Invalid ratios: negative ratio in {normalized_ratios}")
        if not any(ratio > 0 for ratio in normalized_ratios):
            raise InvalidRatiosError("Invalid ratios: at least one ratio must be positive")

        working = self.with_scale(self.scale + highest_ratio_scale)
        shares = distribute(working.amount, normalized_ratios)

        return [MonetaryValue(share, working.scale, working.currency) for share in shares]

    # Comparison

    def compare(self, other: "MonetaryValue") -> int:
        """Return 1, 0 or -1 as self is greater, equal or less than other."""
        self._check_same_currency(self, other, operation="compare")
        this, that = self.normalize(self, other)

        if this.amount > that.amount:
            return 1
        if this.amount < that.amount:
            return -1
        return 0

    def equals(self, other: "MonetaryValue") -> bool:
        """Same currency and same amount at a common scale."""
        return self.have_same_currency(self, other) and self.have_same_amount(self, other)

    def greater_than(self, other: "MonetaryValue") -> bool:
        return self.compare(other) == 1

    def greater_than_or_equals(self, other: "MonetaryValue") -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: "MonetaryValue") -> bool:
        return self.compare(other) == -1

    def less_than_or_equals(self, other: "MonetaryValue") -> bool:
        return self.compare(other) <= 0

    # Scale and currency conversion

    def with_scale(self, new_scale: int) -> "MonetaryValue":
        """
        Re-express the value at another scale.

        Increasing the scale is exact. Decreasing it divides by a power of the
        effective base with ``divide_half_up`` and may lose precision.
        """
        if isinstance(new_scale, bool) or not isinstance(new_scale, int) or new_scale < 0:
            raise ValueError(f"Scale must be a non-negative integer: {new_scale!r}")

        base = self.currency.effective_base

        if new_scale > self.scale:
            factor = base ** (new_scale - self.scale)
            return MonetaryValue(self.amount * factor, new_scale, self.currency)

        factor = base ** (self.scale - new_scale)
        return MonetaryValue(divide_half_up(self.amount, factor), new_scale, self.currency)

    def with_currency(
        self,
        new_currency: Union[Currency, str],
        rates: Rates,
        registry: Optional["CurrencyRegistry"] = None,
    ) -> "MonetaryValue":
        """
        Convert into another currency using ``rates[target_code]``.

        The result scale is own scale + rate scale, raised to the target
        currency's exponent if lower.

        Raises:
            MissingRateError: If no rate is supplied for the target currency
        """
        target = _resolve_currency(new_currency, registry)
        rate = rates.get(target.code)
        if rate is None:
            raise MissingRateError(f"No rate from {self.currency.code} to {target.code}")

        rate_amount, rate_scale = get_amount_and_scale(rate)
        new_scale = self.scale + rate_scale

        logger.debug(
            "Currency conversion",
            source=self.currency.code,
            target=target.code,
            rate_amount=rate_amount,
            rate_scale=rate_scale,
        )

        converted = MonetaryValue(self.amount * rate_amount, new_scale, target)
        return converted.with_scale(max(new_scale, target.exponent))

    def trim(self) -> "MonetaryValue":
        """Drop trailing zero digits from the scale, never below the currency exponent."""
        base = self.currency.effective_base
        trailing_zeros = count_trailing_zeros(self.amount, base)
        new_scale = max(self.scale - trailing_zeros, self.currency.exponent)

        if new_scale == self.scale:
            return MonetaryValue(self.amount, self.scale, self.currency)

        return self.with_scale(new_scale)

    # Conversion

    def to_units(self) -> List[int]:
        """
        Decompose into unit counts, most significant first.

        Single-base currencies give ``[whole, subunits]``; a currency with
        levels (20, 12) at scale 1 gives ``[pounds, shillings, pence]``.
        """
        divisors = get_divisors(*[level ** self.scale for level in self.currency.levels])

        units = [self.amount]
        for divisor in divisors:
            amount_left = units.pop()
            units.extend([integer_divide(amount_left, divisor), modulo(amount_left, divisor)])

        return units

    def to_string(self) -> str:
        """
        Render as "<whole>.<fraction> <CODE>".

        Raises:
            NonDecimalCurrencyError: If the currency is multi-base or not base ten
        """
        if not self.currency.is_decimal:
            raise NonDecimalCurrencyError(
                f"Cannot convert non-decimal money to decimal: {self.currency.code} (base {self.currency.base})"
            )

        whole, fraction = self.to_units()[:2]
        decimal = f"{whole}.{str(abs(fraction)).zfill(self.scale)} {self.currency.code}"

        if whole == 0 and fraction < 0:
            return f"-{decimal}"
        return decimal

    def to_json(self) -> dict:
        """Serialize as ``{"type": "MonetaryValue", "value": "<literal>"}``."""
        return MonetaryValueJSON(value=self.to_string()).model_dump()

    def to_decimal(self) -> Decimal:
        """Convert to a Decimal number of whole units."""
        base = self.currency.effective_base
        divisor = base ** self.scale
        with localcontext() as ctx:
            # wide enough for every digit of amount and divisor
            ctx.prec = max(ctx.prec, (self.amount.bit_length() + divisor.bit_length()) // 3 + 2)
            if base == 10:
                return Decimal(self.amount).scaleb(-self.scale)
            return Decimal(self.amount) / Decimal(divisor)

    def to_locale_string(self, formatter: Optional["CurrencyFormatter"] = None) -> str:
        """Render for display through the currency formatter."""
        if formatter is None:
            from scaled_money.services.formatting import currency_formatter

            formatter = currency_formatter
        number = Decimal(self.to_string().split(" ")[0])
        return formatter.format(number, self.currency.code)

    # Python protocol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __lt__(self, other: "MonetaryValue") -> bool:
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: "MonetaryValue") -> bool:
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.less_than_or_equals(other)

    def __gt__(self, other: "MonetaryValue") -> bool:
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: "MonetaryValue") -> bool:
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.greater_than_or_equals(other)

    def __add__(self, other: "MonetaryValue") -> "MonetaryValue":
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "MonetaryValue") -> "MonetaryValue":
        if not isinstance(other, MonetaryValue):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, multiplier: Rate) -> "MonetaryValue":
        if isinstance(multiplier, MonetaryValue):
            return NotImplemented  # money * money has no meaning
        try:
            return self.multiply(multiplier)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> "MonetaryValue":
        return MonetaryValue(-self.amount, self.scale, self.currency)

    def __abs__(self) -> "MonetaryValue":
        return MonetaryValue(abs(self.amount), self.scale, self.currency)

    def __repr__(self) -> str:
        return f"MonetaryValue(amount={self.amount}, scale={self.scale}, currency='{self.currency.code}')"

    def __str__(self) -> str:
        if self.currency.is_decimal:
            return self.to_string()
        return repr(self)


def parse_money(
    value: Union[str, Mapping[str, Any], MonetaryValueLike],
    registry: Optional["CurrencyRegistry"] = None,
) -> MonetaryValue:
    """Parse a literal or structured input into a MonetaryValue."""
    return MonetaryValue.from_(value, registry)


def zero_money(
    currency: Union[Currency, str, None] = None,
    registry: Optional["CurrencyRegistry"] = None,
) -> MonetaryValue:
    """Zero at the currency's default exponent."""
    resolved = _resolve_currency(currency, registry)
    return MonetaryValue(0, resolved.exponent, resolved)
