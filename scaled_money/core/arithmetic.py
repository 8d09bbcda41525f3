"""Integer arithmetic primitives - no floats, no Decimal, no state."""

from typing import Any, List, Mapping, Sequence, Tuple, Union


Base = Union[int, Sequence[int]]


def integer_divide(a: int, b: int) -> int:
    """Divide and truncate toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def modulo(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - b * integer_divide(a, b)


def compute_base(base: Base) -> int:
    """Flatten a (possibly multi-level) base into one effective radix."""
    if isinstance(base, int):
        return base

    result = 1
    for level in base:
        result *= level
    return result


def divide_down(amount: int, factor: int) -> int:
    """
    Division rounded "down".

    Returns the truncated quotient only for positive, exact divisions and the
    truncated quotient minus one otherwise. For positive inexact dividends this
    is one below the mathematical floor (``divide_down(7, 2) == 2``); existing
    rounding of stored values depends on it.
    """
    quotient = integer_divide(amount, factor)
    is_integer = modulo(amount, factor) == 0

    if amount > 0 and is_integer:
        return quotient

    return quotient - 1


def divide_up(amount: int, factor: int) -> int:
    """Division rounded up for positive inexact dividends, truncated otherwise."""
    quotient = integer_divide(amount, factor)
    is_integer = modulo(amount, factor) == 0

    if amount > 0 and not is_integer:
        return quotient + 1

    return quotient


def divide_half_up(amount: int, factor: int) -> int:
    """
    Round ``amount / factor`` to the nearest integer.

    Ties and near-ties are broken by the sign of the dividend:
    positive dividends go up once the remainder reaches half, non-positive
    dividends go up while the remainder is below half.
    """
    remainder = abs(modulo(amount, factor))
    difference = factor - remainder
    is_less_than_half = difference > remainder
    is_positive = amount > 0

    if (
        remainder == amount - remainder
        or (is_positive and not is_less_than_half)
        or (not is_positive and is_less_than_half)
    ):
        return divide_up(amount, factor)

    return divide_down(amount, factor)


def maximum(*values: int) -> int:
    return max(values)


def minimum(*values: int) -> int:
    return min(values)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_even(value: int) -> bool:
    return value % 2 == 0


def is_half(value: int, total: int) -> bool:
    """Check if ``value / total`` sits exactly halfway between two integers."""
    remainder = abs(modulo(value, total))
    return total - remainder == remainder


def count_trailing_zeros(amount: int, base: int) -> int:
    """Count how many times ``amount`` divides evenly by ``base``."""
    if amount == 0:
        return 0

    count = 0
    while modulo(amount, base) == 0:
        amount = integer_divide(amount, base)
        count += 1

    return count


def distribute(value: int, ratios: Sequence[int]) -> List[int]:
    """
    Split ``value`` into integer shares proportional to ``ratios``.

    Shares start at the truncated proportional amount; what is left over is
    handed out one unit at a time (+1 while the remainder is positive, -1
    while it is negative), in ratio order, to entries with a non-zero ratio.
    The walk wraps around until nothing is left, so the shares always sum to
    ``value``.
    A zero ratio total returns the ratios unchanged.
    """
    ratios = list(ratios)
    total = sum(ratios)

    if total == 0:
        return ratios

    shares = [integer_divide(value * ratio, total) for ratio in ratios]
    remainder = value - sum(shares)
    # remainder follows the sign of value unless some ratios are negative
    step = 1 if remainder > 0 else -1

    i = 0
    while remainder != 0:
        index = i % len(ratios)
        if ratios[index] != 0:
            shares[index] += step
            remainder -= step
        i += 1

    return shares


def get_divisors(*bases: int) -> List[int]:
    """For each level, the product of that level's base and all lower levels."""
    divisors = []
    for i in range(len(bases)):
        divisors.append(compute_base(bases[i:]))
    return divisors


def is_scaled_amount(rate: Any) -> bool:
    """Check if a rate carries its own scale (``{"amount": ..., "scale": ...}``)."""
    if isinstance(rate, int):
        return False
    if isinstance(rate, Mapping):
        return "amount" in rate
    return hasattr(rate, "amount")


def get_amount_and_scale(rate: Any) -> Tuple[int, int]:
    """
    Decode a rate into ``(amount, scale)``.

    Plain integers have scale 0. Mappings and objects exposing ``amount`` and
    an optional ``scale`` are read as scaled integers.
    """
    if isinstance(rate, bool) or not (isinstance(rate, int) or is_scaled_amount(rate)):
        raise TypeError(f"Invalid rate: {rate!r}")

    if isinstance(rate, int):
        return rate, 0

    if isinstance(rate, Mapping):
        amount, scale = rate["amount"], rate.get("scale", 0)
    else:
        amount, scale = rate.amount, getattr(rate, "scale", 0)

    if scale is None:
        scale = 0
    if not isinstance(amount, int) or not isinstance(scale, int):
        raise TypeError(f"Rate amount and scale must be integers: {rate!r}")
    if scale < 0:
        raise TypeError(f"Rate scale cannot be negative: {rate!r}")
    return amount, scale
