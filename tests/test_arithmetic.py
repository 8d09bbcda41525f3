"""Tests for integer arithmetic primitives."""

import pytest

from scaled_money.core.arithmetic import (
    compute_base,
    count_trailing_zeros,
    distribute,
    divide_down,
    divide_half_up,
    divide_up,
    get_amount_and_scale,
    get_divisors,
    integer_divide,
    is_even,
    is_half,
    is_scaled_amount,
    maximum,
    minimum,
    modulo,
    sign,
)
from scaled_money.core.money import ScaledAmount


class TestTruncatingDivision:
    """Test integer_divide and modulo."""

    @pytest.mark.parametrize("a, b, expected", [
        (7, 2, 3),
        (-7, 2, -3),
        (7, -2, -3),
        (-7, -2, 3),
        (6, 3, 2),
        (0, 5, 0),
    ])
    def test_integer_divide_truncates_toward_zero(self, a, b, expected):
        """Test quotient is truncated, not floored."""
        assert integer_divide(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        (7, 2, 1),
        (-7, 2, -1),
        (7, -2, 1),
        (-7, -2, -1),
        (6, 3, 0),
    ])
    def test_modulo_follows_dividend_sign(self, a, b, expected):
        """Test remainder carries the sign of the dividend."""
        assert modulo(a, b) == expected

    def test_large_values_stay_exact(self):
        """Test no float rounding on values beyond 2**53."""
        big = 10 ** 30 + 7
        assert integer_divide(big, 10) == 10 ** 29
        assert modulo(big, 10) == 7


class TestComputeBase:
    """Test effective base computation."""

    def test_single_base(self):
        """Test an int base is returned unchanged."""
        assert compute_base(10) == 10

    def test_multi_base(self):
        """Test levels are multiplied together."""
        assert compute_base((20, 12)) == 240
        assert compute_base([60, 60, 24]) == 86400


class TestDivisionPolicies:
    """Test divide_down, divide_up and divide_half_up."""

    def test_divide_down_positive_inexact_is_one_below_floor(self):
        """Test the pinned behaviour: 7 / 2 goes down to 2, not 3."""
        assert divide_down(7, 2) == 2

    @pytest.mark.parametrize("a, b, expected", [
        (6, 2, 3),
        (-7, 2, -4),
        (-6, 2, -4),
        (0, 5, -1),
        (1, 10, -1),
    ])
    def test_divide_down(self, a, b, expected):
        """Test only positive exact divisions keep the quotient."""
        assert divide_down(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        (7, 2, 4),
        (6, 2, 3),
        (-7, 2, -3),
        (-6, 2, -3),
        (0, 5, 0),
    ])
    def test_divide_up(self, a, b, expected):
        """Test only positive inexact divisions go up."""
        assert divide_up(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        (5, 2, 3),
        (15, 10, 2),
        (16, 10, 2),
        (14, 10, 0),
        (20, 10, 2),
        (0, 10, 0),
        (-5, 2, -3),
        (-14, 10, -1),
        (-15, 10, -2),
        (-16, 10, -2),
        (-20, 10, -2),
    ])
    def test_divide_half_up(self, a, b, expected):
        """Test sign-aware tie rule as a literal table."""
        assert divide_half_up(a, b) == expected

    def test_divide_half_up_exact_divisions(self):
        """Test exact divisions return the exact quotient for both signs."""
        for amount in (-1000, -100, 0, 100, 1000):
            assert divide_half_up(amount, 100) == amount // 100


class TestSmallHelpers:
    """Test min/max, sign and parity helpers."""

    def test_minimum_maximum(self):
        """Test variadic min/max."""
        assert maximum(3, -1, 7) == 7
        assert minimum(3, -1, 7) == -1

    @pytest.mark.parametrize("value, expected", [(-9, -1), (0, 0), (42, 1)])
    def test_sign(self, value, expected):
        """Test sign of an integer."""
        assert sign(value) == expected

    def test_is_even(self):
        """Test parity."""
        assert is_even(4)
        assert not is_even(-3)

    def test_is_half(self):
        """Test exact halves."""
        assert is_half(5, 10)
        assert is_half(-15, 10)
        assert not is_half(4, 10)


class TestCountTrailingZeros:
    """Test count_trailing_zeros."""

    @pytest.mark.parametrize("amount, base, expected", [
        (1000, 10, 3),
        (1050, 10, 1),
        (-500, 10, 2),
        (7, 10, 0),
        (0, 10, 0),
        (480, 240, 1),
        (64, 2, 6),
    ])
    def test_count(self, amount, base, expected):
        """Test count of even divisions."""
        assert count_trailing_zeros(amount, base) == expected


class TestDistribute:
    """Test proportional distribution."""

    def test_even_split_with_remainder(self):
        """Test leftover goes to the first entries."""
        assert distribute(100, [1, 1, 1]) == [34, 33, 33]

    def test_negative_value(self):
        """Test leftover is handed out as -1 steps."""
        assert distribute(-100, [1, 1, 1]) == [-34, -33, -33]

    def test_zero_ratios_are_skipped(self):
        """Test zero-weight entries never receive leftover units."""
        assert distribute(5, [0, 1, 1]) == [0, 3, 2]

    def test_weighted(self):
        """Test unequal weights."""
        assert distribute(1003, [50, 50]) == [502, 501]
        assert distribute(10, [7, 3]) == [7, 3]

    def test_zero_total_passes_ratios_through(self):
        """Test degenerate total returns the ratios unchanged."""
        assert distribute(100, [0, 0]) == [0, 0]
        assert distribute(100, [1, -1]) == [1, -1]

    def test_negative_ratios_still_sum_to_value(self):
        """Test mixed-sign ratios are conserved and terminate."""
        shares = distribute(3, [1, 1, 1, -1])
        assert sum(shares) == 3
        assert shares == [2, 1, 1, -1]

    def test_returns_list(self):
        """Test tuples are accepted."""
        assert distribute(10, (1, 1)) == [5, 5]


class TestDivisorsAndRates:
    """Test get_divisors and rate decoding."""

    def test_get_divisors(self):
        """Test each level gets the product of itself and lower levels."""
        assert get_divisors(20, 12) == [240, 12]
        assert get_divisors(24, 60, 60) == [86400, 3600, 60]
        assert get_divisors(100) == [100]

    def test_plain_integer_rate(self):
        """Test ints have scale 0."""
        assert not is_scaled_amount(5)
        assert get_amount_and_scale(5) == (5, 0)

    def test_mapping_rate(self):
        """Test mappings with and without scale."""
        assert is_scaled_amount({"amount": 15, "scale": 1})
        assert get_amount_and_scale({"amount": 15, "scale": 1}) == (15, 1)
        assert get_amount_and_scale({"amount": 15}) == (15, 0)

    def test_scaled_amount_rate(self):
        """Test model rates."""
        assert get_amount_and_scale(ScaledAmount(amount=89, scale=2)) == (89, 2)

    @pytest.mark.parametrize("rate", [1.5, "2", True, None, {"scale": 1}, {"amount": 1.5}, {"amount": 1, "scale": -1}])
    def test_invalid_rate(self, rate):
        """Test floats, strings, negative scales and malformed mappings are rejected."""
        with pytest.raises(TypeError):
            get_amount_and_scale(rate)
