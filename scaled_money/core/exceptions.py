"""Custom exceptions for scaled money arithmetic."""


class MonetaryError(Exception):
    """Base exception for monetary arithmetic."""
    pass


class UnknownCurrencyCodeError(MonetaryError):
    """Raised when a currency code is not present in the metadata registry."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency code: {code}")


class IncompatibleCurrencyError(MonetaryError):
    """Raised when values of different currencies are combined or compared."""
    pass


class InvalidRatiosError(MonetaryError):
    """Raised when allocation ratios are empty, negative or all zero."""
    pass


class NonDecimalCurrencyError(MonetaryError):
    """Raised when a multi-base or non base-ten value is rendered as decimal."""
    pass


class InvalidMonetaryLiteralError(MonetaryError):
    """Raised when a monetary literal or structured input cannot be parsed."""
    pass


class MissingRateError(MonetaryError):
    """Raised when a conversion rate for the target currency is not supplied."""
    pass
