"""
Domain exceptions for asset tracking

These exceptions represent business rule violations and bad input.
None of them is meant to end the process: callers reject the add, skip the
row, or re-prompt.
"""


class AssetTrackingError(Exception):
    """Base exception for all asset tracking errors"""
    pass


class ValidationError(AssetTrackingError):
    """Raised when an asset record is rejected (bad type, negative price)"""
    pass


class UnknownCurrencyError(AssetTrackingError):
    """Raised when a currency code is not in the rate table"""

    def __init__(self, currency):
        self.currency = currency
        super().__init__(f"Unknown currency: {currency!r}")


class MalformedUserInputError(AssetTrackingError):
    """Raised when a menu selection is not numeric or out of range"""

    def __init__(self, raw_value, message: str = "Invalid selection"):
        self.raw_value = raw_value
        super().__init__(f"{message}: {raw_value!r}")


class SeedDataError(AssetTrackingError):
    """Raised when a seed data file cannot be read or parsed"""
    pass
