"""
Currency Converter
Converts prices between currencies with a fixed rate table.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from asset_tracking.business.errors import UnknownCurrencyError


# Rates relative to USD, static for the process lifetime
DEFAULT_RATES: Mapping[str, Decimal] = MappingProxyType({
    "USD": Decimal("1"),
    "EUR": Decimal("0.85"),
    "GBP": Decimal("0.75"),
    "SEK": Decimal("8.5"),
})


def _rate(currency: str, rate_table: Mapping[str, Decimal]) -> Decimal:
    code = (currency or "").strip().upper()
    if code not in rate_table:
        raise UnknownCurrencyError(currency)
    return rate_table[code]


def convert(amount, from_currency: str, to_currency: str,
            rate_table: Mapping[str, Decimal] = DEFAULT_RATES) -> Decimal:
    """
    Convert an amount between two currencies of the rate table.

    Keeps full Decimal precision; rounding is left to the display layer.

    Raises:
        UnknownCurrencyError: if either code is not in the rate table
    """
    from_rate = _rate(from_currency, rate_table)
    to_rate = _rate(to_currency, rate_table)
    amount = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    if from_currency.strip().upper() == to_currency.strip().upper():
        return amount
    return amount * to_rate / from_rate


class CurrencyConverter:
    """Converter bound to a base currency and a rate table"""

    def __init__(self, base_currency: str = "USD", rate_table: Optional[Mapping[str, Decimal]] = None):
        self.rate_table = rate_table if rate_table is not None else DEFAULT_RATES
        # Validates the base currency up front
        _rate(base_currency, self.rate_table)
        self.base_currency = base_currency.strip().upper()

    @property
    def currencies(self):
        return sorted(self.rate_table)

    def supports(self, currency: str) -> bool:
        return (currency or "").strip().upper() in self.rate_table

    def from_base(self, amount, to_currency: str) -> Decimal:
        return convert(amount, self.base_currency, to_currency, self.rate_table)

    def convert(self, amount, from_currency: str, to_currency: str) -> Decimal:
        return convert(amount, from_currency, to_currency, self.rate_table)
