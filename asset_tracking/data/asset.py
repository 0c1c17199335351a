"""
Asset data entities
Immutable asset record plus the fixed asset type and office sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta


# Fixed depreciation lifetime for every tracked asset
LIFETIME = relativedelta(years=3)


class AssetType(Enum):
    LAPTOP = "Laptop"
    PHONE = "Phone"

    @classmethod
    def parse(cls, value) -> "AssetType":
        """
        Normalize a label to an AssetType.

        Accepts the enum itself, its value, its name, or one of the aliases
        below (case-insensitive). Raises ValueError otherwise.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        if key in _ASSET_TYPE_ALIASES:
            return _ASSET_TYPE_ALIASES[key]
        raise ValueError(f"Unrecognized asset type: {value!r}")


_ASSET_TYPE_ALIASES = {
    "computer": AssetType.LAPTOP,
    "laptop/computer": AssetType.LAPTOP,
    "mobile": AssetType.PHONE,
    "mobile phone": AssetType.PHONE,
    "mobiltelefon": AssetType.PHONE,
}


class Office(Enum):
    """Offices with their local currency"""
    USA = ("USA", "USD")
    GERMANY = ("Germany", "EUR")
    UNITED_KINGDOM = ("United Kingdom", "GBP")
    SWEDEN = ("Sweden", "SEK")

    def __init__(self, country: str, currency: str):
        self.country = country
        self.currency = currency

    @classmethod
    def for_country(cls, country: str) -> Optional["Office"]:
        key = (country or "").strip().lower()
        for office in cls:
            if office.country.lower() == key or office.name.lower() == key:
                return office
        return None


@dataclass(frozen=True)
class Asset:
    """One tracked hardware item. Price is in the repository's base currency."""
    asset_type: AssetType
    brand: str
    model: str
    price: Decimal
    purchase_date: date
    country: Optional[str] = None

    @property
    def end_of_life_date(self) -> date:
        return self.purchase_date + LIFETIME

    def __str__(self):
        return f"{self.asset_type.value} {self.brand} {self.model} ({self.purchase_date.isoformat()})"
