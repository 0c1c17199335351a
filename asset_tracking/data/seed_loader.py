"""
Seed Loaders
Sources of the startup asset list.

Handles:
- The built-in company inventory
- Loading an inventory from a JSON file
- Skipping (and logging) invalid records instead of failing the whole load
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from asset_tracking.business.asset_repository import build_asset
from asset_tracking.business.errors import SeedDataError, ValidationError
from asset_tracking.data.asset import Asset
from asset_tracking.logger import get_logger

logger = get_logger("asset_tracking.data.seed_loader")


# (asset_type, brand, model, price in USD, purchase date, country)
BUILTIN_INVENTORY = [
    ("Laptop", "Dell", "XPS 13", "1200", date(2019, 10, 15), "USA"),
    ("Phone", "Samsung", "Galaxy S10", "800", date(2019, 8, 1), "Germany"),
    ("Laptop", "HP", "Spectre x360", "1300", date(2021, 6, 1), "USA"),
    ("Phone", "Apple", "iPhone 12", "999", date(2021, 11, 15), "Germany"),
    ("Laptop", "Apple", "MacBook Pro", "2400", date(2022, 5, 10), "Germany"),
    ("Phone", "Google", "Pixel 5", "699", date(2022, 3, 15), "United Kingdom"),
    ("Laptop", "Lenovo", "ThinkPad X1", "1500", date(2023, 1, 20), "Germany"),
    ("Phone", "OnePlus", "OnePlus 9", "799", date(2023, 4, 25), "United Kingdom"),
    ("Laptop", "Asus", "ZenBook", "1400", date(2022, 7, 20), "USA"),
    ("Phone", "Xiaomi", "Mi 11", "749", date(2022, 10, 1), "Germany"),
    ("Phone", "Sony", "Xperia 5", "899", date(2023, 2, 5), "United Kingdom"),
    ("Laptop", "Razer", "Blade 15", "2500", date(2023, 3, 12), "USA"),
    ("Phone", "Nokia", "G50", "299", date(2021, 5, 1), "United Kingdom"),
    ("Laptop", "Acer", "Aspire 5", "600", date(2023, 5, 10), "Sweden"),
    ("Phone", "Huawei", "P30", "599", date(2021, 4, 20), "Sweden"),
]


class SeedLoader(ABC):
    """
    Interface for anything that supplies the startup asset list.

    currency is the code the seed prices are written in; None means they are
    already in the tracker's base currency.
    """

    currency: Optional[str] = None

    @abstractmethod
    def load(self) -> List[Asset]:
        """
        Load the seed assets.

        Returns:
            List of valid Asset records, in seed order
        """
        pass

    def describe(self) -> str:
        return type(self).__name__


class StaticSeedLoader(SeedLoader):
    """Serves a fixed sequence of already-built assets"""

    def __init__(self, assets: Sequence[Asset], currency: Optional[str] = None):
        self._assets = list(assets)
        self.currency = currency

    def load(self) -> List[Asset]:
        return list(self._assets)


class BuiltinSeedLoader(SeedLoader):
    """The company inventory compiled into the program"""

    currency = "USD"

    def load(self) -> List[Asset]:
        assets = []
        for asset_type, brand, model, price, purchase_date, country in BUILTIN_INVENTORY:
            assets.append(build_asset(brand, model, purchase_date, price, asset_type, country))
        return assets

    def describe(self) -> str:
        return "built-in inventory"


class JsonSeedLoader(SeedLoader):
    """
    Loads assets from a JSON file.

    The file holds a list of objects, or an object with an "assets" list and
    an optional "currency" code for its prices:

        [{"asset_type": "Laptop", "brand": "Dell", "model": "XPS 13",
          "price": "1200", "purchase_date": "2019-10-15", "country": "USA"}]

        {"currency": "SEK", "assets": [...]}

    Invalid records are logged and skipped.
    """

    REQUIRED_FIELDS = ("asset_type", "brand", "model", "price", "purchase_date")

    def __init__(self, path: Union[str, Path], currency: Optional[str] = None):
        self.path = Path(path)
        self.currency = currency

    def describe(self) -> str:
        return str(self.path)

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.is_file():
            raise SeedDataError(f"Seed file not found: {self.path}")
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SeedDataError(f"Seed file {self.path} is not valid JSON: {e}") from e

        if isinstance(data, dict):
            currency = data.get("currency")
            if currency is not None:
                if not isinstance(currency, str) or not currency.strip():
                    raise SeedDataError(f"Seed file {self.path} has an invalid currency: {currency!r}")
                self.currency = currency.strip().upper()
            data = data.get("assets")
        if not isinstance(data, list):
            raise SeedDataError(f"Seed file {self.path} must contain a list of assets")
        return data

    def load(self) -> List[Asset]:
        assets = []
        for index, record in enumerate(self._read()):
            if not isinstance(record, dict):
                logger.warning(f"Skipping seed record #{index} in {self.path}: not an object")
                continue
            missing = [name for name in self.REQUIRED_FIELDS if name not in record]
            if missing:
                logger.warning(f"Skipping seed record #{index} in {self.path}: missing {', '.join(missing)}")
                continue
            try:
                assets.append(build_asset(
                    record["brand"],
                    record["model"],
                    record["purchase_date"],
                    record["price"],
                    record["asset_type"],
                    record.get("country"),
                ))
            except ValidationError as e:
                logger.warning(f"Skipping seed record #{index} in {self.path}: {e}")
        logger.info(f"Loaded {len(assets)} assets from {self.path}")
        return assets
