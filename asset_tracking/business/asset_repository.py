"""
Asset Repository
In-memory collection of assets with validated adds and filtered, sorted queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Union

from asset_tracking.business.errors import ValidationError
from asset_tracking.data.asset import Asset, AssetType
from asset_tracking.logger import get_logger

logger = get_logger("asset_tracking.business.repository")

ASCENDING = "asc"
DESCENDING = "desc"

SORTABLE_FIELDS = {"asset_type", "brand", "model", "price", "purchase_date", "country"}


@dataclass(frozen=True)
class SortKey:
    """
    One sort criterion.

    field is an Asset attribute name or a callable returning the key for an asset.
    """
    field: Union[str, Callable[[Asset], Any]]
    direction: str = ASCENDING

    def key_for(self, asset: Asset):
        if callable(self.field):
            return self.field(asset)
        value = getattr(asset, self.field)
        if isinstance(value, AssetType):
            return value.value
        if value is None:
            # Missing countries sort after named ones
            return (1, "")
        if self.field == "country":
            return (0, value)
        return value


@dataclass(frozen=True)
class AssetFilter:
    """Predicate over asset type and country; None matches everything"""
    asset_type: Optional[AssetType] = None
    country: Optional[str] = None

    def matches(self, asset: Asset) -> bool:
        if self.asset_type is not None and asset.asset_type != self.asset_type:
            return False
        if self.country is not None and (asset.country or "").lower() != self.country.lower():
            return False
        return True


def _coerce_sort_key(key) -> SortKey:
    if isinstance(key, SortKey):
        sort_key = key
    else:
        field, direction = key
        sort_key = SortKey(field, direction)
    if sort_key.direction not in (ASCENDING, DESCENDING):
        raise ValueError(f"Sort direction must be '{ASCENDING}' or '{DESCENDING}', got {sort_key.direction!r}")
    if not callable(sort_key.field) and sort_key.field not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort on {sort_key.field!r}")
    return sort_key


def _parse_price(price) -> Decimal:
    if isinstance(price, bool):
        raise ValidationError(f"Price must be a number, got {price!r}")
    try:
        value = price if isinstance(price, Decimal) else Decimal(str(price))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Price must be a number, got {price!r}") from None
    if not value.is_finite():
        raise ValidationError(f"Price must be finite, got {price!r}")
    if value < 0:
        raise ValidationError(f"Price cannot be negative: {price}")
    return value


def _parse_purchase_date(purchase_date) -> date:
    if isinstance(purchase_date, datetime):
        return purchase_date.date()
    if isinstance(purchase_date, date):
        return purchase_date
    try:
        return date.fromisoformat(str(purchase_date))
    except ValueError:
        raise ValidationError(f"Purchase date must be YYYY-MM-DD, got {purchase_date!r}") from None


def build_asset(brand, model, purchase_date, price, asset_type, country=None) -> Asset:
    """
    Validate raw values and build an Asset.

    Raises:
        ValidationError: unrecognized asset type, bad price or bad purchase date
    """
    try:
        parsed_type = AssetType.parse(asset_type)
    except ValueError as e:
        raise ValidationError(str(e)) from None

    for name, value in (("brand", brand), ("model", model)):
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{name.capitalize()} must be text, got {value!r}")
    if country is not None and not isinstance(country, str):
        raise ValidationError(f"Country must be text, got {country!r}")

    brand = (brand or "").strip()
    model = (model or "").strip()
    if not brand or not model:
        raise ValidationError("Brand and model are required")

    return Asset(
        asset_type=parsed_type,
        brand=brand,
        model=model,
        price=_parse_price(price),
        purchase_date=_parse_purchase_date(purchase_date),
        country=(country.strip() or None) if country is not None else None,
    )


class AssetRepository:
    """Owns every Asset for the process lifetime; assets are never mutated"""

    def __init__(self, assets: Optional[Iterable[Asset]] = None):
        self._assets: List[Asset] = []
        if assets:
            self.add_all(assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[Asset]:
        return iter(list(self._assets))

    def add(self, brand, model, purchase_date, price, asset_type, country=None) -> Asset:
        asset = build_asset(brand, model, purchase_date, price, asset_type, country)
        self._assets.append(asset)
        logger.debug(f"Asset added: {asset}")
        return asset

    def add_all(self, assets: Iterable[Asset]) -> int:
        """
        Add already-built assets, re-validating each one.

        Returns the number of assets added. Raises ValidationError on the first
        invalid record; records before it stay added.
        """
        count = 0
        for asset in assets:
            self.add(
                asset.brand,
                asset.model,
                asset.purchase_date,
                asset.price,
                asset.asset_type,
                asset.country,
            )
            count += 1
        return count

    def query(self, asset_filter: Optional[AssetFilter] = None,
              sort_keys: Optional[Sequence] = None) -> List[Asset]:
        """
        Return a new list of matching assets ordered by sort_keys.

        Keys are applied last to first with a stable sort, so earlier keys win
        and full ties keep insertion order.
        """
        keys = [_coerce_sort_key(key) for key in (sort_keys or [])]
        if asset_filter is None:
            result = list(self._assets)
        else:
            result = [asset for asset in self._assets if asset_filter.matches(asset)]

        for sort_key in reversed(keys):
            result.sort(key=sort_key.key_for, reverse=sort_key.direction == DESCENDING)
        return result
