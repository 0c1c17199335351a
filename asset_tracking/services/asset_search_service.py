"""asset_tracking.services.asset_search_service

Shared search service for the inventory report.

Goal:
- One place to turn menu selections or command-line values into a filter
- One place that knows the report sort order: type, then status, then purchase date
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Optional, Union

from asset_tracking.business.asset_repository import (
    ASCENDING,
    AssetFilter,
    AssetRepository,
    SortKey,
)
from asset_tracking.business.lifecycle_classifier import LifecycleClassifier
from asset_tracking.data.asset import Asset, AssetType, Office
from asset_tracking.logger import get_logger

logger = get_logger("asset_tracking.services.search")


@dataclass(frozen=True)
class AssetSearchFilters:
    # None means every office / every type
    office: Optional[Office] = None
    asset_type: Optional[AssetType] = None
    # Display currency; None falls back to the office currency, then the base currency
    currency: Optional[str] = None

    def to_asset_filter(self) -> AssetFilter:
        return AssetFilter(
            asset_type=self.asset_type,
            country=self.office.country if self.office else None,
        )

    def display_currency(self, base_currency: str) -> str:
        if self.currency:
            return self.currency.upper()
        if self.office:
            return self.office.currency
        return base_currency


class AssetSearchService:
    """Runs filtered, report-ordered queries against a repository"""

    def __init__(self, repository: AssetRepository, classifier: LifecycleClassifier):
        self.repository = repository
        self.classifier = classifier

    @staticmethod
    def parse_filters(args: Any) -> AssetSearchFilters:
        """
        Parse filters from an argparse namespace or a dict-like mapping.

        Recognized keys: office, type (or asset_type), currency.
        "all" or an empty value means no restriction.
        """
        def _get(key: str):
            if isinstance(args, dict):
                return args.get(key)
            return getattr(args, key, None)

        office = None
        raw_office = (_get("office") or "").strip()
        if raw_office and raw_office.lower() != "all":
            office = Office.for_country(raw_office)
            if office is None:
                raise ValueError(f"Unknown office: {raw_office!r}")

        asset_type = None
        raw_type = (_get("type") or _get("asset_type") or "").strip()
        if raw_type and raw_type.lower() != "all":
            asset_type = AssetType.parse(raw_type)

        currency = (_get("currency") or "").strip().upper() or None
        return AssetSearchFilters(office=office, asset_type=asset_type, currency=currency)

    def report_sort_keys(self, now: Union[date, datetime]) -> List[SortKey]:
        return [
            SortKey("asset_type", ASCENDING),
            SortKey(lambda asset: self.classifier.classify(asset, now).urgency, ASCENDING),
            SortKey("purchase_date", ASCENDING),
        ]

    def search(self, filters: AssetSearchFilters, now: Union[date, datetime]) -> List[Asset]:
        assets = self.repository.query(filters.to_asset_filter(), self.report_sort_keys(now))
        logger.info(
            f"Search office={filters.office.country if filters.office else 'all'} "
            f"type={filters.asset_type.value if filters.asset_type else 'all'}: {len(assets)} assets"
        )
        return assets
