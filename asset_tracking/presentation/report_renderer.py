"""
Report Renderer
Formats a sorted asset list as a text table followed by a status legend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Union

from asset_tracking.business.currency_converter import CurrencyConverter
from asset_tracking.business.errors import UnknownCurrencyError
from asset_tracking.business.lifecycle_classifier import LifecycleClassifier, StatusTier
from asset_tracking.data.asset import Asset
from asset_tracking.logger import get_logger
from asset_tracking.presentation.output_sink import OutputSink, StyleToken

logger = get_logger("asset_tracking.presentation.renderer")

TYPE_WIDTH = 12
BRAND_WIDTH = 15
MODEL_WIDTH = 20
PRICE_WIDTH = 10
DATE_WIDTH = 10

CENTS = Decimal("0.01")

TIER_STYLES: Dict[StatusTier, StyleToken] = {
    StatusTier.FRESH: StyleToken.GREEN,
    StatusTier.WARNING: StyleToken.YELLOW,
    StatusTier.CRITICAL: StyleToken.RED,
    StatusTier.EXPIRED: StyleToken.GRAY,
}

TIER_LABELS: Dict[StatusTier, str] = {
    StatusTier.FRESH: "younger than lifetime",
    StatusTier.WARNING: "approaching expiry",
    StatusTier.CRITICAL: "near expiry",
    StatusTier.EXPIRED: "expired",
}


def style_for(tier: StatusTier) -> StyleToken:
    return TIER_STYLES[tier]


def format_price(amount: Decimal) -> str:
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


@dataclass
class ReportRow:
    asset: Asset
    tier: StatusTier
    style: StyleToken
    price: Decimal
    currency: str
    converted: bool = True

    @property
    def price_text(self) -> str:
        return format_price(self.price)

    def format(self) -> str:
        line = (
            f"{self.asset.asset_type.value:<{TYPE_WIDTH}} "
            f"{self.asset.brand:<{BRAND_WIDTH}} "
            f"{self.asset.model:<{MODEL_WIDTH}} "
            f"{self.price_text:>{PRICE_WIDTH}} "
            f"{self.asset.purchase_date.isoformat():<{DATE_WIDTH}} "
            f"{self.tier.value}"
        )
        if not self.converted:
            line += f" (price in {self.currency})"
        return line


@dataclass
class ReportResult:
    currency: str
    rows: List[ReportRow] = field(default_factory=list)
    legend: List[StatusTier] = field(default_factory=list)


class ReportRenderer:
    """
    Writes the asset table and legend to an output sink.

    legend_policy "all" lists every tier of the classifier's table;
    "present" lists only tiers that appear in the rendered rows.
    """

    def __init__(self, sink: OutputSink, classifier: LifecycleClassifier,
                 converter: CurrencyConverter, legend_policy: str = "all"):
        if legend_policy not in ("all", "present"):
            raise ValueError(f"legend_policy must be 'all' or 'present', got {legend_policy!r}")
        self.sink = sink
        self.classifier = classifier
        self.converter = converter
        self.legend_policy = legend_policy

    def header(self, currency: str) -> str:
        return (
            f"{'Type':<{TYPE_WIDTH}} "
            f"{'Brand':<{BRAND_WIDTH}} "
            f"{'Model':<{MODEL_WIDTH}} "
            f"{'Price ' + currency:>{PRICE_WIDTH}} "
            f"{'Purchased':<{DATE_WIDTH}} "
            f"Status"
        )

    def build_row(self, asset: Asset, now: Union[date, datetime], currency: str) -> ReportRow:
        tier = self.classifier.classify(asset, now)
        try:
            price = self.converter.from_base(asset.price, currency)
            row_currency, converted = currency, True
        except UnknownCurrencyError as e:
            logger.warning(f"Showing {asset} in {self.converter.base_currency}: {e}")
            price, row_currency, converted = asset.price, self.converter.base_currency, False
        return ReportRow(
            asset=asset,
            tier=tier,
            style=style_for(tier),
            price=price,
            currency=row_currency,
            converted=converted,
        )

    def legend_tiers(self, rows: Sequence[ReportRow]) -> List[StatusTier]:
        if self.legend_policy == "all":
            return self.classifier.tiers
        present = {row.tier for row in rows}
        return [tier for tier in self.classifier.tiers if tier in present]

    def render(self, assets: Sequence[Asset], now: Union[date, datetime],
               currency: Optional[str] = None) -> ReportResult:
        currency = (currency or self.converter.base_currency).upper()
        result = ReportResult(currency=currency)
        result.rows = [self.build_row(asset, now, currency) for asset in assets]
        result.legend = self.legend_tiers(result.rows)

        header = self.header(currency)
        self.sink.write("")
        self.sink.write(header, StyleToken.BOLD)
        self.sink.write("-" * len(header))
        for row in result.rows:
            self.sink.write(row.format(), row.style)
        if not result.rows:
            logger.info("Report rendered with no matching assets")

        self.sink.write("")
        self.sink.write("Legend:")
        for tier in result.legend:
            self.sink.write(f"  {tier.value:<9} {TIER_LABELS[tier]}", style_for(tier))
        return result
