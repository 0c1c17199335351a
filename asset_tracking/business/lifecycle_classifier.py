"""
Lifecycle Classifier
Maps an asset and a "now" date to a StatusTier using a threshold table.

The threshold table maps each tier to an inclusive whole-day range of
remaining life, (min_days, max_days), where None leaves that side open.
The four, three and two tier schemes are instances of the same table shape.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from asset_tracking.data.asset import Asset, LIFETIME


class StatusTier(Enum):
    FRESH = "Fresh"
    WARNING = "Warning"
    CRITICAL = "Critical"
    EXPIRED = "Expired"

    @property
    def urgency(self) -> int:
        """Sort rank, most urgent first"""
        return _URGENCY[self]


_URGENCY = {
    StatusTier.EXPIRED: 0,
    StatusTier.CRITICAL: 1,
    StatusTier.WARNING: 2,
    StatusTier.FRESH: 3,
}

DayRange = Tuple[Optional[int], Optional[int]]

FOUR_TIER_THRESHOLDS: Dict[StatusTier, DayRange] = {
    StatusTier.FRESH: (181, None),
    StatusTier.WARNING: (91, 180),
    StatusTier.CRITICAL: (0, 90),
    StatusTier.EXPIRED: (None, -1),
}

# Warning and Critical coalesced
THREE_TIER_THRESHOLDS: Dict[StatusTier, DayRange] = {
    StatusTier.FRESH: (181, None),
    StatusTier.WARNING: (0, 180),
    StatusTier.EXPIRED: (None, -1),
}

TWO_TIER_THRESHOLDS: Dict[StatusTier, DayRange] = {
    StatusTier.FRESH: (0, None),
    StatusTier.EXPIRED: (None, -1),
}

TIER_SCHEMES = {
    "four": FOUR_TIER_THRESHOLDS,
    "three": THREE_TIER_THRESHOLDS,
    "two": TWO_TIER_THRESHOLDS,
}


def end_of_life(purchase_date: date) -> date:
    return purchase_date + LIFETIME


def _as_date(now: Union[date, datetime]) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


class LifecycleClassifier:
    """Parameterized status classifier"""

    def __init__(self, thresholds: Optional[Dict[StatusTier, DayRange]] = None):
        thresholds = dict(thresholds if thresholds is not None else FOUR_TIER_THRESHOLDS)
        self._bands = self._validate(thresholds)
        self.thresholds = thresholds

    @classmethod
    def for_scheme(cls, scheme: str) -> "LifecycleClassifier":
        """Build a classifier from a scheme name: 'four', 'three' or 'two'"""
        try:
            return cls(TIER_SCHEMES[scheme.strip().lower()])
        except KeyError:
            raise ValueError(
                f"Unknown tier scheme {scheme!r}, expected one of {sorted(TIER_SCHEMES)}"
            ) from None

    @staticmethod
    def _validate(thresholds: Dict[StatusTier, DayRange]) -> List[Tuple[StatusTier, Optional[int], Optional[int]]]:
        """
        Check that the table covers every whole day exactly once.

        Returns the bands ordered from the lowest range to the highest.
        """
        if not thresholds:
            raise ValueError("Threshold table is empty")

        bands = []
        for tier, (min_days, max_days) in thresholds.items():
            if min_days is not None and max_days is not None and min_days > max_days:
                raise ValueError(f"{tier.value}: min_days {min_days} is greater than max_days {max_days}")
            bands.append((tier, min_days, max_days))

        # An open lower bound sorts first
        bands.sort(key=lambda band: float("-inf") if band[1] is None else band[1])

        if bands[0][1] is not None:
            raise ValueError(f"{bands[0][0].value}: lowest band must have an open lower bound")
        if bands[-1][2] is not None:
            raise ValueError(f"{bands[-1][0].value}: highest band must have an open upper bound")

        for (tier, _, upper), (next_tier, lower, _) in zip(bands, bands[1:]):
            if upper is None or lower is None or lower != upper + 1:
                raise ValueError(
                    f"Bands {tier.value} and {next_tier.value} overlap or leave a gap"
                )
        return bands

    @property
    def tiers(self) -> List[StatusTier]:
        """Tiers in this table, most urgent first"""
        return sorted(self.thresholds, key=lambda tier: tier.urgency)

    def remaining_days(self, asset: Asset, now: Union[date, datetime]) -> int:
        return (end_of_life(asset.purchase_date) - _as_date(now)).days

    def classify(self, asset: Asset, now: Union[date, datetime]) -> StatusTier:
        remaining = self.remaining_days(asset, now)
        for tier, min_days, max_days in self._bands:
            if (min_days is None or remaining >= min_days) and (max_days is None or remaining <= max_days):
                return tier
        # Unreachable with a validated table
        raise ValueError(f"No tier covers {remaining} remaining days")
