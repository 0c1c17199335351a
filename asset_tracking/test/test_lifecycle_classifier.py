"""
Tests for lifecycle status classification.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from dateutil.relativedelta import relativedelta

from asset_tracking.business.lifecycle_classifier import (
    FOUR_TIER_THRESHOLDS,
    LifecycleClassifier,
    StatusTier,
    end_of_life,
)
from asset_tracking.data.asset import Asset, AssetType
from conftest import NOW, purchased_with_remaining


def test_long_expired_asset(classifier):
    purchase = NOW - relativedelta(years=3, days=200)
    asset = Asset(AssetType.LAPTOP, "Dell", "XPS 13", Decimal("1200"), purchase, "USA")
    assert classifier.classify(asset, NOW) == StatusTier.EXPIRED


def test_recently_purchased_asset_is_fresh(classifier):
    # Bought 100 days ago: three years minus 100 days of life left
    asset = Asset(AssetType.PHONE, "Google", "Pixel 5", Decimal("699"), NOW - relativedelta(days=100))
    assert classifier.classify(asset, NOW) == StatusTier.FRESH


@pytest.mark.parametrize("remaining, expected", [
    (-1, StatusTier.EXPIRED),
    (0, StatusTier.CRITICAL),
    (1, StatusTier.CRITICAL),
    (90, StatusTier.CRITICAL),
    (91, StatusTier.WARNING),
    (180, StatusTier.WARNING),
    (181, StatusTier.FRESH),
])
def test_four_tier_boundaries(classifier, remaining, expected):
    asset = purchased_with_remaining(remaining)
    assert classifier.remaining_days(asset, NOW) == remaining
    assert classifier.classify(asset, NOW) == expected, f"{remaining} days remaining"


def test_datetime_now_ignores_time_of_day(classifier):
    asset = purchased_with_remaining(90)
    late_evening = datetime(NOW.year, NOW.month, NOW.day, 23, 59)
    assert classifier.classify(asset, late_evening) == StatusTier.CRITICAL


def test_end_of_life_is_three_calendar_years():
    assert end_of_life(date(2021, 3, 15)) == date(2024, 3, 15)
    # Leap day rolls back to the last day of February
    assert end_of_life(date(2020, 2, 29)) == date(2023, 2, 28)
    asset = Asset(AssetType.LAPTOP, "HP", "Spectre x360", Decimal("1300"), date(2021, 6, 1))
    assert asset.end_of_life_date == date(2024, 6, 1)


def test_three_tier_scheme_coalesces_warning_and_critical():
    classifier = LifecycleClassifier.for_scheme("three")
    assert classifier.classify(purchased_with_remaining(45), NOW) == StatusTier.WARNING
    assert classifier.classify(purchased_with_remaining(150), NOW) == StatusTier.WARNING
    assert classifier.classify(purchased_with_remaining(181), NOW) == StatusTier.FRESH
    assert classifier.classify(purchased_with_remaining(-1), NOW) == StatusTier.EXPIRED
    assert StatusTier.CRITICAL not in classifier.tiers


def test_two_tier_scheme():
    classifier = LifecycleClassifier.for_scheme("two")
    assert classifier.classify(purchased_with_remaining(0), NOW) == StatusTier.FRESH
    assert classifier.classify(purchased_with_remaining(-1), NOW) == StatusTier.EXPIRED
    assert classifier.tiers == [StatusTier.EXPIRED, StatusTier.FRESH]


def test_tiers_are_listed_most_urgent_first(classifier):
    assert classifier.tiers == [
        StatusTier.EXPIRED,
        StatusTier.CRITICAL,
        StatusTier.WARNING,
        StatusTier.FRESH,
    ]


def test_custom_threshold_table():
    classifier = LifecycleClassifier({
        StatusTier.FRESH: (31, None),
        StatusTier.CRITICAL: (0, 30),
        StatusTier.EXPIRED: (None, -1),
    })
    assert classifier.classify(purchased_with_remaining(30), NOW) == StatusTier.CRITICAL
    assert classifier.classify(purchased_with_remaining(31), NOW) == StatusTier.FRESH


@pytest.mark.parametrize("thresholds", [
    # Gap between 90 and 100
    {StatusTier.FRESH: (100, None), StatusTier.CRITICAL: (0, 90), StatusTier.EXPIRED: (None, -1)},
    # Overlap at 90
    {StatusTier.FRESH: (90, None), StatusTier.CRITICAL: (0, 90), StatusTier.EXPIRED: (None, -1)},
    # Closed top
    {StatusTier.FRESH: (0, 1000), StatusTier.EXPIRED: (None, -1)},
    # Closed bottom
    {StatusTier.FRESH: (0, None), StatusTier.EXPIRED: (-100, -1)},
    # Inverted range
    {StatusTier.FRESH: (10, None), StatusTier.WARNING: (9, 0), StatusTier.EXPIRED: (None, -1)},
    {},
])
def test_invalid_threshold_tables_are_rejected(thresholds):
    with pytest.raises(ValueError):
        LifecycleClassifier(thresholds)


def test_unknown_scheme_is_rejected():
    with pytest.raises(ValueError, match="Unknown tier scheme"):
        LifecycleClassifier.for_scheme("five")


def test_default_table_is_not_shared():
    classifier = LifecycleClassifier()
    classifier.thresholds[StatusTier.FRESH] = (1, None)
    assert FOUR_TIER_THRESHOLDS[StatusTier.FRESH] == (181, None)


def test_purchase_three_years_minus_100_days_ago_leaves_100_days(classifier):
    # Taken literally, 100 days of life are left, which falls in the Warning band
    purchase = NOW - (relativedelta(years=3) - relativedelta(days=100))
    asset = Asset(AssetType.LAPTOP, "Lenovo", "ThinkPad X1", Decimal("1500"), purchase, "Germany")
    assert classifier.remaining_days(asset, NOW) == 100
    assert classifier.classify(asset, NOW) == StatusTier.WARNING
