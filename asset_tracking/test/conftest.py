"""
Pytest configuration and fixtures for asset tracking tests
"""
import os
import tempfile
from datetime import date
from decimal import Decimal

# Keep log files out of the working tree; must be set before the first root logger call
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="asset_tracking_logs_"))

import pytest  # noqa: E402
from dateutil.relativedelta import relativedelta  # noqa: E402

from asset_tracking import create_tracker  # noqa: E402
from asset_tracking.business.asset_repository import AssetRepository  # noqa: E402
from asset_tracking.business.currency_converter import CurrencyConverter  # noqa: E402
from asset_tracking.business.lifecycle_classifier import LifecycleClassifier  # noqa: E402
from asset_tracking.config import TrackerConfig  # noqa: E402
from asset_tracking.data.asset import Asset, AssetType  # noqa: E402
from asset_tracking.data.seed_loader import StaticSeedLoader  # noqa: E402
from asset_tracking.presentation.output_sink import RecordingSink  # noqa: E402


NOW = date(2025, 6, 15)


def purchased_with_remaining(days, asset_type=AssetType.LAPTOP, brand="Dell", model="XPS 13",
                             price="1000", country="USA"):
    """Build an asset whose end of life is `days` days after NOW"""
    end_of_life = NOW + relativedelta(days=days)
    return Asset(
        asset_type=asset_type,
        brand=brand,
        model=model,
        price=Decimal(price),
        purchase_date=end_of_life - relativedelta(years=3),
        country=country,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def classifier():
    return LifecycleClassifier()


@pytest.fixture
def converter():
    return CurrencyConverter("USD")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def sample_assets():
    """Mixed inventory: two offices, both types, every tier"""
    return [
        purchased_with_remaining(400, brand="Lenovo", model="ThinkPad X1", price="1500", country="Germany"),
        purchased_with_remaining(-30, brand="Dell", model="XPS 13", price="1200", country="USA"),
        purchased_with_remaining(120, asset_type=AssetType.PHONE, brand="Apple", model="iPhone 12",
                                 price="999", country="Germany"),
        purchased_with_remaining(45, brand="Asus", model="ZenBook", price="1400", country="USA"),
        purchased_with_remaining(600, asset_type=AssetType.PHONE, brand="Sony", model="Xperia 5",
                                 price="899", country="United Kingdom"),
    ]


@pytest.fixture
def repository(sample_assets):
    return AssetRepository(sample_assets)


@pytest.fixture
def tracker(sample_assets):
    config = TrackerConfig(use_color=False)
    return create_tracker(config, seed_loader=StaticSeedLoader(sample_assets))
