from dataclasses import replace
from typing import List

from asset_tracking.business.asset_repository import AssetRepository
from asset_tracking.business.currency_converter import CurrencyConverter
from asset_tracking.business.errors import UnknownCurrencyError
from asset_tracking.data.asset import Asset
from asset_tracking.business.lifecycle_classifier import LifecycleClassifier
from asset_tracking.config import TrackerConfig
from asset_tracking.data.seed_loader import BuiltinSeedLoader, JsonSeedLoader, SeedLoader
from asset_tracking.logger import get_logger
from asset_tracking.presentation.output_sink import OutputSink
from asset_tracking.presentation.report_renderer import ReportRenderer
from asset_tracking.services.asset_search_service import AssetSearchService


class Tracker:
    """Wired components for one process run"""

    def __init__(self, config, repository, classifier, converter):
        self.config = config
        self.repository = repository
        self.classifier = classifier
        self.converter = converter
        self.search_service = AssetSearchService(repository, classifier)

    def renderer(self, sink: OutputSink) -> ReportRenderer:
        return ReportRenderer(sink, self.classifier, self.converter, self.config.legend_policy)


def create_tracker(config: TrackerConfig = None, seed_loader: SeedLoader = None) -> Tracker:
    logger = get_logger("asset_tracking")

    if config is None:
        config = TrackerConfig.from_env()

    if seed_loader is None:
        seed_loader = JsonSeedLoader(config.seed_file) if config.seed_file else BuiltinSeedLoader()

    classifier = LifecycleClassifier.for_scheme(config.tier_scheme)
    converter = CurrencyConverter(config.base_currency)

    repository = AssetRepository()
    repository.add_all(load_in_base_currency(seed_loader, converter))
    logger.info(
        f"Tracker initialized: {len(repository)} assets from {seed_loader.describe()}, "
        f"base={config.base_currency}, tiers={config.tier_scheme}"
    )
    return Tracker(config, repository, classifier, converter)


def load_in_base_currency(seed_loader: SeedLoader, converter: CurrencyConverter) -> List[Asset]:
    """
    Load seed assets with prices restated in the converter's base currency.

    Raises:
        UnknownCurrencyError: the seed currency is not in the rate table
    """
    assets = seed_loader.load()
    # Read after load(), a JSON file can declare its currency
    source_currency = seed_loader.currency or converter.base_currency
    if not converter.supports(source_currency):
        raise UnknownCurrencyError(source_currency)
    if source_currency.strip().upper() == converter.base_currency:
        return assets
    get_logger("asset_tracking").info(
        f"Converting {len(assets)} seed prices from {source_currency} to {converter.base_currency}"
    )
    return [
        replace(asset, price=converter.convert(asset.price, source_currency, converter.base_currency))
        for asset in assets
    ]
