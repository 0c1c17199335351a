"""
Command line driver for the asset report.

Interactive mode walks the office and asset type menus and repeats until the
user declines. Passing --office, --type or --currency prints a single report
instead.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from asset_tracking import Tracker, create_tracker
from asset_tracking.business.errors import (
    AssetTrackingError,
    MalformedUserInputError,
    UnknownCurrencyError,
)
from asset_tracking.business.lifecycle_classifier import TIER_SCHEMES
from asset_tracking.config import LEGEND_POLICIES, TrackerConfig
from asset_tracking.data.asset import AssetType, Office
from asset_tracking.logger import get_logger
from asset_tracking.presentation.output_sink import OutputSink, StreamSink, StyleToken
from asset_tracking.services.asset_search_service import AssetSearchFilters, AssetSearchService

logger = get_logger("asset_tracking.presentation.cli")

# (label, value); None means "all"
OFFICE_MENU: List[Tuple[str, Optional[Office]]] = [
    (f"{office.country} ({office.currency})", office) for office in Office
] + [("All offices", None)]

TYPE_MENU: List[Tuple[str, Optional[AssetType]]] = [
    ("Laptops/Computers", AssetType.LAPTOP),
    ("Phones", AssetType.PHONE),
    ("All types", None),
]


def parse_menu_choice(raw: str, options: Sequence):
    """
    Map a 1-based numeric menu answer to its option value.

    Raises:
        MalformedUserInputError: not a number, or outside the menu
    """
    text = (raw or "").strip()
    try:
        choice = int(text)
    except ValueError:
        raise MalformedUserInputError(raw, "Selection must be a number") from None
    if not 1 <= choice <= len(options):
        raise MalformedUserInputError(raw, f"Selection must be between 1 and {len(options)}")
    return options[choice - 1][1]


class InteractiveSession:
    """Menu loop; every prompt re-asks on bad input, EOF ends the session"""

    def __init__(self, tracker: Tracker, sink: OutputSink,
                 input_func: Callable[[str], str] = input,
                 clock: Callable[[], date] = date.today):
        self.tracker = tracker
        self.sink = sink
        self.input_func = input_func
        self.clock = clock
        self.renderer = tracker.renderer(sink)

    def _ask_menu(self, title: str, options: Sequence):
        while True:
            self.sink.write(title, StyleToken.BOLD)
            for number, (label, _) in enumerate(options, start=1):
                self.sink.write(f"{number}. {label}")
            raw = self.input_func("> ")
            try:
                return parse_menu_choice(raw, options)
            except MalformedUserInputError as e:
                logger.info(f"Re-prompting after bad menu input: {e}")
                self.sink.write(f"Invalid selection: {e}", StyleToken.RED)

    def _ask_again(self) -> bool:
        answer = self.input_func("Search again? (Y/N) ")
        return answer.strip().upper().startswith("Y")

    def run_once(self) -> None:
        office = self._ask_menu("Select office:", OFFICE_MENU)
        asset_type = self._ask_menu("Select asset type:", TYPE_MENU)
        filters = AssetSearchFilters(office=office, asset_type=asset_type)
        now = self.clock()
        assets = self.tracker.search_service.search(filters, now)
        self.renderer.render(assets, now, filters.display_currency(self.tracker.converter.base_currency))

    def run(self) -> int:
        self.sink.write("Welcome to the Asset Tracking System", StyleToken.BOLD)
        try:
            while True:
                self.run_once()
                if not self._ask_again():
                    break
        except EOFError:
            logger.info("Input closed, ending session")
        except KeyboardInterrupt:
            self.sink.write("")
            logger.info("Session interrupted by user")
        return 0


def run_report(tracker: Tracker, filters: AssetSearchFilters, sink: OutputSink,
               now: Optional[date] = None) -> int:
    """Print one report for the given filters"""
    now = now or date.today()
    currency = filters.display_currency(tracker.converter.base_currency)
    if not tracker.converter.supports(currency):
        # The renderer would fall back per row; warn once up front as well
        logger.warning(f"{UnknownCurrencyError(currency)}, prices shown in {tracker.converter.base_currency}")
    assets = tracker.search_service.search(filters, now)
    tracker.renderer(sink).render(assets, now, currency)
    return 0


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Asset Tracking System - hardware lifecycle report')
    parser.add_argument('--office',
                        help='Office to report on: ' + ', '.join(office.country for office in Office) + ' or "all"')
    parser.add_argument('--type', dest='type',
                        help='Asset type: Laptop, Phone or "all"')
    parser.add_argument('--currency',
                        help='Display currency (default: office currency, or the base currency for all offices)')
    parser.add_argument('--legend', choices=LEGEND_POLICIES,
                        help='List all tiers in the legend, or only tiers present in the report')
    parser.add_argument('--tiers', choices=sorted(TIER_SCHEMES),
                        help='Status tier scheme')
    parser.add_argument('--seed-file',
                        help='JSON file with the asset inventory (default: built-in inventory)')
    parser.add_argument('--no-color', action='store_false', dest='color', default=None,
                        help='Disable ANSI colors')
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None,
         input_func: Callable[[str], str] = input,
         stream=None) -> int:
    args = parse_arguments(argv)

    # Build the root handlers before anything below can log a startup failure
    get_logger()

    try:
        config = TrackerConfig.from_env().with_overrides(
            legend_policy=args.legend,
            tier_scheme=args.tiers,
            seed_file=args.seed_file,
            use_color=args.color,
        )
        tracker = create_tracker(config)
    except (ValueError, AssetTrackingError) as e:
        logger.error(f"Could not start asset tracking: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sink = StreamSink(stream, use_color=config.use_color)

    if args.office or args.type or args.currency:
        try:
            filters = AssetSearchService.parse_filters(args)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return run_report(tracker, filters, sink)

    return InteractiveSession(tracker, sink, input_func=input_func).run()


def run():
    """Console script entry point"""
    load_dotenv()
    sys.exit(main())
