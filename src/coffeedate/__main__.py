"""Entry point for running coffeedate as a module.

Usage: python -m coffeedate --cadence 14 --day 2 --time 09:30 --output dates.ics
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_PAGE_URL = "https://example.invalid/coffee-date/"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coffeedate",
        description="Plan a recurring coffee date and export it to your calendar.",
    )
    parser.add_argument("--cadence", default="7", help="days between dates, 30 = monthly (default: 7)")
    parser.add_argument("--day", default="1", help="weekday of the first date, 0 = Sunday (default: 1)")
    parser.add_argument("--time", default="09:00", help="start time, HH:MM (default: 09:00)")
    parser.add_argument("--duration", default="60", help="length in minutes (default: 60)")
    parser.add_argument("--location", default="", help="where to meet")
    parser.add_argument("--occurrences", default="5", help="number of dates, at most 50 (default: 5)")
    parser.add_argument("--timezone", default="local", help="zone to plan in (default: host zone)")
    parser.add_argument("--page-url", default=DEFAULT_PAGE_URL, help="page that deep links point at")
    parser.add_argument("--output", type=Path, help="write the series as an .ics file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    from coffeedate.core.event_model import RecurrenceParams, describe_series
    from coffeedate.core.formatting import to_display_string
    from coffeedate.core.ics_builder import export_series
    from coffeedate.core.links import build_calendar_service_link, build_share_link
    from coffeedate.core.recurrence import generate_series_now
    from coffeedate.core.timezone_utils import LocalClock
    from coffeedate.exceptions.errors import CoffeeDateError

    try:
        clock = LocalClock.system() if args.timezone == "local" else LocalClock.for_zone(args.timezone)
        params = RecurrenceParams.from_raw(
            cadence=args.cadence,
            weekday=args.day,
            time_value=args.time,
            duration=args.duration,
            location=args.location,
            occurrences=args.occurrences,
        )
    except CoffeeDateError as e:
        logger.error("%s", e)
        return 2

    series = generate_series_now(params, clock)

    for event in series:
        print(to_display_string(event.start))
        print(f"  Google:  {build_calendar_service_link(event)}")
        print(f"  Share:   {build_share_link(event, args.page_url)}")
    print(describe_series(series))

    if args.output:
        download = export_series(series, clock.now())
        args.output.write_bytes(download.data)
        logger.info("Wrote %s (%d bytes)", args.output, len(download.data))

    return 0


if __name__ == "__main__":
    sys.exit(main())
