# catalog_diff/cli.py
"""
Compare two catalog snapshots exported side by side and report what changed.

Usage:
    catalog-diff <report_type> <input_file> [--output-dir result] [--notify]

Examples:
    # Products report, printed to the console
    catalog-diff products csv/products.csv

    # Price report saved as result/price-changes.json, capped at 20 sampled changes
    catalog-diff price csv/price.csv --output-dir result --sample-size 20

    # Attributes report without catalog lookups, posted to MS Teams
    catalog-diff attributes csv/attributes.xlsx --no-enrich --notify
"""
from __future__ import annotations

import argparse
import logging
import os
import random
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv

from .catalog_lookup import MenuItemClient
from .config import get_config
from .exceptions import ConfigurationError, NotificationError, RowSourceError
from .formatter import format_report_sections
from .models import CHANGE_TYPES, REPORT_TYPES, get_field_spec
from .notifier import build_adaptive_card, send_adaptive_card
from .pipeline import SPEC_DEFAULT, process_file
from .report import save_report

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL") or get_config().LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def init_sentry():
    """Initialize Sentry error tracking if SENTRY_DSN is configured."""
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        return

    import sentry_sdk
    from sentry_sdk.integrations.logging import LoggingIntegration

    environment = os.getenv("ENV") or "development"
    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=environment,
        integrations=[
            LoggingIntegration(
                level=logging.INFO,        # Capture info and above as breadcrumbs
                event_level=logging.ERROR  # Send errors and above as events
            ),
        ],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        attach_stacktrace=True,
    )
    logger.info(f"Sentry initialized for environment: {environment}")


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    report_choices = sorted(set(REPORT_TYPES) | {name.replace("_", "-") for name in REPORT_TYPES})

    parser = argparse.ArgumentParser(
        prog="catalog-diff",
        description="Classify catalog changes between two snapshots and enrich them with menu item details",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("report_type", choices=report_choices, help="Column shape of the input file")
    parser.add_argument("input_file", help="CSV or Excel export with before columns followed by after columns")
    parser.add_argument("--output-dir", "-o", help="Write <report-type>-changes.json into this directory")

    sampling = parser.add_mutually_exclusive_group()
    sampling.add_argument("--sample-size", type=non_negative_int, help="Cap on non-removed changes (default depends on report type)")
    sampling.add_argument("--no-sample", action="store_true", help="Keep every change")

    parser.add_argument("--seed", type=int, help="Random seed for reproducible sampling")
    parser.add_argument("--no-enrich", action="store_true", help="Skip catalog menu item lookups")
    parser.add_argument("--drop-unchanged", action="store_true", help="Leave out rows where nothing changed")
    parser.add_argument("--notify", action="store_true", help="Send the changes to MS Teams")
    parser.add_argument("--webhook-url", help="MS Teams webhook (default: MS_TEAMS_WEBHOOK_URL)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the change listing")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    configure_logging(args.log_level)
    init_sentry()

    spec = get_field_spec(args.report_type)

    if args.no_sample:
        sample_size = None
    elif args.sample_size is not None:
        sample_size = args.sample_size
    else:
        sample_size = SPEC_DEFAULT

    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        lookup = None if args.no_enrich else MenuItemClient()
        report = process_file(
            args.input_file,
            spec,
            lookup=lookup,
            sample_size=sample_size,
            rng=rng,
            drop_unchanged=args.drop_unchanged,
        )

        if not args.quiet:
            print(format_report_sections(report, spec))

        if args.output_dir:
            save_report(report, args.output_dir, spec.report_filename)

        if args.notify:
            records = [record for change_type in CHANGE_TYPES for record in report.bucket(change_type)]
            if records:
                title = f"{spec.label} changes - {datetime.now().strftime('%d %b %Y')}"
                send_adaptive_card(build_adaptive_card(title, records), args.webhook_url)
            else:
                logger.info("No changes to notify")
    except (ConfigurationError, RowSourceError, NotificationError) as e:
        logger.error(e.message)
        return 1

    return 0
