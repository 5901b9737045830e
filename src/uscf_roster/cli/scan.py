"""
Scan a web page for US Chess IDs.

Linked IDs (profile or ratings-API links) are taken as-is; other 8-digit
numbers in the page text are checked against the ratings API first. The
merged list is printed comma-separated, ready to paste elsewhere.

Usage:
    uscf-roster-scan https://example.org/tournament/entries
    uscf-roster-scan saved_page.html --batch-size 10
"""

from __future__ import annotations

import argparse
import logging
import sys

from uscf_roster.core.config import ScraperConfig
from uscf_roster.core.errors import NoDataError, RosterError
from uscf_roster.core.logging import setup_logging
from uscf_roster.core.sentry import init_sentry
from uscf_roster.pipeline import run_scan

logger = logging.getLogger("uscf_roster.cli.scan")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find US Chess IDs on a web page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("source", help="Page URL or path to a saved HTML file")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Candidate IDs validated concurrently (default: 5)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, format_style="simple")
    init_sentry(context="uscf_roster_scan")

    config = ScraperConfig.from_env()
    if args.batch_size is not None:
        if args.batch_size < 1:
            parser.error("--batch-size must be at least 1")
        config.batch_size = args.batch_size

    try:
        result = run_scan(args.source, config)
    except NoDataError as e:
        print(str(e))
        print("Try scrolling down or expanding the table.")
        return 1
    except RosterError as e:
        logger.error("Scan failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.exception("Scan failed unexpectedly")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(", ".join(result.sorted_identifiers()))
    print(f"Done! Found {len(result.identifiers)} unique IDs.")
    print(f"(Links: {result.trusted_count} | Text Scan: {result.confirmed_count})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
