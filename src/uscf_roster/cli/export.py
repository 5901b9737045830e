"""
Export a tournament registration list with current and live ratings.

Reads the player table of a registration page, resolves each player's
published ratings plus any rating changes from events since the last
rating-period cutoff, and writes the roster (CSV by default; the format is
inferred from the output extension).

Usage:
    uscf-roster-export https://example.org/tournament/entries --output roster.csv
    uscf-roster-export entries.html --output roster.parquet --table-id entries
"""

from __future__ import annotations

import argparse
import logging
import sys

from uscf_roster.core.config import ScraperConfig
from uscf_roster.core.constants import EXPORT_FORMATS
from uscf_roster.core.errors import NoDataError, RosterError
from uscf_roster.core.logging import setup_logging
from uscf_roster.core.sentry import init_sentry
from uscf_roster.pipeline import run_export

logger = logging.getLogger("uscf_roster.cli.export")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export registered players with US Chess ratings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("source", help="Registration page URL or saved HTML file")
    parser.add_argument(
        "--output", "-o", required=True, help="Output filepath"
    )
    parser.add_argument(
        "--format",
        choices=list(EXPORT_FORMATS),
        default=None,
        help="Explicit output format (overrides extension inference)",
    )
    parser.add_argument(
        "--table-id",
        default=None,
        help="Element id of the registration table",
    )
    parser.add_argument(
        "--log-file", default=None, help="Also write logs to this file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        format_style="simple",
    )
    init_sentry(context="uscf_roster_export")

    config = ScraperConfig.from_env()
    if args.table_id:
        config.registration_table_id = args.table_id

    try:
        written = run_export(args.source, args.output, args.format, config)
    except NoDataError as e:
        print(str(e))
        return 1
    except RosterError as e:
        logger.error("Export failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.exception("Export failed unexpectedly")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Wrote {written} rows to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
