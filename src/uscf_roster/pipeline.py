"""
End-to-end scan and export runs.

``scan`` finds the US Chess IDs mentioned on a page: trusted IDs from profile
links plus text candidates confirmed by the ratings API. ``export`` reads the
registration table, resolves ratings for every player and writes the roster.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import AsyncIterator, Callable, Iterable, Optional, TypeVar

from tqdm import tqdm

from uscf_roster.core.config import ScraperConfig
from uscf_roster.core.cutoff import compute_cutoff
from uscf_roster.core.errors import NoDataError, PageUnavailableError
from uscf_roster.core.logging import log_timing
from uscf_roster.core.models import EnrichedPlayer, PlayerEntry, ScanResult
from uscf_roster.export import write_export
from uscf_roster.scraping.api import RatingsClient
from uscf_roster.scraping.extract import extract_identifiers, extract_players
from uscf_roster.scraping.page import PageContent, PageSource
from uscf_roster.scraping.resolver import resolve_ratings
from uscf_roster.scraping.validate import ProgressCallback, validate_candidates

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_retry_once(
    setup: Callable[[], None],
    action: Callable[[], T],
    retry_on: type[Exception] = PageUnavailableError,
) -> T:
    """Run ``action``; on ``retry_on`` run ``setup`` and try exactly once more.

    A second failure propagates to the caller.
    """
    try:
        return action()
    except retry_on as e:
        logger.info(f"{e}; running setup and retrying once")
        setup()
        return action()


def read_page(source: PageSource) -> PageContent:
    return with_retry_once(source.attach, source.read)


async def scan_identifiers(
    page: PageContent,
    client: RatingsClient,
    batch_size: Optional[int] = None,
    progress: ProgressCallback | None = None,
) -> ScanResult:
    """Trusted IDs plus confirmed candidates found on ``page``.

    Raises:
        NoDataError: If the page yields no identifiers at all.
    """
    identifiers = extract_identifiers(page)
    logger.info(
        f"Found {len(identifiers.trusted)} linked IDs and "
        f"{len(identifiers.candidate)} other numbers"
    )

    confirmed = await validate_candidates(
        identifiers.candidate,
        client,
        batch_size=batch_size or client.config.batch_size,
        progress=progress,
    )
    merged = identifiers.merged(confirmed)
    if not merged:
        raise NoDataError("No IDs found.")

    return ScanResult(
        identifiers=frozenset(merged),
        trusted_count=len(identifiers.trusted),
        confirmed_count=len(confirmed),
    )


async def iter_enriched(
    players: Iterable[PlayerEntry],
    client: RatingsClient,
    cutoff: date | None = None,
) -> AsyncIterator[EnrichedPlayer]:
    """Resolve ratings for each player in order, one player at a time."""
    players = list(players)
    if cutoff is None:
        cutoff = compute_cutoff()
    logger.info(f"Enriching {len(players)} players (cutoff {cutoff})")

    for player in tqdm(players, desc="Resolving ratings", unit="player", disable=None):
        snapshot = await resolve_ratings(player.identifier, client, cutoff)
        yield EnrichedPlayer.from_entry(player, snapshot)


async def enrich_players(
    players: Iterable[PlayerEntry],
    client: RatingsClient,
    cutoff: date | None = None,
    into: list[EnrichedPlayer] | None = None,
) -> list[EnrichedPlayer]:
    """Collect enriched players; ``into`` keeps partial results on failure."""
    enriched = into if into is not None else []
    async for player in iter_enriched(players, client, cutoff):
        enriched.append(player)
    return enriched


def run_scan(location: str, config: ScraperConfig | None = None) -> ScanResult:
    """Scan the page at a URL or file path for US Chess IDs."""
    config = config or ScraperConfig()
    source = PageSource(location, timeout=config.timeout, user_agent=config.user_agent)
    try:
        page = read_page(source)
    finally:
        source.close()

    async def _scan() -> ScanResult:
        async with RatingsClient(config) as client:
            return await scan_identifiers(page, client)

    with log_timing(logger, f"identifier scan of {location}"):
        return asyncio.run(_scan())


def run_export(
    location: str,
    output: str | Path,
    fmt: Optional[str] = None,
    config: ScraperConfig | None = None,
    today: date | None = None,
) -> int:
    """Export the registration table at ``location`` with resolved ratings.

    If enrichment is interrupted by an unexpected error, the players already
    resolved are written before the error propagates.

    Raises:
        NoDataError: If the registration table has no valid player rows.
    """
    config = config or ScraperConfig()
    source = PageSource(location, timeout=config.timeout, user_agent=config.user_agent)
    try:
        page = read_page(source)
    finally:
        source.close()

    players = extract_players(page, config.registration_table_id)
    if not players:
        raise NoDataError("No players found.")

    cutoff = compute_cutoff(today)
    enriched: list[EnrichedPlayer] = []

    async def _enrich() -> None:
        async with RatingsClient(config) as client:
            await enrich_players(players, client, cutoff, into=enriched)

    try:
        with log_timing(logger, f"rating enrichment of {len(players)} players"):
            asyncio.run(_enrich())
    except Exception:
        if enriched:
            logger.error(
                f"Enrichment aborted; writing {len(enriched)} of {len(players)} players"
            )
            try:
                write_export(enriched, output, fmt)
            except Exception as write_error:
                logger.error(f"Could not write partial export to {output}: {write_error}")
        raise

    return write_export(enriched, output, fmt)
