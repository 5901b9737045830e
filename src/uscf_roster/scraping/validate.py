"""
Batch confirmation of candidate identifiers against the ratings API.

Candidates are checked in fixed-size batches: requests within a batch run
concurrently, and the next batch starts only once the previous one settled.
This bounds the number of outstanding requests and gives a natural point for
progress reporting.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional

from tqdm import tqdm

from uscf_roster.core.constants import DATE_LIKE_PREFIXES, DEFAULT_BATCH_SIZE
from uscf_roster.scraping.api import RatingsClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def looks_like_date(identifier: str) -> bool:
    """True for 8-digit tokens that start like a recent YYYYMMDD date."""
    return identifier.startswith(DATE_LIKE_PREFIXES)


async def check_identifier(identifier: str, client: RatingsClient) -> Optional[str]:
    """Return the identifier if the registry knows it, None otherwise.

    Date-like tokens are rejected without a network call. A record counts as
    a confirmation only when its ``id`` field matches the identifier.
    """
    if looks_like_date(identifier):
        return None

    record = await client.fetch_member(identifier)
    if record is None:
        return None
    if str(record.get("id", "")) != identifier:
        logger.debug(f"Member record id mismatch for {identifier}: {record.get('id')!r}")
        return None
    return identifier


async def validate_candidates(
    candidates: Iterable[str],
    client: RatingsClient,
    batch_size: int = DEFAULT_BATCH_SIZE,
    progress: ProgressCallback | None = None,
) -> set[str]:
    """
    Confirm candidate identifiers against the ratings API.

    Parameters
    ----------
    candidates : iterable of str
        Candidate identifiers from the page text
    client : RatingsClient
        Client used for the member lookups
    batch_size : int, optional
        Number of lookups in flight at once
    progress : callable, optional
        Called as ``progress(done, total)`` after each batch

    Returns
    -------
    set of str
        The confirmed identifiers
    """
    pending = sorted(set(candidates))
    total = len(pending)
    confirmed: set[str] = set()
    if not pending:
        return confirmed

    logger.info(f"Validating {total} candidate identifiers")

    with tqdm(total=total, desc="API check", unit="id", disable=None) as bar:
        for start in range(0, total, batch_size):
            batch = pending[start : start + batch_size]
            results = await asyncio.gather(
                *(check_identifier(identifier, client) for identifier in batch)
            )
            confirmed.update(r for r in results if r is not None)

            bar.update(len(batch))
            if progress is not None:
                progress(min(start + batch_size, total), total)

    logger.info(f"Confirmed {len(confirmed)} of {total} candidates")
    return confirmed
