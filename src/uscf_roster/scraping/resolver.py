"""
Rating resolution for a single confirmed identifier.

The published ratings from the API are the baseline. Events rated after the
last rating-period cutoff are not reflected there yet, so the resolver walks
the player's recent event pages (newest first) and overlays the "live"
values they announce. Newer events always win: once a category has been set
from an event, older events cannot overwrite it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import AsyncIterator

from uscf_roster.core.constants import RATING_CATEGORIES
from uscf_roster.core.models import EventReference, RatingSnapshot
from uscf_roster.scraping.api import RatingsClient
from uscf_roster.scraping.events import (
    extract_rating_changes,
    parse_event_references,
    select_recent_events,
)

logger = logging.getLogger(__name__)


@dataclass
class EventChanges:
    """Rating changes announced for one player on one event page."""

    event: EventReference
    changes: dict[str, str] = field(default_factory=dict)


def apply_published_ratings(snapshot: RatingSnapshot, record: dict | None) -> None:
    """Copy known, non-empty ``ratings`` entries of a member record."""
    if not record:
        return
    ratings = record.get("ratings") or []
    if not isinstance(ratings, list):
        logger.debug(f"Unexpected ratings payload: {type(ratings).__name__}")
        return
    for entry in ratings:
        if not isinstance(entry, dict):
            continue
        code = entry.get("ratingSystem")
        value = entry.get("rating")
        if code in RATING_CATEGORIES and value:
            snapshot[code] = str(value)


def apply_live_changes(
    snapshot: RatingSnapshot, event_changes: list[EventChanges]
) -> set[str]:
    """Overlay event changes onto the snapshot with newest-wins semantics.

    The result does not depend on the order of ``event_changes``; for events
    sharing a date the earlier one in the list wins. Returns the categories
    that were updated.
    """
    ordered = sorted(event_changes, key=lambda ec: ec.event.date, reverse=True)
    written: set[str] = set()
    for ec in ordered:
        for code, value in ec.changes.items():
            if code in written:
                continue
            snapshot[code] = value
            written.add(code)
    return written


async def discover_events(
    identifier: str, client: RatingsClient, cutoff: date
) -> list[EventReference]:
    """Recent events linked from the player's profile page, newest first."""
    profile_url = client.profile_url(identifier)
    profile_html = await client.fetch_text(profile_url)
    if profile_html is None:
        return []
    events = parse_event_references(profile_html, profile_url)
    recent = select_recent_events(events, cutoff)
    logger.debug(
        f"{identifier}: {len(events)} events on profile, {len(recent)} since {cutoff}"
    )
    return recent


async def iter_event_changes(
    identifier: str, events: list[EventReference], client: RatingsClient
) -> AsyncIterator[EventChanges]:
    """Fetch event pages one at a time and yield the changes found on each.

    Events whose page cannot be fetched are skipped.
    """
    for event in events:
        event_html = await client.fetch_text(event.url)
        if event_html is None:
            logger.warning(f"{identifier}: skipping unreachable event {event.url}")
            continue
        yield EventChanges(event=event, changes=extract_rating_changes(event_html, identifier))


async def resolve_ratings(
    identifier: str, client: RatingsClient, cutoff: date
) -> RatingSnapshot:
    """
    Build the final rating snapshot for one player.

    Parameters
    ----------
    identifier : str
        Confirmed US Chess ID
    client : RatingsClient
        Client for the API and the profile/event pages
    cutoff : date
        Events before this date are already in the published ratings

    Returns
    -------
    RatingSnapshot
        All six categories; "Unrated" where nothing was found
    """
    snapshot = RatingSnapshot()

    try:
        apply_published_ratings(snapshot, await client.fetch_member(identifier))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"{identifier}: could not read published ratings: {e}")

    try:
        events = await discover_events(identifier, client, cutoff)
        collected = [ec async for ec in iter_event_changes(identifier, events, client)]
        updated = apply_live_changes(snapshot, collected)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"{identifier}: event history scan failed: {e}")
        return snapshot

    if updated:
        logger.info(f"{identifier}: live updates for {', '.join(sorted(updated))}")
    return snapshot
