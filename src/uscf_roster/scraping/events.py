"""
Parsing of US Chess profile and event pages.

These pages are not machine-readable: event links are found by their path
shape (``/event/<YYYYMMDD><suffix>``) and rating changes by the inline
``R: 1200 => 1234`` annotations in crosstable rows. Everything here is a pure
function of page text.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Iterable
from urllib.parse import urljoin

from uscf_roster.core.constants import (
    BASE_CATEGORIES,
    EVENT_LINK_RE,
    ONLINE_MARKER,
    ONLINE_VARIANTS,
    ROW_OPEN_RE,
    TAG_RE,
    TAG_SEPARATOR,
)
from uscf_roster.core.models import EventReference

logger = logging.getLogger(__name__)

# "<code>: <old> => <new>", e.g. "R: 1200 => 1234" or "Q: Unrated=>1050"
RATING_CHANGE_RES: dict[str, re.Pattern[str]] = {
    code: re.compile(rf"\b{code}:\s*([^\s=]*)\s*=>\s*(\d+)", re.ASCII)
    for code in BASE_CATEGORIES
}


def parse_event_date(token: str) -> date | None:
    """Parse a YYYYMMDD token, or None if it is not a real date."""
    try:
        return datetime.strptime(token, "%Y%m%d").date()
    except ValueError:
        return None


def parse_event_references(profile_html: str, profile_url: str) -> list[EventReference]:
    """Find every event linked from a profile page, deduplicated by URL.

    Links are resolved against ``profile_url``. Order of first appearance is
    kept; tokens that are not valid dates are dropped.
    """
    seen: set[str] = set()
    events: list[EventReference] = []
    for match in EVENT_LINK_RE.finditer(profile_html):
        url = urljoin(profile_url, match.group(0))
        if url in seen:
            continue
        seen.add(url)

        event_date = parse_event_date(match.group(1))
        if event_date is None:
            logger.debug("Skipping event with invalid date token: %s", url)
            continue
        events.append(EventReference(date=event_date, url=url))
    return events


def select_recent_events(
    events: Iterable[EventReference], cutoff: date
) -> list[EventReference]:
    """Events on or after ``cutoff``, newest first.

    The sort is stable, so events sharing a date keep their page order.
    """
    recent = [event for event in events if event.date >= cutoff]
    return sorted(recent, key=lambda event: event.date, reverse=True)


def is_online_event(event_html: str) -> bool:
    return ONLINE_MARKER in event_html.lower()


def strip_tags(fragment: str) -> str:
    """Replace every markup tag with a separator, leaving only text."""
    return TAG_RE.sub(TAG_SEPARATOR, fragment)


def split_rows(event_html: str) -> list[str]:
    """Split page text into row-like fragments at each ``<tr`` marker."""
    return ROW_OPEN_RE.split(event_html)


def extract_rating_changes(event_html: str, identifier: str) -> dict[str, str]:
    """New rating values for ``identifier`` announced on an event page.

    Only rows mentioning the identifier are inspected. For each of the base
    categories the first ``<code>: <old> => <new>`` found wins. On online
    events the categories are remapped to their online variants.
    """
    online = is_online_event(event_html)
    changes: dict[str, str] = {}

    for fragment in split_rows(event_html):
        if identifier not in fragment:
            continue
        text = strip_tags(fragment)
        for code, pattern in RATING_CHANGE_RES.items():
            target = ONLINE_VARIANTS[code] if online else code
            if target in changes:
                continue
            match = pattern.search(text)
            if match:
                changes[target] = match.group(2)

    return changes
