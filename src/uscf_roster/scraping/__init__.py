"""Page scanning, identifier validation and rating enrichment."""

from __future__ import annotations

# HTTP client
from uscf_roster.scraping.api import (
    RatingsClient,
    build_member_url,
    build_profile_url,
)

# Event page parsing
from uscf_roster.scraping.events import (
    extract_rating_changes,
    parse_event_references,
    select_recent_events,
)

# Page extraction
from uscf_roster.scraping.extract import (
    extract_identifiers,
    extract_players,
    players_payload,
    scan_payload,
)

# Page access
from uscf_roster.scraping.page import (
    Link,
    PageContent,
    PageSource,
    SoupPage,
    fetch_page,
    load_page,
)

# Enrichment
from uscf_roster.scraping.resolver import resolve_ratings
from uscf_roster.scraping.validate import validate_candidates

__all__ = [
    # API
    "RatingsClient",
    "build_member_url",
    "build_profile_url",
    # Events
    "parse_event_references",
    "select_recent_events",
    "extract_rating_changes",
    # Extraction
    "extract_identifiers",
    "extract_players",
    "scan_payload",
    "players_payload",
    # Page
    "Link",
    "PageContent",
    "PageSource",
    "SoupPage",
    "fetch_page",
    "load_page",
    # Enrichment
    "resolve_ratings",
    "validate_candidates",
]
