"""
Identifier and player extraction from host pages.

Two page shapes are supported: any page that may mention US Chess IDs (the
identifier scan) and a registration page with a player table (the export
path).
"""

from __future__ import annotations

import logging

from uscf_roster.core.constants import (
    DEFAULT_REGISTRATION_TABLE_ID,
    IDENTIFIER_IN_TEXT_RE,
    IDENTIFIER_IN_URL_RE,
    PLAYER_IDENTIFIER_RE,
    TRUSTED_LINK_SELECTOR,
)
from uscf_roster.core.models import IdentifierSet, PlayerEntry
from uscf_roster.scraping.page import PageContent

logger = logging.getLogger(__name__)


def extract_trusted(page: PageContent) -> set[str]:
    """Identifiers taken from links to US Chess profiles or the ratings API."""
    trusted: set[str] = set()
    for link in page.query_links(TRUSTED_LINK_SELECTOR):
        match = IDENTIFIER_IN_URL_RE.search(link.href)
        if match:
            trusted.add(match.group(1))
    return trusted


def extract_identifiers(page: PageContent) -> IdentifierSet:
    """Scan a page for US Chess IDs, split into trusted and candidate sets.

    Trusted IDs are the first 8-digit run of each qualifying link target.
    Candidates are standalone 8-digit tokens in the rendered text that are
    not already trusted; they need confirmation before use.
    """
    trusted = extract_trusted(page)
    candidates = {
        token
        for token in IDENTIFIER_IN_TEXT_RE.findall(page.query_text())
        if token not in trusted
    }
    logger.debug(
        "Extracted %d trusted and %d candidate identifiers",
        len(trusted),
        len(candidates),
    )
    return IdentifierSet(trusted=frozenset(trusted), candidate=frozenset(candidates))


def scan_payload(page: PageContent) -> dict[str, list[str]]:
    """Identifier scan in the ``{"trusted": [...], "candidates": [...]}`` shape."""
    identifiers = extract_identifiers(page)
    return {
        "trusted": sorted(identifiers.trusted),
        "candidates": sorted(identifiers.candidate),
    }


def extract_players(
    page: PageContent, table_id: str = DEFAULT_REGISTRATION_TABLE_ID
) -> list[PlayerEntry]:
    """Read registered players from the registration table.

    Cell 1 of each row holds the identifier and cell 2 the name. Rows with
    fewer than three cells (headers, spacers) or a non-numeric identifier are
    skipped. Table order is preserved.
    """
    players: list[PlayerEntry] = []
    for row_num, cells in enumerate(page.query_table_rows(table_id), start=1):
        if len(cells) < 3:
            continue
        identifier = cells[1].strip()
        if not PLAYER_IDENTIFIER_RE.match(identifier):
            logger.debug("Row %d skipped: identifier %r", row_num, identifier)
            continue
        name = " ".join(cells[2].split())
        players.append(PlayerEntry(identifier=identifier, name=name))

    logger.info("%d players read from #%s", len(players), table_id)
    return players


def players_payload(
    page: PageContent, table_id: str = DEFAULT_REGISTRATION_TABLE_ID
) -> dict[str, list[dict[str, str]]]:
    """Registration table scrape in the ``{"players": [...]}`` shape."""
    return {
        "players": [
            {"identifier": p.identifier, "name": p.name}
            for p in extract_players(page, table_id)
        ]
    }
