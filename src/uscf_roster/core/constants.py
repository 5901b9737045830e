"""
Configuration constants for identifier scanning and rating enrichment.

This module centralizes all default parameters used by the scanning, validation
and enrichment code so that endpoints and limits can be tuned in one place.
"""

import re

# =============================================================================
# US Chess Endpoints
# =============================================================================

# Ratings registry (JSON member records)
USCF_API_BASE_URL = "https://ratings-api.uschess.org"
MEMBER_ENDPOINT = "/api/v1/members/{identifier}"

# Public profile and event pages (HTML)
USCF_PROFILE_BASE_URL = "https://ratings.uschess.org"
PROFILE_ENDPOINT = "/player/{identifier}"

# Hyperlink targets that mark an identifier as trusted
TRUSTED_LINK_SELECTOR = (
    "a[href*='uschess.org/player'], a[href*='ratings-api.uschess.org']"
)

# =============================================================================
# HTTP Defaults
# =============================================================================

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# =============================================================================
# Identifier Scanning
# =============================================================================

IDENTIFIER_LENGTH: int = 8
IDENTIFIER_IN_URL_RE = re.compile(r"(\d{8})", re.ASCII)
IDENTIFIER_IN_TEXT_RE = re.compile(r"\b\d{8}\b", re.ASCII)
PLAYER_IDENTIFIER_RE = re.compile(r"^\d+$", re.ASCII)

# 8-digit tokens starting with a recent year prefix are almost always dates
DATE_LIKE_PREFIXES: tuple[str, ...] = ("202", "199")

# Candidates validated concurrently per batch
DEFAULT_BATCH_SIZE: int = 5

# Registration table container id
DEFAULT_REGISTRATION_TABLE_ID = "registration-table"

# =============================================================================
# Rating Categories
# =============================================================================

UNRATED = "Unrated"

REGULAR = "R"
QUICK = "Q"
BLITZ = "B"
ONLINE_REGULAR = "OR"
ONLINE_QUICK = "OQ"
ONLINE_BLITZ = "OB"

# Fixed export order
RATING_CATEGORIES: tuple[str, ...] = (
    REGULAR,
    QUICK,
    BLITZ,
    ONLINE_REGULAR,
    ONLINE_QUICK,
    ONLINE_BLITZ,
)

# Categories that appear as change annotations on event pages
BASE_CATEGORIES: tuple[str, ...] = (REGULAR, QUICK, BLITZ)
ONLINE_VARIANTS: dict[str, str] = {
    REGULAR: ONLINE_REGULAR,
    QUICK: ONLINE_QUICK,
    BLITZ: ONLINE_BLITZ,
}

# =============================================================================
# Event History
# =============================================================================

# Event links on a profile page: /event/<YYYYMMDD><suffix>
EVENT_LINK_RE = re.compile(r"/event/(\d{8})([\w-]*)", re.ASCII)
ROW_OPEN_RE = re.compile(r"<tr", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
TAG_SEPARATOR = " "
ONLINE_MARKER = "online"

# Rating period cutoff: two days before the third Wednesday of last month
CUTOFF_WEEKDAY: int = 2  # Monday == 0
CUTOFF_OCCURRENCE: int = 3
CUTOFF_OFFSET_DAYS: int = 2

# =============================================================================
# Export
# =============================================================================

EXPORT_HEADER: tuple[str, ...] = (
    "USCF ID",
    "Name",
    "Regular",
    "Quick",
    "Blitz",
    "Online Reg",
    "Online Quick",
    "Online Blitz",
)
EXPORT_FORMATS: tuple[str, ...] = ("csv", "json", "ndjson", "parquet")
