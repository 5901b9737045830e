"""US Chess roster scanning and rating enrichment."""

from __future__ import annotations

from uscf_roster.core import (
    EnrichedPlayer,
    IdentifierSet,
    PlayerEntry,
    RatingSnapshot,
    ScraperConfig,
    compute_cutoff,
)
from uscf_roster.export import format_export, write_export
from uscf_roster.pipeline import run_export, run_scan, with_retry_once
from uscf_roster.scraping import (
    RatingsClient,
    extract_identifiers,
    extract_players,
    resolve_ratings,
    validate_candidates,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "run_scan",
    "run_export",
    "with_retry_once",
    # Stages
    "extract_identifiers",
    "extract_players",
    "validate_candidates",
    "resolve_ratings",
    "compute_cutoff",
    "format_export",
    "write_export",
    # Types
    "RatingsClient",
    "ScraperConfig",
    "IdentifierSet",
    "PlayerEntry",
    "RatingSnapshot",
    "EnrichedPlayer",
    # Version
    "__version__",
]
