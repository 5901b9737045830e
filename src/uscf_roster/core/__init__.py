"""Core types, configuration and helpers shared by the scraping code."""

from uscf_roster.core.config import ScraperConfig
from uscf_roster.core.cutoff import compute_cutoff
from uscf_roster.core.errors import (
    CutoffError,
    NoDataError,
    PageUnavailableError,
    RosterError,
)
from uscf_roster.core.models import (
    EnrichedPlayer,
    EventReference,
    IdentifierSet,
    PlayerEntry,
    RatingSnapshot,
    ScanResult,
)

__all__ = [
    # Config
    "ScraperConfig",
    # Cutoff
    "compute_cutoff",
    # Errors
    "RosterError",
    "PageUnavailableError",
    "NoDataError",
    "CutoffError",
    # Models
    "IdentifierSet",
    "PlayerEntry",
    "EventReference",
    "RatingSnapshot",
    "EnrichedPlayer",
    "ScanResult",
]
