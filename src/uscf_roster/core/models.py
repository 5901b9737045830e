"""Value types passed between the scanning, enrichment and export stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from uscf_roster.core.constants import RATING_CATEGORIES, UNRATED


@dataclass(frozen=True)
class IdentifierSet:
    """Identifiers found on a page, split by provenance.

    ``trusted`` come from profile/API hyperlinks; ``candidate`` are bare
    8-digit tokens from the page text that still need confirmation. An
    identifier is never in both.
    """

    trusted: frozenset[str] = frozenset()
    candidate: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "trusted", frozenset(self.trusted))
        object.__setattr__(
            self, "candidate", frozenset(self.candidate) - self.trusted
        )

    def merged(self, confirmed: Iterable[str]) -> set[str]:
        """Union of the trusted identifiers and the confirmed candidates."""
        return set(self.trusted) | set(confirmed)


@dataclass(frozen=True)
class PlayerEntry:
    identifier: str
    name: str


@dataclass(frozen=True)
class EventReference:
    date: date
    url: str


class RatingSnapshot(dict):
    """Rating value per category code, always holding all six categories.

    Values are numeric strings or ``"Unrated"``. Unknown category codes are
    rejected so the key set stays fixed.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        super().__init__((code, UNRATED) for code in RATING_CATEGORIES)
        for code, value in (values or {}).items():
            self[code] = value

    def __setitem__(self, code: str, value: str) -> None:
        if code not in RATING_CATEGORIES:
            raise KeyError(f"Unknown rating category: {code!r}")
        super().__setitem__(code, str(value))

    def update(self, *args, **kwargs) -> None:  # type: ignore[override]
        for code, value in dict(*args, **kwargs).items():
            self[code] = value

    def is_unrated(self) -> bool:
        return all(value == UNRATED for value in self.values())


@dataclass(frozen=True)
class EnrichedPlayer:
    """A registered player with the final merged ratings."""

    identifier: str
    name: str
    ratings: Mapping[str, str] = field(default_factory=RatingSnapshot)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "ratings", MappingProxyType(dict(RatingSnapshot(self.ratings)))
        )

    @classmethod
    def from_entry(
        cls, entry: PlayerEntry, ratings: Mapping[str, str]
    ) -> "EnrichedPlayer":
        return cls(identifier=entry.identifier, name=entry.name, ratings=ratings)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of an identifier scan, with provenance counts for reporting."""

    identifiers: frozenset[str]
    trusted_count: int
    confirmed_count: int

    def sorted_identifiers(self) -> list[str]:
        return sorted(self.identifiers)
