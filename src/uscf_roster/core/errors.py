"""Exceptions raised to the top level of a scan or export run.

Network and parse failures during validation and enrichment are recovered
where they happen and never surface as these types.
"""


class RosterError(Exception):
    """Base class for errors that end a run."""


class PageUnavailableError(RosterError):
    """The page content could not be obtained from its source."""


class NoDataError(RosterError):
    """A complete scan found no players or no identifiers."""


class CutoffError(RosterError):
    """The rating-period cutoff could not be computed."""
