"""Configuration dataclasses for scanning and enrichment runs."""

import logging
import os
from dataclasses import dataclass

from uscf_roster.core.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_REGISTRATION_TABLE_ID,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    USCF_API_BASE_URL,
    USCF_PROFILE_BASE_URL,
)

_LOG = logging.getLogger(__name__)


def _parse_env(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        _LOG.debug("Invalid value for %s: %r; using default=%s", name, raw, default)
        return default


@dataclass
class ScraperConfig:
    """Endpoints and limits shared by the validator and the resolver."""

    api_base_url: str = USCF_API_BASE_URL
    profile_base_url: str = USCF_PROFILE_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # Candidates checked concurrently before the next batch starts
    batch_size: int = DEFAULT_BATCH_SIZE

    registration_table_id: str = DEFAULT_REGISTRATION_TABLE_ID
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        self.api_base_url = self.api_base_url.rstrip("/")
        self.profile_base_url = self.profile_base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Build a config from USCF_* environment variables.

        Unset or unparseable values fall back to the module defaults.
        """
        return cls(
            api_base_url=os.getenv("USCF_API_BASE_URL") or USCF_API_BASE_URL,
            profile_base_url=os.getenv("USCF_PROFILE_BASE_URL")
            or USCF_PROFILE_BASE_URL,
            timeout=_parse_env("USCF_TIMEOUT", DEFAULT_TIMEOUT, float),
            batch_size=max(
                1, _parse_env("USCF_BATCH_SIZE", DEFAULT_BATCH_SIZE, int)
            ),
        )
