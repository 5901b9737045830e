"""
Core HTTP operations against the US Chess ratings services.

Two services are involved: the ratings API, which serves JSON member records,
and the public ratings site, which serves HTML profile and event pages. Every
call here is best-effort: failures are logged and reported as ``None`` so the
validator and resolver can fall back to defaults without aborting a run.
"""

from __future__ import annotations

import logging

import httpx

from uscf_roster.core.config import ScraperConfig
from uscf_roster.core.constants import MEMBER_ENDPOINT, PROFILE_ENDPOINT

logger = logging.getLogger(__name__)


def build_member_url(identifier: str, base_url: str) -> str:
    """Build the ratings API URL for a member record."""
    return f"{base_url.rstrip('/')}{MEMBER_ENDPOINT.format(identifier=identifier)}"


def build_profile_url(identifier: str, base_url: str) -> str:
    """Build the public profile page URL for a member."""
    return f"{base_url.rstrip('/')}{PROFILE_ENDPOINT.format(identifier=identifier)}"


class RatingsClient:
    """Async client shared by every request of one run.

    Use as an async context manager so the underlying connection pool is
    closed when the run finishes::

        async with RatingsClient(config) as client:
            record = await client.fetch_member("12345678")
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self._client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "RatingsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def member_url(self, identifier: str) -> str:
        return build_member_url(identifier, self.config.api_base_url)

    def profile_url(self, identifier: str) -> str:
        return build_profile_url(identifier, self.config.profile_base_url)

    async def fetch_member(self, identifier: str) -> dict | None:
        """Fetch a member record, or None if unavailable or not a JSON object."""
        url = self.member_url(identifier)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Member lookup failed for {identifier}: {e}")
            return None

        if not isinstance(data, dict):
            logger.debug(f"Member lookup for {identifier} returned {type(data).__name__}")
            return None
        return data

    async def fetch_text(self, url: str) -> str | None:
        """Fetch a page as text, or None on any transport or HTTP error."""
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"Fetch failed for {url}: {e}")
            return None
        return response.text

    async def fetch_profile(self, identifier: str) -> str | None:
        return await self.fetch_text(self.profile_url(identifier))
