"""DineOnCampus menu API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class DineClient(Protocol):
    """Interface for DineOnCampus menu lookups."""

    async def get_periods(self, date: str, platform: int) -> dict[str, object]:
        """Return the raw meal-period list for a date."""

    async def get_period_menu(
        self, period_id: str, date: str, platform: int
    ) -> dict[str, object]:
        """Return the raw menu payload for one meal period."""


@dataclass
class HttpxDineClient(DineClient):
    """HTTPX-backed DineOnCampus client."""

    base_url: str
    location_id: str
    http_client: httpx.AsyncClient
    user_agent: str = "MacroCount/1.0"
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls,
        base_url: str,
        location_id: str,
        user_agent: str = "MacroCount/1.0",
        timeout_seconds: float = 15.0,
    ) -> "HttpxDineClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            location_id=location_id,
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
        )

    async def get_periods(self, date: str, platform: int) -> dict[str, object]:
        """Fetch the meal periods served on a date."""
        return await self._get_json(
            f"{self._location_url}/periods",
            params={"platform": platform, "date": date},
        )

    async def get_period_menu(
        self, period_id: str, date: str, platform: int
    ) -> dict[str, object]:
        """Fetch categories and items for one meal period."""
        return await self._get_json(
            f"{self._location_url}/periods/{period_id}",
            params={"platform": platform, "date": date},
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    @property
    def _location_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/location/{self.location_id}"

    async def _get_json(
        self, url: str, params: dict[str, object]
    ) -> dict[str, object]:
        response = await self.http_client.get(
            url,
            params=params,
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()
