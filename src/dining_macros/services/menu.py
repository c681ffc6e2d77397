"""Menu lookup service for a date and meal label."""

import logging
from dataclasses import dataclass

import httpx

from dining_macros.adapters.dine_client import DineClient
from dining_macros.domain.menu import MenuItem, MenuResult
from dining_macros.services.normalizer import normalize_menu

_logger = logging.getLogger(__name__)


@dataclass
class MenuService:
    """Fetch a meal period and normalize its items.

    The detail request is sent with the primary platform first. When that
    yields no items, one more attempt is made with the fallback platform;
    failures of that attempt count as an empty menu.
    """

    dine_client: DineClient
    primary_platform: int = 2
    fallback_platform: int = 0

    async def fetch_menu(self, date: str, meal: str) -> MenuResult:
        """Return normalized items for ``meal`` on ``date`` and the period list."""
        periods_payload = await self.dine_client.get_periods(
            date, platform=self.primary_platform
        )
        periods = _period_list(periods_payload)
        target = find_period(periods, meal)
        if target is None:
            _logger.info(
                "No period named %r on %s (available: %s)",
                meal,
                date,
                [period.get("name") for period in periods],
            )
            return MenuResult(items=[], periods=periods)

        period_id = str(target.get("id", ""))
        payload = await self.dine_client.get_period_menu(
            period_id, date, platform=self.primary_platform
        )
        items = normalize_menu(payload, period_id)
        if not items:
            items = await self._fetch_fallback(period_id, date)
        return MenuResult(items=items, periods=periods)

    async def _fetch_fallback(self, period_id: str, date: str) -> list[MenuItem]:
        _logger.info(
            "Period %s on %s returned no items; retrying with platform %s",
            period_id,
            date,
            self.fallback_platform,
        )
        try:
            payload = await self.dine_client.get_period_menu(
                period_id, date, platform=self.fallback_platform
            )
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Fallback menu fetch failed for %s: %s", period_id, exc)
            return []
        return normalize_menu(payload, period_id)


def find_period(
    periods: list[dict[str, object]], meal: str
) -> dict[str, object] | None:
    """Return the period whose name matches ``meal`` ignoring case."""
    wanted = meal.lower()
    for period in periods:
        if str(period.get("name") or "").lower() == wanted:
            return period
    return None


def _period_list(payload: object) -> list[dict[str, object]]:
    if not isinstance(payload, dict):
        return []
    periods = payload.get("periods")
    if not isinstance(periods, list):
        return []
    return [period for period in periods if isinstance(period, dict)]
