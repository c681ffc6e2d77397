"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dining_macros.adapters.dine_client import HttpxDineClient
from dining_macros.config import Settings
from dining_macros.services.meals import MealService
from dining_macros.services.menu import MenuService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    menu_service: MenuService
    meal_service: MealService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    dine_client = HttpxDineClient.create(
        base_url=resolved_settings.dine_base_url,
        location_id=resolved_settings.dine_location_id,
        user_agent=resolved_settings.dine_user_agent,
        timeout_seconds=resolved_settings.dine_timeout_seconds,
    )
    menu_service = MenuService(
        dine_client=dine_client,
        primary_platform=resolved_settings.dine_primary_platform,
        fallback_platform=resolved_settings.dine_fallback_platform,
    )
    meal_service = MealService(thresholds=resolved_settings.protein_thresholds())

    async def close_resources() -> None:
        await dine_client.close()

    return AppContainer(
        settings=resolved_settings,
        menu_service=menu_service,
        meal_service=meal_service,
        close_resources=close_resources,
    )
