"""Shared test fixtures."""

from dataclasses import dataclass, field

import httpx
import pytest

from dining_macros.adapters.dine_client import DineClient
from dining_macros.config import Settings
from dining_macros.containers import AppContainer
from dining_macros.services.meals import MealService
from dining_macros.services.menu import MenuService

LUNCH_PERIOD_ID = "period-lunch"


def object_shape_item(**overrides: object) -> dict[str, object]:
    item: dict[str, object] = {
        "id": "grilled-chicken",
        "name": "Grilled Chicken",
        "portion": "4 oz",
        "nutrition": {"calories": 200, "protein": 20, "carbs": 10, "fat": 5},
    }
    item.update(overrides)
    return item


def list_shape_item(**overrides: object) -> dict[str, object]:
    item: dict[str, object] = {
        "mrn": "muffin-1",
        "name": "Blueberry Muffin",
        "portion": "1 each",
        "nutrients": [
            {"name": "Calories", "value_numeric": "150"},
            {"name": "Protein (g)", "value_numeric": "5"},
        ],
    }
    item.update(overrides)
    return item


def period_menu(*categories: dict[str, object], period_id: str = LUNCH_PERIOD_ID):
    return {
        "menu": {
            "periods": {
                "id": period_id,
                "name": "Lunch",
                "categories": list(categories),
            }
        }
    }


def default_lunch_menu() -> dict[str, object]:
    return period_menu(
        {
            "name": "Grill",
            "items": [
                object_shape_item(),
                object_shape_item(
                    id="turkey-burger",
                    name="Turkey Burger",
                    portion="1 each",
                    nutrition={"calories": 420, "protein": 32, "carbs": 30, "fat": 18},
                ),
            ],
        },
        {
            "name": "Bakery",
            "items": [list_shape_item()],
        },
        {
            "name": "Salad Bar",
            "items": [
                object_shape_item(
                    id="spinach",
                    name="Spinach",
                    portion="1 cup",
                    nutrition={"calories": 7, "protein": 1, "carbs": 1, "fat": 0},
                )
            ],
        },
    )


@dataclass
class FakeDineClient(DineClient):
    """Fake DineOnCampus client serving canned payloads per platform."""

    periods_payload: dict[str, object] = field(
        default_factory=lambda: {
            "periods": [
                {"id": "period-breakfast", "name": "Breakfast"},
                {"id": LUNCH_PERIOD_ID, "name": "Lunch"},
                {"id": "period-dinner", "name": "Dinner"},
            ]
        }
    )
    menus: dict[int, dict[str, object]] = field(
        default_factory=lambda: {2: default_lunch_menu()}
    )
    failing_platforms: set[int] = field(default_factory=set)
    calls: list[tuple[str, str, int]] = field(default_factory=list)

    async def get_periods(self, date: str, platform: int) -> dict[str, object]:
        self.calls.append(("periods", date, platform))
        return self.periods_payload

    async def get_period_menu(
        self, period_id: str, date: str, platform: int
    ) -> dict[str, object]:
        self.calls.append((period_id, date, platform))
        if platform in self.failing_platforms:
            request = httpx.Request("GET", f"https://dine.test/periods/{period_id}")
            raise httpx.ConnectError("upstream unavailable", request=request)
        return self.menus.get(platform, {"menu": {"periods": []}})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        dine_base_url="https://dine.test/v1",
        dine_location_id="location-1",
        timezone="UTC",
    )


@pytest.fixture
def dine_client() -> FakeDineClient:
    return FakeDineClient()


@pytest.fixture
def container(settings: Settings, dine_client: FakeDineClient) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        menu_service=MenuService(
            dine_client=dine_client,
            primary_platform=settings.dine_primary_platform,
            fallback_platform=settings.dine_fallback_platform,
        ),
        meal_service=MealService(thresholds=settings.protein_thresholds()),
        close_resources=close_resources,
    )
