"""Tests for container wiring and settings."""

import asyncio

from dining_macros.adapters.dine_client import HttpxDineClient
from dining_macros.config import Settings
from dining_macros.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    client = container.menu_service.dine_client
    assert isinstance(client, HttpxDineClient)
    assert client.location_id == "location-1"
    assert container.menu_service.primary_platform == 2
    assert container.menu_service.fallback_platform == 0
    assert container.meal_service.thresholds.min_kcal == 60
    asyncio.run(container.close_resources())


def test_protein_thresholds_come_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("TOP_PROTEIN_MIN_KCAL", "100")
    monkeypatch.setenv("TOP_PROTEIN_LIMIT", "3")

    thresholds = Settings().protein_thresholds()

    assert thresholds.min_kcal == 100
    assert thresholds.min_per_serving_g == 10
    assert thresholds.min_per_100kcal_g == 8
    assert thresholds.limit == 3
