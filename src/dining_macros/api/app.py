"""FastAPI application factory."""

import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dining_macros.api.models import MealTotalsRequest
from dining_macros.app_logging import configure_logging
from dining_macros.containers import AppContainer
from dining_macros.domain.meals import (
    ComparisonRow,
    MealSelection,
    MealTotals,
    ProteinRank,
)
from dining_macros.domain.menu import MenuItem, MenuResult
from dining_macros.services.calendar import (
    MEAL_LABELS,
    default_date,
    default_meal,
    local_now,
)
from dining_macros.services.meals import (
    filter_items,
    find_item,
    item_badges,
    list_stations,
)

NO_STORE_HEADERS = {"Cache-Control": "no-store, no-cache, max-age=0, must-revalidate"}
PROTEIN_METRICS = ("per_serving", "per_100kcal")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class ApiError(Exception):
    """Error rendered as a JSON ``{"error": ...}`` body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            {"error": exc.message},
            status_code=exc.status_code,
            headers=NO_STORE_HEADERS,
        )

    async def load_menu(
        state_container: AppContainer, date: str | None, meal: str | None
    ) -> MenuResult:
        if not date or not meal:
            raise ApiError(400, "Missing date or meal")
        if not is_iso_date(date):
            raise ApiError(400, f"Invalid date: {date}")
        try:
            return await state_container.menu_service.fetch_menu(date, meal)
        except Exception as exc:
            logger.exception("Menu fetch failed for %s %s", date, meal)
            raise ApiError(500, str(exc) or "Unknown error") from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/defaults")
    async def defaults(request: Request) -> JSONResponse:
        """Return today's date and the meal being served now."""
        state_container: AppContainer = request.app.state.container
        now = local_now(state_container.settings.timezone)
        return JSONResponse(
            {
                "date": default_date(now),
                "meal": default_meal(now),
                "meals": list(MEAL_LABELS),
            },
            headers=NO_STORE_HEADERS,
        )

    @app.get("/api/menu")
    async def menu(
        request: Request,
        date: str | None = None,
        meal: str | None = None,
        station: str | None = None,
        q: str | None = None,
    ) -> JSONResponse:
        """Return normalized menu items for a date and meal."""
        state_container: AppContainer = request.app.state.container
        result = await load_menu(state_container, date, meal)
        items = filter_items(result.items, station=station, query=q)
        return JSONResponse(
            {
                "date": date,
                "meal": meal,
                "count": len(items),
                "items": [_item_payload(item) for item in items],
                "stations": list_stations(result.items),
                "periods": result.periods,
            },
            headers=NO_STORE_HEADERS,
        )

    @app.post("/api/meal/totals")
    async def meal_totals(body: MealTotalsRequest, request: Request) -> JSONResponse:
        """Return totals for selected items with serving multipliers."""
        state_container: AppContainer = request.app.state.container
        result = await load_menu(state_container, body.date, body.meal)
        totals = state_container.meal_service.totals(
            result.items,
            MealSelection(item_ids=body.item_ids, servings=body.servings),
        )
        return JSONResponse(_totals_payload(totals), headers=NO_STORE_HEADERS)

    @app.get("/api/compare")
    async def compare(  # noqa: PLR0913
        request: Request,
        date: str | None = None,
        meal: str | None = None,
        a: str | None = None,
        b: str | None = None,
        station: str | None = None,
    ) -> JSONResponse:
        """Compare two menu items by id or name."""
        state_container: AppContainer = request.app.state.container
        if not a or not b:
            raise ApiError(400, "Missing items to compare")
        result = await load_menu(state_container, date, meal)
        item_a = find_item(result.items, a, station=station)
        item_b = find_item(result.items, b, station=station)
        missing = [key for key, item in ((a, item_a), (b, item_b)) if item is None]
        if item_a is None or item_b is None:
            raise ApiError(404, f"Item not found: {', '.join(missing)}")
        rows = state_container.meal_service.compare(item_a, item_b)
        return JSONResponse(
            {
                "a": _item_payload(item_a),
                "b": _item_payload(item_b),
                "rows": [_row_payload(row) for row in rows],
            },
            headers=NO_STORE_HEADERS,
        )

    @app.get("/api/top-protein")
    async def top_protein(
        request: Request,
        date: str | None = None,
        meal: str | None = None,
        metric: str = "per_serving",
        station: str | None = None,
    ) -> JSONResponse:
        """Return the top protein items for a meal."""
        state_container: AppContainer = request.app.state.container
        if metric not in PROTEIN_METRICS:
            raise ApiError(400, f"Unknown metric: {metric}")
        result = await load_menu(state_container, date, meal)
        ranked = state_container.meal_service.top_protein(
            result.items,
            metric=metric,  # type: ignore[arg-type]
            station=station,
        )
        return JSONResponse(
            {
                "metric": metric,
                "items": [_rank_payload(rank) for rank in ranked],
            },
            headers=NO_STORE_HEADERS,
        )

    return app


def is_iso_date(value: str) -> bool:
    """Return True for a real calendar date written as YYYY-MM-DD."""
    if not _ISO_DATE_RE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _item_payload(item: MenuItem) -> dict[str, object]:
    payload = item.to_payload()
    payload["badges"] = item_badges(item)
    return payload


def _totals_payload(totals: MealTotals) -> dict[str, object]:
    return {
        "calories": totals.calories,
        "protein_g": totals.protein_g,
        "carbs_g": totals.carbs_g,
        "fat_g": totals.fat_g,
        "lines": [
            {
                "id": line.item.id,
                "name": line.item.name,
                "serving_name": line.item.serving_name,
                "servings": line.servings,
                "calories": line.calories,
                "protein_g": line.protein_g,
                "carbs_g": line.carbs_g,
                "fat_g": line.fat_g,
            }
            for line in totals.lines
        ],
        "distribution": [
            {"name": slice_.name, "grams": slice_.grams}
            for slice_ in totals.distribution
        ],
    }


def _row_payload(row: ComparisonRow) -> dict[str, object]:
    return {"label": row.label, "a": row.a, "b": row.b, "winner": row.winner}


def _rank_payload(rank: ProteinRank) -> dict[str, object]:
    return {
        "item": rank.item.to_payload(),
        "protein_g": rank.protein_g,
        "protein_per_100kcal": rank.protein_per_100kcal,
        "pct_protein_calories": rank.pct_protein_calories,
    }
