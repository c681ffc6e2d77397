"""Pydantic models for meal builder requests."""

from pydantic import BaseModel, Field


class MealTotalsRequest(BaseModel):
    """Selected items for a date and meal."""

    date: str
    meal: str
    item_ids: list[str] = Field(default_factory=list)
    servings: dict[str, float] = Field(default_factory=dict)
