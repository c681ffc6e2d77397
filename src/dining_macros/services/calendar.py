"""Default date and meal selection in the dining hall's timezone."""

from datetime import datetime
from zoneinfo import ZoneInfo

MEAL_LABELS = ("Breakfast", "Brunch", "Lunch", "Dinner", "Everyday", "Late Night")

BREAKFAST_UNTIL_HOUR = 10
LUNCH_UNTIL_HOUR = 15


def local_now(timezone_name: str) -> datetime:
    """Return the current time in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name))


def default_date(now: datetime) -> str:
    """Format the local calendar date as YYYY-MM-DD."""
    return now.strftime("%Y-%m-%d")


def default_meal(now: datetime) -> str:
    """Pick the meal currently being served by hour of day."""
    if now.hour < BREAKFAST_UNTIL_HOUR:
        return "Breakfast"
    if now.hour < LUNCH_UNTIL_HOUR:
        return "Lunch"
    return "Dinner"
