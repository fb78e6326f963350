"""History chart models"""
from pydantic import BaseModel


class DailySummary(BaseModel):
    """One bar of the weekly or monthly intake chart"""
    date: str  # YYYY-MM-DD
    label: str  # weekday name for weeks, day-of-month for months
    intake_ml: float
    percent_of_goal: float
    is_today: bool = False
