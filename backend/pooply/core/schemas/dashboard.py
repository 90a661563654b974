from __future__ import annotations

from pydantic import Field

from pooply.core.models.base import AppBaseModel, CamelModel


class DashboardStats(CamelModel):
    """Headline numbers shown in the dashboard's stat cards."""

    total_logs: int
    avg_bristol: float = Field(..., ge=1, le=7, description="Average Bristol stool scale type")
    streak_days: int
    last_log: str


class FrequencyPoint(AppBaseModel):
    name: str
    count: int = Field(..., ge=0)


class ActivityItem(AppBaseModel):
    id: int
    type: str
    time: str
    duration: str


class DashboardSummary(CamelModel):
    """Everything the dashboard page renders, in one payload."""

    stats: DashboardStats
    weekly_frequency: list[FrequencyPoint] = Field(default_factory=list)
    recent_activity: list[ActivityItem] = Field(default_factory=list)


class PaletteColor(AppBaseModel):
    name: str
    variable: str = Field(..., description="CSS custom property, e.g. --primary")
    hex: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")


class PaletteGroup(AppBaseModel):
    title: str
    colors: list[PaletteColor]
