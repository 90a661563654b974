from __future__ import annotations

from fastapi import APIRouter

from pooply.core.schemas.dashboard import DashboardSummary, PaletteGroup
from pooply.core.services.dashboard_service import build_dashboard_summary, build_palette

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary() -> DashboardSummary:
    """Return the stat cards, weekly frequency chart and recent activity.

    Values are sample data; they do not depend on the caller.
    """
    return build_dashboard_summary()


@router.get("/palette", response_model=list[PaletteGroup])
async def get_palette() -> list[PaletteGroup]:
    """Return the colour tokens used by the dashboard's design system."""
    return build_palette()
