"""
Sales Monitor — Metrics Router
================================
Aggregated metrics recomputed from the current deal snapshot on every call.

Endpoints:
  GET /api/metrics/stats      - KPI cards (created, won, lost, active, rates)
  GET /api/metrics/timeline   - Created vs. won per day
  GET /api/metrics/advisors   - Per-advisor totals and rates
  GET /api/metrics/programs   - Per-program interest and sales
  GET /api/metrics/dashboard  - All of the above plus the filtered deal list
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from dashboard.api.dependencies import DateRange, date_range, get_settings, get_store
from dashboard.api.store import DealStore
from models.deal_models import AggregatedStats, DashboardSnapshot
from scripts.lib.config import Settings
from scripts.lib.logger import setup_logger
from scripts.sales_analyzer import (
    build_dashboard,
    compute_advisor_metrics,
    compute_program_metrics,
    compute_stats,
    compute_timeline,
)

logger = setup_logger("metrics_router")

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.get("/stats", response_model=AggregatedStats)
async def stats(
    rng: DateRange = Depends(date_range),
    store: DealStore = Depends(get_store),
):
    """Headline KPIs for the range."""
    return compute_stats(store.deals, rng.start, rng.end)


@router.get("/timeline")
async def timeline(
    rng: DateRange = Depends(date_range),
    store: DealStore = Depends(get_store),
):
    """Deals created vs. deals won, one point per day."""
    points = compute_timeline(store.deals, rng.start, rng.end)
    return {"timeline": [p.model_dump() for p in points]}


@router.get("/advisors")
async def advisors(
    rng: DateRange = Depends(date_range),
    store: DealStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Advisor leaderboard, most wins first."""
    metrics = compute_advisor_metrics(
        store.deals, rng.start, rng.end,
        unknown_advisor=settings.unknown_advisor_label,
    )
    return {"advisors": [m.model_dump() for m in metrics]}


@router.get("/programs")
async def programs(
    rng: DateRange = Depends(date_range),
    store: DealStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Programs by interest, most deals first."""
    metrics = compute_program_metrics(
        store.deals, rng.start, rng.end,
        no_program=settings.no_program_label,
    )
    return {"programs": [m.model_dump() for m in metrics]}


@router.get("/dashboard", response_model=DashboardSnapshot)
async def dashboard(
    rng: DateRange = Depends(date_range),
    store: DealStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Every view in one pass over the same snapshot."""
    deals = store.deals
    logger.debug("Dashboard recompute: %d deals, range %r..%r", len(deals), rng.start, rng.end)
    return build_dashboard(
        deals, rng.start, rng.end,
        unknown_advisor=settings.unknown_advisor_label,
        no_program=settings.no_program_label,
    )
