"""
Sales Monitor — Deals Router
==============================
The deals table: range-filtered, most recent first, optionally searched.

Endpoints:
  GET /api/deals   - Deals relevant to the range, with free-text search
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dashboard.api.dependencies import DateRange, date_range, get_store
from dashboard.api.store import DealStore
from scripts.sales_analyzer import filter_deals, search_deals, status_tone

router = APIRouter(prefix="/api/deals", tags=["deals"])


@router.get("")
async def list_deals(
    rng: DateRange = Depends(date_range),
    q: Optional[str] = Query(None, description="Search deal, advisor, program, status..."),
    store: DealStore = Depends(get_store),
):
    """Deals created or closed in the range, then narrowed by search."""
    snapshot = store.deals
    deals = search_deals(filter_deals(snapshot, rng.start, rng.end), q)
    return {
        "results": [
            {**d.model_dump(), "tone": status_tone(d.status)}
            for d in deals
        ],
        "count": len(deals),
        "total": len(snapshot),
    }
