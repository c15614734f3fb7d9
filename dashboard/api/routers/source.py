"""
Sales Monitor — Data Source Router
====================================
Which deal snapshot the dashboard is computing from, and how to replace it.

Endpoints:
  GET  /api/source          - Current snapshot provenance
  POST /api/source/webhook  - Fetch the webhook and swap the snapshot
  POST /api/source/sample   - Go back to the built-in sample data
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from dashboard.api.dependencies import get_store
from dashboard.api.store import DealStore
from models.deal_models import SourceStatus, WebhookFetchRequest
from scripts.lib.errors import (
    APIError,
    APITimeoutError,
    ConfigError,
    DataFetchError,
    MonitorError,
    SchemaValidationError,
)
from scripts.lib.logger import setup_logger

logger = setup_logger("source_router")

router = APIRouter(prefix="/api/source", tags=["source"])


def _status_for(error: MonitorError) -> int:
    if isinstance(error, ConfigError):
        return 400
    if isinstance(error, SchemaValidationError):
        return 422
    if isinstance(error, APITimeoutError):
        return 504
    if isinstance(error, (APIError, DataFetchError)):
        return 502
    return 500


@router.get("", response_model=SourceStatus)
async def source_status(store: DealStore = Depends(get_store)):
    """Where the current deals came from."""
    return store.status


@router.post("/webhook", response_model=SourceStatus)
async def load_from_webhook(
    request: Request,
    body: Optional[WebhookFetchRequest] = None,
    store: DealStore = Depends(get_store),
):
    """Fetch deals from a webhook. On failure the current snapshot is kept."""
    webhook = request.app.state.webhook
    url = ((body.url if body else None) or "").strip() or None
    try:
        deals = await webhook.fetch_deals(url)
    except MonitorError as e:
        logger.error("Webhook load failed: %s", e)
        raise HTTPException(status_code=_status_for(e), detail=e.message)
    return store.replace(deals, source="webhook", url=url or webhook.default_url)


@router.post("/sample", response_model=SourceStatus)
async def load_sample(store: DealStore = Depends(get_store)):
    """Restore the built-in sample deals."""
    return store.load_sample()
