"""
Sales Monitor — API Server
============================

Serves the sales performance dashboard computed in memory from a deal
snapshot (sample data, the latest raw webhook file, or a live webhook load).
Every metrics request recomputes from the current snapshot.

Route groups:
  /api/health      - Health check
  /api/metrics/*   - KPIs, timeline, advisor and program breakdowns
  /api/deals       - Filtered, searchable deal list
  /api/source/*    - Snapshot provenance and reload (webhook / sample)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.store import DealStore
from integrations.webhook import WebhookIntegration
from scripts.lib.config import load_settings
from scripts.lib.logger import setup_logger

logger = setup_logger("sales_monitor_api")

VERSION = "1.0.0"

settings = load_settings()


# ─── Lifespan ─────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app):
    """Application startup and shutdown."""
    logger.info("Starting Sales Monitor...")

    app.state.settings = settings
    app.state.store = DealStore()
    app.state.store.load_latest_file()
    app.state.webhook = WebhookIntegration(settings)

    status = "configured" if app.state.webhook.is_configured else "not configured"
    logger.info("Default webhook: %s", status)
    logger.info("Sales Monitor ready (%d deals)", app.state.store.status.record_count)
    yield
    logger.info("Shutting down Sales Monitor...")


# ─── App Setup ────────────────────────────────────────────────

app = FastAPI(
    title="Sales Monitor",
    version=VERSION,
    description="Sales performance analytics over a webhook-fed deal pipeline",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Include Routers ──────────────────────────────────────────

from dashboard.api.routers.metrics import router as metrics_router
from dashboard.api.routers.deals import router as deals_router
from dashboard.api.routers.source import router as source_router

app.include_router(metrics_router)
app.include_router(deals_router)
app.include_router(source_router)


# ─── Health ───────────────────────────────────────────────────

@app.get("/api/health", tags=["system"])
async def health():
    """Health check with snapshot status."""
    status = app.state.store.status
    return {
        "status": "healthy",
        "service": "Sales Monitor",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "data": {
            "source": status.source,
            "record_count": status.record_count,
        },
        "integrations": app.state.webhook.get_status(),
    }
