"""
Sales Monitor — Entry Point
=============================

Run: python main.py
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from scripts.lib.config import load_settings  # noqa: E402
from scripts.lib.logger import LOG_DATEFMT, LOG_FORMAT  # noqa: E402

settings = load_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format=LOG_FORMAT,
    datefmt=LOG_DATEFMT,
)
logger = logging.getLogger("sales-monitor")

PORT = settings.dashboard_port

if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 60)
    logger.info("  SALES MONITOR — Sales Performance Analytics")
    logger.info("=" * 60)
    logger.info(f"  Environment : {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"  Server      : http://0.0.0.0:{PORT}")
    logger.info(f"  API Docs    : http://localhost:{PORT}/docs")
    logger.info(f"  Webhook     : {settings.webhook_url or 'not set (sample data)'}")
    logger.info(f"  Debug       : {settings.debug}")
    logger.info("=" * 60)

    uvicorn.run(
        "dashboard.api.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=settings.debug,
    )
