"""
Webhook Deal Fetcher
=====================

Pulls the deal list from the configured webhook, validates every record
and writes a dated raw snapshot to data/raw/webhook_deals_YYYY-MM-DD.json.
The snapshot is what sales_analyzer and the API pick up on startup.

Run: python -m scripts.fetch_deals [--url URL]
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from scripts.lib.config import load_settings
from scripts.lib.deal_ingest import RAW_DIR, RAW_PREFIX, deals_from_payload
from scripts.lib.errors import ConfigError, MonitorError
from scripts.lib.logger import setup_logger
from scripts.lib.utils import atomic_write_json, fetch_json

logger = setup_logger(__name__)


def write_raw_snapshot(deals: list, date_stamp: str, raw_dir: Path = None) -> Path:
    """Write validated deals under the raw directory; returns the file path."""
    target_dir = Path(raw_dir) if raw_dir else RAW_DIR
    payload = {
        "source": "webhook",
        "captured_at": date_stamp,
        "record_count": len(deals),
        "results": [d.model_dump() for d in deals],
    }
    out_path = target_dir / f"{RAW_PREFIX}_{date_stamp}.json"
    if not atomic_write_json(payload, out_path):
        raise MonitorError(f"Could not write snapshot to {out_path}", code="WRITE_FAILED")
    logger.info("Saved %d deals -> %s", len(deals), out_path)
    return out_path


def fetch_deals(url: Optional[str] = None, raw_dir: Path = None) -> Path:
    """Main entry: fetch the webhook and write the raw snapshot."""
    settings = load_settings()
    url = (url or "").strip() or settings.webhook_url
    if not url:
        raise ConfigError("Missing WEBHOOK_URL (or pass --url)", setting="WEBHOOK_URL")

    logger.info("Starting webhook deal extraction")
    payload = fetch_json(
        url,
        timeout=settings.webhook_timeout_seconds,
        max_retries=settings.webhook_max_retries,
    )
    deals = deals_from_payload(payload, source=url)
    return write_raw_snapshot(deals, time.strftime("%Y-%m-%d"), raw_dir)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch deals from the sales webhook")
    parser.add_argument("--url", default=None, help="Webhook URL (default: WEBHOOK_URL)")
    args = parser.parse_args(argv)

    try:
        fetch_deals(args.url)
    except MonitorError as e:
        logger.error("Webhook extraction failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
