"""
Sales Monitor — Deal Store
============================
Holds the deal snapshot the dashboard recomputes from.

The snapshot is replaced wholesale, never mutated in place, so a request
that already grabbed `deals` keeps a consistent list while a reload runs.
"""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from models.deal_models import Deal, SourceStatus
from scripts.lib.deal_ingest import find_latest_snapshot, load_raw_snapshot
from scripts.lib.errors import DataError
from scripts.lib.logger import get_logger
from scripts.lib.sample_deals import sample_deals

logger = get_logger("deal_store")


class DealStore:
    """In-memory deal snapshot plus where it came from."""

    def __init__(self, deals: Optional[List[Deal]] = None):
        self._deals: tuple = ()
        self._status = SourceStatus()
        if deals is None:
            self.load_sample()
        else:
            self.replace(deals, source="sample")

    @property
    def deals(self) -> tuple:
        return self._deals

    @property
    def status(self) -> SourceStatus:
        return self._status

    def replace(self, deals: List[Deal], source: str, url: Optional[str] = None) -> SourceStatus:
        """Swap in a new snapshot."""
        self._deals = tuple(deals)
        self._status = SourceStatus(
            source=source,
            url=url,
            record_count=len(self._deals),
            loaded_at=datetime.now(timezone.utc),
        )
        logger.info("Snapshot replaced: %d deals from %s", len(self._deals), url or source)
        return self._status

    def load_sample(self) -> SourceStatus:
        return self.replace(sample_deals(), source="sample")

    def load_latest_file(self, raw_dir: Path = None) -> SourceStatus:
        """Load the newest raw webhook snapshot, keeping sample data if none is usable."""
        path = find_latest_snapshot(raw_dir)
        if path is None:
            logger.info("No raw deal snapshot found; serving sample data")
            return self._status
        try:
            deals = load_raw_snapshot(path)
        except DataError as e:
            logger.warning("Ignoring unreadable snapshot %s: %s", path, e)
            return self._status
        return self.replace(deals, source="file", url=str(path))
