"""
Deal ingestion helpers shared by the live connector and the batch fetcher.

Turns whatever JSON a webhook returns into a list of validated Deal records:
    normalize_payload()  - response shape -> list of raw row dicts
    parse_deals()        - raw rows -> Deal models (bad fields degrade to None)
    load_raw_snapshot()  - read a data/raw snapshot written by fetch_deals
"""
from __future__ import annotations

import glob
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from models.deal_models import Deal
from scripts.lib.errors import DataFetchError, SchemaValidationError
from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent.parent
RAW_DIR = BASE_DIR / "data" / "raw"
RAW_PREFIX = "webhook_deals"


def normalize_payload(payload: Any) -> List[Any]:
    """Unwrap the record list from a webhook response body.

    Accepts a bare list, an object holding the list under ``data`` or
    ``items``, or a single object (wrapped into a one-element list).
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "items"):
            if isinstance(payload.get(key), list):
                return payload[key]
        return [payload]
    raise SchemaValidationError(
        f"Expected a JSON list or object, got {type(payload).__name__}"
    )


def parse_deals(records: Iterable[Any]) -> List[Deal]:
    """Validate raw rows into Deal models, skipping rows that aren't objects."""
    deals: List[Deal] = []
    skipped = 0
    for idx, row in enumerate(records):
        if not isinstance(row, dict):
            skipped += 1
            logger.warning("Skipping record %d: expected an object, got %s", idx, type(row).__name__)
            continue
        try:
            deals.append(Deal.model_validate(row))
        except ValidationError as e:
            skipped += 1
            logger.warning("Skipping record %d: %s", idx, e)
    if skipped:
        logger.info("Parsed %d deals (%d skipped)", len(deals), skipped)
    return deals


def deals_from_payload(payload: Any, source: str = None) -> List[Deal]:
    """normalize_payload + parse_deals, refusing an empty result."""
    deals = parse_deals(normalize_payload(payload))
    if not deals:
        raise DataFetchError("The response is empty or has no deal records", source=source)
    return deals


def find_latest_snapshot(raw_dir: Path = None) -> Optional[Path]:
    """Most recent webhook_deals_YYYY-MM-DD.json under the raw directory."""
    raw_dir = Path(raw_dir) if raw_dir else RAW_DIR
    files = glob.glob(str(raw_dir / f"{RAW_PREFIX}_*.json"))
    date_re = re.compile(re.escape(RAW_PREFIX) + r"_(\d{4}-\d{2}-\d{2})\.json$")
    dated = []
    for fp in files:
        m = date_re.search(os.path.basename(fp))
        if m:
            dated.append((m.group(1), Path(fp)))
    if not dated:
        return None
    dated.sort(key=lambda x: x[0], reverse=True)
    return dated[0][1]


def load_raw_snapshot(path: Path) -> List[Deal]:
    """Load deals from a raw snapshot file (or any JSON file with a deal payload)."""
    path = Path(path)
    logger.info("Loading deals from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            payload: Dict[str, Any] = json.load(fh)
    except OSError as e:
        raise DataFetchError(f"Cannot read {path}: {e}", source=str(path))
    except ValueError:
        raise SchemaValidationError(f"{path} is not valid JSON")

    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        payload = payload["results"]
    return deals_from_payload(payload, source=str(path))
