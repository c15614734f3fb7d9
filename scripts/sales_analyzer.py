"""
Sales Performance Analyzer
===========================
Pure aggregation engine behind the sales dashboard, plus a batch entry point
that writes data/processed/sales_metrics.json from the latest webhook snapshot.

A deal is attributed to a period in two different ways:
    - by creation date (deal date, else contact date): inflow counts
    - by closure date, only when the status is Won or Lost: win/loss counts
The two are independent, so a deal created before the range can still be
counted as won inside it, and conversion rates can exceed 100%.

Exports:
    normalize_status, is_in_range, get_creation_date, get_close_date,
    compute_stats, compute_timeline, compute_advisor_metrics,
    compute_program_metrics, filter_deals, search_deals, status_tone,
    build_dashboard, run_sales_analysis
"""

from __future__ import annotations

import argparse
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models.deal_models import (
    AdvisorMetric,
    AggregatedStats,
    DashboardSnapshot,
    Deal,
    ProgramMetric,
    TimelinePoint,
)
from scripts.lib.config import load_settings
from scripts.lib.deal_ingest import find_latest_snapshot, load_raw_snapshot
from scripts.lib.errors import MonitorError
from scripts.lib.logger import setup_logger
from scripts.lib.sample_deals import sample_deals
from scripts.lib.utils import atomic_write_json

logger = setup_logger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
PROCESSED_DIR = BASE_DIR / "data" / "processed"

STATUS_WON = "Won"
STATUS_LOST = "Lost"
STATUS_CONTACT = "Contact"
UNKNOWN_LABEL = "Unknown"
NO_PROGRAM_LABEL = "No Program"

# Checked in this order; the first group that matches wins
STATUS_KEYWORDS = (
    (STATUS_WON, ("ganado", "won", "venta")),
    (STATUS_LOST, ("perdido", "lost")),
    (STATUS_CONTACT, ("contacto", "contact")),
)

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ---------------------------------------------------------------------------
# Leaf helpers
# ---------------------------------------------------------------------------

def normalize_status(raw: Optional[str], unknown_label: str = UNKNOWN_LABEL) -> str:
    """Map a free-text status to Won, Lost, Contact or a capitalized fallback.

    Idempotent: a canonical value normalizes to itself.
    """
    if not raw:
        return unknown_label
    lower = raw.lower().strip()
    for canonical, keywords in STATUS_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return canonical
    return raw.capitalize()


def _is_closed(status: str) -> bool:
    return status in (STATUS_WON, STATUS_LOST)


def is_in_range(date: Optional[str], start: Optional[str], end: Optional[str]) -> bool:
    """Inclusive lexicographic range test on ISO dates.

    A missing date is never in range, even for an unbounded range.
    Empty bounds are unconstrained.
    """
    if not date:
        return False
    after_start = not start or date >= start
    before_end = not end or date <= end
    return after_start and before_end


def get_creation_date(deal: Deal) -> str:
    """Deal date, falling back to the contact date; '' when both are missing."""
    return deal.deal_date or deal.contact_date or ""


def get_close_date(deal: Deal) -> str:
    return deal.close_date or ""


def _closed_in_range(deal: Deal, status: str, start: str, end: str) -> bool:
    return _is_closed(status) and is_in_range(get_close_date(deal), start, end)


def _rate(part: int, whole: int) -> float:
    """Percentage, 0 when the whole is empty. Not clamped."""
    if whole == 0:
        return 0.0
    return part / whole * 100


# ---------------------------------------------------------------------------
# Aggregators
# ---------------------------------------------------------------------------

def compute_stats(deals: Sequence[Deal], start: str = "", end: str = "") -> AggregatedStats:
    """Headline KPIs: inflow by creation date, won/lost by closure date."""
    created = [d for d in deals if is_in_range(get_creation_date(d), start, end)]
    total = len(created)

    won = 0
    lost = 0
    for deal in deals:
        status = normalize_status(deal.status)
        if not _closed_in_range(deal, status, start, end):
            continue
        if status == STATUS_WON:
            won += 1
        else:
            lost += 1

    # Still open among the deals that came in during the period
    contact = sum(1 for d in created if not _is_closed(normalize_status(d.status)))

    # Residual: created in period but closed outside it. Can go negative
    # when closures come from older deals, hence the clamp.
    other = max(total - won - lost - contact, 0)

    return AggregatedStats(
        total_deals=total,
        won=won,
        lost=lost,
        contact=contact,
        other=other,
        conversion_rate=_rate(won, total),
        loss_rate=_rate(lost, total),
    )


def compute_timeline(deals: Sequence[Deal], start: str = "", end: str = "") -> List[TimelinePoint]:
    """Per-day created vs. won counts, ascending by date."""
    buckets: Dict[str, Dict[str, Any]] = {}

    def _bucket(day: str) -> Dict[str, Any]:
        if day not in buckets:
            buckets[day] = {"date": day, "created": 0, "won": 0}
        return buckets[day]

    for deal in deals:
        creation = get_creation_date(deal)
        if is_in_range(creation, start, end):
            _bucket(creation)["created"] += 1

        closed = get_close_date(deal)
        if normalize_status(deal.status) == STATUS_WON and is_in_range(closed, start, end):
            _bucket(closed)["won"] += 1

    return [TimelinePoint(**buckets[day]) for day in sorted(buckets)]


def compute_advisor_metrics(
    deals: Sequence[Deal],
    start: str = "",
    end: str = "",
    unknown_advisor: str = UNKNOWN_LABEL,
) -> List[AdvisorMetric]:
    """Per-advisor totals, sorted by wins (ties keep first-seen order)."""
    by_advisor: Dict[str, Dict[str, int]] = {}

    for deal in deals:
        name = deal.advisor_name or unknown_advisor
        counts = by_advisor.setdefault(name, {"total": 0, "won": 0, "lost": 0})
        status = normalize_status(deal.status)

        if is_in_range(get_creation_date(deal), start, end):
            counts["total"] += 1
        if _closed_in_range(deal, status, start, end):
            counts["won" if status == STATUS_WON else "lost"] += 1

    metrics = [
        AdvisorMetric(
            name=name,
            total=c["total"],
            won=c["won"],
            lost=c["lost"],
            conversion_rate=_rate(c["won"], c["total"]),
            loss_rate=_rate(c["lost"], c["total"]),
        )
        for name, c in by_advisor.items()
        if c["total"] or c["won"] or c["lost"]
    ]
    metrics.sort(key=lambda m: m.won, reverse=True)
    return metrics


def compute_program_metrics(
    deals: Sequence[Deal],
    start: str = "",
    end: str = "",
    no_program: str = NO_PROGRAM_LABEL,
) -> List[ProgramMetric]:
    """Per-program interest (created) and sales (won), sorted by interest."""
    by_program: Dict[str, Dict[str, int]] = {}

    for deal in deals:
        name = deal.program or no_program
        counts = by_program.setdefault(name, {"count": 0, "won": 0})

        if is_in_range(get_creation_date(deal), start, end):
            counts["count"] += 1
        if normalize_status(deal.status) == STATUS_WON and is_in_range(get_close_date(deal), start, end):
            counts["won"] += 1

    metrics = [
        ProgramMetric(
            name=name,
            count=c["count"],
            won=c["won"],
            conversion_rate=_rate(c["won"], c["count"]),
        )
        for name, c in by_program.items()
        if c["count"] or c["won"]
    ]
    metrics.sort(key=lambda m: m.count, reverse=True)
    return metrics


def filter_deals(deals: Sequence[Deal], start: str = "", end: str = "") -> List[Deal]:
    """Deals relevant to the range, most recent first.

    Kept when created in range, or closed (Won/Lost) in range. With no
    bounds at all the input comes back as-is, unsorted.
    """
    if not start and not end:
        return list(deals)

    kept = [
        d for d in deals
        if is_in_range(get_creation_date(d), start, end)
        or _closed_in_range(d, normalize_status(d.status), start, end)
    ]
    # sorted() is stable with reverse=True, equal dates keep input order
    return sorted(kept, key=lambda d: get_close_date(d) or get_creation_date(d), reverse=True)


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------

def status_tone(raw: Optional[str]) -> str:
    """Badge tone for a raw status: won, lost or pending."""
    status = normalize_status(raw)
    if status == STATUS_WON:
        return "won"
    if status == STATUS_LOST:
        return "lost"
    return "pending"


def search_deals(deals: Sequence[Deal], term: Optional[str]) -> List[Deal]:
    """Case-insensitive substring search across every field of each deal."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(deals)
    return [
        d for d in deals
        if any(value is not None and needle in str(value).lower() for value in d.model_dump().values())
    ]


def build_dashboard(
    deals: Sequence[Deal],
    start: str = "",
    end: str = "",
    unknown_advisor: str = UNKNOWN_LABEL,
    no_program: str = NO_PROGRAM_LABEL,
) -> DashboardSnapshot:
    """Run every aggregator over the same snapshot and range."""
    start = start or ""
    end = end or ""
    return DashboardSnapshot(
        start=start,
        end=end,
        is_filtered=bool(start or end),
        stats=compute_stats(deals, start, end),
        timeline=compute_timeline(deals, start, end),
        advisors=compute_advisor_metrics(deals, start, end, unknown_advisor=unknown_advisor),
        programs=compute_program_metrics(deals, start, end, no_program=no_program),
        deals=filter_deals(deals, start, end),
    )


# ============================================================================
# Batch entry point
# ============================================================================

def run_sales_analysis(
    start: str = "",
    end: str = "",
    source_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load the latest deal snapshot, build the dashboard and save it.

    Uses source_path when given, else the newest data/raw snapshot, else
    the built-in sample data. Returns the full output dictionary.
    """
    settings = load_settings()

    path = Path(source_path) if source_path else find_latest_snapshot()
    if path is not None:
        deals = load_raw_snapshot(path)
        data_source = str(path)
    else:
        logger.warning("No webhook snapshot found; analysing sample data")
        deals = sample_deals()
        data_source = "sample"

    logger.info("Analysing %d deals (range %s..%s)", len(deals), start or "*", end or "*")
    dashboard = build_dashboard(
        deals, start, end,
        unknown_advisor=settings.unknown_advisor_label,
        no_program=settings.no_program_label,
    )

    output = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "data_source": data_source,
        "record_count": len(deals),
        "dashboard": dashboard.model_dump(mode="json"),
    }

    target_dir = Path(output_dir) if output_dir else PROCESSED_DIR
    output_path = target_dir / "sales_metrics.json"
    if atomic_write_json(output, output_path):
        logger.info("Analysis complete. Output saved to %s", output_path)
    else:
        logger.error("Analysis complete but output could not be saved to %s", output_path)
    return output


def _iso_date(value: str) -> str:
    if not ISO_DATE_RE.match(value):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")
    return value


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute sales performance metrics")
    parser.add_argument("--start", type=_iso_date, default="", help="Range start (YYYY-MM-DD)")
    parser.add_argument("--end", type=_iso_date, default="", help="Range end (YYYY-MM-DD)")
    parser.add_argument("--source", type=Path, default=None, help="Deal snapshot JSON file")
    args = parser.parse_args(argv)

    try:
        results = run_sales_analysis(args.start, args.end, args.source)
    except MonitorError as e:
        print(f"Analysis failed: {e}", file=sys.stderr)
        return 1

    stats = results["dashboard"]["stats"]
    print(f"\nAnalysis complete. {results['record_count']} deals processed.")
    print(f"Created: {stats['total_deals']}  Won: {stats['won']}  Lost: {stats['lost']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
