"""
Sales Monitor — Deal Pydantic Models
======================================

The validated Deal record and the result shapes produced by the
aggregation engine. Every aggregate is rebuilt on each call; nothing here
is persisted.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, datetime):
        value = value.date().isoformat()
    elif isinstance(value, date):
        value = value.isoformat()
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


# ─── Deal ───────────────────────────────────────────────────

class Deal(BaseModel):
    """A single pipeline record, validated from an arbitrary webhook row.

    Accepts the source system's column names (``Fecha de Contacto``...),
    snake_case or camelCase keys. Unknown keys are ignored.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    contact_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("Fecha de Contacto", "contact_date", "contactDate"),
    )
    deal_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("Fecha de Trato", "deal_date", "dealDate"),
    )
    advisor_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("Asesora Comercial", "advisor_name", "advisorName"),
    )
    deal_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("Nombre de Trato", "deal_name", "dealName"),
    )
    status: Optional[str] = Field(
        None, validation_alias=AliasChoices("Estado", "status"),
    )
    program: Optional[str] = Field(
        None, validation_alias=AliasChoices("Programa Académico", "program"),
    )
    close_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("Fecha de Cierre", "close_date", "closeDate"),
    )

    @field_validator("advisor_name", "deal_name", "status", "program", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return _clean_text(value)

    @field_validator("contact_date", "deal_date", "close_date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Optional[str]:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            # Numeric dates have no unambiguous meaning
            return None
        text = _clean_text(value)
        if text and ISO_DATE_PREFIX.match(text):
            return text[:10]
        # Non-ISO dates would break lexicographic range checks
        return None


# ─── Aggregates ─────────────────────────────────────────────

class AggregatedStats(BaseModel):
    """Headline KPIs for a date range."""
    total_deals: int = 0
    won: int = 0
    lost: int = 0
    contact: int = 0
    other: int = 0
    conversion_rate: float = 0.0
    loss_rate: float = 0.0


class TimelinePoint(BaseModel):
    date: str
    created: int = 0
    won: int = 0


class AdvisorMetric(BaseModel):
    name: str
    total: int = 0
    won: int = 0
    lost: int = 0
    conversion_rate: float = 0.0
    loss_rate: float = 0.0


class ProgramMetric(BaseModel):
    name: str
    count: int = 0
    won: int = 0
    conversion_rate: float = 0.0


class DashboardSnapshot(BaseModel):
    """All five views computed from one record list and one range."""
    start: str = ""
    end: str = ""
    is_filtered: bool = False
    stats: AggregatedStats
    timeline: List[TimelinePoint] = Field(default_factory=list)
    advisors: List[AdvisorMetric] = Field(default_factory=list)
    programs: List[ProgramMetric] = Field(default_factory=list)
    deals: List[Deal] = Field(default_factory=list)


# ─── Source Models ──────────────────────────────────────────

class WebhookFetchRequest(BaseModel):
    """Load deals from a webhook. Falls back to WEBHOOK_URL when omitted."""
    url: Optional[str] = Field(None, description="Webhook URL returning JSON deal records")


class SourceStatus(BaseModel):
    """Where the current snapshot came from."""
    source: Literal["sample", "webhook", "file"] = "sample"
    url: Optional[str] = None
    record_count: int = 0
    loaded_at: Optional[datetime] = None
