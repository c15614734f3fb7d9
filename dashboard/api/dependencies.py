"""
Sales Monitor — Shared Router Dependencies
============================================
Date-range query parameters and accessors for objects on app.state.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Query, Request

from dashboard.api.store import DealStore
from scripts.lib.config import Settings

# Empty string means "unbounded"
DATE_PATTERN = r"^(\d{4}-\d{2}-\d{2})?$"


@dataclass
class DateRange:
    start: str = ""
    end: str = ""


def date_range(
    start: str = Query("", pattern=DATE_PATTERN, description="Range start (YYYY-MM-DD), empty for none"),
    end: str = Query("", pattern=DATE_PATTERN, description="Range end (YYYY-MM-DD), empty for none"),
) -> DateRange:
    return DateRange(start=start, end=end)


def get_store(request: Request) -> DealStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
