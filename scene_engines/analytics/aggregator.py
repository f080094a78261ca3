"""Daily view counters folded into a dense monthly series."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from scene_engines.analytics.models import MonthlyBucket

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 6


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_date(now: Optional[datetime] = None) -> date:
    current = now or _utc_now()
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    return current.date()


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def shift_month(value: date, months: int) -> str:
    """Month key ``months`` calendar months away from ``value``."""
    index = value.year * 12 + (value.month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def parse_day_key(key: Any) -> Optional[date]:
    if not isinstance(key, str) or len(key) != 8 or not key.isdigit():
        return None
    try:
        return datetime.strptime(key, "%Y%m%d").date()
    except ValueError:
        return None


def parse_views(value: Any) -> Optional[int]:
    """Integer view count, 0 when absent, None when unusable."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed >= 0 else None


def aggregate_monthly(
    daily_counters: Any,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    now: Optional[datetime] = None,
) -> List[MonthlyBucket]:
    totals: Dict[str, int] = {}
    if isinstance(daily_counters, dict):
        for day_key, scenes in daily_counters.items():
            day = parse_day_key(day_key)
            if day is None:
                logger.debug("skipping counter key %r", day_key)
                continue
            month = month_key(day)
            totals.setdefault(month, 0)
            if not isinstance(scenes, dict):
                continue
            for scene_key, entry in scenes.items():
                views = parse_views(entry.get("views") if isinstance(entry, dict) else None)
                if views is None:
                    logger.warning("skipping unparseable views for %s/%s", day_key, scene_key)
                    continue
                totals[month] += views

    anchor = utc_date(now)
    for offset in range(max(0, window_months)):
        totals.setdefault(shift_month(anchor, -offset), 0)

    return [MonthlyBucket(month=month, count=count) for month, count in sorted(totals.items())]
