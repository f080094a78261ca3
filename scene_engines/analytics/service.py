"""View analytics over the ``counters`` subtree."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from scene_engines.analytics.aggregator import aggregate_monthly
from scene_engines.analytics.forecast import DEFAULT_HORIZON, forecast
from scene_engines.analytics.models import ForecastReport, MonthlyBucket, TopScenes
from scene_engines.analytics.ranking import DEFAULT_TOP_K, top_k
from scene_engines.common.errors import MalformedDocument, UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.document_store.repository import DocumentStore, get_document_store

logger = logging.getLogger(__name__)

DAILY_COUNTERS_PATH = "counters/daily"
GLOBAL_TOTALS_PATH = "counters/globalTotals"


class ViewAnalyticsService:
    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def store(self) -> DocumentStore:
        return self._store or get_document_store()

    def _now(self) -> Optional[datetime]:
        return self._clock() if self._clock else None

    def _read(self, ctx: SessionContext, path: str) -> Any:
        try:
            return self.store.get(ctx, path)
        except (UpstreamUnavailable, MalformedDocument) as exc:
            logger.warning("analytics read of %s degraded: %s", path, exc)
            return None

    def monthly_history(self, ctx: SessionContext) -> List[MonthlyBucket]:
        return aggregate_monthly(self._read(ctx, DAILY_COUNTERS_PATH), now=self._now())

    def forecast(self, ctx: SessionContext, horizon: int = DEFAULT_HORIZON) -> ForecastReport:
        """History keeps the zero-filled window; the regression only sees observed months."""
        now = self._now()
        daily = self._read(ctx, DAILY_COUNTERS_PATH)
        history = aggregate_monthly(daily, now=now)
        if daily is None:
            return ForecastReport(history=history, forecast=[])
        observed = aggregate_monthly(daily, window_months=0, now=now)
        return ForecastReport(history=history, forecast=forecast(observed, horizon=horizon, now=now))

    def top_scenes(self, ctx: SessionContext, k: int = DEFAULT_TOP_K) -> TopScenes:
        labels, counts = top_k(self._read(ctx, GLOBAL_TOTALS_PATH), k=k)
        return TopScenes(labels=labels, counts=counts)
