"""View analytics package."""

from scene_engines.analytics.aggregator import aggregate_monthly
from scene_engines.analytics.forecast import fit_line
from scene_engines.analytics.models import ForecastPoint, ForecastReport, MonthlyBucket, TopScenes
from scene_engines.analytics.ranking import top_k
from scene_engines.analytics.service import ViewAnalyticsService

__all__ = [
    "MonthlyBucket",
    "ForecastPoint",
    "ForecastReport",
    "TopScenes",
    "aggregate_monthly",
    "fit_line",
    "top_k",
    "ViewAnalyticsService",
]
