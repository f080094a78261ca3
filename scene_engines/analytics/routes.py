from __future__ import annotations

from fastapi import APIRouter, Depends

from scene_engines.analytics.service import ViewAnalyticsService
from scene_engines.common.identity import SessionContext, get_session_context
from scene_engines.identity.auth import get_user_directory
from scene_engines.identity.users import UserDirectory

router = APIRouter(prefix="/analytics", tags=["analytics"])
_service = ViewAnalyticsService()


def get_analytics_service() -> ViewAnalyticsService:
    return _service


@router.get("/performance")
def performance(
    ctx: SessionContext = Depends(get_session_context),
    service: ViewAnalyticsService = Depends(get_analytics_service),
):
    return [bucket.model_dump() for bucket in service.monthly_history(ctx)]


@router.get("/forecast")
def forecast(
    ctx: SessionContext = Depends(get_session_context),
    service: ViewAnalyticsService = Depends(get_analytics_service),
):
    return service.forecast(ctx).model_dump()


@router.get("/top-scenes")
def top_scenes(
    ctx: SessionContext = Depends(get_session_context),
    service: ViewAnalyticsService = Depends(get_analytics_service),
):
    return service.top_scenes(ctx).model_dump()


@router.get("/user-roles")
def user_roles(
    ctx: SessionContext = Depends(get_session_context),
    users: UserDirectory = Depends(get_user_directory),
):
    return users.role_counts(ctx)
