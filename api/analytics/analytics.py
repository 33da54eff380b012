# api/analytics/analytics.py
from fastapi import APIRouter, Depends

from services.analytics_service import AnalyticsService, get_analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/users/{user_id}")
async def user_summary(
    user_id: str,
    analytics_service: AnalyticsService = Depends(get_analytics_service),
):
    summary = await analytics_service.user_summary(user_id)
    return summary.model_dump(mode="json")


@router.get("/overview")
async def overview(analytics_service: AnalyticsService = Depends(get_analytics_service)):
    result = await analytics_service.overview()
    return result.model_dump(mode="json")
