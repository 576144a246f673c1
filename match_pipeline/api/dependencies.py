"""
API Dependencies
Dependency Injection für FastAPI
"""

from fastapi import Request

from match_pipeline.analytics.engine import AnalyticsEngine
from match_pipeline.data_collection.query import MatchQueryService


async def get_query_service(request: Request) -> MatchQueryService:
    return request.app.state.pipeline.query_service


async def get_analytics_engine(request: Request) -> AnalyticsEngine:
    return request.app.state.pipeline.analytics
