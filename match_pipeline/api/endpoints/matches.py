"""
Matches API Endpoints
API Routen für Match-Listen, Anlage und Statistiken
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from match_pipeline.analytics.engine import AnalyticsEngine
from match_pipeline.api.dependencies import get_analytics_engine, get_query_service
from match_pipeline.api.models import ErrorResponse
from match_pipeline.common.sports import UnknownSportError, normalize_sport, require_sport
from match_pipeline.data_collection.query import MatchQueryService, StoreUnavailableError

router = APIRouter()


def _unknown_sport(e: UnknownSportError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(e), "supported": e.supported})


@router.get("/matches", responses={400: {"model": ErrorResponse}})
async def list_matches(
    sport: Optional[str] = None,
    limit: Optional[str] = None,
    query_service: MatchQueryService = Depends(get_query_service),
):
    """Latest matches, optionally for one sport"""
    try:
        matches = await query_service.query(sport, limit)
    except UnknownSportError as e:
        return _unknown_sport(e)
    return [m.to_record() for m in matches]


@router.post("/matches", status_code=201, responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}})
async def create_match(
    payload: dict[str, Any] = Body(...),
    query_service: MatchQueryService = Depends(get_query_service),
):
    """Create a single match"""
    raw_sport = payload.get("sport")
    if normalize_sport(raw_sport) is None:
        return _unknown_sport(UnknownSportError(raw_sport))
    try:
        match = await query_service.create_match(payload)
    except ValidationError as e:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid match",
                "details": e.errors(include_url=False, include_context=False, include_input=False),
            },
        )
    except StoreUnavailableError as e:
        return JSONResponse(status_code=503, content={"error": str(e)})
    return match.to_record()


@router.get("/matches/stats", responses={400: {"model": ErrorResponse}})
async def match_stats(
    sport: Optional[str] = None,
    limit: Optional[str] = None,
    analytics: AnalyticsEngine = Depends(get_analytics_engine),
):
    """Statistics for one sport, or broken out per sport when ``sport`` is absent or 'all'"""
    if sport is None or sport.strip().lower() in ("", "all"):
        stats = await analytics.all_sports_stats(limit)
        return stats.model_dump()
    try:
        normalized = require_sport(sport)
    except UnknownSportError as e:
        return _unknown_sport(e)
    stats = await analytics.sport_stats(normalized, limit)
    return stats.model_dump()

