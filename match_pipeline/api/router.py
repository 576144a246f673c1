"""
Aggregated API router.
"""

from fastapi import APIRouter

from match_pipeline.api.endpoints import matches, sports


api_router = APIRouter()

api_router.include_router(matches.router, tags=["matches"])
api_router.include_router(sports.router, tags=["sports"])
