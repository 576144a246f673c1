"""
Sports API Endpoints
"""

from fastapi import APIRouter

from match_pipeline.api.models import SportOption
from match_pipeline.common.sports import sport_choices

router = APIRouter()


@router.get("/sports", response_model=list[SportOption])
async def list_sports():
    """Supported sports in display order"""
    return sport_choices()
