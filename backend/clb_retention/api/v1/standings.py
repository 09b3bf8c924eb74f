from dataclasses import asdict
from typing import List
from fastapi import APIRouter, Depends

from clb_retention.dependencies import get_standings_calculator
from clb_retention.schemas.retention import StandingRowResponse, StandingsRequest
from clb_retention.services.standings import StandingsCalculator

router = APIRouter()


@router.post("", response_model=List[StandingRowResponse])
async def rank_teams(
    request: StandingsRequest,
    calculator: StandingsCalculator = Depends(get_standings_calculator),
):
    """Rank teams with tie-breakers; tied teams share a "T-n" display rank."""
    return [StandingRowResponse(**asdict(row)) for row in calculator.rank(request.teams)]
