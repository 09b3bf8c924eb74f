import logging
from dataclasses import asdict
from typing import Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clb_retention.database import get_db
from clb_retention.dependencies import get_retention_config, get_retention_engine
from clb_retention.models import PlayerRetentionInput, TeamRetentionInput
from clb_retention.schemas.retention import (
    GradeResponse,
    PlayerInputBase,
    QualificationResponse,
    RetentionConfigResponse,
    RetentionGradesRequest,
    RetentionGradesResponse,
    TeamInputBase,
    TierResponse,
)
from clb_retention.services.play_time import lineup_key
from clb_retention.services.retention_config import RetentionConfig
from clb_retention.services.retention_engine import (
    PlayerManualInputs,
    RetentionEngine,
    TeamManualInputs,
)
from clb_retention.utils import normalize_name

logger = logging.getLogger(__name__)
router = APIRouter()


def _player_manual(data: PlayerInputBase) -> PlayerManualInputs:
    return PlayerManualInputs(
        draft_value=data.draft_value,
        chemistry=data.chemistry,
        team_success_modifier=data.team_success_modifier,
        play_time_modifier=data.play_time_modifier,
        performance_modifier=data.performance_modifier,
    )


def _team_manual(data: TeamInputBase) -> TeamManualInputs:
    return TeamManualInputs(direction=data.direction, postseason_finish=data.postseason_finish)


async def _merged_player_inputs(
    request: RetentionGradesRequest, db: AsyncSession
) -> Dict[str, PlayerManualInputs]:
    """Stored inputs matched by normalized name, overridden by the request's own."""
    by_normalized: Dict[str, PlayerManualInputs] = {}
    if request.use_stored_inputs:
        result = await db.execute(select(PlayerRetentionInput))
        for row in result.scalars().all():
            by_normalized[row.normalized_name] = PlayerManualInputs(
                draft_value=row.draft_value,
                chemistry=row.chemistry,
                team_success_modifier=row.team_success_modifier,
                play_time_modifier=row.play_time_modifier,
                performance_modifier=row.performance_modifier,
            )
    for name, data in request.player_inputs.items():
        by_normalized[normalize_name(name)] = _player_manual(data)

    merged = {}
    for player in request.players:
        inputs = by_normalized.get(normalize_name(player.name))
        if inputs is not None:
            merged[player.name] = inputs
    return merged


async def _merged_team_inputs(
    request: RetentionGradesRequest, db: AsyncSession
) -> Dict[str, TeamManualInputs]:
    merged: Dict[str, TeamManualInputs] = {}
    if request.use_stored_inputs:
        result = await db.execute(select(TeamRetentionInput))
        for row in result.scalars().all():
            merged[row.team_name] = TeamManualInputs(
                direction=row.direction,
                postseason_finish=row.postseason_finish,
            )
    for name, data in request.team_inputs.items():
        merged[name] = _team_manual(data)
    return merged


@router.post("/grades", response_model=RetentionGradesResponse)
async def compute_retention_grades(
    request: RetentionGradesRequest,
    db: AsyncSession = Depends(get_db),
    engine: RetentionEngine = Depends(get_retention_engine),
):
    """
    Grade every player in the submitted season.

    Saved manual inputs are merged under the inputs sent with the request.
    Grades come back sorted by team, then player name.
    """
    lineup_usage = None
    if request.lineup_usage is not None:
        lineup_usage = {lineup_key(u.player_name, u.team): u for u in request.lineup_usage}

    run = engine.compute_grades(
        players=request.players,
        teams=request.teams,
        standings=request.standings,
        postseason=request.postseason,
        lineup_usage=lineup_usage,
        box_scores=request.box_scores,
        player_inputs=await _merged_player_inputs(request, db),
        team_inputs=await _merged_team_inputs(request, db),
    )

    return RetentionGradesResponse(
        grades=[GradeResponse(**asdict(grade)) for grade in run.grades],
        thresholds=QualificationResponse(**asdict(run.thresholds)),
        pool_sizes=run.pool_sizes,
        standings=run.standings,
    )


@router.get("/config", response_model=RetentionConfigResponse)
async def get_active_config(config: RetentionConfig = Depends(get_retention_config)):
    """Active weights, scale, output range and tier tables."""
    tables = {
        "games_played": config.games_played_tiers,
        "lineup_position": config.lineup_position_tiers,
        "at_bats_per_game": config.at_bats_per_game_tiers,
        "pitching_usage": config.pitching_usage_tiers,
        "offensive": config.offensive_tiers,
        "defensive": config.defensive_tiers,
        "pitching": config.pitching_tiers,
    }
    tiers: Dict[str, List[TierResponse]] = {
        name: [TierResponse(**asdict(t)) for t in table.tiers]
        for name, table in tables.items()
    }
    return RetentionConfigResponse(
        weights=asdict(config.weights),
        factor_max_points=config.factor_max_points,
        grade_scale_factor=config.grade_scale_factor,
        grade_offset=config.grade_offset,
        output_range=list(config.output_range),
        grade_bands=asdict(config.grade_bands),
        innings_per_game=config.innings_per_game,
        qualification=asdict(config.qualification),
        standing_points={str(k): v for k, v in config.standing_points.as_dict().items()},
        postseason_points=config.postseason_points.as_dict(),
        tiers=tiers,
        auto_flagging_enabled=config.auto_flagging_enabled,
        auto_flag_tiers=[asdict(t) for t in config.auto_flag_tiers],
        draft_expectations_enabled=config.draft_expectations_enabled,
        draft_bands=[asdict(b) for b in config.draft_bands],
    )
