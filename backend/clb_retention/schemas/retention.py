from datetime import datetime
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field

from clb_retention.schemas.season import (
    BoxScoreLineup,
    LineupUsage,
    PlayerSeasonAggregate,
    TeamSeasonAggregate,
)


# ----- Manual inputs -----

class PlayerInputBase(BaseModel):
    draft_value: Optional[Union[int, str]] = None
    chemistry: float = Field(0.0, ge=0, le=20)
    team_success_modifier: float = Field(0.0, ge=-20, le=20)
    play_time_modifier: float = Field(0.0, ge=-20, le=20)
    performance_modifier: float = Field(0.0, ge=-20, le=20)


class PlayerInputUpdate(PlayerInputBase):
    pass


class PlayerInputResponse(PlayerInputBase):
    player_name: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TeamInputBase(BaseModel):
    direction: float = Field(0.0, ge=0, le=20)
    postseason_finish: Optional[Union[int, str]] = None


class TeamInputUpdate(TeamInputBase):
    pass


class TeamInputResponse(TeamInputBase):
    team_name: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Grades -----

class RetentionGradesRequest(BaseModel):
    players: List[PlayerSeasonAggregate]
    teams: List[TeamSeasonAggregate]
    standings: Optional[Dict[str, int]] = None  # Computed from teams when omitted
    postseason: Dict[str, Union[int, float, str, None]] = {}
    lineup_usage: Optional[List[LineupUsage]] = None
    box_scores: Optional[List[BoxScoreLineup]] = None
    player_inputs: Dict[str, PlayerInputBase] = {}
    team_inputs: Dict[str, TeamInputBase] = {}
    use_stored_inputs: bool = True  # Merge saved inputs under the request's own


class TeamSuccessResponse(BaseModel):
    regular_season: float
    postseason: float
    total: float
    details: str

    class Config:
        from_attributes = True


class PlayTimeResponse(BaseModel):
    games_played: float
    usage_quality: float
    total: float
    details: str

    class Config:
        from_attributes = True


class PerformanceResponse(BaseModel):
    offensive: float
    defensive: float
    pitching: float
    offensive_percentile: Optional[float] = None
    auto_flag_penalty: float
    expectation_mod: float
    base_total: float
    total: float
    details: str

    class Config:
        from_attributes = True


class GradeResponse(BaseModel):
    player_name: str
    team: Optional[str] = None
    team_success: TeamSuccessResponse
    play_time: PlayTimeResponse
    performance: PerformanceResponse
    auto_total: float
    team_success_modifier: float
    play_time_modifier: float
    performance_modifier: float
    team_success_total: float
    play_time_total: float
    performance_total: float
    chemistry: float
    direction: float
    draft_value: Optional[Union[int, str]] = None
    manual_total: float
    final_grade: int
    grade_band: str
    details: str

    class Config:
        from_attributes = True


class QualificationResponse(BaseModel):
    avg_team_games: float
    min_at_bats: float
    min_innings: float
    min_games: float

    class Config:
        from_attributes = True


class RetentionGradesResponse(BaseModel):
    grades: List[GradeResponse]
    thresholds: QualificationResponse
    pool_sizes: Dict[str, int]
    standings: Dict[str, int]


# ----- Standings -----

class StandingsRequest(BaseModel):
    teams: List[TeamSeasonAggregate]


class StandingRowResponse(BaseModel):
    standing: int
    display_rank: str
    team: str
    wins: int
    losses: int
    win_pct: float
    runs_scored: int
    runs_allowed: int
    run_differential: int

    class Config:
        from_attributes = True


# ----- Config -----

class TierResponse(BaseModel):
    label: str
    threshold: float
    points: float


class RetentionConfigResponse(BaseModel):
    weights: Dict[str, float]
    factor_max_points: float
    grade_scale_factor: float
    grade_offset: float
    output_range: List[float]
    grade_bands: Dict[str, float]
    innings_per_game: int
    qualification: Dict[str, float]
    standing_points: Dict[str, float]
    postseason_points: Dict[str, float]
    tiers: Dict[str, List[TierResponse]]
    auto_flagging_enabled: bool
    auto_flag_tiers: List[Dict[str, Union[str, float, int]]]
    draft_expectations_enabled: bool
    draft_bands: List[Dict[str, Union[str, float, int, None]]]
