from clb_retention.schemas.season import (
    HittingTotals,
    PitchingTotals,
    FieldingTotals,
    PlayerSeasonAggregate,
    HeadToHeadRecord,
    TeamSeasonAggregate,
    LineupUsage,
    BoxScoreLineup,
)
from clb_retention.schemas.retention import (
    PlayerInputBase,
    PlayerInputUpdate,
    PlayerInputResponse,
    TeamInputBase,
    TeamInputUpdate,
    TeamInputResponse,
    RetentionGradesRequest,
    RetentionGradesResponse,
    GradeResponse,
    StandingsRequest,
    StandingRowResponse,
    RetentionConfigResponse,
)

__all__ = [
    "HittingTotals",
    "PitchingTotals",
    "FieldingTotals",
    "PlayerSeasonAggregate",
    "HeadToHeadRecord",
    "TeamSeasonAggregate",
    "LineupUsage",
    "BoxScoreLineup",
    "PlayerInputBase",
    "PlayerInputUpdate",
    "PlayerInputResponse",
    "TeamInputBase",
    "TeamInputUpdate",
    "TeamInputResponse",
    "RetentionGradesRequest",
    "RetentionGradesResponse",
    "GradeResponse",
    "StandingsRequest",
    "StandingRowResponse",
    "RetentionConfigResponse",
]
