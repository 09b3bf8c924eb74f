# Services module
from clb_retention.services.tiers import ConfigurationError
from clb_retention.services.retention_config import RetentionConfig
from clb_retention.services.retention_engine import (
    GradeBreakdown,
    PlayerManualInputs,
    RetentionEngine,
    RetentionRun,
    TeamManualInputs,
)
from clb_retention.services.standings import StandingsCalculator
from clb_retention.services.lineup_usage import aggregate_lineups

__all__ = [
    "ConfigurationError",
    "RetentionConfig",
    "GradeBreakdown",
    "PlayerManualInputs",
    "RetentionEngine",
    "RetentionRun",
    "TeamManualInputs",
    "StandingsCalculator",
    "aggregate_lineups",
]
