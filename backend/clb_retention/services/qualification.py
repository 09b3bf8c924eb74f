"""Minimum-sample cutoffs that scale with the season's actual length."""

import logging
from dataclasses import dataclass
from typing import Mapping

from clb_retention.schemas.season import TeamSeasonAggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualificationConfig:
    nominal_season_games: float = 14
    min_ab_multiplier: float = 2.1
    min_ip_multiplier: float = 1.0
    min_gp_fraction: float = 0.5


@dataclass(frozen=True)
class QualificationThresholds:
    avg_team_games: float
    min_at_bats: float
    min_innings: float
    min_games: float


class QualificationPolicy:
    """Derives AB / IP / GP cutoffs from average team games played."""

    def __init__(self, config: QualificationConfig):
        self.config = config

    def average_team_games(self, teams: Mapping[str, TeamSeasonAggregate]) -> float:
        """Mean games played over teams that have played, else the nominal season length."""
        played = [t.games_played for t in teams.values() if t.games_played > 0]
        if not played:
            return float(self.config.nominal_season_games)
        return sum(played) / len(played)

    def thresholds(self, avg_team_games: float) -> QualificationThresholds:
        return QualificationThresholds(
            avg_team_games=avg_team_games,
            min_at_bats=avg_team_games * self.config.min_ab_multiplier,
            min_innings=avg_team_games * self.config.min_ip_multiplier,
            min_games=avg_team_games * self.config.min_gp_fraction,
        )

    def for_season(self, teams: Mapping[str, TeamSeasonAggregate]) -> QualificationThresholds:
        thresholds = self.thresholds(self.average_team_games(teams))
        logger.info(
            f"Qualification thresholds: AB={thresholds.min_at_bats:.1f}, "
            f"IP={thresholds.min_innings:.1f}, GP={thresholds.min_games:.1f} "
            f"(avg team games {thresholds.avg_team_games:.1f})"
        )
        return thresholds
