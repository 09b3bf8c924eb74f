"""
League-wide reference pools for percentile ranking.

Only qualified players contribute: a player must reach the AB cutoff to
enter the offensive pools, the IP cutoff for the pitching pools and the
fielding-games cutoff for net defense. Pools are sorted once and frozen.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from clb_retention.schemas.season import PlayerSeasonAggregate
from clb_retention.services.qualification import QualificationThresholds

logger = logging.getLogger(__name__)


class StatCategory(str, Enum):
    AVG = "avg"
    OBP = "obp"
    SLG = "slg"
    OPS = "ops"
    HR = "hr"
    RBI = "rbi"
    ERA = "era"
    WHIP = "whip"
    OPPONENT_AVG = "opponent_avg"
    NET_DEFENSE = "net_defense"


OFFENSIVE_CATEGORIES = (
    StatCategory.AVG,
    StatCategory.OBP,
    StatCategory.SLG,
    StatCategory.OPS,
    StatCategory.HR,
    StatCategory.RBI,
)

# Lower is better; ranked with the inverted percentile
PITCHING_CATEGORIES = (
    StatCategory.ERA,
    StatCategory.WHIP,
    StatCategory.OPPONENT_AVG,
)


@dataclass(frozen=True)
class LeagueStatPool:
    pools: Mapping[StatCategory, Tuple[float, ...]]

    def values(self, category: StatCategory) -> Tuple[float, ...]:
        return self.pools.get(category, ())

    def size(self, category: StatCategory) -> int:
        return len(self.values(category))

    def sizes(self) -> Dict[str, int]:
        return {category.value: self.size(category) for category in StatCategory}


def offensive_values(player: PlayerSeasonAggregate) -> Dict[StatCategory, float]:
    h = player.hitting
    return {
        StatCategory.AVG: h.avg,
        StatCategory.OBP: h.obp,
        StatCategory.SLG: h.slg,
        StatCategory.OPS: h.ops,
        StatCategory.HR: h.home_runs,
        StatCategory.RBI: h.rbi,
    }


def pitching_values(player: PlayerSeasonAggregate, innings_per_game: int) -> Dict[StatCategory, float]:
    p = player.pitching
    return {
        StatCategory.ERA: p.era(innings_per_game),
        StatCategory.WHIP: p.whip,
        StatCategory.OPPONENT_AVG: p.opponent_avg,
    }


def build_league_stat_pool(
    players: Iterable[PlayerSeasonAggregate],
    thresholds: QualificationThresholds,
    innings_per_game: int = 7,
    include_players_without_teams: bool = False,
) -> LeagueStatPool:
    """
    Collect qualified players' stats into sorted, immutable pools.

    Args:
        players: Season aggregates for every player in the league
        thresholds: Qualification cutoffs for this season
        innings_per_game: Game length used for ERA
        include_players_without_teams: Keep players with no current team

    Returns:
        LeagueStatPool with one ascending tuple per StatCategory
    """
    collected: Dict[StatCategory, List[float]] = {c: [] for c in StatCategory}
    excluded = 0

    for player in players:
        if not include_players_without_teams and not player.has_team:
            excluded += 1
            continue

        if player.hitting.at_bats >= thresholds.min_at_bats:
            for category, value in offensive_values(player).items():
                collected[category].append(value)

        if player.pitching.innings_pitched >= thresholds.min_innings:
            for category, value in pitching_values(player, innings_per_game).items():
                collected[category].append(value)

        fielding_games = player.fielding.games
        if fielding_games > 0 and fielding_games >= thresholds.min_games:
            collected[StatCategory.NET_DEFENSE].append(player.fielding.net_defense)

    if excluded:
        logger.info(f"Excluded {excluded} players without a team from stat pools")

    pool = LeagueStatPool(
        pools=MappingProxyType({c: tuple(sorted(v)) for c, v in collected.items()})
    )
    logger.info(f"Stat pools built: {pool.sizes()}")
    return pool
