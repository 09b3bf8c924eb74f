"""
Retention grade engine.

One call grades a whole league season:

1. Qualification thresholds from average team games played
2. League stat pools from qualified players
3. Standings (given, or computed with tie-breakers)
4. Team success, play time and performance per player
5. Human modifiers, chemistry and direction, then the weighted grade
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from clb_retention.schemas.season import (
    BoxScoreLineup,
    LineupUsage,
    PlayerSeasonAggregate,
    TeamSeasonAggregate,
)
from clb_retention.services.grade_combiner import GradeCombiner
from clb_retention.services.lineup_usage import aggregate_lineups
from clb_retention.services.modifiers import AutoFlaggingPolicy, DraftExpectationPolicy
from clb_retention.services.performance import PerformanceBreakdown, PerformanceCalculator
from clb_retention.services.play_time import (
    LineupKey,
    PlayTimeBreakdown,
    PlayTimeCalculator,
)
from clb_retention.services.qualification import QualificationPolicy, QualificationThresholds
from clb_retention.services.retention_config import RetentionConfig
from clb_retention.services.standings import StandingsCalculator
from clb_retention.services.stat_pool import LeagueStatPool, build_league_stat_pool
from clb_retention.services.team_success import TeamSuccessBreakdown, TeamSuccessCalculator

logger = logging.getLogger(__name__)


@dataclass
class PlayerManualInputs:
    """Human-entered values for one player."""
    draft_value: Any = None
    chemistry: float = 0.0
    team_success_modifier: float = 0.0
    play_time_modifier: float = 0.0
    performance_modifier: float = 0.0


@dataclass
class TeamManualInputs:
    direction: float = 0.0
    postseason_finish: Any = None


@dataclass
class GradeBreakdown:
    player_name: str
    team: Optional[str]
    team_success: TeamSuccessBreakdown
    play_time: PlayTimeBreakdown
    performance: PerformanceBreakdown
    auto_total: float
    team_success_modifier: float
    play_time_modifier: float
    performance_modifier: float
    team_success_total: float
    play_time_total: float
    performance_total: float
    chemistry: float
    direction: float
    draft_value: Any
    manual_total: float
    final_grade: int
    grade_band: str
    details: str


@dataclass
class RetentionRun:
    grades: List[GradeBreakdown]
    thresholds: QualificationThresholds
    pool_sizes: Dict[str, int]
    standings: Dict[str, int] = field(default_factory=dict)


class RetentionEngine:
    """Wires the factor calculators from a single resolved configuration."""

    def __init__(self, config: RetentionConfig):
        self.config = config
        self.qualification = QualificationPolicy(config.qualification)
        self.standings = StandingsCalculator()
        self.team_success = TeamSuccessCalculator(
            config.standing_points, config.postseason_points
        )
        self.play_time = PlayTimeCalculator(
            games_played_tiers=config.games_played_tiers,
            lineup_position_tiers=config.lineup_position_tiers,
            at_bats_per_game_tiers=config.at_bats_per_game_tiers,
            pitching_usage_tiers=config.pitching_usage_tiers,
            pitcher_min_innings=config.pitcher_min_innings,
        )
        self.performance = PerformanceCalculator(
            offensive_tiers=config.offensive_tiers,
            defensive_tiers=config.defensive_tiers,
            pitching_tiers=config.pitching_tiers,
            auto_flagging=AutoFlaggingPolicy(
                config.auto_flag_tiers,
                enabled=config.auto_flagging_enabled,
                log_firings=config.log_auto_flagging,
            ),
            draft_expectations=DraftExpectationPolicy(
                config.draft_bands,
                enabled=config.draft_expectations_enabled,
                log_firings=config.log_draft_expectations,
            ),
            innings_per_game=config.innings_per_game,
            max_points=config.factor_max_points,
        )
        self.combiner = GradeCombiner(
            weights=config.weights,
            grade_bands=config.grade_bands,
            factor_max_points=config.factor_max_points,
            scale_factor=config.grade_scale_factor,
            offset=config.grade_offset,
        )

    def _postseason_finishes(
        self,
        postseason: Optional[Mapping[str, Any]],
        team_inputs: Mapping[str, TeamManualInputs],
    ) -> Dict[str, Any]:
        finishes = {
            team: inputs.postseason_finish
            for team, inputs in team_inputs.items()
            if inputs.postseason_finish not in (None, "")
        }
        finishes.update(postseason or {})
        return finishes

    def grade_player(
        self,
        player: PlayerSeasonAggregate,
        *,
        pool: LeagueStatPool,
        thresholds: QualificationThresholds,
        teams: Mapping[str, TeamSeasonAggregate],
        standings: Mapping[str, int],
        postseason: Mapping[str, Any],
        lineup_usage: Mapping[LineupKey, LineupUsage],
        manual: PlayerManualInputs,
        direction: float,
    ) -> GradeBreakdown:
        team_success = self.team_success.calculate(player, teams, standings, postseason)
        play_time = self.play_time.calculate(player, teams, lineup_usage)
        standing = standings.get(player.team) if player.team else None
        performance = self.performance.calculate(
            player, pool, thresholds, standing=standing, acquisition_cost=manual.draft_value
        )

        combiner = self.combiner
        ts_total = combiner.clamp_factor(team_success.total + manual.team_success_modifier)
        pt_total = combiner.clamp_factor(play_time.total + manual.play_time_modifier)
        perf_total = combiner.clamp_factor(performance.total + manual.performance_modifier)
        chemistry = combiner.clamp_factor(manual.chemistry)
        direction = combiner.clamp_factor(direction)

        final_grade = combiner.combine(ts_total, pt_total, perf_total, chemistry, direction)

        return GradeBreakdown(
            player_name=player.name,
            team=player.team,
            team_success=team_success,
            play_time=play_time,
            performance=performance,
            auto_total=team_success.total + play_time.total + performance.total,
            team_success_modifier=manual.team_success_modifier,
            play_time_modifier=manual.play_time_modifier,
            performance_modifier=manual.performance_modifier,
            team_success_total=ts_total,
            play_time_total=pt_total,
            performance_total=perf_total,
            chemistry=chemistry,
            direction=direction,
            draft_value=manual.draft_value,
            manual_total=combiner.manual_total(chemistry, direction),
            final_grade=final_grade,
            grade_band=combiner.grade_band(final_grade),
            details=(
                f"Success: {team_success.details} | "
                f"Time: {play_time.details} | "
                f"Performance: {performance.details}"
            ),
        )

    def compute_grades(
        self,
        players: Iterable[PlayerSeasonAggregate],
        teams: Iterable[TeamSeasonAggregate],
        standings: Optional[Mapping[str, int]] = None,
        postseason: Optional[Mapping[str, Any]] = None,
        lineup_usage: Optional[Mapping[LineupKey, LineupUsage]] = None,
        box_scores: Optional[Iterable[BoxScoreLineup]] = None,
        player_inputs: Optional[Mapping[str, PlayerManualInputs]] = None,
        team_inputs: Optional[Mapping[str, TeamManualInputs]] = None,
        sort: bool = True,
    ) -> RetentionRun:
        """
        Grade every player for one season.

        Args:
            players: Season aggregates for every player
            teams: Season aggregates for every team
            standings: Team -> standing; computed from ``teams`` when omitted
            postseason: Team -> free-form postseason finish
            lineup_usage: Pre-aggregated lineup usage keyed by (player, team)
            box_scores: Raw batting orders, used when ``lineup_usage`` is omitted
            player_inputs: Player name -> human-entered inputs
            team_inputs: Team name -> direction score and postseason finish
            sort: Order the grades by team, then player name

        Returns:
            RetentionRun with one GradeBreakdown per graded player
        """
        players = list(players)
        team_map = {team.name: team for team in teams}
        player_inputs = player_inputs or {}
        team_inputs = team_inputs or {}

        logger.info(f"Computing retention grades for {len(players)} players on {len(team_map)} teams")

        thresholds = self.qualification.for_season(team_map)
        pool = build_league_stat_pool(
            players,
            thresholds,
            innings_per_game=self.config.innings_per_game,
            include_players_without_teams=self.config.include_players_without_teams,
        )

        if standings is None:
            standings = self.standings.standings_map(team_map.values())
        else:
            standings = dict(standings)

        if lineup_usage is None and box_scores is not None:
            lineup_usage = aggregate_lineups(box_scores)
        lineup_usage = lineup_usage or {}

        finishes = self._postseason_finishes(postseason, team_inputs)

        grades: List[GradeBreakdown] = []
        default_inputs = PlayerManualInputs()
        progress_every = self.config.log_progress_every
        for player in players:
            if not self.config.include_players_without_teams and not player.has_team:
                continue

            team_input = team_inputs.get(player.team) if player.team else None
            grades.append(self.grade_player(
                player,
                pool=pool,
                thresholds=thresholds,
                teams=team_map,
                standings=standings,
                postseason=finishes,
                lineup_usage=lineup_usage,
                manual=player_inputs.get(player.name, default_inputs),
                direction=team_input.direction if team_input else 0.0,
            ))

            if progress_every and len(grades) % progress_every == 0:
                logger.info(f"Processed {len(grades)}/{len(players)} players")

        if sort:
            grades.sort(key=lambda g: (g.team or "", g.player_name))

        logger.info(f"Retention grades complete: {len(grades)} players graded")
        return RetentionRun(
            grades=grades,
            thresholds=thresholds,
            pool_sizes=pool.sizes(),
            standings=dict(standings),
        )
