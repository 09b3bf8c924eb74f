"""
Performance factor (0-20).

Offensive (0-14), defensive (0-3) and pitching (0-3) contributions are each
a percentile against qualified league peers run through a tier table. The
auto-flagging and draft-expectation modifiers then adjust the sum, and the
result is clamped to the factor range.

Percentiles use every qualified player in the league, regardless of team.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from clb_retention.schemas.season import PlayerSeasonAggregate
from clb_retention.services.modifiers import (
    AutoFlaggingPolicy,
    DraftExpectationPolicy,
)
from clb_retention.services.percentile import (
    inverted_percentile_rank,
    mean_percentile,
    percentile_rank,
)
from clb_retention.services.qualification import QualificationThresholds
from clb_retention.services.stat_pool import (
    OFFENSIVE_CATEGORIES,
    PITCHING_CATEGORIES,
    LeagueStatPool,
    StatCategory,
    offensive_values,
    pitching_values,
)
from clb_retention.services.tiers import TierTable
from clb_retention.utils import clamp


@dataclass
class PerformanceBreakdown:
    offensive: float = 0.0
    defensive: float = 0.0
    pitching: float = 0.0
    offensive_percentile: Optional[float] = None
    auto_flag_penalty: float = 0.0
    expectation_mod: float = 0.0
    base_total: float = 0.0
    total: float = 0.0
    details: str = ""


class PerformanceCalculator:
    def __init__(
        self,
        offensive_tiers: TierTable,
        defensive_tiers: TierTable,
        pitching_tiers: TierTable,
        auto_flagging: AutoFlaggingPolicy,
        draft_expectations: DraftExpectationPolicy,
        innings_per_game: int = 7,
        max_points: float = 20.0,
    ):
        self.offensive_tiers = offensive_tiers
        self.defensive_tiers = defensive_tiers
        self.pitching_tiers = pitching_tiers
        self.auto_flagging = auto_flagging
        self.draft_expectations = draft_expectations
        self.innings_per_game = innings_per_game
        self.max_points = max_points

    def offensive_percentile(
        self, player: PlayerSeasonAggregate, pool: LeagueStatPool
    ) -> Optional[float]:
        """Mean percentile across offensive categories with a non-empty pool."""
        values = offensive_values(player)
        return mean_percentile(
            percentile_rank(values[category], pool.values(category))
            for category in OFFENSIVE_CATEGORIES
            if pool.size(category) > 0
        )

    def pitching_percentile(
        self, player: PlayerSeasonAggregate, pool: LeagueStatPool
    ) -> Optional[float]:
        values = pitching_values(player, self.innings_per_game)
        return mean_percentile(
            inverted_percentile_rank(values[category], pool.values(category))
            for category in PITCHING_CATEGORIES
            if pool.size(category) > 0
        )

    def calculate(
        self,
        player: PlayerSeasonAggregate,
        pool: LeagueStatPool,
        thresholds: QualificationThresholds,
        standing: Optional[int] = None,
        acquisition_cost: Any = None,
    ) -> PerformanceBreakdown:
        breakdown = PerformanceBreakdown()
        parts: List[str] = []

        # Offense
        hitting = player.hitting
        if hitting.at_bats >= thresholds.min_at_bats:
            pct = self.offensive_percentile(player, pool)
            breakdown.offensive_percentile = pct
            if pct is None:
                parts.append("Hit: No qualified hitters (0.0 pts)")
            else:
                breakdown.offensive = self.offensive_tiers.points_for(pct)
                parts.append(f"Hit: {pct:.0f}% ({breakdown.offensive:.1f} pts)")
        else:
            parts.append(
                f"Hit: Not qualified ({hitting.at_bats}/{thresholds.min_at_bats:.1f} AB)"
            )

        # Defense
        fielding = player.fielding
        if fielding.games > 0 and fielding.games >= thresholds.min_games:
            net_pool = pool.values(StatCategory.NET_DEFENSE)
            if net_pool:
                def_pct = percentile_rank(fielding.net_defense, net_pool)
                breakdown.defensive = self.defensive_tiers.points_for(def_pct)
                parts.append(f"Def: {def_pct:.0f}% ({breakdown.defensive:.1f} pts)")
            else:
                parts.append("Def: No qualified fielders (0.0 pts)")
        else:
            parts.append(
                f"Def: Not qualified ({fielding.games}/{thresholds.min_games:.1f} GP)"
            )

        # Pitching
        innings = player.pitching.innings_pitched
        if innings > 0 and innings >= thresholds.min_innings:
            pitch_pct = self.pitching_percentile(player, pool)
            if pitch_pct is None:
                parts.append("Pitch: No qualified pitchers (0.0 pts)")
            else:
                breakdown.pitching = self.pitching_tiers.points_for(pitch_pct)
                parts.append(f"Pitch: {pitch_pct:.0f}% ({breakdown.pitching:.1f} pts)")
        else:
            parts.append(
                f"Pitch: Not qualified ({innings:.1f}/{thresholds.min_innings:.1f} IP)"
            )

        breakdown.base_total = breakdown.offensive + breakdown.defensive + breakdown.pitching

        # Only offensive qualification gates the modifiers
        flag = self.auto_flagging.evaluate(
            breakdown.offensive_percentile, standing, player_name=player.name
        )
        if flag.fired:
            breakdown.auto_flag_penalty = flag.points
            parts.append(flag.details)

        expectation = self.draft_expectations.evaluate(
            breakdown.offensive_percentile, acquisition_cost, player_name=player.name
        )
        if expectation.fired:
            breakdown.expectation_mod = expectation.points
            parts.append(expectation.details)

        breakdown.total = clamp(
            breakdown.base_total + breakdown.auto_flag_penalty + breakdown.expectation_mod,
            0.0,
            self.max_points,
        )
        breakdown.details = " | ".join(parts)
        return breakdown
