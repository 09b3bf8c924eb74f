"""
Resolved retention configuration.

``RetentionConfig.from_settings`` turns the flat ``Settings`` object into
frozen, validated structures once per process. Components receive the
pieces they need through their constructors.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from clb_retention.services.qualification import QualificationConfig
from clb_retention.services.tiers import (
    AT_LEAST,
    AT_MOST,
    ConfigurationError,
    KeyedPoints,
    TierTable,
)

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 0.001

SITUATION = "situation"
SELF_WORTH = "self_worth"


@dataclass(frozen=True)
class FactorWeights:
    team_success: float = 0.18
    play_time: float = 0.32
    performance: float = 0.17
    chemistry: float = 0.12
    direction: float = 0.21

    @property
    def total(self) -> float:
        return (
            self.team_success + self.play_time + self.performance
            + self.chemistry + self.direction
        )

    def validate(self) -> None:
        if abs(self.total - 1.0) > WEIGHT_TOLERANCE:
            raise ConfigurationError(
                f"Factor weights must sum to 1.0 (got {self.total:.4f})"
            )


@dataclass(frozen=True)
class AutoFlagTier:
    label: str
    percentile: float
    standing_min: int
    standing_max: int
    penalty: float

    def matches(self, offensive_percentile: float, standing: int) -> bool:
        return (
            offensive_percentile >= self.percentile
            and self.standing_min <= standing <= self.standing_max
        )


@dataclass(frozen=True)
class DraftBand:
    """
    Expected-performance band for players acquired in a range of rounds.

    ``situation`` bands treat an overperforming early pick as happy with
    their situation (positive) and an underperformer as likely to leave.
    ``self_worth`` bands invert that: a late pick who overperforms expects
    a better deal elsewhere.
    """
    label: str
    min_round: int
    max_round: Optional[int]
    framing: str
    high_percentile: float
    high_mod: float
    low_percentile: float
    low_mod: float

    def covers(self, draft_round: int) -> bool:
        if draft_round < self.min_round:
            return False
        return self.max_round is None or draft_round <= self.max_round

    def validate(self) -> None:
        if self.framing not in (SITUATION, SELF_WORTH):
            raise ConfigurationError(
                f"Draft band '{self.label}' has unknown framing '{self.framing}'"
            )
        if self.max_round is not None and self.max_round < self.min_round:
            raise ConfigurationError(
                f"Draft band '{self.label}' ends before it starts "
                f"({self.min_round}-{self.max_round})"
            )
        if self.low_percentile > self.high_percentile:
            raise ConfigurationError(
                f"Draft band '{self.label}' low percentile {self.low_percentile} "
                f"is above high percentile {self.high_percentile}"
            )
        if self.framing == SITUATION:
            consistent = self.high_mod >= 0 >= self.low_mod
        else:
            consistent = self.high_mod <= 0 <= self.low_mod
        if not consistent:
            raise ConfigurationError(
                f"Draft band '{self.label}' modifiers (high {self.high_mod:+g}, "
                f"low {self.low_mod:+g}) contradict '{self.framing}' framing"
            )


@dataclass(frozen=True)
class GradeBands:
    excellent: float = 70
    good: float = 55
    average: float = 40

    def validate(self) -> None:
        if not self.excellent > self.good > self.average:
            raise ConfigurationError(
                "Grade bands must be strictly descending "
                f"(excellent={self.excellent}, good={self.good}, average={self.average})"
            )


@dataclass(frozen=True)
class RetentionConfig:
    weights: FactorWeights
    qualification: QualificationConfig
    standing_points: KeyedPoints
    postseason_points: KeyedPoints
    games_played_tiers: TierTable
    lineup_position_tiers: TierTable
    at_bats_per_game_tiers: TierTable
    pitching_usage_tiers: TierTable
    offensive_tiers: TierTable
    defensive_tiers: TierTable
    pitching_tiers: TierTable
    auto_flag_tiers: Tuple[AutoFlagTier, ...] = ()
    draft_bands: Tuple[DraftBand, ...] = ()
    grade_bands: GradeBands = field(default_factory=GradeBands)
    factor_max_points: float = 20.0
    grade_scale_factor: float = 4.5
    grade_offset: float = 5.0
    innings_per_game: int = 7
    pitcher_min_innings: float = 5.0
    include_players_without_teams: bool = False
    auto_flagging_enabled: bool = True
    draft_expectations_enabled: bool = True
    log_auto_flagging: bool = True
    log_draft_expectations: bool = True
    log_progress_every: int = 20

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError on any internally inconsistent setting."""
        self.weights.validate()
        self.grade_bands.validate()

        if self.factor_max_points <= 0:
            raise ConfigurationError("factor_max_points must be positive")
        if self.innings_per_game <= 0:
            raise ConfigurationError("innings_per_game must be positive")

        if len(self.auto_flag_tiers) >= 2:
            tier_1, tier_2 = self.auto_flag_tiers[0], self.auto_flag_tiers[1]
            if not tier_1.penalty < tier_2.penalty:
                raise ConfigurationError(
                    f"Auto-flag tier '{tier_1.label}' ({tier_1.penalty:+g}) must be "
                    f"more severe than '{tier_2.label}' ({tier_2.penalty:+g})"
                )
        for tier in self.auto_flag_tiers:
            if tier.penalty > 0:
                raise ConfigurationError(
                    f"Auto-flag tier '{tier.label}' penalty must not be positive"
                )

        for band in self.draft_bands:
            band.validate()

    @property
    def output_range(self) -> Tuple[float, float]:
        low = self.grade_offset
        high = self.factor_max_points * self.grade_scale_factor + self.grade_offset
        return low, high

    @classmethod
    def from_settings(cls, settings: Any) -> "RetentionConfig":
        """Build and validate the configuration from a ``Settings`` instance."""
        config = cls(
            weights=FactorWeights(
                team_success=settings.weight_team_success,
                play_time=settings.weight_play_time,
                performance=settings.weight_performance,
                chemistry=settings.weight_chemistry,
                direction=settings.weight_direction,
            ),
            qualification=QualificationConfig(
                nominal_season_games=settings.nominal_season_games,
                min_ab_multiplier=settings.min_ab_multiplier,
                min_ip_multiplier=settings.min_ip_multiplier,
                min_gp_fraction=settings.min_gp_fraction,
            ),
            # Env/JSON sources deliver mapping keys as strings
            standing_points=KeyedPoints.from_mapping(
                "standing_points", settings.standing_points, key_type=int
            ),
            postseason_points=KeyedPoints.from_mapping(
                "postseason_points", settings.postseason_points, key_type=str
            ),
            games_played_tiers=TierTable.from_dicts(
                "games_played", settings.games_played_tiers, AT_LEAST
            ),
            lineup_position_tiers=TierTable.from_dicts(
                "lineup_position", settings.lineup_position_tiers, AT_MOST
            ),
            at_bats_per_game_tiers=TierTable.from_dicts(
                "at_bats_per_game", settings.at_bats_per_game_tiers, AT_LEAST
            ),
            pitching_usage_tiers=TierTable.from_dicts(
                "pitching_usage", settings.pitching_usage_tiers, AT_LEAST
            ),
            offensive_tiers=TierTable.from_dicts(
                "offensive", settings.offensive_tiers, AT_LEAST
            ),
            defensive_tiers=TierTable.from_dicts(
                "defensive", settings.defensive_tiers, AT_LEAST
            ),
            pitching_tiers=TierTable.from_dicts(
                "pitching", settings.pitching_tiers, AT_LEAST
            ),
            auto_flag_tiers=_auto_flag_tiers(settings.auto_flag_tiers),
            draft_bands=_draft_bands(settings.draft_bands),
            grade_bands=GradeBands(
                excellent=settings.grade_band_excellent,
                good=settings.grade_band_good,
                average=settings.grade_band_average,
            ),
            factor_max_points=settings.factor_max_points,
            grade_scale_factor=settings.grade_scale_factor,
            grade_offset=settings.grade_offset,
            innings_per_game=settings.innings_per_game,
            pitcher_min_innings=settings.pitcher_min_innings,
            include_players_without_teams=settings.include_players_without_teams,
            auto_flagging_enabled=settings.auto_flagging_enabled,
            draft_expectations_enabled=settings.draft_expectations_enabled,
            log_auto_flagging=settings.log_auto_flagging,
            log_draft_expectations=settings.log_draft_expectations,
            log_progress_every=settings.log_progress_every,
        )
        logger.debug(f"Retention config resolved, output range {config.output_range}")
        return config


def _auto_flag_tiers(rows: Iterable[Mapping[str, Any]]) -> Tuple[AutoFlagTier, ...]:
    return tuple(
        AutoFlagTier(
            label=str(row.get("label", f"tier_{i + 1}")),
            percentile=float(row["percentile"]),
            standing_min=int(row["standing_min"]),
            standing_max=int(row["standing_max"]),
            penalty=float(row["penalty"]),
        )
        for i, row in enumerate(rows)
    )


def _draft_bands(rows: Iterable[Mapping[str, Any]]) -> Tuple[DraftBand, ...]:
    bands = []
    for row in rows:
        max_round = row.get("max_round")
        bands.append(DraftBand(
            label=str(row["label"]),
            min_round=int(row["min_round"]),
            max_round=int(max_round) if max_round is not None else None,
            framing=str(row["framing"]),
            high_percentile=float(row["high_percentile"]),
            high_mod=float(row["high_mod"]),
            low_percentile=float(row["low_percentile"]),
            low_mod=float(row["low_mod"]),
        ))
    return tuple(bands)
