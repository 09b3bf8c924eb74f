"""
Pytest fixtures for CLB retention grade tests.
"""
import pytest
from typing import Dict, Optional

from clb_retention.config import Settings
from clb_retention.schemas.season import (
    FieldingTotals,
    HeadToHeadRecord,
    HittingTotals,
    PitchingTotals,
    PlayerSeasonAggregate,
    TeamSeasonAggregate,
)
from clb_retention.services.retention_config import RetentionConfig


def build_player(
    name: str = "Test Player",
    team: Optional[str] = "Mario Fireballs",
    *,
    games: int = 14,
    at_bats: int = 42,
    hits: int = 14,
    home_runs: int = 2,
    rbi: int = 8,
    walks: int = 4,
    total_bases: int = 22,
    innings: float = 0.0,
    batters_faced: int = 0,
    hits_allowed: int = 0,
    runs_allowed: int = 0,
    walks_allowed: int = 0,
    fielding_games: Optional[int] = None,
    nice_plays: int = 0,
    errors: int = 0,
) -> PlayerSeasonAggregate:
    """Season aggregate with sensible everyday-hitter defaults."""
    return PlayerSeasonAggregate(
        name=name,
        team=team,
        hitting=HittingTotals(
            games=games,
            at_bats=at_bats,
            hits=hits,
            home_runs=home_runs,
            rbi=rbi,
            walks=walks,
            total_bases=total_bases,
        ),
        pitching=PitchingTotals(
            games=games if innings else 0,
            innings_pitched=innings,
            batters_faced=batters_faced,
            hits_allowed=hits_allowed,
            runs_allowed=runs_allowed,
            walks_allowed=walks_allowed,
        ),
        fielding=FieldingTotals(
            games=games if fielding_games is None else fielding_games,
            nice_plays=nice_plays,
            errors=errors,
        ),
    )


def build_team(
    name: str = "Mario Fireballs",
    *,
    wins: int = 7,
    losses: int = 7,
    runs_scored: int = 70,
    runs_allowed: int = 70,
    games_played: Optional[int] = None,
    head_to_head: Optional[Dict[str, tuple]] = None,
) -> TeamSeasonAggregate:
    """Team aggregate; ``head_to_head`` maps opponent -> (wins, losses)."""
    return TeamSeasonAggregate(
        name=name,
        games_played=wins + losses if games_played is None else games_played,
        wins=wins,
        losses=losses,
        runs_scored=runs_scored,
        runs_allowed=runs_allowed,
        head_to_head={
            opp: HeadToHeadRecord(wins=w, losses=l)
            for opp, (w, l) in (head_to_head or {}).items()
        },
    )


@pytest.fixture
def default_settings() -> Settings:
    """Settings with defaults only (no .env or environment overrides)."""
    return Settings(_env_file=None)


@pytest.fixture
def retention_config(default_settings) -> RetentionConfig:
    return RetentionConfig.from_settings(default_settings)


@pytest.fixture
def player_factory():
    """Factory fixture for creating season aggregates with custom stats."""
    return build_player


@pytest.fixture
def team_factory():
    """Factory fixture for creating team aggregates."""
    return build_team
