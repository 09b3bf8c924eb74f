"""
Season aggregate records consumed by the grading engine.

All derived ratios are 0 when their denominator is 0.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


class HittingTotals(BaseModel):
    games: int = 0
    at_bats: int = 0
    hits: int = 0
    home_runs: int = 0
    rbi: int = 0
    walks: int = 0
    strikeouts: int = 0
    hits_robbed: int = 0
    double_plays: int = 0
    total_bases: int = 0

    class Config:
        frozen = True

    @property
    def avg(self) -> float:
        return _ratio(self.hits, self.at_bats)

    @property
    def obp(self) -> float:
        # No HBP/SF in box scores: (H + BB) / (AB + BB)
        return _ratio(self.hits + self.walks, self.at_bats + self.walks)

    @property
    def slg(self) -> float:
        return _ratio(self.total_bases, self.at_bats)

    @property
    def ops(self) -> float:
        return self.obp + self.slg


class PitchingTotals(BaseModel):
    games: int = 0
    innings_pitched: float = 0.0
    batters_faced: int = 0
    hits_allowed: int = 0
    home_runs_allowed: int = 0
    runs_allowed: int = 0
    walks_allowed: int = 0
    strikeouts: int = 0
    wins: int = 0
    losses: int = 0
    saves: int = 0

    class Config:
        frozen = True

    def era(self, innings_per_game: int) -> float:
        """Runs allowed per ``innings_per_game`` innings (all runs count as earned)."""
        return _ratio(self.runs_allowed * innings_per_game, self.innings_pitched)

    @property
    def whip(self) -> float:
        return _ratio(self.hits_allowed + self.walks_allowed, self.innings_pitched)

    @property
    def opponent_avg(self) -> float:
        return _ratio(self.hits_allowed, self.batters_faced)


class FieldingTotals(BaseModel):
    games: int = 0
    nice_plays: int = 0
    errors: int = 0
    stolen_bases: int = 0

    class Config:
        frozen = True

    @property
    def net_defense(self) -> float:
        return _ratio(self.nice_plays - self.errors, self.games)


class PlayerSeasonAggregate(BaseModel):
    name: str
    team: Optional[str] = None
    hitting: HittingTotals = Field(default_factory=HittingTotals)
    pitching: PitchingTotals = Field(default_factory=PitchingTotals)
    fielding: FieldingTotals = Field(default_factory=FieldingTotals)

    class Config:
        frozen = True

    @property
    def has_team(self) -> bool:
        return bool(self.team and self.team.strip())


class HeadToHeadRecord(BaseModel):
    wins: int = 0
    losses: int = 0

    class Config:
        frozen = True

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        return _ratio(self.wins, self.games)


class TeamSeasonAggregate(BaseModel):
    name: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    runs_scored: int = 0
    runs_allowed: int = 0
    head_to_head: Dict[str, HeadToHeadRecord] = Field(default_factory=dict)

    class Config:
        frozen = True

    @property
    def win_pct(self) -> float:
        return _ratio(self.wins, self.games_played)

    @property
    def run_differential(self) -> int:
        return self.runs_scored - self.runs_allowed


class LineupUsage(BaseModel):
    """Games and average batting slot for one player with one team."""
    player_name: str
    team: str
    games: int = Field(0, ge=0)
    average_position: float = 0.0

    class Config:
        frozen = True


class BoxScoreLineup(BaseModel):
    """Batting orders from one game, slot 1 first. Blank names are empty slots."""
    away_team: str
    home_team: str
    away_lineup: List[str] = []
    home_lineup: List[str] = []
