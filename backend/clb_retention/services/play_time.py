"""
Play time factor (0-20): share of the current team's games plus usage quality.

Games are counted with the player's current team only. Box-score lineup
data gives that count and the average batting slot directly; without it
the hitting games total is used and usage is estimated from AB per game
(hitters) or IP per team game (pitchers).
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from clb_retention.schemas.season import (
    LineupUsage,
    PlayerSeasonAggregate,
    TeamSeasonAggregate,
)
from clb_retention.services.tiers import TierTable


LineupKey = Tuple[str, str]


def lineup_key(player_name: str, team: str) -> LineupKey:
    return (player_name, team)


@dataclass
class PlayTimeBreakdown:
    games_played: float = 0.0
    usage_quality: float = 0.0
    total: float = 0.0
    details: str = ""


class PlayTimeCalculator:
    def __init__(
        self,
        games_played_tiers: TierTable,
        lineup_position_tiers: TierTable,
        at_bats_per_game_tiers: TierTable,
        pitching_usage_tiers: TierTable,
        pitcher_min_innings: float = 5.0,
    ):
        self.games_played_tiers = games_played_tiers
        self.lineup_position_tiers = lineup_position_tiers
        self.at_bats_per_game_tiers = at_bats_per_game_tiers
        self.pitching_usage_tiers = pitching_usage_tiers
        self.pitcher_min_innings = pitcher_min_innings

    def is_pitcher(self, player: PlayerSeasonAggregate) -> bool:
        return player.pitching.innings_pitched >= self.pitcher_min_innings

    def calculate(
        self,
        player: PlayerSeasonAggregate,
        teams: Mapping[str, TeamSeasonAggregate],
        lineup_usage: Optional[Mapping[LineupKey, LineupUsage]] = None,
    ) -> PlayTimeBreakdown:
        breakdown = PlayTimeBreakdown()
        team = teams.get(player.team) if player.team else None
        if team is None:
            breakdown.details = f"Team not found: {player.team}"
            return breakdown

        team_games = team.games_played
        if team_games <= 0:
            breakdown.details = "Team has 0 games played"
            return breakdown

        usage = None
        if lineup_usage:
            usage = lineup_usage.get(lineup_key(player.name, player.team))

        player_games = usage.games if usage is not None else player.hitting.games
        if player_games <= 0:
            breakdown.details = f"No games played with {player.team}"
            return breakdown

        share = player_games / team_games
        breakdown.games_played = self.games_played_tiers.points_for(share)
        games_text = (
            f"GP: {breakdown.games_played:.1f} pts "
            f"({player_games}/{team_games} games, {share * 100:.0f}%)"
        )

        if usage is not None:
            breakdown.usage_quality = self.lineup_position_tiers.points_for(usage.average_position)
            usage_text = (
                f"Lineup: {usage.average_position:.1f} spot "
                f"({breakdown.usage_quality:.1f} pts)"
            )
        elif self.is_pitcher(player):
            ip_per_game = player.pitching.innings_pitched / team_games
            breakdown.usage_quality = self.pitching_usage_tiers.points_for(ip_per_game)
            usage_text = (
                f"IP/G: {ip_per_game:.2f} "
                f"({breakdown.usage_quality:.1f} pts, no lineup data)"
            )
        else:
            ab_per_game = player.hitting.at_bats / player_games
            breakdown.usage_quality = self.at_bats_per_game_tiers.points_for(ab_per_game)
            usage_text = (
                f"AB/G: {ab_per_game:.1f} "
                f"({breakdown.usage_quality:.1f} pts, no lineup data)"
            )

        breakdown.details = f"{games_text}, {usage_text}"
        breakdown.total = breakdown.games_played + breakdown.usage_quality
        return breakdown
