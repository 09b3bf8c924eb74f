"""
Team success factor (0-20): regular-season standing plus postseason finish.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from clb_retention.schemas.season import PlayerSeasonAggregate, TeamSeasonAggregate
from clb_retention.services.tiers import KeyedPoints
from clb_retention.utils import ordinal_suffix


CHAMPION = "champion"
RUNNER_UP = "runner_up"
SEMIFINAL = "semifinal"
QUARTERFINAL = "quarterfinal"
MISSED_PLAYOFFS = "missed_playoffs"

_LEADING_NUMBER = re.compile(r'^\s*(\d+(?:\.\d+)?)')

# Checked in order; first keyword hit wins
_FINISH_KEYWORDS = (
    (CHAMPION, ("champion", "1st", "first")),
    (RUNNER_UP, ("runner", "2nd", "second")),
    (SEMIFINAL, ("semi", "3rd", "4th")),
    (QUARTERFINAL, ("quarter", "5th", "6th", "7th", "8th")),
)


@dataclass
class TeamSuccessBreakdown:
    regular_season: float = 0.0
    postseason: float = 0.0
    total: float = 0.0
    details: str = ""


def _finish_for_place(place: int) -> str:
    if place == 1:
        return CHAMPION
    if place == 2:
        return RUNNER_UP
    if 3 <= place <= 4:
        return SEMIFINAL
    if 5 <= place <= 8:
        return QUARTERFINAL
    return MISSED_PLAYOFFS


def parse_postseason_finish(value: Any) -> str:
    """
    Map a free-form postseason result to a finish key.

    Numbers (floored) and strings starting with a number are treated as a
    final placing; other text is matched against keywords. Anything
    unrecognized, including blanks and None, is a missed postseason.
    """
    if value is None or isinstance(value, bool):
        return MISSED_PLAYOFFS
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return MISSED_PLAYOFFS
        return _finish_for_place(math.floor(value))

    text = str(value).strip().lower()
    if not text:
        return MISSED_PLAYOFFS

    match = _LEADING_NUMBER.match(text)
    if match:
        return _finish_for_place(math.floor(float(match.group(1))))

    for finish, keywords in _FINISH_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return finish
    return MISSED_PLAYOFFS


class TeamSuccessCalculator:
    """Scores a player's current team on standing and postseason result."""

    def __init__(self, standing_points: KeyedPoints, postseason_points: KeyedPoints):
        self.standing_points = standing_points
        self.postseason_points = postseason_points

    def postseason_points_for(self, finish: Any) -> float:
        return self.postseason_points.get(parse_postseason_finish(finish), 0.0)

    def calculate(
        self,
        player: PlayerSeasonAggregate,
        teams: Mapping[str, TeamSeasonAggregate],
        standings: Mapping[str, int],
        postseason: Mapping[str, Any],
    ) -> TeamSuccessBreakdown:
        breakdown = TeamSuccessBreakdown()
        team: Optional[TeamSeasonAggregate] = teams.get(player.team) if player.team else None
        if team is None:
            breakdown.details = "Team not found"
            return breakdown

        standing = standings.get(player.team)
        if standing:
            breakdown.regular_season = self.standing_points.get(standing, 0.0)
            breakdown.details = (
                f"Reg: {breakdown.regular_season:.1f} pts "
                f"({ordinal_suffix(standing)} place)"
            )
        else:
            breakdown.details = "Reg: No standing data"

        if player.team in postseason:
            breakdown.postseason = self.postseason_points_for(postseason[player.team])
            breakdown.details += f", Post: {breakdown.postseason:.1f} pts"
        else:
            breakdown.details += ", Post: 0 pts"

        breakdown.total = breakdown.regular_season + breakdown.postseason
        return breakdown
