"""
League standings with tie-breakers.

Order: win percentage, head-to-head win percentage (when both teams have a
record against each other), run differential, then team name. Teams without
a game played are left out.
"""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Dict, Iterable, List

from clb_retention.schemas.season import TeamSeasonAggregate


@dataclass
class StandingRow:
    standing: int
    display_rank: str
    team: str
    wins: int
    losses: int
    win_pct: float
    runs_scored: int
    runs_allowed: int
    run_differential: int


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class StandingsCalculator:
    def compare(self, a: TeamSeasonAggregate, b: TeamSeasonAggregate) -> int:
        """Negative when ``a`` ranks above ``b``."""
        if a.win_pct != b.win_pct:
            return _sign(b.win_pct - a.win_pct)

        h2h_a = a.head_to_head.get(b.name)
        h2h_b = b.head_to_head.get(a.name)
        if h2h_a is not None and h2h_b is not None and h2h_a.win_pct != h2h_b.win_pct:
            return _sign(h2h_b.win_pct - h2h_a.win_pct)

        if a.run_differential != b.run_differential:
            return _sign(b.run_differential - a.run_differential)

        return (a.name > b.name) - (a.name < b.name)

    def _separated_by_tiebreak(self, team: TeamSeasonAggregate, above: TeamSeasonAggregate) -> bool:
        h2h_team = team.head_to_head.get(above.name)
        h2h_above = above.head_to_head.get(team.name)
        if h2h_team is not None and h2h_above is not None and h2h_team.games > 0:
            if h2h_team.win_pct != h2h_above.win_pct:
                return True
        return team.run_differential != above.run_differential

    def rank(self, teams: Iterable[TeamSeasonAggregate]) -> List[StandingRow]:
        ordered = sorted(
            (t for t in teams if t.games_played > 0),
            key=cmp_to_key(self.compare),
        )

        rows: List[StandingRow] = []
        current_rank = 1
        for i, team in enumerate(ordered):
            display = str(i + 1)
            if i == 0:
                current_rank = 1
            else:
                above = ordered[i - 1]
                tied = (
                    team.win_pct == above.win_pct
                    and team.wins == above.wins
                    and team.losses == above.losses
                )
                if tied and not self._separated_by_tiebreak(team, above):
                    display = f"T-{current_rank}"
                else:
                    current_rank = i + 1

            rows.append(StandingRow(
                standing=i + 1,
                display_rank=display,
                team=team.name,
                wins=team.wins,
                losses=team.losses,
                win_pct=team.win_pct,
                runs_scored=team.runs_scored,
                runs_allowed=team.runs_allowed,
                run_differential=team.run_differential,
            ))
        return rows

    def standings_map(self, teams: Iterable[TeamSeasonAggregate]) -> Dict[str, int]:
        """Team name -> integer standing (sorted position, 1-based)."""
        return {row.team: row.standing for row in self.rank(teams)}
