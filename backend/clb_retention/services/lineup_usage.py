"""Box-score batting orders -> games and average lineup slot per player and team."""

import logging
from typing import Dict, Iterable, List, Tuple

from clb_retention.schemas.season import BoxScoreLineup, LineupUsage
from clb_retention.services.play_time import LineupKey, lineup_key

logger = logging.getLogger(__name__)


def aggregate_lineups(box_scores: Iterable[BoxScoreLineup]) -> Dict[LineupKey, LineupUsage]:
    """
    Count games and average batting slot for every (player, team) pair.

    Slot numbers are 1-based positions in the batting order. A player traded
    mid-season gets one entry per team, so games with a former team never
    count toward the current one.
    """
    slots: Dict[LineupKey, List[int]] = {}
    games = 0

    for box in box_scores:
        games += 1
        sides: Tuple[Tuple[str, List[str]], ...] = (
            (box.away_team, box.away_lineup),
            (box.home_team, box.home_lineup),
        )
        for team, lineup in sides:
            for index, name in enumerate(lineup):
                name = (name or "").strip()
                if not name:
                    continue
                slots.setdefault(lineup_key(name, team), []).append(index + 1)

    usage = {
        key: LineupUsage(
            player_name=key[0],
            team=key[1],
            games=len(positions),
            average_position=sum(positions) / len(positions),
        )
        for key, positions in slots.items()
    }
    logger.info(f"Aggregated lineups from {games} box scores: {len(usage)} player/team entries")
    return usage
