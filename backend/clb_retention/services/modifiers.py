"""
Rule-based performance modifiers.

Both policies key off the player's offensive percentile:

- Auto-flagging docks strong hitters on bottom-of-the-table teams, who are
  the most likely to look for a new team.
- Draft expectations compare output with what the team paid for the
  player (acquisition round). Early picks are judged on their situation,
  later picks on their sense of self-worth, so the sign flips.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from clb_retention.services.retention_config import SITUATION, AutoFlagTier, DraftBand
from clb_retention.utils import ordinal_suffix, parse_leading_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModifierOutcome:
    points: float = 0.0
    details: str = ""

    @property
    def fired(self) -> bool:
        return self.points != 0


NO_MODIFIER = ModifierOutcome()


class AutoFlaggingPolicy:
    def __init__(self, tiers: Sequence[AutoFlagTier], enabled: bool = True, log_firings: bool = True):
        self.tiers = tuple(tiers)
        self.enabled = enabled
        self.log_firings = log_firings

    def evaluate(
        self,
        offensive_percentile: Optional[float],
        standing: Optional[int],
        player_name: str = "",
    ) -> ModifierOutcome:
        """First matching tier wins; at most one penalty applies."""
        if not self.enabled or offensive_percentile is None or not standing:
            return NO_MODIFIER

        for tier in self.tiers:
            if tier.matches(offensive_percentile, standing):
                if self.log_firings:
                    logger.info(
                        f"Auto-flagging: {player_name} ({ordinal_suffix(standing)} place, "
                        f"{offensive_percentile:.0f}% percentile) = {tier.penalty:g} pts"
                    )
                return ModifierOutcome(
                    points=tier.penalty,
                    details=f"Auto-Perf Mod: {tier.penalty:g} pts (flight risk)",
                )
        return NO_MODIFIER


class DraftExpectationPolicy:
    def __init__(self, bands: Sequence[DraftBand], enabled: bool = True, log_firings: bool = True):
        self.bands = tuple(bands)
        self.enabled = enabled
        self.log_firings = log_firings

    def band_for(self, draft_round: int) -> Optional[DraftBand]:
        for band in self.bands:
            if band.covers(draft_round):
                return band
        return None

    def evaluate(
        self,
        offensive_percentile: Optional[float],
        acquisition_cost: Any,
        player_name: str = "",
    ) -> ModifierOutcome:
        if not self.enabled or offensive_percentile is None:
            return NO_MODIFIER

        draft_round = parse_leading_int(acquisition_cost)
        if draft_round is None or draft_round < 1:
            return NO_MODIFIER

        band = self.band_for(draft_round)
        if band is None:
            return NO_MODIFIER

        if offensive_percentile >= band.high_percentile:
            points = band.high_mod
            reason = "good situation" if band.framing == SITUATION else "feels undervalued"
        elif offensive_percentile < band.low_percentile:
            points = band.low_mod
            reason = "bad situation" if band.framing == SITUATION else "team overvalued"
        else:
            return NO_MODIFIER

        if points == 0:
            return NO_MODIFIER

        if self.log_firings:
            logger.info(
                f"Draft expectations: {player_name} round {draft_round} pick "
                f"({offensive_percentile:.0f}% percentile, {reason}) = {points:+.1f} pts"
            )
        return ModifierOutcome(points=points, details=f"Auto-Value Mod: {points:+.1f} pts")
