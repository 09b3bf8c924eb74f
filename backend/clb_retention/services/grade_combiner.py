"""
Weighted combination of the five factors into the published grade.

    grade = round_half_up((ts*w1 + pt*w2 + perf*w3 + chem*w4 + dir*w5) * scale + offset)

With every factor in [0, 20], weights summing to 1, scale 4.5 and offset 5
the grade lands in [5, 95].
"""

import math
from typing import Tuple

from clb_retention.services.retention_config import FactorWeights, GradeBands
from clb_retention.utils import clamp


EXCELLENT = "excellent"
GOOD = "good"
AVERAGE = "average"
POOR = "poor"


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 away from zero for positives (Python's round() is banker's)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


class GradeCombiner:
    def __init__(
        self,
        weights: FactorWeights,
        grade_bands: GradeBands,
        factor_max_points: float = 20.0,
        scale_factor: float = 4.5,
        offset: float = 5.0,
    ):
        self.weights = weights
        self.grade_bands = grade_bands
        self.factor_max_points = factor_max_points
        self.scale_factor = scale_factor
        self.offset = offset

    @property
    def output_range(self) -> Tuple[float, float]:
        return self.offset, self.factor_max_points * self.scale_factor + self.offset

    def clamp_factor(self, value: float) -> float:
        return clamp(value, 0.0, self.factor_max_points)

    def combine(
        self,
        team_success: float,
        play_time: float,
        performance: float,
        chemistry: float,
        direction: float,
    ) -> int:
        w = self.weights
        weighted = (
            self.clamp_factor(team_success) * w.team_success
            + self.clamp_factor(play_time) * w.play_time
            + self.clamp_factor(performance) * w.performance
            + self.clamp_factor(chemistry) * w.chemistry
            + self.clamp_factor(direction) * w.direction
        )
        low, high = self.output_range
        grade = round_half_up(weighted * self.scale_factor + self.offset)
        return int(clamp(grade, low, high))

    def manual_total(self, chemistry: float, direction: float) -> float:
        """Scaled contribution of the two human-scored factors, one decimal."""
        w = self.weights
        weighted = (
            self.clamp_factor(chemistry) * w.chemistry
            + self.clamp_factor(direction) * w.direction
        )
        return round_half_up(weighted * self.scale_factor, 1)

    def grade_band(self, grade: float) -> str:
        if grade >= self.grade_bands.excellent:
            return EXCELLENT
        if grade >= self.grade_bands.good:
            return GOOD
        if grade >= self.grade_bands.average:
            return AVERAGE
        return POOR
