"""Percentile ranking against a sorted reference population."""

import math
from bisect import bisect_left, bisect_right
from typing import Iterable, List, Optional, Sequence

# Neutral rank when there is nobody to compare against
EMPTY_POPULATION_PERCENTILE = 50.0


def is_number(value) -> bool:
    """True for real, non-NaN numbers (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def percentile_rank(value, sorted_population: Sequence[float]) -> float:
    """
    Mid-rank percentile of ``value`` within ``sorted_population``.

    ((count below + 0.5 * count equal) / n) * 100, so every member of a tie
    gets the same percentile regardless of order.

    Args:
        value: The value to rank
        sorted_population: Reference values, ascending

    Returns:
        Percentile in [0, 100]; 50 for an empty population, 0 for a value
        that is not a number.
    """
    if not sorted_population:
        return EMPTY_POPULATION_PERCENTILE
    if not is_number(value):
        return 0.0

    n = len(sorted_population)
    count_below = bisect_left(sorted_population, value)
    count_equal = bisect_right(sorted_population, value) - count_below
    return ((count_below + 0.5 * count_equal) / n) * 100


def inverted_percentile_rank(value, sorted_population: Sequence[float]) -> float:
    """Percentile for lower-is-better stats (ERA, WHIP, opponent AVG)."""
    if sorted_population and not is_number(value):
        return 0.0
    return 100 - percentile_rank(value, sorted_population)


def mean_percentile(percentiles: Iterable[float]) -> Optional[float]:
    """Average of the given percentiles, or None when there are none."""
    values: List[float] = list(percentiles)
    if not values:
        return None
    return sum(values) / len(values)
