"""
Tier lookup tables.

Every factor converts a continuous value (a percentile, a share of games,
an average batting slot) into discrete points through an ordered table of
(threshold, points) entries. Tables are evaluated in order and the first
matching entry wins; a value that matches nothing falls through to the last
entry, which acts as the floor.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple


AT_LEAST = "at_least"  # value >= threshold, thresholds descending
AT_MOST = "at_most"    # value <= threshold, thresholds ascending


class ConfigurationError(ValueError):
    """Raised when retention configuration is internally inconsistent."""


@dataclass(frozen=True)
class Tier:
    label: str
    threshold: float
    points: float


@dataclass(frozen=True)
class TierTable:
    """Ordered threshold -> points table."""
    name: str
    tiers: Tuple[Tier, ...]
    compare: str = AT_LEAST

    def __post_init__(self):
        if self.compare not in (AT_LEAST, AT_MOST):
            raise ConfigurationError(
                f"Tier table '{self.name}' has unknown comparison '{self.compare}'"
            )
        if not self.tiers:
            raise ConfigurationError(f"Tier table '{self.name}' has no tiers")

        thresholds = [t.threshold for t in self.tiers]
        for prev, cur in zip(thresholds, thresholds[1:]):
            if self.compare == AT_LEAST and not cur < prev:
                raise ConfigurationError(
                    f"Tier table '{self.name}' thresholds must be strictly descending "
                    f"({prev} then {cur})"
                )
            if self.compare == AT_MOST and not cur > prev:
                raise ConfigurationError(
                    f"Tier table '{self.name}' thresholds must be strictly ascending "
                    f"({prev} then {cur})"
                )

    @classmethod
    def from_dicts(
        cls,
        name: str,
        rows: Iterable[Mapping[str, Any]],
        compare: str = AT_LEAST,
    ) -> "TierTable":
        tiers = tuple(
            Tier(
                label=str(row.get("label", f"tier_{i + 1}")),
                threshold=float(row["threshold"]),
                points=float(row["points"]),
            )
            for i, row in enumerate(rows)
        )
        return cls(name=name, tiers=tiers, compare=compare)

    def _matches(self, value: float, tier: Tier) -> bool:
        if self.compare == AT_LEAST:
            return value >= tier.threshold
        return value <= tier.threshold

    def lookup(self, value: float) -> Tier:
        for tier in self.tiers:
            if self._matches(value, tier):
                return tier
        return self.tiers[-1]

    def points_for(self, value: float) -> float:
        return self.lookup(value).points

    @property
    def max_points(self) -> float:
        return max(t.points for t in self.tiers)


@dataclass(frozen=True)
class KeyedPoints:
    """Exact-key points table (ordinal standings, postseason finishes)."""
    name: str
    entries: Tuple[Tuple[Any, float], ...]

    @classmethod
    def from_mapping(cls, name: str, mapping: Mapping[Any, Any], key_type=None) -> "KeyedPoints":
        entries = []
        for key, points in mapping.items():
            entries.append((key_type(key) if key_type else key, float(points)))
        return cls(name=name, entries=tuple(entries))

    def as_dict(self) -> Dict[Any, float]:
        return dict(self.entries)

    def get(self, key: Any, default: float = 0.0) -> float:
        for k, points in self.entries:
            if k == key:
                return points
        return default

    def contains(self, key: Any) -> bool:
        return any(k == key for k, _ in self.entries)
