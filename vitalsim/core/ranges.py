"""
Static range configuration for the vitals generator and classifier.

Each metric has a normal range and up to two excursion ranges (below and above
normal) used for anomalous draws. All bounds are inclusive.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .constants import (
    HR_NORMAL, HR_LOW_EXCURSION, HR_HIGH_EXCURSION,
    SPO2_NORMAL, SPO2_LOW_EXCURSION,
    SBP_NORMAL, SBP_LOW_EXCURSION, SBP_HIGH_EXCURSION,
    DBP_NORMAL, DBP_LOW_EXCURSION, DBP_HIGH_EXCURSION,
    TEMP_NORMAL, TEMP_LOW_EXCURSION, TEMP_HIGH_EXCURSION,
)
from .enums import VitalMetric
from .errors import ConfigurationError


@dataclass(frozen=True)
class NormalRange:
    """Inclusive [low, high] interval."""
    low: float
    high: float

    def __post_init__(self):
        if not self.low < self.high:
            raise ConfigurationError(
                f"Range low ({self.low}) must be below high ({self.high})"
            )

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    @classmethod
    def from_pair(cls, pair) -> "NormalRange":
        try:
            low, high = pair
            low, high = float(low), float(high)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Expected a [low, high] pair, got {pair!r}") from e
        return cls(low, high)


@dataclass(frozen=True)
class VitalRange:
    """Normal range of one metric plus its excursion ranges."""
    normal: NormalRange
    low: Optional[NormalRange] = None
    high: Optional[NormalRange] = None

    def __post_init__(self):
        if self.low is None and self.high is None:
            raise ConfigurationError("At least one excursion range is required")

    @property
    def excursions(self) -> Tuple[NormalRange, ...]:
        return tuple(r for r in (self.low, self.high) if r is not None)


def _range(normal, low=None, high=None) -> VitalRange:
    return VitalRange(
        normal=NormalRange(*normal),
        low=NormalRange(*low) if low else None,
        high=NormalRange(*high) if high else None,
    )


DEFAULT_RANGES: Dict[VitalMetric, VitalRange] = {
    VitalMetric.HEART_RATE: _range(HR_NORMAL, HR_LOW_EXCURSION, HR_HIGH_EXCURSION),
    VitalMetric.SPO2: _range(SPO2_NORMAL, SPO2_LOW_EXCURSION),
    VitalMetric.SYSTOLIC_BP: _range(SBP_NORMAL, SBP_LOW_EXCURSION, SBP_HIGH_EXCURSION),
    VitalMetric.DIASTOLIC_BP: _range(DBP_NORMAL, DBP_LOW_EXCURSION, DBP_HIGH_EXCURSION),
    VitalMetric.TEMPERATURE: _range(TEMP_NORMAL, TEMP_LOW_EXCURSION, TEMP_HIGH_EXCURSION),
}


class RangeTable:
    """
    Read-only lookup of VitalRange per VitalMetric.

    Missing metrics fall back to the defaults, so a table always covers every
    generated vital.
    """
    def __init__(self, ranges: Optional[Mapping[VitalMetric, VitalRange]] = None):
        merged = dict(DEFAULT_RANGES)
        if ranges:
            for metric, vital_range in ranges.items():
                if not isinstance(metric, VitalMetric):
                    raise ConfigurationError(f"Unknown metric: {metric!r}")
                merged[metric] = vital_range
        self._ranges = MappingProxyType(merged)

    def __getitem__(self, metric: VitalMetric) -> VitalRange:
        return self._ranges[metric]

    def __eq__(self, other):
        if not isinstance(other, RangeTable):
            return NotImplemented
        return dict(self._ranges) == dict(other._ranges)

    def normal(self, metric: VitalMetric) -> NormalRange:
        return self._ranges[metric].normal

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping]) -> "RangeTable":
        """
        Build a table from plain mappings, e.g. parsed JSON:

            {"heart_rate": {"normal": [60, 100], "low": [40, 59], "high": null}}

        Keys omitted for a metric keep their default; an explicit null removes
        that excursion range.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Range table must be a mapping of metric name to ranges")
        ranges = {}
        for name, entry in data.items():
            try:
                metric = VitalMetric(name)
            except ValueError:
                raise ConfigurationError(f"Unknown metric in range table: {name!r}") from None
            if not isinstance(entry, Mapping):
                raise ConfigurationError(f"Range entry for {name!r} must be a mapping")

            default = DEFAULT_RANGES[metric]
            fields = {"normal": default.normal, "low": default.low, "high": default.high}
            for key, pair in entry.items():
                if key not in fields:
                    raise ConfigurationError(f"Unknown range key {key!r} for {name!r}")
                fields[key] = None if pair is None else NormalRange.from_pair(pair)
            if fields["normal"] is None:
                raise ConfigurationError(f"Normal range for {name!r} cannot be null")
            ranges[metric] = VitalRange(**fields)
        return cls(ranges)


DEFAULT_RANGE_TABLE = RangeTable()
