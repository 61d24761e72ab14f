import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from vitalsim.core.constants import DEFAULT_ANOMALY_NUMERATOR, DEFAULT_ANOMALY_DENOMINATOR
from vitalsim.core.enums import VitalMetric
from vitalsim.core.errors import ConfigurationError
from vitalsim.core.ranges import DEFAULT_RANGE_TABLE, NormalRange, RangeTable
from vitalsim.core.state import CurrentVitals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VitalDraw:
    value: float
    anomalous: bool


class VitalGenerator:
    """
    Randomized vital-sign source.

    Each metric is decided independently per call: an integer is drawn
    uniformly from [1, denominator] and the reading is anomalous when it is
    <= numerator. Anomalous readings come from an excursion range (low or
    high with equal odds when both exist); the rest from the normal range.
    """
    def __init__(self, ranges: RangeTable = DEFAULT_RANGE_TABLE,
                 rng: Optional[np.random.Generator] = None,
                 anomaly_numerator: int = DEFAULT_ANOMALY_NUMERATOR,
                 anomaly_denominator: int = DEFAULT_ANOMALY_DENOMINATOR):
        if anomaly_denominator <= 0 or not 0 <= anomaly_numerator <= anomaly_denominator:
            raise ConfigurationError(
                f"Invalid anomaly probability {anomaly_numerator}/{anomaly_denominator}"
            )
        self.ranges = ranges
        self.rng = rng if rng is not None else np.random.default_rng()
        self.anomaly_numerator = anomaly_numerator
        self.anomaly_denominator = anomaly_denominator

    def _uniform(self, r: NormalRange) -> float:
        return float(self.rng.uniform(r.low, r.high))

    def draw(self, metric: VitalMetric) -> VitalDraw:
        """Single anomaly decision and value for one metric."""
        vital_range = self.ranges[metric]
        roll = int(self.rng.integers(1, self.anomaly_denominator, endpoint=True))
        if roll > self.anomaly_numerator:
            return VitalDraw(self._uniform(vital_range.normal), False)

        excursions = vital_range.excursions
        if len(excursions) == 1:
            target = excursions[0]
        else:
            target = excursions[int(self.rng.integers(0, len(excursions)))]
        value = self._uniform(target)
        logger.debug("Anomalous %s draw: %.1f", metric.value, value)
        return VitalDraw(value, True)

    def generate(self) -> CurrentVitals:
        """Fresh values for every vital."""
        return CurrentVitals(
            heart_rate=self.draw(VitalMetric.HEART_RATE).value,
            spo2=self.draw(VitalMetric.SPO2).value,
            systolic=self.draw(VitalMetric.SYSTOLIC_BP).value,
            diastolic=self.draw(VitalMetric.DIASTOLIC_BP).value,
            temperature=self.draw(VitalMetric.TEMPERATURE).value,
        )
