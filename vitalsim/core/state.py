import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from .constants import (
    DEFAULT_TICK_INTERVAL,
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_ANOMALY_NUMERATOR,
    DEFAULT_ANOMALY_DENOMINATOR,
)
from .enums import SchedulerPhase, TrackedMetric
from .errors import ConfigurationError
from .ranges import RangeTable


@dataclass
class EngineConfig:
    """Configuration for the vitals engine."""
    tick_interval: float = DEFAULT_TICK_INTERVAL  # Seconds between ticks
    history_capacity: int = DEFAULT_HISTORY_CAPACITY

    # Anomaly probability = numerator / denominator.
    anomaly_numerator: int = DEFAULT_ANOMALY_NUMERATOR
    anomaly_denominator: int = DEFAULT_ANOMALY_DENOMINATOR

    ranges: RangeTable = field(default_factory=RangeTable)
    rng_seed: Optional[int] = None

    def __post_init__(self):
        if not math.isfinite(self.tick_interval) or self.tick_interval <= 0:
            raise ConfigurationError(f"tick_interval must be a positive finite number, got {self.tick_interval}")
        if self.history_capacity <= 0:
            raise ConfigurationError(f"history_capacity must be positive, got {self.history_capacity}")
        if self.anomaly_denominator <= 0:
            raise ConfigurationError(
                f"anomaly_denominator must be positive, got {self.anomaly_denominator}"
            )
        if not 0 <= self.anomaly_numerator <= self.anomaly_denominator:
            raise ConfigurationError(
                f"anomaly_numerator must be within [0, {self.anomaly_denominator}], "
                f"got {self.anomaly_numerator}"
            )

    @property
    def anomaly_probability(self) -> float:
        return self.anomaly_numerator / self.anomaly_denominator


@dataclass(frozen=True, slots=True)
class VitalSample:
    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class CurrentVitals:
    """Latest scalar readings. Replaced wholesale every tick."""
    heart_rate: float   # bpm
    spo2: float         # %
    systolic: float     # mmHg
    diastolic: float    # mmHg
    temperature: float  # °F


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable view of current vitals and histories at a tick boundary."""
    tick: int
    time: float  # Simulated seconds since origin (creation time minus the seeding span)
    timestamp: datetime
    phase: SchedulerPhase

    heart_rate: float
    spo2: float
    systolic_bp: float
    diastolic_bp: float
    temperature: float

    heart_rate_history: Tuple[VitalSample, ...] = ()
    spo2_history: Tuple[VitalSample, ...] = ()
    map_history: Tuple[VitalSample, ...] = ()

    @property
    def vitals(self) -> CurrentVitals:
        return CurrentVitals(
            heart_rate=self.heart_rate,
            spo2=self.spo2,
            systolic=self.systolic_bp,
            diastolic=self.diastolic_bp,
            temperature=self.temperature,
        )

    def history(self, metric: TrackedMetric) -> Tuple[VitalSample, ...]:
        if metric is TrackedMetric.HEART_RATE:
            return self.heart_rate_history
        if metric is TrackedMetric.SPO2:
            return self.spo2_history
        return self.map_history

    def values(self, metric: TrackedMetric) -> np.ndarray:
        """History values as a float array, oldest first (for plotting)."""
        return np.fromiter((s.value for s in self.history(metric)), dtype=float)
