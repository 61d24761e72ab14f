from enum import Enum


class VitalMetric(Enum):
    """Generated vital quantities (RangeTable keys)."""
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"
    SYSTOLIC_BP = "systolic_bp"
    DIASTOLIC_BP = "diastolic_bp"
    TEMPERATURE = "temperature"


class TrackedMetric(Enum):
    """Metrics with a rolling history buffer (charted)."""
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"
    MEAN_ARTERIAL_PRESSURE = "map"


class Classification(Enum):
    NORMAL = "Normal"
    ABNORMAL = "Abnormal"


class SchedulerPhase(Enum):
    SEEDING = "Seeding"
    STEADY = "Steady"
