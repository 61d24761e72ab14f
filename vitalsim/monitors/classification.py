from typing import Dict

from vitalsim.core.enums import Classification, VitalMetric
from vitalsim.core.ranges import DEFAULT_RANGE_TABLE, RangeTable
from vitalsim.core.state import CurrentVitals


def _to_class(is_normal: bool) -> Classification:
    return Classification.NORMAL if is_normal else Classification.ABNORMAL


def classify(metric: VitalMetric, value: float,
             ranges: RangeTable = DEFAULT_RANGE_TABLE) -> Classification:
    """Abnormal iff value falls outside the metric's inclusive normal range."""
    return _to_class(ranges.normal(metric).contains(value))


def classify_blood_pressure(systolic: float, diastolic: float,
                            ranges: RangeTable = DEFAULT_RANGE_TABLE) -> Classification:
    """Normal only when both systolic and diastolic are within range."""
    return _to_class(
        ranges.normal(VitalMetric.SYSTOLIC_BP).contains(systolic)
        and ranges.normal(VitalMetric.DIASTOLIC_BP).contains(diastolic)
    )


def classify_vitals(vitals: CurrentVitals,
                    ranges: RangeTable = DEFAULT_RANGE_TABLE) -> Dict[str, Classification]:
    """Classification per dashboard tile."""
    return {
        "spo2": classify(VitalMetric.SPO2, vitals.spo2, ranges),
        "heart_rate": classify(VitalMetric.HEART_RATE, vitals.heart_rate, ranges),
        "blood_pressure": classify_blood_pressure(vitals.systolic, vitals.diastolic, ranges),
        "temperature": classify(VitalMetric.TEMPERATURE, vitals.temperature, ranges),
    }
