"""
Tile readings for the dashboard and the headless console.

Formatting follows the bedside display: whole numbers for heart rate, SpO2
and blood pressure, one decimal for temperature.
"""

from dataclasses import dataclass
from typing import List

from vitalsim.core.enums import Classification
from vitalsim.core.ranges import DEFAULT_RANGE_TABLE, RangeTable
from vitalsim.core.state import Snapshot
from .classification import classify_vitals


@dataclass(frozen=True)
class TileReading:
    key: str
    label: str
    text: str
    unit: str
    classification: Classification

    @property
    def is_normal(self) -> bool:
        return self.classification is Classification.NORMAL


def tile_readings(snapshot: Snapshot, ranges: RangeTable = DEFAULT_RANGE_TABLE) -> List[TileReading]:
    """Four tiles in display order: SpO2, heart rate, blood pressure, temperature."""
    classes = classify_vitals(snapshot.vitals, ranges)
    return [
        TileReading("spo2", "SpO₂", f"{int(snapshot.spo2)}", "%", classes["spo2"]),
        TileReading("heart_rate", "Heart Rate", f"{int(snapshot.heart_rate)}", "BPM",
                    classes["heart_rate"]),
        TileReading("blood_pressure", "Blood Pressure",
                    f"{int(snapshot.systolic_bp)}/{int(snapshot.diastolic_bp)}", "mmHg",
                    classes["blood_pressure"]),
        TileReading("temperature", "Temperature", f"{snapshot.temperature:.1f}", "°F",
                    classes["temperature"]),
    ]


def format_console_line(snapshot: Snapshot, ranges: RangeTable = DEFAULT_RANGE_TABLE) -> str:
    """One-line summary; abnormal tiles are marked with '!'."""
    parts = []
    for reading in tile_readings(snapshot, ranges):
        marker = "" if reading.is_normal else "!"
        parts.append(f"{reading.label}: {reading.text}{marker} {reading.unit}")
    map_now = snapshot.map_history[-1].value if snapshot.map_history else float("nan")
    return f"Time: {snapshot.time:.1f}s | " + " | ".join(parts) + f" | MAP: {map_now:.1f}"
