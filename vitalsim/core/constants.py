"""
Default configuration values for VitalSim.

Range bounds are inclusive. Units: heart rate bpm, SpO2 %, blood pressure
mmHg, temperature °F.

NOTE: Only add constants here that are ACTIVELY IMPORTED elsewhere.
"""

# Scheduler cadence (seconds of simulated time per tick).
DEFAULT_TICK_INTERVAL = 2.0

# Samples retained per charted metric.
DEFAULT_HISTORY_CAPACITY = 20

# Probability of an anomalous draw = numerator / denominator.
DEFAULT_ANOMALY_NUMERATOR = 1
DEFAULT_ANOMALY_DENOMINATOR = 5

# Heart Rate (bpm)
HR_NORMAL = (60.0, 100.0)
HR_LOW_EXCURSION = (40.0, 59.0)
HR_HIGH_EXCURSION = (101.0, 140.0)

# SpO2 (%) - single-sided, no high excursion.
SPO2_NORMAL = (95.0, 100.0)
SPO2_LOW_EXCURSION = (90.0, 94.0)

# Systolic Blood Pressure (mmHg)
SBP_NORMAL = (90.0, 120.0)
SBP_LOW_EXCURSION = (80.0, 89.0)
SBP_HIGH_EXCURSION = (121.0, 140.0)

# Diastolic Blood Pressure (mmHg)
DBP_NORMAL = (60.0, 80.0)
DBP_LOW_EXCURSION = (50.0, 59.0)
DBP_HIGH_EXCURSION = (81.0, 90.0)

# Temperature (°F)
TEMP_NORMAL = (97.8, 99.1)
TEMP_LOW_EXCURSION = (96.0, 97.7)
TEMP_HIGH_EXCURSION = (99.2, 100.4)
