def compute_map(systolic: float, diastolic: float) -> float:
    """
    Mean Arterial Pressure (mmHg) from the two cuff pressures.

    Standard clinical approximation: DBP + (SBP - DBP) / 3.
    """
    return diastolic + (systolic - diastolic) / 3.0
