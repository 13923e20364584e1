"""Lookup tables for underwriting constants and walkability scoring thresholds."""

from typing import List, Tuple


# === Underwriting conventions ===
# Conservative bank-standard operating assumptions. These are not user inputs.
VACANCY_RATE = 0.10
EXPENSE_RATIO = 0.32

DSCR_TARGET = 1.25
PHASE1_DSCR_STRONG = 1.2
EQUITY_PCT_WARNING = 40.0

# === Walkability ===
FIVE_MINUTE_WALK_FT = 1200.0

SHADE_SATURATION_PCT = 70.0
HEAT_MITIGATION_SATURATION = 3

PARKING_PENALTY_MAX = 15.0
CONFLICT_PENALTY_PER_CROSSING = 3.0

# Weights (each group sums to 1.0)
COMFORT_WEIGHTS = {
    "shade": 0.35,
    "seating": 0.25,
    "tree": 0.25,
    "heat": 0.15,
}

ACTIVATION_WEIGHTS = {
    "frontage": 0.30,
    "hours": 0.25,
    "node": 0.25,
    "night_life": 0.20,
}

COMFORT_SHARE = 0.50
ACTIVATION_SHARE = 0.50

# Step tables: (threshold, score), evaluated in order, first match wins.
# "At most" tables reward short intervals; "at least" tables reward high values.
SEATING_INTERVAL_STEPS: List[Tuple[float, float]] = [(150.0, 100.0), (250.0, 70.0)]
TREE_INTERVAL_STEPS: List[Tuple[float, float]] = [(40.0, 100.0), (60.0, 70.0)]
OPERATING_HOURS_STEPS: List[Tuple[float, float]] = [(12.0, 100.0), (9.0, 70.0)]
USES_PER_NODE_STEPS: List[Tuple[float, float]] = [(4.0, 100.0), (3.0, 70.0)]
STEP_FLOOR_SCORE = 40.0

# Grade table, highest threshold first
GRADE_THRESHOLDS: List[Tuple[float, str]] = [
    (85.0, "Destination Grade"),
    (75.0, "Strong Suburban"),
    (65.0, "Walkable But Fragile"),
]
DEFAULT_GRADE = "Car Dependent"
