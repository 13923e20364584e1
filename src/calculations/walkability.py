"""Walkability model: a 0-100 pedestrian-experience score with a grade.

The score blends two equally weighted axes, human comfort (shade, seating,
trees, heat mitigation) and activation (active frontage, operating hours,
uses per node, night life), then subtracts penalties for visible parking and
car/pedestrian crossings. The crossing penalty is uncapped.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..models.lookups import (
    FIVE_MINUTE_WALK_FT,
    SHADE_SATURATION_PCT,
    HEAT_MITIGATION_SATURATION,
    PARKING_PENALTY_MAX,
    CONFLICT_PENALTY_PER_CROSSING,
    COMFORT_WEIGHTS,
    ACTIVATION_WEIGHTS,
    COMFORT_SHARE,
    ACTIVATION_SHARE,
    SEATING_INTERVAL_STEPS,
    TREE_INTERVAL_STEPS,
    OPERATING_HOURS_STEPS,
    USES_PER_NODE_STEPS,
    STEP_FLOOR_SCORE,
    GRADE_THRESHOLDS,
    DEFAULT_GRADE,
)
from ..models.project import ProjectState
from .safe_math import safe_div
from .trace import trace


@dataclass
class WalkabilityResult:
    """Walkability scoring results for one ProjectState snapshot."""

    avg_walk_distance: float  # ft per node
    five_min_walk_compliant: bool

    # Comfort
    shade_score: float
    seating_score: float
    tree_score: float
    heat_score: float
    comfort_score: float

    # Activation
    frontage_score: float
    avg_operating_hours: float
    hours_score: float
    uses_per_node: float
    node_score: float
    night_life_pct: float
    activation_score: float

    # Penalties
    parking_penalty: float
    conflict_penalty: float
    penalty: float  # Combined deduction

    raw_score: float
    final_score: float
    grade: str


def step_score_at_most(value: float, steps: List[Tuple[float, float]]) -> float:
    """Score from the first step whose threshold the value does not exceed."""
    for threshold, score in steps:
        if value <= threshold:
            return score
    return STEP_FLOOR_SCORE


def step_score_at_least(value: float, steps: List[Tuple[float, float]]) -> float:
    """Score from the first step whose threshold the value reaches."""
    for threshold, score in steps:
        if value >= threshold:
            return score
    return STEP_FLOOR_SCORE


def saturating_score(value: float, saturation: float) -> float:
    """Linear 0-100 score that caps once value reaches saturation."""
    return min(safe_div(value, saturation), 1) * 100


def assign_grade(final_score: float) -> str:
    """Map a score to its grade label.

    Thresholds are checked highest first, so every score maps to exactly
    one grade.

    Args:
        final_score: Walkability score.

    Returns:
        "Destination Grade" (>=85), "Strong Suburban" (>=75),
        "Walkable But Fragile" (>=65), otherwise "Car Dependent".
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if final_score >= threshold:
            return grade
    return DEFAULT_GRADE


def compute_walkability(state: ProjectState) -> WalkabilityResult:
    """Score the pedestrian experience of the project.

    Args:
        state: Project snapshot.

    Returns:
        WalkabilityResult with every sub-score, penalties, final score and grade.

    Example:
        >>> walk = compute_walkability(ProjectState())
        >>> round(walk.shade_score, 2)
        64.29
    """
    # === Walk segments ===
    avg_walk_distance = trace(
        "walk.avg_walk_distance",
        safe_div(state.ped_spine_length_ft, state.num_nodes, require_positive=True),
        {"inputs.ped_spine_length_ft": state.ped_spine_length_ft, "inputs.num_nodes": state.num_nodes},
    )
    five_min_walk_compliant = avg_walk_distance <= FIVE_MINUTE_WALK_FT

    # === Comfort ===
    shade_score = trace(
        "walk.shade_score",
        saturating_score(state.shade_pct, SHADE_SATURATION_PCT),
        {"inputs.shade_pct": state.shade_pct},
    )
    seating_score = trace(
        "walk.seating_score",
        step_score_at_most(state.seating_interval_ft, SEATING_INTERVAL_STEPS),
        {"inputs.seating_interval_ft": state.seating_interval_ft},
    )
    tree_score = trace(
        "walk.tree_score",
        step_score_at_most(state.tree_interval_ft, TREE_INTERVAL_STEPS),
        {"inputs.tree_interval_ft": state.tree_interval_ft},
    )
    heat_score = trace(
        "walk.heat_score",
        saturating_score(state.heat_mitigation_count, HEAT_MITIGATION_SATURATION),
        {"inputs.heat_mitigation_count": state.heat_mitigation_count},
    )
    comfort_score = trace(
        "walk.comfort_score",
        shade_score * COMFORT_WEIGHTS["shade"]
        + seating_score * COMFORT_WEIGHTS["seating"]
        + tree_score * COMFORT_WEIGHTS["tree"]
        + heat_score * COMFORT_WEIGHTS["heat"],
        {
            "walk.shade_score": shade_score,
            "walk.seating_score": seating_score,
            "walk.tree_score": tree_score,
            "walk.heat_score": heat_score,
        },
    )

    # === Activation ===
    tenant_count = len(state.tenants)
    frontage_score = state.active_frontage_pct

    avg_operating_hours = trace(
        "walk.avg_operating_hours",
        safe_div(sum(t.operating_hours for t in state.tenants), tenant_count),
        {"inputs.tenants": tenant_count},
    )
    hours_score = trace(
        "walk.hours_score",
        step_score_at_least(avg_operating_hours, OPERATING_HOURS_STEPS),
        {"walk.avg_operating_hours": avg_operating_hours},
    )
    uses_per_node = trace(
        "walk.uses_per_node",
        safe_div(tenant_count, state.num_nodes, require_positive=True),
        {"inputs.tenants": tenant_count, "inputs.num_nodes": state.num_nodes},
    )
    node_score = trace(
        "walk.node_score",
        step_score_at_least(uses_per_node, USES_PER_NODE_STEPS),
        {"walk.uses_per_node": uses_per_node},
    )
    night_active_count = sum(1 for t in state.tenants if t.night_active)
    night_life_pct = trace(
        "walk.night_life_pct",
        safe_div(night_active_count, tenant_count) * 100,
        {"inputs.tenants": tenant_count},
    )
    activation_score = trace(
        "walk.activation_score",
        frontage_score * ACTIVATION_WEIGHTS["frontage"]
        + hours_score * ACTIVATION_WEIGHTS["hours"]
        + node_score * ACTIVATION_WEIGHTS["node"]
        + night_life_pct * ACTIVATION_WEIGHTS["night_life"],
        {
            "inputs.active_frontage_pct": frontage_score,
            "walk.hours_score": hours_score,
            "walk.node_score": node_score,
            "walk.night_life_pct": night_life_pct,
        },
    )

    # === Penalties ===
    parking_penalty = trace(
        "walk.parking_penalty",
        (state.parking_visible_pct / 100) * PARKING_PENALTY_MAX,
        {"inputs.parking_visible_pct": state.parking_visible_pct},
    )
    conflict_penalty = trace(
        "walk.conflict_penalty",
        state.car_crossings_count * CONFLICT_PENALTY_PER_CROSSING,
        {"inputs.car_crossings_count": state.car_crossings_count},
    )

    raw_score = trace(
        "walk.raw_score",
        comfort_score * COMFORT_SHARE + activation_score * ACTIVATION_SHARE,
        {"walk.comfort_score": comfort_score, "walk.activation_score": activation_score},
    )
    # Floor at zero; no ceiling is applied
    final_score = trace(
        "walk.final_score",
        max(0.0, raw_score - parking_penalty - conflict_penalty),
        {
            "walk.raw_score": raw_score,
            "walk.parking_penalty": parking_penalty,
            "walk.conflict_penalty": conflict_penalty,
        },
    )

    return WalkabilityResult(
        avg_walk_distance=avg_walk_distance,
        five_min_walk_compliant=five_min_walk_compliant,
        shade_score=shade_score,
        seating_score=seating_score,
        tree_score=tree_score,
        heat_score=heat_score,
        comfort_score=comfort_score,
        frontage_score=frontage_score,
        avg_operating_hours=avg_operating_hours,
        hours_score=hours_score,
        uses_per_node=uses_per_node,
        node_score=node_score,
        night_life_pct=night_life_pct,
        activation_score=activation_score,
        parking_penalty=parking_penalty,
        conflict_penalty=conflict_penalty,
        penalty=parking_penalty + conflict_penalty,
        raw_score=raw_score,
        final_score=final_score,
        grade=assign_grade(final_score),
    )
