"""Tests for the walkability scoring model."""

from dataclasses import replace

import pytest

from src.calculations.walkability import (
    compute_walkability,
    assign_grade,
    step_score_at_most,
    step_score_at_least,
    saturating_score,
)
from src.models.lookups import SEATING_INTERVAL_STEPS, OPERATING_HOURS_STEPS
from src.models.updates import update_urbanism
from tests.fixtures.test_inputs import (
    EXPECTED_SHADE_SCORE,
    EXPECTED_COMFORT_SCORE,
    EXPECTED_AVG_OPERATING_HOURS,
    EXPECTED_ACTIVATION_SCORE,
    EXPECTED_RAW_SCORE,
    EXPECTED_FINAL_SCORE,
    EXPECTED_GRADE,
)


class TestDefaultScenario:
    """Validate the default scenario sub-scores."""

    def test_walk_segments(self, default_state):
        walk = compute_walkability(default_state)

        assert walk.avg_walk_distance == pytest.approx(800 / 3)
        assert walk.five_min_walk_compliant is True

    def test_comfort(self, default_state):
        walk = compute_walkability(default_state)

        assert walk.shade_score == pytest.approx(EXPECTED_SHADE_SCORE)
        assert walk.seating_score == 70
        assert walk.tree_score == 70
        assert walk.heat_score == pytest.approx(100 / 3)
        assert walk.comfort_score == pytest.approx(EXPECTED_COMFORT_SCORE)

    def test_activation(self, default_state):
        walk = compute_walkability(default_state)

        assert walk.frontage_score == 65
        assert walk.avg_operating_hours == pytest.approx(EXPECTED_AVG_OPERATING_HOURS)
        assert walk.hours_score == 70
        assert walk.uses_per_node == pytest.approx(4 / 3)
        assert walk.node_score == 40
        assert walk.night_life_pct == pytest.approx(25)
        assert walk.activation_score == pytest.approx(EXPECTED_ACTIVATION_SCORE)

    def test_penalties_and_final_score(self, default_state):
        walk = compute_walkability(default_state)

        assert walk.parking_penalty == pytest.approx(3)
        assert walk.conflict_penalty == pytest.approx(6)
        assert walk.penalty == pytest.approx(9)
        assert walk.raw_score == pytest.approx(EXPECTED_RAW_SCORE)
        assert walk.final_score == pytest.approx(EXPECTED_FINAL_SCORE)
        assert walk.grade == EXPECTED_GRADE


class TestDestinationScenario:
    """A well-designed street reaches the top grade."""

    def test_destination_grade(self, destination_state):
        walk = compute_walkability(destination_state)

        assert walk.comfort_score == pytest.approx(100)
        assert walk.activation_score == pytest.approx(87)
        assert walk.final_score == pytest.approx(93.5)
        assert walk.grade == "Destination Grade"


class TestStepTables:
    """Tests for the threshold helpers."""

    @pytest.mark.parametrize("interval,expected", [
        (100, 100), (150, 100), (151, 70), (250, 70), (251, 40),
    ])
    def test_seating_steps(self, interval, expected):
        assert step_score_at_most(interval, SEATING_INTERVAL_STEPS) == expected

    @pytest.mark.parametrize("hours,expected", [
        (16, 100), (12, 100), (11.9, 70), (9, 70), (8.9, 40), (0, 40),
    ])
    def test_hours_steps(self, hours, expected):
        assert step_score_at_least(hours, OPERATING_HOURS_STEPS) == expected

    def test_saturating_score_caps_at_100(self):
        assert saturating_score(35, 70) == pytest.approx(50)
        assert saturating_score(70, 70) == 100
        assert saturating_score(95, 70) == 100


class TestGrades:
    """Grade boundaries are inclusive at the lower end."""

    @pytest.mark.parametrize("score,grade", [
        (100, "Destination Grade"),
        (85, "Destination Grade"),
        (84.99, "Strong Suburban"),
        (75, "Strong Suburban"),
        (74.99, "Walkable But Fragile"),
        (65, "Walkable But Fragile"),
        (64.99, "Car Dependent"),
        (0, "Car Dependent"),
    ])
    def test_assign_grade(self, score, grade):
        assert assign_grade(score) == grade


class TestEdgeCases:
    """Degenerate inputs never raise."""

    def test_no_tenants(self, empty_tenant_state):
        """No tenants: zero hours scores the floor step, no night life."""
        walk = compute_walkability(empty_tenant_state)

        assert walk.avg_operating_hours == 0
        assert walk.hours_score == 40
        assert walk.uses_per_node == 0
        assert walk.night_life_pct == 0

    def test_zero_nodes(self, default_state):
        walk = compute_walkability(update_urbanism(default_state, num_nodes=0))

        assert walk.avg_walk_distance == 0
        assert walk.uses_per_node == 0
        assert walk.node_score == 40
        assert walk.five_min_walk_compliant is True

    def test_long_segments_not_compliant(self, default_state):
        walk = compute_walkability(update_urbanism(default_state, ped_spine_length_ft=5_000, num_nodes=2))

        assert walk.avg_walk_distance == 2_500
        assert walk.five_min_walk_compliant is False

    def test_score_floors_at_zero(self, default_state):
        state = update_urbanism(
            default_state,
            shade_pct=0,
            heat_mitigation_count=0,
            active_frontage_pct=0,
            parking_visible_pct=100,
            car_crossings_count=30,
        )
        walk = compute_walkability(state)

        assert walk.final_score == 0
        assert walk.grade == "Car Dependent"

    def test_many_crossings_floor_at_zero(self, default_state):
        walk = compute_walkability(update_urbanism(default_state, car_crossings_count=1000))
        assert walk.final_score == 0

    def test_no_ceiling_on_score(self, destination_state):
        """Final score is not clamped at 100."""
        walk = compute_walkability(destination_state)
        assert walk.final_score == pytest.approx(walk.raw_score)

    def test_more_shade_never_lowers_score(self, default_state):
        scores = [
            compute_walkability(update_urbanism(default_state, shade_pct=pct)).final_score
            for pct in range(0, 101, 10)
        ]
        assert scores == sorted(scores)

    def test_more_crossings_never_raise_score(self, default_state):
        scores = [
            compute_walkability(update_urbanism(default_state, car_crossings_count=n)).final_score
            for n in range(0, 10)
        ]
        assert scores == sorted(scores, reverse=True)

    def test_input_snapshot_is_not_modified(self, default_state):
        before = replace(default_state)
        compute_walkability(default_state)
        assert default_state == before
