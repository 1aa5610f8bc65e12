"""
Tests for the spring and charge force laws.
"""

import math

import numpy as np
import pytest

from spring_grid.core.force_laws import (
    MIN_DISTANCE,
    SimulationProperties,
    ZERO_FORCE,
    charge_force,
    charge_forces,
    coincident_direction,
    spring_force,
    spring_forces,
)


class TestSpringForce:
    """Hooke-type attraction along one link."""

    def test_stretched_spring_pulls_toward_neighbour(self):
        f = spring_force(20.0, 0.0, rest_length=10.0, dampening=0.1)
        assert f.fx == pytest.approx(1.0)
        assert f.fy == pytest.approx(0.0)

    def test_compressed_spring_pushes_away(self):
        f = spring_force(5.0, 0.0, rest_length=10.0, dampening=0.1)
        assert f.fx == pytest.approx(-0.5)

    def test_rest_length_gives_no_force(self):
        f = spring_force(6.0, 8.0, rest_length=10.0, dampening=0.1)
        assert f.magnitude == pytest.approx(0.0)

    def test_zero_length_link_has_no_force(self):
        assert spring_force(0.0, 0.0, rest_length=10.0, dampening=0.1) == ZERO_FORCE

    def test_equal_and_opposite(self):
        on_i = spring_force(30.0, -40.0, 10.0, 0.1)
        on_j = spring_force(-30.0, 40.0, 10.0, 0.1)
        assert on_i.fx == pytest.approx(-on_j.fx)
        assert on_i.fy == pytest.approx(-on_j.fy)

    def test_vectorised_matches_scalar(self):
        rng = np.random.default_rng(4)
        points = rng.uniform(-100, 100, size=(6, 2))
        src = np.array([0, 1, 1, 2, 3, 4, 5, 5])
        dst = np.array([1, 0, 2, 1, 4, 3, 0, 5])

        forces = spring_forces(points, src, dst, 10.0, 0.1)
        expected = np.zeros((6, 2))
        for i, j in zip(src, dst):
            if i == j:
                continue
            delta = points[j] - points[i]
            f = spring_force(delta[0], delta[1], 10.0, 0.1)
            expected[i] += (f.fx, f.fy)
        np.testing.assert_allclose(forces, expected, atol=1e-12)

    def test_self_loop_skipped(self):
        points = np.array([[1.0, 2.0]])
        forces = spring_forces(points, np.array([0]), np.array([0]), 10.0, 0.1)
        assert np.all(forces == 0.0)


class TestChargeForce:
    """Inverse-square repulsion between node pairs."""

    def test_inverse_square_magnitude(self):
        f = charge_force(2.0, 0.0, charge=100.0, i=0, j=1)
        assert f.fx == pytest.approx(25.0)
        assert f.fy == pytest.approx(0.0)

    def test_repulsion_decreases_with_distance(self):
        magnitudes = [charge_force(d, 0.0, 22500.0, 0, 1).magnitude for d in (1.0, 2.0, 5.0, 10.0, 50.0)]
        assert all(a > b for a, b in zip(magnitudes, magnitudes[1:]))

    def test_points_away_from_other_node(self):
        f = charge_force(-3.0, 4.0, 100.0, 0, 1)
        assert f.fx < 0
        assert f.fy > 0

    def test_same_index_has_no_force(self):
        assert charge_force(0.0, 0.0, 100.0, 3, 3) == ZERO_FORCE

    def test_coincident_pair_separates_symmetrically(self):
        on_i = charge_force(0.0, 0.0, 1.0, 2, 5)
        on_j = charge_force(0.0, 0.0, 1.0, 5, 2)
        assert math.isfinite(on_i.fx) and math.isfinite(on_i.fy)
        assert on_i.magnitude == pytest.approx(1.0 / MIN_DISTANCE ** 2)
        assert on_i.fx == pytest.approx(-on_j.fx)
        assert on_i.fy == pytest.approx(-on_j.fy)

    def test_coincident_direction_is_unit(self):
        ux, uy = coincident_direction(0, 1)
        assert math.hypot(ux, uy) == pytest.approx(1.0)

    def test_distance_floor(self):
        f = charge_force(MIN_DISTANCE / 10.0, 0.0, 1.0, 0, 1)
        assert f.fx == pytest.approx(1.0 / MIN_DISTANCE ** 2)

    def test_vectorised_matches_scalar(self):
        rng = np.random.default_rng(11)
        points = rng.uniform(-50, 50, size=(7, 2))
        points[6] = points[2]

        forces = charge_forces(points, 0, 7, 500.0)
        for i in range(7):
            fx = fy = 0.0
            for j in range(7):
                delta = points[i] - points[j]
                f = charge_force(delta[0], delta[1], 500.0, i, j)
                fx += f.fx
                fy += f.fy
            assert forces[i] == pytest.approx([fx, fy], rel=1e-9, abs=1e-9)

    def test_row_block(self):
        rng = np.random.default_rng(2)
        points = rng.uniform(0, 10, size=(5, 2))
        full = charge_forces(points, 0, 5, 10.0)
        np.testing.assert_allclose(charge_forces(points, 1, 4, 10.0), full[1:4])

    def test_net_repulsion_sums_to_zero(self):
        rng = np.random.default_rng(8)
        points = rng.uniform(0, 100, size=(9, 2))
        forces = charge_forces(points, 0, 9, 22500.0)
        np.testing.assert_allclose(forces.sum(axis=0), [0.0, 0.0], atol=1e-6)


class TestSimulationProperties:
    """Parameter validation."""

    def test_defaults(self):
        props = SimulationProperties()
        assert props.speed == 0.01
        assert props.spring_rest_length == 10.0
        assert props.spring_dampening == pytest.approx(0.1)
        assert props.charge == 22500.0
        assert props.validate() == (True, None)

    @pytest.mark.parametrize("name,value", [
        ("speed", 0.0),
        ("speed", -1.0),
        ("spring_rest_length", 0.0),
        ("charge", -5.0),
        ("max_displacement", 0.0),
        ("spring_dampening", -0.1),
        ("speed", float("nan")),
        ("charge", float("inf")),
        ("speed", "fast"),
        ("speed", True),
    ])
    def test_invalid_values_rejected(self, name, value):
        assert SimulationProperties.check_field(name, value) is not None

    def test_step_unlimited_by_default(self):
        assert SimulationProperties().max_displacement == math.inf
        assert SimulationProperties.check_field("max_displacement", math.inf) is None

    @pytest.mark.parametrize("value", [float("nan"), -math.inf])
    def test_max_displacement_nan_or_negative_inf_rejected(self, value):
        assert SimulationProperties.check_field("max_displacement", value) is not None

    def test_zero_dampening_allowed(self):
        assert SimulationProperties.check_field("spring_dampening", 0.0) is None

    def test_numpy_scalar_accepted(self):
        assert SimulationProperties.check_field("speed", np.float64(0.2)) is None

    def test_unknown_field(self):
        assert "unknown" in SimulationProperties.check_field("gravity", 1.0)

    def test_validate_reports_field(self):
        is_valid, err = SimulationProperties(charge=-1.0).validate()
        assert not is_valid
        assert "charge" in err

    def test_copy_is_independent(self):
        props = SimulationProperties()
        clone = props.copy()
        clone.speed = 5.0
        assert props.speed == 0.01
