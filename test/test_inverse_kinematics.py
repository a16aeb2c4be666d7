import math

import numpy as np
import pytest

from deltabot_kinematics import geometry
from deltabot_kinematics.inverse_kinematics import (
    arm_length_from,
    carriage_height,
    solve_vertical_component,
)


def test_vertical_component_is_pythagorean():
    assert solve_vertical_component(5.0, 9.0) == pytest.approx(4.0)
    assert solve_vertical_component(5.0, 25.0) == 0.0


def test_vertical_component_is_nan_when_out_of_reach():
    assert math.isnan(solve_vertical_component(5.0, 25.0001))
    assert math.isnan(solve_vertical_component(5.0, math.nan))


def test_carriage_is_above_the_nub():
    anchor = np.array([100.0, 0.0, 0.0])
    nub = np.array([40.0, 0.0, -50.0])
    assert carriage_height(anchor, nub, 100.0) == pytest.approx(-50.0 + 80.0)


def test_kossel_center_gives_three_equal_carriages(kossel):
    carriages = kossel.calculate_carriage_positions({'x': 0.0, 'y': 0.0, 'z': 0.0})
    assert carriages.shape == (3,)
    assert carriages[0] == pytest.approx(carriages[1])
    assert carriages[1] == pytest.approx(carriages[2])
    assert carriages[0] == pytest.approx(math.sqrt(315.0 ** 2 - 155.0 ** 2))


@pytest.mark.parametrize('position', [
    [0.0, 0.0, -100.0],
    [50.0, 20.0, -150.0],
    [-80.0, 60.0, -200.0],
    [0.0, -120.0, -90.0],
])
def test_carriage_positions_reconstruct_the_arm_length(kossel, position):
    config = kossel.config
    carriages = kossel.calculate_carriage_positions(position)
    assert np.all(np.isfinite(carriages))

    for i, carriage_z in enumerate(carriages):
        anchor = geometry.tower_position(i, config.bot_radius)
        nub = np.array(position) + geometry.arm_position(2 * i, config.effector_radius, 0, True)
        assert arm_length_from(anchor, carriage_z, nub) == pytest.approx(config.arm_length)


def test_moving_effector_up_moves_carriages_up_equally(kossel):
    low = kossel.calculate_carriage_positions([30.0, -20.0, -150.0])
    high = kossel.calculate_carriage_positions([30.0, -20.0, -120.0])
    np.testing.assert_allclose(high - low, [30.0, 30.0, 30.0])


def test_unreachable_tower_yields_nan(kossel):
    carriages = kossel.calculate_carriage_positions([400.0, 0.0, 0.0])
    assert np.isnan(carriages).any()
