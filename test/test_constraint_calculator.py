import math

import pytest

from deltabot_config import ConfigError, ConstraintType, RobotConfig
from deltabot_kinematics import BuildPlateConstraintCalculator
from deltabot_kinematics.constraint_calculator import (
    LIMIT_ARM_REACH,
    LIMIT_CARRIAGE_POSITION,
    LIMIT_GEOMETRY,
)


@pytest.fixture
def calculator(kossel_config):
    return BuildPlateConstraintCalculator(kossel_config)


def test_carriage_search_covers_the_whole_range_for_kossel(calculator):
    # 195mm towers + 50mm overshoot, every step feasible
    assert calculator.calculate_carriage_constrained_radius() == 245.0


@pytest.mark.parametrize('constraint_type, expected', [
    (ConstraintType.EFFECTOR_EDGE, 195.0 - 4.0 - 40.0 - 10.0),
    (ConstraintType.EFFECTOR_TIP, 195.0 - 4.0 - 10.0),
    (ConstraintType.HORIZONTAL_EXTRUSIONS, 195.0 - 20.0 - 10.0),
])
def test_constraint_radius_per_policy(calculator, constraint_type, expected):
    calculator.set_constraint_type(constraint_type)
    assert calculator.calculate_real_build_plate_radius() == pytest.approx(expected)
    assert calculator.calculate_constraint_radius(constraint_type.value) == pytest.approx(expected)


def test_unknown_constraint_type_is_rejected(calculator):
    with pytest.raises(ConfigError):
        calculator.set_constraint_type('effector-nose')


@pytest.mark.parametrize('value', ['5', 'abc', None, True])
def test_non_numeric_offsets_and_bed_radius_are_rejected(calculator, kossel_config, value):
    with pytest.raises(ConfigError, match='tower_collision_offset'):
        calculator.set_tower_collision_offset(value)
    with pytest.raises(ConfigError, match='physical_bed_radius'):
        calculator.set_physical_bed_radius(value)
    with pytest.raises(ConfigError, match='physical_bed_radius'):
        BuildPlateConstraintCalculator(kossel_config, physical_bed_radius=value)
    with pytest.raises(ConfigError, match='tower_collision_offset'):
        BuildPlateConstraintCalculator(kossel_config, tower_collision_offset=value)
    assert calculator.tower_collision_offset == 10.0
    assert calculator.physical_bed_radius == 120.0


def test_config_must_be_a_snapshot():
    with pytest.raises(ConfigError, match='RobotConfig'):
        BuildPlateConstraintCalculator({'bot_radius': 195.0})


def test_integer_offsets_are_accepted(calculator):
    calculator.set_tower_collision_offset(20)
    calculator.set_physical_bed_radius(150)
    assert calculator.tower_collision_offset == 20.0
    assert calculator.physical_bed_radius == 150.0


def test_collision_offset_tightens_radius(calculator):
    calculator.set_tower_collision_offset(20.0)
    assert calculator.calculate_real_build_plate_radius() == pytest.approx(131.0)


def test_radius_is_floored_at_zero():
    calc = BuildPlateConstraintCalculator(RobotConfig(bot_radius=40, effector_radius=40))
    assert calc.calculate_real_build_plate_radius() == 0.0


def test_travel_limited_search_stops_at_the_first_failing_step(travel_limited_calculator):
    assert travel_limited_calculator.calculate_carriage_constrained_radius() == 55.0
    assert travel_limited_calculator.calculate_real_build_plate_radius() == 55.0


def test_boundary_radius_refines_inside_the_failing_step(travel_limited_calculator):
    # carriage reaches max_z = 185 when sqrt(340² - (170 - r)²) = 320
    expected = 170.0 - math.sqrt(340.0 ** 2 - 320.0 ** 2)
    boundary = travel_limited_calculator.calculate_carriage_boundary_radius()
    assert boundary == pytest.approx(expected, abs=1e-4)
    assert 55.0 <= boundary < 60.0


def test_boundary_radius_without_failure_equals_search_result(calculator):
    assert calculator.calculate_carriage_boundary_radius() == 245.0


def test_arm_shorter_than_anchor_distance_gives_zero_radius(kossel_config):
    calc = BuildPlateConstraintCalculator(kossel_config.replace(arm_length=150))
    assert calc.calculate_carriage_constrained_radius() == 0.0
    assert calc.calculate_carriage_boundary_radius() == 0.0


def test_shorter_arms_never_increase_the_carriage_radius(kossel_config):
    radii = []
    for arm_length in [400, 315, 250, 200, 180, 170, 160, 150, 100]:
        calc = BuildPlateConstraintCalculator(kossel_config.replace(arm_length=arm_length))
        radii.append(calc.calculate_carriage_constrained_radius())
    assert radii == sorted(radii, reverse=True)


def test_required_carriage_height_is_nan_out_of_reach(calculator):
    assert math.isnan(calculator.required_carriage_height(0, (-400.0, -400.0, 0.0)))


def test_carriage_analysis(calculator, travel_limited_calculator):
    analysis = calculator.get_carriage_constraint_analysis()
    assert analysis['max_radius'] == 245.0
    # 245 < 0.9 * (315 - 40)
    assert analysis['limiting_factor'] == LIMIT_CARRIAGE_POSITION
    assert analysis['carriage_limits'] == {'min_z': -245.0, 'max_z': 245.0, 'travel_range': 490.0}

    assert travel_limited_calculator.get_carriage_constraint_analysis()['limiting_factor'] \
        == LIMIT_CARRIAGE_POSITION


def test_carriage_analysis_arm_reach_and_geometry(kossel_config):
    # theoretical reach 260 - 40 = 220; search result 245 is above it
    calc = BuildPlateConstraintCalculator(kossel_config.replace(arm_length=260))
    assert calc.get_carriage_constraint_analysis()['limiting_factor'] == LIMIT_GEOMETRY

    # theoretical reach 300 - 40 = 260; 245 is within 90% of it
    calc = BuildPlateConstraintCalculator(kossel_config.replace(arm_length=300))
    assert calc.get_carriage_constraint_analysis()['limiting_factor'] == LIMIT_ARM_REACH


def test_clearance_and_description(calculator):
    assert calculator.get_constraint_clearance() == pytest.approx(195.0 - 141.0 - 10.0)
    assert calculator.get_active_constraint_description() == \
        'Effector Edge (Carriage Limit) (44.0mm clearance)'


def test_build_volume_height_estimate(calculator):
    expected = min(math.sqrt(315.0 ** 2 - 40.0 ** 2), 520.0 - 30.0 - 20.0)
    assert calculator.calculate_build_volume_height() == pytest.approx(expected)


def test_build_volume_height_estimate_survives_short_arms(kossel_config):
    calc = BuildPlateConstraintCalculator(kossel_config.replace(arm_length=20))
    assert calc.calculate_build_volume_height() == 0.0


def test_point_in_build_area(calculator):
    assert calculator.is_point_in_build_area(0.0, 0.0, 10.0)
    assert calculator.is_point_in_build_area(100.0, 99.0)
    assert not calculator.is_point_in_build_area(150.0, 0.0)
    assert not calculator.is_point_in_build_area(0.0, 0.0, -1.0)


def test_physical_bed_only_affects_the_comparison(calculator):
    before = calculator.calculate_real_build_plate_radius()
    calculator.set_physical_bed_radius(180.0)
    assert calculator.calculate_real_build_plate_radius() == before

    comparison = calculator.get_build_area_comparison()
    assert comparison['physical_radius'] == 180.0
    assert comparison['difference'] == pytest.approx(39.0)
    assert comparison['is_real_smaller']
    assert not comparison['is_real_larger']


def test_constraint_report(calculator):
    report = calculator.generate_constraint_report()
    radii = {c['type']: c['radius'] for c in report['constraints']}
    assert radii == {
        ConstraintType.EFFECTOR_EDGE: pytest.approx(141.0),
        ConstraintType.EFFECTOR_TIP: pytest.approx(181.0),
        ConstraintType.HORIZONTAL_EXTRUSIONS: pytest.approx(165.0),
    }
    assert [c['active'] for c in report['constraints']] == [True, False, False]
    assert 'is optimal' in report['recommendation']

    calculator.set_constraint_type('effector-tip')
    report = calculator.generate_constraint_report()
    assert '"effector-edge"' in report['recommendation']


def test_update_config_replaces_snapshot(calculator, kossel_config):
    calculator.update_config(rod_radius=9)
    assert calculator.config.rod_radius == 9.0
    assert kossel_config.rod_radius == 4.0
    assert calculator.calculate_real_build_plate_radius() == pytest.approx(136.0)
