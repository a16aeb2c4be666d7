import dataclasses

import pytest

from deltabot_config import BuildVolumeConfig, ConfigError, ConstraintType, RobotConfig, presets


def test_defaults_are_floats():
    config = RobotConfig()
    assert config.bot_radius == 240.0
    assert all(isinstance(v, float) for v in config.as_dict().values())
    assert config.half_height == 350.0


def test_integers_are_coerced():
    config = RobotConfig(bot_radius=195)
    assert isinstance(config.bot_radius, float)


@pytest.mark.parametrize('value', ['195', True, None, [195]])
def test_non_numeric_fields_are_rejected(value):
    with pytest.raises(ConfigError, match='bot_radius'):
        RobotConfig(bot_radius=value)


def test_snapshots_are_frozen():
    config = RobotConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.bot_radius = 100.0


def test_replace_returns_new_snapshot():
    config = RobotConfig()
    changed = config.replace(arm_length=300)
    assert changed.arm_length == 300.0
    assert config.arm_length == 240.0

    with pytest.raises(ConfigError, match='arm_lenght'):
        config.replace(arm_lenght=300)
    with pytest.raises(ConfigError):
        config.replace(arm_length='long')


@pytest.mark.parametrize('name', sorted(presets.PRESET_CONFIGS))
def test_every_preset_loads(name):
    config = RobotConfig.from_preset(name)
    assert config.bot_radius == presets.PRESET_CONFIGS[name]['bot_radius']
    assert name in presets.PRESET_METADATA


def test_unknown_preset_is_rejected():
    with pytest.raises(ConfigError, match='kossel-huge'):
        RobotConfig.from_preset('kossel-huge')


def test_constraint_type_coercion():
    assert ConstraintType.coerce('effector-tip') is ConstraintType.EFFECTOR_TIP
    assert ConstraintType.coerce(ConstraintType.EFFECTOR_EDGE) is ConstraintType.EFFECTOR_EDGE
    assert ConstraintType.HORIZONTAL_EXTRUSIONS == 'horizontal-extrusions'
    with pytest.raises(ConfigError):
        ConstraintType.coerce('nozzle')


def test_build_volume_config():
    build_config = BuildVolumeConfig(constraint_type='horizontal-extrusions', physical_bed_radius=150)
    assert build_config.constraint_type is ConstraintType.HORIZONTAL_EXTRUSIONS
    assert build_config.physical_bed_radius == 150.0
    assert build_config.max_print_radius == 0.0

    with pytest.raises(ConfigError):
        BuildVolumeConfig(constraint_type='bogus')
    with pytest.raises(ConfigError):
        build_config.replace(max_radius=10)
