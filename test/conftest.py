import pytest

from deltabot_config import BuildVolumeConfig, RobotConfig
from deltabot_kinematics import BuildPlateConstraintCalculator, DeltaCalculations


@pytest.fixture
def kossel():
    """Kossel standard preset, arm length recalculated to 315mm."""
    return DeltaCalculations.from_preset('kossel-standard')


@pytest.fixture
def kossel_config(kossel):
    return kossel.config


@pytest.fixture
def short_arm_calc():
    """Frame whose rods run almost flat near the bed, so carriages can drop too low."""
    config = RobotConfig(bot_radius=195, bot_height=520, rod_radius=4, carriage_inset=25,
                         carriage_height=30, arm_length=200, effector_radius=40)
    return DeltaCalculations(config, BuildVolumeConfig())


@pytest.fixture
def travel_limited_calculator():
    """Long arms in a short frame: carriage travel bounds the radius at about 55mm."""
    config = RobotConfig(bot_radius=195, bot_height=400, rod_radius=4, carriage_inset=25,
                         carriage_height=30, arm_length=340, effector_radius=40)
    return BuildPlateConstraintCalculator(config)
