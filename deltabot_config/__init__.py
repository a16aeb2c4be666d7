"""
Delta Printer Configuration Package
===================================

Centralized configuration for the delta printer kinematics.
Parameters are organized into logical modules:

- physical: frame, carriage, arm and effector defaults, tower layout
- limits: collision margins, search parameters, tolerances
- presets: known printer geometries and parameter ranges
- models: RobotConfig / BuildVolumeConfig snapshots and errors

Usage:
    from deltabot_config import physical, limits, presets

    # Or import specific values
    from deltabot_config import RobotConfig, ConstraintType
    from deltabot_config.limits import CARRIAGE_SEARCH_STEP
"""

from . import physical
from . import limits
from . import presets
from .models import (
    BuildVolumeConfig,
    ConfigError,
    ConstraintType,
    RobotConfig,
    ValidationError,
    require_real,
)

__version__ = '1.0.0'
__all__ = [
    'physical',
    'limits',
    'presets',
    'BuildVolumeConfig',
    'ConfigError',
    'ConstraintType',
    'RobotConfig',
    'ValidationError',
    'require_real',
]
