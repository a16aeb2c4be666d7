#!/usr/bin/env python3
"""
Validation Module

Boundary checks for effector positions and configuration values.
Type errors fail fast here so the kinematics math never sees them;
range problems are reported as errors/warnings lists instead.
"""

import math
import numbers
from collections.abc import Mapping
from typing import Dict

import numpy as np

from deltabot_config import ValidationError, RobotConfig
from deltabot_config import presets as preset_config


class PositionError(ValidationError):
    """Effector position that is not three real numbers."""


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def as_position(position) -> np.ndarray:
    """
    Convert a caller-supplied position to a fresh [x, y, z] array.

    Accepts a 3-sequence, a numpy array, or a mapping with x, y and z
    keys. The input is never modified.

    Raises:
        PositionError: if the position is not three real numbers
    """
    if isinstance(position, Mapping):
        missing = [k for k in ('x', 'y', 'z') if k not in position]
        if missing:
            raise PositionError(f"Position mapping is missing {', '.join(missing)}")
        values = [position['x'], position['y'], position['z']]
    elif isinstance(position, np.ndarray):
        if position.shape != (3,) or not np.issubdtype(position.dtype, np.number) \
                or np.issubdtype(position.dtype, np.bool_):
            raise PositionError(
                f"Position array must have shape (3,) and a numeric dtype, "
                f"got shape {position.shape} dtype {position.dtype}")
        return position.astype(np.float64)
    else:
        try:
            values = list(position)
        except TypeError:
            raise PositionError(
                f"Position must be a sequence of three numbers, got {type(position).__name__}") from None
        if len(values) != 3:
            raise PositionError(f"Position must have 3 coordinates, got {len(values)}")

    for axis, value in zip('xyz', values):
        if not _is_real(value):
            raise PositionError(
                f"Position {axis} must be a number, got {type(value).__name__} {value!r}")
    return np.array(values, dtype=np.float64)


def validate_parameter(value, name: str, limits: Dict = None) -> Dict:
    """
    Check a single parameter against its configured range.

    Args:
        value: Candidate value
        name: Parameter name, also used to look up the default limits
        limits: Dict with min, max and default (defaults to PARAMETER_LIMITS[name])

    Returns:
        Dictionary containing:
            - is_valid: bool
            - errors: list of messages
            - warnings: list of messages
    """
    if limits is None:
        limits = preset_config.PARAMETER_LIMITS[name]

    errors = []
    warnings = []

    if not _is_real(value) or math.isnan(value):
        errors.append(f"{name}: {preset_config.MSG_INVALID_TYPE}")
    else:
        if not limits['min'] <= value <= limits['max']:
            message = preset_config.MSG_INVALID_RANGE.format(min=limits['min'], max=limits['max'])
            errors.append(f"{name}: {message} (got {value})")

        default = limits['default']
        if abs(value - default) > default * preset_config.DEFAULT_DEVIATION_FRACTION:
            warnings.append(f"{name}: Value differs significantly from recommended default")

    return {
        'is_valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings,
    }


def validate_parameters(values: Dict) -> Dict:
    """Run validate_parameter over every known parameter in values."""
    errors = []
    warnings = []
    for name, value in values.items():
        if name not in preset_config.PARAMETER_LIMITS:
            continue
        result = validate_parameter(value, name)
        errors.extend(result['errors'])
        warnings.extend(result['warnings'])
    return {
        'is_valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings,
    }


def validate_delta_config(config: RobotConfig) -> Dict:
    """
    Quick kinematic feasibility check of a frame geometry.

    Returns:
        Dictionary with is_valid, errors and warnings (see validate_parameter)
    """
    errors = []
    warnings = []

    min_arm_length = config.bot_radius - config.carriage_inset - config.effector_radius
    if config.arm_length < min_arm_length:
        errors.append('Arm length too short for current geometry')

    if config.effector_radius > config.bot_radius * 0.3:
        warnings.append('Effector radius is large compared to bot radius')

    reach_radius = config.bot_radius - config.carriage_inset + config.arm_length
    if reach_radius < config.bot_radius * 0.8:
        warnings.append(f"{preset_config.MSG_REACH_WARNING}: consider increasing arm length")

    return {
        'is_valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings,
    }
