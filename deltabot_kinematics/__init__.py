"""
Delta Kinematics Module

Geometry, inverse kinematics and build volume constraints for linear
delta 3D printers.

Modules:
    - delta_calculations: Build volume façade (use this for most calculations)
    - constraint_calculator: Collision and carriage travel bounds on the print radius
    - inverse_kinematics: Effector position to carriage height solve
    - geometry: Tower, rail and effector nub placement
    - validation: Boundary checks for positions and parameters
"""

from .delta_calculations import DeltaCalculations
from .constraint_calculator import BuildPlateConstraintCalculator
from .inverse_kinematics import carriage_height, solve_vertical_component
from .geometry import arm_position, effector_nub_positions, tower_position
from .validation import PositionError, as_position, validate_delta_config, validate_parameter

__all__ = [
    'DeltaCalculations',
    'BuildPlateConstraintCalculator',
    'carriage_height',
    'solve_vertical_component',
    'arm_position',
    'effector_nub_positions',
    'tower_position',
    'PositionError',
    'as_position',
    'validate_delta_config',
    'validate_parameter',
]
