#!/usr/bin/env python3
"""
Delta Calculations - Build Volume Façade
========================================
Inverse kinematics, position validation and build volume for one frame
configuration. Owns a BuildPlateConstraintCalculator and keeps it in step
with the configuration snapshots it is given.

Every calculation is a pure function of the current snapshots and the
position passed in; nothing is cached between calls.
"""

import logging
import math
import warnings
from typing import Dict, List

import numpy as np

from deltabot_config import BuildVolumeConfig, ConfigError, ConstraintType, RobotConfig
from deltabot_config import limits as limit_config
from deltabot_config import physical as phys_config
from deltabot_config import presets as preset_config

from . import geometry
from .constraint_calculator import BuildPlateConstraintCalculator
from .inverse_kinematics import carriage_height
from .validation import as_position

logger = logging.getLogger(__name__)


class DeltaCalculations:
    """
    Kinematics and build volume of a linear delta printer.

    This class encapsulates:
    - Carriage positions for an effector position (inverse kinematics)
    - Reachability checks and clamping of effector positions
    - Build volume from collision, carriage travel and arm reach limits
    - Derived parameters and frame statistics
    """

    def __init__(self, config: RobotConfig, build_config: BuildVolumeConfig = None):
        """
        Args:
            config: Frame configuration snapshot
            build_config: Constraint selection (defaults to BuildVolumeConfig())
        """
        if build_config is None:
            build_config = BuildVolumeConfig()
        if not isinstance(config, RobotConfig):
            raise ConfigError(f"config must be a RobotConfig, got {type(config).__name__}")
        if not isinstance(build_config, BuildVolumeConfig):
            raise ConfigError(
                f"build_config must be a BuildVolumeConfig, got {type(build_config).__name__}")
        self._config = config
        self._build_config = build_config
        self._constraint_calculator = BuildPlateConstraintCalculator(
            config,
            physical_bed_radius=build_config.physical_bed_radius,
            constraint_type=build_config.constraint_type,
        )

    @classmethod
    def from_preset(cls, name: str, build_config: BuildVolumeConfig = None) -> 'DeltaCalculations':
        """Load a preset and replace its placeholder arm length with the optimal one."""
        calc = cls(RobotConfig.from_preset(name), build_config)
        calc.update_config(arm_length=calc.calculate_optimal_arm_length())
        logger.info("Loaded preset %s: arm length %.1fmm", name, calc.config.arm_length)
        return calc

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> RobotConfig:
        return self._config

    @property
    def build_config(self) -> BuildVolumeConfig:
        return self._build_config

    @property
    def constraint_calculator(self) -> BuildPlateConstraintCalculator:
        return self._constraint_calculator

    def update_config(self, **changes) -> RobotConfig:
        """Store a new snapshot with the given changes and return it."""
        self._config = self._config.replace(**changes)
        self._constraint_calculator.config = self._config
        return self._config

    def update_build_config(self, **changes) -> BuildVolumeConfig:
        """Store a new build volume snapshot with the given changes and return it."""
        self._build_config = self._build_config.replace(**changes)
        self._constraint_calculator.set_physical_bed_radius(self._build_config.physical_bed_radius)
        self._constraint_calculator.set_constraint_type(self._build_config.constraint_type)
        return self._build_config

    def _sync_calculator(self) -> None:
        self._constraint_calculator.config = self._config
        self._constraint_calculator.set_constraint_type(self._build_config.constraint_type)

    # -------------------------------------------------------------------------
    # Inverse kinematics
    # -------------------------------------------------------------------------

    def calculate_carriage_positions(self, effector_position) -> np.ndarray:
        """
        Carriage Z of each tower for an effector position.

        For tower i the rod joins the tower anchor to the effector nub pair
        centre; the carriage sits sqrt(L² - d²) above the nub. An unreachable
        tower yields nan, which is propagated rather than clamped.

        Args:
            effector_position: Effector centre [x, y, z] (or mapping with x, y, z)

        Returns:
            Array [z0, z1, z2] (mm)
        """
        position = as_position(effector_position)
        carriages = np.empty(phys_config.TOWER_COUNT, dtype=np.float64)
        for i in range(phys_config.TOWER_COUNT):
            tower_pos = geometry.tower_position(i, self._config.bot_radius)
            nub_offset = geometry.arm_position(
                i * phys_config.ARMS_PER_TOWER, self._config.effector_radius, 0, True)
            carriages[i] = carriage_height(tower_pos, position + nub_offset, self._config.arm_length)
        return carriages

    def carriage_travel(self) -> Dict:
        """Lowest and highest carriage centre Z."""
        limits = self._constraint_calculator.carriage_limits()
        return {'min_z': limits['min_z'], 'max_z': limits['max_z']}

    def validate_position(self, effector_position) -> Dict:
        """
        Check whether an effector position is reachable.

        Returns:
            Dictionary containing:
                - position: the position checked [x, y, z]
                - carriage_positions: [z0, z1, z2] (nan where unreachable)
                - is_reachable: bool, all carriages finite and within travel
                - arm_angles: rod elevation per tower (radians), nan where unreachable
        """
        position = as_position(effector_position)
        carriage_positions = self.calculate_carriage_positions(position)

        travel = self.carriage_travel()
        is_reachable = bool(np.all(np.isfinite(carriage_positions))
                            and np.all(carriage_positions >= travel['min_z'])
                            and np.all(carriage_positions <= travel['max_z']))

        arm_angles = []
        for i, carriage_z in enumerate(carriage_positions):
            tower_pos = geometry.tower_position(i, self._config.bot_radius)
            distance = geometry.horizontal_distance(tower_pos, position)
            arm_angles.append(math.atan2(carriage_z - position[2], distance))

        return {
            'position': position,
            'carriage_positions': carriage_positions,
            'is_reachable': is_reachable,
            'arm_angles': arm_angles,
        }

    # -------------------------------------------------------------------------
    # Build volume
    # -------------------------------------------------------------------------

    def calculate_real_build_plate_radius(self) -> float:
        self._sync_calculator()
        return self._constraint_calculator.calculate_real_build_plate_radius()

    def calculate_kinematic_limit(self) -> float:
        """Horizontal reach with a fully horizontal arm, less a safety margin (mm, >= 0)."""
        tower_to_carriage = self._config.bot_radius - self._config.carriage_inset
        return max(0.0, tower_to_carriage + self._config.arm_length
                   - self._config.effector_radius - limit_config.KINEMATIC_SAFETY_MARGIN)

    def calculate_build_height(self) -> float:
        """Distance from the lowest effector Z to the effector Z at the endstops (mm, >= 0)."""
        half_height = self._config.half_height
        effector_endstop_z = (half_height - self._config.arm_length
                              - self._config.carriage_height / 2.0)
        effector_zero_z = -half_height + self._config.effector_height / 2.0
        return max(0.0, effector_endstop_z - effector_zero_z)

    def calculate_build_volume(self) -> Dict:
        """
        Combine the collision/carriage radius with the arm reach limit.

        The physical bed radius is listed in the constraint analysis for
        display but never enters the result.

        Returns:
            Dictionary containing:
                - max_print_radius: min(constraint radius, kinematic limit) (mm)
                - recommended_print_radius: 0.9 * max_print_radius (mm)
                - build_volume_height: (mm)
                - constraint_analysis: list of {type, value, is_limiting}
                - tower_radius, printable_radius, print_bed_radius: (mm)
        """
        self._sync_calculator()
        theoretical_radius = self._constraint_calculator.calculate_real_build_plate_radius()
        kinematic_radius = self.calculate_kinematic_limit()

        max_print_radius = min(theoretical_radius, kinematic_radius)
        recommended_print_radius = max_print_radius * limit_config.RECOMMENDED_RADIUS_FACTOR
        build_volume_height = self.calculate_build_height()

        constraint_analysis = []
        for name, value in (('Theoretical', theoretical_radius),
                            ('Kinematic', kinematic_radius),
                            ('Physical Bed', self._build_config.physical_bed_radius)):
            constraint_analysis.append({
                'type': name,
                'value': value,
                'is_limiting': abs(value - max_print_radius) <= limit_config.LIMITING_TOLERANCE,
            })

        return {
            'max_print_radius': max_print_radius,
            'recommended_print_radius': recommended_print_radius,
            'build_volume_height': build_volume_height,
            'constraint_analysis': constraint_analysis,
            'tower_radius': self._config.bot_radius,
            'printable_radius': recommended_print_radius,
            'print_bed_radius': max_print_radius,
        }

    def refresh_build_config(self) -> BuildVolumeConfig:
        """
        Recompute the build volume and store it in the build config snapshot.

        Warns once per refresh if the configuration leaves no printable radius.
        """
        build_volume = self.calculate_build_volume()
        if build_volume['max_print_radius'] <= 0.0:
            logger.warning("No printable radius for bot_radius=%.1f arm_length=%.1f effector_radius=%.1f",
                           self._config.bot_radius, self._config.arm_length,
                           self._config.effector_radius)
            warnings.warn("Configuration has no printable radius; check arm length and effector size")

        self._build_config = self._build_config.replace(
            max_print_radius=build_volume['max_print_radius'],
            recommended_print_radius=build_volume['recommended_print_radius'],
            build_volume_height=build_volume['build_volume_height'],
        )
        return self._build_config

    def calculate_theoretical_radius(self) -> float:
        """
        Rule-of-thumb printable radius from tower offset and safety margins,
        without carriage travel. Never below MIN_BUILD_RADIUS.
        """
        constraint_type = self._build_config.constraint_type
        if constraint_type is ConstraintType.EFFECTOR_TIP:
            radius = self._config.bot_radius - (self._config.tower_offset + limit_config.SAFETY_MARGIN)
        elif constraint_type is ConstraintType.HORIZONTAL_EXTRUSIONS:
            radius = self._config.bot_radius + limit_config.FRAME_CLEARANCE
        else:
            radius = self._config.bot_radius - (self._config.effector_radius + self._config.tower_offset
                                                + limit_config.SAFETY_MARGIN)
        return max(limit_config.MIN_BUILD_RADIUS, radius)

    def calculate_work_envelope(self) -> Dict:
        """Theoretical maximum reach: radius and height (mm)."""
        max_radius = min(
            self._config.arm_length - self._config.effector_radius,
            self._config.bot_radius - self._config.carriage_inset - self._config.effector_radius,
        )
        return {
            'radius': max(0.0, max_radius),
            'height': self.calculate_build_height(),
        }

    def calculate_tower_angles(self) -> List[float]:
        return geometry.tower_angles()

    # -------------------------------------------------------------------------
    # Position clamping
    # -------------------------------------------------------------------------

    def constrain_position(self, effector_position) -> np.ndarray:
        """
        Clamp an effector position into the build volume.

        1. Radially onto the max print radius circle, keeping the angle.
        2. Vertically into [-H/2 + effector_height/2, H/2 - L - carriage_height/2].
        3. Raised, once, by the deficit of the lowest carriage below its
           minimum height.

        Returns:
            New clamped position [x, y, z]; the input is not modified
        """
        position = as_position(effector_position)
        constraint_radius = self.calculate_build_volume()['max_print_radius']

        x, y, z = position
        if math.hypot(x, y) > constraint_radius:
            angle = math.atan2(y, x)
            x = math.cos(angle) * constraint_radius
            y = math.sin(angle) * constraint_radius

        half_height = self._config.half_height
        max_z = half_height - self._config.arm_length - self._config.carriage_height / 2.0
        min_z = -half_height + self._config.effector_height / 2.0
        z = geometry.clamp(z, min_z, max_z)

        return self._apply_carriage_constraints(np.array([x, y, z]))

    def minimum_carriage_height(self) -> float:
        """Lowest carriage Z allowed above the build plate and frame bottom."""
        half_height = self._config.half_height
        build_plate_level = -half_height + phys_config.PLATFORM_HEIGHT
        return max(build_plate_level + limit_config.CARRIAGE_PLATE_CLEARANCE,
                   -half_height + limit_config.CARRIAGE_FRAME_CLEARANCE)

    def _apply_carriage_constraints(self, position: np.ndarray) -> np.ndarray:
        carriage_positions = self.calculate_carriage_positions(position)
        if not np.all(np.isfinite(carriage_positions)):
            # Unreachable here; no carriage height to correct against
            logger.debug("Skipping carriage correction at unreachable position %s", position)
            return position

        min_allowed = self.minimum_carriage_height()
        lowest = float(np.min(carriage_positions))
        if lowest >= min_allowed:
            return position

        # Raising the effector by dz raises every carriage by dz, so one step suffices
        constrained = position.copy()
        constrained[2] += min_allowed - lowest
        return constrained

    def debug_carriage_constraints(self, effector_position) -> Dict:
        """Show what constrain_position does to a position and why."""
        original = as_position(effector_position)
        carriage_positions = self.calculate_carriage_positions(original)
        constrained = self.constrain_position(original)
        min_allowed = self.minimum_carriage_height()

        violations = []
        for i, carriage_z in enumerate(carriage_positions):
            violation = min_allowed - carriage_z
            if violation > 0:
                violations.append({'carriage': i, 'violation': violation})

        return {
            'original': original,
            'constrained': constrained,
            'carriage_positions': carriage_positions,
            'constrained_carriage_positions': self.calculate_carriage_positions(constrained),
            'build_plate_level': -self._config.half_height + phys_config.PLATFORM_HEIGHT,
            'min_allowed_carriage_z': min_allowed,
            'constraint_applied': bool(np.any(
                np.abs(constrained - original) > limit_config.POSITION_CHANGE_TOLERANCE)),
            'violations': violations,
        }

    # -------------------------------------------------------------------------
    # Derived parameters
    # -------------------------------------------------------------------------

    def calculate_optimal_arm_length(self) -> float:
        """
        Arm length suggested by the frame geometry, kept within
        [0.8 * bot_radius, bot_height - carriage_height / 2].
        """
        config = self._config
        arm_length = (config.bot_radius * 2 - config.effector_radius * 2
                      - config.carriage_inset + config.carriage_height)
        return geometry.clamp(arm_length,
                              config.bot_radius * limit_config.MIN_ARM_LENGTH_FACTOR,
                              config.bot_height - config.carriage_height / 2.0)

    def calculate_dependent_parameters(self) -> Dict:
        """
        Propose updates to parameters that follow from the others.

        Only values that differ from the current ones beyond a small
        tolerance are returned; nothing is applied.

        Returns:
            Dictionary of parameter name -> proposed value
        """
        config = self._config
        updates = {}

        optimal_diagonal_rod = config.bot_radius * limit_config.DIAGONAL_ROD_FACTOR
        if abs(config.diagonal_rod_length - optimal_diagonal_rod) > limit_config.DIAGONAL_ROD_TOLERANCE:
            updates['diagonal_rod_length'] = float(round(optimal_diagonal_rod))

        if not math.isclose(config.tower_offset, config.carriage_inset):
            updates['tower_offset'] = config.carriage_inset

        max_effector_radius = config.bot_radius * limit_config.MAX_EFFECTOR_FRACTION
        if config.effector_radius > max_effector_radius:
            updates['effector_radius'] = float(math.floor(max_effector_radius))

        optimal_arm_length = self.calculate_optimal_arm_length()
        if abs(config.arm_length - optimal_arm_length) > limit_config.ARM_LENGTH_TOLERANCE:
            updates['arm_length'] = optimal_arm_length

        return updates

    def validate_configuration(self) -> Dict:
        """
        Sanity check of the whole configuration.

        Problems are reported, not raised, so absurd geometries can still
        be explored.

        Returns:
            Dictionary with is_valid, errors and warnings
        """
        config = self._config
        errors = []
        config_warnings = []

        if config.arm_length < config.bot_radius * limit_config.MIN_ARM_TO_RADIUS:
            errors.append('Arm length too short for bot radius')

        if config.effector_radius > config.bot_radius * limit_config.LARGE_EFFECTOR_TO_RADIUS:
            config_warnings.append(
                f"{preset_config.MSG_COLLISION_WARNING}: effector radius very large compared to bot radius")

        if config.carriage_inset > config.bot_radius * limit_config.LARGE_INSET_TO_RADIUS:
            config_warnings.append('Carriage inset may limit build volume significantly')

        if self.calculate_kinematic_limit() < config.bot_radius * limit_config.LOW_REACH_TO_RADIUS:
            config_warnings.append(f"{preset_config.MSG_KINEMATIC_WARNING}: limited kinematic reach")

        build_volume = self.calculate_build_volume()
        if build_volume['max_print_radius'] < limit_config.SMALL_BUILD_RADIUS:
            config_warnings.append('Very small build area calculated')

        for message in errors + config_warnings:
            logger.warning("Configuration check: %s", message)

        return {
            'is_valid': len(errors) == 0,
            'errors': errors,
            'warnings': config_warnings,
        }

    def calculate_frame_stats(self) -> Dict:
        """Frame dimensions, material totals and printable volume."""
        build_volume = self.calculate_build_volume()
        printable_radius = build_volume['recommended_print_radius']
        build_volume_height = build_volume['build_volume_height']
        build_volume_cubic_mm = math.pi * printable_radius ** 2 * build_volume_height

        return {
            'tower_radius': self._config.bot_radius,
            'tower_circumference': 2 * math.pi * self._config.bot_radius,
            'total_height': self._config.bot_height,
            'total_rail_length': self._config.bot_height * phys_config.TOTAL_ARMS,
            'total_arm_length': self._config.arm_length * phys_config.TOTAL_ARMS,
            'printable_radius': printable_radius,
            'print_bed_radius': build_volume['max_print_radius'],
            'build_volume_height': build_volume_height,
            'build_volume_cubic_mm': build_volume_cubic_mm,
            'build_volume_liters': build_volume_cubic_mm / 1e6,
        }

    def print_build_report(self):
        """Print the build volume and constraint analysis in readable format."""
        build_volume = self.calculate_build_volume()
        stats = self.calculate_frame_stats()
        calculator = self._constraint_calculator

        print("\n" + "=" * 70)
        print("DELTA BUILD VOLUME")
        print("=" * 70)
        print(f"  Tower radius:      {self._config.bot_radius:.1f} mm")
        print(f"  Arm length:        {self._config.arm_length:.1f} mm")
        print(f"  Constraint:        {calculator.get_active_constraint_description()}")
        print(f"  Max print radius:  {build_volume['max_print_radius']:.1f} mm")
        print(f"  Recommended:       {build_volume['recommended_print_radius']:.1f} mm")
        print(f"  Build height:      {build_volume['build_volume_height']:.1f} mm")
        print(f"  Build volume:      {stats['build_volume_liters']:.2f} L")

        print("\n  Constraints:")
        for constraint in build_volume['constraint_analysis']:
            marker = '*' if constraint['is_limiting'] else ' '
            print(f"   {marker} {constraint['type']:<14} {constraint['value']:8.1f} mm")
        print(f"\n  {calculator.generate_constraint_report()['recommendation']}")


if __name__ == "__main__":
    # Example usage
    calc = DeltaCalculations.from_preset('kossel-standard')
    calc.print_build_report()

    print("\n" + "=" * 70)
    print("CARRIAGE POSITIONS")
    print("=" * 70)

    for point in ([0.0, 0.0, -100.0], [50.0, 20.0, -150.0], [400.0, 0.0, 0.0]):
        result = calc.validate_position(point)
        carriages = ', '.join(f"{z:.2f}" for z in result['carriage_positions'])
        print(f"\n  Effector:  {point}")
        print(f"  Carriages: [{carriages}] mm")
        print(f"  Reachable: {result['is_reachable']}")
        print(f"  Clamped:   {calc.constrain_position(point).round(2).tolist()}")
