#!/usr/bin/env python3
"""
Build Plate Constraint Module

Computes the printable radius allowed by a physical collision policy and
by carriage travel. The physical bed radius is carried for comparison
reports only; it never tightens or loosens the computed radius.
"""

import logging
import math
from typing import Dict

import scipy.optimize

from deltabot_config import ConfigError, ConstraintType, RobotConfig, require_real
from deltabot_config import limits as limit_config
from deltabot_config import physical as phys_config

from . import geometry
from .inverse_kinematics import carriage_height, horizontal_distance_sq

logger = logging.getLogger(__name__)

CONSTRAINT_NAMES = {
    ConstraintType.EFFECTOR_EDGE: 'Effector Edge',
    ConstraintType.EFFECTOR_TIP: 'Effector Tip',
    ConstraintType.HORIZONTAL_EXTRUSIONS: 'Frame Extrusions',
}

LIMIT_CARRIAGE_POSITION = 'carriage_position'
LIMIT_ARM_REACH = 'arm_reach'
LIMIT_GEOMETRY = 'geometry'


class BuildPlateConstraintCalculator:
    """
    Real (collision free) build plate radius for a frame configuration.

    The radius is the smaller of a collision bound, chosen by the active
    ConstraintType, and the carriage-constrained radius found by a
    stepped radial search over carriage travel.
    """

    def __init__(self, config: RobotConfig,
                 physical_bed_radius: float = phys_config.DEFAULT_PHYSICAL_BED_RADIUS,
                 constraint_type=ConstraintType.EFFECTOR_EDGE,
                 tower_collision_offset: float = limit_config.TOWER_COLLISION_OFFSET):
        """
        Args:
            config: Frame configuration snapshot
            physical_bed_radius: Physical bed radius, reporting only (mm)
            constraint_type: Active collision policy (enum or its string value)
            tower_collision_offset: Safety margin to the towers (mm)
        """
        if not isinstance(config, RobotConfig):
            raise ConfigError(f"config must be a RobotConfig, got {type(config).__name__}")
        self.config = config
        self.physical_bed_radius = require_real('physical_bed_radius', physical_bed_radius)
        self.constraint_type = ConstraintType.coerce(constraint_type)
        self.tower_collision_offset = require_real('tower_collision_offset', tower_collision_offset)

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def set_constraint_type(self, constraint_type) -> None:
        self.constraint_type = ConstraintType.coerce(constraint_type)

    def set_tower_collision_offset(self, offset: float) -> None:
        self.tower_collision_offset = require_real('tower_collision_offset', offset)

    def set_physical_bed_radius(self, radius: float) -> None:
        self.physical_bed_radius = require_real('physical_bed_radius', radius)

    def update_config(self, **changes) -> None:
        """Replace the configuration snapshot with a copy carrying changes."""
        self.config = self.config.replace(**changes)

    # -------------------------------------------------------------------------
    # Collision constraints
    # -------------------------------------------------------------------------

    def calculate_real_build_plate_radius(self) -> float:
        """Printable radius under the active constraint type (mm, >= 0)."""
        return self.calculate_constraint_radius(self.constraint_type)

    def calculate_constraint_radius(self, constraint_type) -> float:
        """
        Printable radius under a given constraint type.

        effector-edge: the effector body must clear the tower rails.
        effector-tip: only the nozzle must clear them.
        horizontal-extrusions: the frame extrusions at the tower radius bound it.
        Each bound is further limited by carriage travel and floored at 0.
        """
        constraint_type = ConstraintType.coerce(constraint_type)
        tower_edge_radius = self.config.bot_radius - self.config.rod_radius

        if constraint_type is ConstraintType.EFFECTOR_TIP:
            max_radius = tower_edge_radius - self.tower_collision_offset
        elif constraint_type is ConstraintType.HORIZONTAL_EXTRUSIONS:
            max_radius = (self.config.bot_radius - limit_config.EXTRUSION_THICKNESS
                          - self.tower_collision_offset)
        else:
            max_radius = (tower_edge_radius - self.config.effector_radius
                          - self.tower_collision_offset)

        carriage_radius = self.calculate_carriage_constrained_radius()
        return max(0.0, min(max_radius, carriage_radius))

    def get_constraint_clearance(self) -> float:
        """Margin between the real radius and the towers (diagnostic, mm)."""
        real_radius = self.calculate_real_build_plate_radius()
        return self.config.bot_radius - real_radius - self.tower_collision_offset

    def get_active_constraint_description(self) -> str:
        """Human readable summary, e.g. 'Effector Edge (Arm Reach) (44.0mm clearance)'."""
        analysis = self.get_carriage_constraint_analysis()
        clearance = self.get_constraint_clearance()

        description = CONSTRAINT_NAMES[self.constraint_type]
        if analysis['limiting_factor'] == LIMIT_CARRIAGE_POSITION:
            description += ' (Carriage Limit)'
        elif analysis['limiting_factor'] == LIMIT_ARM_REACH:
            description += ' (Arm Reach)'
        description += f" ({clearance:.1f}mm clearance)"
        return description

    # -------------------------------------------------------------------------
    # Carriage travel
    # -------------------------------------------------------------------------

    def carriage_limits(self) -> Dict:
        """Lowest/highest carriage centre Z and the travel between them."""
        half_height = self.config.half_height
        max_z = half_height - self.config.carriage_height / 2.0
        min_z = -half_height + self.config.carriage_height / 2.0
        return {
            'min_z': min_z,
            'max_z': max_z,
            'travel_range': max_z - min_z,
        }

    def required_carriage_height(self, tower_index: int, effector_pos) -> float:
        """
        Carriage Z a tower needs for the effector centre at effector_pos.

        The effector is treated as a point and the ball joint anchor sits
        carriage_inset inside the tower axis. Returns nan if unreachable.
        """
        anchor = geometry.tower_position(
            tower_index, self.config.bot_radius - self.config.carriage_inset)
        return carriage_height(anchor, effector_pos, self.config.arm_length)

    def _carriage_margin(self, radius: float, test_z: float, min_z: float, max_z: float) -> float:
        """
        Smallest travel margin over the three towers with the effector at
        radius towards each tower. Negative means infeasible.
        """
        margin = math.inf
        for tower in range(phys_config.TOWER_COUNT):
            direction = geometry.tower_position(tower, radius)
            effector_pos = (direction[0], direction[1], test_z)
            carriage_z = self.required_carriage_height(tower, effector_pos)
            if math.isnan(carriage_z):
                # Out of reach: the rod shortfall is negative and shrinks to 0 at the boundary
                anchor = geometry.tower_position(
                    tower, self.config.bot_radius - self.config.carriage_inset)
                arm_sq = self.config.arm_length * self.config.arm_length
                shortfall = arm_sq - horizontal_distance_sq(anchor, effector_pos)
                margin = min(margin, shortfall) if shortfall < 0.0 else -1.0
                continue
            margin = min(margin, carriage_z - min_z, max_z - carriage_z)
        return margin

    def _search_parameters(self):
        carriage = self.carriage_limits()
        test_z = carriage['min_z'] + limit_config.CARRIAGE_TEST_HEIGHT_OFFSET
        max_test_radius = self.config.bot_radius + limit_config.CARRIAGE_SEARCH_OVERSHOOT
        return test_z, carriage['min_z'], carriage['max_z'], max_test_radius

    def _stepped_search(self):
        """Returns (largest feasible radius, first infeasible radius or None)."""
        test_z, min_z, max_z, max_test_radius = self._search_parameters()
        step = limit_config.CARRIAGE_SEARCH_STEP

        max_valid_radius = 0.0
        if max_test_radius < 0.0 or math.isnan(max_test_radius):
            return max_valid_radius, None

        steps = int(max_test_radius // step)
        for i in range(steps + 1):
            test_radius = i * step
            if self._carriage_margin(test_radius, test_z, min_z, max_z) >= 0.0:
                max_valid_radius = test_radius
            else:
                # Feasibility shrinks monotonically with radius; stop at the first failure
                return max_valid_radius, test_radius
        return max_valid_radius, None

    def calculate_carriage_constrained_radius(self) -> float:
        """
        Largest radius, in CARRIAGE_SEARCH_STEP increments, at which all
        three carriages stay within travel with the effector near bed level.

        Precision is one search step. Returns 0 when even the centre fails.
        """
        radius, failed_at = self._stepped_search()
        logger.debug("Carriage constrained radius %.1fmm (first failure at %s)",
                     radius, failed_at)
        return radius

    def calculate_carriage_boundary_radius(self) -> float:
        """
        Feasibility boundary located to BOUNDARY_TOLERANCE inside the first
        failing search step. Diagnostic only; the stepped radius stays
        authoritative for the build volume.
        """
        radius, failed_at = self._stepped_search()
        if failed_at is None or failed_at == 0.0:
            return radius

        test_z, min_z, max_z, _ = self._search_parameters()
        return scipy.optimize.brentq(
            self._carriage_margin, radius, failed_at,
            args=(test_z, min_z, max_z), xtol=limit_config.BOUNDARY_TOLERANCE)

    def get_carriage_constraint_analysis(self) -> Dict:
        """
        Classify what limits the carriage-constrained radius.

        Returns:
            Dictionary containing:
                - max_radius: stepped carriage-constrained radius (mm)
                - boundary_radius: refined feasibility boundary (mm)
                - limiting_factor: 'carriage_position', 'arm_reach' or 'geometry'
                - carriage_limits: dict with min_z, max_z, travel_range
        """
        max_radius = self.calculate_carriage_constrained_radius()
        theoretical_max_radius = self.config.arm_length - self.config.effector_radius

        if max_radius < theoretical_max_radius * limit_config.ARM_REACH_THRESHOLD:
            limiting_factor = LIMIT_CARRIAGE_POSITION
        elif max_radius < theoretical_max_radius:
            limiting_factor = LIMIT_ARM_REACH
        else:
            limiting_factor = LIMIT_GEOMETRY

        return {
            'max_radius': max_radius,
            'boundary_radius': self.calculate_carriage_boundary_radius(),
            'limiting_factor': limiting_factor,
            'carriage_limits': self.carriage_limits(),
        }

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def calculate_build_volume_height(self) -> float:
        """Height estimate from nearly vertical arms and the usable tower height."""
        arm_length = self.config.arm_length
        effector_radius = self.config.effector_radius
        max_height = math.sqrt(max(0.0, arm_length * arm_length - effector_radius * effector_radius))
        available_height = (self.config.bot_height - self.config.carriage_height
                            - limit_config.BUILD_HEIGHT_SAFETY_MARGIN)
        return min(max_height, available_height)

    def is_point_in_build_area(self, x: float, y: float, height: float = 0.0) -> bool:
        """True if (x, y) is within the real radius and height is in [0, max height]."""
        real_radius = self.calculate_real_build_plate_radius()
        max_height = self.calculate_build_volume_height()
        return math.hypot(x, y) <= real_radius and 0.0 <= height <= max_height

    def get_build_area_comparison(self) -> Dict:
        """Compare the real build area with the physical bed."""
        real_radius = self.calculate_real_build_plate_radius()
        difference = real_radius - self.physical_bed_radius
        return {
            'real_radius': real_radius,
            'physical_radius': self.physical_bed_radius,
            'difference': abs(difference),
            'is_real_larger': difference > 0,
            'is_real_smaller': difference < 0,
        }

    def generate_constraint_report(self) -> Dict:
        """
        Radius under every constraint type and a recommendation.

        Returns:
            Dictionary containing:
                - constraints: list of {type, radius, active}
                - recommendation: str
        """
        constraints = [
            {
                'type': constraint_type,
                'radius': self.calculate_constraint_radius(constraint_type),
                'active': constraint_type is self.constraint_type,
            }
            for constraint_type in ConstraintType
        ]

        most_limiting = min(constraints, key=lambda c: c['radius'])
        if most_limiting['type'] is not self.constraint_type:
            recommendation = (
                f'Consider switching to "{most_limiting["type"].value}" constraint for the most '
                f'conservative build area ({most_limiting["radius"]:.1f}mm radius)')
        else:
            recommendation = (
                f'Current constraint "{self.constraint_type.value}" is optimal for this configuration')

        return {
            'constraints': constraints,
            'recommendation': recommendation,
        }
