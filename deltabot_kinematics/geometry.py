#!/usr/bin/env python3
"""
Delta Geometry Module

Places towers, rails and effector nubs on the three 120°-spaced towers.
Every other module derives its angles from here.

Convention: Z is up, tower i sits at i * 120° + 30° counter-clockwise
from +X, all points are numpy arrays [x, y, z] in mm.
"""

import math
from typing import List

import numpy as np

from deltabot_config import physical as phys_config


def tower_angle(tower_index: int) -> float:
    """Angle of a tower from the +X axis (radians)."""
    return tower_index * phys_config.TOWER_ANGLE_SPACING + phys_config.TOWER_ANGLE_OFFSET


def tower_angles() -> List[float]:
    """Angles of all three towers (radians): 30°, 150°, 270°."""
    return [tower_angle(i) for i in range(phys_config.TOWER_COUNT)]


def tower_position(tower_index: int, radius: float) -> np.ndarray:
    """
    Point on a tower's radial line at the given distance from the centre axis.

    Args:
        tower_index: Tower 0, 1 or 2
        radius: Distance from the central axis (mm)

    Returns:
        Position [x, y, 0]
    """
    angle = tower_angle(tower_index)
    return np.array([math.cos(angle) * radius, math.sin(angle) * radius, 0.0])


def arm_position(arm_index: int, radius: float, spacing: float = 0.0,
                 center_only: bool = False) -> np.ndarray:
    """
    Attachment point of one of the six arms.

    Arms 2i and 2i+1 belong to tower i. Unless center_only is set (or the
    spacing is zero) the point is shifted along the direction perpendicular
    to the tower's radial line: +spacing/2 for even arms, -spacing/2 for odd.

    Args:
        arm_index: Arm 0 to 5
        radius: Distance of the pair centre from the central axis (mm)
        spacing: Distance between the two points of a pair (mm)
        center_only: Return the pair centre instead

    Returns:
        Position [x, y, 0]
    """
    tower_index = arm_index // phys_config.ARMS_PER_TOWER
    base = tower_position(tower_index, radius)
    if center_only or spacing == 0:
        return base

    sign = -1.0 if arm_index % 2 else 1.0
    perp_angle = tower_angle(tower_index) + phys_config.PERPENDICULAR_OFFSET
    offset = sign * spacing / 2.0
    return base + np.array([math.cos(perp_angle) * offset, math.sin(perp_angle) * offset, 0.0])


def effector_nub_positions(effector_radius: float, spacing: float) -> List[np.ndarray]:
    """The six ball joint points on the effector, relative to its centre."""
    return [arm_position(i, effector_radius, spacing, False)
            for i in range(phys_config.TOTAL_ARMS)]


def rod_positions(bot_radius: float, rod_spacing: float) -> List[np.ndarray]:
    """The six vertical rail axes, two per tower."""
    return [arm_position(i, bot_radius, rod_spacing, False)
            for i in range(phys_config.TOTAL_ARMS)]


def horizontal_distance(a, b) -> float:
    """Distance between two points projected onto the XY plane."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; low wins if the range is empty."""
    return max(low, min(high, value))


def is_within_circle(x: float, y: float, center_x: float, center_y: float,
                     radius: float) -> bool:
    """True if (x, y) lies inside or on the circle."""
    return math.hypot(x - center_x, y - center_y) <= radius
