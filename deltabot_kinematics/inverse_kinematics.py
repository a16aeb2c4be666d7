#!/usr/bin/env python3
"""
Inverse Kinematics Module

One-sided Pythagorean solve shared by the constraint search and the
carriage position calculation: a diagonal rod of length L joins a
carriage ball joint on a vertical rail to an effector nub, so the
carriage sits sqrt(L² - d²) above the nub, where d is their horizontal
distance. Unreachable points (d > L) yield nan rather than raising.
"""

import math

import numpy as np


def horizontal_distance_sq(anchor, nub) -> float:
    """Squared XY distance between a rail anchor and an effector nub."""
    dx = anchor[0] - nub[0]
    dy = anchor[1] - nub[1]
    return dx * dx + dy * dy


def solve_vertical_component(arm_length: float, horizontal_dist_sq: float) -> float:
    """
    Vertical rise of a rod spanning the given horizontal distance.

    Args:
        arm_length: Rod length (mm)
        horizontal_dist_sq: Squared horizontal span (mm²)

    Returns:
        sqrt(arm_length² - horizontal_dist_sq), or nan if the span exceeds the rod
    """
    remainder = arm_length * arm_length - horizontal_dist_sq
    if remainder < 0.0 or math.isnan(remainder):
        return math.nan
    return math.sqrt(remainder)


def carriage_height(anchor, nub, arm_length: float) -> float:
    """
    Carriage Z needed to hold a nub at the given world position.

    Args:
        anchor: Rail anchor [x, y, ...] of the tower
        nub: Effector nub world position [x, y, z]
        arm_length: Rod length (mm)

    Returns:
        Carriage Z (mm), nan if unreachable
    """
    vertical = solve_vertical_component(arm_length, horizontal_distance_sq(anchor, nub))
    return nub[2] + vertical


def arm_length_from(anchor, carriage_z: float, nub) -> float:
    """Rod length implied by a carriage height and a nub position."""
    anchor_point = np.array([anchor[0], anchor[1], carriage_z])
    return float(np.linalg.norm(anchor_point - np.asarray(nub, dtype=np.float64)))
