"""
Build Volume Constraint Parameters
==================================
Margins, search parameters and tolerances used by the constraint
calculator and the build volume façade.
"""

# =============================================================================
# COLLISION CONSTRAINTS (mm)
# =============================================================================

TOWER_COLLISION_OFFSET = 10.0
"""Safety margin kept between the effector and the towers"""

EXTRUSION_THICKNESS = 20.0
"""Size of the horizontal frame extrusions"""

BUILD_HEIGHT_SAFETY_MARGIN = 20.0
"""Margin subtracted from the usable tower height for the arm-based height estimate"""

# =============================================================================
# CARRIAGE TRAVEL SEARCH
# =============================================================================

CARRIAGE_SEARCH_STEP = 5.0
"""Radial step of the carriage feasibility search (mm)"""

CARRIAGE_SEARCH_OVERSHOOT = 50.0
"""How far past the tower radius the search keeps testing (mm)"""

CARRIAGE_TEST_HEIGHT_OFFSET = 50.0
"""Test height above the lowest carriage position, approximating bed level (mm)"""

ARM_REACH_THRESHOLD = 0.9
"""Fraction of theoretical arm reach below which carriage travel is the limit"""

BOUNDARY_TOLERANCE = 1e-6
"""Absolute tolerance for the refined feasibility boundary (mm)"""

# =============================================================================
# BUILD VOLUME
# =============================================================================

KINEMATIC_SAFETY_MARGIN = 10.0
"""Margin subtracted from the horizontal-arm reach (mm)"""

RECOMMENDED_RADIUS_FACTOR = 0.9
"""Derating applied to the maximum print radius"""

LIMITING_TOLERANCE = 1.0
"""A constraint within this distance of the result is reported as limiting (mm)"""

CARRIAGE_PLATE_CLEARANCE = 10.0
"""Minimum carriage clearance above the build plate (mm)"""

CARRIAGE_FRAME_CLEARANCE = 25.0
"""Minimum carriage clearance above the bottom of the frame (mm)"""

SAFETY_MARGIN = 5.0
"""Tower clearance used by the simple theoretical radius (mm)"""

FRAME_CLEARANCE = 15.0
"""Frame extrusion allowance used by the simple theoretical radius (mm)"""

MIN_BUILD_RADIUS = 10.0
"""Floor of the simple theoretical radius (mm)"""

POSITION_CHANGE_TOLERANCE = 0.001
"""Movement below this is not reported as a constraint being applied (mm)"""

# =============================================================================
# DEPENDENT PARAMETERS
# =============================================================================

DIAGONAL_ROD_FACTOR = 1.25
"""Suggested diagonal rod length as a multiple of the tower radius"""

DIAGONAL_ROD_TOLERANCE = 10.0
"""Diagonal rod suggestions smaller than this are ignored (mm)"""

ARM_LENGTH_TOLERANCE = 5.0
"""Arm length suggestions smaller than this are ignored (mm)"""

MAX_EFFECTOR_FRACTION = 0.25
"""Largest effector radius as a fraction of the tower radius"""

MIN_ARM_LENGTH_FACTOR = 0.8
"""Shortest optimal arm length as a fraction of the tower radius"""

# =============================================================================
# CONFIGURATION SANITY CHECKS
# =============================================================================

MIN_ARM_TO_RADIUS = 0.5
"""Arms shorter than this fraction of the tower radius are an error"""

LARGE_EFFECTOR_TO_RADIUS = 0.4
"""Effector radius above this fraction of the tower radius is a warning"""

LARGE_INSET_TO_RADIUS = 0.3
"""Carriage inset above this fraction of the tower radius is a warning"""

LOW_REACH_TO_RADIUS = 0.3
"""Kinematic reach below this fraction of the tower radius is a warning"""

SMALL_BUILD_RADIUS = 30.0
"""Maximum print radius below this is a warning (mm)"""
