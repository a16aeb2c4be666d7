"""
Delta Printer Physical Parameters
=================================
Default mechanical dimensions of a linear delta printer frame.

All lengths are in millimetres. These are the defaults a fresh
RobotConfig is built from; presets override them per printer model.
"""

import math

# =============================================================================
# FRAME DIMENSIONS (mm)
# =============================================================================

DEFAULT_BOT_RADIUS = 240.0
"""Distance from the frame centre to each tower (smooth rod) axis"""

DEFAULT_BOT_HEIGHT = 700.0
"""Overall tower height"""

DEFAULT_ROD_RADIUS = 4.0
"""Radius of a vertical rail (smooth rod)"""

DEFAULT_ROD_SPACING = 46.0
"""Spacing between the two rails of one tower"""

DEFAULT_TOWER_OFFSET = 25.0
"""Tower centre offset from its calculated position"""

# =============================================================================
# CARRIAGE DIMENSIONS (mm)
# =============================================================================

DEFAULT_CARRIAGE_INSET = 25.0
"""Inset of the carriage ball joints from the tower axis, towards the centre"""

DEFAULT_CARRIAGE_HEIGHT = 30.0
"""Vertical size of a carriage"""

DEFAULT_CARRIAGE_OFFSET = 0.0
"""Ball joint offset from the carriage plane"""

# =============================================================================
# ARM AND EFFECTOR DIMENSIONS (mm)
# =============================================================================

DEFAULT_ARM_LENGTH = 240.0
"""Diagonal rod length, ball joint to ball joint"""

DEFAULT_ARM_RADIUS = 2.5
"""Radius of a diagonal rod"""

DEFAULT_DIAGONAL_ROD_LENGTH = 240.0
"""Diagonal rod length as entered by the user (centre to centre)"""

DEFAULT_EFFECTOR_RADIUS = 40.0
"""Distance from effector centre to its ball joint pairs"""

DEFAULT_EFF_SPACING = 46.0
"""Spacing between the two ball joints of one effector pair"""

DEFAULT_EFFECTOR_HEIGHT = 10.0
"""Thickness of the effector platform"""

PLATFORM_HEIGHT = 10.0
"""Thickness of the bottom platform the build plate sits on"""

DEFAULT_PHYSICAL_BED_RADIUS = 120.0
"""Radius of the physical print bed (Anycubic Kossel Linear Plus), display only"""

# =============================================================================
# TOWER LAYOUT
# =============================================================================

TOWER_COUNT = 3
"""Number of towers"""

ARMS_PER_TOWER = 2
"""Diagonal rods per tower (parallelogram pair)"""

TOTAL_ARMS = TOWER_COUNT * ARMS_PER_TOWER
"""Total number of diagonal rods (6)"""

TOWER_ANGLE_OFFSET = math.pi / 6.0
"""Angle of tower 0 from the +X axis (30°)"""

TOWER_ANGLE_SPACING = 2.0 * math.pi / 3.0
"""Angle between neighbouring towers (120°)"""

PERPENDICULAR_OFFSET = math.pi / 2.0
"""Rotation from the radial direction to the rail/nub pair direction (90°)"""
