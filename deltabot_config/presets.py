"""
Printer Presets and Parameter Limits
====================================
Known printer geometries and the ranges a configuration layer should
accept for each adjustable parameter.
"""

# =============================================================================
# PRESET CONFIGURATIONS (mm)
# =============================================================================

PRESET_CONFIGS = {
    'kossel-mini': {
        'bot_radius': 120,
        'bot_height': 400,
        'rod_spacing': 25,
        'rod_radius': 4,
        'carriage_inset': 20,
        'carriage_height': 25,
        'carriage_offset': 0,
        'arm_length': 100,
        'arm_radius': 2.5,
        'effector_radius': 30,
        'eff_spacing': 25,
        'diagonal_rod_length': 180,
        'tower_offset': 20,
    },
    'kossel-standard': {
        'bot_radius': 195,
        'bot_height': 520,
        'rod_spacing': 30,
        'rod_radius': 4,
        'carriage_inset': 25,
        'carriage_height': 30,
        'carriage_offset': 0,
        'arm_length': 100,
        'arm_radius': 2.5,
        'effector_radius': 40,
        'eff_spacing': 30,
        'diagonal_rod_length': 240,
        'tower_offset': 25,
    },
    'kossel-xl': {
        'bot_radius': 260,
        'bot_height': 700,
        'rod_spacing': 35,
        'rod_radius': 5,
        'carriage_inset': 30,
        'carriage_height': 35,
        'carriage_offset': 0,
        'arm_length': 100,
        'arm_radius': 3,
        'effector_radius': 50,
        'eff_spacing': 35,
        'diagonal_rod_length': 320,
        'tower_offset': 30,
    },
    'anycubic-linear-plus': {
        'bot_radius': 190,
        'bot_height': 500,
        'rod_spacing': 46,
        'rod_radius': 4,
        'carriage_inset': 25,
        'carriage_height': 30,
        'carriage_offset': 0,
        'arm_length': 100,
        'arm_radius': 2.5,
        'effector_radius': 40,
        'eff_spacing': 46,
        'diagonal_rod_length': 240,
        'tower_offset': 25,
    },
}
"""Preset geometries. arm_length is a placeholder, recalculated on load."""

PRESET_METADATA = {
    'kossel-mini': {
        'name': 'Kossel Mini',
        'description': 'Compact delta printer with 120mm build radius',
    },
    'kossel-standard': {
        'name': 'Kossel',
        'description': 'Standard Kossel configuration with 195mm build radius',
    },
    'kossel-xl': {
        'name': 'Kossel XL',
        'description': 'Large format Kossel with 260mm build radius',
    },
    'anycubic-linear-plus': {
        'name': 'Anycubic Linear+',
        'description': 'Anycubic Kossel Linear Plus commercial printer',
    },
}
"""Display name and description of each preset"""

# =============================================================================
# PARAMETER LIMITS
# =============================================================================

PARAMETER_LIMITS = {
    'bot_radius': {'min': 50, 'max': 500, 'step': 5, 'default': 240},
    'bot_height': {'min': 200, 'max': 1000, 'step': 10, 'default': 700},
    'rod_spacing': {'min': 20, 'max': 100, 'step': 2, 'default': 46},
    'rod_radius': {'min': 2, 'max': 10, 'step': 0.5, 'default': 4},
    'carriage_inset': {'min': 10, 'max': 50, 'step': 1, 'default': 25},
    'carriage_height': {'min': 15, 'max': 60, 'step': 1, 'default': 30},
    'carriage_offset': {'min': 0, 'max': 20, 'step': 0.5, 'default': 0},
    'arm_radius': {'min': 1, 'max': 10, 'step': 0.1, 'default': 2.5},
    'effector_radius': {'min': 20, 'max': 80, 'step': 2, 'default': 40},
    'eff_spacing': {'min': 20, 'max': 60, 'step': 2, 'default': 46},
    'diagonal_rod_length': {'min': 150, 'max': 400, 'step': 5, 'default': 240},
    'tower_offset': {'min': 0, 'max': 50, 'step': 1, 'default': 25},
    'physical_bed_radius': {'min': 50, 'max': 200, 'step': 5, 'default': 120},
}
"""Accepted range, slider step and recommended default per parameter"""

DEFAULT_DEVIATION_FRACTION = 0.5
"""Values further than this fraction from the default draw a warning"""

# =============================================================================
# VALIDATION MESSAGES
# =============================================================================

MSG_INVALID_RANGE = 'Value must be between {min} and {max}'
MSG_INVALID_TYPE = 'Value must be a number'
MSG_KINEMATIC_WARNING = 'Configuration may result in poor kinematics'
MSG_REACH_WARNING = 'Effector may not reach full build volume'
MSG_COLLISION_WARNING = 'Potential collision detected with current settings'
