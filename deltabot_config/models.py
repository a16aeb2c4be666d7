"""
Configuration Models
====================
Immutable configuration snapshots handed to the kinematics package.

A RobotConfig describes the frame, a BuildVolumeConfig selects the
collision policy and carries the last computed build volume. Both are
frozen; changes produce a new snapshot via replace().
"""

import dataclasses
import numbers
from dataclasses import dataclass
from enum import Enum

from . import physical
from .presets import PRESET_CONFIGS


class ValidationError(ValueError):
    """Input rejected at the package boundary."""


class ConfigError(ValidationError):
    """Configuration value of the wrong type or an unknown name."""


class ConstraintType(str, Enum):
    """Physical collision policy bounding the printable radius."""
    EFFECTOR_EDGE = 'effector-edge'            # effector body must clear the towers
    EFFECTOR_TIP = 'effector-tip'              # only the nozzle must clear the towers
    HORIZONTAL_EXTRUSIONS = 'horizontal-extrusions'  # limited by frame extrusions

    @classmethod
    def coerce(cls, value) -> 'ConstraintType':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ', '.join(c.value for c in cls)
            raise ConfigError(
                f"Unknown constraint type {value!r} (expected one of: {names})") from None


def require_real(name: str, value) -> float:
    """Return value as float, or raise ConfigError naming the parameter."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigError(
            f"{name} must be a number, got {type(value).__name__} {value!r}")
    return float(value)


@dataclass(frozen=True)
class RobotConfig:
    """Mechanical parameters of a linear delta frame (mm)."""

    rod_radius: float = physical.DEFAULT_ROD_RADIUS
    bot_radius: float = physical.DEFAULT_BOT_RADIUS
    bot_height: float = physical.DEFAULT_BOT_HEIGHT
    rod_spacing: float = physical.DEFAULT_ROD_SPACING
    eff_spacing: float = physical.DEFAULT_EFF_SPACING
    arm_length: float = physical.DEFAULT_ARM_LENGTH
    arm_radius: float = physical.DEFAULT_ARM_RADIUS
    effector_radius: float = physical.DEFAULT_EFFECTOR_RADIUS
    carriage_inset: float = physical.DEFAULT_CARRIAGE_INSET
    carriage_height: float = physical.DEFAULT_CARRIAGE_HEIGHT
    carriage_offset: float = physical.DEFAULT_CARRIAGE_OFFSET
    tower_offset: float = physical.DEFAULT_TOWER_OFFSET
    diagonal_rod_length: float = physical.DEFAULT_DIAGONAL_ROD_LENGTH
    effector_height: float = physical.DEFAULT_EFFECTOR_HEIGHT

    def __post_init__(self) -> None:
        # Only types are checked here; implausible geometry is still a valid
        # snapshot and degrades to "unreachable" or a zero radius downstream.
        for f in dataclasses.fields(self):
            object.__setattr__(self, f.name, require_real(f.name, getattr(self, f.name)))

    @property
    def half_height(self) -> float:
        return self.bot_height / 2.0

    def replace(self, **changes) -> 'RobotConfig':
        """Return a copy with the given fields changed."""
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"Unknown robot parameter(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_preset(cls, name: str) -> 'RobotConfig':
        """
        Build a configuration from a named preset.

        The preset's arm_length is a placeholder; DeltaCalculations.from_preset
        replaces it with the optimal arm length.

        Raises:
            ConfigError: if the preset name is unknown
        """
        try:
            values = PRESET_CONFIGS[name]
        except KeyError:
            raise ConfigError(
                f"Unknown preset {name!r} (expected one of: {', '.join(PRESET_CONFIGS)})") from None
        return cls(**values)


@dataclass(frozen=True)
class BuildVolumeConfig:
    """
    Build volume selection and the last computed build volume.

    physical_bed_radius is display-only and never feeds the feasibility math.
    The max/recommended radius and height fields are outputs, filled in by
    DeltaCalculations.refresh_build_config().
    """

    physical_bed_radius: float = physical.DEFAULT_PHYSICAL_BED_RADIUS
    show_physical_bed: bool = True
    constraint_type: ConstraintType = ConstraintType.EFFECTOR_EDGE
    max_print_radius: float = 0.0
    recommended_print_radius: float = 0.0
    build_volume_height: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'constraint_type', ConstraintType.coerce(self.constraint_type))
        for name in ('physical_bed_radius', 'max_print_radius',
                     'recommended_print_radius', 'build_volume_height'):
            object.__setattr__(self, name, require_real(name, getattr(self, name)))
        object.__setattr__(self, 'show_physical_bed', bool(self.show_physical_bed))

    def replace(self, **changes) -> 'BuildVolumeConfig':
        """Return a copy with the given fields changed."""
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"Unknown build volume parameter(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)
