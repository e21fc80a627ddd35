"""
Drive module physical parameters
"""

from dataclasses import dataclass, field
import logging
import math
import numbers
from typing import Protocol

from drivebase.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Voltage used to estimate the current draw at free speed
NOMINAL_BATTERY_VOLTAGE = 12.0  # V


def require_positive(name: str, value: float, allow_zero: bool = False) -> float:
    """
    Validate a scalar physical parameter

    Args:
        name: Parameter name used in the error message
        value: Value to check
        allow_zero: Accept zero as well as positive values

    Returns:
        The value, unchanged

    Raises:
        ConfigurationError: If the value is not finite or out of range
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        msg = f"{name} must be a number, got {value!r}"
        logger.error(msg)
        raise ConfigurationError(msg)
    if not math.isfinite(value) or value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        msg = f"{name} must be finite and {bound}, got {value}"
        logger.error(msg)
        raise ConfigurationError(msg)
    return value


class DriveMotor(Protocol):
    """Per-wheel force/speed capability of a drive motor and its gearing"""

    def get_torque(self, current_amps: float) -> float:
        ...

    def get_current(self, speed_rad_per_sec: float, voltage_input: float) -> float:
        ...


@dataclass(frozen=True)
class ModuleConfig:
    """Physical parameters shared by every drive module of a robot"""

    wheel_radius_meters: float
    max_drive_velocity_mps: float  # Max attainable wheel surface speed (m/s)
    wheel_cof: float  # Coefficient of friction between wheel and carpet
    drive_motor: DriveMotor  # Motor model, already geared to the wheel
    drive_current_limit: float  # Supply current limit per motor (A)
    num_motors: int = 1  # Motors driving each module
    # Derived
    max_drive_velocity_rad_per_sec: float = field(init=False)
    torque_loss: float = field(init=False)  # Torque spent at free speed (N*m)

    def __post_init__(self) -> None:
        """Validate parameters and calculate derived values"""
        require_positive("wheel_radius_meters", self.wheel_radius_meters)
        require_positive("max_drive_velocity_mps", self.max_drive_velocity_mps)
        require_positive("wheel_cof", self.wheel_cof, allow_zero=True)
        require_positive("drive_current_limit", self.drive_current_limit)
        if isinstance(self.num_motors, bool) or not isinstance(self.num_motors, int) or self.num_motors < 1:
            msg = f"num_motors must be a positive integer, got {self.num_motors!r}"
            logger.error(msg)
            raise ConfigurationError(msg)

        max_rad_per_sec = self.max_drive_velocity_mps / self.wheel_radius_meters
        max_speed_current = self.drive_motor.get_current(max_rad_per_sec, NOMINAL_BATTERY_VOLTAGE)
        torque_loss = self.drive_motor.get_torque(min(max_speed_current, self.total_current_limit))

        object.__setattr__(self, "max_drive_velocity_rad_per_sec", max_rad_per_sec)
        object.__setattr__(self, "torque_loss", float(torque_loss))

    @property
    def total_current_limit(self) -> float:
        """Current limit across every motor of one module (A)"""
        return self.drive_current_limit * self.num_motors
