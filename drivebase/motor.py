"""
DC motor model and the catalog of supported drive motors
"""

from dataclasses import dataclass, field
from enum import Enum
import logging

import numpy as np

from drivebase.errors import ConfigurationError, UnsupportedMotorError
from drivebase.params import require_positive

logger = logging.getLogger(__name__)


def rpm_to_rad_per_sec(rpm: float) -> float:
    return rpm * 2.0 * np.pi / 60.0


@dataclass(frozen=True)
class DCMotor:
    """
    Steady-state model of one or more identical DC motors on a shared shaft

    Stall and free values are per motor; they are scaled by num_motors.
    """

    nominal_voltage: float  # V
    stall_torque: float  # N*m
    stall_current: float  # A
    free_current: float  # A
    free_speed_rad_per_sec: float
    num_motors: int = 1
    # Derived
    r_ohms: float = field(init=False)
    kv_rad_per_sec_per_volt: float = field(init=False)
    kt_nm_per_amp: float = field(init=False)

    def __post_init__(self) -> None:
        """Scale by motor count and calculate motor constants"""
        require_positive("nominal_voltage", self.nominal_voltage)
        require_positive("stall_torque", self.stall_torque)
        require_positive("stall_current", self.stall_current)
        require_positive("free_current", self.free_current, allow_zero=True)
        require_positive("free_speed_rad_per_sec", self.free_speed_rad_per_sec)
        if self.num_motors < 1:
            raise ConfigurationError(f"num_motors must be at least 1, got {self.num_motors}")

        stall_torque = self.stall_torque * self.num_motors
        stall_current = self.stall_current * self.num_motors
        free_current = self.free_current * self.num_motors
        r_ohms = self.nominal_voltage / stall_current

        object.__setattr__(self, "stall_torque", stall_torque)
        object.__setattr__(self, "stall_current", stall_current)
        object.__setattr__(self, "free_current", free_current)
        object.__setattr__(self, "num_motors", 1)
        object.__setattr__(self, "r_ohms", r_ohms)
        object.__setattr__(
            self,
            "kv_rad_per_sec_per_volt",
            self.free_speed_rad_per_sec / (self.nominal_voltage - r_ohms * free_current),
        )
        object.__setattr__(self, "kt_nm_per_amp", stall_torque / stall_current)

    def get_current(self, speed_rad_per_sec: float, voltage_input: float) -> float:
        """
        Current drawn at a given shaft speed and input voltage

        Args:
            speed_rad_per_sec: Shaft angular velocity (rad/s)
            voltage_input: Applied voltage (V)

        Returns:
            Current (A)
        """
        return -1.0 / self.kv_rad_per_sec_per_volt / self.r_ohms * speed_rad_per_sec + voltage_input / self.r_ohms

    def get_torque(self, current_amps: float) -> float:
        """Shaft torque produced by a given current (N*m)"""
        return current_amps * self.kt_nm_per_amp

    def get_speed(self, torque_nm: float, voltage_input: float) -> float:
        """Shaft speed at a given load torque and input voltage (rad/s)"""
        return (
            voltage_input * self.kv_rad_per_sec_per_volt
            - 1.0 / self.kt_nm_per_amp * torque_nm * self.r_ohms * self.kv_rad_per_sec_per_volt
        )

    def with_reduction(self, gearbox_reduction: float) -> "DCMotor":
        """
        Motor model as seen through a gearbox

        Args:
            gearbox_reduction: Reduction ratio, >1 means the output turns slower

        Returns:
            New DCMotor with torque multiplied and speed divided by the reduction
        """
        require_positive("gearbox_reduction", gearbox_reduction)
        return DCMotor(
            self.nominal_voltage,
            self.stall_torque * gearbox_reduction,
            self.stall_current,
            self.free_current,
            self.free_speed_rad_per_sec / gearbox_reduction,
        )


class MotorType(Enum):
    """Supported drive motors, keyed by their settings-file identifier"""

    # (id, nominal voltage V, stall torque N*m, stall current A, free current A, free speed RPM)
    KRAKEN_X60 = ("krakenX60", 12.0, 7.09, 366.0, 2.0, 6000.0)
    KRAKEN_X60_FOC = ("krakenX60FOC", 12.0, 9.37, 483.0, 2.0, 5800.0)
    FALCON_500 = ("falcon500", 12.0, 4.69, 257.0, 1.5, 6380.0)
    FALCON_500_FOC = ("falcon500FOC", 12.0, 5.84, 304.0, 1.5, 6080.0)
    NEO_VORTEX = ("vortex", 12.0, 3.60, 211.0, 3.6, 6784.0)
    NEO = ("NEO", 12.0, 2.6, 105.0, 1.8, 5676.0)
    CIM = ("CIM", 12.0, 2.42, 133.0, 2.7, 5310.0)
    MINI_CIM = ("miniCIM", 12.0, 1.41, 89.0, 3.0, 5840.0)

    def __init__(
        self,
        motor_id: str,
        nominal_voltage: float,
        stall_torque: float,
        stall_current: float,
        free_current: float,
        free_speed_rpm: float,
    ) -> None:
        self.motor_id = motor_id
        self.nominal_voltage = nominal_voltage
        self.stall_torque = stall_torque
        self.stall_current = stall_current
        self.free_current = free_current
        self.free_speed_rpm = free_speed_rpm

    @classmethod
    def from_id(cls, motor_id: str) -> "MotorType":
        """
        Look up a motor by its settings-file identifier

        Raises:
            UnsupportedMotorError: If no catalog entry matches
        """
        for motor in cls:
            if motor.motor_id == motor_id:
                return motor
        logger.error("Unsupported drive motor type %r", motor_id)
        raise UnsupportedMotorError(str(motor_id))

    def create(self, num_motors: int = 1) -> DCMotor:
        """Build the motor model for a gearbox of num_motors of this motor"""
        return DCMotor(
            self.nominal_voltage,
            self.stall_torque,
            self.stall_current,
            self.free_current,
            rpm_to_rad_per_sec(self.free_speed_rpm),
            num_motors,
        )
