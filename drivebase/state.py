"""
Chassis and module velocity representations
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChassisSpeeds:
    """Robot-relative velocity of the whole chassis"""

    vx: float = 0.0  # Forward velocity (m/s)
    vy: float = 0.0  # Lateral velocity, +y is left (m/s)
    omega: float = 0.0  # Angular velocity, CCW positive (rad/s)


@dataclass(frozen=True)
class SwerveModuleState:
    """Velocity of a single drive module"""

    speed_mps: float = 0.0  # Wheel surface speed (m/s)
    angle: float = 0.0  # Steering angle from robot +x (rad)


@dataclass(frozen=True)
class DifferentialWheelSpeeds:
    """Surface speeds of the two sides of a differential drivetrain"""

    left_mps: float = 0.0
    right_mps: float = 0.0
