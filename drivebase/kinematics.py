"""
Chassis/module velocity conversions for holonomic and differential drivetrains
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple
import numpy as np
from scipy.linalg import lstsq

from drivebase.errors import ShapeMismatchError
from drivebase.geometry import ModuleLayout
from drivebase.params import require_positive
from drivebase.state import ChassisSpeeds, DifferentialWheelSpeeds, SwerveModuleState


def module_angle(vx: float, vy: float) -> float:
    """
    Direction of a module velocity vector

    Returns:
        Angle from robot +x in (-pi, pi]; 0 for a stationary module
    """
    if np.hypot(vx, vy) <= 1e-9:
        return 0.0
    angle = float(np.arctan2(vy, vx))
    # arctan2 returns -pi when vy is negative zero
    return float(np.pi) if angle == -np.pi else angle


@dataclass(frozen=True)
class SwerveDriveKinematics:
    """Kinematics for independently steered modules at arbitrary locations"""

    layout: ModuleLayout  # At least 2 modules
    # Derived
    num_modules: int = field(init=False)
    _inverse_kinematics: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Build the inverse kinematics matrix"""
        num_modules = len(self.layout)

        # Each module contributes two rows mapping (vx, vy, omega) to its
        # velocity vector: [1, 0, -y] and [0, 1, x]
        locations = self.layout.as_array()
        matrix = np.zeros((2 * num_modules, 3))
        matrix[0::2, 0] = 1.0
        matrix[0::2, 2] = -locations[:, 1]
        matrix[1::2, 1] = 1.0
        matrix[1::2, 2] = locations[:, 0]
        matrix.setflags(write=False)

        object.__setattr__(self, "num_modules", num_modules)
        object.__setattr__(self, "_inverse_kinematics", matrix)

    def to_module_states(self, speeds: ChassisSpeeds) -> Tuple[SwerveModuleState, ...]:
        """
        Convert chassis speeds to one state per module

        Args:
            speeds: Robot-relative chassis speeds

        Returns:
            Module states in layout order. When the chassis is at rest every
            angle is 0.
        """
        chassis = np.array([speeds.vx, speeds.vy, speeds.omega], dtype=float)
        module_velocities = (self._inverse_kinematics @ chassis).reshape(self.num_modules, 2)

        states = []
        for vx, vy in module_velocities:
            states.append(SwerveModuleState(float(np.hypot(vx, vy)), module_angle(vx, vy)))
        return tuple(states)

    def to_chassis_speeds(self, states: Sequence[SwerveModuleState]) -> ChassisSpeeds:
        """
        Convert module states back to chassis speeds

        Solves the overdetermined system in the least-squares sense. For
        rank-deficient layouts the minimum-norm solution is returned.

        Args:
            states: One state per module, in layout order

        Returns:
            Robot-relative chassis speeds

        Raises:
            ShapeMismatchError: If len(states) != number of modules
        """
        if len(states) != self.num_modules:
            raise ShapeMismatchError(self.num_modules, len(states))

        module_velocities = np.empty(2 * self.num_modules)
        for i, state in enumerate(states):
            module_velocities[2 * i] = state.speed_mps * np.cos(state.angle)
            module_velocities[2 * i + 1] = state.speed_mps * np.sin(state.angle)

        solution, _, _, _ = lstsq(self._inverse_kinematics, module_velocities)
        return ChassisSpeeds(float(solution[0]), float(solution[1]), float(solution[2]))


@dataclass(frozen=True)
class DifferentialDriveKinematics:
    """Kinematics for a two-sided drivetrain"""

    trackwidth_meters: float  # Distance between the left and right wheels (m)

    def __post_init__(self) -> None:
        require_positive("trackwidth_meters", self.trackwidth_meters)

    def to_wheel_speeds(self, speeds: ChassisSpeeds) -> DifferentialWheelSpeeds:
        """Convert chassis speeds to side speeds; vy cannot be realized and is ignored"""
        half_track = self.trackwidth_meters / 2.0
        return DifferentialWheelSpeeds(
            left_mps=speeds.vx - speeds.omega * half_track,
            right_mps=speeds.vx + speeds.omega * half_track,
        )

    def to_chassis_speeds(self, wheel_speeds: DifferentialWheelSpeeds) -> ChassisSpeeds:
        """Convert side speeds to chassis speeds; vy is always 0"""
        return ChassisSpeeds(
            vx=(wheel_speeds.left_mps + wheel_speeds.right_mps) / 2.0,
            vy=0.0,
            omega=(wheel_speeds.right_mps - wheel_speeds.left_mps) / self.trackwidth_meters,
        )
