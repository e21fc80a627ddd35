"""
Robot configuration: drivetrain topology, physical properties and derived limits
"""

from dataclasses import dataclass, field
import logging
from typing import Sequence, Tuple, Union

from drivebase.errors import ConfigurationError, ShapeMismatchError, TopologyMisuseError
from drivebase.geometry import ModuleLayout, Translation2d
from drivebase.kinematics import DifferentialDriveKinematics, SwerveDriveKinematics
from drivebase.params import ModuleConfig, require_positive
from drivebase.state import ChassisSpeeds, DifferentialWheelSpeeds, SwerveModuleState

logger = logging.getLogger(__name__)

GRAVITY = 9.8  # m/s²


def require_solver(kinematics: object, expected: type) -> None:
    """Check that a drivetrain variant carries its own kind of solver"""
    if not isinstance(kinematics, expected):
        msg = f"kinematics must be a {expected.__name__}, got {type(kinematics).__name__}"
        logger.error(msg)
        raise ConfigurationError(msg)


@dataclass(frozen=True)
class HolonomicDrive:
    """Independently steered modules (swerve)"""

    kinematics: SwerveDriveKinematics

    def __post_init__(self) -> None:
        require_solver(self.kinematics, SwerveDriveKinematics)

    @classmethod
    def rectangular(cls, trackwidth_meters: float, wheelbase_meters: float) -> "HolonomicDrive":
        """Four modules at the corners of a trackwidth x wheelbase rectangle"""
        return cls(SwerveDriveKinematics(ModuleLayout.holonomic(trackwidth_meters, wheelbase_meters)))

    @classmethod
    def from_locations(cls, locations: Sequence[Translation2d]) -> "HolonomicDrive":
        """Any layout of two or more modules"""
        return cls(SwerveDriveKinematics(ModuleLayout(locations)))

    @property
    def layout(self) -> ModuleLayout:
        return self.kinematics.layout

    def to_module_states(self, speeds: ChassisSpeeds) -> Tuple[SwerveModuleState, ...]:
        return self.kinematics.to_module_states(speeds)

    def to_chassis_speeds(self, states: Sequence[SwerveModuleState]) -> ChassisSpeeds:
        return self.kinematics.to_chassis_speeds(states)


@dataclass(frozen=True)
class DifferentialDrive:
    """Two-sided drivetrain; module 0 is the left side, module 1 the right"""

    kinematics: DifferentialDriveKinematics
    layout: ModuleLayout = field(init=False)

    def __post_init__(self) -> None:
        require_solver(self.kinematics, DifferentialDriveKinematics)
        object.__setattr__(self, "layout", ModuleLayout.differential(self.kinematics.trackwidth_meters))

    @classmethod
    def from_trackwidth(cls, trackwidth_meters: float) -> "DifferentialDrive":
        return cls(DifferentialDriveKinematics(trackwidth_meters))

    def to_module_states(self, speeds: ChassisSpeeds) -> Tuple[SwerveModuleState, ...]:
        wheel_speeds = self.kinematics.to_wheel_speeds(speeds)
        return (
            SwerveModuleState(wheel_speeds.left_mps, 0.0),
            SwerveModuleState(wheel_speeds.right_mps, 0.0),
        )

    def to_chassis_speeds(self, states: Sequence[SwerveModuleState]) -> ChassisSpeeds:
        if len(states) != 2:
            raise ShapeMismatchError(2, len(states))
        return self.kinematics.to_chassis_speeds(
            DifferentialWheelSpeeds(states[0].speed_mps, states[1].speed_mps)
        )


Drivetrain = Union[HolonomicDrive, DifferentialDrive]


@dataclass(frozen=True)
class RobotConfig:
    """
    Everything trajectory generation needs to know about the robot

    Derived values are calculated once at construction and the object is
    immutable afterwards, so a single instance can be shared freely.
    """

    mass_kg: float  # Mass including bumpers and battery (kg)
    moi: float  # Moment of inertia about the vertical axis (kg*m²)
    module_config: ModuleConfig
    drivetrain: Drivetrain
    # Derived
    module_locations: Tuple[Translation2d, ...] = field(init=False)
    num_modules: int = field(init=False)
    module_pivot_distance: Tuple[float, ...] = field(init=False)  # Center to each module (m)
    wheel_friction_force: float = field(init=False)  # Static friction per wheel (N)
    max_torque_friction: float = field(init=False)  # Max wheel torque before slipping (N*m)

    def __post_init__(self) -> None:
        """Validate inputs and calculate derived parameters"""
        require_positive("mass_kg", self.mass_kg)
        require_positive("moi", self.moi)
        if not isinstance(self.module_config, ModuleConfig):
            raise ConfigurationError(f"module_config must be a ModuleConfig, got {type(self.module_config).__name__}")
        require_positive("wheel_cof", self.module_config.wheel_cof)
        if not isinstance(self.drivetrain, (HolonomicDrive, DifferentialDrive)):
            raise ConfigurationError(f"Unknown drivetrain type {type(self.drivetrain).__name__}")

        layout = self.drivetrain.layout
        num_modules = len(layout)
        # Weight assumed evenly distributed across modules
        wheel_friction_force = self.module_config.wheel_cof * ((self.mass_kg / num_modules) * GRAVITY)

        object.__setattr__(self, "module_locations", layout.locations)
        object.__setattr__(self, "num_modules", num_modules)
        object.__setattr__(self, "module_pivot_distance", layout.pivot_distances())
        object.__setattr__(self, "wheel_friction_force", wheel_friction_force)
        object.__setattr__(
            self, "max_torque_friction", wheel_friction_force * self.module_config.wheel_radius_meters
        )

        logger.debug(
            "Created %s robot config: %d modules, %.1f kg, wheel friction %.2f N",
            "holonomic" if self.is_holonomic else "differential",
            num_modules,
            self.mass_kg,
            wheel_friction_force,
        )

    @classmethod
    def holonomic(
        cls,
        mass_kg: float,
        moi: float,
        module_config: ModuleConfig,
        trackwidth_meters: float,
        wheelbase_meters: float,
    ) -> "RobotConfig":
        """
        Create a config for a holonomic (swerve) robot

        Args:
            mass_kg: Mass including bumpers and battery (kg)
            moi: Moment of inertia (kg*m²)
            module_config: Drive module parameters
            trackwidth_meters: Distance between the left and right modules (m)
            wheelbase_meters: Distance between the front and back modules (m)
        """
        return cls(mass_kg, moi, module_config, HolonomicDrive.rectangular(trackwidth_meters, wheelbase_meters))

    @classmethod
    def differential(
        cls,
        mass_kg: float,
        moi: float,
        module_config: ModuleConfig,
        trackwidth_meters: float,
    ) -> "RobotConfig":
        """
        Create a config for a differential drive robot

        Args:
            mass_kg: Mass including bumpers and battery (kg)
            moi: Moment of inertia (kg*m²)
            module_config: Drive module parameters
            trackwidth_meters: Distance between the left and right wheels (m)
        """
        return cls(mass_kg, moi, module_config, DifferentialDrive.from_trackwidth(trackwidth_meters))

    @property
    def is_holonomic(self) -> bool:
        return isinstance(self.drivetrain, HolonomicDrive)

    @property
    def swerve_kinematics(self) -> SwerveDriveKinematics:
        """Swerve solver; only available on holonomic configs"""
        if not isinstance(self.drivetrain, HolonomicDrive):
            raise TopologyMisuseError("Differential drive robot has no swerve kinematics")
        return self.drivetrain.kinematics

    @property
    def diff_kinematics(self) -> DifferentialDriveKinematics:
        """Differential solver; only available on differential configs"""
        if not isinstance(self.drivetrain, DifferentialDrive):
            raise TopologyMisuseError("Holonomic robot has no differential kinematics")
        return self.drivetrain.kinematics

    def to_module_states(self, speeds: ChassisSpeeds) -> Tuple[SwerveModuleState, ...]:
        """
        Convert robot-relative chassis speeds to module states

        Differential robots get one state per side with a fixed angle of 0.

        Args:
            speeds: Robot-relative chassis speeds

        Returns:
            One state per module, in module_locations order
        """
        return self.drivetrain.to_module_states(speeds)

    def to_chassis_speeds(self, states: Sequence[SwerveModuleState]) -> ChassisSpeeds:
        """
        Convert module states to robot-relative chassis speeds

        Args:
            states: One state per module, in module_locations order

        Returns:
            Robot-relative chassis speeds

        Raises:
            ShapeMismatchError: If len(states) != num_modules
        """
        if len(states) != self.num_modules:
            raise ShapeMismatchError(self.num_modules, len(states))
        return self.drivetrain.to_chassis_speeds(states)

    def describe(self) -> str:
        """Return a human-readable summary of the robot"""
        kind = "Holonomic" if self.is_holonomic else "Differential"
        return (
            f"{kind} robot, {self.num_modules} modules\n"
            f"  Mass: {self.mass_kg:.1f} kg\n"
            f"  MOI: {self.moi:.2f} kg*m²\n"
            f"  Wheel radius: {self.module_config.wheel_radius_meters * 100:.2f} cm\n"
            f"  Max drive speed: {self.module_config.max_drive_velocity_mps:.2f} m/s\n"
            f"  Wheel friction force: {self.wheel_friction_force:.2f} N\n"
            f"  Max torque before slip: {self.max_torque_friction:.2f} N*m"
        )
