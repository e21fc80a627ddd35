"""
Drivebase Robot Configuration

This package describes a wheeled robot's physical and kinematic configuration
and converts between chassis speeds and per-module states for holonomic and
differential drivetrains.
"""

from drivebase.errors import (
    ConfigurationError,
    DrivebaseError,
    ShapeMismatchError,
    TopologyMisuseError,
    UnsupportedMotorError,
)
from drivebase.geometry import ModuleLayout, Translation2d
from drivebase.kinematics import DifferentialDriveKinematics, SwerveDriveKinematics
from drivebase.motor import DCMotor, MotorType
from drivebase.params import ModuleConfig
from drivebase.robot_config import DifferentialDrive, Drivetrain, HolonomicDrive, RobotConfig
from drivebase.settings import RobotSettings, from_gui_settings, load_settings
from drivebase.state import ChassisSpeeds, DifferentialWheelSpeeds, SwerveModuleState

__all__ = [
    "ChassisSpeeds",
    "ConfigurationError",
    "DCMotor",
    "DifferentialDrive",
    "DifferentialDriveKinematics",
    "DifferentialWheelSpeeds",
    "DrivebaseError",
    "Drivetrain",
    "HolonomicDrive",
    "ModuleConfig",
    "ModuleLayout",
    "MotorType",
    "RobotConfig",
    "RobotSettings",
    "ShapeMismatchError",
    "SwerveDriveKinematics",
    "SwerveModuleState",
    "TopologyMisuseError",
    "Translation2d",
    "UnsupportedMotorError",
    "from_gui_settings",
    "load_settings",
]
