"""
Error types raised by drivebase
"""


class DrivebaseError(Exception):
    """Base class for all drivebase errors"""


class ConfigurationError(DrivebaseError, ValueError):
    """Invalid or missing physical parameters, raised at construction time"""


class UnsupportedMotorError(ConfigurationError):
    """Motor type identifier is not in the motor catalog"""

    def __init__(self, motor_id: str) -> None:
        super().__init__(f"Invalid motor type: {motor_id}")
        self.motor_id = motor_id


class ShapeMismatchError(DrivebaseError, ValueError):
    """Per-module sequence length does not match the number of modules"""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} module states, got {actual}")
        self.expected = expected
        self.actual = actual


class TopologyMisuseError(DrivebaseError, AttributeError):
    """Kinematics solver requested for the wrong drivetrain topology"""
