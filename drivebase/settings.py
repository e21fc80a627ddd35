"""
Loading robot configuration from a GUI settings file
"""

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from drivebase.errors import ConfigurationError
from drivebase.motor import MotorType
from drivebase.params import ModuleConfig
from drivebase.robot_config import RobotConfig

logger = logging.getLogger(__name__)

SETTINGS_RELATIVE_PATH = Path("pathplanner") / "settings.json"

# Settings-file key for each RobotSettings field
SETTINGS_KEYS: Dict[str, str] = {
    "is_holonomic": "holonomicMode",
    "mass_kg": "robotMass",
    "moi": "robotMOI",
    "wheelbase": "robotWheelbase",
    "trackwidth": "robotTrackwidth",
    "wheel_radius": "driveWheelRadius",
    "gearing": "driveGearing",
    "max_drive_speed": "maxDriveSpeed",
    "wheel_cof": "wheelCOF",
    "motor_type": "driveMotorType",
    "current_limit": "driveCurrentLimit",
}


@dataclass(frozen=True)
class RobotSettings:
    """Robot parameters as stored by the GUI settings file"""

    is_holonomic: bool
    mass_kg: float  # kg
    moi: float  # kg*m²
    wheelbase: float  # m
    trackwidth: float  # m
    wheel_radius: float  # m
    gearing: float  # Drive gear reduction
    max_drive_speed: float  # m/s
    wheel_cof: float
    motor_type: str  # MotorType identifier
    current_limit: float  # A

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RobotSettings":
        """
        Build settings from a deserialized settings object

        Args:
            data: Parsed settings JSON

        Returns:
            RobotSettings with every field populated

        Raises:
            ConfigurationError: If a key is missing or has the wrong type
        """
        if not isinstance(data, dict):
            msg = f"Settings must be a JSON object, got {type(data).__name__}"
            logger.error(msg)
            raise ConfigurationError(msg)

        missing = [key for key in SETTINGS_KEYS.values() if key not in data]
        if missing:
            msg = f"Settings missing required keys: {', '.join(missing)}"
            logger.error(msg)
            raise ConfigurationError(msg)

        values: Dict[str, Any] = {}
        for name, key in SETTINGS_KEYS.items():
            value = data[key]
            if name == "is_holonomic":
                expected = "a boolean" if not isinstance(value, bool) else None
            elif name == "motor_type":
                expected = "a string" if not isinstance(value, str) else None
            else:
                # JSON booleans are ints in Python; reject them explicitly
                is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
                expected = "a number" if not is_number else None
                if is_number:
                    value = float(value)
            if expected is not None:
                msg = f"{key} must be {expected}, got {value!r}"
                logger.error(msg)
                raise ConfigurationError(msg)
            values[name] = value

        return cls(**values)

    def build_module_config(self) -> ModuleConfig:
        """
        Resolve the motor type and build the drive module config

        Raises:
            UnsupportedMotorError: If motor_type is not in the catalog
        """
        motor = MotorType.from_id(self.motor_type)
        # One motor per swerve module, two per side on a differential drive
        num_motors = 1 if self.is_holonomic else 2
        gearbox = motor.create(num_motors).with_reduction(self.gearing)

        return ModuleConfig(
            wheel_radius_meters=self.wheel_radius,
            max_drive_velocity_mps=self.max_drive_speed,
            wheel_cof=self.wheel_cof,
            drive_motor=gearbox,
            drive_current_limit=self.current_limit,
            num_motors=num_motors,
        )

    def to_robot_config(self) -> RobotConfig:
        """Build the RobotConfig these settings describe"""
        module_config = self.build_module_config()
        if self.is_holonomic:
            return RobotConfig.holonomic(self.mass_kg, self.moi, module_config, self.trackwidth, self.wheelbase)
        return RobotConfig.differential(self.mass_kg, self.moi, module_config, self.trackwidth)


def load_settings(path: Union[str, Path]) -> RobotSettings:
    """
    Read a settings file

    Args:
        path: Path to the settings JSON file

    Returns:
        Parsed RobotSettings

    Raises:
        OSError: If the file cannot be read
        ConfigurationError: If the file is not valid settings JSON
    """
    path = Path(path)
    logger.info("Loading robot settings from %s", path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid settings JSON in {path}: {e}") from e
    return RobotSettings.from_dict(data)


def from_gui_settings(deploy_directory: Union[str, Path]) -> RobotConfig:
    """
    Load the robot config from the shared settings file created by the GUI

    Args:
        deploy_directory: Robot deploy directory containing pathplanner/settings.json

    Returns:
        RobotConfig matching the robot settings in the GUI
    """
    settings = load_settings(Path(deploy_directory) / SETTINGS_RELATIVE_PATH)
    config = settings.to_robot_config()
    logger.info(
        "Loaded %s robot config with %s drive motors",
        "holonomic" if config.is_holonomic else "differential",
        settings.motor_type,
    )
    return config
