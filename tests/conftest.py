"""
Shared fixtures
"""

import pytest

from drivebase import DCMotor, ModuleConfig, MotorType


@pytest.fixture
def gearbox() -> DCMotor:
    """Single Kraken X60 behind an L2 swerve reduction"""
    return MotorType.KRAKEN_X60.create(1).with_reduction(6.75)


@pytest.fixture
def module_config(gearbox: DCMotor) -> ModuleConfig:
    """Module config with round numbers for friction calculations"""
    return ModuleConfig(
        wheel_radius_meters=0.05,
        max_drive_velocity_mps=4.5,
        wheel_cof=1.0,
        drive_motor=gearbox,
        drive_current_limit=60.0,
    )
