"""
Unit tests for swerve and differential kinematics.
"""

import dataclasses

import numpy as np
import pytest

from drivebase import (
    ChassisSpeeds,
    ConfigurationError,
    DifferentialDriveKinematics,
    DifferentialWheelSpeeds,
    ModuleLayout,
    ShapeMismatchError,
    SwerveDriveKinematics,
    SwerveModuleState,
    Translation2d,
)
from drivebase.kinematics import module_angle


class TestSwerveDriveKinematics:
    """Test suite for swerve kinematics"""

    @pytest.fixture
    def kinematics(self) -> SwerveDriveKinematics:
        """Square swerve with 0.6m trackwidth and 0.5m wheelbase"""
        return SwerveDriveKinematics(ModuleLayout.holonomic(0.6, 0.5))

    def test_pure_forward(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that driving forward points every module forward at chassis speed"""
        states = kinematics.to_module_states(ChassisSpeeds(2.0, 0.0, 0.0))

        assert len(states) == 4
        for state in states:
            assert state.speed_mps == pytest.approx(2.0)
            assert state.angle == pytest.approx(0.0)

    def test_pure_strafe(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that strafing left points every module at +90 degrees"""
        states = kinematics.to_module_states(ChassisSpeeds(0.0, 1.5, 0.0))

        for state in states:
            assert state.speed_mps == pytest.approx(1.5)
            assert state.angle == pytest.approx(np.pi / 2)

    def test_pure_rotation_is_tangent(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that spinning in place points each module tangent to its pivot circle"""
        omega = 2.0
        states = kinematics.to_module_states(ChassisSpeeds(0.0, 0.0, omega))

        for loc, state in zip(kinematics.layout, states):
            assert state.speed_mps == pytest.approx(omega * loc.norm())
            # Velocity is perpendicular to the location vector
            vx = state.speed_mps * np.cos(state.angle)
            vy = state.speed_mps * np.sin(state.angle)
            assert vx * loc.x + vy * loc.y == pytest.approx(0.0, abs=1e-12)
            # Counter-clockwise: cross product is positive
            assert loc.x * vy - loc.y * vx > 0

    def test_front_left_rotation_angle(self, kinematics: SwerveDriveKinematics) -> None:
        """Test the exact steering angle of the front-left module when spinning"""
        states = kinematics.to_module_states(ChassisSpeeds(0.0, 0.0, 1.0))

        # Front left at (0.25, 0.3) moves with (-0.3, 0.25)
        assert states[0].angle == pytest.approx(np.arctan2(0.25, -0.3))

    def test_at_rest_angles_are_zero(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that a stationary chassis yields zero speed and zero angle"""
        states = kinematics.to_module_states(ChassisSpeeds())

        assert states == tuple(SwerveModuleState(0.0, 0.0) for _ in range(4))

    @pytest.mark.parametrize(
        "speeds",
        [
            ChassisSpeeds(1.0, 0.0, 0.0),
            ChassisSpeeds(0.0, -2.0, 0.0),
            ChassisSpeeds(0.0, 0.0, 3.0),
            ChassisSpeeds(1.5, -0.7, 2.2),
            ChassisSpeeds(-3.0, 1.0, -4.0),
        ],
    )
    def test_round_trip(self, kinematics: SwerveDriveKinematics, speeds: ChassisSpeeds) -> None:
        """Test that module states convert back to the original chassis speeds"""
        result = kinematics.to_chassis_speeds(kinematics.to_module_states(speeds))

        assert result.vx == pytest.approx(speeds.vx, abs=1e-9)
        assert result.vy == pytest.approx(speeds.vy, abs=1e-9)
        assert result.omega == pytest.approx(speeds.omega, abs=1e-9)

    def test_round_trip_three_modules(self) -> None:
        """Test an irregular three-module layout"""
        layout = ModuleLayout([Translation2d(0.3, 0.0), Translation2d(-0.15, 0.26), Translation2d(-0.15, -0.26)])
        kinematics = SwerveDriveKinematics(layout)
        speeds = ChassisSpeeds(0.8, -1.1, 1.7)

        result = kinematics.to_chassis_speeds(kinematics.to_module_states(speeds))

        assert result.vx == pytest.approx(0.8, abs=1e-9)
        assert result.vy == pytest.approx(-1.1, abs=1e-9)
        assert result.omega == pytest.approx(1.7, abs=1e-9)

    def test_inconsistent_states_least_squares(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that conflicting module states average to the best fit"""
        states = [
            SwerveModuleState(1.0, 0.0),
            SwerveModuleState(3.0, 0.0),
            SwerveModuleState(1.0, 0.0),
            SwerveModuleState(3.0, 0.0),
        ]

        result = kinematics.to_chassis_speeds(states)

        # Left side slower than right side reads as counter-clockwise rotation
        assert result.vx == pytest.approx(2.0)
        assert result.vy == pytest.approx(0.0, abs=1e-9)
        assert result.omega > 0

    def test_degenerate_layout_minimum_norm(self) -> None:
        """Test that coincident modules give the minimum-norm solution"""
        layout = ModuleLayout([Translation2d(0.5, 0.0), Translation2d(0.5, 0.0)])
        kinematics = SwerveDriveKinematics(layout)
        states = [SwerveModuleState(0.5, np.pi / 2), SwerveModuleState(0.5, np.pi / 2)]

        result = kinematics.to_chassis_speeds(states)

        # vy + 0.5 * omega = 0.5 has minimum-norm solution vy=0.4, omega=0.2
        assert result.vx == pytest.approx(0.0, abs=1e-9)
        assert result.vy == pytest.approx(0.4)
        assert result.omega == pytest.approx(0.2)

    @pytest.mark.parametrize("count", [0, 3, 5])
    def test_wrong_state_count(self, kinematics: SwerveDriveKinematics, count: int) -> None:
        """Test that the state count must match the module count"""
        states = [SwerveModuleState(1.0, 0.0)] * count

        with pytest.raises(ShapeMismatchError):
            kinematics.to_chassis_speeds(states)

    def test_backward_angle_is_positive_pi(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that driving straight backward reports +pi rather than -pi"""
        states = kinematics.to_module_states(ChassisSpeeds(-1.0, 0.0, 0.0))

        for state in states:
            assert state.speed_mps == pytest.approx(1.0)
            assert state.angle == np.pi

    @pytest.mark.parametrize("vy", [0.0, -0.0])
    def test_module_angle_signed_zero(self, vy: float) -> None:
        """Test that a negative-zero lateral component stays inside (-pi, pi]"""
        assert module_angle(-1.0, vy) == np.pi

    def test_module_angle_at_rest(self) -> None:
        """Test that a stationary module has angle 0"""
        assert module_angle(0.0, -0.0) == 0.0

    def test_solver_is_immutable(self, kinematics: SwerveDriveKinematics) -> None:
        """Test that the layout cannot be swapped after construction"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            kinematics.layout = ModuleLayout.holonomic(1.0, 1.0)  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            kinematics.num_modules = 2  # type: ignore[misc]

        front_left = kinematics.to_module_states(ChassisSpeeds(0.0, 0.0, 1.0))[0]
        assert front_left.speed_mps == pytest.approx(np.hypot(0.25, 0.3))


class TestDifferentialDriveKinematics:
    """Test suite for differential kinematics"""

    @pytest.fixture
    def kinematics(self) -> DifferentialDriveKinematics:
        return DifferentialDriveKinematics(0.6)

    def test_to_wheel_speeds(self, kinematics: DifferentialDriveKinematics) -> None:
        """Test forward plus rotation splits into side speeds"""
        wheel_speeds = kinematics.to_wheel_speeds(ChassisSpeeds(2.0, 0.0, 1.0))

        assert wheel_speeds.left_mps == pytest.approx(1.7)
        assert wheel_speeds.right_mps == pytest.approx(2.3)

    def test_lateral_ignored(self, kinematics: DifferentialDriveKinematics) -> None:
        """Test that lateral velocity has no effect"""
        with_lateral = kinematics.to_wheel_speeds(ChassisSpeeds(1.0, 5.0, 0.5))
        without_lateral = kinematics.to_wheel_speeds(ChassisSpeeds(1.0, 0.0, 0.5))

        assert with_lateral == without_lateral

    def test_to_chassis_speeds(self, kinematics: DifferentialDriveKinematics) -> None:
        """Test averaging and differencing of side speeds"""
        speeds = kinematics.to_chassis_speeds(DifferentialWheelSpeeds(1.7, 2.3))

        assert speeds.vx == pytest.approx(2.0)
        assert speeds.vy == 0.0
        assert speeds.omega == pytest.approx(1.0)

    def test_spin_in_place(self, kinematics: DifferentialDriveKinematics) -> None:
        """Test opposite side speeds give pure rotation"""
        speeds = kinematics.to_chassis_speeds(DifferentialWheelSpeeds(-0.3, 0.3))

        assert speeds.vx == pytest.approx(0.0)
        assert speeds.omega == pytest.approx(1.0)

    def test_invalid_trackwidth(self) -> None:
        """Test that trackwidth must be positive"""
        with pytest.raises(ConfigurationError):
            DifferentialDriveKinematics(0.0)

    def test_solver_is_immutable(self, kinematics: DifferentialDriveKinematics) -> None:
        """Test that the trackwidth cannot be changed after construction"""
        with pytest.raises(dataclasses.FrozenInstanceError):
            kinematics.trackwidth_meters = 2.0  # type: ignore[misc]

        wheel_speeds = kinematics.to_wheel_speeds(ChassisSpeeds(2.0, 0.0, 1.0))
        assert wheel_speeds.left_mps == pytest.approx(1.7)
        assert wheel_speeds.right_mps == pytest.approx(2.3)
