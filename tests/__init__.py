"""
Test suite for drivebase.

This package contains unit tests organized by component:
- test_module_config.py: Tests for ModuleConfig validation and derived values
- test_motor.py: Tests for the DC motor model and motor catalog
- test_geometry.py: Tests for module layouts
- test_kinematics.py: Tests for swerve and differential kinematics
- test_robot_config.py: Tests for RobotConfig construction and conversions
- test_settings.py: Tests for loading configs from a settings file
- test_app.py: Tests for dashboard figure construction
"""
