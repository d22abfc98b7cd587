"""
Test package for the WheelSpin package.

Test Organization:
    unit/: Unit tests for models, services and the spin engine
    conftest.py: Pytest configuration and shared fixtures
"""
