"""
Unit tests for WheelSpin components.

Time is driven by ManualScheduler and randomness by pinned or seeded
sources, so the tests run fast and deterministically without real AWS.
"""
