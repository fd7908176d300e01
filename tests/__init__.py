"""
Test suite for fixdec

Contains:
- tests/unit/          : Example-based tests per module
- tests/properties/    : Hypothesis property tests for the value type
"""
