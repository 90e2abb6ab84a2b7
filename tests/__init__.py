"""
Test suite for btdcore

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
