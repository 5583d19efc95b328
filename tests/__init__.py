"""
Test suite for market model evolution description

Contains:
- tests/unit/          : Unit tests for individual modules
"""
