"""
Test suite for multisend

Contains:
- tests/unit/          : Unit tests for models, fee math, contracts and the calculator
"""
