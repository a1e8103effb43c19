"""
Test suite for BigVector

Contains:
- tests/unit/          : Unit tests for precision, arithmetic and the vector model
"""
