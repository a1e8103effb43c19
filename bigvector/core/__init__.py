"""
Core domain models and mathematical primitives.

This module contains the vector value type and the decimal precision policy
it is built on. No I/O, no external systems.
"""
