"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the market model
time structure that are independent of the simulation engine.
"""
