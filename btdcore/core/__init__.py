"""
Core fixed-point primitives, domain models, and contract validators.

This module contains the foundational building blocks that are independent
of external systems (chains, oracles, storage, etc.).
"""
