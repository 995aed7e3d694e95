"""
Result models module.

Immutable result records produced by the analytics core. A metric that
cannot be computed is None, never a placeholder number.
"""
