"""Fixed-point helpers for the integer element variants.

All integer elements use the same format: a value ``v`` is stored as the
integer ``round(v * 2**10)``. Multiplying two scaled values yields a doubly
scaled product that needs exactly one right shift to return to single scale.
Right shifts on Python ints are arithmetic (they floor towards minus
infinity), matching ``>>`` on signed integers in embedded C.
"""
from __future__ import annotations

FIXED_POINT_SHIFT_BITS: int = 10
FIXED_POINT_SCALE: int = 1 << FIXED_POINT_SHIFT_BITS


def to_fixed(value: float) -> int:
    """Convert a real value to the scaled integer representation."""
    return int(round(value * FIXED_POINT_SCALE))


def from_fixed(code: int) -> int:
    """Drop the fractional bits of a scaled integer."""
    return code >> FIXED_POINT_SHIFT_BITS


def fixed_mul(a: int, b: int) -> int:
    """Multiply two scaled integers, returning a single-scaled result."""
    return (a * b) >> FIXED_POINT_SHIFT_BITS


def fixed_to_float(code: int) -> float:
    """Convert a scaled integer back to a real value (diagnostics only)."""
    return code / FIXED_POINT_SCALE
