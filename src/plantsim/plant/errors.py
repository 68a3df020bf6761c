"""Exceptions raised while configuring plant elements.

Stepping an element never raises; every error surfaces before the first
``step`` call so an invalid configuration cannot reach a simulation loop.
"""
from __future__ import annotations


class PlantConfigurationError(ValueError):
    """Raised for an invalid construction parameter of a plant element."""


class CapacityError(PlantConfigurationError):
    """Raised when a requested delay line exceeds the buffer capacity.

    Attributes:
        kind: Short type name of the element (e.g. ``"PT0"``).
        requested: Number of delay samples the configuration asks for.
        maximum: Largest number of delay samples the element supports.
    """

    def __init__(self, kind: str, requested: int, maximum: int) -> None:
        self.kind = kind
        self.requested = requested
        self.maximum = maximum
        super().__init__(
            f"{kind}: delay of {requested} samples exceeds buffer capacity "
            f"of {maximum} samples"
        )
