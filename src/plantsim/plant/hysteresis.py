"""Hysteresis element: two linear branches with a switching band.

Below ``lower_threshold`` the lower branch is active, above
``upper_threshold`` the upper branch. Inside the band the branch that was
active last stays active, which is the memory effect that distinguishes a
hysteresis from a plain comparator.

Thresholds are usually derived rather than given, so the element comes with
:class:`HysteresisBuilder`::

    h = (
        HysteresisBuilder(LinearSegment(0.5, 0.0), LinearSegment(1.0, 1.0))
        .spread_y(1.0)
        .build()
    )
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from plantsim.plant.errors import PlantConfigurationError
from plantsim.plant.interfaces import PlantElement


@dataclass(frozen=True)
class LinearSegment:
    """Affine map ``y = slope * x + intercept``."""

    slope: Any = 1
    intercept: Any = 0

    def __call__(self, x: Any) -> Any:
        return self.slope * x + self.intercept


class Branch(str, Enum):
    """Which side the input last left the band from."""

    FROM_LOWER = "from_lower"
    FROM_UPPER = "from_upper"


class HysteresisSwitch(PlantElement):
    """Two-branch hysteresis.

    Parameters
    ----------
    lower_segment, upper_segment:
        Output maps active below / above the band.
    lower_threshold, upper_threshold:
        Band limits, ``lower_threshold <= upper_threshold``. Equal
        thresholds give a comparator without memory.
    branch:
        Initially active branch.

    Arithmetic is generic: outputs follow the segments, so integer segments
    and integer inputs give integer outputs. Thresholds only take part in
    comparisons and keep whatever type they were given; thresholds derived
    by :class:`HysteresisBuilder` through a division are floats.
    """

    kind = "Hysteresis"

    def __init__(
        self,
        lower_segment: LinearSegment,
        upper_segment: LinearSegment,
        lower_threshold: Any = 0,
        upper_threshold: Any = 0,
        branch: Branch = Branch.FROM_LOWER,
    ) -> None:
        if lower_threshold > upper_threshold:
            raise PlantConfigurationError(
                f"{self.kind}: lower_threshold {lower_threshold} is above "
                f"upper_threshold {upper_threshold}"
            )
        self._lower_segment = lower_segment
        self._upper_segment = upper_segment
        self._lower_threshold = lower_threshold
        self._upper_threshold = upper_threshold
        self._initial_branch = Branch(branch)
        self._branch = self._initial_branch

    def step(self, u: Any) -> Any:
        if u < self._lower_threshold:
            self._branch = Branch.FROM_LOWER
            return self._lower_segment(u)
        if u > self._upper_threshold:
            self._branch = Branch.FROM_UPPER
            return self._upper_segment(u)
        if self._branch is Branch.FROM_LOWER:
            return self._lower_segment(u)
        return self._upper_segment(u)

    def reset(self) -> None:
        self._branch = self._initial_branch

    def parameters(self) -> dict[str, Any]:
        return {
            "lower_segment": self._lower_segment,
            "upper_segment": self._upper_segment,
            "lower_threshold": self._lower_threshold,
            "upper_threshold": self._upper_threshold,
            "branch": self._initial_branch,
        }

    def state(self) -> tuple[Any, ...]:
        return (self._branch,)

    def _set_state(self, state: tuple[Any, ...]) -> None:
        (self._branch,) = state

    @property
    def lower_segment(self) -> LinearSegment:
        return self._lower_segment

    @property
    def upper_segment(self) -> LinearSegment:
        return self._upper_segment

    @property
    def lower_threshold(self) -> Any:
        return self._lower_threshold

    @property
    def upper_threshold(self) -> Any:
        return self._upper_threshold

    @property
    def branch(self) -> Branch:
        """Currently active branch."""
        return self._branch


class HysteresisBuilder:
    """Derives consistent thresholds for a :class:`HysteresisSwitch`.

    Thresholds resolve in ``build()``:

    - both given explicitly (``lower_x``/``upper_x``/``lower_y``/``upper_y``):
      used as they are;
    - neither given: ``midpoint -/+ spread / 2``;
    - only one given: the other sits one full ``spread`` away from it.

    ``midpoint`` defaults to 0 and ``spread`` to 0 (a band of zero width).
    Thresholds resolved through ``spread / 2`` or a slope difference are
    floats even for integer segments (true division); ``lower_x`` /
    ``upper_x`` combined with an integer ``spread_x`` stay integers.
    Methods that divide by the slope difference raise
    ``PlantConfigurationError`` when both segments have the same slope.
    """

    def __init__(self, lower_segment: LinearSegment, upper_segment: LinearSegment) -> None:
        self._lower_segment = lower_segment
        self._upper_segment = upper_segment
        self._lower: Any | None = None
        self._upper: Any | None = None
        zero = type(lower_segment.slope)(0)
        self._midpoint: Any = zero
        self._spread: Any = zero
        self._branch = Branch.FROM_LOWER

    def _slope_difference(self, method: str) -> Any:
        delta = self._upper_segment.slope - self._lower_segment.slope
        if delta == 0:
            raise PlantConfigurationError(
                f"Hysteresis: {method}() needs segments with different slopes, "
                f"both are {self._lower_segment.slope}"
            )
        return delta

    def _offset_crossing(self, method: str, delta_y: Any) -> Any:
        # m_lower * x + n_lower + delta_y = m_upper * x + n_upper
        return (
            self._lower_segment.intercept - self._upper_segment.intercept + delta_y
        ) / self._slope_difference(method)

    def spread_x(self, spread: Any) -> HysteresisBuilder:
        """Band width in input units."""
        self._spread = spread
        return self

    def spread_y(self, spread: Any) -> HysteresisBuilder:
        """Band width in output units, converted through the slope difference."""
        self._spread = spread / self._slope_difference("spread_y")
        return self

    def cross(self) -> HysteresisBuilder:
        """Centre the band on the input where both segments intersect."""
        self._midpoint = self._offset_crossing("cross", 0)
        return self

    def midpoint(self, midpoint: Any) -> HysteresisBuilder:
        self._midpoint = midpoint
        return self

    def lower_x(self, threshold: Any) -> HysteresisBuilder:
        self._lower = threshold
        return self

    def upper_x(self, threshold: Any) -> HysteresisBuilder:
        self._upper = threshold
        return self

    def lower_y(self, delta_y: Any) -> HysteresisBuilder:
        """Lower threshold where the lower segment sits ``delta_y`` below the upper."""
        self._lower = self._offset_crossing("lower_y", delta_y)
        return self

    def upper_y(self, delta_y: Any) -> HysteresisBuilder:
        """Upper threshold where the lower segment sits ``delta_y`` below the upper."""
        self._upper = self._offset_crossing("upper_y", delta_y)
        return self

    def upper_direction(self) -> HysteresisBuilder:
        """Start on the upper branch instead of the lower one."""
        self._branch = Branch.FROM_UPPER
        return self

    def thresholds(self) -> tuple[Any, Any]:
        """Resolved ``(lower_threshold, upper_threshold)`` pair."""
        lower, upper = self._lower, self._upper
        if lower is None and upper is None:
            return self._midpoint - self._spread / 2, self._midpoint + self._spread / 2
        if lower is None:
            return upper - self._spread, upper
        if upper is None:
            return lower, lower + self._spread
        return lower, upper

    def build(self) -> HysteresisSwitch:
        lower, upper = self.thresholds()
        return HysteresisSwitch(
            lower_segment=self._lower_segment,
            upper_segment=self._upper_segment,
            lower_threshold=lower,
            upper_threshold=upper,
            branch=self._branch,
        )
