"""PT2 element: second-order lag / damped oscillator with gain.

State is the output ``x1`` and its scaled derivative ``x2``; both advance
together by explicit forward Euler with step ``h``::

    x2[k] = x2[k-1] + h * (-2 D w x2[k-1] - w^2 x1[k-1] + K w^2 u[k])
    x1[k] = x1[k-1] + h * w * x2[k-1]

with natural frequency ``w``, damping ``D`` and gain ``K``. Alternatively the
element is parameterised by two time constants::

    w = 1 / sqrt(T1 T2),    D = (T1 + T2) / (2 T1 T2)

The explicit scheme is only stable for ``h`` small relative to ``1 / w``;
choosing the step is left to the caller.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any

from plantsim.plant.errors import PlantConfigurationError
from plantsim.plant.fixed_point import fixed_mul, from_fixed, to_fixed
from plantsim.plant.interfaces import PlantElement, check_non_negative, check_positive


class DampingRegime(str, Enum):
    UNDERDAMPED = "underdamped"
    CRITICALLY_DAMPED = "critically_damped"
    OVERDAMPED = "overdamped"


class SecondOrderLag(PlantElement):
    """Floating-point PT2 element.

    Parameters
    ----------
    sample_interval:
        Integration step ``h``. Must be positive.
    natural_frequency:
        Undamped natural frequency ``w``. Must be positive.
    damping:
        Damping ratio ``D``: below 1 oscillates, 1 is critically damped,
        above 1 is overdamped. Must be ``>= 0``.
    gain:
        Static gain ``K``. Must be positive.
    """

    kind = "PT2"

    def __init__(
        self,
        sample_interval: float = 1.0,
        natural_frequency: float = 1.0,
        damping: float = 1.0,
        gain: float = 1.0,
    ) -> None:
        self._sample_interval = check_positive(self.kind, "sample_interval", sample_interval)
        self._natural_frequency = check_positive(self.kind, "natural_frequency", natural_frequency)
        self._damping = check_non_negative(self.kind, "damping", damping)
        self._set_gain(gain)
        self._previous_output: Any = 0.0
        self._previous_derivative: Any = 0.0
        self.reset()

    @classmethod
    def from_time_constants(
        cls,
        t1: float,
        t2: float,
        sample_interval: float = 1.0,
        gain: float = 1.0,
    ) -> SecondOrderLag:
        """Build the element from two lag time constants ``T1`` and ``T2``."""
        t1 = check_positive(cls.kind, "t1", t1)
        t2 = check_positive(cls.kind, "t2", t2)
        return cls(
            sample_interval=sample_interval,
            natural_frequency=1.0 / math.sqrt(t1 * t2),
            damping=(t1 + t2) / (2.0 * t1 * t2),
            gain=gain,
        )

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)

    def step(self, u: Any) -> Any:
        u = float(u)
        h = self._sample_interval
        w = self._natural_frequency
        x1 = self._previous_output
        x2 = self._previous_derivative

        self._previous_derivative = x2 + h * (
            -2.0 * self._damping * w * x2 - w * w * x1 + self._gain * w * w * u
        )
        self._previous_output = x1 + h * w * x2
        return self._previous_output

    def reset(self) -> None:
        self._previous_output = 0.0
        self._previous_derivative = 0.0

    def parameters(self) -> dict[str, Any]:
        return {
            "sample_interval": self._sample_interval,
            "natural_frequency": self._natural_frequency,
            "damping": self._damping,
            "gain": self._gain,
        }

    def state(self) -> tuple[Any, ...]:
        return (self._previous_output, self._previous_derivative)

    def _set_state(self, state: tuple[Any, ...]) -> None:
        self._previous_output, self._previous_derivative = state

    @property
    def sample_interval(self) -> float:
        return self._sample_interval

    @property
    def natural_frequency(self) -> float:
        return self._natural_frequency

    @property
    def damping(self) -> float:
        return self._damping

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def regime(self) -> DampingRegime:
        if math.isclose(self._damping, 1.0):
            return DampingRegime.CRITICALLY_DAMPED
        if self._damping < 1.0:
            return DampingRegime.UNDERDAMPED
        return DampingRegime.OVERDAMPED

    @property
    def previous_output(self) -> Any:
        return self._previous_output

    @property
    def previous_derivative(self) -> Any:
        return self._previous_derivative


class FixedPointSecondOrderLag(SecondOrderLag):
    """Integer PT2 element in 10-bit fixed point.

    Parameters and both state variables are held at single scale; every
    product of two scaled quantities goes through one ``fixed_mul`` shift.
    Inputs are integers and the output is the state shifted back to the
    input scale.
    """

    arithmetic = "fixed"

    def __init__(
        self,
        sample_interval: float = 1.0,
        natural_frequency: float = 1.0,
        damping: float = 1.0,
        gain: float = 1.0,
    ) -> None:
        super().__init__(sample_interval, natural_frequency, damping, gain)
        self._h_q = to_fixed(self._sample_interval)
        self._w_q = to_fixed(self._natural_frequency)
        if self._h_q <= 0 or self._w_q <= 0:
            raise PlantConfigurationError(
                f"{self.kind}: sample_interval and natural_frequency must be at "
                "least one fixed-point LSB"
            )
        self._w2_q = fixed_mul(self._w_q, self._w_q)
        self._two_d_w_q = fixed_mul(to_fixed(2.0 * self._damping), self._w_q)
        self._h_w_q = fixed_mul(self._h_q, self._w_q)

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)
        self._gain_q = to_fixed(self._gain)
        if self._gain_q <= 0:
            raise PlantConfigurationError(
                f"{self.kind}: gain {gain} is below the fixed-point resolution"
            )

    def step(self, u: Any) -> int:
        x1 = self._previous_output
        x2 = self._previous_derivative

        acceleration = (
            -fixed_mul(self._two_d_w_q, x2)
            - fixed_mul(self._w2_q, x1)
            + fixed_mul(int(u) * self._gain_q, self._w2_q)
        )
        self._previous_derivative = x2 + fixed_mul(self._h_q, acceleration)
        self._previous_output = x1 + fixed_mul(self._h_w_q, x2)
        return from_fixed(self._previous_output)

    def reset(self) -> None:
        self._previous_output = 0
        self._previous_derivative = 0

    @property
    def previous_output(self) -> int:
        return from_fixed(self._previous_output)

    @property
    def previous_derivative(self) -> int:
        return from_fixed(self._previous_derivative)
