"""PT1 element: first-order lag with gain.

Discretised with the forward Euler method::

    y[k] = y[k-1] + alpha * (gain * u[k] - y[k-1]),    alpha = Ts / T1

where ``Ts`` is the sample interval and ``T1`` the time constant. ``T1 = 0``
models an instantaneous gain element (``alpha = 1``).
"""
from __future__ import annotations

from typing import Any

from plantsim.plant.errors import PlantConfigurationError
from plantsim.plant.fixed_point import FIXED_POINT_SCALE, fixed_mul, from_fixed, to_fixed
from plantsim.plant.interfaces import PlantElement, check_positive


def _check_time_constant(kind: str, time_constant: float, sample_interval: float) -> float:
    time_constant = float(time_constant)
    if time_constant != 0.0 and not time_constant >= sample_interval:
        raise PlantConfigurationError(
            f"{kind}: time_constant must be 0 or >= sample_interval "
            f"({sample_interval}), got {time_constant}"
        )
    return time_constant


class FirstOrderLag(PlantElement):
    """Floating-point PT1 element.

    Parameters
    ----------
    sample_interval:
        Time between two ``step`` calls. Must be positive.
    time_constant:
        Lag time constant ``T1``; either ``0`` (no lag) or at least one
        sample interval, which keeps ``alpha`` within ``(0, 1]``.
    gain:
        Static amplification. Must be positive.
    """

    kind = "PT1"

    def __init__(
        self,
        sample_interval: float = 1.0,
        time_constant: float = 1.0,
        gain: float = 1.0,
    ) -> None:
        self._sample_interval = check_positive(self.kind, "sample_interval", sample_interval)
        self._time_constant = _check_time_constant(
            self.kind, time_constant, self._sample_interval
        )
        self._set_gain(gain)
        self._alpha = (
            self._sample_interval / self._time_constant if self._time_constant else 1.0
        )
        self._previous_output: Any = 0.0
        self.reset()

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)

    def step(self, u: Any) -> Any:
        u = float(u)
        out = self._previous_output + self._alpha * (self._gain * u - self._previous_output)
        self._previous_output = out
        return out

    def reset(self) -> None:
        self._previous_output = 0.0

    def parameters(self) -> dict[str, Any]:
        return {
            "sample_interval": self._sample_interval,
            "time_constant": self._time_constant,
            "gain": self._gain,
        }

    def state(self) -> tuple[Any, ...]:
        return (self._previous_output,)

    def _set_state(self, state: tuple[Any, ...]) -> None:
        (self._previous_output,) = state

    @property
    def sample_interval(self) -> float:
        return self._sample_interval

    @property
    def time_constant(self) -> float:
        return self._time_constant

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def alpha(self) -> float:
        """Smoothing factor ``Ts / T1`` (1.0 for an instantaneous element)."""
        return self._alpha

    @property
    def previous_output(self) -> Any:
        return self._previous_output


class FixedPointFirstOrderLag(FirstOrderLag):
    """Integer PT1 element in 10-bit fixed point.

    ``gain`` and ``alpha`` are both pre-scaled by ``2**10`` and the state is
    kept at single scale, so one step reads::

        state += (alpha_q * (u * gain_q - state)) >> 10
        y      = state >> 10

    ``u * gain_q`` and ``state`` share one scale factor; multiplying their
    difference by ``alpha_q`` adds a second, which the single shift removes
    before the result joins the state.

    ``alpha_q = floor(Ts * 2**10 / T1)`` truncates the smoothing factor, so the
    element filters with :attr:`alpha` ``= alpha_q / 2**10`` rather than
    ``Ts / T1``. Against a float lag with that same factor the output stays
    within one LSB plus ``1 / alpha_q``; against ``Ts / T1`` the transient
    also carries the quantisation error of alpha (none when ``Ts * 2**10 / T1``
    is an integer, as for ``T1 = 4 Ts``).
    """

    arithmetic = "fixed"

    def __init__(
        self,
        sample_interval: float = 1.0,
        time_constant: float = 1.0,
        gain: float = 1.0,
    ) -> None:
        super().__init__(sample_interval, time_constant, gain)
        self._alpha_q = (
            int(self._sample_interval * FIXED_POINT_SCALE / self._time_constant)
            if self._time_constant
            else FIXED_POINT_SCALE
        )
        if self._alpha_q <= 0:
            raise PlantConfigurationError(
                f"{self.kind}: sample_interval / time_constant is below the "
                "fixed-point resolution"
            )

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)
        self._gain_q = to_fixed(self._gain)
        if self._gain_q <= 0:
            raise PlantConfigurationError(
                f"{self.kind}: gain {gain} is below the fixed-point resolution"
            )

    def step(self, u: Any) -> int:
        self._previous_output += fixed_mul(
            self._alpha_q, int(u) * self._gain_q - self._previous_output
        )
        return from_fixed(self._previous_output)

    def reset(self) -> None:
        self._previous_output = 0

    @property
    def alpha(self) -> float:
        """Smoothing factor actually applied, ``alpha_q / 2**10``."""
        return self._alpha_q / FIXED_POINT_SCALE

    @property
    def alpha_q(self) -> int:
        return self._alpha_q

    @property
    def gain_q(self) -> int:
        return self._gain_q

    @property
    def previous_output(self) -> int:
        return from_fixed(self._previous_output)
