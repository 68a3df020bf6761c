"""PT0 element: pure transport delay with gain (zero-order lag).

    y[k] = gain * u[k - d],    d = floor(delay_time / sample_interval)

The delay line is a FIFO pre-filled with ``d`` zeros: every step appends the
amplified input at the tail and emits the head, so the first ``d`` outputs
are zero while the line is filling and ``delay_time = 0`` degenerates to a
pure gain element.
"""
from __future__ import annotations

import math
from collections import deque
from typing import Any

from plantsim.plant.errors import CapacityError, PlantConfigurationError
from plantsim.plant.fixed_point import FIXED_POINT_SHIFT_BITS, to_fixed
from plantsim.plant.interfaces import PlantElement, check_non_negative, check_positive

MAX_DELAY_SAMPLES: int = 65536
"""Default upper bound on the delay line length."""

# Absorbs representation error such as 0.3 / 0.1 == 2.9999999999999996
_FLOOR_TOLERANCE = 1e-9


def delay_samples_for(delay_time: float, sample_interval: float) -> int:
    """Number of whole samples covered by ``delay_time``."""
    return int(math.floor(delay_time / sample_interval + _FLOOR_TOLERANCE))


class DelayBuffer(PlantElement):
    """Floating-point PT0 element.

    Parameters
    ----------
    sample_interval:
        Time between two ``step`` calls. Must be positive.
    delay_time:
        Transport delay in the same time unit. Must be ``>= 0``.
    gain:
        Static amplification applied on entry to the delay line. Must be
        positive.
    capacity:
        Maximum number of delay samples this buffer accepts. A configuration
        needing more raises :class:`CapacityError` at construction.
    """

    kind = "PT0"

    def __init__(
        self,
        sample_interval: float = 1.0,
        delay_time: float = 0.0,
        gain: float = 1.0,
        capacity: int = MAX_DELAY_SAMPLES,
    ) -> None:
        self._sample_interval = check_positive(self.kind, "sample_interval", sample_interval)
        self._delay_time = check_non_negative(self.kind, "delay_time", delay_time)
        self._set_gain(gain)
        if int(capacity) < 0:
            raise PlantConfigurationError(f"{self.kind}: capacity must be >= 0, got {capacity}")
        self._capacity = int(capacity)

        self._delay_samples = delay_samples_for(self._delay_time, self._sample_interval)
        if self._delay_samples > self._capacity:
            raise CapacityError(self.kind, self._delay_samples, self._capacity)

        self._history: deque[Any] = deque()
        self.reset()

    # ── Arithmetic hooks (overridden by the fixed-point variant) ─────────────

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)

    def _zero(self) -> Any:
        return 0.0

    def _amplify(self, u: Any) -> Any:
        return float(u) * self._gain

    def _emit(self, stored: Any) -> Any:
        return stored

    # ── PlantElement API ─────────────────────────────────────────────────────

    def step(self, u: Any) -> Any:
        self._history.append(self._amplify(u))
        return self._emit(self._history.popleft())

    def reset(self) -> None:
        self._history = deque([self._zero()] * self._delay_samples)

    def parameters(self) -> dict[str, Any]:
        return {
            "sample_interval": self._sample_interval,
            "delay_time": self._delay_time,
            "gain": self._gain,
            "capacity": self._capacity,
        }

    def state(self) -> tuple[Any, ...]:
        return tuple(self._history)

    def _set_state(self, state: tuple[Any, ...]) -> None:
        # Keep the newest samples; pad the head with zeros when the line grew.
        n = self._delay_samples
        kept = list(state)[-n:] if n else []
        self._history = deque([self._zero()] * (n - len(kept)) + kept)

    # ── Read-only configuration ──────────────────────────────────────────────

    @property
    def sample_interval(self) -> float:
        return self._sample_interval

    @property
    def delay_time(self) -> float:
        return self._delay_time

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def delay_samples(self) -> int:
        return self._delay_samples

    @property
    def history(self) -> tuple[Any, ...]:
        """Pending samples, oldest first (amplified, in storage units)."""
        return tuple(self._history)


class FixedPointDelayBuffer(DelayBuffer):
    """Integer PT0 element with the gain held in 10-bit fixed point.

    Inputs are integers; each stored sample is ``u * gain_q`` with
    ``gain_q = round(gain * 2**10)`` and the emitted sample is shifted right
    by 10 bits to restore the input scale.
    """

    arithmetic = "fixed"

    def _set_gain(self, gain: float) -> None:
        self._gain = check_positive(self.kind, "gain", gain)
        self._gain_q = to_fixed(self._gain)
        if self._gain_q <= 0:
            raise PlantConfigurationError(
                f"{self.kind}: gain {gain} is below the fixed-point resolution"
            )

    def _zero(self) -> int:
        return 0

    def _amplify(self, u: Any) -> int:
        return int(u) * self._gain_q

    def _emit(self, stored: int) -> int:
        return stored >> FIXED_POINT_SHIFT_BITS

    @property
    def gain_q(self) -> int:
        """Gain in fixed-point representation."""
        return self._gain_q
