"""TimeRange: evenly spaced sample times for a simulation run."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace

import numpy as np

from plantsim.signal.interfaces import TimeSignal

DEFAULT_SAMPLES: int = 100


@dataclass(frozen=True)
class TimeRange:
    """Sample times ``start + k * sampling_interval`` for ``k < len(self)``.

    The end point is exclusive, so ``TimeRange(0, 100, 1)`` has 100 samples.

    Raises:
        ValueError: if ``start > end`` or the sampling interval is not in
            ``(0, end - start]``.
    """

    start: float = 0.0
    end: float = 100.0
    sampling_interval: float = 1.0
    unit: str = "ms"

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        if not 0.0 < self.sampling_interval <= self.end - self.start:
            raise ValueError(
                f"sampling_interval must be in (0, {self.end - self.start}], "
                f"got {self.sampling_interval}"
            )

    def with_number_of_samples(self, samples: int | None = None) -> TimeRange:
        """Same span, divided into ``samples`` intervals (default 100)."""
        n = DEFAULT_SAMPLES if samples is None else int(samples)
        if n <= 0:
            raise ValueError(f"number of samples must be positive, got {samples}")
        return replace(self, sampling_interval=(self.end - self.start) / n)

    def __len__(self) -> int:
        # Tolerance keeps e.g. (1.0 - 0.0) / 0.1 at 10 samples
        return int((self.end - self.start) / self.sampling_interval + 1e-9)

    def __iter__(self) -> Iterator[float]:
        for k in range(len(self)):
            yield self.start + k * self.sampling_interval

    def to_array(self) -> np.ndarray:
        return self.start + np.arange(len(self), dtype=np.float64) * self.sampling_interval


def sample(signal: TimeSignal, time_range: TimeRange) -> np.ndarray:
    """Evaluate ``signal`` at every sample time of ``time_range``."""
    return np.array([signal.value_at(t) for t in time_range], dtype=np.float64)
