"""TimeSignal interface and the basic test signals.

Signals map a time value to an input sample. They are the external source
that feeds plant elements in a simulation run.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar


class TimeSignal(ABC):
    """A function of time producing input samples."""

    kind: ClassVar[str] = ""

    @abstractmethod
    def value_at(self, time: float) -> float:
        """Signal value at ``time``."""

    def __add__(self, other: TimeSignal) -> SuperPosition:
        if not isinstance(other, TimeSignal):
            return NotImplemented
        return SuperPosition(self, other)


@dataclass(frozen=True)
class StepFunction(TimeSignal):
    """``pre_value`` before ``step_time``, ``post_value`` from then on."""

    kind: ClassVar[str] = "Step"

    pre_value: float = 0.0
    post_value: float = 1.0
    step_time: float = 0.0

    def value_at(self, time: float) -> float:
        return self.post_value if time >= self.step_time else self.pre_value


@dataclass(frozen=True)
class ImpulseFunction(TimeSignal):
    """Rectangular pulse of ``amplitude`` on ``[start_time, start_time + duration]``."""

    kind: ClassVar[str] = "Impulse"

    resting_level: float = 0.0
    amplitude: float = 1.0
    start_time: float = 0.0
    duration: float = 1.0

    def value_at(self, time: float) -> float:
        if time < self.start_time or time > self.start_time + self.duration:
            return self.resting_level
        return self.amplitude


@dataclass(frozen=True)
class SuperPosition(TimeSignal):
    """Sum of two signals."""

    kind: ClassVar[str] = "SuperPosition"

    first: TimeSignal
    second: TimeSignal

    def value_at(self, time: float) -> float:
        return self.first.value_at(time) + self.second.value_at(time)
