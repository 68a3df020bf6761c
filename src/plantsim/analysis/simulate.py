"""Open-loop simulation runner for plant elements.

Drives any object with a ``step(u)`` method (a bare element, an
``ElementHandle`` or a ``PlantChain``) with a time signal and records the
input and output trajectories. The runner never resets the element, so a run
can continue from the state a previous run left behind.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from plantsim.signal.interfaces import StepFunction, TimeSignal
from plantsim.signal.time_range import TimeRange
from plantsim.utils.logging import get_logger

_logger = get_logger(__name__)


@dataclass
class SimulationResult:
    """Trajectories of one open-loop run.

    ``time``, ``input`` and ``output`` have one entry per step call.
    """

    element: str
    time: np.ndarray = field(default_factory=lambda: np.zeros(0))
    input: np.ndarray = field(default_factory=lambda: np.zeros(0))
    output: np.ndarray = field(default_factory=lambda: np.zeros(0))

    @property
    def final_value(self) -> float:
        """Last output sample (0.0 for an empty run)."""
        return float(self.output[-1]) if len(self.output) else 0.0

    def __len__(self) -> int:
        return len(self.time)


def simulate(element: Any, signal: TimeSignal, time_range: TimeRange) -> SimulationResult:
    """Step ``element`` once per sample time of ``time_range``.

    Parameters
    ----------
    element:
        Object exposing ``step(u)``; its ``name`` attribute (or class name)
        labels the result.
    signal:
        Input source evaluated at every sample time.
    time_range:
        Sample times, in increasing order.

    Returns
    -------
    SimulationResult
    """
    element_name = getattr(element, "name", type(element).__name__)

    time = time_range.to_array()
    inputs = np.array([signal.value_at(t) for t in time], dtype=np.float64)
    outputs = np.array([element.step(u) for u in inputs], dtype=np.float64)

    _logger.bind(element=element_name).debug(
        "Simulation complete",
        samples=len(time),
        final_value=outputs[-1] if len(outputs) else 0.0,
    )
    return SimulationResult(element=element_name, time=time, input=inputs, output=outputs)


def step_response(
    element: Any,
    time_range: TimeRange,
    amplitude: float = 1.0,
    step_time: float = 0.0,
) -> SimulationResult:
    """Response of ``element`` to a step from 0 to ``amplitude`` at ``step_time``."""
    return simulate(
        element,
        StepFunction(pre_value=0.0, post_value=amplitude, step_time=step_time),
        time_range,
    )
