"""plantsim.signal — Input signal sources and sample-time ranges.

Quick start::

    from plantsim.signal import StepFunction, TimeRange, sample

    u = sample(StepFunction(post_value=2.0, step_time=10.0), TimeRange(0.0, 50.0))
"""
from plantsim.signal.interfaces import ImpulseFunction, StepFunction, SuperPosition, TimeSignal
from plantsim.signal.time_range import DEFAULT_SAMPLES, TimeRange, sample

__all__ = [
    "TimeSignal",
    "StepFunction",
    "ImpulseFunction",
    "SuperPosition",
    "TimeRange",
    "DEFAULT_SAMPLES",
    "sample",
]
