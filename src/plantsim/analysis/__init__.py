"""plantsim.analysis — Open-loop simulation of plant elements.

Quick start::

    from plantsim.analysis import step_response
    from plantsim.plant import FirstOrderLag
    from plantsim.signal import TimeRange

    result = step_response(FirstOrderLag(time_constant=10.0), TimeRange(0.0, 100.0))
    result.final_value
"""
from plantsim.analysis.simulate import SimulationResult, simulate, step_response

__all__ = [
    "SimulationResult",
    "simulate",
    "step_response",
]
