"""plantsim — Discrete-time plant elements (PT0, PT1, PT2, hysteresis) for control-loop testing."""

__version__ = "0.1.0"

# Plant elements and the handle layer
from plantsim.plant import (
    CapacityError,
    DelayBuffer,
    ElementHandle,
    ElementKind,
    FirstOrderLag,
    FixedPointDelayBuffer,
    FixedPointFirstOrderLag,
    FixedPointSecondOrderLag,
    HysteresisBuilder,
    HysteresisSwitch,
    LinearSegment,
    PlantChain,
    PlantConfigurationError,
    PlantElement,
    SecondOrderLag,
)

# Signals and the simulation runner
from plantsim.signal import ImpulseFunction, StepFunction, TimeRange
from plantsim.analysis import SimulationResult, simulate, step_response

__all__ = [
    # Plant
    "PlantElement",
    "DelayBuffer",
    "FixedPointDelayBuffer",
    "FirstOrderLag",
    "FixedPointFirstOrderLag",
    "SecondOrderLag",
    "FixedPointSecondOrderLag",
    "LinearSegment",
    "HysteresisSwitch",
    "HysteresisBuilder",
    "ElementHandle",
    "ElementKind",
    "PlantChain",
    "PlantConfigurationError",
    "CapacityError",
    # Signals / analysis
    "StepFunction",
    "ImpulseFunction",
    "TimeRange",
    "SimulationResult",
    "simulate",
    "step_response",
]
