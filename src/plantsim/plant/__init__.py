"""plantsim.plant — Discrete-time plant elements for control-loop testing.

Public API
----------
PlantElement
    Abstract base class for all elements.
DelayBuffer / FixedPointDelayBuffer
    PT0: transport delay with gain.
FirstOrderLag / FixedPointFirstOrderLag
    PT1: first-order lag with gain.
SecondOrderLag / FixedPointSecondOrderLag
    PT2: second-order lag / damped oscillator, forward Euler.
HysteresisSwitch, HysteresisBuilder, LinearSegment, Branch
    Two-branch hysteresis and its threshold derivation.
ElementHandle, ElementKind
    Value-semantic handle over any element of the closed catalogue.
PlantChain
    Series composition of handles.

Quick start::

    from plantsim.plant import DelayBuffer, ElementHandle

    pt0 = ElementHandle(DelayBuffer(delay_time=2.0))
    outputs = [pt0.step(u) for u in (100.0, 1000.0, 2000.0)]  # [0.0, 0.0, 100.0]
"""
from plantsim.plant.chain import PlantChain
from plantsim.plant.errors import CapacityError, PlantConfigurationError
from plantsim.plant.fixed_point import FIXED_POINT_SCALE, FIXED_POINT_SHIFT_BITS
from plantsim.plant.handle import ElementHandle, ElementKind
from plantsim.plant.hysteresis import Branch, HysteresisBuilder, HysteresisSwitch, LinearSegment
from plantsim.plant.interfaces import PlantElement
from plantsim.plant.pt0 import MAX_DELAY_SAMPLES, DelayBuffer, FixedPointDelayBuffer
from plantsim.plant.pt1 import FirstOrderLag, FixedPointFirstOrderLag
from plantsim.plant.pt2 import DampingRegime, FixedPointSecondOrderLag, SecondOrderLag

__all__ = [
    "PlantElement",
    "PlantConfigurationError",
    "CapacityError",
    "FIXED_POINT_SCALE",
    "FIXED_POINT_SHIFT_BITS",
    "MAX_DELAY_SAMPLES",
    "DelayBuffer",
    "FixedPointDelayBuffer",
    "FirstOrderLag",
    "FixedPointFirstOrderLag",
    "SecondOrderLag",
    "FixedPointSecondOrderLag",
    "DampingRegime",
    "LinearSegment",
    "Branch",
    "HysteresisSwitch",
    "HysteresisBuilder",
    "ElementHandle",
    "ElementKind",
    "PlantChain",
]
