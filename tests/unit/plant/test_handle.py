"""Unit tests for plantsim.plant.handle.ElementHandle."""
from __future__ import annotations

import copy

import pytest

from plantsim.plant.handle import ElementHandle, ElementKind
from plantsim.plant.hysteresis import HysteresisBuilder, HysteresisSwitch, LinearSegment
from plantsim.plant.interfaces import PlantElement
from plantsim.plant.pt0 import DelayBuffer, FixedPointDelayBuffer
from plantsim.plant.pt1 import FirstOrderLag, FixedPointFirstOrderLag
from plantsim.plant.pt2 import FixedPointSecondOrderLag, SecondOrderLag


def _hysteresis() -> HysteresisSwitch:
    return HysteresisBuilder(LinearSegment(1.0, 0.0), LinearSegment(1.0, 1.0)).spread_x(2.0).build()


ALL_ELEMENTS = [
    (lambda: DelayBuffer(delay_time=2.0), ElementKind.PT0, "float"),
    (lambda: FixedPointDelayBuffer(delay_time=2.0), ElementKind.PT0, "fixed"),
    (lambda: FirstOrderLag(time_constant=4.0), ElementKind.PT1, "float"),
    (lambda: FixedPointFirstOrderLag(time_constant=4.0), ElementKind.PT1, "fixed"),
    (lambda: SecondOrderLag(sample_interval=0.1), ElementKind.PT2, "float"),
    (lambda: FixedPointSecondOrderLag(sample_interval=0.25), ElementKind.PT2, "fixed"),
    (_hysteresis, ElementKind.HYSTERESIS, "float"),
]


# ─── Construction ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize("factory,kind,arithmetic", ALL_ELEMENTS)
def test_kind_and_arithmetic(factory, kind, arithmetic):
    handle = ElementHandle(factory())
    assert handle.kind is kind
    assert handle.display_name() == kind.value
    assert handle.arithmetic == arithmetic


def test_default_is_float_pt1():
    handle = ElementHandle.default()
    assert handle.kind is ElementKind.PT1
    assert handle.arithmetic == "float"
    assert handle.unwrap(FirstOrderLag) == FirstOrderLag()


def test_unknown_element_type_rejected():
    class Doubler(PlantElement):
        kind = "Doubler"

        def step(self, u):
            return 2 * u

        def reset(self):
            pass

        def parameters(self):
            return {}

        def state(self):
            return ()

        def _set_state(self, state):
            pass

    with pytest.raises(TypeError, match="Doubler"):
        ElementHandle(Doubler())


def test_non_element_rejected():
    with pytest.raises(TypeError):
        ElementHandle(object())  # type: ignore[arg-type]


# ─── Stepping ──────────────────────────────────────────────────────────────────


def test_step_forwards_to_element():
    handle = ElementHandle(DelayBuffer(delay_time=2.0))
    outs = [handle.step(u) for u in (100, 1000, 2000, 2000, 2000)]
    assert outs == [0.0, 0.0, 100.0, 1000.0, 2000.0]


def test_reset_forwards_to_element():
    handle = ElementHandle(FirstOrderLag(time_constant=4.0))
    handle.step(100.0)
    handle.reset()
    assert handle.step(100.0) == pytest.approx(25.0)


def test_mixed_collection_steps_uniformly():
    plant = [ElementHandle(factory()) for factory, _, _ in ALL_ELEMENTS]
    outs = [handle.step(10) for handle in plant]
    assert len(outs) == len(ALL_ELEMENTS)


# ─── Cloning ───────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("factory,kind,arithmetic", ALL_ELEMENTS)
def test_clone_is_equal_and_independent(factory, kind, arithmetic):
    original = ElementHandle(factory())
    original.step(5)
    clone = original.clone()
    assert clone == original
    assert clone.kind is original.kind

    before = original.describe(), copy.deepcopy(original)
    for u in (50, -30, 70):
        clone.step(u)
    assert original.describe() == before[0]
    assert original == before[1]


def test_clones_diverge_under_different_inputs():
    original = ElementHandle(FirstOrderLag(time_constant=4.0))
    a, b = original.clone(), original.clone()
    a.step(100.0)
    b.step(-100.0)
    assert a != b
    assert original.unwrap(FirstOrderLag).previous_output == 0.0


def test_copy_protocol_returns_independent_handle():
    original = ElementHandle(DelayBuffer(delay_time=1.0))
    shallow = copy.copy(original)
    shallow.step(9.0)
    assert original.unwrap(DelayBuffer).history == (0.0,)
    assert shallow.unwrap(DelayBuffer).history == (9.0,)


# ─── Equality ──────────────────────────────────────────────────────────────────


def test_equality_is_reflexive_and_symmetric():
    a = ElementHandle(FirstOrderLag(time_constant=2.0))
    b = ElementHandle(FirstOrderLag(time_constant=2.0))
    assert a == a
    assert a == b and b == a


def test_equality_depends_on_state():
    a = ElementHandle(FirstOrderLag(time_constant=2.0))
    b = ElementHandle(FirstOrderLag(time_constant=2.0))
    a.step(1.0)
    assert a != b
    b.step(1.0)
    assert a == b


def test_equality_depends_on_parameters():
    assert ElementHandle(FirstOrderLag(gain=1.0)) != ElementHandle(FirstOrderLag(gain=2.0))


def test_different_kinds_are_never_equal():
    pt0 = ElementHandle(DelayBuffer())
    pt1 = ElementHandle(FirstOrderLag())
    assert pt0 != pt1
    assert pt1 != pt0


def test_fixed_and_float_variants_are_not_equal():
    assert ElementHandle(FirstOrderLag()) != ElementHandle(FixedPointFirstOrderLag())


def test_comparison_with_other_types():
    assert ElementHandle.default() != "PT1"
    assert ElementHandle.default() != FirstOrderLag()


def test_handles_are_unhashable():
    with pytest.raises(TypeError):
        hash(ElementHandle.default())


# ─── Display and access ────────────────────────────────────────────────────────


def test_display_name_ignores_state():
    handle = ElementHandle(SecondOrderLag())
    name = handle.display_name()
    handle.step(3.0)
    assert handle.display_name() == name == "PT2"


def test_describe_lists_parameters():
    handle = ElementHandle(FirstOrderLag(sample_interval=0.5, time_constant=2.0))
    text = handle.describe()
    assert text.startswith("PT1(")
    assert "time_constant=2.0" in text
    assert str(handle) == text
    assert repr(handle) == f"ElementHandle({text})"


def test_unwrap_returns_held_element():
    lag = FirstOrderLag(time_constant=3.0)
    handle = ElementHandle(lag)
    assert handle.unwrap(FirstOrderLag) is lag


def test_unwrap_wrong_type_raises():
    handle = ElementHandle(FirstOrderLag())
    with pytest.raises(TypeError, match="FirstOrderLag"):
        handle.unwrap(DelayBuffer)
    with pytest.raises(TypeError):
        handle.unwrap(FixedPointFirstOrderLag)
