"""Unit tests for plantsim.plant.hysteresis."""
from __future__ import annotations

import pytest

from plantsim.plant.errors import PlantConfigurationError
from plantsim.plant.hysteresis import (
    Branch,
    HysteresisBuilder,
    HysteresisSwitch,
    LinearSegment,
)

IDENTITY = LinearSegment(1.0, 0.0)
OFFSET = LinearSegment(1.0, 1.0)
HALF = LinearSegment(0.5, 0.0)


@pytest.fixture
def band() -> HysteresisSwitch:
    return HysteresisSwitch(IDENTITY, OFFSET, lower_threshold=-1.0, upper_threshold=1.0)


# ─── Switching ─────────────────────────────────────────────────────────────────


def test_band_memory(band):
    assert band.step(-2.0) == pytest.approx(-2.0)
    assert band.branch is Branch.FROM_LOWER
    assert band.step(0.99) == pytest.approx(0.99)

    assert band.step(1.5) == pytest.approx(2.5)
    assert band.branch is Branch.FROM_UPPER
    assert band.step(0.0) == pytest.approx(1.0)
    assert band.step(-0.99) == pytest.approx(0.01)


def test_thresholds_are_exclusive(band):
    band.step(2.0)
    # exactly on the lower threshold is still inside the band
    assert band.step(-1.0) == pytest.approx(0.0)
    assert band.branch is Branch.FROM_UPPER
    band.step(-1.5)
    assert band.step(1.0) == pytest.approx(1.0)
    assert band.branch is Branch.FROM_LOWER


def test_equal_thresholds_act_as_comparator():
    sut = HysteresisSwitch(IDENTITY, OFFSET, lower_threshold=0.0, upper_threshold=0.0)
    assert sut.step(-0.1) == pytest.approx(-0.1)
    assert sut.step(0.1) == pytest.approx(1.1)
    assert sut.step(-0.1) == pytest.approx(-0.1)


def test_reset_restores_initial_branch(band):
    band.step(5.0)
    band.reset()
    assert band.branch is Branch.FROM_LOWER
    assert band.step(0.0) == pytest.approx(0.0)


def test_initial_upper_branch():
    sut = HysteresisSwitch(IDENTITY, OFFSET, -1.0, 1.0, branch=Branch.FROM_UPPER)
    assert sut.step(0.0) == pytest.approx(1.0)
    sut.step(-5.0)
    sut.reset()
    assert sut.branch is Branch.FROM_UPPER


def test_integer_arithmetic():
    sut = HysteresisSwitch(LinearSegment(2, 0), LinearSegment(2, 10), -5, 5)
    assert sut.step(3) == 6
    assert sut.step(6) == 22
    assert sut.step(3) == 16
    assert isinstance(sut.step(0), int)


def test_builder_thresholds_are_floats_but_outputs_stay_integer():
    sut = HysteresisBuilder(LinearSegment(2, 0), LinearSegment(2, 10)).spread_x(4).build()
    assert (sut.lower_threshold, sut.upper_threshold) == (-2.0, 2.0)
    assert isinstance(sut.lower_threshold, float)
    assert isinstance(sut.upper_threshold, float)
    out = sut.step(3)
    assert out == 16 and isinstance(out, int)
    out = sut.step(-3)
    assert out == -6 and isinstance(out, int)

    explicit = HysteresisBuilder(LinearSegment(2, 0), LinearSegment(2, 10)).spread_x(4).lower_x(1)
    assert explicit.thresholds() == (1, 5)
    assert all(isinstance(t, int) for t in explicit.thresholds())


def test_inverted_thresholds_rejected():
    with pytest.raises(PlantConfigurationError, match="above"):
        HysteresisSwitch(IDENTITY, OFFSET, lower_threshold=1.0, upper_threshold=-1.0)


def test_replace_keeps_active_branch(band):
    band.step(5.0)
    new = band.replace(lower_threshold=-2.0)
    assert new.branch is Branch.FROM_UPPER
    assert new.lower_threshold == -2.0


# ─── Builder ───────────────────────────────────────────────────────────────────


def test_builder_defaults():
    sut = HysteresisBuilder(IDENTITY, OFFSET).build()
    assert (sut.lower_threshold, sut.upper_threshold) == (0, 0)
    assert sut.branch is Branch.FROM_LOWER


def test_builder_upper_direction():
    sut = HysteresisBuilder(IDENTITY, OFFSET).upper_direction().build()
    assert (sut.lower_threshold, sut.upper_threshold) == (0, 0)
    assert sut.branch is Branch.FROM_UPPER


@pytest.mark.parametrize(
    "configure,expected",
    [
        (lambda b: b.spread_x(1.0), (-0.5, 0.5)),
        (lambda b: b.spread_x(1.0).midpoint(3.0), (2.5, 3.5)),
        (lambda b: b.spread_x(1.0).lower_x(1.0), (1.0, 2.0)),
        (lambda b: b.spread_x(1.0).upper_x(1.0), (0.0, 1.0)),
        (lambda b: b.lower_x(-3.0).upper_x(4.0), (-3.0, 4.0)),
    ],
)
def test_builder_input_side_thresholds(configure, expected):
    sut = configure(HysteresisBuilder(IDENTITY, OFFSET)).build()
    assert (sut.lower_threshold, sut.upper_threshold) == pytest.approx(expected)


@pytest.mark.parametrize(
    "configure,expected",
    [
        (lambda b: b.spread_y(1.0), (-1.0, 1.0)),
        (lambda b: b.cross(), (-2.0, -2.0)),
        (lambda b: b.spread_x(1.0).lower_y(1.0), (0.0, 1.0)),
        (lambda b: b.spread_x(1.0).upper_y(1.0), (-1.0, 0.0)),
    ],
)
def test_builder_output_side_thresholds(configure, expected):
    sut = configure(HysteresisBuilder(HALF, OFFSET)).build()
    assert (sut.lower_threshold, sut.upper_threshold) == pytest.approx(expected)


def test_cross_centres_band_on_intersection():
    builder = HysteresisBuilder(HALF, OFFSET).cross().spread_x(2.0)
    lower, upper = builder.thresholds()
    assert (lower + upper) / 2 == pytest.approx(-2.0)
    assert HALF(-2.0) == pytest.approx(OFFSET(-2.0))


@pytest.mark.parametrize("method", ["spread_y", "lower_y", "upper_y"])
def test_equal_slopes_rejected(method):
    builder = HysteresisBuilder(IDENTITY, OFFSET)
    with pytest.raises(PlantConfigurationError, match="different slopes"):
        getattr(builder, method)(1.0)


def test_equal_slopes_cross_rejected():
    with pytest.raises(PlantConfigurationError, match="cross"):
        HysteresisBuilder(IDENTITY, OFFSET).cross()


def test_builder_rejects_inverted_explicit_thresholds():
    with pytest.raises(PlantConfigurationError):
        HysteresisBuilder(IDENTITY, OFFSET).lower_x(2.0).upper_x(1.0).build()


def test_segment_is_affine():
    assert LinearSegment(2.0, -1.0)(3.0) == pytest.approx(5.0)
    assert LinearSegment()(7) == 7
