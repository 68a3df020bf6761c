"""ElementHandle: one uniform, value-semantic handle over any plant element.

The element catalogue is closed. A handle accepts exactly the classes listed
in ``_ELEMENT_KINDS`` and tags each with its :class:`ElementKind`, so mixed
PT0/PT1/PT2/hysteresis collections can be stepped, cloned, displayed and
compared without the caller inspecting concrete types.

Quick start::

    from plantsim.plant import ElementHandle, FirstOrderLag, DelayBuffer

    plant = [
        ElementHandle(DelayBuffer(delay_time=2.0)),
        ElementHandle(FirstOrderLag(time_constant=5.0)),
    ]
    branch = [h.clone() for h in plant]   # independent simulation branch
"""
from __future__ import annotations

import copy
from enum import Enum
from typing import Any, TypeVar

from plantsim.plant.hysteresis import HysteresisSwitch
from plantsim.plant.interfaces import PlantElement
from plantsim.plant.pt0 import DelayBuffer, FixedPointDelayBuffer
from plantsim.plant.pt1 import FirstOrderLag, FixedPointFirstOrderLag
from plantsim.plant.pt2 import FixedPointSecondOrderLag, SecondOrderLag

E = TypeVar("E", bound=PlantElement)


class ElementKind(str, Enum):
    """Closed set of element kinds a handle can hold."""

    PT0 = "PT0"
    PT1 = "PT1"
    PT2 = "PT2"
    HYSTERESIS = "Hysteresis"


_ELEMENT_KINDS: dict[type[PlantElement], ElementKind] = {
    DelayBuffer: ElementKind.PT0,
    FixedPointDelayBuffer: ElementKind.PT0,
    FirstOrderLag: ElementKind.PT1,
    FixedPointFirstOrderLag: ElementKind.PT1,
    SecondOrderLag: ElementKind.PT2,
    FixedPointSecondOrderLag: ElementKind.PT2,
    HysteresisSwitch: ElementKind.HYSTERESIS,
}


class ElementHandle:
    """Owning, type-erased handle over a single plant element.

    Parameters
    ----------
    element:
        The element to own. The handle takes exclusive ownership; callers
        should not keep stepping the object they passed in.

    Raises
    ------
    TypeError
        If ``element`` is not one of the known element classes.
    """

    __slots__ = ("_element", "_kind")

    def __init__(self, element: PlantElement) -> None:
        kind = _ELEMENT_KINDS.get(type(element))
        if kind is None:
            raise TypeError(
                f"Cannot hold {type(element).__name__}; known element types: "
                f"{sorted(cls.__name__ for cls in _ELEMENT_KINDS)}"
            )
        self._element = element
        self._kind = kind

    @classmethod
    def default(cls) -> ElementHandle:
        """Handle over a default floating-point PT1 element."""
        return cls(FirstOrderLag())

    # ── Capabilities ─────────────────────────────────────────────────────────

    def step(self, u: Any) -> Any:
        """Forward one input sample to the held element."""
        return self._element.step(u)

    def reset(self) -> None:
        self._element.reset()

    def clone(self) -> ElementHandle:
        """Deep copy whose stepping never affects this handle."""
        return ElementHandle(copy.deepcopy(self._element))

    def display_name(self) -> str:
        """Stable short name of the held kind, independent of its state."""
        return self._kind.value

    def describe(self) -> str:
        """Human-readable parameter dump of the held element."""
        return repr(self._element)

    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def name(self) -> str:
        return self.display_name()

    @property
    def arithmetic(self) -> str:
        """``"fixed"`` for the integer variants, ``"float"`` otherwise."""
        return self._element.arithmetic

    def unwrap(self, expected: type[E]) -> E:
        """Return the held element as ``expected``.

        Raises ``TypeError`` when the handle holds another type: asking for
        the wrong concrete element is a programming error.
        """
        if type(self._element) is not expected:
            raise TypeError(
                f"Handle holds {type(self._element).__name__}, not {expected.__name__}"
            )
        return self._element  # type: ignore[return-value]

    # ── Value semantics ──────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementHandle):
            return NotImplemented
        return type(self._element) is type(other._element) and self._element == other._element

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> ElementHandle:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> ElementHandle:
        return ElementHandle(copy.deepcopy(self._element, memo))

    def __repr__(self) -> str:
        return f"ElementHandle({self._element!r})"

    def __str__(self) -> str:
        return self.describe()
