"""PlantChain: series composition of element handles.

Each step feeds the output of one element into the next, modelling e.g. an
actuator delay followed by a thermal lag followed by a sensor hysteresis.
"""
from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator
from typing import Any

from plantsim.plant.handle import ElementHandle
from plantsim.plant.interfaces import PlantElement


class PlantChain:
    """Ordered series of :class:`ElementHandle` objects.

    An empty chain passes its input through unchanged. Plain elements are
    wrapped in a handle on insertion.
    """

    kind = "Chain"

    def __init__(self, elements: Iterable[ElementHandle | PlantElement] = ()) -> None:
        self._handles: list[ElementHandle] = []
        for element in elements:
            self.append(element)

    def append(self, element: ElementHandle | PlantElement) -> None:
        if not isinstance(element, ElementHandle):
            element = ElementHandle(element)
        self._handles.append(element)

    def step(self, u: Any) -> Any:
        for handle in self._handles:
            u = handle.step(u)
        return u

    def reset(self) -> None:
        for handle in self._handles:
            handle.reset()

    def clone(self) -> PlantChain:
        return PlantChain(handle.clone() for handle in self._handles)

    def display_name(self) -> str:
        return self.kind

    def display_names(self) -> list[str]:
        return [handle.display_name() for handle in self._handles]

    def describe(self) -> str:
        return " -> ".join(handle.describe() for handle in self._handles) or "Chain()"

    @property
    def name(self) -> str:
        return f"{self.kind}[{'>'.join(self.display_names())}]"

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[ElementHandle]:
        return iter(self._handles)

    def __getitem__(self, index: int) -> ElementHandle:
        return self._handles[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlantChain):
            return NotImplemented
        return self._handles == other._handles

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: dict[int, Any]) -> PlantChain:
        return PlantChain(copy.deepcopy(handle, memo) for handle in self._handles)

    def __repr__(self) -> str:
        return f"PlantChain({self._handles!r})"
