"""Abstract PlantElement interface shared by every plantsim element.

Concrete elements (PT0, PT1, PT2, hysteresis) implement this interface so the
handle layer, the series chain and the simulation runner can drive them
uniformly without knowing which element they hold.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from plantsim.plant.errors import PlantConfigurationError


class PlantElement(ABC):
    """Standard interface for all discrete-time plant elements.

    An element consumes one input sample per ``step()`` call and returns one
    output sample, mutating its internal state in place. Elements compare by
    value: two elements are equal when they are of the same concrete type and
    their parameters and internal state are equal.

    Subclasses define:

    - ``kind``: short, stable type name used for diagnostics.
    - ``arithmetic``: ``"float"`` or ``"fixed"`` (10-bit fixed-point integers).
    - ``parameters()``: the constructor keyword arguments that rebuild the
      element's configuration.
    - ``state()`` / ``_set_state()``: the mutable simulation state.
    """

    kind: ClassVar[str] = ""
    arithmetic: ClassVar[str] = "float"

    @abstractmethod
    def step(self, u: Any) -> Any:
        """Advance the element by one sample.

        Parameters
        ----------
        u:
            Input sample for the current time step.

        Returns
        -------
        Output sample for the current time step. Never raises; inputs outside
        the modelled range saturate to a border-case output.
        """

    @abstractmethod
    def reset(self) -> None:
        """Return the element to rest (zero state, initial branch)."""

    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Constructor keyword arguments reproducing this configuration."""

    @abstractmethod
    def state(self) -> tuple[Any, ...]:
        """Snapshot of the mutable simulation state."""

    @abstractmethod
    def _set_state(self, state: tuple[Any, ...]) -> None:
        """Load a state snapshot taken from an element of the same type."""

    @property
    def name(self) -> str:
        return self.kind

    def replace(self, **changes: Any) -> PlantElement:
        """Return a reconfigured copy that carries the current state over.

        Unknown parameter names raise ``TypeError``; invalid values raise
        ``PlantConfigurationError`` exactly as the constructor does.
        """
        params = self.parameters()
        unknown = set(changes) - set(params)
        if unknown:
            raise TypeError(
                f"{self.kind} has no parameter(s) {sorted(unknown)}; "
                f"known: {sorted(params)}"
            )
        params.update(changes)
        new = type(self)(**params)
        new._set_state(self.state())
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlantElement):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.parameters() == other.parameters()
            and self.state() == other.state()
        )

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters().items())
        return f"{self.kind}({params})"


# ---------------------------------------------------------------------------
# Parameter validation shared by the element constructors
# ---------------------------------------------------------------------------


def check_positive(kind: str, name: str, value: float) -> float:
    """Return ``value`` as float, raising if it is not strictly positive."""
    value = float(value)
    if not value > 0.0:
        raise PlantConfigurationError(f"{kind}: {name} must be positive, got {value}")
    return value


def check_non_negative(kind: str, name: str, value: float) -> float:
    """Return ``value`` as float, raising if it is negative (or NaN)."""
    value = float(value)
    if not value >= 0.0:
        raise PlantConfigurationError(f"{kind}: {name} must be >= 0, got {value}")
    return value
