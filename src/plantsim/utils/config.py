"""ConfigLoader — typed YAML plant configuration with Pydantic v2 validation.

A plant file describes a series chain of elements::

    name: heater_loop
    sample_interval: 0.1
    elements:
      - name: valve_delay
        type: pt0
        delay_time: 0.5
      - name: heater
        type: pt1
        time_constant: 2.0
        gain: 1.5

Relative paths resolve against PROJECT_ROOT (repo root).
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from plantsim.plant.chain import PlantChain
from plantsim.plant.errors import PlantConfigurationError
from plantsim.plant.handle import ElementHandle
from plantsim.plant.hysteresis import HysteresisBuilder, LinearSegment
from plantsim.plant.interfaces import PlantElement
from plantsim.plant.pt0 import MAX_DELAY_SAMPLES, DelayBuffer, FixedPointDelayBuffer
from plantsim.plant.pt1 import FirstOrderLag, FixedPointFirstOrderLag
from plantsim.plant.pt2 import FixedPointSecondOrderLag, SecondOrderLag
from plantsim.utils.logging import get_logger

# PROJECT_ROOT: three parents up from this file:
#   src/plantsim/utils/config.py → src/plantsim/utils → src/plantsim → src → PROJECT_ROOT
PROJECT_ROOT = Path(__file__).parents[3]

_logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised for missing files, invalid YAML, validation or element construction failures."""


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class _TimedElementConfig(BaseModel):
    """Fields shared by the PT0/PT1/PT2 element blocks."""

    name: str
    arithmetic: Literal["float", "fixed"] = "float"
    gain: float = 1.0
    # Overrides the plant-wide sample interval for this element only
    sample_interval: float | None = None


class PT0Config(_TimedElementConfig):
    type: Literal["pt0"]
    delay_time: float = 0.0
    capacity: int = MAX_DELAY_SAMPLES


class PT1Config(_TimedElementConfig):
    type: Literal["pt1"]
    time_constant: float = 1.0


class PT2Config(_TimedElementConfig):
    """PT2 block: either ``natural_frequency`` + ``damping`` or ``t1`` + ``t2``."""

    type: Literal["pt2"]
    natural_frequency: float | None = None
    damping: float | None = None
    t1: float | None = None
    t2: float | None = None

    @model_validator(mode="after")
    def one_parameterisation(self) -> PT2Config:
        direct = self.natural_frequency is not None or self.damping is not None
        lags = self.t1 is not None or self.t2 is not None
        if direct and lags:
            raise ValueError("give either natural_frequency/damping or t1/t2, not both")
        if lags and (self.t1 is None or self.t2 is None):
            raise ValueError("t1 and t2 must be given together")
        return self


class SegmentConfig(BaseModel):
    slope: float
    intercept: float = 0.0


class HysteresisConfig(BaseModel):
    """Hysteresis block; thresholds follow HysteresisBuilder's derivation rules."""

    name: str
    type: Literal["hysteresis"]
    lower_segment: SegmentConfig
    upper_segment: SegmentConfig
    lower_x: float | None = None
    upper_x: float | None = None
    lower_y: float | None = None
    upper_y: float | None = None
    spread_x: float | None = None
    spread_y: float | None = None
    midpoint: float | None = None
    cross: bool = False
    start_upper: bool = False

    @model_validator(mode="after")
    def exclusive_options(self) -> HysteresisConfig:
        pairs = (
            ("lower_x", "lower_y"),
            ("upper_x", "upper_y"),
            ("spread_x", "spread_y"),
        )
        for a, b in pairs:
            if getattr(self, a) is not None and getattr(self, b) is not None:
                raise ValueError(f"{a} and {b} are mutually exclusive")
        if self.cross and self.midpoint is not None:
            raise ValueError("cross and midpoint are mutually exclusive")
        return self


ElementConfig = Annotated[
    Union[PT0Config, PT1Config, PT2Config, HysteresisConfig],
    Field(discriminator="type"),
]


class PlantConfig(BaseModel):
    """Full plant configuration: a named series chain of elements."""

    name: str
    sample_interval: float = 1.0
    elements: list[ElementConfig] = Field(default_factory=list)

    @field_validator("sample_interval")
    @classmethod
    def sample_interval_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("sample_interval must be positive")
        return v

    @model_validator(mode="after")
    def unique_element_names(self) -> PlantConfig:
        names = [element.name for element in self.elements]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate element names: {duplicates}")
        return self


# ---------------------------------------------------------------------------
# Element factories
# ---------------------------------------------------------------------------


def _build_pt0(cfg: PT0Config, sample_interval: float) -> PlantElement:
    cls = FixedPointDelayBuffer if cfg.arithmetic == "fixed" else DelayBuffer
    return cls(
        sample_interval=sample_interval,
        delay_time=cfg.delay_time,
        gain=cfg.gain,
        capacity=cfg.capacity,
    )


def _build_pt1(cfg: PT1Config, sample_interval: float) -> PlantElement:
    cls = FixedPointFirstOrderLag if cfg.arithmetic == "fixed" else FirstOrderLag
    return cls(sample_interval=sample_interval, time_constant=cfg.time_constant, gain=cfg.gain)


def _build_pt2(cfg: PT2Config, sample_interval: float) -> PlantElement:
    cls = FixedPointSecondOrderLag if cfg.arithmetic == "fixed" else SecondOrderLag
    if cfg.t1 is not None and cfg.t2 is not None:
        return cls.from_time_constants(
            cfg.t1, cfg.t2, sample_interval=sample_interval, gain=cfg.gain
        )
    return cls(
        sample_interval=sample_interval,
        natural_frequency=1.0 if cfg.natural_frequency is None else cfg.natural_frequency,
        damping=1.0 if cfg.damping is None else cfg.damping,
        gain=cfg.gain,
    )


def _build_hysteresis(cfg: HysteresisConfig) -> PlantElement:
    builder = HysteresisBuilder(
        LinearSegment(cfg.lower_segment.slope, cfg.lower_segment.intercept),
        LinearSegment(cfg.upper_segment.slope, cfg.upper_segment.intercept),
    )
    if cfg.spread_x is not None:
        builder.spread_x(cfg.spread_x)
    if cfg.spread_y is not None:
        builder.spread_y(cfg.spread_y)
    if cfg.cross:
        builder.cross()
    if cfg.midpoint is not None:
        builder.midpoint(cfg.midpoint)
    if cfg.lower_x is not None:
        builder.lower_x(cfg.lower_x)
    if cfg.lower_y is not None:
        builder.lower_y(cfg.lower_y)
    if cfg.upper_x is not None:
        builder.upper_x(cfg.upper_x)
    if cfg.upper_y is not None:
        builder.upper_y(cfg.upper_y)
    if cfg.start_upper:
        builder.upper_direction()
    return builder.build()


# ---------------------------------------------------------------------------
# ConfigLoader
# ---------------------------------------------------------------------------


class ConfigLoader:
    """Loads plant YAML files and builds element chains from them.

    Usage::

        loader = ConfigLoader()
        plant_cfg = loader.load_plant_config("configs/plants/heater_loop.yaml")
        chain = loader.build_chain(plant_cfg)
    """

    def load(self, path: str | Path) -> dict[str, Any]:
        """Load a YAML file and return it as a plain dict.

        Resolves relative paths against PROJECT_ROOT.

        Raises:
            ConfigError: if the file does not exist, is not valid YAML, or is empty.
        """
        resolved = self._resolve(path)
        if not resolved.exists():
            raise ConfigError(f"Config file not found: {resolved}")
        try:
            with resolved.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error in {resolved}: {exc}") from exc
        if data is None:
            raise ConfigError(f"Config file is empty: {resolved}")
        if not isinstance(data, dict):
            raise ConfigError(
                f"Expected a YAML mapping at top level in {resolved}, got {type(data).__name__}"
            )
        return data

    def load_plant_config(self, path: str | Path) -> PlantConfig:
        """Load and validate a plant file → PlantConfig.

        Raises:
            ConfigError: on file/parse/validation failure.
        """
        data = self.load(path)
        return self._parse(PlantConfig, data, path)

    def parse_plant_config(self, data: dict[str, Any]) -> PlantConfig:
        """Validate an in-memory mapping → PlantConfig."""
        return self._parse(PlantConfig, data, "<mapping>")

    def build_element(
        self, element_cfg: PT0Config | PT1Config | PT2Config | HysteresisConfig,
        sample_interval: float = 1.0,
    ) -> ElementHandle:
        """Construct one element and wrap it in an ElementHandle.

        Raises:
            ConfigError: if the element rejects its parameters.
        """
        try:
            if isinstance(element_cfg, HysteresisConfig):
                element = _build_hysteresis(element_cfg)
            else:
                dt = (
                    sample_interval
                    if element_cfg.sample_interval is None
                    else element_cfg.sample_interval
                )
                if isinstance(element_cfg, PT0Config):
                    element = _build_pt0(element_cfg, dt)
                elif isinstance(element_cfg, PT1Config):
                    element = _build_pt1(element_cfg, dt)
                else:
                    element = _build_pt2(element_cfg, dt)
        except PlantConfigurationError as exc:
            raise ConfigError(f"Element {element_cfg.name!r}: {exc}") from exc

        handle = ElementHandle(element)
        _logger.debug(
            "Built element",
            element=element_cfg.name,
            kind=handle.kind,
            arithmetic=handle.arithmetic,
        )
        return handle

    def build_chain(self, plant_config: PlantConfig) -> PlantChain:
        """Build every element of ``plant_config`` into a series PlantChain.

        Raises:
            ConfigError: if any element rejects its parameters.
        """
        chain = PlantChain(
            self.build_element(element_cfg, plant_config.sample_interval)
            for element_cfg in plant_config.elements
        )
        _logger.bind(plant=plant_config.name).info(
            "Built plant chain",
            elements=chain.display_names(),
        )
        return chain

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(path: str | Path) -> Path:
        """Resolve path: absolute paths used as-is; relative paths → PROJECT_ROOT."""
        p = Path(path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p

    @staticmethod
    def _parse(model_cls: type[BaseModel], data: dict[str, Any], path: str | Path) -> Any:
        """Instantiate a Pydantic model, wrapping ValidationError as ConfigError."""
        from pydantic import ValidationError

        try:
            return model_cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(
                f"Validation failed for {path}:\n{exc}"
            ) from exc
