# solartank/system_model.py
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace as _replace
from typing import List, Tuple


@dataclass(frozen=True)
class SimulationConstants:
    start_temp_c: float = 12.0
    dt_s: float = 60.0
    density_kg_per_l: float = 1.0
    cp_water: float = 4180.0  # J/(kg·K)


CONSTANTS = SimulationConstants()


@dataclass(frozen=True)
class SimulationConfig:
    """
    One run of the tank model. Ranges are checked by ``validation``;
    the engine assumes a well-formed record.
    """
    panel_area: float                  # m²
    tank_volume: float                 # L (1 L = 1 kg)
    ambient_temp: float                # °C, daily average
    sun_hours_per_day: float           # h, daylight window
    simulation_days: float
    base_panel_efficiency: float       # fraction in (0, 1]
    peak_irradiance: float             # W/m²
    base_heat_loss_coefficient: float  # W/°C

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_conf(cls, conf: dict) -> "SimulationConfig":
        """Build a validated config from the nested YAML layout."""
        from .validation import config_from_conf
        return config_from_conf(conf)

    def replace(self, **changes) -> "SimulationConfig":
        return _replace(self, **changes)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass
class SimulationResult:
    final_temp: float
    pump_hours: float
    days_simulated: float
    hourly_series: List[Tuple[float, float]] = field(default_factory=list)
    daily_series: List[Tuple[int, float]] = field(default_factory=list)

    @property
    def time_hours(self) -> List[float]:
        return [h for h, _ in self.hourly_series]

    @property
    def temps(self) -> List[float]:
        return [temp for _, temp in self.hourly_series]
