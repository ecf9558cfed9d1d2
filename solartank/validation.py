# solartank/validation.py
from __future__ import annotations
import math
from typing import Any, Mapping, Optional, Tuple

from .system_model import SimulationConfig

__all__ = [
    "MAX_SIMULATION_DAYS", "FIELD_ALIASES", "InputValidationError",
    "clamp_days", "validate_inputs", "config_from_conf",
]

MAX_SIMULATION_DAYS = 30

# Form field ids -> record fields
FIELD_ALIASES = {
    "panelArea": "panel_area",
    "tankVolume": "tank_volume",
    "avgTemp": "ambient_temp",
    "sunHours": "sun_hours_per_day",
    "days": "simulation_days",
    "baseEfficiency": "base_panel_efficiency",
    "peakIrradiance": "peak_irradiance",
    "baseLoss": "base_heat_loss_coefficient",
}

MSG_MISSING = "Error: Please fill in all fields with valid numbers."
MSG_SIZE = "Error: Panel area, tank volume, and sunlight duration must be positive numbers."
MSG_SUN_MAX = "Error: Sunlight duration cannot exceed 24 hours."
MSG_DAYS = "Error: Number of days must be positive."
MSG_EFFICIENCY = "Error: Base panel efficiency must be between 0 and 1."
MSG_PEAK = "Error: Peak solar irradiance must be positive."
MSG_LOSS = "Error: Base tank heat loss coefficient must be positive."


class InputValidationError(ValueError):
    """Raised before a run when an input is unusable. ``kind`` is one of
    ``missing``, ``non_positive`` or ``out_of_range``."""

    def __init__(self, kind: str, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field


def _get(cfg: Optional[dict], path: str, default: Any) -> Any:
    cur = cfg or {}
    for k in path.split("."):
        if not isinstance(cur, dict) or k not in cur: return default
        cur = cur[k]
    return cur


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value: return None
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def _normalise_keys(raw: Mapping[str, Any]) -> dict:
    out = {}
    for k, v in raw.items():
        out[FIELD_ALIASES.get(k, k)] = v
    return out


def clamp_days(days: float) -> Tuple[float, bool]:
    """Cap the horizon at MAX_SIMULATION_DAYS. Returns (days, was_clamped)."""
    if days > MAX_SIMULATION_DAYS:
        return float(MAX_SIMULATION_DAYS), True
    return days, False


def validate_inputs(raw: Mapping[str, Any]) -> SimulationConfig:
    """
    Parse and check the eight run inputs (form strings, CLI values or YAML
    numbers) and return a ready-to-run SimulationConfig.

    Checks run in a fixed order and the first failure wins:
    numbers present, sizes/sunlight positive, days positive, efficiency
    fraction, peak irradiance, loss coefficient. Days above the cap are
    clamped, never rejected.
    """
    data = _normalise_keys(raw)
    values = {}
    for name in SimulationConfig.field_names():
        x = _to_float(data.get(name))
        if x is None:
            raise InputValidationError("missing", MSG_MISSING, name)
        values[name] = x

    for name in ("panel_area", "tank_volume", "sun_hours_per_day"):
        if values[name] <= 0:
            raise InputValidationError("non_positive", MSG_SIZE, name)
    if values["sun_hours_per_day"] > 24:
        raise InputValidationError("out_of_range", MSG_SUN_MAX, "sun_hours_per_day")

    if values["simulation_days"] <= 0:
        raise InputValidationError("non_positive", MSG_DAYS, "simulation_days")
    values["simulation_days"], _ = clamp_days(values["simulation_days"])

    eff = values["base_panel_efficiency"]
    if eff <= 0 or eff > 1:
        raise InputValidationError("out_of_range", MSG_EFFICIENCY, "base_panel_efficiency")

    if values["peak_irradiance"] <= 0:
        raise InputValidationError("non_positive", MSG_PEAK, "peak_irradiance")

    if values["base_heat_loss_coefficient"] <= 0:
        raise InputValidationError("non_positive", MSG_LOSS, "base_heat_loss_coefficient")

    return SimulationConfig(**values)


def config_from_conf(conf: Optional[dict]) -> SimulationConfig:
    """Map the config.yaml sections onto the run inputs and validate them."""
    raw = {
        "panel_area": _get(conf, "panel.area_m2", None),
        "tank_volume": _get(conf, "tank.volume_l", None),
        "ambient_temp": _get(conf, "tank.ambient_temp_c", None),
        "sun_hours_per_day": _get(conf, "time.sun_hours_per_day", None),
        "simulation_days": _get(conf, "time.simulation_days", None),
        "base_panel_efficiency": _get(conf, "panel.base_efficiency", None),
        "peak_irradiance": _get(conf, "panel.peak_irradiance_w_m2", None),
        "base_heat_loss_coefficient": _get(conf, "tank.base_heat_loss_w_per_c", None),
    }
    return validate_inputs(raw)
