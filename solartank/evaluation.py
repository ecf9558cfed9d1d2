# solartank/evaluation.py
from __future__ import annotations
import numpy as np, pandas as pd
from typing import Dict, Any, List

from .system_model import SimulationResult

DEFAULT_USABLE_TEMP_C = 45.0


def hourly_frame(result: SimulationResult) -> pd.DataFrame:
    return pd.DataFrame(result.hourly_series, columns=["time_h", "tank_temp_c"])


def daily_frame(result: SimulationResult) -> pd.DataFrame:
    df = pd.DataFrame(result.daily_series, columns=["day", "tank_temp_c"])
    df["day"] = df["day"].astype(int)
    return df


def daily_table(result: SimulationResult) -> pd.DataFrame:
    """Per-day table as shown to the user (°C rounded to 2 dp)."""
    df = daily_frame(result).rename(columns={"day": "Day", "tank_temp_c": "Tank Temperature (°C)"})
    df["Tank Temperature (°C)"] = df["Tank Temperature (°C)"].round(2)
    return df


def _days_label(days: float) -> str:
    return f"{days:g}"


def format_summary(result: SimulationResult) -> List[str]:
    return [
        f"Final tank temperature after {_days_label(result.days_simulated)} days: {result.final_temp:.2f} °C",
        f"Pump ran for {result.pump_hours:.2f} hours in total.",
    ]


def kpi_temperature(result: SimulationResult) -> Dict[str, Any]:
    temps = np.asarray(result.temps, dtype=float)
    if temps.size == 0:
        return {"min_temp_c": None, "max_temp_c": None, "mean_temp_c": None}
    return {
        "min_temp_c": float(temps.min()),
        "max_temp_c": float(temps.max()),
        "mean_temp_c": float(temps.mean()),
    }


def kpi_usable(result: SimulationResult, usable_temp_c: float) -> Dict[str, Any]:
    df = hourly_frame(result)
    hot = df[df["tank_temp_c"] >= float(usable_temp_c)]
    first = float(hot["time_h"].iloc[0]) if len(hot) else None
    return {
        "usable_temp_c": float(usable_temp_c),
        "samples_above_usable": int(len(hot)),
        "first_usable_hour": first,
        "reached_usable": bool(len(hot) > 0 or result.final_temp >= float(usable_temp_c)),
    }


def summarize_kpis(result: SimulationResult, usable_temp_c: float = DEFAULT_USABLE_TEMP_C) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "final_temp_c": float(result.final_temp),
        "pump_hours": float(result.pump_hours),
        "days_simulated": float(result.days_simulated),
    }
    out.update(kpi_temperature(result))
    out.update(kpi_usable(result, usable_temp_c))
    return out
