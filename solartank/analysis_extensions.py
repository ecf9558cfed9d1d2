# solartank/analysis_extensions.py
from __future__ import annotations
import os
from typing import Iterable, List, Optional

import pandas as pd
import matplotlib.pyplot as plt

from .system_model import SimulationConfig
from .validation import validate_inputs
from .simulator import run_simulation
from .evaluation import summarize_kpis, DEFAULT_USABLE_TEMP_C

# ---------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------

SWEEP_LABELS = {
    "panel_area": "Panel Area [m²]",
    "tank_volume": "Tank Volume [L]",
    "ambient_temp": "Ambient Temperature [°C]",
    "sun_hours_per_day": "Sun Hours per Day [h]",
    "simulation_days": "Simulated Days",
    "base_panel_efficiency": "Base Panel Efficiency [-]",
    "peak_irradiance": "Peak Irradiance [W/m²]",
    "base_heat_loss_coefficient": "Base Heat Loss Coefficient [W/°C]",
}


def _ensure_dirs(out_dir: str) -> None:
    os.makedirs(out_dir, exist_ok=True)


# ---------------------------------------------------------------------
# Sweep API
# ---------------------------------------------------------------------


def sweep_configs(config: SimulationConfig, parameter: str, values: Iterable) -> List[SimulationConfig]:
    """
    Validate every grid point up front. Raises InputValidationError on the
    first unusable value, before any run starts.
    """
    if parameter not in SimulationConfig.field_names():
        raise ValueError(f"Unknown sweep parameter '{parameter}'. Expected one of {SimulationConfig.field_names()}")
    return [validate_inputs({**config.to_dict(), parameter: v}) for v in values]


def run_parameter_sweep(
    config: SimulationConfig,
    parameter: str,
    values: Iterable[float],
    usable_temp_c: float = DEFAULT_USABLE_TEMP_C,
    out_dir: Optional[str] = None,
) -> pd.DataFrame:
    """
    Run the tank model once per value of a single config field and collect
    the KPIs of each run.

    The whole grid goes through the input validator first, so one bad value
    stops the sweep before anything is simulated. Swept day counts are
    clamped like form input. When ``out_dir`` is set, the table is written
    to ``<out_dir>/sweep_<parameter>.csv`` next to a PNG of final
    temperature and pump hours against the swept value.
    """
    rows = []
    for cfg in sweep_configs(config, parameter, values):
        kpi = summarize_kpis(run_simulation(cfg), usable_temp_c)
        rows.append({parameter: getattr(cfg, parameter), **kpi})

    sweep = pd.DataFrame(rows).sort_values(parameter).reset_index(drop=True)

    if out_dir is not None:
        _ensure_dirs(out_dir)
        csv_path = os.path.join(out_dir, f"sweep_{parameter}.csv")
        sweep.to_csv(csv_path, index=False)
        print(f"Saved sweep table to {csv_path}")
        _plot_sweep(sweep, parameter, os.path.join(out_dir, f"sweep_{parameter}.png"))
    return sweep


def _plot_sweep(sweep: pd.DataFrame, parameter: str, out_path: str) -> None:
    fig, ax_t = plt.subplots(figsize=(7.5, 4.8))
    x = sweep[parameter].values

    ax_t.plot(x, sweep["final_temp_c"].values, marker="o", color="#C44E52", linewidth=1.6, label="Final temperature")
    ax_t.set_xlabel(SWEEP_LABELS.get(parameter, parameter))
    ax_t.set_ylabel("Final Tank Temperature [°C]")
    ax_t.grid(True, linestyle="--", alpha=0.5)

    ax_p = ax_t.twinx()
    ax_p.plot(x, sweep["pump_hours"].values, marker="s", linestyle="--", color="#4C72B0", linewidth=1.2, label="Pump hours")
    ax_p.set_ylabel("Pump Runtime [h]")

    lines = ax_t.get_lines() + ax_p.get_lines()
    ax_t.legend(lines, [ln.get_label() for ln in lines], loc="best", frameon=True)
    ax_t.set_title(f"Sensitivity to {SWEEP_LABELS.get(parameter, parameter)}")

    plt.tight_layout()
    plt.savefig(out_path, dpi=300)
    plt.close(fig)
    print(f"Saved sweep plot to {out_path}")


# ---------------------------------------------------------------------
# CLI entry-point for offline sweeps
# ---------------------------------------------------------------------


if __name__ == "__main__":
    import yaml

    try:
        with open("config.yaml", "r") as f:
            conf = yaml.safe_load(f)
    except Exception as e:
        raise RuntimeError("Missing or invalid config.yaml") from e

    sweep_conf = conf.get("sweep", {}) or {}
    parameter = sweep_conf.get("parameter", "panel_area")
    values = sweep_conf.get("values", [1.0, 2.0, 3.0, 4.0, 6.0, 8.0])
    usable = float(conf.get("report", {}).get("usable_temp_c", DEFAULT_USABLE_TEMP_C))
    run_parameter_sweep(SimulationConfig.from_conf(conf), parameter, values, usable,
                        out_dir=conf.get("report", {}).get("results_dir", "results"))
