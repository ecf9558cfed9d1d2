# solartank/plots.py
from __future__ import annotations
from typing import Optional
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .system_model import SimulationResult

# --------- Global styling ---------
plt.rcParams.update({
    "figure.dpi": 120,
    "savefig.dpi": 300,
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.labelsize": 11,
    "axes.titlesize": 12,
    "xtick.labelsize": 10,
    "ytick.labelsize": 10,
    "legend.frameon": True,
})

_TANK_COLOR = "#C44E52"
_DAY_COLOR = "#264B7A"
_USABLE_COLOR = "#55A868"


def _auto_ylim(values, pad: float = 0.08):
    v = np.asarray(values, dtype=float)
    vmin, vmax = float(np.nanmin(v)), float(np.nanmax(v))
    span = max(vmax - vmin, 1.0)
    return vmin - pad * span, vmax + pad * span


# --------- Tank temperature trajectory (PNG only) ---------
def plot_temperature(result: SimulationResult,
                     out_path: str = "figs/tank_temperature.png",
                     usable_temp_c: Optional[float] = None) -> None:
    """
    Hourly tank temperature with end-of-day markers.
    A fresh figure is created and closed on every call.
    """
    hours = np.asarray(result.time_hours, dtype=float)
    temps = np.asarray(result.temps, dtype=float)

    fig, ax = plt.subplots(figsize=(10.0, 4.6))
    ax.plot(hours, temps, linewidth=1.4, color=_TANK_COLOR, label="Tank Temperature (°C)")

    if result.daily_series:
        daily = pd.DataFrame(result.daily_series, columns=["day", "temp"])
        ax.scatter(daily["day"] * 24.0, daily["temp"], s=28, color=_DAY_COLOR, zorder=5, label="End of day")

    ylim_vals = list(temps)
    if usable_temp_c is not None:
        ax.axhline(float(usable_temp_c), linestyle="--", linewidth=1.0, color=_USABLE_COLOR,
                   label=f"Usable ({usable_temp_c:g} °C)")
        ylim_vals.append(float(usable_temp_c))
    if ylim_vals:
        ax.set_ylim(*_auto_ylim(ylim_vals))

    ax.set_xlabel("Time [h]")
    ax.set_ylabel("Tank Temperature [°C]")
    ax.set_title(f"Tank Temperature over {result.days_simulated:g} Days", pad=10)
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(loc="best")

    plt.tight_layout()
    plt.savefig(out_path, dpi=300)
    plt.close(fig)
