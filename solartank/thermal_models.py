# solartank/thermal_models.py
from __future__ import annotations
import math
import numpy as np

__all__ = [
    "SECONDS_PER_DAY", "is_daylight", "irradiance_shape", "irradiance_w_m2",
    "panel_efficiency", "solar_heat_input_w",
    "loss_coefficient_w_per_c", "heat_loss_w", "euler_step",
]

SECONDS_PER_DAY = 86400.0


def is_daylight(time_of_day_s, sun_hours_per_day):
    return float(time_of_day_s) < float(sun_hours_per_day) * 3600.0


def irradiance_shape(time_of_day_s, sun_hours_per_day):
    """Half-sine over the daylight window, 0 outside it."""
    sun_s = float(sun_hours_per_day) * 3600.0
    if not float(time_of_day_s) < sun_s:
        return 0.0
    progress = float(time_of_day_s) / sun_s
    return max(0.0, math.sin(math.pi * progress))


def irradiance_w_m2(time_of_day_s, sun_hours_per_day, peak_w_m2):
    return float(peak_w_m2) * irradiance_shape(time_of_day_s, sun_hours_per_day)


def panel_efficiency(base_eff, tank_temp_c, *, t_ref_c=25.0, beta_per_c=0.002,
                     eff_min=0.5, eff_max=0.9):
    eff = float(base_eff) - float(beta_per_c) * (float(tank_temp_c) - float(t_ref_c))
    return float(np.clip(eff, eff_min, eff_max))


def solar_heat_input_w(area_m2, irradiance, base_eff, tank_temp_c):
    return float(area_m2) * float(irradiance) * panel_efficiency(base_eff, tank_temp_c)


def loss_coefficient_w_per_c(base_k, tank_temp_c, ambient_c, *, saturation_dt_c=40.0, max_boost=0.5):
    # Boost only when the tank is hotter than ambient; saturates at (1 + max_boost) * base_k.
    d_t = float(tank_temp_c) - float(ambient_c)
    if d_t > 0:
        factor = min(float(max_boost), (d_t / float(saturation_dt_c)) * float(max_boost))
        return float(base_k) * (1 + factor)
    return float(base_k)


def heat_loss_w(base_k, tank_temp_c, ambient_c):
    """Negative when the tank is colder than ambient (net gain from the surroundings)."""
    d_t = float(tank_temp_c) - float(ambient_c)
    return loss_coefficient_w_per_c(base_k, tank_temp_c, ambient_c) * d_t


def euler_step(tank_temp_c, heat_in_w, heat_out_w, dt_s, mass_kg, cp):
    return float(tank_temp_c) + (float(heat_in_w) - float(heat_out_w)) * float(dt_s) / (float(mass_kg) * float(cp))
