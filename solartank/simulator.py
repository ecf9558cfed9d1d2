# solartank/simulator.py
from __future__ import annotations
import math
from typing import List, Tuple

from .system_model import CONSTANTS, SimulationConfig, SimulationConstants, SimulationResult
from .thermal_models import (
    SECONDS_PER_DAY, is_daylight, irradiance_w_m2, solar_heat_input_w, heat_loss_w, euler_step,
)


def run_simulation(config: SimulationConfig, constants: SimulationConstants = CONSTANTS) -> SimulationResult:
    """
    Advance the lumped tank temperature with a fixed-step explicit Euler update.

    Samples are taken after each update using the step's start time, so the
    first hourly point is at t = 0 and the horizon boundary itself is included.
    """
    dt = float(constants.dt_s)
    mass_kg = float(config.tank_volume) * constants.density_kg_per_l
    sim_time = math.floor(config.simulation_days * 24 * 3600)
    sun_s = float(config.sun_hours_per_day) * 3600.0

    tank_temp = float(constants.start_temp_c)
    pump_s = 0.0
    t = 0.0
    day_index = 0

    hourly: List[Tuple[float, float]] = []
    daily: List[Tuple[int, float]] = []

    while t <= sim_time:
        time_of_day = t % SECONDS_PER_DAY
        heat_in = 0.0

        if is_daylight(time_of_day, config.sun_hours_per_day):
            irr = irradiance_w_m2(time_of_day, config.sun_hours_per_day, config.peak_irradiance)
            heat_in = solar_heat_input_w(config.panel_area, irr, config.base_panel_efficiency, tank_temp)
            # Pump time covers only the part of the step inside daylight and the horizon
            pump_s += max(0.0, min(dt, sun_s - time_of_day, sim_time - t))

        heat_out = heat_loss_w(config.base_heat_loss_coefficient, tank_temp, config.ambient_temp)
        tank_temp = euler_step(tank_temp, heat_in, heat_out, dt, mass_kg, constants.cp_water)

        if math.floor(t) % 3600 == 0:
            hourly.append((t / 3600.0, tank_temp))

        if t > 0 and t % SECONDS_PER_DAY == 0:
            day_index += 1
            daily.append((day_index, tank_temp))

        t += dt

    return SimulationResult(
        final_temp=tank_temp,
        pump_hours=pump_s / 3600.0,
        days_simulated=config.simulation_days,
        hourly_series=hourly,
        daily_series=daily,
    )


run = run_simulation
