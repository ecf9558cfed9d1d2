import os

import pytest

from solartank.system_model import SimulationConfig
from solartank.analysis_extensions import run_parameter_sweep, sweep_configs
from solartank.validation import InputValidationError
from solartank.plots import plot_temperature
from solartank.simulator import run_simulation

CFG = SimulationConfig(
    panel_area=4.0, tank_volume=200.0, ambient_temp=15.0, sun_hours_per_day=8.0,
    simulation_days=1.0, base_panel_efficiency=0.7, peak_irradiance=800.0,
    base_heat_loss_coefficient=5.0,
)


def test_panel_area_sweep_raises_final_temp():
    sweep = run_parameter_sweep(CFG, "panel_area", [4.0, 1.0, 2.0])
    assert sweep["panel_area"].tolist() == [1.0, 2.0, 4.0]
    temps = sweep["final_temp_c"].tolist()
    assert temps == sorted(temps)
    assert (sweep["pump_hours"] == 8.0).all()


def test_sweep_unknown_parameter():
    with pytest.raises(ValueError):
        run_parameter_sweep(CFG, "collector_tilt", [10, 20])


def test_sweep_writes_outputs(tmp_path):
    run_parameter_sweep(CFG, "ambient_temp", [0.0, 20.0], out_dir=str(tmp_path))
    assert os.path.exists(tmp_path / "sweep_ambient_temp.csv")
    assert os.path.exists(tmp_path / "sweep_ambient_temp.png")


def test_plot_temperature(tmp_path):
    out = tmp_path / "tank.png"
    res = run_simulation(CFG.replace(simulation_days=2))
    plot_temperature(res, str(out), usable_temp_c=45.0)
    plot_temperature(res, str(out))
    assert out.stat().st_size > 0


@pytest.mark.parametrize("parameter, values", [
    ("tank_volume", [0.0, 100.0]),
    ("base_panel_efficiency", [0.7, -5.0]),
    ("sun_hours_per_day", [8.0, "abc"]),
])
def test_sweep_rejects_invalid_grid_before_running(parameter, values, tmp_path):
    with pytest.raises(InputValidationError):
        run_parameter_sweep(CFG, parameter, values, out_dir=str(tmp_path / "out"))
    assert not os.path.exists(tmp_path / "out")


def test_sweep_configs_validates_and_clamps():
    cfgs = sweep_configs(CFG, "simulation_days", [2, 45])
    assert [c.simulation_days for c in cfgs] == [2.0, 30.0]
    assert all(c.panel_area == CFG.panel_area for c in cfgs)
