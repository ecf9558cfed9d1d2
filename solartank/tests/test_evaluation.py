import pytest

from solartank.system_model import SimulationResult
from solartank.evaluation import (
    hourly_frame, daily_frame, daily_table, format_summary, summarize_kpis,
)


def make_result():
    return SimulationResult(
        final_temp=47.123,
        pump_hours=8.0,
        days_simulated=1.0,
        hourly_series=[(0.0, 12.0), (1.0, 30.0), (2.0, 50.0), (3.0, 46.0)],
        daily_series=[(1, 46.004)],
    )


def test_frames():
    res = make_result()
    h = hourly_frame(res)
    assert list(h.columns) == ["time_h", "tank_temp_c"]
    assert len(h) == 4
    d = daily_frame(res)
    assert d["day"].tolist() == [1]


def test_daily_table_rounds():
    table = daily_table(make_result())
    assert list(table.columns) == ["Day", "Tank Temperature (°C)"]
    assert table["Tank Temperature (°C)"].iloc[0] == 46.0


def test_format_summary():
    lines = format_summary(make_result())
    assert lines == [
        "Final tank temperature after 1 days: 47.12 °C",
        "Pump ran for 8.00 hours in total.",
    ]


def test_summarize_kpis():
    kpi = summarize_kpis(make_result(), usable_temp_c=45.0)
    assert kpi["final_temp_c"] == 47.123
    assert kpi["pump_hours"] == 8.0
    assert kpi["min_temp_c"] == 12.0
    assert kpi["max_temp_c"] == 50.0
    assert kpi["mean_temp_c"] == pytest.approx(34.5)
    assert kpi["samples_above_usable"] == 2
    assert kpi["first_usable_hour"] == 2.0
    assert kpi["reached_usable"] is True


def test_summarize_kpis_cold_tank():
    kpi = summarize_kpis(make_result(), usable_temp_c=60.0)
    assert kpi["samples_above_usable"] == 0
    assert kpi["first_usable_hour"] is None
    assert kpi["reached_usable"] is False


def test_usable_samples_include_start_sample():
    res = SimulationResult(
        final_temp=44.0, pump_hours=0.0, days_simulated=1.0,
        hourly_series=[(0.0, 50.0), (1.0, 44.0)], daily_series=[],
    )
    kpi = summarize_kpis(res, usable_temp_c=45.0)
    assert kpi["samples_above_usable"] == 1
    assert kpi["first_usable_hour"] == 0.0
