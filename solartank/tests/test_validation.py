import pytest

from solartank.system_model import SimulationConfig
from solartank.validation import (
    InputValidationError, validate_inputs, config_from_conf, clamp_days, MAX_SIMULATION_DAYS,
)

FORM = {
    "panelArea": "4", "tankVolume": "200", "avgTemp": "15", "sunHours": "8",
    "days": "1", "baseEfficiency": "0.7", "peakIrradiance": "800", "baseLoss": "5",
}


def form(**changes):
    data = dict(FORM)
    data.update(changes)
    return data


def test_valid_form_strings():
    cfg = validate_inputs(FORM)
    assert cfg == SimulationConfig(4.0, 200.0, 15.0, 8.0, 1.0, 0.7, 800.0, 5.0)


def test_snake_case_keys_and_negative_ambient():
    cfg = validate_inputs({**validate_inputs(FORM).to_dict(), "ambient_temp": -12.5})
    assert cfg.ambient_temp == -12.5


@pytest.mark.parametrize("key, value", [
    ("panelArea", ""), ("tankVolume", "abc"), ("avgTemp", None), ("days", "nan"), ("baseLoss", "inf"),
])
def test_missing_or_non_numeric(key, value):
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(form(**{key: value}))
    assert exc.value.kind == "missing"
    assert str(exc.value) == "Error: Please fill in all fields with valid numbers."


def test_missing_key():
    data = form()
    del data["peakIrradiance"]
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(data)
    assert exc.value.field == "peak_irradiance"


@pytest.mark.parametrize("key, value, message", [
    ("panelArea", "0", "Error: Panel area, tank volume, and sunlight duration must be positive numbers."),
    ("tankVolume", "-1", "Error: Panel area, tank volume, and sunlight duration must be positive numbers."),
    ("sunHours", "0", "Error: Panel area, tank volume, and sunlight duration must be positive numbers."),
    ("days", "0", "Error: Number of days must be positive."),
    ("peakIrradiance", "-800", "Error: Peak solar irradiance must be positive."),
    ("baseLoss", "0", "Error: Base tank heat loss coefficient must be positive."),
])
def test_non_positive(key, value, message):
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(form(**{key: value}))
    assert exc.value.kind == "non_positive"
    assert exc.value.message == message


@pytest.mark.parametrize("value", ["0", "1.2", "-0.3"])
def test_efficiency_out_of_range(value):
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(form(baseEfficiency=value))
    assert exc.value.kind == "out_of_range"
    assert exc.value.message == "Error: Base panel efficiency must be between 0 and 1."


def test_efficiency_upper_bound_inclusive():
    assert validate_inputs(form(baseEfficiency="1")).base_panel_efficiency == 1.0


def test_sun_hours_above_day_rejected():
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(form(sunHours="25"))
    assert exc.value.kind == "out_of_range"
    assert validate_inputs(form(sunHours="24")).sun_hours_per_day == 24.0


def test_first_failure_wins():
    with pytest.raises(InputValidationError) as exc:
        validate_inputs(form(panelArea="0", baseEfficiency="2", days="-1"))
    assert exc.value.field == "panel_area"


def test_days_clamped_not_rejected():
    assert validate_inputs(form(days="45")).simulation_days == MAX_SIMULATION_DAYS
    assert validate_inputs(form(days="2.5")).simulation_days == 2.5
    assert clamp_days(31) == (30.0, True)
    assert clamp_days(7) == (7, False)


def test_config_from_conf():
    conf = {
        "tank": {"volume_l": 150, "ambient_temp_c": 10, "base_heat_loss_w_per_c": 3},
        "panel": {"area_m2": 2, "base_efficiency": 0.6, "peak_irradiance_w_m2": 900},
        "time": {"sun_hours_per_day": 10, "simulation_days": 60},
    }
    cfg = SimulationConfig.from_conf(conf)
    assert cfg.tank_volume == 150.0
    assert cfg.simulation_days == 30.0
    assert cfg.peak_irradiance == 900.0


def test_config_from_conf_missing_section():
    with pytest.raises(InputValidationError):
        config_from_conf({"tank": {"volume_l": 150}})
