# app.py
from __future__ import annotations
from typing import Dict, List, Tuple

import streamlit as st
import pandas as pd
import yaml
import plotly.express as px

from solartank.simulator import run_simulation
from solartank.system_model import SimulationResult
from solartank.validation import InputValidationError, validate_inputs, MAX_SIMULATION_DAYS, _get
from solartank.evaluation import summarize_kpis, daily_table, DEFAULT_USABLE_TEMP_C

# ==================== METADATA & EXPLANATIONS ==================== #

METRIC_HELP = {
    "final_temp_c": (
        "Lumped tank temperature at the end of the simulated horizon, including "
        "the part of the last hour that is not shown on the chart."
    ),
    "pump_hours": (
        "Total time the solar circulation pump ran. The pump runs for the whole "
        "daylight window, whatever the panel actually delivers."
    ),
    "samples_above_usable": (
        "Hourly samples at which the tank was at or above the usable hot-water "
        "temperature."
    ),
}

# (form key, label, config path, help)
INPUT_FIELDS: List[Tuple[str, str, str, str]] = [
    ("panelArea", "Panel area [m²]", "panel.area_m2", "Collector aperture area."),
    ("tankVolume", "Tank volume [L]", "tank.volume_l", "1 L of water is taken as 1 kg."),
    ("avgTemp", "Average outdoor temperature [°C]", "tank.ambient_temp_c", "Daily average ambient temperature."),
    ("sunHours", "Sunlight duration [h/day]", "time.sun_hours_per_day", "Length of the daylight window (max 24)."),
    ("days", "Number of days", "time.simulation_days", f"Capped at {MAX_SIMULATION_DAYS} days."),
    ("baseEfficiency", "Base panel efficiency [0–1]", "panel.base_efficiency", "Efficiency at a 25 °C tank."),
    ("peakIrradiance", "Peak solar irradiance [W/m²]", "panel.peak_irradiance_w_m2", "Irradiance at solar noon."),
    ("baseLoss", "Base tank heat loss [W/°C]", "tank.base_heat_loss_w_per_c", "Loss coefficient before the hot-tank boost."),
]

# ==================== BASIC PAGE CONFIG & CSS ==================== #


def init_page_config():
    st.set_page_config(
        page_title="Solar Water Tank Simulator",
        page_icon="☀️",
        layout="wide",
        initial_sidebar_state="collapsed",
    )


def render_core_css():
    st.markdown(
        """
        <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        .block-container {padding-top: 1.1rem; padding-bottom: 1.2rem;}

        .kpi-card {
            padding: 0.9rem 1.0rem;
            border-radius: 0.75rem;
            background: #f8fafc;
            border: 1px solid #e2e8f0;
        }
        .kpi-title {
            font-size: 0.85rem;
            font-weight: 600;
            color: #475569;
            margin-bottom: 0.15rem;
        }
        .kpi-value {
            font-size: 1.2rem;
            font-weight: 600;
            color: #0f172a;
        }
        .kpi-sub {
            font-size: 0.78rem;
            color: #64748b;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_help_expander():
    with st.expander("ℹ️ How does the model work?", expanded=False):
        st.markdown(
            "- **Irradiance** follows a half-sine over the daylight window, peaking at mid-window.\n"
            "- **Panel efficiency** drops by 0.2 % per °C of tank temperature above 25 °C, "
            "kept between 0.5 and 0.9.\n"
            "- **Heat loss** grows with the tank–ambient difference and is boosted up to 1.5× "
            "once the tank is 40 °C above ambient.\n"
            "- The tank starts at 12 °C and is advanced in 1-minute steps."
        )
        st.caption(
            "This is a simplified engineering model with non-uniform solar irradiance, "
            "temperature-dependent panel efficiency and dynamic heat loss."
        )


# ==================== DATA & BACKEND HOOKS ==================== #


@st.cache_resource
def load_conf(path: str = "config.yaml") -> Dict:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _conf_default(conf: Dict, path: str) -> str:
    return str(_get(conf, path, ""))


# ==================== KPI & PLOT HELPERS ==================== #


def render_kpi_cards(kpis: dict):
    c1, c2, c3 = st.columns(3)
    with c1:
        st.markdown(
            f"""
            <div class="kpi-card" title="{METRIC_HELP['final_temp_c']}">
              <div class="kpi-title">Final tank temperature</div>
              <div class="kpi-value">{kpis["final_temp_c"]:.2f} °C</div>
              <div class="kpi-sub">after {kpis["days_simulated"]:g} days</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
    with c2:
        st.markdown(
            f"""
            <div class="kpi-card" title="{METRIC_HELP['pump_hours']}">
              <div class="kpi-title">Pump runtime</div>
              <div class="kpi-value">{kpis["pump_hours"]:.2f} h</div>
              <div class="kpi-sub">in total</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
    with c3:
        reached = "reached" if kpis["reached_usable"] else "not reached"
        st.markdown(
            f"""
            <div class="kpi-card" title="{METRIC_HELP['samples_above_usable']}">
              <div class="kpi-title">Usable temperature ({kpis["usable_temp_c"]:g} °C)</div>
              <div class="kpi-value">{kpis["samples_above_usable"]} hourly samples</div>
              <div class="kpi-sub">{reached}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )


def _temperature_fig(result: SimulationResult, usable_temp_c: float) -> px.line:
    df_plot = pd.DataFrame({"Time (hours)": result.time_hours, "Tank Temperature (°C)": result.temps})
    fig = px.line(df_plot, x="Time (hours)", y="Tank Temperature (°C)", title="Tank Temperature")
    fig.add_hline(y=usable_temp_c, line_dash="dash", line_color="#55A868",
                  annotation_text=f"Usable {usable_temp_c:g} °C")
    fig.update_layout(
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    return fig


# ==================== MAIN UI ==================== #


def main():
    init_page_config()
    render_core_css()

    conf = load_conf()
    usable = float(conf.get("report", {}).get("usable_temp_c", DEFAULT_USABLE_TEMP_C))

    st.markdown("## Solar Water Tank Simulator")
    st.markdown(
        "<p style='color:#555;'>Will the tank reach a usable temperature, and how long "
        "does the solar loop pump need to run?</p>",
        unsafe_allow_html=True,
    )

    with st.form("inputs"):
        raw = {}
        cols = st.columns(4)
        for i, (key, label, path, help_txt) in enumerate(INPUT_FIELDS):
            with cols[i % 4]:
                raw[key] = st.text_input(label, value=_conf_default(conf, path), help=help_txt, key=key)
        run_btn = st.form_submit_button("Run Simulation", type="primary")

    error_slot = st.empty()
    results_slot = st.container()
    chart_slot = st.empty()

    if not run_btn:
        st.info("Set the inputs and press **Run Simulation**.")
        return

    try:
        config = validate_inputs(raw)
    except InputValidationError as e:
        error_slot.error(e.message)
        return

    with st.spinner("Simulating tank temperature..."):
        result = run_simulation(config)
        kpis = summarize_kpis(result, usable)

    with results_slot:
        st.success(f"Simulation complete · {config.simulation_days:g} days")
        st.markdown("### Results")
        render_kpi_cards(kpis)
        table = daily_table(result)
        if len(table):
            st.markdown("#### Daily Tank Temperatures")
            st.dataframe(table, hide_index=True)
        render_help_expander()

    # Placeholder is overwritten on every run
    chart_slot.plotly_chart(_temperature_fig(result, usable), use_container_width=True)


if __name__ == "__main__":
    main()
