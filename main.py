# main.py
from __future__ import annotations
import os, sys, json, yaml, argparse
import pandas as pd
from datetime import datetime, timezone

from solartank.system_model import SimulationConfig
from solartank.simulator import run_simulation
from solartank.validation import InputValidationError, MAX_SIMULATION_DAYS
from solartank.evaluation import (
    summarize_kpis, hourly_frame, daily_frame, daily_table, format_summary, DEFAULT_USABLE_TEMP_C,
)
from solartank.plots import plot_temperature
from solartank.analysis_extensions import run_parameter_sweep, sweep_configs


def load_conf(path: str = "config.yaml"):
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RuntimeError(f"Missing or invalid config file: {path}") from e


def apply_overrides(conf: dict, days=None, sun_hours=None, ambient=None) -> dict:
    new = dict(conf)
    time_c = dict(new.get("time", {}) or {})
    tank_c = dict(new.get("tank", {}) or {})
    if days is not None: time_c["simulation_days"] = days
    if sun_hours is not None: time_c["sun_hours_per_day"] = sun_hours
    if ambient is not None: tank_c["ambient_temp_c"] = ambient
    new["time"] = time_c
    new["tank"] = tank_c
    return new


def run_all(conf: dict, plots: bool = True, sweep: bool = True):
    report = conf.get("report", {}) or {}
    results_dir = report.get("results_dir", "results")
    figs_dir = report.get("figs_dir", "figs")
    usable = float(report.get("usable_temp_c", DEFAULT_USABLE_TEMP_C))

    requested_days = (conf.get("time", {}) or {}).get("simulation_days")
    config = SimulationConfig.from_conf(conf)
    if float(requested_days) > MAX_SIMULATION_DAYS:
        print(f"Requested {requested_days} days; capped at {MAX_SIMULATION_DAYS}.")

    # Reject a bad sweep grid before any output is written
    sweep_conf = conf.get("sweep") or {}
    do_sweep = bool(sweep and sweep_conf.get("parameter") and sweep_conf.get("values"))
    if do_sweep:
        sweep_configs(config, sweep_conf["parameter"], sweep_conf["values"])
    os.makedirs(results_dir, exist_ok=True)

    print("\n--- Running Solar Tank Simulation ---")
    print(f"Panel {config.panel_area:g} m² | Tank {config.tank_volume:g} L | "
          f"Ambient {config.ambient_temp:g} °C | Sun {config.sun_hours_per_day:g} h/day | "
          f"{config.simulation_days:g} days")
    result = run_simulation(config)

    for line in format_summary(result):
        print(line)
    table = daily_table(result)
    if len(table):
        print("\nDaily Tank Temperatures")
        print(table.to_string(index=False))

    hourly_frame(result).to_csv(os.path.join(results_dir, "hourly.csv"), index=False)
    daily_frame(result).to_csv(os.path.join(results_dir, "daily.csv"), index=False)
    kpis = summarize_kpis(result, usable)
    pd.DataFrame([kpis]).to_csv(os.path.join(results_dir, "kpis.csv"), index=False)
    print(f"Saved series and KPI metrics to {results_dir}/")

    if plots:
        os.makedirs(figs_dir, exist_ok=True)
        fig_path = os.path.join(figs_dir, "tank_temperature.png")
        plot_temperature(result, fig_path, usable_temp_c=usable)
        print(f"Saved temperature plot to {fig_path}")

    if do_sweep:
        print(f"\n--- Running sweep over {sweep_conf['parameter']} ---")
        run_parameter_sweep(config, sweep_conf["parameter"], sweep_conf["values"], usable,
                            out_dir=results_dir if plots else None)

    meta = {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "config": config.to_dict(),
        "usable_temp_c": usable,
        "hourly_samples": len(result.hourly_series),
        "daily_samples": len(result.daily_series),
    }
    with open(os.path.join(results_dir, "run_metadata.json"), "w") as f:
        json.dump(meta, f, indent=2)
    return result, kpis


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solar-heated water tank simulation")
    p.add_argument("--config", default="config.yaml", help="YAML run configuration")
    p.add_argument("--days", type=float, default=None, help="override time.simulation_days")
    p.add_argument("--sun-hours", type=float, default=None, help="override time.sun_hours_per_day")
    p.add_argument("--ambient", type=float, default=None, help="override tank.ambient_temp_c")
    p.add_argument("--no-plots", action="store_true", help="skip PNG output")
    p.add_argument("--no-sweep", action="store_true", help="skip the configured parameter sweep")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    conf = apply_overrides(load_conf(args.config), days=args.days, sun_hours=args.sun_hours, ambient=args.ambient)
    try:
        run_all(conf, plots=not args.no_plots, sweep=not args.no_sweep)
    except InputValidationError as e:
        print(e.message, file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
