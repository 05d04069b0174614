#!/usr/bin/env python3
"""
Station risk dashboard runner.

Usage:
    python run_dashboard.py --config configs/south_west_wa.json

The config JSON controls:
  - the station list (id, name, lat, lon, optional stage readings / weather)
  - weather fetcher selection + parameters
  - month override for the seasonal flood rule
  - output file paths

The risk core is imported unchanged and never fetches data.
"""

from __future__ import annotations

import argparse
import json
import statistics

from hazardcore.series_synth import synthesize_series
from hazardcore.thresholds import compute_thresholds, classify_stage
from hazardcore.risk_classifier import classify_risk
from hazardcore.stage_risk import predict_stage_risk
from hazardcore.fetchers import get_fetcher
from hazardcore.output_writers import (
    headline_level,
    summarize_series,
    write_html_map,
    write_json,
    write_series_csv,
)

_REQUIRED_KEYS = ("product", "stations", "outputs")
_REQUIRED_STATION_FIELDS = ("id", "lat", "lon")
_REQUIRED_OUTPUTS = ("json", "csv", "html")


# ============================================================================
# Config
# ============================================================================

def load_config(config_path: str) -> dict:
    """Load and validate a dashboard configuration file."""
    with open(config_path) as f:
        cfg = json.load(f)

    missing = [k for k in _REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Config missing keys: {missing}")

    stations = cfg["stations"]
    if not isinstance(stations, list) or len(stations) == 0:
        raise ValueError("'stations' must be a non-empty list")
    for i, s in enumerate(stations):
        absent = [k for k in _REQUIRED_STATION_FIELDS if k not in s]
        if absent:
            raise ValueError(f"Station at index {i} missing {absent}")

    absent = [k for k in _REQUIRED_OUTPUTS if k not in cfg["outputs"]]
    if absent:
        raise ValueError(f"'outputs' missing {absent}")

    month = cfg.get("month")
    if month is not None and not (isinstance(month, int) and 0 <= month <= 11):
        raise ValueError(f"'month' must be a 0-based index in [0, 11], got {month}")

    cfg.setdefault("weather_fetcher", {"name": "static"})
    return cfg


# ============================================================================
# Per-station processing
# ============================================================================

def process_station(station: dict, fetcher_cfg: dict, month: int | None) -> dict:
    """Series, thresholds, risk and (optionally) stage prediction for one station."""
    series = synthesize_series(station)

    readings = station.get("stage_readings") or [p.discharge_value for p in series]
    band = compute_thresholds(readings)

    fetcher = get_fetcher(
        fetcher_cfg["name"],
        station=station,
        **fetcher_cfg.get("params", {}),
    )
    observation = fetcher.fetch()
    assessment = classify_risk(observation, month=month)

    result = {
        "id": station["id"],
        "name": station.get("name", station["id"]),
        "lat": station["lat"],
        "lon": station["lon"],
        "series": [p.to_dict() for p in series],
        "thresholds": band.to_dict(),
        "latest_level": classify_stage(readings[-1], band),
        "observation": observation.to_dict(),
        "risk": assessment.to_dict(),
    }
    if "current_stage" in station:
        result["stage_prediction"] = predict_stage_risk(station["current_stage"]).to_dict()
    return result


# ============================================================================
# Summary statistics
# ============================================================================

def print_summary(results: list[dict]) -> None:
    levels = [headline_level(r["risk"]) for r in results]
    fire_probs = [r["risk"]["fire"]["probability_percent"] for r in results]
    flood_probs = [r["risk"]["flood"]["probability_percent"] for r in results]

    print("\n===== Summary =====")
    print(f"Stations:                 {len(results)}")
    for level in ("Extreme", "High", "Medium", "Low"):
        print(f"  Headline {level:<8}       {levels.count(level)}")
    print(f"Median fire probability:  {statistics.median(fire_probs):.1f}%")
    print(f"Median flood probability: {statistics.median(flood_probs):.1f}%")
    if results:
        print(f"\nSeries segments for {results[0]['id']}:")
        print(summarize_series(results[0]["series"]).round(2).to_string())
    print("===================\n")


# ============================================================================
# Main pipeline
# ============================================================================

def run(config_path: str) -> list[dict]:
    # 1) Load config
    cfg = load_config(config_path)
    product = cfg["product"]
    stations = cfg["stations"]
    fetcher_cfg = cfg["weather_fetcher"]
    month = cfg.get("month")
    outputs = cfg["outputs"]

    print(f"=== {product} ===")
    print(f"Stations: {len(stations)}")
    print(f"Weather fetcher: {fetcher_cfg['name']}")
    print(f"Month override: {month if month is not None else 'current'}\n")

    # 2) Process every station through the core
    results = [process_station(s, fetcher_cfg, month) for s in stations]

    # 3) Summary
    print_summary(results)

    # 4) Write outputs
    write_json({"product": product, "stations": results}, outputs["json"])
    write_series_csv(results, outputs["csv"])
    write_html_map(results, outputs["html"], title=f"Risk Map — {product}")

    print("Done.")
    return results


# ============================================================================
# CLI entry point
# ============================================================================

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Station risk dashboard runner."
    )
    parser.add_argument(
        "--config", required=True,
        help="Path to dashboard configuration JSON file.",
    )
    args = parser.parse_args()
    run(args.config)


if __name__ == "__main__":
    main()
