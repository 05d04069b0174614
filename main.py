"""
Emergency Monitoring Dashboard — risk synthesis entry points.

Five endpoint functions, each returning plain JSON-ready dicts:
    1. synthesize_station_series() — deterministic discharge chart series
    2. station_thresholds()        — display window + low/high risk bands
    3. assess_weather()            — fire / flood risk from an observation
    4. assess_station_live()       — fetch current conditions + assess
    5. predict_river_stage()       — near-term stage risk prediction
"""

from typing import Optional, Dict, Any, List

from hazardcore.seeded_random import derive_seed
from hazardcore.series_synth import synthesize_series
from hazardcore.thresholds import compute_thresholds, classify_stage
from hazardcore.weather import WeatherObservation
from hazardcore.risk_classifier import classify_risk
from hazardcore.stage_risk import predict_stage_risk
from hazardcore.fetchers import get_fetcher


# ── Endpoint 1: Synthetic discharge series ───────────────────────────

def synthesize_station_series(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    trim_overlap: bool = True,
) -> Dict[str, Any]:
    """
    Build the chart series for a station.

    Parameters
    ----------
    lat, lon : float, optional
        Station coordinates.  Omit both for the default demo series.
    trim_overlap : bool
        Drop overlapping points between segments (default True).

    Returns
    -------
    dict with the seed used and the ordered list of points.
    """
    if (lat is None) != (lon is None):
        raise ValueError("Pass both lat and lon, or neither.")

    source = None if lat is None else (lat, lon)
    points = synthesize_series(source, trim_overlap=trim_overlap)

    return {
        "seed": None if lat is None else derive_seed(lat, lon),
        "lat": lat,
        "lon": lon,
        "n_points": len(points),
        "series": [p.to_dict() for p in points],
    }


# ── Endpoint 2: Thresholds for a reading series ──────────────────────

def station_thresholds(readings: List[float]) -> Dict[str, Any]:
    """
    Compute the display band for a series of readings and place the latest
    reading in it.

    Returns
    -------
    dict with domain_min / domain_max / low_boundary / high_boundary and
    ``latest_level`` ("Low" | "Medium" | "High").
    """
    band = compute_thresholds(readings)
    result = band.to_dict()
    result["latest"] = float(readings[-1])
    result["latest_level"] = classify_stage(readings[-1], band)
    return result


# ── Endpoint 3: Risk from a given observation ────────────────────────

def assess_weather(
    observation: Dict[str, Any],
    month: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Validate an observation record and classify fire / flood risk.

    Parameters
    ----------
    observation : dict
        temperature, humidity, wind_speed (or windSpeed), precipitation,
        pressure, condition_text (or conditions).
    month : int, optional
        0-based month; defaults to the current month.
    """
    obs = WeatherObservation.from_dict(observation)
    assessment = classify_risk(obs, month=month)
    result = assessment.to_dict()
    result["observation"] = obs.to_dict()
    return result


# ── Endpoint 4: Live conditions + risk ──────────────────────────────

def assess_station_live(
    lat: float,
    lon: float,
    station_id: str = "live",
    month: Optional[int] = None,
    fetcher: str = "open_meteo",
) -> Dict[str, Any]:
    """
    Fetch current conditions for a location and classify risk.

    Returns
    -------
    dict shaped like assess_weather() plus station id / coordinates.
    """
    station = {"id": station_id, "lat": lat, "lon": lon}
    obs = get_fetcher(fetcher, station=station).fetch()
    result = classify_risk(obs, month=month).to_dict()
    result.update({
        "station_id": station_id,
        "lat": float(lat),
        "lon": float(lon),
        "observation": obs.to_dict(),
        "source": fetcher,
    })
    return result


# ── Endpoint 5: River stage prediction ──────────────────────────────

def predict_river_stage(site_number: str, current_stage: float) -> Dict[str, Any]:
    """
    Near-term flood risk prediction for a river gauge.

    Parameters
    ----------
    site_number : str
        Gauge identifier, echoed back.
    current_stage : float
        Current water level in metres.
    """
    prediction = predict_stage_risk(current_stage)
    result = prediction.to_dict()
    result.update({
        "site_number": site_number,
        "current_stage": float(current_stage),
    })
    return result
