"""
Open-Meteo current-conditions fetcher.

Queries the forecast API's ``current`` block for one station and normalises
it into a ``WeatherObservation``.  Wind is requested in km/h, precipitation
in mm, surface pressure in hPa.
"""

from __future__ import annotations

import time

import requests

from hazardcore.weather import WeatherObservation

FORECAST_API = "https://api.open-meteo.com/v1/forecast"

CURRENT_VARS = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "surface_pressure",
    "wind_speed_10m",
    "weather_code",
)

# WMO weather interpretation codes
WMO_CONDITIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

RETRY_STATUS = (429, 500, 502, 503, 504)


def get_json(url: str, params: dict, timeout: int = 30, max_retries: int = 3) -> dict:
    """GET request with exponential backoff retry."""
    for attempt in range(max_retries + 1):
        try:
            r = requests.get(url, params=params, timeout=timeout)
            if r.status_code == 200:
                return r.json()
            if r.status_code in RETRY_STATUS and attempt < max_retries:
                time.sleep(2 ** (attempt + 1))
                continue
            r.raise_for_status()
        except requests.exceptions.RequestException:
            if attempt == max_retries:
                raise
            time.sleep(2 ** (attempt + 1))
    raise RuntimeError(f"Max retries exceeded for {url}")


def condition_text(code) -> str:
    """Map a WMO weather code to display text ("Unknown" if unmapped)."""
    if code is None:
        return "Unknown"
    return WMO_CONDITIONS.get(int(code), "Unknown")


class OpenMeteoWeatherFetcher:
    """Fetch the current observation for a station from Open-Meteo.

    Parameters
    ----------
    station : dict
        ``{"id", "lat", "lon", ...}``
    timeout : int
        Per-request timeout in seconds (default 30).
    max_retries : int
        Retries on 429 / 5xx / connection errors (default 3).
    """

    def __init__(self, station: dict, timeout: int = 30, max_retries: int = 3):
        self.station = station
        self.timeout = timeout
        self.max_retries = max_retries

    def fetch(self) -> WeatherObservation:
        params = {
            "latitude": self.station["lat"],
            "longitude": self.station["lon"],
            "current": ",".join(CURRENT_VARS),
            "wind_speed_unit": "kmh",
            "precipitation_unit": "mm",
            "timezone": "UTC",
        }
        data = get_json(FORECAST_API, params,
                        timeout=self.timeout, max_retries=self.max_retries)

        current = data.get("current")
        if not current:
            raise ValueError(
                f"No current conditions returned for station "
                f"'{self.station.get('id', '?')}'"
            )

        print(f"Fetched Open-Meteo conditions for {self.station.get('id', '?')} "
              f"at {current.get('time', '?')}")

        return WeatherObservation.from_dict({
            "temperature": current.get("temperature_2m"),
            "humidity": current.get("relative_humidity_2m"),
            "wind_speed": current.get("wind_speed_10m"),
            "precipitation": current.get("precipitation"),
            "pressure": current.get("surface_pressure"),
            "condition_text": condition_text(current.get("weather_code")),
        })
