"""Observations carried inline in the station config (demo / offline runs)."""

from __future__ import annotations

from hazardcore.weather import WeatherObservation


class StaticWeatherFetcher:
    """Read the ``weather`` block of a station dict.

    Parameters
    ----------
    station : dict
        Station with a ``"weather"`` key holding one observation record.
    """

    def __init__(self, station: dict):
        self.station = station

    def fetch(self) -> WeatherObservation:
        record = self.station.get("weather")
        if record is None:
            raise ValueError(
                f"Station '{self.station.get('id', '?')}' has no 'weather' block"
            )
        return WeatherObservation.from_dict(record)
