"""Weather observation record handed to the risk classifier."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

_NUMERIC_FIELDS = ("temperature", "humidity", "wind_speed",
                   "precipitation", "pressure")

# Keys used by the dashboard's JSON feeds.
_ALIASES = {
    "windSpeed": "wind_speed",
    "conditions": "condition_text",
    "conditionText": "condition_text",
}


@dataclass(frozen=True)
class WeatherObservation:
    """One weather reading.

    Units: temperature °C, humidity %, wind_speed km/h,
    precipitation mm/h, pressure hPa.
    """

    temperature: float
    humidity: float
    wind_speed: float
    precipitation: float
    pressure: float
    condition_text: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherObservation":
        """Build an observation from a parsed record, validating every field.

        Accepts both snake_case keys and the camelCase keys of the dashboard
        feeds.  The classifier never validates; this is where callers should.
        """
        if not isinstance(data, dict):
            raise ValueError("observation must be a dict")
        record = {_ALIASES.get(k, k): v for k, v in data.items()}

        missing = set(_NUMERIC_FIELDS) - set(record)
        if missing:
            raise ValueError(f"Observation missing fields: {sorted(missing)}")

        for key in _NUMERIC_FIELDS:
            _assert_finite_number(record[key], f"observation.{key}")

        condition = record.get("condition_text", "")
        if not isinstance(condition, str):
            raise ValueError(
                f"observation.condition_text must be a string, "
                f"got {type(condition).__name__}"
            )
        if not 0 <= record["humidity"] <= 100:
            raise ValueError(f"observation.humidity must be within [0, 100], got {record['humidity']}")
        if record["precipitation"] < 0:
            raise ValueError("observation.precipitation must be >= 0")
        if record["wind_speed"] < 0:
            raise ValueError("observation.wind_speed must be >= 0")

        return cls(
            temperature=float(record["temperature"]),
            humidity=float(record["humidity"]),
            wind_speed=float(record["wind_speed"]),
            precipitation=float(record["precipitation"]),
            pressure=float(record["pressure"]),
            condition_text=condition,
        )


def _assert_finite_number(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}")
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"{name} must be finite, got {value}")
