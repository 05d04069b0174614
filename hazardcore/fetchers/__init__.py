"""
Pluggable weather observation fetchers.

Each fetcher is built for one station dict (``{"id", "lat", "lon", ...}``)
and its ``fetch()`` returns a ``WeatherObservation``.

Fetchers are OPTIONAL: the classifier never calls them.  They exist only in
the pipeline layer (run_dashboard.py / main.py) to acquire observations
before classification.
"""

from hazardcore.fetchers.open_meteo import OpenMeteoWeatherFetcher
from hazardcore.fetchers.static_weather import StaticWeatherFetcher

FETCHER_REGISTRY: dict[str, type] = {
    "open_meteo": OpenMeteoWeatherFetcher,
    "static": StaticWeatherFetcher,
}


def get_fetcher(name: str, **kwargs):
    """Instantiate a fetcher by name."""
    if name not in FETCHER_REGISTRY:
        raise KeyError(
            f"Unknown fetcher '{name}'. Available: {sorted(FETCHER_REGISTRY)}"
        )
    return FETCHER_REGISTRY[name](**kwargs)
