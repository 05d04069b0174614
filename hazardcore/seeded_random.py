"""
Deterministic pseudo-random source for synthetic station data.

A Park-Miller (minimal standard) LCG: every caller builds its own
``SeededGenerator`` from a seed derived from station coordinates, so the same
station always produces the same synthetic series.  No module-level generator
exists and nothing here touches ``random`` module state.
"""

from __future__ import annotations

import math
import numbers

import numpy as np

LCG_MODULUS = 2147483647        # 2**31 - 1
LCG_MULTIPLIER = 16807
DEFAULT_SEED = 12345
COORD_SCALE = 1_000_000
SEED_SPACE = 1_000_000
_COORD_KEYS = (("lat", "lon"), ("latitude", "longitude"))


class SeededGenerator:
    """Linear congruential generator owning a single integer state.

    Parameters
    ----------
    seed : int
        Any integer.  Normalised into ``[1, 2**31 - 2]``; zero and negative
        seeds are folded back into range rather than rejected.
    """

    def __init__(self, seed: int):
        seed = int(seed)
        # truncated remainder: negative seeds keep their sign
        state = abs(seed) % LCG_MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += LCG_MODULUS - 1
        self.state = state

    def next(self) -> float:
        """Advance the state and return a uniform value in ``[0, 1)``."""
        self.state = (self.state * LCG_MULTIPLIER) % LCG_MODULUS
        return (self.state - 1) / (LCG_MODULUS - 1)

    def next_in_range(self, lo: float, hi: float) -> float:
        """Uniform value in ``[lo, hi)``; ``lo`` when the range is empty."""
        return lo + self.next() * (hi - lo)


def derive_seed(lat: float, lon: float) -> int:
    """Hash a coordinate pair into a seed in ``[0, 1_000_000)``.

    Collisions are possible and harmless: only approximate uniqueness is
    needed so neighbouring stations draw visibly different series.
    """
    lat_int = math.floor(abs(lat) * COORD_SCALE)
    lon_int = math.floor(abs(lon) * COORD_SCALE)
    return (lat_int * 31 + lon_int) % SEED_SPACE


def _station_coords(station: dict) -> tuple[float, float]:
    for lat_key, lon_key in _COORD_KEYS:
        if lat_key in station and lon_key in station:
            return station[lat_key], station[lon_key]
    raise ValueError("Station dict missing 'lat' / 'lon' (or 'latitude' / 'longitude')")


def resolve_seed(source=None) -> int:
    """Turn whatever the caller has into a seed.

    ``source`` may be ``None`` (default demo seed), an integer seed (Python
    or numpy), a whole-number float seed, a ``(lat, lon)`` pair, or a station
    dict carrying ``lat`` / ``lon`` or ``latitude`` / ``longitude``.
    """
    if source is None:
        return DEFAULT_SEED
    if isinstance(source, (bool, np.bool_)):
        raise ValueError("seed source must not be a bool")
    if isinstance(source, numbers.Integral):
        return int(source)
    if isinstance(source, numbers.Real):
        if not float(source).is_integer():
            raise ValueError(f"Float seed must be a whole number, got {source}")
        return int(source)
    if isinstance(source, dict):
        return derive_seed(*_station_coords(source))
    if isinstance(source, (tuple, list)) and len(source) == 2:
        lat, lon = source
        return derive_seed(lat, lon)
    raise ValueError(
        f"Cannot derive a seed from {type(source).__name__}; expected "
        f"None, an integer, (lat, lon) or a station dict"
    )
