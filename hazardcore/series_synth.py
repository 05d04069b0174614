"""
Synthetic three-segment discharge series for station charts.

The series reads as "known past, validated recent, uncertain future":

  historical   4 days x 10 sub-points, floor 50
  validation   offsets 3.8 -> 6.0, tighter noise band, floor 100
  forecast     offsets 5.5 -> 7.5, damped seasonal swing, wider noise, floor 150

Every value is trend + seasonal (sinusoid) + noise, drawn from one
``SeededGenerator`` in a fixed order.  Changing the order of draws changes
every series for every station.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Iterator

from hazardcore.seeded_random import SeededGenerator, resolve_seed

DAY_ORIGIN = 25.0

HISTORICAL = "historical"
VALIDATION = "validation"
FORECAST = "forecast"
SEGMENTS = (HISTORICAL, VALIDATION, FORECAST)


@dataclass(frozen=True)
class SeriesPoint:
    day: float
    discharge_value: float
    segment: str
    label: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SegmentSpec:
    """Generation parameters for one segment of the series."""

    name: str
    jitter_max: float
    trend_gain: float
    noise_scale: float
    floor: float
    dampening_rate: float = 0.0
    dampening_start: float = 0.0


# ============================================================================
# Segment table
# ============================================================================

SEGMENT_TABLE: tuple[SegmentSpec, ...] = (
    SegmentSpec(HISTORICAL, jitter_max=0.5, trend_gain=0.3,
                noise_scale=1.0, floor=50.0),
    SegmentSpec(VALIDATION, jitter_max=0.3, trend_gain=0.4,
                noise_scale=0.8, floor=100.0),
    SegmentSpec(FORECAST, jitter_max=0.4, trend_gain=0.5,
                noise_scale=1.2, floor=150.0,
                dampening_rate=0.2, dampening_start=5.5),
)


def _historical_offsets() -> Iterator[tuple[float, float]]:
    """Yield ``(t, day_base)`` for 4 whole days sampled 10 times each."""
    for day_offset in range(4):
        for sub_point in range(10):
            yield day_offset + sub_point / 10, float(day_offset)


def _stepped_offsets(start: float, stop: float,
                     step: float = 0.1) -> Iterator[tuple[float, float]]:
    # accumulated, not multiplied: the point count depends on float drift
    t = start
    while t < stop:
        yield t, t
        t += step


SEGMENT_OFFSETS = {
    HISTORICAL: _historical_offsets,
    VALIDATION: lambda: _stepped_offsets(3.8, 6.0),
    FORECAST: lambda: _stepped_offsets(5.5, 7.5),
}


# ============================================================================
# Synthesis
# ============================================================================

def _segment_points(spec: SegmentSpec, rng: SeededGenerator,
                    base_level: float, amplitude: float,
                    trend_strength: float,
                    noise_level: float) -> list[SeriesPoint]:
    noise_band = noise_level * spec.noise_scale
    points: list[SeriesPoint] = []
    for t, day_base in SEGMENT_OFFSETS[spec.name]():
        if spec.dampening_rate:
            dampening = math.exp(-(t - spec.dampening_start) * spec.dampening_rate)
        else:
            dampening = 1.0

        # draw order: jitter, then noise
        jitter = rng.next_in_range(0.0, spec.jitter_max)
        seasonal = amplitude * math.sin(2.0 * math.pi * t + jitter) * dampening
        trend = base_level + day_base * trend_strength + t * trend_strength * spec.trend_gain
        noise = rng.next_in_range(-noise_band, noise_band)

        value = max(spec.floor, trend + seasonal + noise)
        day = round(DAY_ORIGIN + t, 4)
        points.append(SeriesPoint(
            day=day,
            discharge_value=round(value, 2),
            segment=spec.name,
            label=f"Day {math.floor(day)}",
        ))
    return points


def _trim_overlap(segments: list[list[SeriesPoint]]) -> list[list[SeriesPoint]]:
    """Drop points of a later segment that fall inside an earlier one."""
    trimmed: list[list[SeriesPoint]] = []
    last_day = -math.inf
    for points in segments:
        kept = [p for p in points if p.day > last_day]
        if kept:
            last_day = max(p.day for p in kept)
        trimmed.append(kept)
    return trimmed


def synthesize_series(source=None, trim_overlap: bool = True) -> list[SeriesPoint]:
    """Build the deterministic discharge series for one station.

    Parameters
    ----------
    source : None | int | (lat, lon) | dict
        Anything ``resolve_seed`` accepts.  ``None`` uses the demo seed.
    trim_overlap : bool
        If True (default), points of the validation and forecast segments
        whose day falls at or before the end of the previous segment are
        discarded, so the three segments never overlap.  All draws are made
        before trimming, so the kept values are identical either way.

    Returns
    -------
    list[SeriesPoint] sorted by ``day`` ascending.
    """
    rng = SeededGenerator(resolve_seed(source))

    base_level = rng.next_in_range(80, 150)
    amplitude = rng.next_in_range(40, 80)
    trend_strength = rng.next_in_range(15, 35)
    noise_level = rng.next_in_range(5, 15)

    segments = [
        _segment_points(spec, rng, base_level, amplitude,
                        trend_strength, noise_level)
        for spec in SEGMENT_TABLE
    ]
    if trim_overlap:
        segments = _trim_overlap(segments)

    series = [p for points in segments for p in points]
    series.sort(key=lambda p: p.day)
    return series
