"""
Adaptive display window and low/high risk boundaries for a numeric series.

The padding policy depends on how much the data actually moves:

  range < 0.005          centre on the midpoint, fixed half-width 0.005
  0.005 <= range < 0.02  pad max(0.002, 10 % of range) each side
  range >= 0.02          pad 10 % of range each side

The low / high boundaries split the *visible* window 30 / 40 / 30.
"""

from __future__ import annotations

import math
import sys
from dataclasses import asdict, dataclass
from typing import Callable, Sequence

import numpy as np

FLAT_HALF_WIDTH = 0.005
MIN_PADDING = 0.002
PADDING_FRACTION = 0.1
CLAMP_MARGIN = 0.01
LOW_FRACTION = 0.3
HIGH_FRACTION = 0.7
_FLOAT_MAX = sys.float_info.max


class EmptySeriesError(ValueError):
    """Raised when thresholds are requested for a series with no values."""


@dataclass(frozen=True)
class ThresholdBand:
    domain_min: float
    domain_max: float
    low_boundary: float
    high_boundary: float

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================================
# Padding tiers: (exclusive upper bound on range, window builder)
#
# Builders work from the half-range so the window stays finite for any
# finite input, however far apart the extremes are.
# ============================================================================

def _centred_window(data_min: float, data_max: float,
                    half_range: float) -> tuple[float, float]:
    mid = data_min + half_range
    return mid - FLAT_HALF_WIDTH, mid + FLAT_HALF_WIDTH


def _floored_padding(data_min: float, data_max: float,
                     half_range: float) -> tuple[float, float]:
    pad = max(MIN_PADDING, half_range * 2.0 * PADDING_FRACTION)
    return data_min - pad, data_max + pad


def _proportional_padding(data_min: float, data_max: float,
                          half_range: float) -> tuple[float, float]:
    pad = half_range * 2.0 * PADDING_FRACTION
    return data_min - pad, data_max + pad


WindowBuilder = Callable[[float, float, float], tuple[float, float]]

PADDING_TIERS: tuple[tuple[float, WindowBuilder], ...] = (
    (0.005, _centred_window),
    (0.02, _floored_padding),
    (math.inf, _proportional_padding),
)


def padding_policy(data_range: float) -> WindowBuilder:
    """Return the window builder for a given data range."""
    for upper, builder in PADDING_TIERS:
        if data_range < upper:
            return builder
    # inf or NaN range
    return _proportional_padding


# ============================================================================
# Public API
# ============================================================================

def compute_thresholds(series: Sequence[float]) -> ThresholdBand:
    """Compute the display window and risk boundaries for *series*.

    Raises
    ------
    EmptySeriesError
        If *series* holds no values.
    """
    values = np.asarray(series, dtype=float).ravel()
    if values.size == 0:
        raise EmptySeriesError("Cannot compute thresholds for an empty series")

    data_min = float(values.min())
    data_max = float(values.max())
    half_range = data_max / 2.0 - data_min / 2.0

    builder = padding_policy(half_range * 2.0)
    chart_min, chart_max = builder(data_min, data_max, half_range)
    chart_min = max(chart_min, -_FLOAT_MAX)
    chart_max = min(chart_max, _FLOAT_MAX)

    # no negative levels unless the data itself goes negative
    if data_min > 0 and chart_min < 0:
        chart_min = max(0.0, data_min - CLAMP_MARGIN)

    half_visible = chart_max / 2.0 - chart_min / 2.0
    return ThresholdBand(
        domain_min=chart_min,
        domain_max=chart_max,
        low_boundary=chart_min + 2.0 * LOW_FRACTION * half_visible,
        high_boundary=chart_max - 2.0 * (1.0 - HIGH_FRACTION) * half_visible,
    )
