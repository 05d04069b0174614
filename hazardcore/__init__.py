"""Deterministic risk synthesis core for the emergency-monitoring dashboard."""

from hazardcore.seeded_random import SeededGenerator, derive_seed, resolve_seed
from hazardcore.series_synth import SeriesPoint, synthesize_series
from hazardcore.thresholds import (
    EmptySeriesError,
    ThresholdBand,
    compute_thresholds,
)
from hazardcore.weather import WeatherObservation
from hazardcore.risk_rules import RiskLevel
from hazardcore.risk_classifier import RiskAssessment, RiskJudgment, classify_risk
from hazardcore.stage_risk import StagePrediction, predict_stage_risk

__all__ = [
    "EmptySeriesError",
    "RiskAssessment",
    "RiskJudgment",
    "RiskLevel",
    "SeededGenerator",
    "SeriesPoint",
    "StagePrediction",
    "ThresholdBand",
    "WeatherObservation",
    "classify_risk",
    "compute_thresholds",
    "derive_seed",
    "predict_stage_risk",
    "resolve_seed",
    "synthesize_series",
]
