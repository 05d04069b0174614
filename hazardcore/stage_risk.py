"""River stage risk prediction for the station detail panel (demo figures, no API)."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from hazardcore.risk_rules import RiskLevel

MEDIUM_STAGE_M = 10.0
HIGH_STAGE_M = 15.0
BUMP_ABOVE = 0.7


@dataclass(frozen=True)
class StagePrediction:
    level: RiskLevel
    probability_percent: float
    timeframe: str
    factors: tuple[str, ...]
    recommendation: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "level": self.level.label,
            "probability_percent": round(self.probability_percent, 1),
            "timeframe": self.timeframe,
            "factors": list(self.factors),
            "recommendation": self.recommendation,
            "confidence": round(self.confidence, 1),
        }


# tier -> (probability range, timeframe, factors, recommendation, confidence range)
STAGE_TIERS = {
    RiskLevel.LOW: (
        (15.0, 25.0),
        "24 hours",
        ("Stable weather patterns", "Normal rainfall upstream",
         "Historical low flood season"),
        "Continue regular monitoring. Water levels are within normal parameters.",
        (85.0, 95.0),
    ),
    RiskLevel.MEDIUM: (
        (35.0, 55.0),
        "12-24 hours",
        ("Moderate rainfall forecast", "Seasonal water level increase",
         "Upstream dam release scheduled"),
        "Increased monitoring recommended. Prepare early warning systems.",
        (75.0, 90.0),
    ),
    RiskLevel.HIGH: (
        (65.0, 85.0),
        "6-12 hours",
        ("Heavy rainfall warning", "Rising trend in upstream stations",
         "Saturated ground conditions"),
        "Activate flood preparedness protocols. Consider evacuation planning.",
        (80.0, 95.0),
    ),
}


def base_stage_level(current_stage: float) -> RiskLevel:
    if current_stage > HIGH_STAGE_M:
        return RiskLevel.HIGH
    if current_stage > MEDIUM_STAGE_M:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def predict_stage_risk(
    current_stage: float,
    rng: Optional[random.Random] = None,
) -> StagePrediction:
    """Predict near-term flood risk at a river station from its stage (m).

    The stage picks a base tier; with a 30 % chance the prediction is bumped
    one tier up (never beyond High) to keep the panel from looking static.
    """
    if rng is None:
        rng = random.Random()

    level = base_stage_level(current_stage)
    if rng.random() > BUMP_ABOVE:
        level = min(RiskLevel(level + 1), RiskLevel.HIGH)

    prob_range, timeframe, factors, recommendation, conf_range = STAGE_TIERS[level]
    return StagePrediction(
        level=level,
        probability_percent=rng.uniform(*prob_range),
        timeframe=timeframe,
        factors=factors,
        recommendation=recommendation,
        confidence=rng.uniform(*conf_range),
    )
