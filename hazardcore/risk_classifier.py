"""
Fire and flood risk classification from a single weather observation.

Weighted threshold rules, not a statistical model: each rule in the hazard's
ruleset adds probability weight, may escalate the level, and names the factor
it detected.

The confidence figure is drawn from an unseeded ``random.Random``.  This is
the opposite of the synthetic series, which is seeded from coordinates: the
series must be reproducible for demos, the live judgment is meant to vary
between refreshes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from hazardcore.risk_rules import RiskLevel, get_ruleset
from hazardcore.weather import WeatherObservation

MAX_PROBABILITY = 95.0
CONFIDENCE_RANGE = (75.0, 95.0)

BASE_PROBABILITY = {
    "fire": 10.0,
    "flood": 5.0,
}

DEFAULT_FACTORS = {
    "fire": ("Stable weather conditions", "Normal temperature and humidity"),
    "flood": ("Clear weather conditions", "Low precipitation levels"),
}

RECOMMENDATIONS = {
    "fire": {
        RiskLevel.EXTREME: "Extreme fire danger. Avoid all outdoor burning. Have evacuation plans ready.",
        RiskLevel.HIGH: "High fire risk. No open fires. Monitor conditions closely.",
        RiskLevel.MEDIUM: "Moderate fire risk. Exercise caution with any heat sources.",
        RiskLevel.LOW: "Low fire risk. Normal fire safety precautions apply.",
    },
    "flood": {
        RiskLevel.EXTREME: "Extreme flood risk. Avoid low-lying areas. Monitor emergency alerts.",
        RiskLevel.HIGH: "High flood risk. Stay alert for flash flooding warnings.",
        RiskLevel.MEDIUM: "Moderate flood risk. Monitor weather conditions and waterways.",
        RiskLevel.LOW: "Low flood risk. Normal monitoring sufficient.",
    },
}


@dataclass(frozen=True)
class RiskJudgment:
    level: RiskLevel
    probability_percent: float
    factors: tuple[str, ...]
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "level": self.level.label,
            "probability_percent": self.probability_percent,
            "factors": list(self.factors),
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class RiskAssessment:
    fire: RiskJudgment
    flood: RiskJudgment
    confidence: int
    generated_at: datetime

    def to_dict(self) -> dict:
        return {
            "fire": self.fire.to_dict(),
            "flood": self.flood.to_dict(),
            "confidence": self.confidence,
            "generated_at": self.generated_at.isoformat(),
        }


def judge(hazard: str, observation: WeatherObservation, month: int) -> RiskJudgment:
    """Run one hazard's ruleset over *observation*."""
    level = RiskLevel.LOW
    probability = BASE_PROBABILITY[hazard]
    factors: list[str] = []

    for rule in get_ruleset(hazard):
        contribution = rule(observation, level, month)
        if contribution is None:
            continue
        if contribution.escalate_to is not None:
            level = max(level, contribution.escalate_to)
        probability += contribution.weight
        factors.append(contribution.factor)

    if not factors:
        factors = list(DEFAULT_FACTORS[hazard])

    return RiskJudgment(
        level=level,
        probability_percent=min(MAX_PROBABILITY, max(0.0, probability)),
        factors=tuple(factors),
        recommendation=RECOMMENDATIONS[hazard][level],
    )


def classify_risk(
    observation: WeatherObservation,
    month: Optional[int] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> RiskAssessment:
    """Classify fire and flood risk for one observation.

    Parameters
    ----------
    observation : WeatherObservation
        Not validated here; NaN fields propagate into the result.
    month : int, optional
        0-based calendar month (0 = January).  Defaults to the month of
        ``now`` as read on ``now``'s own clock: UTC unless the caller passes
        a timestamp in another zone.  Near a month boundary the UTC month can
        differ from the station's local month; pass ``month`` (or a local
        ``now``) when the wet-season window must follow local time.
    rng : random.Random, optional
        Source for the confidence draw.  A fresh unseeded generator is used
        when omitted.
    now : datetime, optional
        Timestamp to stamp the assessment with (default: now, UTC).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if month is None:
        month = now.month - 1
    if not 0 <= month <= 11:
        raise ValueError(f"month must be a 0-based index in [0, 11], got {month}")
    if rng is None:
        rng = random.Random()

    return RiskAssessment(
        fire=judge("fire", observation, month),
        flood=judge("flood", observation, month),
        confidence=round(rng.uniform(*CONFIDENCE_RANGE)),
        generated_at=now,
    )
