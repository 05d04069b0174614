"""
Pluggable weighted rules for the fire / flood risk classifier.

Each rule is a callable with signature::

    rule(observation, level, month) -> Contribution | None

``level`` is the tier reached so far; ``month`` is 0-based.  A rule that
fires returns its probability weight, the factor text to report, and an
optional escalation.  Escalation only ever raises the level: the classifier
takes ``max(level, candidate)``.

Built-in rules
--------------
A) ThresholdTiers   numeric field above / below the first matching tier
B) KeywordMatch     condition text contains any keyword
C) DrySpell         negligible precipitation under clear / sunny skies
D) SeasonalWindow   month falls in a calendar window
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Protocol, Union

from hazardcore.weather import WeatherObservation


class RiskLevel(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    EXTREME = 3

    @property
    def label(self) -> str:
        return self.name.title()


# A fixed target tier, or a jump pair: (target when still Low, target otherwise).
Escalation = Union[RiskLevel, tuple[RiskLevel, RiskLevel], None]


def resolve_escalation(escalation: Escalation, level: RiskLevel) -> Optional[RiskLevel]:
    if escalation is None or isinstance(escalation, RiskLevel):
        return escalation
    if_low, otherwise = escalation
    return if_low if level == RiskLevel.LOW else otherwise


@dataclass(frozen=True)
class Contribution:
    weight: float
    factor: str
    escalate_to: Optional[RiskLevel] = None


class RiskRule(Protocol):
    """Any callable(observation, level, month) -> Contribution | None."""
    def __call__(self, observation: WeatherObservation, level: RiskLevel,
                 month: int) -> Optional[Contribution]: ...


# ============================================================================
# A) ThresholdTiers
# ============================================================================

@dataclass(frozen=True)
class Tier:
    threshold: float
    escalation: Escalation
    weight: float
    factor: str


class ThresholdTiers:
    """Compare one numeric field against tiers, strictest first.

    Only the first matching tier contributes.  ``above=True`` fires on
    ``value > threshold``; ``above=False`` on ``value < threshold``.
    """

    def __init__(self, field: str, tiers: list[Tier], above: bool = True):
        self.field = field
        self.tiers = tiers
        self.compare = operator.gt if above else operator.lt

    def __call__(self, observation, level, month):
        value = getattr(observation, self.field)
        for tier in self.tiers:
            if self.compare(value, tier.threshold):
                return Contribution(
                    weight=tier.weight,
                    factor=tier.factor,
                    escalate_to=resolve_escalation(tier.escalation, level),
                )
        return None


# ============================================================================
# B) KeywordMatch
# ============================================================================

class KeywordMatch:
    """Fires when the condition text contains any keyword (case-insensitive)."""

    def __init__(self, keywords: tuple[str, ...], weight: float, factor: str,
                 escalation: Escalation = None):
        self.keywords = tuple(k.lower() for k in keywords)
        self.weight = weight
        self.factor = factor
        self.escalation = escalation

    def __call__(self, observation, level, month):
        text = observation.condition_text.lower()
        if not any(k in text for k in self.keywords):
            return None
        return Contribution(self.weight, self.factor,
                            resolve_escalation(self.escalation, level))


# ============================================================================
# C) DrySpell
# ============================================================================

class DrySpell(KeywordMatch):
    """Clear-sky keyword match that also requires near-zero precipitation."""

    def __init__(self, max_precipitation: float, keywords: tuple[str, ...],
                 weight: float, factor: str):
        super().__init__(keywords, weight, factor)
        self.max_precipitation = max_precipitation

    def __call__(self, observation, level, month):
        if not observation.precipitation < self.max_precipitation:
            return None
        return super().__call__(observation, level, month)


# ============================================================================
# D) SeasonalWindow
# ============================================================================

class SeasonalWindow:
    """Fires when the 0-based month index lies in ``[first, last]``."""

    def __init__(self, first: int, last: int, weight: float, factor: str):
        self.first = first
        self.last = last
        self.weight = weight
        self.factor = factor

    def __call__(self, observation, level, month):
        if self.first <= month <= self.last:
            return Contribution(self.weight, self.factor)
        return None


# ============================================================================
# Rulesets
# ============================================================================

M, H, X = RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.EXTREME

FIRE_RULES: list[RiskRule] = [
    ThresholdTiers("temperature", [
        Tier(40, X, 30, "Very high temperature"),
        Tier(35, H, 30, "Very high temperature"),
        Tier(30, M, 15, "High temperature"),
    ]),
    ThresholdTiers("humidity", [
        Tier(20, (H, X), 25, "Very low humidity"),
        Tier(40, M, 10, "Low humidity"),
    ], above=False),
    ThresholdTiers("wind_speed", [
        Tier(20, (M, H), 20, "Strong winds"),
        Tier(10, None, 10, "Moderate winds"),
    ]),
    DrySpell(0.1, ("clear", "sunny"), 15, "Dry conditions"),
]

FLOOD_RULES: list[RiskRule] = [
    ThresholdTiers("precipitation", [
        Tier(50, X, 40, "Heavy rainfall"),
        Tier(20, H, 25, "Moderate to heavy rain"),
        Tier(5, M, 10, "Light to moderate rain"),
    ]),
    KeywordMatch(("storm", "thunder"), 30, "Storm conditions", escalation=(H, X)),
    ThresholdTiers("pressure", [
        Tier(1000, None, 15, "Low atmospheric pressure"),
    ], above=False),
    ThresholdTiers("humidity", [
        Tier(90, None, 10, "Very high humidity"),
    ]),
    # May to September
    SeasonalWindow(4, 8, 5, "Wet season period"),
]

RULESET_REGISTRY: dict[str, list[RiskRule]] = {
    "fire": FIRE_RULES,
    "flood": FLOOD_RULES,
}


def get_ruleset(name: str) -> list[RiskRule]:
    """Look up a hazard ruleset by name.  Raises KeyError if unknown."""
    if name not in RULESET_REGISTRY:
        raise KeyError(
            f"Unknown hazard ruleset '{name}'. "
            f"Available: {sorted(RULESET_REGISTRY)}"
        )
    return RULESET_REGISTRY[name]
