"""Tests for the river stage risk prediction."""

import math
import random

from hazardcore.risk_rules import RiskLevel
from hazardcore.stage_risk import STAGE_TIERS, base_stage_level, predict_stage_risk


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed script."""

    def __init__(self, draws):
        super().__init__(0)
        self._draws = list(draws)

    def random(self):
        return self._draws.pop(0)


def test_base_level_thresholds():
    assert base_stage_level(0.4) == RiskLevel.LOW
    assert base_stage_level(10.0) == RiskLevel.LOW
    assert base_stage_level(10.01) == RiskLevel.MEDIUM
    assert base_stage_level(15.0) == RiskLevel.MEDIUM
    assert base_stage_level(15.5) == RiskLevel.HIGH


def test_no_bump_uses_base_tier():
    p = predict_stage_risk(5.0, rng=ScriptedRandom([0.2, 0.5, 0.5]))
    assert p.level == RiskLevel.LOW
    assert math.isclose(p.probability_percent, 20.0)
    assert math.isclose(p.confidence, 90.0)
    assert p.timeframe == "24 hours"


def test_bump_raises_one_tier():
    p = predict_stage_risk(12.0, rng=ScriptedRandom([0.9, 0.0, 0.0]))
    assert p.level == RiskLevel.HIGH
    assert math.isclose(p.probability_percent, 65.0)
    assert p.timeframe == "6-12 hours"


def test_bump_capped_at_high():
    p = predict_stage_risk(20.0, rng=ScriptedRandom([0.99, 0.5, 0.5]))
    assert p.level == RiskLevel.HIGH


def test_draw_at_cutoff_does_not_bump():
    p = predict_stage_risk(5.0, rng=ScriptedRandom([0.7, 0.5, 0.5]))
    assert p.level == RiskLevel.LOW


def test_values_within_tier_ranges():
    rng = random.Random(5)
    for stage in (1.0, 12.0, 18.0) * 30:
        p = predict_stage_risk(stage, rng=rng)
        prob_range, _, factors, recommendation, conf_range = STAGE_TIERS[p.level]
        assert prob_range[0] <= p.probability_percent <= prob_range[1]
        assert conf_range[0] <= p.confidence <= conf_range[1]
        assert p.factors == factors
        assert p.recommendation == recommendation
        assert p.level >= base_stage_level(stage)


def test_to_dict_uses_labels():
    d = predict_stage_risk(5.0, rng=ScriptedRandom([0.1, 0.5, 0.5])).to_dict()
    assert d["level"] == "Low"
    assert d["probability_percent"] == 20.0
    assert len(d["factors"]) == 3
