"""Tests for the fire / flood risk classifier and its rules.

Tests cover:
  - the two reference scenarios (extreme fire, extreme flood)
  - escalation never lowers a level
  - probability clamping and default factors
  - wet-season month window
  - recommendation tier mapping
  - confidence / timestamp handling
  - ruleset registry
"""

import math
import random
from datetime import datetime, timedelta, timezone

import pytest
from hazardcore.risk_classifier import (
    DEFAULT_FACTORS,
    RECOMMENDATIONS,
    classify_risk,
    judge,
)
from hazardcore.risk_rules import RiskLevel, get_ruleset
from hazardcore.weather import WeatherObservation

CALM = dict(temperature=20.0, humidity=60.0, wind_speed=5.0,
            precipitation=0.0, pressure=1015.0, condition_text="Partly cloudy")


def obs(**overrides) -> WeatherObservation:
    fields = dict(CALM)
    fields.update(overrides)
    return WeatherObservation(**fields)


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------

def test_hot_dry_windy_is_extreme_fire():
    o = obs(temperature=42, humidity=10, wind_speed=25, precipitation=0,
            pressure=1015, condition_text="clear")
    for month in range(12):
        a = classify_risk(o, month=month)
        assert a.fire.level == RiskLevel.EXTREME
        assert a.flood.level == RiskLevel.LOW
    assert a.fire.factors == ("Very high temperature", "Very low humidity",
                              "Strong winds", "Dry conditions")
    assert a.fire.probability_percent == 95.0


def test_thunderstorm_downpour_is_extreme_flood():
    o = obs(temperature=22, humidity=95, wind_speed=5, precipitation=60,
            pressure=995, condition_text="thunderstorm")
    a = classify_risk(o, month=0)
    assert a.flood.level == RiskLevel.EXTREME
    assert a.fire.level == RiskLevel.LOW
    assert a.flood.probability_percent == 95.0
    assert a.flood.factors == ("Heavy rainfall", "Storm conditions",
                               "Low atmospheric pressure", "Very high humidity")
    assert a.fire.probability_percent == 10.0


# ---------------------------------------------------------------------------
# Fire escalation
# ---------------------------------------------------------------------------

def test_fire_temperature_tiers():
    assert judge("fire", obs(temperature=41), 0).level == RiskLevel.EXTREME
    assert judge("fire", obs(temperature=36), 0).level == RiskLevel.HIGH
    assert judge("fire", obs(temperature=31), 0).level == RiskLevel.MEDIUM
    assert judge("fire", obs(temperature=30), 0).level == RiskLevel.LOW


def test_very_low_humidity_jumps_low_to_high():
    j = judge("fire", obs(humidity=15), 0)
    assert j.level == RiskLevel.HIGH
    assert math.isclose(j.probability_percent, 35.0)


def test_very_low_humidity_jumps_medium_to_extreme():
    j = judge("fire", obs(temperature=32, humidity=15), 0)
    assert j.level == RiskLevel.EXTREME


def test_low_humidity_only_raises_to_medium():
    assert judge("fire", obs(humidity=30), 0).level == RiskLevel.MEDIUM
    assert judge("fire", obs(temperature=36, humidity=30), 0).level == RiskLevel.HIGH


def test_strong_wind_never_downgrades_extreme():
    j = judge("fire", obs(temperature=42, wind_speed=25), 0)
    assert j.level == RiskLevel.EXTREME


def test_strong_wind_escalation():
    assert judge("fire", obs(wind_speed=25), 0).level == RiskLevel.MEDIUM
    assert judge("fire", obs(temperature=31, wind_speed=25), 0).level == RiskLevel.HIGH


def test_moderate_wind_adds_weight_only():
    j = judge("fire", obs(wind_speed=15), 0)
    assert j.level == RiskLevel.LOW
    assert j.factors == ("Moderate winds",)
    assert math.isclose(j.probability_percent, 20.0)


def test_dry_conditions_need_clear_or_sunny_and_no_rain():
    assert "Dry conditions" in judge("fire", obs(condition_text="Sunny"), 0).factors
    assert "Dry conditions" in judge("fire", obs(condition_text="Mainly CLEAR"), 0).factors
    assert "Dry conditions" not in judge(
        "fire", obs(condition_text="Sunny", precipitation=0.1), 0).factors
    assert "Dry conditions" not in judge("fire", obs(condition_text="Overcast"), 0).factors


def test_fire_defaults_when_nothing_fires():
    j = judge("fire", obs(), 0)
    assert j.level == RiskLevel.LOW
    assert j.factors == DEFAULT_FACTORS["fire"]
    assert j.probability_percent == 10.0


# ---------------------------------------------------------------------------
# Flood escalation
# ---------------------------------------------------------------------------

def test_flood_precipitation_tiers():
    assert judge("flood", obs(precipitation=51), 0).level == RiskLevel.EXTREME
    assert judge("flood", obs(precipitation=21), 0).level == RiskLevel.HIGH
    j = judge("flood", obs(precipitation=10), 0)
    assert j.level == RiskLevel.MEDIUM
    assert math.isclose(j.probability_percent, 15.0)
    assert judge("flood", obs(precipitation=5), 0).level == RiskLevel.LOW


def test_storm_jumps_tiers():
    assert judge("flood", obs(condition_text="Thunderstorm"), 0).level == RiskLevel.HIGH
    assert judge("flood", obs(precipitation=10, condition_text="STORM"), 0).level == RiskLevel.EXTREME
    assert judge("flood", obs(precipitation=30, condition_text="thunder"), 0).level == RiskLevel.EXTREME


def test_pressure_and_humidity_add_weight_only():
    j = judge("flood", obs(pressure=990, humidity=95), 0)
    assert j.level == RiskLevel.LOW
    assert j.factors == ("Low atmospheric pressure", "Very high humidity")
    assert math.isclose(j.probability_percent, 30.0)


def test_wet_season_window():
    for month in range(12):
        j = judge("flood", obs(), month)
        if 4 <= month <= 8:
            assert j.factors == ("Wet season period",)
            assert math.isclose(j.probability_percent, 10.0)
        else:
            assert j.factors == DEFAULT_FACTORS["flood"]
            assert math.isclose(j.probability_percent, 5.0)


# ---------------------------------------------------------------------------
# Probability bounds / recommendations
# ---------------------------------------------------------------------------

def test_probabilities_always_within_bounds():
    for temp in (-10, 25, 33, 38, 45):
        for hum in (5, 30, 60, 95):
            for wind in (0, 15, 40):
                for rain in (0, 8, 30, 80):
                    for text in ("clear", "thunderstorm", "rain"):
                        a = classify_risk(obs(temperature=temp, humidity=hum,
                                              wind_speed=wind, precipitation=rain,
                                              pressure=980, condition_text=text),
                                          month=6)
                        for j in (a.fire, a.flood):
                            assert 0.0 <= j.probability_percent <= 95.0


def test_recommendation_follows_level():
    for hazard in ("fire", "flood"):
        for o in (obs(), obs(temperature=42, humidity=10),
                  obs(precipitation=60, condition_text="storm")):
            j = judge(hazard, o, 0)
            assert j.recommendation == RECOMMENDATIONS[hazard][j.level]


def test_recommendation_table_complete():
    for hazard in ("fire", "flood"):
        assert set(RECOMMENDATIONS[hazard]) == set(RiskLevel)


# ---------------------------------------------------------------------------
# Confidence, timestamp, month handling
# ---------------------------------------------------------------------------

def test_confidence_range_and_injected_rng():
    for seed in range(50):
        a = classify_risk(obs(), month=0, rng=random.Random(seed))
        assert isinstance(a.confidence, int)
        assert 75 <= a.confidence <= 95
    a1 = classify_risk(obs(), month=0, rng=random.Random(3))
    a2 = classify_risk(obs(), month=0, rng=random.Random(3))
    assert a1.confidence == a2.confidence


def test_month_defaults_to_clock():
    june = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
    a = classify_risk(obs(), now=june)
    assert a.generated_at == june
    assert "Wet season period" in a.flood.factors

    january = datetime(2026, 1, 15, tzinfo=timezone.utc)
    assert "Wet season period" not in classify_risk(obs(), now=january).flood.factors


def test_month_follows_clock_of_given_timestamp():
    # 1 May local (UTC+10) is still 30 April in UTC
    local_morning = datetime(2026, 5, 1, 0, 30, tzinfo=timezone(timedelta(hours=10)))
    assert "Wet season period" in classify_risk(obs(), now=local_morning).flood.factors
    as_utc = local_morning.astimezone(timezone.utc)
    assert "Wet season period" not in classify_risk(obs(), now=as_utc).flood.factors


def test_month_out_of_range():
    with pytest.raises(ValueError, match="month"):
        classify_risk(obs(), month=12)


def test_nan_propagates_without_error():
    a = classify_risk(obs(temperature=float("nan")), month=0)
    assert a.fire.level == RiskLevel.LOW


def test_to_dict_shape():
    d = classify_risk(obs(temperature=42), month=0,
                      now=datetime(2026, 3, 1, tzinfo=timezone.utc)).to_dict()
    assert d["fire"]["level"] == "Extreme"
    assert d["flood"]["level"] == "Low"
    assert d["generated_at"] == "2026-03-01T00:00:00+00:00"
    assert isinstance(d["fire"]["factors"], list)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def test_get_ruleset_known():
    assert len(get_ruleset("fire")) == 4
    assert len(get_ruleset("flood")) == 5


def test_get_ruleset_unknown():
    with pytest.raises(KeyError, match="Unknown hazard ruleset"):
        get_ruleset("earthquake")
