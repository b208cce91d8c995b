"""Tests for metric_formatter: tiers, gauge colours and score synthesis."""

import math
import random

import pytest

import metric_formatter
from email_models import TechnicalScores
from metric_formatter import (
    AMBER,
    GREEN,
    RED,
    classify,
    clamp_score,
    display_score,
    format_duration,
    gauge_color,
    gauge_icon,
    seed_for,
    synthesize_technical_scores,
)


class FixedRandom:
  """Stands in for random.Random; always returns the same draw."""

  def __init__(self, value):
    self.value = value
    self.calls = 0

  def random(self):
    self.calls += 1
    return self.value


class TestClassify:
  @pytest.mark.parametrize("score,key", [
      (100, "excellent"),
      (85, "excellent"),
      (84, "very_good"),
      (84.9, "very_good"),
      (70, "very_good"),
      (69.99, "good"),
      (50, "good"),
      (49, "needs_work"),
      (0, "needs_work"),
  ])
  def test_boundaries(self, score, key):
    assert classify(score).key == key

  def test_every_score_maps_to_one_of_four_tiers(self):
    tiers = {metric_formatter.EXCELLENT, metric_formatter.VERY_GOOD,
             metric_formatter.GOOD, metric_formatter.NEEDS_WORK}
    for score in range(0, 101):
      assert classify(score) in tiers

  def test_out_of_range_is_clamped(self):
    assert classify(150).key == "excellent"
    assert classify(-10).key == "needs_work"

  def test_nan_is_lowest_tier(self):
    assert classify(float("nan")).key == "needs_work"

  def test_tier_fields(self):
    tier = classify(78)
    assert tier.color == "#3B82F6"
    assert tier.label == "Very Good!"


class TestClampAndDisplay:
  def test_clamp(self):
    assert clamp_score(-1) == 0.0
    assert clamp_score(101) == 100.0
    assert clamp_score(55.5) == 55.5
    assert clamp_score(None) == 0.0

  def test_display_rounds(self):
    assert display_score(77.6) == 78
    assert display_score(250) == 100


class TestGauge:
  @pytest.mark.parametrize("value,color", [
      (100, GREEN), (80, GREEN), (79, AMBER), (60, AMBER), (59, RED), (0, RED),
  ])
  def test_color_split(self, value, color):
    assert gauge_color(value) == color

  def test_icon_follows_color_split(self):
    assert gauge_icon(80) == "✅"
    assert gauge_icon(60) == "⚡"
    assert gauge_icon(10) == "\U0001F3AF"


class TestSynthesizeTechnicalScores:
  def test_formula_with_fixed_draw(self):
    scores = synthesize_technical_scores(78, None, FixedRandom(0.5))
    assert scores == {
        "paddle_angle": 75,
        "follow_through": 79,
        "body_rotation": 74,
        "footwork": 75,
    }

  def test_results_are_clamped(self):
    scores = synthesize_technical_scores(100, None, FixedRandom(0.999))
    assert scores["follow_through"] == 100
    assert all(0 <= v <= 100 for v in scores.values())

  def test_provided_values_used_and_clamped(self):
    provided = TechnicalScores(paddle_angle=82, footwork=140)
    scores = synthesize_technical_scores(78, provided, FixedRandom(0.5))
    assert scores["paddle_angle"] == 82
    assert scores["footwork"] == 100
    assert scores["follow_through"] == 79

  def test_one_draw_per_metric_even_when_provided(self):
    rng = FixedRandom(0.3)
    synthesize_technical_scores(60, TechnicalScores(paddle_angle=1, follow_through=2), rng)
    assert rng.calls == 4

  def test_supplying_one_metric_does_not_shift_others(self):
    synthesized = synthesize_technical_scores(70, None, random.Random(7))
    partial = synthesize_technical_scores(
        70, TechnicalScores(paddle_angle=12), random.Random(7))
    assert partial["paddle_angle"] == 12
    for key in ("follow_through", "body_rotation", "footwork"):
      assert partial[key] == synthesized[key]

  def test_same_seed_same_scores(self):
    a = synthesize_technical_scores(66, None, random.Random(seed_for("abc")))
    b = synthesize_technical_scores(66, None, random.Random(seed_for("abc")))
    assert a == b

  def test_nan_overall(self):
    scores = synthesize_technical_scores(math.nan, None, FixedRandom(0.0))
    assert set(scores.values()) == {0}


class TestSeedFor:
  def test_stable_and_distinct(self):
    assert seed_for("analysis-1") == seed_for("analysis-1")
    assert seed_for("analysis-1") != seed_for("analysis-2")
    assert 0 <= seed_for("x") < 2 ** 64


class TestFormatDuration:
  @pytest.mark.parametrize("seconds,expected", [
      (1860, "31:00"), (1820, "30:20"), (5, "0:05"), (0, "0:00"), (-30, "0:00"),
  ])
  def test_format(self, seconds, expected):
    assert format_duration(seconds) == expected
