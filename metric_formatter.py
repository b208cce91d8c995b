"""Score classification and technical-score synthesis.

Everything here is pure: same inputs, same outputs. The only source of
variety is the ``random.Random`` instance the caller passes in.
"""

from __future__ import annotations

import hashlib
import math
import random
from dataclasses import dataclass
from typing import Optional

from email_models import TechnicalScores

GREEN = "#10B981"
BLUE = "#3B82F6"
AMBER = "#F59E0B"
RED = "#EF4444"
NEUTRAL = "#E5E7EB"


@dataclass(frozen=True)
class ScoreTier:
  key: str
  color: str
  label: str
  icon: str


EXCELLENT = ScoreTier("excellent", GREEN, "Excellent Performance!", "\U0001F31F")
VERY_GOOD = ScoreTier("very_good", BLUE, "Very Good!", "\U0001F4AA")
GOOD = ScoreTier("good", AMBER, "Good Progress!", "\U0001F4C8")
NEEDS_WORK = ScoreTier("needs_work", RED, "Let's Improve!", "\U0001F3AF")

# (metric key, display label, scale factor, jitter span)
DASHBOARD_METRICS = (
    ("paddle_angle", "Paddle Angle", 0.90, 10),
    ("follow_through", "Follow Through", 0.95, 10),
    ("body_rotation", "Body Rotation", 0.88, 12),
    ("footwork", "Footwork", 0.92, 8),
)


def clamp_score(score: float) -> float:
  """Clamp a score into [0, 100]. NaN is treated as 0."""
  if score is None or math.isnan(score):
    return 0.0
  return max(0.0, min(100.0, float(score)))


def display_score(score: float) -> int:
  """Clamp and round a score for display."""
  return int(round(clamp_score(score)))


def classify(score: float) -> ScoreTier:
  """Map a 0-100 score to its tier (>=85, 70-84, 50-69, <50)."""
  s = clamp_score(score)
  if s >= 85:
    return EXCELLENT
  elif s >= 70:
    return VERY_GOOD
  elif s >= 50:
    return GOOD
  return NEEDS_WORK


def gauge_color(value: float) -> str:
  """Coarser three-way split used only by the circular gauges."""
  v = clamp_score(value)
  if v >= 80:
    return GREEN
  elif v >= 60:
    return AMBER
  return RED


def gauge_icon(value: float) -> str:
  v = clamp_score(value)
  if v >= 80:
    return "✅"
  elif v >= 60:
    return "⚡"
  return "\U0001F3AF"


def seed_for(analysis_id: str) -> int:
  """Stable integer seed derived from an analysis id."""
  digest = hashlib.sha256(analysis_id.encode("utf-8")).hexdigest()
  return int(digest[:16], 16)


def synthesize_technical_scores(
    overall_score: float,
    provided: Optional[TechnicalScores],
    rng: random.Random,
) -> dict[str, int]:
  """Resolve the four dashboard metrics, filling gaps from the overall score.

  A missing metric becomes floor(overall * factor + jitter), clamped to
  [0, 100]. One jitter draw is consumed per metric whether or not the caller
  supplied it, so the draws for the other metrics never shift.

  Args:
    overall_score: The overall 0-100 score.
    provided: Caller-supplied sub-scores, or None.
    rng: Random source; seed it for reproducible output.
  Returns:
    Dict of metric key -> integer score, in dashboard order.
  """
  overall = clamp_score(overall_score)
  scores = {}
  for key, _label, factor, jitter in DASHBOARD_METRICS:
    draw = rng.random() * jitter
    given = getattr(provided, key) if provided is not None else None
    if given is not None:
      scores[key] = display_score(given)
    else:
      scores[key] = int(clamp_score(math.floor(overall * factor + draw)))
  return scores


def format_duration(seconds: int) -> str:
  """Format seconds as M:SS."""
  total = max(0, int(seconds))
  return f"{total // 60}:{total % 60:02d}"
