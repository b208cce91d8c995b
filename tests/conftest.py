"""Shared test fixtures for the video analysis email suite."""

import dataclasses
import os
import sys

import pytest

# Ensure project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override env vars BEFORE importing app modules so nothing talks to a real server
os.environ["SMTP_HOST"] = ""
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""

import sample_analyses  # noqa: E402
from email_models import (  # noqa: E402
    AnalysisEmailInput,
    HeatMapData,
    HeatMapZone,
    KeyMoment,
    MomentQuality,
    ProgressComparison,
)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@pytest.fixture()
def full_payload():
  return sample_analyses.sample_payload("full")


@pytest.fixture()
def minimal_payload():
  return sample_analyses.sample_payload("minimal")


@pytest.fixture()
def full_record():
  return sample_analyses.full_sample()


@pytest.fixture()
def minimal_record():
  return sample_analyses.minimal_sample()


@pytest.fixture()
def basic_record():
  """Score 78, three strengths, three improvements, nothing optional."""
  return AnalysisEmailInput(
      recipient_name="Sarah Johnson",
      analysis_id="abc-123",
      overall_score=78,
      analyzed_date="December 4, 2025",
      top_strengths=("s1", "s2", "s3"),
      top_improvements=("i1", "i2", "i3"),
  )


@pytest.fixture()
def make_record(basic_record):
  """Factory: the basic record with some fields replaced."""

  def _make(**changes):
    return dataclasses.replace(basic_record, **changes)

  return _make


# ---------------------------------------------------------------------------
# Nested parts
# ---------------------------------------------------------------------------

def make_moments(count, quality=MomentQuality.GOOD, shot_type="Dink"):
  return tuple(
      KeyMoment(
          timestamp=f"{i}:00",
          quality=quality,
          description=f"moment {i}",
          type=shot_type,
      )
      for i in range(count)
  )


def make_zones(count):
  return tuple(
      HeatMapZone(position=f"Zone {i}", coverage=10 * i, quality=80)
      for i in range(count)
  )


@pytest.fixture()
def moments():
  return make_moments


@pytest.fixture()
def zones():
  return make_zones


@pytest.fixture()
def heat_map():
  return HeatMapData(zones=make_zones(9))


@pytest.fixture()
def progress():
  return ProgressComparison(previous_score=65, improvement=13, milestones=("First 75+",))
