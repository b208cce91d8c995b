"""Tests for email_models.from_dict normalization."""

import dataclasses

import pytest

from email_models import AnalysisEmailInput, KeyMoment, MomentQuality


class TestFromDict:
  def test_camel_case_full_payload(self, full_payload):
    record = AnalysisEmailInput.from_dict(full_payload)
    assert record.recipient_name == "Sarah Johnson"
    assert record.overall_score == 78.0
    assert record.total_shots == 147
    assert record.duration == 1860
    assert record.technical_scores.paddle_angle == 85
    assert record.technical_scores.positioning == 82
    assert len(record.key_moments) == 6
    assert record.key_moments[1].quality is MomentQuality.NEEDS_IMPROVEMENT
    assert len(record.heat_map_data.zones) == 9
    assert record.progress_comparison.previous_score == 71
    assert isinstance(record.top_strengths, tuple)
    assert isinstance(record.progress_comparison.milestones, tuple)

  def test_snake_case_keys(self):
    record = AnalysisEmailInput.from_dict({
        "recipient_name": "Ann Lee",
        "analysis_id": "a1",
        "overall_score": "91",
        "analyzed_date": "Jan 1",
        "top_strengths": ["x"],
        "technical_scores": {"follow_through": 70},
    })
    assert record.overall_score == 91.0
    assert record.top_strengths == ("x",)
    assert record.top_improvements == ()
    assert record.technical_scores.follow_through == 70
    assert record.technical_scores.paddle_angle is None

  def test_minimal_payload_leaves_optionals_unset(self, minimal_payload):
    record = AnalysisEmailInput.from_dict(minimal_payload)
    assert record.total_shots is None
    assert record.key_moments is None
    assert record.heat_map_data is None
    assert record.progress_comparison is None
    assert record.recommendations is None

  def test_zero_is_present(self, minimal_payload):
    minimal_payload["totalShots"] = 0
    assert AnalysisEmailInput.from_dict(minimal_payload).total_shots == 0

  @pytest.mark.parametrize("key", ["recipientName", "analysisId", "overallScore", "analyzedDate"])
  def test_missing_required_key(self, minimal_payload, key):
    del minimal_payload[key]
    with pytest.raises(ValueError, match=key):
      AnalysisEmailInput.from_dict(minimal_payload)

  def test_non_numeric_score(self, minimal_payload):
    minimal_payload["overallScore"] = "great"
    with pytest.raises(ValueError):
      AnalysisEmailInput.from_dict(minimal_payload)

  def test_not_an_object(self):
    with pytest.raises(ValueError):
      AnalysisEmailInput.from_dict(["nope"])

  def test_malformed_key_moments(self, minimal_payload):
    minimal_payload["keyMoments"] = "not a list"
    with pytest.raises(ValueError):
      AnalysisEmailInput.from_dict(minimal_payload)

  def test_unknown_quality_falls_back_to_good(self, minimal_payload):
    minimal_payload["keyMoments"] = [
        {"timestamp": "1:00", "quality": "legendary", "description": "d", "type": "Lob"},
    ]
    record = AnalysisEmailInput.from_dict(minimal_payload)
    assert record.key_moments[0].quality is MomentQuality.GOOD

  def test_record_is_frozen(self, minimal_record):
    with pytest.raises(dataclasses.FrozenInstanceError):
      minimal_record.overall_score = 10

  @pytest.mark.parametrize("field", ["topStrengths", "topImprovements", "recommendations"])
  @pytest.mark.parametrize("value", [5, "Great dinks", {"a": 1}])
  def test_list_fields_must_be_lists(self, minimal_payload, field, value):
    minimal_payload[field] = value
    with pytest.raises(ValueError, match=field):
      AnalysisEmailInput.from_dict(minimal_payload)

  def test_milestones_must_be_a_list(self, minimal_payload):
    minimal_payload["progressComparison"] = {
        "previousScore": 60, "improvement": 5, "milestones": "First win"}
    with pytest.raises(ValueError, match="milestones"):
      AnalysisEmailInput.from_dict(minimal_payload)

  def test_null_moment_text_is_blank(self, minimal_payload):
    minimal_payload["keyMoments"] = [
        {"timestamp": None, "quality": "good", "description": None, "type": None},
    ]
    moment = AnalysisEmailInput.from_dict(minimal_payload).key_moments[0]
    assert (moment.timestamp, moment.description, moment.type) == ("", "", "")


class TestKeyMoment:
  def test_string_quality_is_normalized(self):
    moment = KeyMoment("0:12", "excellent", "Clean drop", "Drop Shot")
    assert moment.quality is MomentQuality.EXCELLENT

  def test_unknown_string_quality_is_good(self):
    assert KeyMoment("0:12", "meh", "d", "Lob").quality is MomentQuality.GOOD
