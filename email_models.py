"""Data models for the video analysis email."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class MomentQuality(Enum):
    """Quality rating attached to a key moment."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"

    @classmethod
    def parse(cls, value: Any) -> "MomentQuality":
        """Parse a raw quality string; unknown values fall back to GOOD."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GOOD


@dataclass(frozen=True)
class TechnicalScores:
    """Per-technique sub-scores (0-100). Any of them may be missing."""

    paddle_angle: Optional[float] = None
    follow_through: Optional[float] = None
    body_rotation: Optional[float] = None
    footwork: Optional[float] = None
    positioning: Optional[float] = None


@dataclass(frozen=True)
class KeyMoment:
    """A timestamped highlight from the analyzed video."""

    timestamp: str
    quality: MomentQuality
    description: str
    type: str

    def __post_init__(self):
        if not isinstance(self.quality, MomentQuality):
            object.__setattr__(self, "quality", MomentQuality.parse(self.quality))


@dataclass(frozen=True)
class HeatMapZone:
    """One cell of the court-coverage grid."""

    position: str
    coverage: float
    quality: float


@dataclass(frozen=True)
class HeatMapData:
    zones: tuple[HeatMapZone, ...] = ()


@dataclass(frozen=True)
class ProgressComparison:
    """Comparison against the player's previous analysis."""

    previous_score: Optional[float] = None
    improvement: Optional[float] = None
    milestones: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisEmailInput:
    """Everything the video analysis email needs, supplied by the caller."""

    recipient_name: str
    analysis_id: str
    overall_score: float
    analyzed_date: str  # already formatted for display
    top_strengths: tuple[str, ...] = ()
    top_improvements: tuple[str, ...] = ()
    total_shots: Optional[int] = None
    duration: Optional[int] = None  # seconds
    base_url: Optional[str] = None
    video_thumbnail: Optional[str] = None
    technical_scores: Optional[TechnicalScores] = None
    key_moments: Optional[tuple[KeyMoment, ...]] = None
    heat_map_data: Optional[HeatMapData] = None
    progress_comparison: Optional[ProgressComparison] = None
    recommendations: Optional[tuple[str, ...]] = None
    video_clip_url: Optional[str] = None
    pro_video_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "AnalysisEmailInput":
        """Build an input record from a JSON payload.

        Accepts the camelCase keys the web app sends (``recipientName``,
        ``heatMapData``...) as well as snake_case keys.

        Raises:
          ValueError: if a required key is missing or the payload is not a dict.
        """
        if not isinstance(payload, dict):
            raise ValueError("payload must be a JSON object")

        def required(camel: str, snake: str) -> Any:
            value = _lookup(payload, camel, snake)
            if value is None:
                raise ValueError(f"missing required field: {camel}")
            return value

        return cls(
            recipient_name=str(required("recipientName", "recipient_name")),
            analysis_id=str(required("analysisId", "analysis_id")),
            overall_score=_to_number(required("overallScore", "overall_score"), "overallScore"),
            analyzed_date=str(required("analyzedDate", "analyzed_date")),
            top_strengths=_str_tuple(_lookup(payload, "topStrengths", "top_strengths"), "topStrengths"),
            top_improvements=_str_tuple(_lookup(payload, "topImprovements", "top_improvements"), "topImprovements"),
            total_shots=_optional_int(_lookup(payload, "totalShots", "total_shots")),
            duration=_optional_int(_lookup(payload, "duration", "duration")),
            base_url=_lookup(payload, "baseUrl", "base_url"),
            video_thumbnail=_lookup(payload, "videoThumbnail", "video_thumbnail"),
            technical_scores=_technical_scores(
                _lookup(payload, "technicalScores", "technical_scores")),
            key_moments=_key_moments(_lookup(payload, "keyMoments", "key_moments")),
            heat_map_data=_heat_map(_lookup(payload, "heatMapData", "heat_map_data")),
            progress_comparison=_progress(
                _lookup(payload, "progressComparison", "progress_comparison")),
            recommendations=_optional_str_tuple(payload.get("recommendations"), "recommendations"),
            video_clip_url=_lookup(payload, "videoClipUrl", "video_clip_url"),
            pro_video_url=_lookup(payload, "proVideoUrl", "pro_video_url"),
        )


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def _lookup(payload: dict, camel: str, snake: str) -> Any:
    if camel in payload:
        return payload[camel]
    return payload.get(snake)


def _to_number(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _optional_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    return _to_number(value, name)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(_to_number(value, "count"))


def _str_tuple(values: Any, name: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"{name} must be a list of strings, got {values!r}")
    return tuple(str(v) for v in values)


def _optional_str_tuple(values: Any, name: str) -> Optional[tuple[str, ...]]:
    if values is None:
        return None
    return _str_tuple(values, name)


def _technical_scores(raw: Any) -> Optional[TechnicalScores]:
    if not isinstance(raw, dict):
        return None
    return TechnicalScores(
        paddle_angle=_optional_number(_lookup(raw, "paddleAngle", "paddle_angle"), "paddleAngle"),
        follow_through=_optional_number(_lookup(raw, "followThrough", "follow_through"), "followThrough"),
        body_rotation=_optional_number(_lookup(raw, "bodyRotation", "body_rotation"), "bodyRotation"),
        footwork=_optional_number(raw.get("footwork"), "footwork"),
        positioning=_optional_number(raw.get("positioning"), "positioning"),
    )


def _key_moments(raw: Any) -> Optional[tuple[KeyMoment, ...]]:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)) or not all(isinstance(m, dict) for m in raw):
        raise ValueError("keyMoments must be a list of objects")
    return tuple(
        KeyMoment(
            timestamp=str(m.get("timestamp") or ""),
            quality=MomentQuality.parse(m.get("quality")),
            description=str(m.get("description") or ""),
            type=str(m.get("type") or ""),
        )
        for m in raw
    )


def _heat_map(raw: Any) -> Optional[HeatMapData]:
    if not isinstance(raw, dict):
        return None
    raw_zones = raw.get("zones") or []
    if not isinstance(raw_zones, (list, tuple)) or not all(isinstance(z, dict) for z in raw_zones):
        raise ValueError("heatMapData.zones must be a list of objects")
    zones = tuple(
        HeatMapZone(
            position=str(z.get("position", "")),
            coverage=_to_number(z.get("coverage", 0), "coverage"),
            quality=_to_number(z.get("quality", 0), "quality"),
        )
        for z in raw_zones
    )
    return HeatMapData(zones=zones)


def _progress(raw: Any) -> Optional[ProgressComparison]:
    if not isinstance(raw, dict):
        return None
    return ProgressComparison(
        previous_score=_optional_number(_lookup(raw, "previousScore", "previous_score"), "previousScore"),
        improvement=_optional_number(raw.get("improvement"), "improvement"),
        milestones=_str_tuple(raw.get("milestones"), "milestones"),
    )
