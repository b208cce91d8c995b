"""Sample analysis records for previews, the render script and tests.

The payloads use the camelCase shape the web application posts.
"""

from __future__ import annotations

import copy

from email_models import AnalysisEmailInput

FULL_PAYLOAD = {
    "recipientName": "Sarah Johnson",
    "analysisId": "test-analysis-123",
    "overallScore": 78,
    "topStrengths": [
        "Excellent paddle angle control during serves - consistently maintaining 45-60 degree angle for optimal power",
        "Strong court positioning and kitchen line awareness - maintaining proper distance 95% of the time",
        "Very good body rotation during forehand drives - generating 85% of maximum potential power",
    ],
    "topImprovements": [
        "Follow-through needs work on backhand shots - currently stopping mid-swing on 60% of attempts",
        "Footwork could be more dynamic - often flat-footed during opponent attacks",
        "Inconsistent ready position between shots - paddle down 40% of the time",
    ],
    "totalShots": 147,
    "duration": 1860,
    "analyzedDate": "December 4, 2025",
    "baseUrl": "https://mindful-champion-2hzb4j.abacusai.app",
    "videoThumbnail": "https://images.unsplash.com/photo-1554068865-24cecd4e34b8?w=800&h=450&fit=crop",
    "technicalScores": {
        "paddleAngle": 85,
        "followThrough": 72,
        "bodyRotation": 76,
        "footwork": 68,
        "positioning": 82,
    },
    "keyMoments": [
        {
            "timestamp": "03:45",
            "quality": "excellent",
            "description": "Perfect third-shot drop with ideal trajectory and placement. This forced your opponent into a defensive position.",
            "type": "Third Shot Drop",
        },
        {
            "timestamp": "08:12",
            "quality": "needs-improvement",
            "description": "Backhand return lacked follow-through, resulting in a weak shot that landed mid-court. Extend your arm fully after contact.",
            "type": "Backhand Return",
        },
        {
            "timestamp": "15:30",
            "quality": "excellent",
            "description": "Outstanding dink exchange! You kept soft hands and precise placement for 8 consecutive shots.",
            "type": "Dink Rally",
        },
        {
            "timestamp": "19:47",
            "quality": "good",
            "description": "Solid overhead smash with good power, though positioning could have been slightly deeper.",
            "type": "Overhead Smash",
        },
        {
            "timestamp": "24:15",
            "quality": "needs-improvement",
            "description": "Footwork was slow on this cross-court shot. Work on split-step timing.",
            "type": "Cross-Court Drive",
        },
        {
            "timestamp": "28:33",
            "quality": "excellent",
            "description": "Beautiful erne! You anticipated the opponent's shot and set up an aggressive put-away.",
            "type": "Erne",
        },
    ],
    "heatMapData": {
        "zones": [
            {"position": "Left Front", "coverage": 45, "quality": 68},
            {"position": "Center Front", "coverage": 82, "quality": 85},
            {"position": "Right Front", "coverage": 38, "quality": 62},
            {"position": "Left Mid", "coverage": 65, "quality": 72},
            {"position": "Center Mid", "coverage": 88, "quality": 90},
            {"position": "Right Mid", "coverage": 58, "quality": 70},
            {"position": "Left Back", "coverage": 28, "quality": 55},
            {"position": "Center Back", "coverage": 42, "quality": 65},
            {"position": "Right Back", "coverage": 25, "quality": 50},
        ],
    },
    "progressComparison": {
        "previousScore": 71,
        "improvement": 7,
        "milestones": [
            "First time scoring above 75!",
            "Improved paddle angle by 12 points",
            "Reduced unforced errors by 35%",
            "Maintained kitchen line discipline in 95% of rallies",
        ],
    },
    "recommendations": [
        "Practice backhand follow-through drills for 10 minutes daily. Focus on extending your arm fully after contact.",
        "Work on lateral movement patterns with side-to-side shuffle drills to improve court coverage.",
        "Use the split-step drill before each opponent contact to improve your reaction time.",
        "Watch the pro comparison video to see optimal body rotation during serves.",
    ],
    "videoClipUrl": "https://mindful-champion-2hzb4j.abacusai.app/clips/your-backhand-technique",
    "proVideoUrl": "https://mindful-champion-2hzb4j.abacusai.app/clips/pro-backhand-demo",
}

MINIMAL_PAYLOAD = {
    "recipientName": "John Doe",
    "analysisId": "minimal-123",
    "overallScore": 65,
    "topStrengths": ["Good serve placement", "Consistent returns"],
    "topImprovements": ["Work on footwork", "Improve backhand"],
    "analyzedDate": "December 4, 2025",
}

VARIANTS = {
    "full": FULL_PAYLOAD,
    "minimal": MINIMAL_PAYLOAD,
}


def sample_payload(variant: str = "full") -> dict:
  """Return a fresh copy of a sample payload.

  Raises:
    KeyError: if the variant is unknown.
  """
  return copy.deepcopy(VARIANTS[variant])


def full_sample() -> AnalysisEmailInput:
  return AnalysisEmailInput.from_dict(sample_payload("full"))


def minimal_sample() -> AnalysisEmailInput:
  return AnalysisEmailInput.from_dict(sample_payload("minimal"))
