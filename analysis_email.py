"""Assembles the "your video analysis is ready" email.

The document is built from an ordered tuple of section renderers. Each one
takes the render context and returns an HTML fragment, or None when the
record has nothing for it to show. Sections never look at each other.
"""

from __future__ import annotations

import datetime
import logging
import random
from dataclasses import dataclass
from html import escape
from typing import Callable, Optional
from urllib.parse import quote

from coach_messages import pick_message
from email_components import (
    BRAND_CYAN,
    BRAND_GRADIENT,
    BRAND_TEAL,
    FONT_STACK,
    MOMENT_STYLES,
    callout,
    court_diagram_svg,
    format_list,
    gauge_grid,
    heat_map_grid,
    heat_map_legend,
    key_moment_card,
    metric_card,
    numbered_list,
    outlook_button,
    overflow_notice,
    score_badge,
    section_heading,
    section_table,
)
from email_models import AnalysisEmailInput
from metric_formatter import (
    DASHBOARD_METRICS,
    ScoreTier,
    clamp_score,
    classify,
    display_score,
    format_duration,
    seed_for,
    synthesize_technical_scores,
)

DEFAULT_BASE_URL = "https://mindful-champion-2hzb4j.abacusai.app"

SUBJECT = "\U0001F3BE Your Video Analysis is Ready!"
TITLE = "Your Video Analysis is Ready! \U0001F3BE"

MAX_STRENGTHS = 3
MAX_IMPROVEMENTS = 3
MAX_KEY_MOMENTS = 5
MAX_RECOMMENDATIONS = 4

SECONDARY_LINKS = (
    ("\U0001F4AC Ask Coach Kai", "/train/coach"),
    ("\U0001F3CB️ Practice Drills", "/train/drills"),
    ("\U0001F4CA Track Progress", "/progress"),
    ("\U0001F3A5 Upload Another", "/train/video"),
)

FOOTER_LINKS = (
    ("Video Library", "/train/video"),
    ("Training Programs", "/train/programs"),
    ("Settings", "/settings"),
)


@dataclass(frozen=True)
class EmailContext:
  """Resolved, render-ready view of one analysis record."""
  data: AnalysisEmailInput
  first_name: str
  base_url: str
  analysis_url: str
  score: float
  tier: ScoreTier
  technical_scores: dict[str, int]
  coach_message: str
  progress_delta: Optional[int]
  year: int

  def link(self, path: str) -> str:
    return f"{self.base_url}{path}"


def first_name(recipient_name: str) -> str:
  """First whitespace-separated token, or the full name if there is none."""
  parts = recipient_name.split()
  return parts[0] if parts else recipient_name


def resolve_base_url(base_url: Optional[str]) -> str:
  return (base_url or DEFAULT_BASE_URL).rstrip("/")


def analysis_url(base_url: str, analysis_id: str) -> str:
  """Deep link to the analysis in the web app."""
  return f"{base_url}/train/video?analysis={quote(analysis_id, safe='')}"


def _progress_delta(data: AnalysisEmailInput) -> Optional[int]:
  progress = data.progress_comparison
  if progress is None or progress.previous_score is None:
    return None
  delta = int(round(clamp_score(data.overall_score) - clamp_score(progress.previous_score)))
  if progress.improvement is not None and round(progress.improvement) != delta:
    logging.warning(
        "Analysis %s: supplied improvement %s disagrees with computed delta %d; using %d",
        data.analysis_id, progress.improvement, delta, delta)
  return delta


def build_context(
    data: AnalysisEmailInput,
    *,
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
    year: Optional[int] = None,
) -> EmailContext:
  """Resolve everything the sections need from one input record.

  The random generator is seeded from ``seed`` when given, otherwise from
  the analysis id. Draw order is fixed: four technical-score jitter draws,
  then the coach message draw.

  Args:
    data: The analysis record.
    seed: Optional explicit seed.
    message_index: Pick a specific coach message instead of drawing one.
    year: Copyright year for the footer; defaults to the current year.
  Returns:
    The frozen render context.
  """
  rng = random.Random(seed_for(data.analysis_id) if seed is None else seed)
  name = first_name(data.recipient_name)
  base = resolve_base_url(data.base_url)
  technical = synthesize_technical_scores(data.overall_score, data.technical_scores, rng)
  message = pick_message(name, data.overall_score, rng=rng, index=message_index)
  return EmailContext(
      data=data,
      first_name=name,
      base_url=base,
      analysis_url=analysis_url(base, data.analysis_id),
      score=clamp_score(data.overall_score),
      tier=classify(data.overall_score),
      technical_scores=technical,
      coach_message=message,
      progress_delta=_progress_delta(data),
      year=year or datetime.date.today().year,
  )


def dashboard_metrics(ctx: EmailContext) -> list[tuple[str, int]]:
  """(label, value) pairs for the four dashboard gauges, in display order."""
  return [(label, ctx.technical_scores[key]) for key, label, _f, _j in DASHBOARD_METRICS]


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def header_section(ctx: EmailContext) -> str:
  return f"""
    <table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">
      <tr>
        <td style="background:{BRAND_TEAL};background:{BRAND_GRADIENT};padding:48px 32px;text-align:center;">
          <div style="font-size:56px;margin-bottom:12px;">\U0001F3BE</div>
          <h1 style="margin:0 0 12px 0;color:#ffffff;font-size:30px;font-weight:800;line-height:1.2;">
            Your Video Analysis is Ready!
          </h1>
          <p style="margin:0;color:#ffffff;font-size:18px;opacity:0.95;">Hey {escape(ctx.first_name)}! \U0001F44B</p>
          <p style="margin:8px 0 0 0;color:#ffffff;font-size:15px;opacity:0.9;">
            Coach Kai has analyzed your game. Here is everything we found.
          </p>
        </td>
      </tr>
    </table>"""


def video_preview_section(ctx: EmailContext) -> str:
  """Thumbnail with play button, or a text-only fallback with a CTA."""
  url = escape(ctx.analysis_url, quote=True)
  thumbnail = ctx.data.video_thumbnail
  if thumbnail:
    inner = f"""
      <a href="{url}" style="display:block;text-decoration:none;">
        <img src="{escape(thumbnail, quote=True)}" alt="Your analyzed video" width="536"
             style="display:block;width:100%;max-width:536px;height:auto;border:0;border-radius:12px;">
      </a>
      <table style="margin:16px auto 0 auto;" cellpadding="0" cellspacing="0" role="presentation">
        <tr>
          <td width="64" height="64" align="center" valign="middle"
              style="width:64px;height:64px;background:{BRAND_TEAL};border-radius:32px;">
            <a href="{url}" style="color:#ffffff;font-size:26px;text-decoration:none;line-height:64px;">&#9654;</a>
          </td>
        </tr>
      </table>"""
    return section_table(inner, "padding:32px 32px 0 32px;text-align:center;")

  inner = (
      '<table style="width:100%;background:#F0FDFA;border:2px dashed #99F6E4;border-radius:12px;"'
      ' cellpadding="32" cellspacing="0" role="presentation"><tr><td align="center">'
      '<div style="font-size:48px;margin-bottom:8px;">\U0001F3A5</div>'
      '<p style="margin:0 0 20px 0;font-size:18px;font-weight:700;color:#0F766E;">Your Video Analysis</p>'
      + outlook_button(ctx.analysis_url, "\U0001F3AC Watch Analysis →", width=240)
      + "</td></tr></table>"
  )
  return section_table(inner, "padding:32px 32px 0 32px;")


def dashboard_section(ctx: EmailContext) -> str:
  inner = (
      section_heading(
          "\U0001F4CA Performance Dashboard",
          f"Analyzed {escape(ctx.data.analyzed_date)}")
      + score_badge(ctx.score)
      + gauge_grid(dashboard_metrics(ctx))
      + callout(
          "\U0001F4A1 <strong>Color guide:</strong> green is 80 and above, amber is 60 to 79,"
          " red marks a focus area below 60.")
  )
  return section_table(inner, "padding:40px 32px;background:#F9FAFB;")


def metric_cards_section(ctx: EmailContext) -> Optional[str]:
  data = ctx.data
  if data.total_shots is None and data.duration is None:
    return None
  cards = []
  if data.total_shots is not None:
    cards.append(metric_card("Total Shots", str(max(0, data.total_shots)), "Detected"))
  if data.duration is not None:
    cards.append(metric_card("Duration", format_duration(data.duration), "Minutes"))
  cards.append(metric_card("Analysis Type", "Full", "AI-Powered"))
  inner = (
      '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      f'<tr>{"".join(cards)}</tr></table>'
  )
  return section_table(inner, "padding:24px 24px 0 24px;")


def court_section(ctx: EmailContext) -> str:
  """Heat map plus reference diagram when zones exist, else the court layout."""
  heat_map = ctx.data.heat_map_data
  diagram = f'<div style="text-align:center;">{court_diagram_svg()}</div>'
  if heat_map is not None and heat_map.zones:
    inner = (
        section_heading("\U0001F5FA️ Court Coverage Heat Map",
                        "Where you spent your time on court and how well you played there")
        + heat_map_grid(heat_map.zones)
        + heat_map_legend()
        + '<div style="margin-top:32px;">'
        + section_heading("\U0001F4D0 Court Reference Diagram")
        + diagram
        + "</div>"
    )
  else:
    inner = (
        section_heading("\U0001F3BE Pickleball Court Layout",
                        "Know your zones: the Kitchen is the non-volley zone next to the net")
        + diagram
        + callout(
            "\U0001F4A1 <strong>Pro tip:</strong> stay out of the Kitchen unless the ball"
            " bounces there first. Most points are won at the Kitchen line.",
            color="#92400E", accent="#F59E0B", background="#FEF3C7")
    )
  return section_table(inner, "padding:40px 32px;")


def key_moments_section(ctx: EmailContext) -> Optional[str]:
  moments = ctx.data.key_moments
  if not moments:
    return None
  cards = "".join(key_moment_card(m) for m in moments[:MAX_KEY_MOMENTS])
  inner = (
      section_heading("⭐ Key Moments Analysis", "Timestamped highlights from your session")
      + '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      + cards
      + "</table>"
      + overflow_notice(len(moments) - MAX_KEY_MOMENTS, "moment")
  )
  return section_table(inner, "padding:40px 32px;background:#F9FAFB;")


def _comparison_column(title: str, caption: str, url: str, label: str, accent: str) -> str:
  return f"""
    <td style="padding:8px;vertical-align:top;" width="50%">
      <table style="width:100%;background:#ffffff;border:2px solid {accent};border-radius:12px;" cellpadding="20" cellspacing="0" role="presentation">
        <tr><td align="center">
          <p style="margin:0 0 6px 0;font-size:16px;font-weight:700;color:#111827;">{title}</p>
          <p style="margin:0 0 16px 0;font-size:13px;color:#6B7280;">{caption}</p>
          {outlook_button(url, label, background=accent, width=200, height=44, font_size=14)}
        </td></tr>
      </table>
    </td>"""


def video_comparison_section(ctx: EmailContext) -> Optional[str]:
  clip, pro = ctx.data.video_clip_url, ctx.data.pro_video_url
  if not clip and not pro:
    return None
  columns = []
  if clip:
    columns.append(_comparison_column(
        "\U0001F4F9 What You Did", "Your shot from the analyzed video",
        clip, "▶ Watch Your Shot", "#3B82F6"))
  if pro:
    columns.append(_comparison_column(
        "⭐ What to Try Next", "The same shot from a pro player",
        pro, "▶ Watch Pro Demo", "#10B981"))
  inner = (
      section_heading("\U0001F3AC Before &amp; After", "Compare your technique with the pros")
      + '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      + f'<tr>{"".join(columns)}</tr></table>'
      + callout("\U0001F4A1 <strong>Tip:</strong> watch both clips back to back and focus on"
                " paddle position at contact.")
  )
  return section_table(inner, "padding:40px 32px;")


def _capped_list_section(title: str, items: tuple[str, ...], cap: int, kind: str,
                         noun: str, background: str) -> str:
  inner = (
      section_heading(title, center=False)
      + '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      + format_list(items[:cap], kind)
      + "</table>"
      + overflow_notice(len(items) - cap, noun)
  )
  return section_table(inner, f"padding:32px;background:{background};")


def strengths_section(ctx: EmailContext) -> str:
  return _capped_list_section(
      "\U0001F4AA Your Top Strengths", ctx.data.top_strengths, MAX_STRENGTHS,
      "strengths", "strength", "#F0FDF4")


def improvements_section(ctx: EmailContext) -> str:
  return _capped_list_section(
      "\U0001F3AF Priority Focus Areas", ctx.data.top_improvements, MAX_IMPROVEMENTS,
      "improvements", "focus area", "#FFFBEB")


def recommendations_section(ctx: EmailContext) -> Optional[str]:
  recs = ctx.data.recommendations
  if not recs:
    return None
  inner = (
      section_heading("\U0001F4A1 Coach Kai's Recommendations",
                      "Your personalized next steps", center=False)
      + '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      + numbered_list(recs[:MAX_RECOMMENDATIONS])
      + "</table>"
      + overflow_notice(len(recs) - MAX_RECOMMENDATIONS, "recommendation")
  )
  return section_table(inner, "padding:40px 32px;")


def progress_section(ctx: EmailContext) -> Optional[str]:
  progress = ctx.data.progress_comparison
  if progress is None or progress.previous_score is None:
    return None
  previous = display_score(progress.previous_score)
  current = display_score(ctx.score)

  def score_cell(label: str, value: int, color: str) -> str:
    return (
        '<td width="50%" style="padding:8px;text-align:center;">'
        '<table style="width:100%;background:#ffffff;border-radius:10px;" cellpadding="16"'
        ' cellspacing="0" role="presentation"><tr><td align="center">'
        f'<p style="margin:0 0 6px 0;font-size:12px;color:#6B7280;text-transform:uppercase;font-weight:600;">{label}</p>'
        f'<p style="margin:0;font-size:36px;font-weight:800;color:{color};">{value}</p>'
        "</td></tr></table></td>"
    )

  inner = section_heading("\U0001F4C8 Your Progress", "Compared with your previous analysis")
  inner += (
      '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation"><tr>'
      + score_cell("Previous Score", previous, "#9CA3AF")
      + score_cell("Current Score", current, ctx.tier.color)
      + "</tr></table>"
  )
  if ctx.progress_delta is not None and ctx.progress_delta > 0:
    inner += (
        '<p style="margin:20px 0 0 0;text-align:center;font-size:18px;font-weight:700;color:#059669;">'
        f"\U0001F389 You've Improved by +{ctx.progress_delta} Points!</p>"
    )
  if progress.milestones:
    items = "".join(
        f'<p style="margin:6px 0;font-size:14px;color:#374151;">'
        f'<span style="color:#10B981;font-weight:700;">✓</span> {escape(m)}</p>'
        for m in progress.milestones
    )
    inner += (
        '<div style="margin-top:24px;">'
        '<p style="margin:0 0 8px 0;font-size:16px;font-weight:700;color:#111827;">'
        f"\U0001F3C6 Milestones Achieved</p>{items}</div>"
    )
  return section_table(inner, "padding:40px 32px;background:#ECFDF5;")


def coach_message_section(ctx: EmailContext) -> str:
  inner = f"""
    <table style="width:100%;background:#F0FDFA;border-left:5px solid {BRAND_TEAL};border-radius:12px;" cellpadding="24" cellspacing="0" role="presentation">
      <tr><td>
        <p style="margin:0 0 12px 0;font-size:18px;font-weight:700;color:#0F766E;">
          Message from Coach Kai {ctx.tier.icon}
        </p>
        <p style="margin:0;font-size:15px;color:#374151;line-height:1.7;font-style:italic;">
          &ldquo;{escape(ctx.coach_message)}&rdquo;
        </p>
      </td></tr>
    </table>"""
  return section_table(inner, "padding:32px;")


def call_to_action_section(ctx: EmailContext) -> str:
  secondary = [
      outlook_button(ctx.link(path), label, background="#ffffff", color=BRAND_TEAL,
                     border_color=BRAND_TEAL, width=220, height=44, font_size=14)
      for label, path in SECONDARY_LINKS
  ]
  rows = "".join(
      "<tr>"
      + "".join(
          f'<td width="50%" align="center" style="padding:6px;">{button}</td>'
          for button in secondary[i:i + 2])
      + "</tr>"
      for i in range(0, len(secondary), 2)
  )
  url = escape(ctx.analysis_url)
  inner = (
      '<div style="text-align:center;">'
      + outlook_button(ctx.analysis_url, "\U0001F3AF View Full Analysis →", width=300, height=56,
                       font_size=18, css_background=BRAND_GRADIENT)
      + "</div>"
      + '<table style="width:100%;margin-top:24px;" width="100%" cellpadding="0" cellspacing="0"'
      + f' role="presentation">{rows}</table>'
      + '<p style="margin:24px 0 4px 0;font-size:12px;color:#6B7280;text-align:center;">Or copy this link:</p>'
      + f'<p style="margin:0;font-size:12px;color:{BRAND_CYAN};text-align:center;word-break:break-all;">{url}</p>'
  )
  return section_table(inner, "padding:16px 32px 40px 32px;")


def footer_section(ctx: EmailContext) -> str:
  links = " &bull; ".join(
      f'<a href="{escape(ctx.link(path), quote=True)}" style="color:#6B7280;text-decoration:underline;">{label}</a>'
      for label, path in FOOTER_LINKS
  )
  inner = (
      '<p style="margin:0 0 12px 0;font-size:15px;font-weight:600;color:#374151;">'
      "Keep crushing it with Coach Kai! \U0001F3D3</p>"
      f'<p style="margin:0 0 12px 0;font-size:12px;">{links}</p>'
      f'<p style="margin:0;font-size:11px;color:#9CA3AF;">&copy; {ctx.year} Mindful Champion'
      " &bull; AI-Powered Pickleball Coaching</p>"
  )
  return section_table(inner, "padding:32px;background:#F9FAFB;border-top:1px solid #E5E7EB;text-align:center;")


Section = Callable[[EmailContext], Optional[str]]

SECTIONS: tuple[Section, ...] = (
    header_section,
    video_preview_section,
    dashboard_section,
    metric_cards_section,
    court_section,
    key_moments_section,
    video_comparison_section,
    strengths_section,
    improvements_section,
    recommendations_section,
    progress_section,
    coach_message_section,
    call_to_action_section,
    footer_section,
)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

_HEAD_STYLE = """
    body { margin:0; padding:0; -webkit-text-size-adjust:100%; -ms-text-size-adjust:100%; }
    table { border-collapse:collapse; mso-table-lspace:0pt; mso-table-rspace:0pt; }
    img { border:0; outline:none; text-decoration:none; -ms-interpolation-mode:bicubic; }
    @media only screen and (max-width: 620px) {
      .email-container { width:100% !important; max-width:100% !important; }
      .stack-column { display:block !important; width:100% !important; }
    }"""


def wrap_document(body: str) -> str:
  """Wrap rendered sections in the full HTML document shell."""
  return f"""<!DOCTYPE html>
<html lang="en" xmlns="http://www.w3.org/1999/xhtml" xmlns:v="urn:schemas-microsoft-com:vml" xmlns:o="urn:schemas-microsoft-com:office:office">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <meta name="x-apple-disable-message-reformatting">
  <title>{TITLE}</title>
  <!--[if mso]><xml><o:OfficeDocumentSettings><o:AllowPNG/><o:PixelsPerInch>96</o:PixelsPerInch></o:OfficeDocumentSettings></xml><![endif]-->
  <style>{_HEAD_STYLE}
  </style>
</head>
<body style="margin:0;padding:0;background:#F3F4F6;font-family:{FONT_STACK};">
  <table style="width:100%;background:#F3F4F6;" width="100%" cellpadding="0" cellspacing="0" role="presentation">
    <tr>
      <td align="center" style="padding:40px 16px;">
        <table class="email-container" style="width:600px;max-width:600px;background:#ffffff;border-radius:16px;overflow:hidden;" width="600" cellpadding="0" cellspacing="0" role="presentation">
          <tr>
            <td>{body}
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>"""


def render_sections(ctx: EmailContext, sections: tuple[Section, ...] = SECTIONS) -> str:
  fragments = (section(ctx) for section in sections)
  return "".join(f for f in fragments if f is not None)


def render_analysis_email(
    data: AnalysisEmailInput,
    *,
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
    year: Optional[int] = None,
) -> str:
  """Render the complete HTML email for one analysis record.

  Same record and same seed/message_index/year always give the same bytes.
  """
  ctx = build_context(data, seed=seed, message_index=message_index, year=year)
  return wrap_document(render_sections(ctx))


def build_subject(data: AnalysisEmailInput, test: bool = False) -> str:
  subject = SUBJECT
  if test:
    subject += " (TEST)"
  return subject


# ---------------------------------------------------------------------------
# Plain-text alternative
# ---------------------------------------------------------------------------

def _text_list(lines: list[str], title: str, items: tuple[str, ...], cap: int, noun: str) -> None:
  if not items:
    return
  lines += ["", title]
  lines += [f"- {item}" for item in items[:cap]]
  remaining = len(items) - cap
  if remaining > 0:
    lines.append(f"  (+{remaining} more {noun if remaining == 1 else noun + 's'} in your full analysis)")


def render_analysis_text(
    data: AnalysisEmailInput,
    *,
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
) -> str:
  """Plain-text body carrying the same facts as the HTML version."""
  ctx = build_context(data, seed=seed, message_index=message_index)
  lines = [
      f"Hey {ctx.first_name}!",
      "",
      "Your video analysis is ready. Coach Kai has analyzed your game.",
      "",
      f"Overall score: {display_score(ctx.score)}/100 ({ctx.tier.label})",
      f"Analyzed: {data.analyzed_date}",
  ]
  if data.total_shots is not None:
    lines.append(f"Total shots: {max(0, data.total_shots)}")
  if data.duration is not None:
    lines.append(f"Duration: {format_duration(data.duration)}")

  lines += ["", "Technique"]
  lines += [f"- {label}: {value}%" for label, value in dashboard_metrics(ctx)]
  if data.technical_scores is not None and data.technical_scores.positioning is not None:
    lines.append(f"- Positioning: {display_score(data.technical_scores.positioning)}%")

  if data.heat_map_data is not None and data.heat_map_data.zones:
    lines += ["", "Court coverage"]
    lines += [f"- {z.position}: {z.coverage:g}% coverage" for z in data.heat_map_data.zones[:9]]

  if data.key_moments:
    lines += ["", "Key moments"]
    for moment in data.key_moments[:MAX_KEY_MOMENTS]:
      style = MOMENT_STYLES[moment.quality]
      lines.append(f"- {moment.timestamp} {style.label} ({moment.type}): {moment.description}")
    remaining = len(data.key_moments) - MAX_KEY_MOMENTS
    if remaining > 0:
      lines.append(f"  (+{remaining} more {'moment' if remaining == 1 else 'moments'} in your full analysis)")

  if data.video_clip_url or data.pro_video_url:
    lines.append("")
  if data.video_clip_url:
    lines.append(f"Your shot: {data.video_clip_url}")
  if data.pro_video_url:
    lines.append(f"Pro demo: {data.pro_video_url}")

  _text_list(lines, "Your top strengths", data.top_strengths, MAX_STRENGTHS, "strength")
  _text_list(lines, "Priority focus areas", data.top_improvements, MAX_IMPROVEMENTS, "focus area")

  if data.recommendations:
    lines += ["", "Coach Kai's recommendations"]
    lines += [f"{i}. {rec}" for i, rec in enumerate(data.recommendations[:MAX_RECOMMENDATIONS], start=1)]
    remaining = len(data.recommendations) - MAX_RECOMMENDATIONS
    if remaining > 0:
      lines.append(f"  (+{remaining} more in your full analysis)")

  progress = data.progress_comparison
  if progress is not None and progress.previous_score is not None:
    lines += ["", "Your progress",
              f"Previous score: {display_score(progress.previous_score)}",
              f"Current score: {display_score(ctx.score)}"]
    if ctx.progress_delta is not None and ctx.progress_delta > 0:
      lines.append(f"You've improved by +{ctx.progress_delta} points!")
    lines += [f"* {m}" for m in progress.milestones]

  lines += [
      "",
      "Message from Coach Kai",
      f'"{ctx.coach_message}"',
      "",
      f"View your full analysis: {ctx.analysis_url}",
      "",
      "Keep crushing it with Coach Kai!",
      f"Mindful Champion - {ctx.base_url}",
  ]
  return "\n".join(lines) + "\n"
