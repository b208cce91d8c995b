"""HTML/SVG fragment renderers for the video analysis email.

Every renderer is a small pure function returning a string. Layout is
table-based with inline styles only; Outlook, Gmail and most mobile clients
strip class-based CSS, flexbox and grid. Caller-supplied text always goes
through ``html.escape``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from html import escape
from typing import Sequence

from email_models import HeatMapZone, KeyMoment, MomentQuality
from metric_formatter import (
    AMBER,
    GREEN,
    NEUTRAL,
    RED,
    classify,
    clamp_score,
    display_score,
    gauge_color,
    gauge_icon,
)

FONT_STACK = "-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Helvetica,Arial,sans-serif"
BRAND_TEAL = "#14B8A6"
BRAND_CYAN = "#06B6D4"
BRAND_GRADIENT = f"linear-gradient(135deg, {BRAND_TEAL} 0%, {BRAND_CYAN} 100%)"

GAUGE_RADIUS = 45
GAUGE_CIRCUMFERENCE = round(2 * math.pi * GAUGE_RADIUS, 2)
BADGE_RADIUS = 60
BADGE_CIRCUMFERENCE = round(2 * math.pi * BADGE_RADIUS, 2)

HEAT_MAP_COLUMNS = 3
HEAT_MAP_MAX_ROWS = 3


# ---------------------------------------------------------------------------
# Layout primitives
# ---------------------------------------------------------------------------

def section_table(inner: str, style: str = "padding:32px;") -> str:
  """Wrap a fragment in a full-width, single-cell presentation table."""
  return (
      '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      f'<tr><td style="{style}">{inner}</td></tr></table>'
  )


def section_heading(title: str, subtitle: str = "", center: bool = True) -> str:
  align = "text-align:center;" if center else ""
  html = (
      f'<h2 style="margin:0 0 8px 0;font-size:22px;font-weight:700;color:#111827;{align}">'
      f'{title}</h2>'
  )
  if subtitle:
    html += f'<p style="margin:0 0 20px 0;font-size:14px;color:#6B7280;{align}">{subtitle}</p>'
  return html


def callout(text: str, color: str = "#1E40AF", accent: str = "#3B82F6",
            background: str = "#DBEAFE") -> str:
  """A tinted note box with an accent border on the left."""
  return (
      '<table style="width:100%;margin-top:20px;" cellpadding="0" cellspacing="0" role="presentation">'
      f'<tr><td style="padding:16px;background:{background};border-left:4px solid {accent};border-radius:8px;">'
      f'<p style="margin:0;font-size:13px;color:{color};line-height:1.6;">{text}</p>'
      '</td></tr></table>'
  )


def outlook_button(
    href: str,
    label: str,
    *,
    background: str = BRAND_TEAL,
    color: str = "#ffffff",
    border_color: str = "",
    width: int = 280,
    height: int = 50,
    font_size: int = 16,
    css_background: str = "",
) -> str:
  """Bulletproof button: a VML roundrect for Outlook, an anchor for everyone else.

  This is the only place VML is emitted.

  Args:
    href: Link target (escaped here).
    label: Visible text (escaped here).
    background: Solid fill colour; also the Outlook fill.
    color: Text colour.
    border_color: Optional outline colour (outlined secondary buttons).
    width: Outlook button width in px.
    height: Outlook button height in px.
    font_size: Label size in px.
    css_background: Optional CSS background (e.g. a gradient) for non-Outlook clients.
  """
  safe_href = escape(href, quote=True)
  safe_label = escape(label)
  stroke = (
      f'strokecolor="{border_color}" strokeweight="2px"' if border_color
      else 'stroke="f"'
  )
  border_css = f"border:2px solid {border_color};" if border_color else ""
  bg_css = css_background or background
  return (
      "<!--[if mso]>"
      '<v:roundrect xmlns:v="urn:schemas-microsoft-com:vml" xmlns:w="urn:schemas-microsoft-com:office:word"'
      f' href="{safe_href}" style="height:{height}px;v-text-anchor:middle;width:{width}px;"'
      f' arcsize="20%" {stroke} fillcolor="{background}">'
      "<w:anchorlock/>"
      f'<center style="color:{color};font-family:Arial,sans-serif;font-size:{font_size}px;font-weight:bold;">'
      f"{safe_label}</center>"
      "</v:roundrect>"
      "<![endif]-->"
      "<!--[if !mso]><!-->"
      f'<a href="{safe_href}" style="display:inline-block;padding:14px 32px;background:{background};'
      f'background:{bg_css};color:{color};{border_css}text-decoration:none;border-radius:10px;'
      f'font-weight:700;font-size:{font_size}px;line-height:1.3;mso-hide:all;">{safe_label}</a>'
      "<!--<![endif]-->"
  )


def overflow_notice(remaining: int, noun: str) -> str:
  """'+N more ...' block for capped lists; empty when nothing was cut."""
  if remaining <= 0:
    return ""
  plural = noun if remaining == 1 else f"{noun}s"
  return (
      '<table style="width:100%;margin-top:16px;" cellpadding="0" cellspacing="0" role="presentation">'
      '<tr><td style="padding:12px;background:#F9FAFB;border-radius:8px;text-align:center;">'
      '<p style="margin:0;font-size:13px;color:#6B7280;">'
      f"\U0001F4CC <strong>+{remaining} more {plural}</strong> in your full analysis"
      "</p></td></tr></table>"
  )


# ---------------------------------------------------------------------------
# Circular progress gauge
# ---------------------------------------------------------------------------

_METRIC_ICONS = (
    (("paddle", "angle"), "\U0001F3D3"),
    (("follow", "through"), "\U0001F30A"),
    (("body", "rotation"), "\U0001F504"),
    (("foot", "work"), "\U0001F45F"),
    (("position",), "\U0001F4CD"),
)


def metric_icon(label: str) -> str:
  """Glyph for a technique label, matched by keyword."""
  lower = label.lower()
  for keywords, icon in _METRIC_ICONS:
    if any(k in lower for k in keywords):
      return icon
  return "⚡"


def gauge_arc(value: float, circumference: float) -> str:
  """stroke-dasharray value for a ring filled to ``value`` percent."""
  filled = round(clamp_score(value) / 100 * circumference, 2)
  return f"{filled} {circumference}"


def circular_gauge(value: float, label: str) -> str:
  """One dashboard cell: metric glyph, ring with value%, and label."""
  shown = display_score(value)
  color = gauge_color(value)
  return f"""
    <td style="padding:20px 16px;text-align:center;vertical-align:top;" width="50%">
      <table style="width:100%;background:#ffffff;border-radius:12px;" cellpadding="16" cellspacing="0" role="presentation">
        <tr><td align="center">
          <div style="margin-bottom:12px;font-size:28px;">{metric_icon(label)}</div>
          <svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100" style="display:block;margin:0 auto 12px auto;">
            <circle cx="50" cy="50" r="{GAUGE_RADIUS}" stroke="{NEUTRAL}" stroke-width="8" fill="none"/>
            <circle cx="50" cy="50" r="{GAUGE_RADIUS}" stroke="{color}" stroke-width="8" fill="none"
                    stroke-dasharray="{gauge_arc(value, GAUGE_CIRCUMFERENCE)}" stroke-linecap="round"
                    transform="rotate(-90 50 50)"/>
            <text x="50" y="57" text-anchor="middle" fill="{color}" font-size="24" font-weight="800"
                  font-family="Arial,sans-serif">{shown}%</text>
          </svg>
          <div style="font-size:16px;margin-bottom:6px;">{gauge_icon(value)}</div>
          <div style="font-size:13px;font-weight:700;color:#374151;text-transform:uppercase;letter-spacing:0.5px;line-height:1.3;">
            {escape(label)}
          </div>
        </td></tr>
      </table>
    </td>"""


def gauge_grid(metrics: Sequence[tuple[str, float]]) -> str:
  """Lay gauges out two per row. ``metrics`` is (label, value) pairs."""
  if not metrics:
    return ""
  rows = []
  for i in range(0, len(metrics), 2):
    cells = "".join(circular_gauge(value, label) for label, value in metrics[i:i + 2])
    rows.append(f"<tr>{cells}</tr>")
  return (
      '<table style="width:100%;" width="100%" cellpadding="0" cellspacing="0" role="presentation">'
      + "".join(rows)
      + "</table>"
  )


# ---------------------------------------------------------------------------
# Score badge / metric card / lists
# ---------------------------------------------------------------------------

def score_badge(score: float) -> str:
  """Large overall-score ring with the tier label underneath."""
  tier = classify(score)
  shown = display_score(score)
  return f"""
    <table style="width:100%;margin-bottom:32px;" cellpadding="0" cellspacing="0" role="presentation">
      <tr><td align="center">
        <svg xmlns="http://www.w3.org/2000/svg" width="140" height="140" viewBox="0 0 140 140" style="display:block;margin:0 auto;">
          <defs>
            <linearGradient id="scoreGradient" x1="0%" y1="0%" x2="100%" y2="0%">
              <stop offset="0%" stop-color="{BRAND_TEAL}"/>
              <stop offset="100%" stop-color="{BRAND_CYAN}"/>
            </linearGradient>
          </defs>
          <circle cx="70" cy="70" r="{BADGE_RADIUS}" stroke="{NEUTRAL}" stroke-width="12" fill="none"/>
          <circle cx="70" cy="70" r="{BADGE_RADIUS}" stroke="url(#scoreGradient)" stroke-width="12" fill="none"
                  stroke-dasharray="{gauge_arc(score, BADGE_CIRCUMFERENCE)}" stroke-linecap="round"
                  transform="rotate(-90 70 70)"/>
          <text x="70" y="76" text-anchor="middle" fill="{tier.color}" font-size="36" font-weight="800"
                font-family="Arial,sans-serif">{shown}</text>
          <text x="70" y="98" text-anchor="middle" fill="#6B7280" font-size="11" font-weight="600"
                font-family="Arial,sans-serif">OVERALL</text>
        </svg>
        <p style="margin:12px 0 0 0;font-size:16px;font-weight:600;color:{tier.color};">
          {tier.icon} {escape(tier.label)}
        </p>
      </td></tr>
    </table>"""


def metric_card(label: str, value: str, caption: str) -> str:
  return f"""
    <td style="padding:8px;text-align:center;vertical-align:top;">
      <table style="width:100%;background:#F9FAFB;border:1px solid #E5E7EB;border-radius:10px;" cellpadding="16" cellspacing="0" role="presentation">
        <tr><td align="center">
          <p style="margin:0 0 6px 0;font-size:11px;color:#6B7280;text-transform:uppercase;letter-spacing:0.5px;font-weight:600;">{escape(label)}</p>
          <p style="margin:0;font-size:26px;font-weight:800;color:#111827;">{escape(value)}</p>
          <p style="margin:4px 0 0 0;font-size:12px;color:#9CA3AF;">{escape(caption)}</p>
        </td></tr>
      </table>
    </td>"""


_LIST_STYLES = {
    "strengths": ("\U0001F4AA", "#10B981"),
    "improvements": ("\U0001F3AF", "#F59E0B"),
}


def format_list(items: Sequence[str], kind: str) -> str:
  """One bordered row per entry. No numbering and no truncation here."""
  if not items:
    return ""
  icon, accent = _LIST_STYLES.get(kind, _LIST_STYLES["strengths"])
  rows = []
  for item in items:
    rows.append(
        '<tr><td style="padding:6px 0;">'
        '<table style="width:100%;background:#ffffff;border:1px solid #E5E7EB;'
        f'border-left:3px solid {accent};border-radius:8px;" cellpadding="12" cellspacing="0" role="presentation">'
        f'<tr><td style="width:28px;vertical-align:top;font-size:18px;">{icon}</td>'
        f'<td style="vertical-align:top;font-size:14px;color:#374151;line-height:1.6;">{escape(item)}</td></tr>'
        "</table></td></tr>"
    )
  return "".join(rows)


def numbered_list(items: Sequence[str]) -> str:
  """Numbered recommendation rows; the number sits in its own table cell."""
  rows = []
  for idx, item in enumerate(items, start=1):
    rows.append(
        '<tr><td style="padding:8px 0;">'
        '<table style="width:100%;background:#ffffff;border:2px solid #E5E7EB;border-radius:10px;"'
        ' cellpadding="0" cellspacing="0" role="presentation"><tr>'
        '<td style="width:32px;padding:16px 0 16px 16px;vertical-align:top;">'
        f'<table cellpadding="0" cellspacing="0" role="presentation"><tr>'
        f'<td width="32" height="32" align="center" valign="middle" style="width:32px;height:32px;'
        f'background:{BRAND_TEAL};border-radius:8px;color:#ffffff;font-weight:700;font-size:16px;">{idx}</td>'
        "</tr></table></td>"
        '<td style="padding:16px;vertical-align:top;">'
        f'<p style="margin:0;font-size:14px;color:#374151;line-height:1.6;">{escape(item)}</p>'
        "</td></tr></table></td></tr>"
    )
  return "".join(rows)


# ---------------------------------------------------------------------------
# Heat map
# ---------------------------------------------------------------------------

def zone_style(coverage: float, quality: float) -> tuple[str, str]:
  """Return (background colour, status glyph) for a heat-map zone."""
  if coverage >= 70 and quality >= 75:
    return GREEN, "\U0001F7E2"
  elif coverage >= 50:
    return AMBER, "\U0001F7E1"
  elif coverage >= 30:
    return RED, "\U0001F534"
  return NEUTRAL, "⚪"


def zone_opacity(coverage: float) -> float:
  return round(max(0.0, min(coverage / 100, 0.9)), 2)


def heat_map_cell(zone: HeatMapZone) -> str:
  bg, glyph = zone_style(zone.coverage, zone.quality)
  coverage = f"{zone.coverage:g}"
  return (
      f'<td width="33%" height="70" align="center" valign="middle" style="width:33.33%;height:70px;'
      f'background:{bg};opacity:{zone_opacity(zone.coverage)};border:3px solid #ffffff;'
      f'text-align:center;vertical-align:middle;">'
      f'<div style="font-size:20px;margin-bottom:4px;">{glyph}</div>'
      f'<div style="font-size:11px;font-weight:700;color:#ffffff;text-shadow:0 1px 2px rgba(0,0,0,0.5);">'
      f"{escape(zone.position)}</div>"
      f'<div style="font-size:10px;color:#ffffff;font-weight:600;">{coverage}%</div>'
      "</td>"
  )


def heat_map_rows(zones: Sequence[HeatMapZone]) -> list[list[HeatMapZone]]:
  """Pack zones into rows of three, in input order, at most three rows."""
  limit = HEAT_MAP_COLUMNS * HEAT_MAP_MAX_ROWS
  kept = list(zones[:limit])
  return [kept[i:i + HEAT_MAP_COLUMNS] for i in range(0, len(kept), HEAT_MAP_COLUMNS)]


def heat_map_grid(zones: Sequence[HeatMapZone]) -> str:
  if not zones:
    return ""
  rows = "".join(
      "<tr>" + "".join(heat_map_cell(z) for z in row) + "</tr>"
      for row in heat_map_rows(zones)
  )
  return (
      '<table style="width:100%;border-collapse:collapse;border:4px solid #374151;border-radius:12px;"'
      f' width="100%" cellpadding="0" cellspacing="0" role="presentation">{rows}</table>'
  )


def heat_map_legend() -> str:
  cells = "".join(
      f'<td style="text-align:center;font-size:12px;color:#1F2937;font-weight:600;">{glyph} {name}</td>'
      for glyph, name in (
          ("\U0001F7E2", "Excellent"),
          ("\U0001F7E1", "Decent"),
          ("\U0001F534", "Needs Work"),
      )
  )
  return (
      '<table style="width:100%;margin-top:20px;background:#ffffff;border-radius:8px;"'
      f' cellpadding="8" cellspacing="0" role="presentation"><tr>{cells}</tr></table>'
  )


# ---------------------------------------------------------------------------
# Key moments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MomentStyle:
  icon: str
  badge: str
  color: str
  background: str
  label: str


MOMENT_STYLES = {
    MomentQuality.EXCELLENT: MomentStyle("✅", "⭐", GREEN, "#D1FAE5", "Excellent Shot"),
    MomentQuality.GOOD: MomentStyle("\U0001F44D", "\U0001F4AA", "#3B82F6", "#DBEAFE", "Good Execution"),
    MomentQuality.NEEDS_IMPROVEMENT: MomentStyle("⚠️", "\U0001F3AF", AMBER, "#FEF3C7", "Needs Work"),
}

# Checked in order; first substring match wins.
SHOT_TYPE_ICONS = (
    ("serve", "\U0001F3AF"),
    ("return", "↩️"),
    ("volley", "⚡"),
    ("dink", "\U0001F3B5"),
    ("drive", "\U0001F4A8"),
    ("lob", "☁️"),
    ("drop", "\U0001F4A7"),
    ("smash", "\U0001F4A5"),
    ("forehand", "\U0001F449"),
    ("backhand", "\U0001F448"),
    ("overhead", "⬆️"),
    ("third shot", "3️⃣"),
)


def shot_type_icon(shot_type: str) -> str:
  lower = shot_type.lower()
  for key, icon in SHOT_TYPE_ICONS:
    if key in lower:
      return icon
  return "\U0001F3D3"


def key_moment_card(moment: KeyMoment) -> str:
  """A single highlight row; meant to sit inside a presentation table."""
  style = MOMENT_STYLES[moment.quality]
  return f"""
    <tr>
      <td style="padding:12px 0;">
        <table style="width:100%;background:{style.background};border-left:5px solid {style.color};border-radius:12px;" cellpadding="16" cellspacing="0" role="presentation">
          <tr>
            <td style="width:50px;vertical-align:top;text-align:center;font-size:32px;line-height:1;">{style.icon}</td>
            <td style="vertical-align:top;">
              <p style="margin:0 0 2px 0;font-size:12px;font-weight:700;color:{style.color};text-transform:uppercase;letter-spacing:0.5px;">
                {style.badge} {style.label}
              </p>
              <p style="margin:0 0 8px 0;font-size:11px;color:#6B7280;font-weight:500;">
                ⏱️ {escape(moment.timestamp)} &bull; {shot_type_icon(moment.type)} {escape(moment.type)}
              </p>
              <p style="margin:0;font-size:14px;color:#374151;line-height:1.6;">{escape(moment.description)}</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>"""


# ---------------------------------------------------------------------------
# Court diagram
# ---------------------------------------------------------------------------

def court_diagram_svg() -> str:
  """Fixed-geometry pickleball court: outline, center line, kitchens, net."""
  return """
    <svg width="300" height="450" viewBox="0 0 300 450" xmlns="http://www.w3.org/2000/svg" style="display:block;margin:0 auto;max-width:100%;">
      <rect width="300" height="450" fill="#3B82F6" fill-opacity="0.1"/>
      <rect x="20" y="20" width="260" height="410" fill="none" stroke="#1F2937" stroke-width="4" rx="4"/>
      <line x1="20" y1="225" x2="280" y2="225" stroke="#1F2937" stroke-width="3"/>
      <line x1="150" y1="80" x2="150" y2="225" stroke="#6B7280" stroke-width="2" stroke-dasharray="5,5"/>
      <line x1="150" y1="225" x2="150" y2="370" stroke="#6B7280" stroke-width="2" stroke-dasharray="5,5"/>
      <rect x="20" y="20" width="260" height="60" fill="#EF4444" fill-opacity="0.15"/>
      <line x1="20" y1="80" x2="280" y2="80" stroke="#EF4444" stroke-width="3"/>
      <rect x="20" y="370" width="260" height="60" fill="#EF4444" fill-opacity="0.15"/>
      <line x1="20" y1="370" x2="280" y2="370" stroke="#EF4444" stroke-width="3"/>
      <text x="150" y="55" text-anchor="middle" fill="#1F2937" font-size="12" font-weight="bold">Kitchen</text>
      <text x="75" y="150" text-anchor="middle" fill="#6B7280" font-size="11">Left</text>
      <text x="225" y="150" text-anchor="middle" fill="#6B7280" font-size="11">Right</text>
      <rect x="10" y="220" width="280" height="10" fill="#374151" fill-opacity="0.5"/>
      <text x="150" y="215" text-anchor="middle" fill="#1F2937" font-size="14" font-weight="bold">NET</text>
      <text x="75" y="300" text-anchor="middle" fill="#6B7280" font-size="11">Left</text>
      <text x="225" y="300" text-anchor="middle" fill="#6B7280" font-size="11">Right</text>
      <text x="150" y="405" text-anchor="middle" fill="#1F2937" font-size="12" font-weight="bold">Kitchen</text>
    </svg>"""
