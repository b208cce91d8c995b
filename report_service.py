#!/usr/bin/env python3

"""PDF export of a video analysis, built from the same context as the email."""

from __future__ import annotations

import logging
from typing import Optional

from fpdf import FPDF

from analysis_email import MAX_KEY_MOMENTS, build_context, dashboard_metrics
from email_components import MOMENT_STYLES, heat_map_rows, zone_style
from email_models import AnalysisEmailInput
from metric_formatter import display_score, format_duration, gauge_color

TEAL = (20, 184, 166)
GRAY = (120, 120, 120)
DARK = (55, 65, 81)


def _sanitize_pdf_text(text: str) -> str:
  """Drop characters that Helvetica/latin-1 cannot render (emoji mostly)."""
  cleaned = text.encode("latin-1", errors="ignore").decode("latin-1")
  return " ".join(cleaned.split())


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
  color = color.lstrip("#")
  return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _pdf_heading(pdf: FPDF, title: str) -> None:
  if pdf.get_y() > 250:
    pdf.add_page()
  pdf.ln(4)
  pdf.set_font("Helvetica", "B", 14)
  pdf.set_text_color(0, 0, 0)
  pdf.cell(0, 10, title, new_x="LMARGIN", new_y="NEXT")
  pdf.set_draw_color(200, 200, 200)
  pdf.line(10, pdf.get_y(), 200, pdf.get_y())
  pdf.ln(3)


def _pdf_bullets(pdf: FPDF, items: tuple[str, ...], numbered: bool = False) -> None:
  pdf.set_font("Helvetica", "", 10)
  pdf.set_text_color(*DARK)
  for idx, item in enumerate(items, start=1):
    prefix = f"{idx}. " if numbered else "- "
    pdf.set_x(pdf.l_margin)
    pdf.multi_cell(0, 5, _sanitize_pdf_text(prefix + item))
    pdf.ln(1)


def _pdf_metric_bar(pdf: FPDF, label: str, value: int) -> None:
  """Label, horizontal bar and value for one technical score."""
  y = pdf.get_y()
  pdf.set_font("Helvetica", "", 10)
  pdf.set_text_color(*DARK)
  pdf.cell(45, 7, label)
  pdf.set_fill_color(229, 231, 235)
  pdf.rect(55, y + 1.5, 110, 4, style="F")
  pdf.set_fill_color(*_hex_to_rgb(gauge_color(value)))
  if value > 0:
    pdf.rect(55, y + 1.5, 110 * value / 100, 4, style="F")
  pdf.set_x(170)
  pdf.set_font("Helvetica", "B", 10)
  pdf.cell(0, 7, f"{value}%", new_x="LMARGIN", new_y="NEXT")


def _pdf_overflow(pdf: FPDF, remaining: int, noun: str) -> None:
  if remaining <= 0:
    return
  pdf.set_font("Helvetica", "I", 9)
  pdf.set_text_color(*GRAY)
  plural = noun if remaining == 1 else f"{noun}s"
  pdf.cell(0, 6, f"+{remaining} more {plural} in your full analysis", new_x="LMARGIN", new_y="NEXT")


def generate_analysis_pdf(
    data: AnalysisEmailInput,
    *,
    seed: Optional[int] = None,
    message_index: Optional[int] = None,
) -> bytes:
  """Generate a PDF summary of a video analysis using fpdf2.

  Args:
    data: The analysis record.
    seed: Optional seed; same seed gives the same synthesized scores and message.
    message_index: Pick a specific coach message.
  Returns:
    PDF file content as bytes.
  """
  ctx = build_context(data, seed=seed, message_index=message_index)
  pdf = FPDF()
  pdf.set_auto_page_break(auto=True, margin=20)
  pdf.set_title("Video Analysis Report")
  pdf.add_page()

  # --- Header ---
  pdf.set_font("Helvetica", "B", 20)
  pdf.set_text_color(*TEAL)
  pdf.cell(0, 12, "Mindful Champion Video Analysis", new_x="LMARGIN", new_y="NEXT")
  pdf.set_font("Helvetica", "", 10)
  pdf.set_text_color(*GRAY)
  pdf.cell(0, 6, _sanitize_pdf_text(f"{data.recipient_name}  |  Analyzed {data.analyzed_date}"),
           new_x="LMARGIN", new_y="NEXT")
  pdf.ln(4)
  pdf.set_draw_color(200, 200, 200)
  pdf.line(10, pdf.get_y(), 200, pdf.get_y())
  pdf.ln(8)

  # --- Overall score ---
  pdf.set_font("Helvetica", "", 9)
  pdf.set_text_color(*GRAY)
  pdf.cell(40, 10, "Overall Score")
  pdf.set_font("Helvetica", "B", 24)
  pdf.set_text_color(*_hex_to_rgb(ctx.tier.color))
  pdf.cell(30, 10, str(display_score(ctx.score)))
  pdf.set_font("Helvetica", "B", 12)
  pdf.cell(0, 10, _sanitize_pdf_text(ctx.tier.label), new_x="LMARGIN", new_y="NEXT")
  facts = []
  if data.total_shots is not None:
    facts.append(f"{max(0, data.total_shots)} shots")
  if data.duration is not None:
    facts.append(f"{format_duration(data.duration)} minutes")
  if facts:
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(*GRAY)
    pdf.cell(0, 6, "  |  ".join(facts), new_x="LMARGIN", new_y="NEXT")

  # --- Technique ---
  _pdf_heading(pdf, "Performance Dashboard")
  for label, value in dashboard_metrics(ctx):
    _pdf_metric_bar(pdf, label, value)

  # --- Court coverage ---
  heat_map = data.heat_map_data
  if heat_map is not None and heat_map.zones:
    _pdf_heading(pdf, "Court Coverage")
    cell_w, cell_h = 60, 14
    for row in heat_map_rows(heat_map.zones):
      y = pdf.get_y()
      for col, zone in enumerate(row):
        bg, _glyph = zone_style(zone.coverage, zone.quality)
        pdf.set_fill_color(*_hex_to_rgb(bg))
        pdf.set_draw_color(255, 255, 255)
        pdf.set_xy(10 + col * cell_w, y)
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(0, 0, 0)
        pdf.cell(cell_w, cell_h, _sanitize_pdf_text(f"{zone.position}  {zone.coverage:g}%"),
                 border=1, align="C", fill=True)
      pdf.set_xy(10, y + cell_h)

  # --- Key moments ---
  if data.key_moments:
    _pdf_heading(pdf, "Key Moments")
    for moment in data.key_moments[:MAX_KEY_MOMENTS]:
      style = MOMENT_STYLES[moment.quality]
      pdf.set_font("Helvetica", "B", 10)
      pdf.set_text_color(*_hex_to_rgb(style.color))
      pdf.cell(0, 6, _sanitize_pdf_text(f"{moment.timestamp}  {style.label}  ({moment.type})"),
               new_x="LMARGIN", new_y="NEXT")
      pdf.set_font("Helvetica", "", 9)
      pdf.set_text_color(*DARK)
      pdf.set_x(pdf.l_margin)
      pdf.multi_cell(0, 5, _sanitize_pdf_text(moment.description))
      pdf.ln(2)
    _pdf_overflow(pdf, len(data.key_moments) - MAX_KEY_MOMENTS, "moment")

  # --- Strengths / focus areas / recommendations ---
  if data.top_strengths:
    _pdf_heading(pdf, "Your Top Strengths")
    _pdf_bullets(pdf, data.top_strengths)
  if data.top_improvements:
    _pdf_heading(pdf, "Priority Focus Areas")
    _pdf_bullets(pdf, data.top_improvements)
  if data.recommendations:
    _pdf_heading(pdf, "Coach Kai's Recommendations")
    _pdf_bullets(pdf, data.recommendations, numbered=True)

  # --- Progress ---
  progress = data.progress_comparison
  if progress is not None and progress.previous_score is not None:
    _pdf_heading(pdf, "Your Progress")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(*DARK)
    line = (f"Previous score: {display_score(progress.previous_score)}    "
            f"Current score: {display_score(ctx.score)}")
    if ctx.progress_delta is not None and ctx.progress_delta > 0:
      line += f"    (+{ctx.progress_delta} points)"
    pdf.cell(0, 6, line, new_x="LMARGIN", new_y="NEXT")
    if progress.milestones:
      _pdf_bullets(pdf, progress.milestones)

  # --- Coach message ---
  _pdf_heading(pdf, "Message from Coach Kai")
  pdf.set_font("Helvetica", "I", 10)
  pdf.set_text_color(*DARK)
  pdf.set_x(pdf.l_margin)
  pdf.multi_cell(0, 5, _sanitize_pdf_text(f'"{ctx.coach_message}"'))

  pdf.ln(8)
  pdf.set_font("Helvetica", "", 8)
  pdf.set_text_color(*GRAY)
  pdf.cell(0, 6, "View your full analysis online", new_x="LMARGIN", new_y="NEXT",
           align="C", link=ctx.analysis_url)

  logging.info("Generated analysis PDF for %s (%d pages)", data.analysis_id, pdf.page_no())
  return bytes(pdf.output())
