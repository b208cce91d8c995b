"""Tests for report_service module."""

import dataclasses

from email_models import HeatMapData, HeatMapZone
from report_service import _hex_to_rgb, _sanitize_pdf_text, generate_analysis_pdf


class TestGenerateAnalysisPdf:
  def test_full_record(self, full_record):
    pdf = generate_analysis_pdf(full_record, seed=1)
    assert isinstance(pdf, bytes)
    assert pdf.startswith(b"%PDF")

  def test_minimal_record(self, minimal_record):
    assert generate_analysis_pdf(minimal_record).startswith(b"%PDF")

  def test_partial_heat_map_and_odd_text(self, minimal_record):
    record = dataclasses.replace(
        minimal_record,
        recipient_name="Zoë \U0001F3BE Park",
        heat_map_data=HeatMapData(zones=(
            HeatMapZone("Left", 80, 90),
            HeatMapZone("Right", 10, 10),
        )),
        top_strengths=("Great \U0001F525 dinks",) * 8,
    )
    assert generate_analysis_pdf(record).startswith(b"%PDF")


class TestPdfHelpers:
  def test_sanitize_drops_emoji(self):
    assert _sanitize_pdf_text("Nice \U0001F3BE  shot ") == "Nice shot"
    assert _sanitize_pdf_text("Zoë") == "Zoë"

  def test_hex_to_rgb(self):
    assert _hex_to_rgb("#10B981") == (16, 185, 129)
