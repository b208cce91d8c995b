"""Tests for the HTML/SVG fragment renderers."""

import pytest

import email_components as ec
from email_models import HeatMapZone, KeyMoment, MomentQuality
from metric_formatter import AMBER, BLUE, GREEN, NEUTRAL, RED


# ---------------------------------------------------------------------------
# Gauges
# ---------------------------------------------------------------------------

class TestCircularGauge:
  def test_renders_value_color_and_glyph(self):
    html = ec.circular_gauge(72, "Paddle Angle")
    assert "72%" in html
    assert AMBER in html
    assert "\U0001F3D3" in html
    assert "Paddle Angle" in html

  def test_rotation_is_an_svg_attribute(self):
    html = ec.circular_gauge(90, "Footwork")
    assert 'transform="rotate(-90 50 50)"' in html
    assert f'r="{ec.GAUGE_RADIUS}"' in html

  def test_arc_geometry(self):
    assert ec.GAUGE_CIRCUMFERENCE == 282.74
    assert ec.gauge_arc(0, ec.GAUGE_CIRCUMFERENCE) == "0.0 282.74"
    assert ec.gauge_arc(100, ec.GAUGE_CIRCUMFERENCE) == "282.74 282.74"
    assert ec.gauge_arc(150, ec.GAUGE_CIRCUMFERENCE) == ec.gauge_arc(100, ec.GAUGE_CIRCUMFERENCE)

  def test_label_is_escaped(self):
    assert "&lt;i&gt;" in ec.circular_gauge(50, "<i>")

  @pytest.mark.parametrize("label,icon", [
      ("Paddle Angle", "\U0001F3D3"),
      ("Follow Through", "\U0001F30A"),
      ("Body Rotation", "\U0001F504"),
      ("Footwork", "\U0001F45F"),
      ("Positioning", "\U0001F4CD"),
      ("Serve Speed", "⚡"),
  ])
  def test_metric_icon(self, label, icon):
    assert ec.metric_icon(label) == icon

  def test_grid(self):
    assert ec.gauge_grid([]) == ""
    html = ec.gauge_grid([("A", 10), ("B", 20), ("C", 30), ("D", 40)])
    assert html.count("<svg") == 4


# ---------------------------------------------------------------------------
# Heat map
# ---------------------------------------------------------------------------

class TestHeatMap:
  @pytest.mark.parametrize("coverage,quality,color", [
      (70, 75, GREEN),
      (70, 74, AMBER),
      (69, 99, AMBER),
      (50, 0, AMBER),
      (49, 90, RED),
      (30, 90, RED),
      (29, 90, NEUTRAL),
  ])
  def test_zone_style(self, coverage, quality, color):
    assert ec.zone_style(coverage, quality)[0] == color

  def test_opacity(self):
    assert ec.zone_opacity(100) == 0.9
    assert ec.zone_opacity(50) == 0.5
    assert ec.zone_opacity(-10) == 0.0

  def test_nine_zones_three_rows_in_order(self, zones):
    html = ec.heat_map_grid(zones(9))
    assert html.count("<tr>") == 3
    assert html.count("<td") == 9
    positions = [html.index(f"Zone {i}<") for i in range(9)]
    assert positions == sorted(positions)

  def test_five_zones_partial_row(self, zones):
    rows = ec.heat_map_rows(zones(5))
    assert [len(r) for r in rows] == [3, 2]
    html = ec.heat_map_grid(zones(5))
    assert html.count("<tr>") == 2
    assert html.count("<td") == 5

  def test_extra_zones_are_dropped(self, zones):
    html = ec.heat_map_grid(zones(12))
    assert html.count("<td") == 9
    assert "Zone 9<" not in html

  def test_empty(self):
    assert ec.heat_map_grid(()) == ""

  def test_cell_escapes_position(self):
    html = ec.heat_map_cell(HeatMapZone(position="<b>Net</b>", coverage=80, quality=80))
    assert "&lt;b&gt;Net" in html
    assert "80%" in html

  def test_legend(self):
    html = ec.heat_map_legend()
    for name in ("Excellent", "Decent", "Needs Work"):
      assert name in html


# ---------------------------------------------------------------------------
# Key moments
# ---------------------------------------------------------------------------

class TestKeyMomentCard:
  @pytest.mark.parametrize("quality,label,color", [
      (MomentQuality.EXCELLENT, "Excellent Shot", GREEN),
      (MomentQuality.GOOD, "Good Execution", BLUE),
      (MomentQuality.NEEDS_IMPROVEMENT, "Needs Work", AMBER),
  ])
  def test_quality_style(self, quality, label, color):
    html = ec.key_moment_card(KeyMoment("1:00", quality, "desc", "Serve"))
    assert label in html
    assert color in html

  @pytest.mark.parametrize("shot_type,icon", [
      ("SERVE", "\U0001F3AF"),
      ("Third Shot Drop", "\U0001F4A7"),
      ("third shot", "3️⃣"),
      ("Backhand Volley", "⚡"),
      ("Erne", "\U0001F3D3"),
  ])
  def test_shot_type_icon(self, shot_type, icon):
    assert ec.shot_type_icon(shot_type) == icon

  def test_plain_string_quality(self):
    html = ec.key_moment_card(KeyMoment("1:00", "excellent", "desc", "Serve"))
    assert "Excellent Shot" in html
    assert "Good Execution" not in html

  def test_text_is_escaped(self):
    html = ec.key_moment_card(
        KeyMoment("0:01", MomentQuality.GOOD, "<script>alert(1)</script>", "Dink"))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


# ---------------------------------------------------------------------------
# Static pieces, lists and buttons
# ---------------------------------------------------------------------------

class TestCourtDiagram:
  def test_geometry(self):
    svg = ec.court_diagram_svg()
    assert 'viewBox="0 0 300 450"' in svg
    assert "NET" in svg
    assert svg.count(">Kitchen<") == 2
    assert 'y1="225"' in svg


class TestScoreBadge:
  def test_tier_and_score(self):
    html = ec.score_badge(78)
    assert "Very Good!" in html
    assert ">78<" in html
    assert BLUE in html

  def test_clamped(self):
    assert ">100<" in ec.score_badge(150)


class TestLists:
  def test_empty_list(self):
    assert ec.format_list((), "strengths") == ""

  def test_rows_and_icon(self):
    html = ec.format_list(("a", "b", "c"), "strengths")
    assert html.count("\U0001F4AA") == 3
    html = ec.format_list(("a", "b"), "improvements")
    assert html.count("\U0001F3AF") == 2

  def test_numbered(self):
    html = ec.numbered_list(("one", "two"))
    assert ">1</td>" in html
    assert ">2</td>" in html

  def test_metric_card(self):
    html = ec.metric_card("Total Shots", "147", "Detected")
    assert "147" in html
    assert "Detected" in html


class TestOverflowNotice:
  def test_nothing_cut(self):
    assert ec.overflow_notice(0, "moment") == ""
    assert ec.overflow_notice(-2, "moment") == ""

  def test_plural(self):
    assert "+2 more moments" in ec.overflow_notice(2, "moment")

  def test_singular(self):
    assert "+1 more strength<" in ec.overflow_notice(1, "strength")


class TestOutlookButton:
  def test_vml_and_anchor(self):
    html = ec.outlook_button("https://example.com/a", "Go")
    assert html.count("<!--[if mso]>") == 1
    assert "<v:roundrect" in html
    assert "<!--[if !mso]><!-->" in html
    assert html.endswith("<!--<![endif]-->")
    assert html.count('href="https://example.com/a"') == 2

  def test_escaping(self):
    html = ec.outlook_button("https://example.com/?a=1&b=\"2\"", "<b>Go</b>")
    assert "a=1&amp;b=&quot;2&quot;" in html
    assert "<b>Go</b>" not in html

  def test_outlined(self):
    html = ec.outlook_button("https://x.test", "Go", background="#ffffff", border_color="#14B8A6")
    assert 'strokecolor="#14B8A6"' in html
    assert "border:2px solid #14B8A6" in html
