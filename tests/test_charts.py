"""Tests for terminal and PNG chart rendering."""

from __future__ import annotations

from datetime import date, timedelta

from hbt.services.aggregates import DailyStat
from hbt.services.charts import SPARK_CHARS, bar, sparkline, trend_chart_png


class TestSparkline:
    def test_empty_values(self):
        assert sparkline([]) == ""

    def test_scales_between_min_and_max(self):
        line = sparkline([0, 50, 100])
        assert line[0] == SPARK_CHARS[0]
        assert line[-1] == SPARK_CHARS[-1]
        assert len(line) == 3

    def test_flat_series_uses_lowest_glyph(self):
        assert sparkline([40, 40, 40]) == SPARK_CHARS[0] * 3

    def test_only_last_width_values_are_drawn(self):
        assert len(sparkline(list(range(50)), width=10)) == 10


class TestBar:
    def test_half_filled(self):
        rendered = bar(50, width=20)
        body, pct = rendered.split()
        assert pct == "50%"
        assert body.count("█") == body.count("░") == 5

    def test_value_above_max_is_clamped(self):
        rendered = bar(150, width=20)
        assert "░" not in rendered
        assert rendered.endswith("150%")

    def test_negative_value_renders_empty(self):
        assert "█" not in bar(-10, width=20)

    def test_label_prefix(self):
        assert bar(0, "03-11").startswith("03-11 ")


class TestTrendChart:
    def test_writes_png(self, tmp_path):
        start = date(2024, 3, 1)
        series = [DailyStat(day=start + timedelta(days=i), completed=i % 3, total=2) for i in range(7)]
        output = trend_chart_png(series, tmp_path / "charts" / "trend.png")
        assert output.exists()
        assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_series_writes_placeholder(self, tmp_path):
        output = trend_chart_png([], tmp_path / "empty.png")
        assert output.exists()
        assert output.stat().st_size > 0
