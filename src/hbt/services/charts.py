"""Chart helpers: terminal sparklines/bars and a PNG trend chart."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from .aggregates import DailyStat

SPARK_CHARS = "▁▂▃▄▅▆▇█"
BAR_CHAR = "█"
EMPTY_CHAR = "░"


def sparkline(values: Sequence[float], width: int = 30) -> str:
    """Render values as block glyphs scaled between their min and max.

    Only the last ``width`` values are drawn. A flat series renders at the
    lowest glyph.
    """

    if not values:
        return ""

    low, high = min(values), max(values)
    if high == low:
        high = low + 1

    levels = len(SPARK_CHARS)
    glyphs = []
    for value in list(values)[-width:]:
        idx = int((value - low) / (high - low) * (levels - 1))
        glyphs.append(SPARK_CHARS[min(max(idx, 0), levels - 1)])
    return "".join(glyphs)


def bar(value: float, label: str = "", width: int = 40, max_value: float = 100.0) -> str:
    """Render one horizontal bar: label, filled/empty blocks, percentage."""

    if max_value <= 0:
        max_value = 100.0
    ratio = min(max(value / max_value, 0.0), 1.0)

    # Reserve room for the label and the trailing percentage
    bar_width = max(width - len(label) - 10, 5)
    filled = int(bar_width * ratio)
    body = BAR_CHAR * filled + EMPTY_CHAR * (bar_width - filled)
    pct = f"{value:.0f}%".rjust(5)
    return f"{label} {body} {pct}" if label else f"{body} {pct}"


def trend_chart_png(series: Sequence[DailyStat], output_path: Path) -> Path:
    """Render daily completion rates as a line chart and return the PNG path."""

    points = sorted(series, key=lambda s: s.day)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if not points:
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.text(0.5, 0.5, "No habit data yet\nAdd a daily habit to see your trend",
                ha="center", va="center", fontsize=12, color="#999")
        ax.axis("off")
        fig.savefig(output_path, bbox_inches="tight", dpi=100)
        plt.close(fig)
        return output_path

    labels = [p.day.strftime("%m-%d") for p in points]
    rates = [p.rate for p in points]
    x_positions = list(range(len(labels)))

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(x_positions, rates, marker="o", linewidth=2.5, markersize=6, color="#22C55E")
    ax.fill_between(x_positions, rates, color="#DCFCE7", alpha=0.4)

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_ylim(0, 105)
    ax.set_title("Daily completion rate", fontsize=14, fontweight="bold", pad=15)
    ax.set_ylabel("Completed (%)", fontsize=11)

    # Ticks before tick labels
    ax.set_xticks(x_positions)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda y, _: f"{y:.0f}%"))

    plt.tight_layout()
    fig.savefig(output_path, bbox_inches="tight", dpi=100)
    plt.close(fig)
    return output_path


__all__ = ["bar", "sparkline", "trend_chart_png"]
