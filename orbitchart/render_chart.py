"""
Chart output for the orbit usage pipeline.

Produces:
    - orbit-chart.html: bar chart of satellites per launch year, one series
      per orbit class, drawn as inline SVG so the page has no external assets
    - optional CSV report of the same year x class table

The chart consumes the dense frame from aggregate.build_series(): the index
gives the x-axis categories in order, each column is one series of equal
length.
"""

from __future__ import annotations

import html
import io
import logging
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from orbitchart.errors import OutputError

matplotlib.use("Agg")  # headless

log = logging.getLogger(__name__)

_FIG_HEIGHT_IN = 6.0
_MIN_FIG_WIDTH_IN = 10.0
_WIDTH_PER_YEAR_IN = 0.25

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
  body {{ font-family: sans-serif; margin: 2em; }}
  .chart svg {{ max-width: 100%; height: auto; }}
</style>
</head>
<body>
<div class="chart">
{svg}
</div>
</body>
</html>
"""


def render_svg(frame: pd.DataFrame, title: str, stacked: bool = False) -> str:
    years = [str(y) for y in frame.index]
    x = np.arange(len(years))
    n_series = max(len(frame.columns), 1)

    width_in = max(_MIN_FIG_WIDTH_IN, _WIDTH_PER_YEAR_IN * len(years))
    fig, ax = plt.subplots(figsize=(width_in, _FIG_HEIGHT_IN))
    try:
        if stacked:
            bottom = np.zeros(len(years))
            for name in frame.columns:
                values = frame[name].to_numpy(dtype=float)
                ax.bar(x, values, 0.8, bottom=bottom, label=str(name))
                bottom += values
        else:
            # grouped: split each year's slot between the series
            bar_w = 0.8 / n_series
            for i, name in enumerate(frame.columns):
                offset = (i - (n_series - 1) / 2) * bar_w
                ax.bar(x + offset, frame[name].to_numpy(dtype=float), bar_w, label=str(name))

        ax.set_title(title)
        ax.set_xticks(x)
        ax.set_xticklabels(years, rotation=90, fontsize=8)
        ax.set_ylabel("Satellites")
        ax.legend()
        fig.tight_layout()

        buf = io.StringIO()
        fig.savefig(buf, format="svg")
    finally:
        plt.close(fig)

    svg = buf.getvalue()
    # drop the XML prolog/doctype so the SVG can be inlined in HTML
    start = svg.find("<svg")
    return svg[start:] if start >= 0 else svg


def render_html(frame: pd.DataFrame, title: str, stacked: bool = False) -> str:
    return _PAGE.format(title=html.escape(title), svg=render_svg(frame, title, stacked=stacked))


def write_chart(frame: pd.DataFrame, path: Path, title: str, stacked: bool = False) -> Path:
    """Render the chart page and write it to `path`; OSError becomes OutputError."""
    page = render_html(frame, title, stacked=stacked)
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(page)
    except OSError as e:
        raise OutputError(f"could not write chart to {path}: {e}") from e

    log.info("Chart written: %s (%d years, %d series)", path, len(frame.index), len(frame.columns))
    return path


def write_report(frame: pd.DataFrame, path: Path) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=True)
    except OSError as e:
        raise OutputError(f"could not write report to {path}: {e}") from e

    log.info("Report written: %s", path)
    return path
