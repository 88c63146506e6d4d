import pandas as pd
import pytest

from orbitchart.errors import OutputError
from orbitchart.render_chart import render_html, render_svg, write_chart, write_report


@pytest.fixture
def frame():
    return pd.DataFrame(
        {"LEO": [3, 1], "MEO": [0, 2], "GEO": [1, 0], "Elliptical": [0, 0]},
        index=pd.Index(["1998", "2005"], name="year", dtype=object),
        dtype="int64",
    )


def test_render_svg_is_inline_svg(frame):
    svg = render_svg(frame, "Satellite orbit usage per year")
    assert svg.startswith("<svg")
    assert "<?xml" not in svg
    assert "</svg>" in svg


@pytest.mark.parametrize("stacked", [False, True])
def test_render_html_page(frame, stacked):
    page = render_html(frame, "Orbits <per> year", stacked=stacked)
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Orbits &lt;per&gt; year</title>" in page
    assert "<svg" in page


def test_write_chart(tmp_path, frame):
    out = write_chart(frame, tmp_path / "orbit-chart.html", "Satellite orbit usage per year")
    assert out == tmp_path / "orbit-chart.html"
    assert "<svg" in out.read_text(encoding="utf-8")


def test_write_chart_unwritable(tmp_path, frame):
    with pytest.raises(OutputError):
        write_chart(frame, tmp_path / "missing" / "orbit-chart.html", "t")


def test_write_report(tmp_path, frame):
    out = write_report(frame, tmp_path / "reports" / "counts.csv")
    back = pd.read_csv(out, index_col="year", dtype={"year": str})
    assert list(back.columns) == ["LEO", "MEO", "GEO", "Elliptical"]
    assert back.loc["2005", "MEO"] == 2
