"""
run_pipeline.py
---------------
fetch -> extract -> aggregate -> render, once, then exit.

Each stage raises on failure; the `orbit-chart` command decides to abort
and exits nonzero with a diagnostic on stderr.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import click
import pandas as pd
import requests
from rich.console import Console
from rich.logging import RichHandler

from orbitchart.aggregate import YearTable, aggregate, build_series, total_count, validate_series
from orbitchart.config import DEFAULT_ORBIT_CLASSES, PipelineConfig
from orbitchart.errors import OrbitChartError
from orbitchart.extract_records import ExtractionStats, iter_observations
from orbitchart.fetch_raw import fetch_database, save_snapshot
from orbitchart.render_chart import write_chart, write_report

console = Console()
err_console = Console(stderr=True)
log = logging.getLogger(__name__)

LOG_FILE = "orbit_chart.log"


@dataclass
class PipelineResult:
    years: List[str]
    table: YearTable
    series: pd.DataFrame
    output_path: Path
    stats: ExtractionStats = field(default_factory=ExtractionStats)


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> None:
    handlers: List[logging.Handler] = [RichHandler(console=err_console, show_path=False)]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        handlers.append(file_handler)
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)


def run(config: PipelineConfig, session: Optional[requests.Session] = None) -> PipelineResult:
    text = fetch_database(config, session=session)
    if config.snapshot_dir is not None:
        save_snapshot(text, config.snapshot_dir, encoding=config.encoding)

    stats = ExtractionStats()
    observations = iter_observations(
        text,
        on_malformed_date=config.on_malformed_date,
        print_header=config.print_header,
        stats=stats,
    )
    years, table = aggregate(observations)
    log.info("Extracted %s", stats.summary())
    if stats.emitted == 0:
        log.warning("No observations extracted from %d rows; is the input tab-separated?", stats.rows)

    series = validate_series(build_series(years, table, config.orbit_classes))
    log.info("Aggregated %d satellites over %d years", total_count(table), len(years))

    out_path = write_chart(series, config.output_path, config.title, stacked=config.stacked)
    if config.report_path is not None:
        write_report(series, config.report_path)

    return PipelineResult(years=years, table=table, series=series, output_path=out_path, stats=stats)


_DEFAULTS = PipelineConfig()


@click.command(name="orbit-chart")
@click.option("--url", "database_url", default=_DEFAULTS.database_url, show_default=True, help="Database URL.")
@click.option("--output", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              default=_DEFAULTS.output_path, show_default=True, help="Chart HTML file.")
@click.option("--orbit-class", "orbit_classes", multiple=True,
              help=f"Orbit class to chart; repeatable. [default: {', '.join(DEFAULT_ORBIT_CLASSES)}]")
@click.option("--on-malformed-date", type=click.Choice(["skip", "abort"]),
              default=_DEFAULTS.on_malformed_date, show_default=True)
@click.option("--stacked/--grouped", default=_DEFAULTS.stacked, show_default=True)
@click.option("--title", default=_DEFAULTS.title, show_default=True)
@click.option("--timeout", type=float, default=_DEFAULTS.timeout, show_default=True, help="HTTP timeout (s).")
@click.option("--encoding", default=_DEFAULTS.encoding, show_default=True)
@click.option("--print-header", is_flag=True, default=False, help="Log header field names and positions.")
@click.option("--snapshot-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Also save the raw download here.")
@click.option("--report", "report_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Also write the year x class counts as CSV.")
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
def main(database_url, output_path, orbit_classes, on_malformed_date, stacked, title, timeout,
         encoding, print_header, snapshot_dir, report_path, log_dir):
    """Chart satellite orbit usage per launch year from the UCS Satellite Database."""
    setup_logging(log_dir)
    try:
        config = PipelineConfig(
            database_url=database_url,
            output_path=output_path,
            orbit_classes=list(orbit_classes) or list(DEFAULT_ORBIT_CLASSES),
            on_malformed_date=on_malformed_date,
            stacked=stacked,
            title=title,
            timeout=timeout,
            encoding=encoding,
            print_header=print_header,
            snapshot_dir=snapshot_dir,
            report_path=report_path,
        )
        result = run(config)
    except OrbitChartError as e:
        log.error("%s", e)
        err_console.print(f"[red]Orbit chart failed:[/red] {e}")
        raise SystemExit(1)
    except Exception as e:
        log.exception("Unexpected failure: %s", e)
        err_console.print(f"[red]Unexpected error[/red]: {e}")
        raise SystemExit(1)

    console.print(f"[green]done![/green] wrote chart into file {result.output_path}")


if __name__ == "__main__":
    main()
