# Data source + column contract for the orbit usage chart
# DATABASE_URL: UCS Satellite Database, tab-separated text export
# Columns we read (0-based):
#   - 8  : Class of Orbit (str: LEO, MEO, GEO, Elliptical, ...)
#   - 19 : Date of Launch (str: MM/DD/YYYY)
# Rows with fewer than MIN_FIELDS columns are dropped.
from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

DATABASE_URL = "https://www.ucsusa.org/sites/default/files/2021-02/UCS-Satellite-Database-1-1-2021.txt"
OUTPUT_FILE = "orbit-chart.html"
CHART_TITLE = "Satellite orbit usage per year"
DEFAULT_ORBIT_CLASSES = ["LEO", "MEO", "GEO", "Elliptical"]

FIELD_DELIMITER = "\t"
RECORD_DELIMITER = "\n"
DATE_SEPARATOR = "/"

ORBIT_CLASS_FIELD = 8
LAUNCH_DATE_FIELD = 19
MIN_FIELDS = LAUNCH_DATE_FIELD + 1


class PipelineConfig(BaseModel):
    database_url: str = DATABASE_URL
    output_path: Path = Path(OUTPUT_FILE)
    print_header: bool = False
    orbit_classes: List[str] = Field(default_factory=lambda: list(DEFAULT_ORBIT_CLASSES), min_length=1)
    on_malformed_date: Literal["skip", "abort"] = "skip"
    stacked: bool = False
    title: str = CHART_TITLE
    timeout: float = Field(60, gt=0)
    encoding: str = "utf-8"
    snapshot_dir: Optional[Path] = None
    report_path: Optional[Path] = None

    @field_validator("orbit_classes")
    @classmethod
    def _unique_classes(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"duplicate orbit classes: {v}")
        return v
