"""
extract_records.py
------------------
Turns the raw tab-separated database text into (year, orbit class)
observations.
- Line 0 is the header and is never emitted
- Rows with too few columns or an empty launch date are skipped
- Malformed launch dates are skipped with a warning, or raise under "abort"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Literal, NamedTuple, Optional, Tuple

from orbitchart.config import (
    DATE_SEPARATOR,
    FIELD_DELIMITER,
    LAUNCH_DATE_FIELD,
    MIN_FIELDS,
    ORBIT_CLASS_FIELD,
    RECORD_DELIMITER,
)
from orbitchart.errors import MalformedDateError

log = logging.getLogger(__name__)

MALFORMED_DATE_POLICIES = ("skip", "abort")


class Observation(NamedTuple):
    year: str
    orbit_class: str


@dataclass
class ExtractionStats:
    rows: int = 0
    short_rows: int = 0
    empty_dates: int = 0
    malformed_dates: int = 0
    emitted: int = 0

    def summary(self) -> str:
        return (
            f"rows={self.rows} emitted={self.emitted} short={self.short_rows} "
            f"empty_date={self.empty_dates} malformed_date={self.malformed_dates}"
        )


def describe_header(line: str) -> List[Tuple[int, str]]:
    """Non-empty header field names with their column index."""
    return [(i, name) for i, name in enumerate(line.split(FIELD_DELIMITER)) if name != ""]


def _launch_year(date_of_launch: str) -> Optional[str]:
    # MM/DD/YYYY -> YYYY, kept as text
    parts = date_of_launch.split(DATE_SEPARATOR)
    if len(parts) < 3:
        return None
    return parts[2]


def iter_observations(
    text: str,
    on_malformed_date: Literal["skip", "abort"] = "skip",
    print_header: bool = False,
    stats: Optional[ExtractionStats] = None,
) -> Iterator[Observation]:
    """Lazily yield one Observation per usable data row; the header line is skipped."""
    if on_malformed_date not in MALFORMED_DATE_POLICIES:
        raise ValueError(f"on_malformed_date must be one of {MALFORMED_DATE_POLICIES}, got {on_malformed_date!r}")
    stats = stats if stats is not None else ExtractionStats()

    for index, line in enumerate(text.split(RECORD_DELIMITER)):
        if index == 0:
            if print_header:
                for i, name in describe_header(line):
                    log.info("header field %d: %s", i, name)
            continue

        stats.rows += 1
        fields = line.split(FIELD_DELIMITER)
        if len(fields) < MIN_FIELDS:
            stats.short_rows += 1
            continue

        orbit_class = fields[ORBIT_CLASS_FIELD]
        date_of_launch = fields[LAUNCH_DATE_FIELD]
        if date_of_launch == "":
            stats.empty_dates += 1
            continue

        year = _launch_year(date_of_launch)
        if year is None:
            stats.malformed_dates += 1
            if on_malformed_date == "abort":
                raise MalformedDateError(index + 1, date_of_launch)
            log.warning("line %d: skipping malformed launch date %r", index + 1, date_of_launch)
            continue

        stats.emitted += 1
        yield Observation(year, orbit_class)
