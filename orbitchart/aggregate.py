"""
aggregate.py
------------
Counts observations per (launch year, orbit class) and projects the sparse
count table onto a fixed orbit-class vocabulary for charting.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Sequence, Tuple

import warnings
warnings.filterwarnings("ignore", category=FutureWarning, module="pandera")

import pandas as pd
import pandera as pa
from pandera import Check

from orbitchart.extract_records import Observation

log = logging.getLogger(__name__)

YearTable = Dict[str, Dict[str, int]]

_FOUR_DIGIT_YEAR = re.compile(r"^\d{4}$")


def aggregate(observations: Iterable[Observation]) -> Tuple[List[str], YearTable]:
    """Return (sorted distinct years, year -> orbit class -> count)."""
    table: YearTable = {}
    for year, orbit_class in observations:
        counts = table.setdefault(year, {})
        counts[orbit_class] = counts.get(orbit_class, 0) + 1

    years = sorted(table)
    return years, table


def total_count(table: YearTable) -> int:
    return sum(sum(counts.values()) for counts in table.values())


def build_series(years: Sequence[str], table: YearTable, orbit_classes: Sequence[str]) -> pd.DataFrame:
    """
    Dense year x class frame; rows follow `years`, columns follow
    `orbit_classes`, and missing cells are 0. Classes outside the vocabulary
    are not charted.
    """
    seen = {c for counts in table.values() for c in counts}
    dropped = sorted(seen.difference(orbit_classes))
    if dropped:
        log.debug("Orbit classes not charted: %s", dropped)

    frame = pd.DataFrame(
        [[table.get(y, {}).get(c, 0) for c in orbit_classes] for y in years],
        index=pd.Index(list(years), name="year", dtype=object),
        columns=list(orbit_classes),
        dtype="int64",
    )
    return frame


def build_schema(orbit_classes: Sequence[str]) -> pa.DataFrameSchema:
    return pa.DataFrameSchema(
        columns={c: pa.Column(pa.Int64, checks=Check.ge(0), nullable=False) for c in orbit_classes},
        index=pa.Index(pa.String, unique=True, name="year", coerce=True),
        strict=True,
        ordered=True,
    )


def validate_series(frame: pd.DataFrame) -> pd.DataFrame:
    """Check the series invariants; raises pandera SchemaError on violation."""
    frame = build_schema(list(frame.columns)).validate(frame)

    odd = [y for y in frame.index if not _FOUR_DIGIT_YEAR.match(y)]
    if odd:
        log.warning("Years not in YYYY form, chart order may not be chronological: %s", odd[:10])
    return frame
