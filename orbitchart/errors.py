"""
errors.py
---------
Failures raised by the pipeline stages. The CLI turns any of these into a
red diagnostic on stderr and exit status 1.
"""

from __future__ import annotations


class OrbitChartError(Exception):
    """Base class for pipeline failures."""


class FetchError(OrbitChartError):
    """Download failed or the server answered with a non-success status."""


class OutputError(OrbitChartError):
    """A local file (chart, report, snapshot) could not be written."""


class MalformedDateError(OrbitChartError):
    """Launch date has fewer than three '/'-separated parts."""

    def __init__(self, line_no: int, value: str):
        self.line_no = line_no
        self.value = value
        super().__init__(f"line {line_no}: malformed launch date {value!r}")
