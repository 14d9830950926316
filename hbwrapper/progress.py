"""
hbwrapper.progress
~~~~~~~~~~~~~~~~~~
Parses HandBrakeCLI's progress output. No I/O, no threads.

HandBrakeCLI rewrites a single status line on stdout while encoding:

    Encoding: task 1 of 1, 42.50 %
    Encoding: task 1 of 1, 42.50 % (23.10 fps, avg 25.00 fps, ETA 00h01m30s)

The short form shows up early in a pass, before HandBrake has enough
samples for a rate. Everything else it prints is ignored.
"""

from __future__ import annotations

import re
from datetime import timedelta

from hbwrapper.models import ProgressUpdate

PROGRESS_PATTERN = re.compile(
    r"Encoding:.*?, (?P<percentage>\d{1,3}\.\d{1,2}) %"
    r"(?: \((?P<current_fps>\d{1,4}\.\d{1,2}) fps,"
    r" avg (?P<average_fps>\d{1,4}\.\d{1,2}) fps,"
    r" ETA (?P<hours>\d{2})h(?P<minutes>\d{2})m(?P<seconds>\d{2})s\))?",
    re.ASCII,
)


def parse_progress_line(line: str | None) -> ProgressUpdate | None:
    """
    Extract a progress update from one line of HandBrakeCLI output.

    Returns None for lines that carry no progress. Never raises: the
    pattern only admits ASCII digits with a '.' decimal point, so the
    float() calls below cannot fail.
    """
    if not line:
        return None

    match = PROGRESS_PATTERN.search(line)
    if match is None:
        return None

    percentage = float(match["percentage"])
    if match["current_fps"] is None:
        return ProgressUpdate(percentage=percentage)

    return ProgressUpdate(
        percentage=percentage,
        current_fps=float(match["current_fps"]),
        average_fps=float(match["average_fps"]),
        estimated=timedelta(
            hours=int(match["hours"]),
            minutes=int(match["minutes"]),
            seconds=int(match["seconds"]),
        ),
    )
