"""
Tests for the HandBrakeCLI progress line parser.
"""

from datetime import timedelta

import pytest

from hbwrapper.models import ConversionStatus, ProgressUpdate
from hbwrapper.progress import parse_progress_line


def test_percentage_only_line():
    update = parse_progress_line("Encoding: task 1 of 1, 42.50 %")
    assert update == ProgressUpdate(percentage=42.5)


def test_full_line():
    update = parse_progress_line(
        "Encoding: task 1 of 1, 42.50 % (23.10 fps, avg 25.00 fps, ETA 00h01m30s)"
    )
    assert update.percentage == 42.5
    assert update.current_fps == 23.1
    assert update.average_fps == 25.0
    assert update.estimated == timedelta(minutes=1, seconds=30)


def test_eta_with_hours():
    update = parse_progress_line(
        "Encoding: task 2 of 2, 3.07 % (112.40 fps, avg 110.96 fps, ETA 01h02m03s)"
    )
    assert update.estimated == timedelta(hours=1, minutes=2, seconds=3)


def test_trailing_carriage_return_and_prefix_noise():
    update = parse_progress_line("\rEncoding: task 1 of 1, 99.9 %\r\n")
    assert update.percentage == 99.9


@pytest.mark.parametrize("line", [
    "",
    None,
    "Muxing: this may take awhile...",
    "[12:00:01] Starting work at: Thu Jan  1 12:00:01 2026",
    "Encoding: task 1 of 1, abc %",
    "Encoding: task 1 of 1, 42,50 %",
    "task 1 of 1, 42.50 %",
])
def test_lines_without_progress(line):
    assert parse_progress_line(line) is None


def test_partial_update_leaves_rates_untouched():
    status = ConversionStatus(converting=True, input_file="a.mkv", output_file="a.mp4")
    status = status.apply(parse_progress_line(
        "Encoding: task 1 of 1, 10.00 % (20.00 fps, avg 21.00 fps, ETA 00h10m00s)"
    ))
    status = status.apply(parse_progress_line("Encoding: task 1 of 1, 42.50 %"))

    assert status.percentage == 42.5
    assert status.current_fps == 20.0
    assert status.average_fps == 21.0
    assert status.estimated == timedelta(minutes=10)
