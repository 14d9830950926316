"""
Shared fixtures.

``make_cli`` writes a stand-in for HandBrakeCLI: a Python script that
records its argv, optionally creates the output file, prints scripted
progress lines and exits with a chosen code (or sleeps until killed).
"""

import json
import sys
import time
from pathlib import Path

import pytest

FAKE_CLI = '''#!{python}
import json, sys, time
argv = sys.argv[1:]
with open({argv_log!r}, "w") as fh:
    json.dump(argv, fh)
if {create_output!r}:
    open(argv[argv.index("-o") + 1], "w").close()
sys.stderr.write("HandBrake 1.7.0 (fake)\\n")
sys.stderr.flush()
for line in {lines!r}:
    sys.stdout.write(line + {terminator!r})
    sys.stdout.flush()
    time.sleep({delay!r})
time.sleep({hold!r})
sys.stderr.write("fake stderr tail\\n")
sys.exit({exit_code!r})
'''


@pytest.fixture
def make_cli(tmp_path):
    def _make(
        lines=(),
        exit_code=0,
        delay=0.0,
        hold=0.0,
        create_output=True,
        terminator="\n",
    ) -> Path:
        script = tmp_path / "bin" / "HandBrakeCLI"
        script.parent.mkdir(exist_ok=True)
        script.write_text(FAKE_CLI.format(
            python=sys.executable,
            argv_log=str(tmp_path / "argv.json"),
            create_output=create_output,
            lines=list(lines),
            terminator=terminator,
            delay=delay,
            hold=hold,
            exit_code=exit_code,
        ))
        script.chmod(0o755)
        return script
    return _make


@pytest.fixture
def recorded_argv(tmp_path):
    """Returns a callable that loads the argv the fake CLI was started with."""
    def _load():
        return json.loads((tmp_path / "argv.json").read_text())
    return _load


@pytest.fixture
def source_file(tmp_path) -> Path:
    src = tmp_path / "in" / "movie.mkv"
    src.parent.mkdir()
    src.write_bytes(b"not really a movie")
    return src


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def wait_until(predicate, timeout=10.0, interval=0.02, pump=None) -> bool:
    """Poll *predicate* until it is true or *timeout* seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if pump is not None:
            pump()
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
