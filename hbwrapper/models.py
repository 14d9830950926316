"""
hbwrapper.models
~~~~~~~~~~~~~~~~
Pure dataclasses, no Qt and no I/O.
These travel freely between the supervisor, its subscribers and the UI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum, auto
from pathlib import Path

from hbwrapper.configuration import HandbrakeConfiguration


# ── Enums ─────────────────────────────────────────────────────────────────────

class JobState(Enum):
    IDLE      = auto()  # no child process
    STARTING  = auto()  # preconditions passed, "started" fired, not yet spawned
    RUNNING   = auto()  # HandBrakeCLI is running
    COMPLETED = auto()  # exited with 0; transient, back to IDLE right away
    ERRORED   = auto()  # non-zero exit, failed launch or stopped; transient


# ── Progress (returned by hbwrapper.progress) ────────────────────────────────

@dataclass(frozen=True)
class ProgressUpdate:
    """One parsed progress line. Fields left as None were not on the line."""
    percentage: float
    current_fps: float | None = None
    average_fps: float | None = None
    estimated: timedelta | None = None


# ── Status snapshot ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConversionStatus:
    """
    What the supervisor is doing right now.

    Snapshots are immutable; the supervisor swaps in a new one on every
    change, so a reader always sees a consistent set of fields.
    """
    converting: bool = False
    input_file: str = ""
    output_file: str = ""
    percentage: float = 0.0
    current_fps: float = 0.0
    average_fps: float = 0.0
    estimated: timedelta = timedelta(0)

    @classmethod
    def idle(cls) -> ConversionStatus:
        return cls()

    @classmethod
    def starting(cls, input_file: Path, output_file: Path) -> ConversionStatus:
        return cls(
            converting=True,
            input_file=input_file.name,
            output_file=output_file.name,
        )

    def apply(self, update: ProgressUpdate) -> ConversionStatus:
        """Overwrite the fields present in *update*, keep the rest."""
        changes = {"percentage": update.percentage}
        if update.current_fps is not None:
            changes["current_fps"] = update.current_fps
        if update.average_fps is not None:
            changes["average_fps"] = update.average_fps
        if update.estimated is not None:
            changes["estimated"] = update.estimated
        return replace(self, **changes)

    def __str__(self) -> str:
        if not self.converting:
            return "Idle"
        return (
            f"{self.input_file} -> {self.output_file} - {self.percentage:g}%  "
            f"{self.current_fps:g} fps.  {self.average_fps:g} fps. avg.  "
            f"{_hhmmss(self.estimated)} time remaining"
        )


def _hhmmss(delta: timedelta) -> str:
    total = int(delta.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


# ── Lifecycle event payload ───────────────────────────────────────────────────

@dataclass(frozen=True)
class TranscodingEvent:
    """Carried by the started / completed / errored channels."""
    input_filename: str


# ── Transcode job ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TranscodeJob:
    """
    Everything needed to describe one conversion attempt.
    Built by the supervisor when ``transcode()`` is called and dropped
    when it returns; never persisted.
    """
    input_file: Path
    output_directory: Path
    config: HandbrakeConfiguration
    output_filename: str | None = None
    overwrite_existing: bool = False
    remove_original: bool = False
