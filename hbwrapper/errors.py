"""
hbwrapper.errors
~~~~~~~~~~~~~~~~
Exceptions raised by HandbrakeSupervisor.

Precondition errors are raised before anything is spawned or any status
changes. Everything else is raised after the supervisor is back to idle.
"""

from __future__ import annotations


class HandbrakeError(Exception):
    """Base exception for everything the wrapper raises."""


# ── Preconditions ─────────────────────────────────────────────────────────────

class PreconditionError(HandbrakeError):
    """A job was refused before HandBrakeCLI was started."""


class InputFileNotFoundError(PreconditionError, FileNotFoundError):
    pass


class AlreadyRunningError(PreconditionError):
    pass


class OutputExistsError(PreconditionError, FileExistsError):
    pass


class ExecutableNotFoundError(PreconditionError, FileNotFoundError):
    pass


# ── Runtime ───────────────────────────────────────────────────────────────────

class LaunchError(HandbrakeError):
    """HandBrakeCLI could not be started. The OS error is chained."""


class TranscodeFailedError(HandbrakeError):
    """
    HandBrakeCLI exited with a non-zero code.

    ``stderr_tail`` holds the last lines HandBrakeCLI logged, which is
    usually where it explains an option it rejected.
    """

    def __init__(self, message: str, returncode: int, stderr_tail: list[str] | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr_tail = list(stderr_tail or [])


class TranscodeCancelledError(TranscodeFailedError):
    """The job was stopped with stop_transcoding()."""


class RemoveOriginalError(HandbrakeError):
    """The conversion succeeded but the input file could not be deleted."""
