"""
hbwrapper.supervisor
~~~~~~~~~~~~~~~~~~~~
HandbrakeSupervisor runs one HandBrakeCLI conversion at a time and keeps
an observable status snapshot up to date while it runs.

State machine
-------------
    IDLE → STARTING → RUNNING → COMPLETED | ERRORED → IDLE

transcode()          blocks the calling thread until the job is over
stop_transcoding()   may be called from any thread; kills the child and
                     lets transcode() finish through the ERRORED path
status               latest ConversionStatus, safe to poll from anywhere
events               started / completed / errored / progress channels
"""

from __future__ import annotations

import copy
import subprocess
import threading
from collections import deque
from pathlib import Path

from hbwrapper.command_builder import build_transcode_command, command_as_string
from hbwrapper.configuration import HandbrakeConfiguration
from hbwrapper.errors import (
    AlreadyRunningError,
    ExecutableNotFoundError,
    InputFileNotFoundError,
    LaunchError,
    OutputExistsError,
    RemoveOriginalError,
    TranscodeCancelledError,
    TranscodeFailedError,
)
from hbwrapper.events import TranscodeEvents
from hbwrapper.models import (
    ConversionStatus,
    JobState,
    ProgressUpdate,
    TranscodeJob,
    TranscodingEvent,
)
from hbwrapper.paths import DEFAULT_HANDBRAKE_BIN, resolve_output_path, validate_binary
from hbwrapper.progress import parse_progress_line

# How many stderr lines to keep for the error message of a failed job
STDERR_TAIL_LINES = 20


class HandbrakeSupervisor:

    def __init__(self, handbrake_path: Path | str = DEFAULT_HANDBRAKE_BIN):
        self.handbrake_path = Path(handbrake_path)
        self.events = TranscodeEvents()

        # Guards everything below. Status snapshots are immutable, so
        # readers never need it; writers hold it to swap in a new one.
        self._lock = threading.Lock()
        self._state = JobState.IDLE
        self._status = ConversionStatus.idle()
        self._process: subprocess.Popen | None = None
        self._output_file: Path | None = None
        self._cancelled = False
        # Set when a stop killed a child that was already running, i.e. one
        # that may have started writing the output.
        self._killed_child = False

    # ── Observers ─────────────────────────────────────────────────────────────

    @property
    def status(self) -> ConversionStatus:
        return self._status

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def is_converting(self) -> bool:
        return self._state is not JobState.IDLE

    # ── Transcode ─────────────────────────────────────────────────────────────

    def transcode(
        self,
        config: HandbrakeConfiguration,
        input_file: Path | str,
        output_directory: Path | str,
        output_filename: str | None = None,
        overwrite_existing: bool = False,
        remove_original: bool = False,
    ) -> None:
        """
        Convert *input_file* into *output_directory* and wait for it.

        The output name defaults to the input's stem; either way it is
        forced to end in the extension of ``config.format``.

        Raises:
            InputFileNotFoundError  – input missing (nothing changed)
            AlreadyRunningError     – another job is in progress (nothing changed)
            OutputExistsError       – output exists and overwrite_existing is False
            ExecutableNotFoundError – HandBrakeCLI missing / not executable
            LaunchError             – the process could not be started
            TranscodeFailedError    – non-zero exit
            TranscodeCancelledError – stop_transcoding() was called
            RemoveOriginalError     – converted fine, but the input could not be deleted
        """
        job = TranscodeJob(
            input_file=Path(input_file),
            output_directory=Path(output_directory),
            config=copy.deepcopy(config),
            output_filename=output_filename,
            overwrite_existing=overwrite_existing,
            remove_original=remove_original,
        )
        input_path, output_path, cmd = self._claim(job)
        started = TranscodingEvent(input_path.name)
        print(f"[SUPERVISOR] Command:\n  {command_as_string(cmd)}")

        try:
            self.events.started.emit(started)
        except Exception:
            print("[SUPERVISOR] A 'started' handler raised, releasing the job")
            self._release()
            raise

        try:
            process = self._spawn(cmd)
        except OSError as exc:
            print(f"[SUPERVISOR] ❌ Could not start HandBrakeCLI: {exc}")
            self._finish(JobState.ERRORED, started)
            raise LaunchError(
                f"An error occurred when starting HandBrakeCLI for '{input_path.name}'"
            ) from exc

        returncode, stderr_tail = self._pump(process)
        with self._lock:
            cancelled = self._cancelled
            killed_child = self._killed_child

        if returncode == 0:
            print(f"[SUPERVISOR] ✅ Done: '{input_path.name}'")
            self._finish(JobState.COMPLETED, started)
            if job.remove_original:
                self._remove_original(input_path)
            return

        print(f"[SUPERVISOR] ❌ HandBrakeCLI exited with code {returncode} "
              f"for '{input_path.name}'")
        if stderr_tail:
            print(f"[SUPERVISOR] HandBrakeCLI stderr (last {len(stderr_tail)} lines):\n"
                  + "\n".join(f"  {l}" for l in stderr_tail))
        if killed_child:
            # The kill may have landed after stop_transcoding() looked for
            # the file, so look again now the process is gone.
            self._discard_partial_output(output_path)

        self._finish(JobState.ERRORED, started)

        if cancelled:
            raise TranscodeCancelledError(
                f"Conversion of '{input_path.name}' was stopped", returncode, stderr_tail
            )
        raise TranscodeFailedError(
            f"HandBrakeCLI exited with code {returncode} for '{input_path.name}'",
            returncode,
            stderr_tail,
        )

    # ── Cancel ────────────────────────────────────────────────────────────────

    def stop_transcoding(self) -> None:
        """
        Kill the running HandBrakeCLI and delete its partial output.
        Never raises and never waits for the process to go away.
        """
        with self._lock:
            if self._state not in (JobState.STARTING, JobState.RUNNING):
                print("[SUPERVISOR] stop_transcoding(): nothing running")
                return
            process = self._process
            if process is not None and process.poll() is not None:
                print("[SUPERVISOR] stop_transcoding(): HandBrakeCLI already exited")
                return
            self._cancelled = True
            self._killed_child = process is not None
            output_file = self._output_file

        if process is None:
            # HandBrakeCLI never ran, so whatever sits at the output path
            # (an existing file with overwrite_existing) is not ours.
            print("[SUPERVISOR] stop_transcoding() before spawn, will kill on start")
            return

        process.kill()
        print(f"[SUPERVISOR] Killed HandBrakeCLI (PID {process.pid})")
        if process.poll() == 0:
            # Finished on its own just before the kill; the output is real.
            return

        self._discard_partial_output(output_file)

    # ── Internal ──────────────────────────────────────────────────────────────

    def _claim(self, job: TranscodeJob) -> tuple[Path, Path, list[str]]:
        """
        Run the preconditions, build the command and move IDLE → STARTING,
        all or nothing.
        """
        if not job.input_file.is_file():
            raise InputFileNotFoundError(
                f"The input file '{job.input_file}' could not be found"
            )

        with self._lock:
            if self._state is not JobState.IDLE:
                raise AlreadyRunningError(
                    f"A conversion is already running ({self._status.input_file})"
                )

            job.output_directory.mkdir(parents=True, exist_ok=True)
            output_file = resolve_output_path(
                job.input_file,
                job.output_directory,
                job.config.format,
                job.output_filename,
            )
            if output_file.exists() and not job.overwrite_existing:
                raise OutputExistsError(
                    f"The file '{output_file}' already exists. "
                    f"Set overwrite_existing to overwrite it"
                )

            problems = validate_binary(self.handbrake_path)
            if problems:
                raise ExecutableNotFoundError("; ".join(problems))

            input_file = job.input_file.resolve()
            # Serializing can raise for a bad configuration; still idle here.
            cmd = build_transcode_command(self.handbrake_path, input_file, output_file, job.config)

            self._set_state(JobState.STARTING)
            self._output_file = output_file
            self._cancelled = False
            self._killed_child = False
            self._status = ConversionStatus.starting(input_file, output_file)

        print(f"[SUPERVISOR] Claimed: '{input_file.name}' → '{output_file}'")
        return input_file, output_file, cmd

    def _spawn(self, cmd: list[str]) -> subprocess.Popen:
        print("[SUPERVISOR] Launching subprocess...")
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        print(f"[SUPERVISOR] PID = {process.pid}")

        with self._lock:
            self._process = process
            self._set_state(JobState.RUNNING)
            kill_now = self._cancelled
        if kill_now:
            process.kill()
            print("[SUPERVISOR] Stop was requested before spawn, killed")
        return process

    def _pump(self, process: subprocess.Popen) -> tuple[int, list[str]]:
        """
        Feed stdout through the progress parser on one thread and keep the
        tail of stderr on another, while this thread waits for the exit.
        """
        # HandBrakeCLI logs heavily to stderr. If nobody reads it the pipe
        # buffer fills up, HandBrakeCLI blocks, and stdout stalls with it.
        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)

        def _drain_stderr():
            for line in process.stderr:
                stripped = line.rstrip()
                if stripped:
                    stderr_tail.append(stripped)

        def _read_progress():
            # Universal newlines: the '\r'-separated status updates arrive
            # as separate lines.
            for line in process.stdout:
                update = parse_progress_line(line)
                if update is not None:
                    self._apply_progress(update)

        stderr_thread = threading.Thread(target=_drain_stderr, daemon=True)
        stdout_thread = threading.Thread(target=_read_progress, daemon=True)
        stderr_thread.start()
        stdout_thread.start()

        try:
            returncode = process.wait()
        except BaseException:
            # Interrupted while waiting; don't leave an orphan behind.
            process.kill()
            process.wait()
            self._release()
            raise
        finally:
            stdout_thread.join()
            stderr_thread.join()
            process.stdout.close()
            process.stderr.close()

        return returncode, list(stderr_tail)

    def _apply_progress(self, update: ProgressUpdate) -> None:
        with self._lock:
            if self._state is not JobState.RUNNING:
                return
            self._status = self._status.apply(update)
            snapshot = self._status
        try:
            self.events.progress.emit(snapshot)
        except Exception as exc:
            # Stopping here would stop draining stdout and stall HandBrakeCLI.
            print(f"[SUPERVISOR] Warning: progress handler raised {exc!r}")

    def _finish(self, outcome: JobState, event: TranscodingEvent) -> None:
        """Pass through COMPLETED / ERRORED back to IDLE, then notify."""
        with self._lock:
            self._set_state(outcome)
        self._release()
        if outcome is JobState.COMPLETED:
            self.events.completed.emit(event)
        else:
            self.events.errored.emit(event)

    def _release(self) -> None:
        with self._lock:
            self._set_state(JobState.IDLE)
            self._process = None
            self._output_file = None
            self._status = ConversionStatus.idle()

    def _set_state(self, state: JobState) -> None:
        # Caller holds self._lock.
        print(f"[SUPERVISOR] State: {self._state.name} → {state.name}")
        self._state = state

    def _remove_original(self, input_file: Path) -> None:
        print(f"[SUPERVISOR] Removing original '{input_file}'")
        try:
            input_file.unlink()
        except OSError as exc:
            raise RemoveOriginalError(f"Could not remove original '{input_file}'") from exc

    @staticmethod
    def _discard_partial_output(output_file: Path | None) -> None:
        if output_file is None or not output_file.exists():
            return
        try:
            output_file.unlink()
            print(f"[SUPERVISOR] Deleted partial output '{output_file.name}'")
        except OSError as exc:
            print(f"[SUPERVISOR] Could not delete partial output '{output_file}': {exc}")
