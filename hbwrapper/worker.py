"""
hbwrapper.worker
~~~~~~~~~~~~~~~~
QThread that runs a single HandbrakeSupervisor.transcode() call and
re-emits the supervisor's channels as signals the UI can connect to
directly.

Signals
-------
transcoding_started(str)     input filename, before HandBrakeCLI is spawned
transcoding_completed(str)   input filename, after a zero exit
transcoding_errored(str)     input filename, after a failure or a stop
progress_changed(object)     ConversionStatus snapshot on every progress line
error_occurred(str)          human-readable message of whatever transcode() raised
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QThread, Signal

from hbwrapper.configuration import HandbrakeConfiguration
from hbwrapper.errors import HandbrakeError
from hbwrapper.models import ConversionStatus, TranscodingEvent
from hbwrapper.supervisor import HandbrakeSupervisor


class TranscodeWorker(QThread):

    transcoding_started   = Signal(str)
    transcoding_completed = Signal(str)
    transcoding_errored   = Signal(str)
    progress_changed      = Signal(object)
    error_occurred        = Signal(str)

    def __init__(
        self,
        supervisor: HandbrakeSupervisor,
        config: HandbrakeConfiguration,
        input_file: Path,
        output_directory: Path,
        output_filename: str | None = None,
        overwrite_existing: bool = False,
        remove_original: bool = False,
        parent=None,
    ):
        super().__init__(parent)
        self._supervisor = supervisor
        self._config = config
        self._input_file = Path(input_file)
        self._output_directory = Path(output_directory)
        self._output_filename = output_filename
        self._overwrite_existing = overwrite_existing
        self._remove_original = remove_original
        print(f"[WORKER] Created for '{self._input_file.name}' → '{self._output_directory}'")

    # ── QThread entry point ───────────────────────────────────────────────────

    def run(self):
        print(f"[WORKER] Thread started for '{self._input_file.name}'")
        events = self._supervisor.events
        handlers = (
            (events.started,   events.started.connect(self._on_started)),
            (events.completed, events.completed.connect(self._on_completed)),
            (events.errored,   events.errored.connect(self._on_errored)),
            (events.progress,  events.progress.connect(self._on_progress)),
        )

        try:
            self._supervisor.transcode(
                self._config,
                self._input_file,
                self._output_directory,
                output_filename=self._output_filename,
                overwrite_existing=self._overwrite_existing,
                remove_original=self._remove_original,
            )
        except HandbrakeError as exc:
            print(f"[WORKER] ❌ {type(exc).__name__}: {exc}")
            self.error_occurred.emit(str(exc))
        finally:
            for channel, handler in handlers:
                channel.disconnect(handler)

        print(f"[WORKER] Thread finished for '{self._input_file.name}'")

    # ── Cancel ────────────────────────────────────────────────────────────────

    def cancel(self):
        print(f"[WORKER] cancel() called for '{self._input_file.name}'")
        self._supervisor.stop_transcoding()

    # ── Relays ────────────────────────────────────────────────────────────────

    def _on_started(self, event: TranscodingEvent):
        self.transcoding_started.emit(event.input_filename)

    def _on_completed(self, event: TranscodingEvent):
        self.transcoding_completed.emit(event.input_filename)

    def _on_errored(self, event: TranscodingEvent):
        self.transcoding_errored.emit(event.input_filename)

    def _on_progress(self, status: ConversionStatus):
        self.progress_changed.emit(status)
