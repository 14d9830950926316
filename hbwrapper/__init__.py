from .configuration import HandbrakeConfiguration, Timepoint, Preview, Encopt
from .models import ConversionStatus, TranscodeJob, TranscodingEvent, ProgressUpdate, JobState
from .events import EventChannel, TranscodeEvents
from .errors import (
    HandbrakeError, PreconditionError, InputFileNotFoundError, AlreadyRunningError,
    OutputExistsError, ExecutableNotFoundError, LaunchError,
    TranscodeFailedError, TranscodeCancelledError, RemoveOriginalError,
)
from .progress import parse_progress_line
from .paths import DEFAULT_HANDBRAKE_BIN, resolve_output_path, validate_binary
from .command_builder import (
    build_arguments, serialize_configuration, build_transcode_command, format_enum,
)
from .supervisor import HandbrakeSupervisor
from .worker import TranscodeWorker

__all__ = [
    "HandbrakeConfiguration", "Timepoint", "Preview", "Encopt",
    "ConversionStatus", "TranscodeJob", "TranscodingEvent", "ProgressUpdate", "JobState",
    "EventChannel", "TranscodeEvents",
    "HandbrakeError", "PreconditionError", "InputFileNotFoundError", "AlreadyRunningError",
    "OutputExistsError", "ExecutableNotFoundError", "LaunchError",
    "TranscodeFailedError", "TranscodeCancelledError", "RemoveOriginalError",
    "parse_progress_line",
    "DEFAULT_HANDBRAKE_BIN", "resolve_output_path", "validate_binary",
    "build_arguments", "serialize_configuration", "build_transcode_command", "format_enum",
    "HandbrakeSupervisor", "TranscodeWorker",
]
